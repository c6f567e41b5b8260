"""HTML element names.

Plain data consumed by plumas.notations.markup. Void elements cannot have
content and get leaf renderers; everything else gets a container renderer.
Python keywords cannot be written as call heads, so those elements are
registered with a trailing underscore (``del_`` -> ``<del>``).
"""

import keyword

VOID_TAGS: frozenset[str] = frozenset(
    {
        "area",
        "base",
        "br",
        "col",
        "embed",
        "hr",
        "img",
        "input",
        "link",
        "meta",
        "param",
        "source",
        "track",
        "wbr",
    }
)

CONTAINER_TAGS: frozenset[str] = frozenset(
    """
    a abbr address article aside audio b bdi bdo blockquote body button canvas
    caption cite code colgroup data datalist dd del details dfn dialog div dl dt
    em fieldset figcaption figure footer form h1 h2 h3 h4 h5 h6 head header hgroup
    html i iframe ins kbd label legend li main map mark menu meter nav noscript
    object ol optgroup option output p picture pre progress q rp rt ruby s samp
    script search section select slot small span strong style sub summary sup
    table tbody td template textarea tfoot th thead time title tr u ul var video
    """.split()
)


def registry_name(tag: str) -> str:
    """Call-head name under which a tag is registered."""
    return f"{tag}_" if keyword.iskeyword(tag) else tag
