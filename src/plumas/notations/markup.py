"""HTML notation.

Every standard element is callable by name; named arguments become
attributes and positional arguments become content:

    >>> to_html("div(p('Tom & Jerry'), br(), class_='card')")
    "<div class='card'><p>Tom &amp; Jerry</p><br /></div>"

Calls to unknown names render as an element of that name, so custom
elements need no registration.

Python operators are captured as calls named after their ``operator``
module functions and resolve like any other call. Some of those names are
elements too, so markup written with operators reads oddly:

    >>> to_html("x - y")
    '<sub>xy</sub>'
    >>> to_html("a < b")
    '<lt>ab</lt>'

Spell markup as calls; operators belong to the math notation.
"""

from __future__ import annotations

from collections.abc import Mapping

from plumas.config import RenderConfig
from plumas.generators import Renderer, make_markup_fallback
from plumas.notations.base import Notation, known_symbols
from plumas.notations.symbols import HTML_ENTITIES
from plumas.notations.tags import CONTAINER_TAGS, VOID_TAGS, registry_name
from plumas.registry import RendererRegistry, RendererRegistryBuilder
from plumas.utils.text import escape_html_text


def html_registry_with_defaults(*, self_closing: bool = True) -> RendererRegistryBuilder:
    """Create a builder pre-populated with every standard HTML element.

    Use this to extend the defaults with your own names:

        builder = html_registry_with_defaults()
        builder.container("paragraph", tag="p")
        notation = html_notation(builder.build())

    """
    builder = RendererRegistryBuilder()
    for tag in sorted(CONTAINER_TAGS):
        builder.container(registry_name(tag), tag)
    for tag in sorted(VOID_TAGS):
        builder.leaf(registry_name(tag), tag, self_closing=self_closing)
    return builder


def create_html_registry(*, self_closing: bool = True) -> RendererRegistry:
    """Registry with every standard HTML element."""
    return html_registry_with_defaults(self_closing=self_closing).build()


def _markup_fallback(head: str, config: RenderConfig) -> Renderer:
    return make_markup_fallback(head)


def html_notation(
    registry: RendererRegistry | None = None,
    symbols: Mapping[str, str] | None = None,
    *,
    self_closing: bool = True,
) -> Notation:
    """Create the HTML notation.

    Args:
        registry: Element renderers (defaults to every standard element)
        symbols: Known symbols as trusted HTML (defaults to common entities)
        self_closing: Write void elements as ``<br />`` rather than ``<br>``;
            only used when building the default registry

    Returns:
        Notation for HTML output
    """
    return Notation(
        name="html",
        escaper=escape_html_text,
        operators=registry if registry is not None else _default_registry(self_closing),
        symbols=known_symbols(HTML_ENTITIES if symbols is None else symbols),
        fallback=_markup_fallback,
    )


# Process-wide default, built once at import
DEFAULT_HTML_REGISTRY: RendererRegistry = create_html_registry()


def _default_registry(self_closing: bool) -> RendererRegistry:
    if self_closing:
        return DEFAULT_HTML_REGISTRY
    return create_html_registry(self_closing=False)
