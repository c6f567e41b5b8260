"""Safe fragments: the single guard against double escaping.

Text moving through the pipeline is either RawText (still needs escaping)
or a SafeFragment (already valid in the target notation). escape() is
defined by a match over that closed variant, plus the host scalars a
captured literal can hold.

Escaping is idempotent: escape(escape(t)) == escape(t), because escaping
a SafeFragment returns it unchanged. Sequences are escaped element-wise
and keep their shape, so a multi-valued literal can still be told apart
from a single value later on (see plumas.attributes).

Example:
    >>> from plumas.safe import SafeFragment, concat, escape
    >>> from plumas.utils.text import escape_html_text
    >>> escape("a & b", escape_html_text)
    SafeFragment(text='a &amp; b')
    >>> concat([SafeFragment("<b>"), escape("<", escape_html_text)])
    SafeFragment(text='<b>&lt;')

Thread Safety:
All values are frozen; all functions are pure.

"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass

Escaper = Callable[[str], str]


@dataclass(frozen=True, slots=True)
class SafeFragment:
    """Text that is already valid in the target notation.

    Implements ``__html__`` so template engines that understand the
    markup-safe protocol embed it without escaping it again.
    """

    text: str

    def __str__(self) -> str:
        return self.text

    def __html__(self) -> str:
        return self.text

    def __bool__(self) -> bool:
        return bool(self.text)


@dataclass(frozen=True, slots=True)
class RawText:
    """Text that must be escaped before it reaches the output."""

    text: str


# A rendered value: one fragment, or the element-wise escape of a sequence.
# The empty tuple stands for an absent value (a None literal).
Rendered = SafeFragment | tuple[SafeFragment, ...]

EMPTY = SafeFragment("")


def text_of(value: object) -> str:
    """Textual form of a host scalar.

    Booleans use their lower-case spelling so they read the same in every
    notation; everything else goes through str().
    """
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def escape(value: object, escaper: Escaper) -> Rendered:
    """Convert a value into safe output for the notation of ``escaper``.

    Args:
        value: SafeFragment, RawText, host scalar, None, or a sequence of those
        escaper: String escaper of the target notation

    Returns:
        The same SafeFragment when value is already safe, a new SafeFragment
        for raw text and scalars, or a tuple for sequences and None.
    """
    match value:
        case SafeFragment():
            return value
        case _ if hasattr(value, "__html__"):
            return SafeFragment(value.__html__())
        case RawText(text=text):
            return SafeFragment(escaper(text))
        case None:
            return ()
        case str():
            return SafeFragment(escaper(value))
        case tuple() | list():
            return tuple(_escape_one(item, escaper) for item in value)
        case _:
            return SafeFragment(escaper(text_of(value)))


def _escape_one(value: object, escaper: Escaper) -> SafeFragment:
    """Escape a sequence element; nested sequences are flattened into one fragment."""
    result = escape(value, escaper)
    if isinstance(result, tuple):
        return concat(result)
    return result


def flatten(values: Iterable[Rendered]) -> list[SafeFragment]:
    """Flatten rendered values into a list of fragments, in order."""
    out: list[SafeFragment] = []
    for value in values:
        if isinstance(value, tuple):
            out.extend(value)
        else:
            out.append(value)
    return out


def concat(values: Iterable[Rendered], separator: str = "") -> SafeFragment:
    """Join rendered values into one SafeFragment without re-escaping.

    Args:
        values: Fragments (or tuples of fragments) in output order
        separator: Literal text placed between fragments; must already be
            safe in the target notation

    Returns:
        A single SafeFragment
    """
    parts = flatten(values)
    if len(parts) == 1:
        return parts[0]
    return SafeFragment(separator.join(part.text for part in parts))


def as_fragment(value: Rendered) -> SafeFragment:
    """Reduce a rendered value to exactly one fragment."""
    if isinstance(value, tuple):
        return concat(value)
    return value
