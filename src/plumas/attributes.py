"""Markup attribute serialization.

Named arguments of a markup call become attributes:

    p("hi", class_="intro", hidden=None, checked=True)
    ->  <p class='intro' hidden checked='true'>hi</p>

Values arrive already rendered (and therefore text-escaped); serialization
adds the attribute-level escapes for quotes, CR and LF. The math notation
has no attributes: its operators take arguments by position.
"""

from __future__ import annotations

from collections.abc import Mapping

from plumas.errors import InvalidAttributeValue
from plumas.safe import Rendered, SafeFragment
from plumas.utils.text import escape_html_attribute


def attribute_name(name: str) -> str:
    """Map a Python keyword onto a markup attribute name.

    A trailing underscore is dropped so reserved words can be spelled
    (``class_`` -> ``class``); remaining underscores become hyphens
    (``data_id`` -> ``data-id``).
    """
    if len(name) > 1 and name.endswith("_"):
        name = name[:-1]
    return name.replace("_", "-")


def serialize_attribute(name: str, value: Rendered) -> str:
    """Serialize one attribute.

    Args:
        name: Attribute name as written in the expression
        value: Rendered value; the empty tuple means "no value"

    Returns:
        ``name='value'``, or the bare name for an absent value

    Raises:
        InvalidAttributeValue: If value holds more than one element
    """
    attr = attribute_name(name)
    if isinstance(value, tuple):
        if len(value) == 0:
            return attr
        if len(value) != 1:
            msg = f"attribute {attr!r} needs a single value, got {len(value)}"
            raise InvalidAttributeValue(attr, msg)
        value = value[0]
    return f"{attr}='{escape_html_attribute(value.text)}'"


def serialize_attributes(attributes: Mapping[str, Rendered]) -> SafeFragment:
    """Serialize attributes in insertion order.

    Each entry is preceded by a single space, so the result can be placed
    directly after a tag name. No attributes gives an empty fragment.
    """
    return SafeFragment(
        "".join(f" {serialize_attribute(name, value)}" for name, value in attributes.items())
    )
