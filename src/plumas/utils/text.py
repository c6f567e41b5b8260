"""Escaping primitives for the supported target notations.

These work on plain strings. Deciding *whether* a value needs escaping is
the job of plumas.safe; these functions always escape.

Example:
    >>> from plumas.utils.text import escape_html_text, escape_latex
    >>> escape_html_text("a < b & c")
    'a &lt; b &amp; c'
    >>> escape_latex("50% of $x")
    '50\\\\% of \\\\$x'
"""

from __future__ import annotations

import html as html_module
import re

_LATEX_SPECIALS = {
    "\\": r"\backslash{}",
    "$": r"\$",
    "%": r"\%",
    "&": r"\&",
    "#": r"\#",
    "{": r"\{",
    "}": r"\}",
}

_LATEX_PATTERN = re.compile("|".join(re.escape(ch) for ch in _LATEX_SPECIALS))

_ATTRIBUTE_SPECIALS = {
    "'": "&#39;",
    '"': "&quot;",
    "\r": "&#13;",
    "\n": "&#10;",
}

_ATTRIBUTE_PATTERN = re.compile("[" + re.escape("".join(_ATTRIBUTE_SPECIALS)) + "]")


def escape_html_text(text: str) -> str:
    """Escape markup-significant characters in element content.

    Only &, < and > are replaced; quotes are left alone in text content.
    """
    if not text:
        return ""
    return html_module.escape(text, quote=False)


def escape_html_attribute(text: str) -> str:
    """Make already text-escaped content safe inside a quoted attribute.

    Replaces single and double quotes, carriage returns and line feeds
    with numeric or named character references. Ampersands are not touched:
    the input is expected to have passed through escape_html_text.
    """
    if not text:
        return ""
    return _ATTRIBUTE_PATTERN.sub(lambda m: _ATTRIBUTE_SPECIALS[m.group()], text)


def escape_latex(text: str) -> str:
    """Escape LaTeX-significant characters in a single pass.

    Handles backslash, $, %, &, # and braces. A single regex pass means the
    braces introduced by ``\\backslash{}`` are never escaped a second time.
    """
    if not text:
        return ""
    return _LATEX_PATTERN.sub(lambda m: _LATEX_SPECIALS[m.group()], text)
