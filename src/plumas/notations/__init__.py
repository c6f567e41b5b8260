"""Plumas target notations.

Available Notations:
- html_notation: HTML markup with attributes and void-element checks
- latex_notation: LaTeX math with operators, Greek symbols and \\mathrm fallback

"""

from plumas.notations.base import FallbackFactory, Notation, known_symbols
from plumas.notations.markup import (
    create_html_registry,
    html_notation,
    html_registry_with_defaults,
)
from plumas.notations.math import (
    LATEX_OPERATORS,
    create_latex_registry,
    latex_notation,
    latex_registry_with_defaults,
)

__all__ = [
    "FallbackFactory",
    "LATEX_OPERATORS",
    "Notation",
    "create_html_registry",
    "create_latex_registry",
    "html_notation",
    "html_registry_with_defaults",
    "known_symbols",
    "latex_notation",
    "latex_registry_with_defaults",
]
