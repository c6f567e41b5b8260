"""Utility modules for Plumas.

Provides:
- text: escape_html_text, escape_html_attribute, escape_latex
- logger: get_logger for logging
"""

from plumas.utils.logger import get_logger
from plumas.utils.text import escape_html_attribute, escape_html_text, escape_latex

__all__ = [
    "escape_html_attribute",
    "escape_html_text",
    "escape_latex",
    "get_logger",
]
