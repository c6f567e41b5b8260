"""
Plumas — write HTML and LaTeX as Python expressions

Plumas captures a Python expression without evaluating it, resolves every
name through a layered scope (operators, known symbols, the expression's
own identifiers), and renders the result as safely escaped HTML or LaTeX.
Zero runtime dependencies.

Quick Start:
    >>> from plumas import to_html, to_latex
    >>> to_html("p('Some text &', b('inner'))")
    '<p>Some text &amp;<b>inner</b></p>'
    >>> to_latex("sin(x + pi)")
    '\\\\sin(x + \\\\pi)'
    >>> to_latex("g(a, b)")
    '\\\\mathrm{g}(a, b)'

Custom names:
    >>> from plumas import Translator, html_notation, html_registry_with_defaults
    >>> builder = html_registry_with_defaults()
    >>> builder.container("paragraph", tag="p").container("bold", tag="b")
    >>> html = Translator(html_notation(builder.build()))
    >>> html("paragraph(bold('hi'), class_='lead')")
    "<p class='lead'><b>hi</b></p>"
"""

import ast

from plumas.attributes import attribute_name, serialize_attribute, serialize_attributes
from plumas.capture import capture
from plumas.config import (
    RenderConfig,
    get_render_config,
    render_config_context,
    reset_render_config,
    set_render_config,
)
from plumas.errors import (
    InvalidAttributeValue,
    MalformedExpression,
    PlumasError,
    ScopeInvariantError,
    StructuralError,
)
from plumas.generators import (
    Renderer,
    Slots,
    Variadic,
    binary,
    make_container_renderer,
    make_leaf_renderer,
    make_markup_fallback,
    make_math_fallback,
    make_operator,
    unary,
)
from plumas.interpreter import Interpreter
from plumas.location import SourceLocation
from plumas.nodes import Call, Literal, Node, Symbol
from plumas.notations import (
    Notation,
    create_html_registry,
    create_latex_registry,
    html_notation,
    html_registry_with_defaults,
    latex_notation,
    latex_registry_with_defaults,
)
from plumas.registry import RendererRegistry, RendererRegistryBuilder
from plumas.safe import RawText, SafeFragment, as_fragment, concat, escape
from plumas.scope import NOT_FOUND, Layer, ScopeChain, build_scope, collect_calls, collect_symbols
from plumas.serialization import from_dict, from_json, to_dict, to_json
from plumas.visitor import BaseVisitor, iter_nodes

__version__ = "0.1.0"

Expression = str | ast.AST | Node


def render(
    expression: Expression,
    *,
    notation: Notation | None = None,
    config: RenderConfig | None = None,
    source_file: str | None = None,
) -> str:
    """Render a captured expression to text in the target notation.

    Args:
        expression: Python source, an ``ast`` node, or an expression tree
        notation: Target notation (defaults to HTML)
        config: Render configuration (defaults to the context's config)
        source_file: Optional file name for error locations

    Returns:
        Output text

    Raises:
        MalformedExpression: If the expression cannot be captured or nests
            too deeply
        StructuralError: If a void element gets children, or an operator
            gets the wrong number of arguments
        InvalidAttributeValue: If a named argument has several values

    Example:
        >>> render("br(class_='x')")
        "<br class='x' />"
    """
    notation = notation or html_notation()
    root = expression if isinstance(expression, Node) else capture(expression, source_file=source_file)
    scope = notation.scope_for(root)
    result = Interpreter(notation, config=config).render(root, scope)
    return as_fragment(result).text


def to_html(expression: Expression, **options) -> str:
    """Render an expression as HTML with the default element registry."""
    return render(expression, notation=html_notation(), **options)


def to_latex(expression: Expression, **options) -> str:
    """Render an expression as LaTeX math with the default operators."""
    return render(expression, notation=latex_notation(), **options)


class Translator:
    """Reusable renderer bound to one notation.

    Usage:
        >>> latex = Translator(latex_notation())
        >>> latex("frac(1, n)")
        '\\\\frac{1}{n}'

        >>> # Capture once, render later
        >>> tree = latex.capture("sqrt(x)")
        >>> latex.render(tree)
        '\\\\sqrt{x}'

    Thread Safety:
        Holds only immutable state. Safe to share across threads.

    """

    __slots__ = ("_config", "_notation")

    def __init__(self, notation: Notation, *, config: RenderConfig | None = None) -> None:
        """Initialize translator.

        Args:
            notation: Target notation
            config: Render configuration (defaults to the context's config)
        """
        self._notation = notation
        self._config = config

    @property
    def notation(self) -> Notation:
        return self._notation

    def __call__(self, source: Expression) -> str:
        """Capture and render in one call."""
        return self.render(source)

    def capture(self, source: str | ast.AST, *, source_file: str | None = None) -> Node:
        """Capture a Python expression without rendering it."""
        return capture(source, source_file=source_file)

    def render(self, expression: Expression, *, source_file: str | None = None) -> str:
        """Render source or a captured tree."""
        return render(
            expression,
            notation=self._notation,
            config=self._config,
            source_file=source_file,
        )


__all__ = [  # noqa: RUF022 — grouped by category for maintainability
    # Version
    "__version__",
    # Core API
    "render",
    "to_html",
    "to_latex",
    "capture",
    "Translator",
    "Expression",
    # Nodes
    "Node",
    "Literal",
    "Symbol",
    "Call",
    "SourceLocation",
    # Safe strings
    "SafeFragment",
    "RawText",
    "escape",
    "concat",
    # Scope
    "Layer",
    "ScopeChain",
    "NOT_FOUND",
    "build_scope",
    "collect_symbols",
    "collect_calls",
    # Renderers
    "Renderer",
    "Slots",
    "Variadic",
    "unary",
    "binary",
    "make_container_renderer",
    "make_leaf_renderer",
    "make_markup_fallback",
    "make_math_fallback",
    "make_operator",
    "RendererRegistry",
    "RendererRegistryBuilder",
    "Interpreter",
    # Attributes
    "attribute_name",
    "serialize_attribute",
    "serialize_attributes",
    # Notations
    "Notation",
    "html_notation",
    "latex_notation",
    "create_html_registry",
    "create_latex_registry",
    "html_registry_with_defaults",
    "latex_registry_with_defaults",
    # Visitor
    "BaseVisitor",
    "iter_nodes",
    # Serialization
    "to_dict",
    "from_dict",
    "to_json",
    "from_json",
    # Configuration (ContextVar-based)
    "RenderConfig",
    "get_render_config",
    "set_render_config",
    "reset_render_config",
    "render_config_context",
    # Errors
    "PlumasError",
    "MalformedExpression",
    "StructuralError",
    "InvalidAttributeValue",
    "ScopeInvariantError",
]
