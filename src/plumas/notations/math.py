"""LaTeX math notation.

Python operators, grouping helpers and common functions translate to LaTeX;
known identifiers (Greek letters, infinity) translate to their macros;
everything else passes through unchanged:

    >>> to_latex("sin(x + pi)")
    '\\\\sin(x + \\\\pi)'
    >>> to_latex("frac(alpha, 2) ** n")
    '\\\\frac{\\\\alpha}{2}^{n}'
    >>> to_latex("g(a, b)")
    '\\\\mathrm{g}(a, b)'

Named arguments have no meaning here: every operator takes its arguments
by position.
"""

from __future__ import annotations

from collections.abc import Mapping

from plumas.config import RenderConfig
from plumas.generators import Renderer, Slots, Template, Variadic, binary, make_math_fallback, unary
from plumas.notations.base import Notation, known_symbols
from plumas.notations.symbols import LATEX_SYMBOLS
from plumas.registry import RendererRegistry, RendererRegistryBuilder
from plumas.utils.text import escape_latex

_FUNCTIONS = (
    "sin cos tan sec csc cot arcsin arccos arctan sinh cosh tanh "
    "log ln lg exp det gcd"
).split()

_ACCENTS = "hat tilde bar vec dot ddot overline underline".split()

LATEX_OPERATORS: dict[str, Template] = {
    # Python operators, by their `operator` module names
    "add": binary(" + "),
    "sub": binary(" - "),
    "mul": binary(" \\cdot "),
    "truediv": binary(" / "),
    "floordiv": Slots(("\\left\\lfloor \\frac{", "}{", "} \\right\\rfloor")),
    "mod": binary(" \\bmod "),
    "pow": Slots(("", "^{", "}")),
    "getitem": Slots(("", "_{", "}")),
    "neg": unary("-", ""),
    "pos": unary("+", ""),
    "eq": binary(" = "),
    "ne": binary(" \\neq "),
    "lt": binary(" < "),
    "le": binary(" \\leq "),
    "gt": binary(" > "),
    "ge": binary(" \\geq "),
    # Grouping
    "group": unary("\\left( ", " \\right)"),
    "brackets": unary("\\left[ ", " \\right]"),
    "braces": unary("\\left\\{ ", " \\right\\}"),
    "abs": unary("\\left| ", " \\right|"),
    "norm": unary("\\left\\| ", " \\right\\|"),
    # Structures
    "frac": Slots(("\\frac{", "}{", "}")),
    "sqrt": unary("\\sqrt{", "}"),
    "root": Slots(("\\sqrt[", "]{", "}")),
    "binom": Slots(("\\binom{", "}{", "}")),
    "max": Variadic("\\max(", ", ", ")"),
    "min": Variadic("\\min(", ", ", ")"),
    "paste": Variadic("", " ", ""),
    **{name: unary(f"\\{name}(", ")") for name in _FUNCTIONS},
    **{name: unary(f"\\{name}{{", "}") for name in _ACCENTS},
}


def latex_registry_with_defaults() -> RendererRegistryBuilder:
    """Create a builder pre-populated with the default math operators."""
    builder = RendererRegistryBuilder()
    for name, template in LATEX_OPERATORS.items():
        builder.operator(name, template)
    return builder


def create_latex_registry() -> RendererRegistry:
    """Registry with the default math operators."""
    return latex_registry_with_defaults().build()


def _math_fallback(head: str, config: RenderConfig) -> Renderer:
    return make_math_fallback(head, config.fallback_separator)


# Process-wide default, built once at import
DEFAULT_LATEX_REGISTRY: RendererRegistry = create_latex_registry()


def latex_notation(
    registry: RendererRegistry | None = None,
    symbols: Mapping[str, str] | None = None,
) -> Notation:
    """Create the LaTeX math notation.

    Args:
        registry: Operator renderers (defaults to LATEX_OPERATORS)
        symbols: Known symbols as trusted LaTeX (defaults to Greek letters
            and a few common macros)

    Returns:
        Notation for LaTeX math output
    """
    return Notation(
        name="latex",
        escaper=escape_latex,
        operators=registry if registry is not None else DEFAULT_LATEX_REGISTRY,
        symbols=known_symbols(LATEX_SYMBOLS if symbols is None else symbols),
        fallback=_math_fallback,
    )
