"""Renderer factories.

A renderer is a pure function bound to a name at construction time. It
receives already-rendered children and named values and returns one
SafeFragment. Renderers never escape their inputs: everything they get is
safe already, so nesting never double-escapes.

Markup:
    make_container_renderer("p")  ->  <p attrs>children</p>
    make_leaf_renderer("br")      ->  <br attrs />   (rejects children)
    make_markup_fallback("card")  ->  <card attrs>children</card>

Math:
    make_operator("sin", unary("\\sin(", ")"))            \\sin(x)
    make_operator("add", binary(" + "))                   a + b
    make_operator("frac", Slots(("\\frac{", "}{", "}")))  \\frac{a}{b}
    make_operator("max", Variadic("\\max(", ", ", ")"))   \\max(a, b, c)
    make_math_fallback("f")                               \\mathrm{f}(a, b)

Thread Safety:
Renderers close over immutable construction parameters only.

"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Protocol

from plumas.attributes import serialize_attributes
from plumas.errors import StructuralError
from plumas.safe import Rendered, SafeFragment, as_fragment, concat, flatten


class Renderer(Protocol):
    """Protocol for node renderers."""

    def __call__(
        self,
        children: tuple[Rendered, ...],
        attributes: Mapping[str, Rendered],
    ) -> SafeFragment:
        """Render one call from its rendered arguments."""
        ...


AttributeSerializer = Callable[[Mapping[str, Rendered]], SafeFragment]


# =============================================================================
# Markup renderers
# =============================================================================


def make_container_renderer(
    tag: str,
    *,
    serialize: AttributeSerializer = serialize_attributes,
) -> Renderer:
    """Create a renderer for an element that wraps its children."""
    open_tag = f"<{tag}"
    close_tag = f"</{tag}>"

    def render(
        children: tuple[Rendered, ...],
        attributes: Mapping[str, Rendered],
    ) -> SafeFragment:
        attrs = serialize(attributes).text
        body = concat(children).text
        return SafeFragment(f"{open_tag}{attrs}>{body}{close_tag}")

    render.__name__ = f"container_{tag}"
    return render


def make_leaf_renderer(
    tag: str,
    *,
    self_closing: bool = True,
    serialize: AttributeSerializer = serialize_attributes,
) -> Renderer:
    """Create a renderer for a void element.

    Args:
        tag: Element name
        self_closing: Emit ``<tag />`` (True) or ``<tag>`` (False)
        serialize: Attribute serializer

    The renderer raises StructuralError if given any positional child.
    """
    end = " />" if self_closing else ">"

    def render(
        children: tuple[Rendered, ...],
        attributes: Mapping[str, Rendered],
    ) -> SafeFragment:
        if children:
            raise StructuralError(tag, f"<{tag}> cannot have children")
        return SafeFragment(f"<{tag}{serialize(attributes).text}{end}")

    render.__name__ = f"leaf_{tag}"
    return render


def make_markup_fallback(tag: str) -> Renderer:
    """Renderer for an unregistered markup call: a container named after it."""
    return make_container_renderer(tag)


# =============================================================================
# Math templates and operators
# =============================================================================


@dataclass(frozen=True, slots=True)
class Slots:
    """Fixed-arity template: text pieces interleaved with arguments.

    ``Slots(("\\frac{", "}{", "}"))`` takes exactly two arguments.
    """

    pieces: tuple[str, ...]

    @property
    def arity(self) -> int:
        return len(self.pieces) - 1

    def fill(self, args: tuple[SafeFragment, ...]) -> str:
        out = [self.pieces[0]]
        for arg, piece in zip(args, self.pieces[1:], strict=True):
            out.append(arg.text)
            out.append(piece)
        return "".join(out)


def unary(left: str, right: str) -> Slots:
    """Unary template: one argument between a left and right marker."""
    return Slots((left, right))


def binary(separator: str) -> Slots:
    """Binary template: two arguments joined by a separator."""
    return Slots(("", separator, ""))


@dataclass(frozen=True, slots=True)
class Variadic:
    """N-ary template in function-call style: ``open a sep b sep c close``."""

    open: str
    separator: str
    close: str
    min_args: int = 1

    def fill(self, args: tuple[SafeFragment, ...]) -> str:
        return self.open + self.separator.join(arg.text for arg in args) + self.close


Template = Slots | Variadic


def make_operator(name: str, template: Template) -> Renderer:
    """Create a positional math renderer from a template.

    A sequence literal spreads into separate arguments of a Variadic
    template; a fixed-arity slot takes exactly one value. Raises
    StructuralError at render time for the wrong number of arguments, a
    multi-valued slot, or any named argument.
    """

    def render(
        children: tuple[Rendered, ...],
        attributes: Mapping[str, Rendered],
    ) -> SafeFragment:
        if attributes:
            names = ", ".join(attributes)
            raise StructuralError(name, f"{name}() takes no named arguments (got {names})")
        if isinstance(template, Variadic):
            args = tuple(flatten(children))
        else:
            args = tuple(
                _single(name, position, child) for position, child in enumerate(children, 1)
            )
        match template:
            case Slots() if len(args) != template.arity:
                msg = f"{name}() takes {template.arity} argument(s), got {len(args)}"
                raise StructuralError(name, msg)
            case Variadic() if len(args) < template.min_args:
                msg = f"{name}() takes at least {template.min_args} argument(s), got {len(args)}"
                raise StructuralError(name, msg)
        return SafeFragment(template.fill(args))

    render.__name__ = f"operator_{name}"
    return render


def _single(name: str, position: int, value: Rendered) -> SafeFragment:
    if isinstance(value, tuple) and len(value) > 1:
        msg = f"{name}() argument {position} must be a single value, got {len(value)}"
        raise StructuralError(name, msg)
    return as_fragment(value)


def make_math_fallback(head: str, separator: str = ", ") -> Renderer:
    """Renderer for an unregistered math call: ``\\mathrm{head}(a, b)``.

    Named values, if any, follow the positional ones.
    """
    prefix = f"\\mathrm{{{head}}}("

    def render(
        children: tuple[Rendered, ...],
        attributes: Mapping[str, Rendered],
    ) -> SafeFragment:
        joined = concat((*children, *attributes.values()), separator).text
        return SafeFragment(f"{prefix}{joined})")

    render.__name__ = f"fallback_{head}"
    return render
