"""Tests for renderer factories."""

from __future__ import annotations

import pytest

from plumas.errors import InvalidAttributeValue, StructuralError
from plumas.generators import (
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
from plumas.safe import SafeFragment


def frag(text: str) -> SafeFragment:
    return SafeFragment(text)


class TestContainerRenderer:
    """Container elements wrap children and serialize attributes."""

    def test_no_children(self) -> None:
        assert make_container_renderer("p")((), {}) == frag("<p></p>")

    def test_children_are_concatenated_verbatim(self) -> None:
        render = make_container_renderer("p")
        assert render((frag("a &amp; "), frag("<b>x</b>")), {}) == frag("<p>a &amp; <b>x</b></p>")

    def test_tuple_children_are_flattened(self) -> None:
        render = make_container_renderer("ul")
        children = ((frag("<li>a</li>"), frag("<li>b</li>")), ())
        assert render(children, {}) == frag("<ul><li>a</li><li>b</li></ul>")

    def test_attributes(self) -> None:
        render = make_container_renderer("div")
        assert render((), {"class_": frag("card"), "id": frag("x")}) == frag(
            "<div class='card' id='x'></div>"
        )

    def test_renderer_is_pure(self) -> None:
        render = make_container_renderer("p")
        assert render((frag("x"),), {}) == render((frag("x"),), {})

    def test_multi_value_attribute(self) -> None:
        render = make_container_renderer("p")
        with pytest.raises(InvalidAttributeValue):
            render((), {"class_": (frag("a"), frag("b"))})


class TestLeafRenderer:
    """Void elements reject children."""

    def test_attributes_only(self) -> None:
        render = make_leaf_renderer("img")
        assert render((), {"src": frag("a.png")}) == frag("<img src='a.png' />")

    def test_not_self_closing(self) -> None:
        assert make_leaf_renderer("br", self_closing=False)((), {}) == frag("<br>")

    def test_children_raise(self) -> None:
        with pytest.raises(StructuralError, match="<br> cannot have children") as info:
            make_leaf_renderer("br")((frag("x"),), {})
        assert info.value.name == "br"


class TestTemplates:
    """Template shapes."""

    def test_unary_arity(self) -> None:
        assert unary("(", ")").arity == 1

    def test_binary_arity(self) -> None:
        assert binary(" + ").arity == 2

    def test_slots_fill(self) -> None:
        template = Slots(("\\frac{", "}{", "}"))
        assert template.fill((frag("a"), frag("b"))) == "\\frac{a}{b}"


class TestOperators:
    """Positional math operators."""

    def test_unary(self) -> None:
        render = make_operator("sin", unary("\\sin(", ")"))
        assert render((frag("x"),), {}) == frag("\\sin(x)")

    def test_binary(self) -> None:
        render = make_operator("add", binary(" + "))
        assert render((frag("x"), frag("\\pi")), {}) == frag("x + \\pi")

    def test_fixed_arity(self) -> None:
        render = make_operator("frac", Slots(("\\frac{", "}{", "}")))
        assert render((frag("1"), frag("n")), {}) == frag("\\frac{1}{n}")

    def test_variadic(self) -> None:
        render = make_operator("max", Variadic("\\max(", ", ", ")"))
        assert render((frag("a"), frag("b"), frag("c")), {}) == frag("\\max(a, b, c)")

    def test_variadic_minimum(self) -> None:
        render = make_operator("max", Variadic("\\max(", ", ", ")"))
        with pytest.raises(StructuralError, match="at least 1"):
            render((), {})

    def test_wrong_arity(self) -> None:
        render = make_operator("frac", Slots(("\\frac{", "}{", "}")))
        with pytest.raises(StructuralError, match="takes 2 argument"):
            render((frag("1"),), {})

    def test_named_arguments_rejected(self) -> None:
        render = make_operator("sin", unary("\\sin(", ")"))
        with pytest.raises(StructuralError, match="no named arguments"):
            render((frag("x"),), {"deg": frag("true")})

    def test_multi_valued_slot_rejected(self) -> None:
        render = make_operator("sin", unary("\\sin(", ")"))
        with pytest.raises(StructuralError, match="argument 1 must be a single value"):
            render(((frag("a"), frag("b")),), {})

    def test_single_element_tuple_fills_slot(self) -> None:
        render = make_operator("sin", unary("\\sin(", ")"))
        assert render(((frag("a"),),), {}) == frag("\\sin(a)")

    def test_tuple_spreads_into_variadic(self) -> None:
        render = make_operator("max", Variadic("\\max(", ", ", ")"))
        assert render(((frag("1"), frag("2")), frag("3")), {}) == frag("\\max(1, 2, 3)")


class TestFallbacks:
    """Renderers for unregistered heads."""

    def test_math_fallback(self) -> None:
        render = make_math_fallback("g")
        assert render((frag("a"), frag("b")), {}) == frag("\\mathrm{g}(a, b)")

    def test_math_fallback_no_arguments(self) -> None:
        assert make_math_fallback("f")((), {}) == frag("\\mathrm{f}()")

    def test_math_fallback_separator(self) -> None:
        render = make_math_fallback("g", separator="; ")
        assert render((frag("a"), frag("b")), {}) == frag("\\mathrm{g}(a; b)")

    def test_math_fallback_named_values_follow(self) -> None:
        render = make_math_fallback("f")
        assert render((frag("a"),), {"k": frag("b")}) == frag("\\mathrm{f}(a, b)")

    def test_markup_fallback_is_a_container(self) -> None:
        render = make_markup_fallback("card")
        assert render((frag("x"),), {"id": frag("1")}) == frag("<card id='1'>x</card>")
