"""End-to-end tests for the public API."""

from __future__ import annotations

import ast

import pytest

import plumas
from plumas import (
    MalformedExpression,
    RawText,
    Translator,
    capture,
    html_notation,
    html_registry_with_defaults,
    latex_notation,
    render,
    to_html,
    to_latex,
)


class TestScenarios:
    """Representative renders."""

    def test_custom_markup_registry(self) -> None:
        builder = html_registry_with_defaults()
        builder.container("paragraph", tag="p").container("bold", tag="b")
        translator = Translator(html_notation(builder.build()))
        assert translator("paragraph('Some text &', bold('inner'))") == (
            "<p>Some text &amp;<b>inner</b></p>"
        )

    def test_math_with_known_symbol(self) -> None:
        assert to_latex("sin(x + pi)") == "\\sin(x + \\pi)"

    def test_math_fallback(self) -> None:
        assert to_latex("g(a, b)") == "\\mathrm{g}(a, b)"

    def test_default_notation_is_html(self) -> None:
        assert render("b('x')") == "<b>x</b>"


class TestInputs:
    """Accepted expression forms."""

    def test_ast_expression(self) -> None:
        tree = ast.parse("em('x')", mode="eval")
        assert to_html(tree) == "<em>x</em>"

    def test_ast_node(self) -> None:
        assert to_html(ast.parse("em('x')", mode="eval").body) == "<em>x</em>"

    def test_captured_tree(self) -> None:
        assert to_html(capture("em('x')")) == "<em>x</em>"

    def test_statement_rejected(self) -> None:
        with pytest.raises(MalformedExpression):
            to_html(ast.parse("x = 1"))

    def test_source_file_in_errors(self) -> None:
        with pytest.raises(MalformedExpression) as info:
            to_html("p(", source_file="page.py")
        assert "page.py" in str(info.value)


class TestTranslator:
    """Reusable notation-bound renderer."""

    def test_capture_then_render(self) -> None:
        latex = Translator(latex_notation())
        tree = latex.capture("sqrt(x)")
        assert latex.render(tree) == "\\sqrt{x}"
        assert latex(tree) == "\\sqrt{x}"

    def test_notation_property(self) -> None:
        notation = latex_notation()
        assert Translator(notation).notation is notation

    def test_config(self) -> None:
        latex = Translator(latex_notation(), config=plumas.RenderConfig(fallback_separator=" "))
        assert latex("f(a, b)") == "\\mathrm{f}(a b)"


class TestExports:
    """Package surface."""

    def test_version(self) -> None:
        assert plumas.__version__ == "0.1.0"

    def test_all_names_exist(self) -> None:
        for name in plumas.__all__:
            assert hasattr(plumas, name), name

    def test_raw_text_is_exported(self) -> None:
        assert RawText("x").text == "x"
