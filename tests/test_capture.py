"""Tests for capturing Python expressions as trees."""

from __future__ import annotations

import ast

import pytest

from plumas.capture import capture
from plumas.errors import MalformedExpression
from plumas.nodes import Call, Literal, Symbol


class TestBasicCapture:
    """Names, constants and calls map onto the three node kinds."""

    def test_name_becomes_symbol(self) -> None:
        assert capture("x") == Symbol("x")

    @pytest.mark.parametrize(
        ("source", "value"),
        [("'hi'", "hi"), ("42", 42), ("1.5", 1.5), ("True", True), ("None", None)],
    )
    def test_constant_becomes_literal(self, source: str, value: object) -> None:
        assert capture(source) == Literal(value)

    def test_sequence_becomes_tuple_literal(self) -> None:
        assert capture("['a', 'b']") == Literal(("a", "b"))
        assert capture("('a', 1)") == Literal(("a", 1))

    def test_call_partitions_arguments(self) -> None:
        node = capture("p('a', x, class_='c', id=y)")
        assert node == Call(
            head="p",
            args=(Literal("a"), Symbol("x")),
            named=(("class_", Literal("c")), ("id", Symbol("y"))),
        )

    def test_nested_calls(self) -> None:
        node = capture("div(p(b('x')))")
        assert node == Call.of("div", Call.of("p", Call.of("b", Literal("x"))))

    def test_surrounding_whitespace_is_ignored(self) -> None:
        assert capture("  x\n") == Symbol("x")

    def test_accepts_parsed_ast(self) -> None:
        tree = ast.parse("f(x)", mode="eval")
        assert capture(tree) == Call.of("f", Symbol("x"))
        assert capture(tree.body) == Call.of("f", Symbol("x"))

    def test_hand_built_ast_without_positions(self) -> None:
        node = capture(ast.Name(id="x"))
        assert node == Symbol("x")


class TestOperatorCapture:
    """Operators become calls named after the operator module."""

    @pytest.mark.parametrize(
        ("source", "head"),
        [
            ("a + b", "add"),
            ("a - b", "sub"),
            ("a * b", "mul"),
            ("a / b", "truediv"),
            ("a // b", "floordiv"),
            ("a % b", "mod"),
            ("a ** b", "pow"),
            ("a @ b", "matmul"),
            ("a == b", "eq"),
            ("a != b", "ne"),
            ("a < b", "lt"),
            ("a <= b", "le"),
            ("a > b", "gt"),
            ("a >= b", "ge"),
            ("a[b]", "getitem"),
        ],
    )
    def test_binary(self, source: str, head: str) -> None:
        assert capture(source) == Call.of(head, Symbol("a"), Symbol("b"))

    @pytest.mark.parametrize(("source", "head"), [("-a", "neg"), ("+a", "pos"), ("~a", "invert")])
    def test_unary(self, source: str, head: str) -> None:
        assert capture(source) == Call.of(head, Symbol("a"))

    def test_precedence_follows_python(self) -> None:
        node = capture("a + b * c")
        assert node == Call.of("add", Symbol("a"), Call.of("mul", Symbol("b"), Symbol("c")))


class TestGrouping:
    """Parentheses that change meaning survive as group() calls."""

    def test_looser_left_operand(self) -> None:
        node = capture("(a + b) * c")
        add = Call.of("add", Symbol("a"), Symbol("b"))
        assert node == Call.of("mul", Call.of("group", add), Symbol("c"))

    def test_right_operand_of_left_associative_operator(self) -> None:
        node = capture("a - (b - c)")
        inner = Call.of("sub", Symbol("b"), Symbol("c"))
        assert node == Call.of("sub", Symbol("a"), Call.of("group", inner))

    def test_left_chain_needs_no_group(self) -> None:
        node = capture("a - b - c")
        inner = Call.of("sub", Symbol("a"), Symbol("b"))
        assert node == Call.of("sub", inner, Symbol("c"))

    def test_unary_operand(self) -> None:
        node = capture("-(a + b)")
        add = Call.of("add", Symbol("a"), Symbol("b"))
        assert node == Call.of("neg", Call.of("group", add))

    def test_power_base(self) -> None:
        assert capture("(-x) ** 2") == Call.of(
            "pow", Call.of("group", Call.of("neg", Symbol("x"))), Literal(2)
        )
        assert capture("-x ** 2") == Call.of("neg", Call.of("pow", Symbol("x"), Literal(2)))

    def test_exponent_is_never_grouped(self) -> None:
        node = capture("x ** (n + 1)")
        assert node == Call.of("pow", Symbol("x"), Call.of("add", Symbol("n"), Literal(1)))

    def test_subscript(self) -> None:
        node = capture("(a + b)[i + 1]")
        assert node == Call.of(
            "getitem",
            Call.of("group", Call.of("add", Symbol("a"), Symbol("b"))),
            Call.of("add", Symbol("i"), Literal(1)),
        )

    def test_comparison_operand(self) -> None:
        node = capture("(a < b) == c")
        lt = Call.of("lt", Symbol("a"), Symbol("b"))
        assert node == Call.of("eq", Call.of("group", lt), Symbol("c"))

    def test_group_keeps_operand_location(self) -> None:
        node = capture("(a + b) * c")
        assert isinstance(node, Call)
        group = node.args[0]
        assert isinstance(group, Call)
        assert group.location == group.args[0].location


class TestLocations:
    """Captured nodes remember where they came from."""

    def test_call_location(self) -> None:
        node = capture("f(x)", source_file="page.py")
        assert node.location is not None
        assert node.location.lineno == 1
        assert node.location.col_offset == 1
        assert node.location.source_file == "page.py"

    def test_argument_location(self) -> None:
        node = capture("f(x)")
        assert isinstance(node, Call)
        assert node.args[0].location is not None
        assert node.args[0].location.col_offset == 3


class TestMalformed:
    """Anything outside the tree model is rejected, never evaluated."""

    def test_long_operator_chain(self) -> None:
        with pytest.raises(MalformedExpression):
            capture("+".join(["x"] * 5000))

    def test_deep_hand_built_ast(self) -> None:
        tree: ast.expr = ast.Name(id="x")
        for _ in range(5000):
            tree = ast.UnaryOp(op=ast.USub(), operand=tree)
        with pytest.raises(MalformedExpression, match="nests too deeply"):
            capture(tree)

    @pytest.mark.parametrize(
        "source",
        [
            "obj.method(x)",
            "f(x)(y)",
            "fs[0](x)",
        ],
    )
    def test_call_head_must_be_plain_name(self, source: str) -> None:
        with pytest.raises(MalformedExpression, match="call head"):
            capture(source)

    def test_star_args(self) -> None:
        with pytest.raises(MalformedExpression, match="star"):
            capture("f(*xs)")

    def test_double_star_kwargs(self) -> None:
        with pytest.raises(MalformedExpression):
            capture("f(**kw)")

    def test_chained_comparison(self) -> None:
        with pytest.raises(MalformedExpression, match="chained"):
            capture("a < b < c")

    @pytest.mark.parametrize("source", ["lambda: 1", "x if y else z", "{'a': 1}", "a.b", "1j"])
    def test_unsupported_syntax(self, source: str) -> None:
        with pytest.raises(MalformedExpression):
            capture(source)

    def test_sequence_of_non_constants(self) -> None:
        with pytest.raises(MalformedExpression, match="constants"):
            capture("[a, b]")

    def test_syntax_error_has_location(self) -> None:
        with pytest.raises(MalformedExpression) as info:
            capture("f(", source_file="page.py")
        assert info.value.location is not None
        assert "page.py" in str(info.value)

    def test_statements_are_not_expressions(self) -> None:
        with pytest.raises(MalformedExpression):
            capture("x = 1")

    def test_nothing_is_evaluated(self) -> None:
        # Would raise NameError or have side effects if evaluated
        node = capture("undefined_function(__import__('os'))")
        assert isinstance(node, Call)
        assert node.head == "undefined_function"
