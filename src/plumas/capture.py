"""Capture Python expressions as Plumas trees without evaluating them.

The host language is Python: source text is parsed with the standard
``ast`` module in "eval" mode, and the resulting syntax tree is mapped onto
the three node kinds of plumas.nodes. Nothing is ever evaluated.

Operators have no identifier of their own in Python syntax, so they are
captured as calls named after the matching ``operator`` module function:

    a + b      ->  add(a, b)
    -x         ->  neg(x)
    x ** 2     ->  pow(x, 2)
    x[i]       ->  getitem(x, i)
    a <= b     ->  le(a, b)

Parentheses leave no trace in the syntax tree, so an operand that binds
more loosely than its operator is wrapped in an explicit ``group`` call:

    (a + b) * c    ->  mul(group(add(a, b)), c)
    a - (b - c)    ->  sub(a, group(sub(b, c)))

Example:
    >>> from plumas.capture import capture
    >>> capture("frac(a, b + 1)")
    Call(head='frac', args=(Symbol(name='a'), Call(head='add', ...)), named=())

"""

from __future__ import annotations

import ast

from plumas.errors import MalformedExpression
from plumas.location import SourceLocation
from plumas.nodes import Call, Literal, Node, Symbol

# Head of the call that stands in for a pair of parentheses
GROUP = "group"

_BINARY_OPERATORS: dict[type[ast.operator], str] = {
    ast.Add: "add",
    ast.Sub: "sub",
    ast.Mult: "mul",
    ast.Div: "truediv",
    ast.FloorDiv: "floordiv",
    ast.Mod: "mod",
    ast.Pow: "pow",
    ast.MatMult: "matmul",
}

_UNARY_OPERATORS: dict[type[ast.unaryop], str] = {
    ast.USub: "neg",
    ast.UAdd: "pos",
    ast.Invert: "invert",
}

_COMPARISONS: dict[type[ast.cmpop], str] = {
    ast.Eq: "eq",
    ast.NotEq: "ne",
    ast.Lt: "lt",
    ast.LtE: "le",
    ast.Gt: "gt",
    ast.GtE: "ge",
}

# Python binding strength, loosest first
_COMPARE_PRECEDENCE = 1
_BINARY_PRECEDENCE: dict[type[ast.operator], int] = {
    ast.Add: 10,
    ast.Sub: 10,
    ast.Mult: 11,
    ast.Div: 11,
    ast.FloorDiv: 11,
    ast.Mod: 11,
    ast.MatMult: 11,
    ast.Pow: 13,
}
_UNARY_PRECEDENCE = 12
_ATOM_PRECEDENCE = 100

_TOO_DEEP = "expression nests too deeply"


def capture(
    source: str | ast.AST,
    *,
    source_file: str | None = None,
) -> Node:
    """Capture a Python expression as an expression tree.

    Args:
        source: Python expression source, or an already parsed ``ast`` node
            (an ``ast.Expression`` or any expression node)
        source_file: Optional file name used in error locations

    Returns:
        Root node of the captured tree

    Raises:
        MalformedExpression: On syntax errors, call heads that are not plain
            names, star-arguments, syntax with no tree equivalent, or nesting
            too deep for the parser
    """
    if isinstance(source, str):
        try:
            tree: ast.AST = ast.parse(source.strip(), filename=source_file or "<expr>", mode="eval")
        except SyntaxError as exc:
            location = None
            if exc.lineno is not None:
                location = SourceLocation(
                    lineno=exc.lineno,
                    col_offset=exc.offset or 1,
                    source_file=source_file,
                )
            raise MalformedExpression(f"invalid expression: {exc.msg}", location) from exc
        except RecursionError as exc:
            raise MalformedExpression(_TOO_DEEP) from exc
    else:
        tree = source

    if isinstance(tree, ast.Expression):
        tree = tree.body
    if not isinstance(tree, ast.expr):
        msg = f"expected an expression, got {type(tree).__name__}"
        raise MalformedExpression(msg)

    try:
        return _ExpressionCapture(source_file).capture(tree)
    except RecursionError as exc:
        raise MalformedExpression(_TOO_DEEP) from exc


class _ExpressionCapture:
    """Maps ``ast`` expression nodes onto Plumas nodes."""

    __slots__ = ("_source_file",)

    def __init__(self, source_file: str | None) -> None:
        self._source_file = source_file

    def capture(self, expr: ast.expr) -> Node:
        location = self._location(expr)
        match expr:
            case ast.Constant(value=value):
                if not _is_scalar(value):
                    msg = f"unsupported literal of type {type(value).__name__}"
                    raise MalformedExpression(msg, location)
                return Literal(value, location=location)
            case ast.Name(id=name):
                return Symbol(name, location=location)
            case ast.List(elts=elts) | ast.Tuple(elts=elts):
                return Literal(self._sequence(elts, location), location=location)
            case ast.Call():
                return self._call(expr, location)
            case ast.BinOp(left=left, op=op, right=right):
                head = _BINARY_OPERATORS.get(type(op))
                if head is None:
                    msg = f"unsupported operator {type(op).__name__}"
                    raise MalformedExpression(msg, location)
                precedence = _BINARY_PRECEDENCE[type(op)]
                if isinstance(op, ast.Pow):
                    # Right-associative; the exponent is written raised
                    left_grouped = _precedence(left) <= precedence
                    right_grouped = False
                else:
                    left_grouped = _precedence(left) < precedence
                    right_grouped = _precedence(right) <= precedence
                return Call(
                    head=head,
                    args=(self._operand(left, left_grouped), self._operand(right, right_grouped)),
                    location=location,
                )
            case ast.UnaryOp(op=op, operand=operand):
                head = _UNARY_OPERATORS.get(type(op))
                if head is None:
                    msg = f"unsupported operator {type(op).__name__}"
                    raise MalformedExpression(msg, location)
                grouped = _precedence(operand) < _UNARY_PRECEDENCE
                return Call(head=head, args=(self._operand(operand, grouped),), location=location)
            case ast.Compare(left=left, ops=[op], comparators=[right]):
                head = _COMPARISONS.get(type(op))
                if head is None:
                    msg = f"unsupported comparison {type(op).__name__}"
                    raise MalformedExpression(msg, location)
                return Call(
                    head=head,
                    args=(
                        self._operand(left, _precedence(left) <= _COMPARE_PRECEDENCE),
                        self._operand(right, _precedence(right) <= _COMPARE_PRECEDENCE),
                    ),
                    location=location,
                )
            case ast.Compare():
                raise MalformedExpression("chained comparisons are not supported", location)
            case ast.Subscript(value=value, slice=index):
                return Call(
                    head="getitem",
                    args=(
                        self._operand(value, _precedence(value) < _ATOM_PRECEDENCE),
                        self.capture(index),
                    ),
                    location=location,
                )
            case _:
                msg = f"unsupported syntax: {type(expr).__name__}"
                raise MalformedExpression(msg, location)

    def _operand(self, expr: ast.expr, grouped: bool) -> Node:
        node = self.capture(expr)
        if not grouped:
            return node
        return Call(head=GROUP, args=(node,), location=node.location)

    def _call(self, expr: ast.Call, location: SourceLocation) -> Call:
        if not isinstance(expr.func, ast.Name):
            msg = f"call head must be a plain name, got {type(expr.func).__name__}"
            raise MalformedExpression(msg, location)

        args: list[Node] = []
        for arg in expr.args:
            if isinstance(arg, ast.Starred):
                raise MalformedExpression("star-arguments are not supported", location)
            args.append(self.capture(arg))

        named: list[tuple[str, Node]] = []
        for keyword in expr.keywords:
            if keyword.arg is None:
                raise MalformedExpression("**-arguments are not supported", location)
            named.append((keyword.arg, self.capture(keyword.value)))

        return Call.build(expr.func.id, args, named, location=location)

    def _sequence(
        self, elts: list[ast.expr], location: SourceLocation
    ) -> tuple[str | int | float | bool | None, ...]:
        items = []
        for elt in elts:
            if not isinstance(elt, ast.Constant) or not _is_scalar(elt.value):
                raise MalformedExpression("sequence literals may only hold constants", location)
            items.append(elt.value)
        return tuple(items)

    def _location(self, expr: ast.expr) -> SourceLocation:
        # Hand-built ast nodes may carry no positions at all
        lineno = getattr(expr, "lineno", None)
        if lineno is None:
            return SourceLocation.unknown()
        end_col = getattr(expr, "end_col_offset", None)
        return SourceLocation(
            lineno=lineno,
            col_offset=expr.col_offset + 1,
            end_lineno=getattr(expr, "end_lineno", None),
            end_col_offset=None if end_col is None else end_col + 1,
            source_file=self._source_file,
        )


def _is_scalar(value: object) -> bool:
    return value is None or isinstance(value, (str, int, float, bool))


def _precedence(expr: ast.expr) -> int:
    match expr:
        case ast.BinOp(op=op):
            return _BINARY_PRECEDENCE.get(type(op), _ATOM_PRECEDENCE)
        case ast.UnaryOp():
            return _UNARY_PRECEDENCE
        case ast.Compare():
            return _COMPARE_PRECEDENCE
        case _:
            return _ATOM_PRECEDENCE
