"""Typed expression tree for Plumas.

A captured expression is a tree of three node kinds:

Node (base)
├── Literal   opaque scalar: str, int, float, bool, None (or a tuple of them)
├── Symbol    bare identifier
└── Call      head identifier + positional args + named args

All nodes are frozen dataclasses with slots. Trees are built once per
capture, never mutated, and discarded after rendering.

Example:
    >>> from plumas.nodes import Call, Literal, Symbol
    >>> Call.of("p", Literal("Hello"), Symbol("name"), class_=Literal("intro"))
    Call(head='p', args=(...), named=(('class_', Literal(value='intro')),))

Thread Safety:
All nodes are frozen (immutable) and safe to share across threads.

"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field

from plumas.errors import MalformedExpression
from plumas.location import SourceLocation

_SCALAR_TYPES = (str, int, float, bool)


def _check_identifier(name: object, what: str, location: SourceLocation | None) -> None:
    if not isinstance(name, str) or not name.isidentifier():
        raise MalformedExpression(f"{what} must be a plain identifier, got {name!r}", location)


@dataclass(frozen=True, slots=True)
class Node:
    """Base class for all expression nodes.

    The location is optional: nodes built by hand or loaded from JSON may
    not know where they came from.
    """

    location: SourceLocation | None = field(default=None, kw_only=True, compare=False)


@dataclass(frozen=True, slots=True)
class Literal(Node):
    """A literal value.

    Host: "text", 3, 2.5, True, None, ("a", "b")
    """

    value: str | int | float | bool | tuple[str | int | float | bool | None, ...] | None

    def __post_init__(self) -> None:
        value = self.value
        if value is None or isinstance(value, _SCALAR_TYPES):
            return
        if isinstance(value, tuple) and all(
            item is None or isinstance(item, _SCALAR_TYPES) for item in value
        ):
            return
        msg = f"literal must be a scalar or a tuple of scalars, got {type(value).__name__}"
        raise MalformedExpression(msg, self.location)


@dataclass(frozen=True, slots=True)
class Symbol(Node):
    """A bare identifier.

    Host: x, pi, nbsp
    """

    name: str

    def __post_init__(self) -> None:
        _check_identifier(self.name, "symbol name", self.location)


@dataclass(frozen=True, slots=True)
class Call(Node):
    """A call with a plain identifier as its head.

    Host: frac(a, b), p("text", class_="intro")

    ``named`` keeps (name, node) pairs in first-occurrence order. Names are
    unique; use Call.build() to fold repeated names (last write wins).
    """

    head: str
    args: tuple[Node, ...] = ()
    named: tuple[tuple[str, Node], ...] = ()

    def __post_init__(self) -> None:
        _check_identifier(self.head, "call head", self.location)
        seen: set[str] = set()
        for name, value in self.named:
            _check_identifier(name, "named argument", self.location)
            if name in seen:
                raise MalformedExpression(f"duplicate named argument {name!r}", self.location)
            seen.add(name)
            if not isinstance(value, Node):
                raise MalformedExpression(
                    f"named argument {name!r} is not a node", self.location
                )
        for arg in self.args:
            if not isinstance(arg, Node):
                raise MalformedExpression(
                    f"argument of {self.head!r} is not a node", self.location
                )

    @classmethod
    def of(cls, head: str, *args: Node, **named: Node) -> Call:
        """Build a call from Python arguments."""
        return cls(head=head, args=args, named=tuple(named.items()))

    @classmethod
    def build(
        cls,
        head: str,
        args: Iterable[Node] = (),
        named: Iterable[tuple[str, Node]] = (),
        *,
        location: SourceLocation | None = None,
    ) -> Call:
        """Build a call, folding repeated named arguments.

        A repeated name keeps the position of its first appearance and the
        value of its last one.
        """
        folded: dict[str, Node] = {}
        for name, value in named:
            folded[name] = value
        return cls(head=head, args=tuple(args), named=tuple(folded.items()), location=location)

    @property
    def named_args(self) -> Mapping[str, Node]:
        """Named arguments as an ordered mapping."""
        return dict(self.named)

    @property
    def children(self) -> tuple[Node, ...]:
        """All argument nodes in evaluation order: positional, then named."""
        return self.args + tuple(value for _, value in self.named)
