"""Expression tree visitor and pre-order walk for Plumas.

Example — collect every call head:

    class HeadCollector(BaseVisitor[None]):
        def __init__(self) -> None:
            self.heads: list[str] = []

        def visit_call(self, node: Call) -> None:
            self.heads.append(node.head)

    collector = HeadCollector()
    collector.visit(capture("frac(sin(x), y)"))
    collector.heads  # ['frac', 'sin']

Thread Safety:
    Visitors are NOT shared across threads by default (they may accumulate
    mutable state). Create a new visitor per thread. iter_nodes is pure.

"""

from collections.abc import Iterator
from typing import Generic, TypeVar

from plumas.nodes import Call, Literal, Node, Symbol

T = TypeVar("T")


class BaseVisitor(Generic[T]):
    """Base expression visitor with match-based dispatch.

    Subclass and override ``visit_*`` methods for node kinds you care about.
    Unhandled kinds fall through to ``visit_default``. Children are walked
    automatically after the ``visit_*`` call, positional before named.

    """

    def visit(self, node: Node) -> T:
        """Dispatch to the appropriate ``visit_*`` method, then walk children."""
        result = self._dispatch(node)
        if isinstance(node, Call):
            for child in node.children:
                self.visit(child)
        return result

    def visit_default(self, node: Node) -> T:
        """Called for node kinds without a specific ``visit_*`` method."""
        return None  # type: ignore[return-value]

    def visit_literal(self, node: Literal) -> T:
        return self.visit_default(node)

    def visit_symbol(self, node: Symbol) -> T:
        return self.visit_default(node)

    def visit_call(self, node: Call) -> T:
        return self.visit_default(node)

    def _dispatch(self, node: Node) -> T:
        match node:
            case Literal():
                return self.visit_literal(node)
            case Symbol():
                return self.visit_symbol(node)
            case Call():
                return self.visit_call(node)
            case _:
                return self.visit_default(node)


def iter_nodes(root: Node) -> Iterator[Node]:
    """Yield every node of the tree in pre-order.

    Uses an explicit stack, so arbitrarily deep trees do not hit the
    interpreter's recursion limit.
    """
    stack: list[Node] = [root]
    while stack:
        node = stack.pop()
        yield node
        if isinstance(node, Call):
            stack.extend(reversed(node.children))
