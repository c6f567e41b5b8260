"""Recursive evaluation of expression trees against a scope chain.

Evaluation rules:

- Literal  -> escaped text of its value
- Symbol   -> scope.resolve(name); the ambient layer guarantees a match
- Call     -> scope.resolve_call(head); render positional children left to
              right, then named values in order, and invoke the renderer.
              Unregistered heads go to the notation's fallback renderer.

Errors raised by renderers are annotated with the location of the call
that triggered them and propagate unchanged; there is no partial output.

Thread Safety:
An Interpreter holds only immutable state. Each render() call keeps its
own depth counter on the Python stack.

"""

from __future__ import annotations

from typing import TYPE_CHECKING

from plumas.config import RenderConfig, get_render_config
from plumas.errors import (
    InvalidAttributeValue,
    MalformedExpression,
    ScopeInvariantError,
    StructuralError,
)
from plumas.nodes import Call, Literal, Node, Symbol
from plumas.safe import Rendered, escape
from plumas.scope import NOT_FOUND, ScopeChain
from plumas.utils.logger import get_logger

if TYPE_CHECKING:
    from plumas.notations import Notation

logger = get_logger(__name__)


class Interpreter:
    """Evaluate expression trees for one notation.

    Usage:
        >>> from plumas.notations import latex_notation
        >>> notation = latex_notation()
        >>> tree = capture("sin(x + pi)")
        >>> scope = notation.scope_for(tree)
        >>> Interpreter(notation).render(tree, scope)
        SafeFragment(text='\\\\sin(x + \\\\pi)')

    """

    __slots__ = ("_notation", "_config")

    def __init__(self, notation: Notation, *, config: RenderConfig | None = None) -> None:
        """Initialize interpreter.

        Args:
            notation: Target notation (escaper and fallback renderer)
            config: Render configuration; defaults to the context's config
                at the time render() is called
        """
        self._notation = notation
        self._config = config

    def render(self, root: Node, scope: ScopeChain) -> Rendered:
        """Render a tree against the scope chain built for it.

        Raises:
            MalformedExpression: If nesting exceeds the configured max depth
            StructuralError: If a renderer rejects its children
            InvalidAttributeValue: If a named value cannot be an attribute
            ScopeInvariantError: If a symbol is missing from the scope
        """
        config = self._config or get_render_config()
        return self._render(root, scope, config, 0)

    def _render(self, node: Node, scope: ScopeChain, config: RenderConfig, depth: int) -> Rendered:
        if depth > config.max_depth:
            msg = f"expression nesting exceeds max depth of {config.max_depth}"
            raise MalformedExpression(msg, node.location)

        match node:
            case Literal(value=value):
                return escape(value, self._notation.escaper)
            case Symbol(name=name):
                resolved = scope.resolve(name)
                if resolved is NOT_FOUND:
                    msg = f"symbol {name!r} is missing from its scope chain"
                    raise ScopeInvariantError(msg, node.location)
                return resolved
            case Call():
                return self._render_call(node, scope, config, depth)
            case _:
                msg = f"unknown node type: {type(node).__name__}"
                raise MalformedExpression(msg, node.location)

    def _render_call(self, node: Call, scope: ScopeChain, config: RenderConfig, depth: int) -> Rendered:
        renderer = scope.resolve_call(node.head)
        if renderer is NOT_FOUND:
            logger.debug("No renderer for %r, using fallback", node.head)
            renderer = self._notation.make_fallback(node.head, config)

        children = tuple(self._render(arg, scope, config, depth + 1) for arg in node.args)
        attributes = {
            name: self._render(value, scope, config, depth + 1) for name, value in node.named
        }

        try:
            return renderer(children, attributes)
        except (StructuralError, InvalidAttributeValue) as exc:
            if exc.location is None:
                exc.location = node.location
            raise
