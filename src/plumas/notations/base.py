"""Notation: everything the engine needs to know about a target language.

A notation bundles the escaper, the operator/function registry, the
known-symbol table and the fallback factory for unregistered call heads.
All of it is immutable configuration, shared by every render.

Example:
    from plumas.notations import Notation

    def render_with(notation: Notation, tree: Node) -> str:
        scope = notation.scope_for(tree)
        return str(Interpreter(notation).render(tree, scope))

"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from types import MappingProxyType

from plumas.config import RenderConfig
from plumas.generators import Renderer
from plumas.nodes import Node
from plumas.registry import RendererRegistry
from plumas.safe import Escaper, SafeFragment
from plumas.scope import ScopeChain, build_scope

FallbackFactory = Callable[[str, RenderConfig], Renderer]


def known_symbols(table: Mapping[str, str]) -> Mapping[str, SafeFragment]:
    """Freeze a symbol table of trusted replacement text.

    Replacement text is configuration, written in the target notation
    already (``\\pi``, ``&nbsp;``), so it is marked safe as-is.
    """
    return MappingProxyType({name: SafeFragment(text) for name, text in table.items()})


@dataclass(frozen=True, slots=True)
class Notation:
    """Immutable description of a target notation.

    Attributes:
        name: Short label ("html", "latex")
        escaper: Escapes raw text for this notation
        operators: Registry of call-head renderers
        symbols: Known-symbol translations
        fallback: Builds the renderer for an unregistered call head

    """

    name: str
    escaper: Escaper
    operators: RendererRegistry
    symbols: Mapping[str, SafeFragment]
    fallback: FallbackFactory

    def scope_for(self, root: Node) -> ScopeChain:
        """Build the scope chain for one expression in this notation."""
        return build_scope(
            root,
            operators=self.operators.as_mapping(),
            symbols=self.symbols,
            escaper=self.escaper,
        )

    def make_fallback(self, head: str, config: RenderConfig) -> Renderer:
        """Renderer for a call head missing from the registry."""
        return self.fallback(head, config)
