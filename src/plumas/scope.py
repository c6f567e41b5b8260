"""Layered name resolution for captured expressions.

A ScopeChain is an ordered list of immutable layers, highest precedence
first:

1. operators  — callable renderers for names with special rules
2. symbols    — known translations for bare identifiers (e.g. pi -> \\pi)
3. ambient    — every symbol of the current expression, mapped to itself

Resolution is asymmetric. A name in call position is looked up among the
callable layers only; a name in symbol position skips them. So in
``sin(sin)`` the head finds the sin operator while the argument falls
through to its ambient identity, and known symbols always win over the
identity default because their layer sits above the ambient one.

Known layers are process-wide configuration handed to build_scope(); the
ambient layer is derived from the expression, so a fresh chain is built for
every render.

Thread Safety:
Layers and chains are immutable. Safe to share across threads.

"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Final

from plumas.nodes import Call, Node, Symbol
from plumas.safe import Escaper, SafeFragment, escape
from plumas.visitor import iter_nodes

if TYPE_CHECKING:
    from plumas.generators import Renderer


class _NotFound(Enum):
    NOT_FOUND = "NOT_FOUND"

    def __repr__(self) -> str:
        return "NOT_FOUND"


# Returned by resolve() when no layer binds a name. Not an error by itself.
NOT_FOUND: Final = _NotFound.NOT_FOUND


@dataclass(frozen=True, slots=True)
class Layer:
    """One immutable lookup layer.

    Attributes:
        name: Layer label used in diagnostics ("operators", "symbols", ...)
        entries: Read-only name -> value mapping
        callable: True when entries are renderers (call-position layer)
    """

    name: str
    entries: Mapping[str, Any]
    callable: bool = False

    @classmethod
    def of(cls, name: str, entries: Mapping[str, Any], *, callable: bool = False) -> Layer:
        """Create a layer over a read-only copy of ``entries``."""
        return cls(name=name, entries=MappingProxyType(dict(entries)), callable=callable)

    def __contains__(self, name: str) -> bool:
        return name in self.entries

    def __len__(self) -> int:
        return len(self.entries)


@dataclass(frozen=True, slots=True)
class ScopeChain:
    """Ordered lookup layers, highest precedence first."""

    layers: tuple[Layer, ...]

    def resolve(self, name: str) -> SafeFragment | _NotFound:
        """Resolve a name in symbol position.

        Walks the non-callable layers top to bottom and returns the first
        binding, or NOT_FOUND.
        """
        for layer in self.layers:
            if not layer.callable and name in layer.entries:
                return layer.entries[name]
        return NOT_FOUND

    def resolve_call(self, name: str) -> Renderer | _NotFound:
        """Resolve a name in call-head position.

        Only callable layers are consulted; a symbol binding never shadows
        an operator. NOT_FOUND means the fallback renderer applies.
        """
        for layer in self.layers:
            if layer.callable and name in layer.entries:
                return layer.entries[name]
        return NOT_FOUND

    def lookup(self, name: str) -> tuple[str, Any] | _NotFound:
        """Full top-down walk ignoring position, for diagnostics.

        Returns:
            (layer name, bound value) of the first layer binding ``name``
        """
        for layer in self.layers:
            if name in layer.entries:
                return layer.name, layer.entries[name]
        return NOT_FOUND

    def layer(self, name: str) -> Layer | None:
        """Return the layer with the given label, if present."""
        for layer in self.layers:
            if layer.name == name:
                return layer
        return None


def collect_symbols(root: Node) -> tuple[str, ...]:
    """Distinct symbol names of the tree, in pre-order of first appearance.

    Call heads are not symbols and are never collected.
    """
    seen: dict[str, None] = {}
    for node in iter_nodes(root):
        if isinstance(node, Symbol):
            seen.setdefault(node.name, None)
    return tuple(seen)


def collect_calls(root: Node) -> tuple[str, ...]:
    """Distinct call heads of the tree, in pre-order of first appearance."""
    seen: dict[str, None] = {}
    for node in iter_nodes(root):
        if isinstance(node, Call):
            seen.setdefault(node.head, None)
    return tuple(seen)


def build_scope(
    root: Node,
    *,
    operators: Mapping[str, Renderer],
    symbols: Mapping[str, SafeFragment],
    escaper: Escaper,
) -> ScopeChain:
    """Build the scope chain for one expression.

    Args:
        root: Expression tree about to be rendered
        operators: Known operator/function renderers (configuration)
        symbols: Known symbol translations (configuration)
        escaper: Escaper of the target notation, applied to ambient names

    Returns:
        ScopeChain of operators, known symbols, and the ambient layer
    """
    ambient = {name: escape(name, escaper) for name in collect_symbols(root)}
    return ScopeChain(
        layers=(
            Layer(name="operators", entries=operators, callable=True),
            Layer(name="symbols", entries=symbols),
            Layer(name="ambient", entries=MappingProxyType(ambient)),
        )
    )
