"""Renderer registry: the operator/function layer of every scope chain.

The registry maps call-head names to renderers. The engine never hardcodes
which names exist; notations ship a default registry and callers may
extend or replace it.

Thread Safety:
RendererRegistry is immutable after creation. Safe to share.
Use RendererRegistryBuilder for mutable construction.

Example:
    >>> builder = RendererRegistryBuilder()
    >>> builder.container("paragraph", tag="p").leaf("br")
    >>> builder.operator("add", binary(" + "))
    >>> registry = builder.build()
    >>> "paragraph" in registry
    True

"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from types import MappingProxyType

from plumas.generators import (
    Renderer,
    Template,
    make_container_renderer,
    make_leaf_renderer,
    make_operator,
)
from plumas.utils.logger import get_logger

logger = get_logger(__name__)


class RendererRegistry:
    """Immutable registry of renderers, keyed by call-head name.

    Thread Safety:
        Immutable after creation. Safe to share across threads.

    """

    __slots__ = ("_by_name",)

    def __init__(self, by_name: Mapping[str, Renderer]) -> None:
        """Initialize registry with a pre-built mapping.

        Use RendererRegistryBuilder to create instances.
        """
        self._by_name = MappingProxyType(dict(by_name))

    def get(self, name: str) -> Renderer | None:
        """Get renderer for a call-head name, or None if unregistered."""
        return self._by_name.get(name)

    def has(self, name: str) -> bool:
        """Check if a name is registered."""
        return name in self._by_name

    @property
    def names(self) -> frozenset[str]:
        """Get all registered names."""
        return frozenset(self._by_name)

    def as_mapping(self) -> Mapping[str, Renderer]:
        """Read-only view of the registry, used as a scope layer."""
        return self._by_name

    def __contains__(self, name: str) -> bool:
        """Support 'name in registry' syntax."""
        return self.has(name)

    def __len__(self) -> int:
        """Number of registered names."""
        return len(self._by_name)


class RendererRegistryBuilder:
    """Mutable builder for RendererRegistry.

    Example:
            >>> builder = RendererRegistryBuilder()
            >>> builder.container("div").leaf("img")
            >>> registry = builder.build()

    """

    __slots__ = ("_by_name",)

    def __init__(self, registry: RendererRegistry | None = None) -> None:
        """Initialize builder, optionally seeded from an existing registry."""
        self._by_name: dict[str, Renderer] = dict(registry.as_mapping()) if registry else {}

    def register(
        self,
        name: str,
        renderer: Renderer,
        *,
        replace: bool = False,
    ) -> RendererRegistryBuilder:
        """Register a renderer under a call-head name.

        Args:
            name: Call-head name (a plain identifier)
            renderer: Renderer to invoke for that head
            replace: Allow overriding an existing registration

        Returns:
            Self for chaining

        Raises:
            ValueError: If the name is not an identifier, or is already
                registered and replace is False
        """
        if not name.isidentifier():
            msg = f"Renderer name must be an identifier, got {name!r}"
            raise ValueError(msg)
        if not callable(renderer):
            msg = f"Renderer for {name!r} is not callable"
            raise TypeError(msg)
        if name in self._by_name and not replace:
            msg = f"Renderer '{name}' already registered"
            raise ValueError(msg)
        self._by_name[name] = renderer
        return self

    def container(
        self, name: str, tag: str | None = None, *, replace: bool = False
    ) -> RendererRegistryBuilder:
        """Register a container element; the tag defaults to the name."""
        return self.register(name, make_container_renderer(tag or name), replace=replace)

    def leaf(
        self,
        name: str,
        tag: str | None = None,
        *,
        self_closing: bool = True,
        replace: bool = False,
    ) -> RendererRegistryBuilder:
        """Register a void element; the tag defaults to the name."""
        renderer = make_leaf_renderer(tag or name, self_closing=self_closing)
        return self.register(name, renderer, replace=replace)

    def operator(
        self, name: str, template: Template, *, replace: bool = False
    ) -> RendererRegistryBuilder:
        """Register a positional math operator."""
        return self.register(name, make_operator(name, template), replace=replace)

    def register_all(
        self, renderers: Mapping[str, Renderer] | Iterable[tuple[str, Renderer]]
    ) -> RendererRegistryBuilder:
        """Register multiple renderers."""
        items = renderers.items() if isinstance(renderers, Mapping) else renderers
        for name, renderer in items:
            self.register(name, renderer)
        return self

    def build(self) -> RendererRegistry:
        """Build immutable registry from registered renderers."""
        logger.debug("Built renderer registry with %d names", len(self._by_name))
        return RendererRegistry(self._by_name)

    def __contains__(self, name: str) -> bool:
        return name in self._by_name

    def __len__(self) -> int:
        """Number of registered names."""
        return len(self._by_name)
