"""
Entity kind registry for the CMA SDK.

Maps entity type names ("Asset", "Entry", ...) to their EntityKind so
that generic code such as CmaClient can wrap any response by type name.

The default registry is filled with the built-in kinds on first use.

Example:
    >>> from cma_sdk import get_registry
    >>>
    >>> kind = get_registry().get("Asset")
    >>> kind.id_param
    'asset_id'
"""

from __future__ import annotations

import threading
from collections.abc import Iterator

from .wrapper import EntityKind

# Global registry
_global_registry: KindRegistry | None = None
_registry_lock = threading.Lock()


class DuplicateRegistrationError(Exception):
    """An entity kind with this type name is already registered."""

    pass


class KindRegistry:
    """Registry of entity kinds by type name.

    Example:
        >>> registry = KindRegistry()
        >>> registry.register(ASSET)
        >>> registry.get("Asset") is ASSET
        True
    """

    def __init__(self) -> None:
        """Initialize empty registry."""
        self._kinds: dict[str, EntityKind] = {}
        self._lock = threading.Lock()

    def register(self, kind: EntityKind) -> None:
        """Register an entity kind.

        Args:
            kind: EntityKind to register

        Raises:
            DuplicateRegistrationError: If the type name is already registered
        """
        with self._lock:
            if kind.entity_type in self._kinds:
                raise DuplicateRegistrationError(
                    f"entity type '{kind.entity_type}' already registered"
                )
            self._kinds[kind.entity_type] = kind

    def get(self, entity_type: str) -> EntityKind | None:
        """Get an entity kind by type name."""
        return self._kinds.get(entity_type)

    def __getitem__(self, entity_type: str) -> EntityKind:
        return self._kinds[entity_type]

    def names(self) -> list[str]:
        """Registered type names, sorted."""
        return sorted(self._kinds)

    def __contains__(self, entity_type: object) -> bool:
        return entity_type in self._kinds

    def __iter__(self) -> Iterator[EntityKind]:
        yield from self._kinds.values()

    def __len__(self) -> int:
        return len(self._kinds)


def get_registry() -> KindRegistry:
    """Get the global registry, filled with the built-in kinds."""
    global _global_registry
    with _registry_lock:
        if _global_registry is None:
            from .entities import BUILTIN_KINDS

            registry = KindRegistry()
            for kind in BUILTIN_KINDS:
                registry.register(kind)
            _global_registry = registry
        return _global_registry


def reset_registry() -> None:
    """Reset the global registry (for testing only)."""
    global _global_registry
    with _registry_lock:
        _global_registry = None
