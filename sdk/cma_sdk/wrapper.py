"""
Generic entity and collection wrappers.

This module provides the machinery shared by every entity kind:
- EntityKind: per-type configuration (type name, identifying params, methods)
- Entity: plain data + frozen sys + bound methods
- Collection: ordered wrapped items plus pagination metadata
- wrap_entity / wrap_collection: build the above from raw server JSON

Example:
    >>> asset = wrap_entity(ASSET, dispatch, raw)
    >>> asset.fields["title"]["en-US"] = "New title"
    >>> asset = await asset.update()

Invariants:
    - Wrapping deep-copies its input and never dispatches
    - sys is read-only once wrapped
    - Server round-trips return a new Entity; the receiver is left as is
"""

from __future__ import annotations

import functools
import json
import logging
from collections.abc import Callable, Iterator, Mapping
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Any

from .dispatch import Dispatch
from .errors import MalformedEntityError
from .methods import Method, enhance_with_methods
from .snapshot import freeze, to_plain, to_plain_object

logger = logging.getLogger(__name__)

_NO_METHODS: Mapping[str, Method] = MappingProxyType({})

_PAGINATION_KEYS = ("total", "skip", "limit")


@dataclass(frozen=True, eq=False)
class EntityKind:
    """Configuration for one entity type.

    Attributes:
        entity_type: Type name used in action descriptors ("Asset", "Entry", ...)
        params: Builds identifying params from a sys block
        methods: Closed table of operations, name -> fn(dispatch, entity, ...)
        required_params: Params a caller must supply to address a collection
        id_param: Param holding this entity's own id
    """

    entity_type: str
    params: Callable[[Mapping[str, Any]], dict[str, Any]]
    methods: Mapping[str, Method] = field(default_factory=lambda: _NO_METHODS)
    required_params: tuple[str, ...] = ()
    id_param: str | None = None

    def bare(self) -> EntityKind:
        """Same kind without any methods attached."""
        return replace(self, methods=_NO_METHODS)


class Entity:
    """A wrapped entity.

    Top-level data keys are reachable as attributes or items and may be
    reassigned freely. sys is exposed only as a read-only view. Names in
    the kind's method table resolve to bound methods taking the entity's
    state at call time.
    """

    __slots__ = ("_kind", "_dispatch", "_sys", "_data")

    def __init__(
        self,
        kind: EntityKind,
        dispatch: Dispatch,
        data: dict[str, Any],
    ) -> None:
        """Initialize from an already validated plain snapshot.

        Args:
            kind: Entity kind configuration
            dispatch: Dispatcher used by every method
            data: Plain snapshot, owned by the new entity from now on
        """
        data = dict(data)
        sys = data.pop("sys")
        object.__setattr__(self, "_kind", kind)
        object.__setattr__(self, "_dispatch", dispatch)
        object.__setattr__(self, "_sys", freeze(sys))
        object.__setattr__(self, "_data", data)

    @property
    def sys(self) -> Mapping[str, Any]:
        """Read-only sys metadata."""
        return self._sys

    @property
    def kind(self) -> EntityKind:
        return self._kind

    @property
    def entity_type(self) -> str:
        return self._kind.entity_type

    def __getattr__(self, name: str) -> Any:
        if name.startswith("_"):
            raise AttributeError(name)
        method = self._kind.methods.get(name)
        if method is not None:
            return functools.partial(method, self._dispatch, self)
        try:
            return self._data[name]
        except KeyError:
            raise AttributeError(
                f"{self._kind.entity_type} has no attribute '{name}'"
            ) from None

    def __setattr__(self, name: str, value: Any) -> None:
        if name == "sys":
            raise AttributeError("'sys' is read-only")
        if name.startswith("_") or name in self._kind.methods:
            raise AttributeError(f"Cannot assign '{name}' on {self._kind.entity_type}")
        self._data[name] = value

    def __delattr__(self, name: str) -> None:
        if name == "sys":
            raise AttributeError("'sys' is read-only")
        try:
            del self._data[name]
        except KeyError:
            raise AttributeError(name) from None

    def __getitem__(self, key: str) -> Any:
        if key == "sys":
            return self._sys
        return self._data[key]

    def __setitem__(self, key: str, value: Any) -> None:
        if key == "sys":
            raise TypeError("'sys' is read-only")
        self._data[key] = value

    def __contains__(self, key: object) -> bool:
        return key == "sys" or key in self._data

    def __dir__(self) -> list[str]:
        return sorted(set(super().__dir__()) | set(self._kind.methods) | set(self._data))

    def get(self, key: str, default: Any = None) -> Any:
        """Get a top-level value (sys included) with a default."""
        if key == "sys":
            return self._sys
        return self._data.get(key, default)

    def keys(self) -> list[str]:
        return ["sys", *self._data]

    def to_plain(self) -> dict[str, Any]:
        """Deep mutable copy of the current state, sys included."""
        plain = {"sys": to_plain(self._sys)}
        plain.update(to_plain(self._data))
        return plain

    def to_json(self, indent: int | None = 2) -> str:
        """Convert to JSON string."""
        return json.dumps(self.to_plain(), indent=indent, sort_keys=True)

    def params(self) -> dict[str, Any]:
        """Identifying params for dispatching actions on this entity."""
        return self._kind.params(self._sys)

    def rewrap(self, raw: Any) -> Entity:
        """Wrap a server response as a new entity of the same kind."""
        return wrap_entity(self._kind, self._dispatch, raw)

    def with_kind(self, kind: EntityKind) -> Entity:
        """Copy of this entity under a different kind configuration."""
        return type(self)(kind, self._dispatch, self.to_plain())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Entity):
            return NotImplemented
        return self.entity_type == other.entity_type and self.to_plain() == other.to_plain()

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return (
            f"<{self._kind.entity_type} id={self._sys.get('id')!r} "
            f"version={self._sys.get('version')!r}>"
        )


def wrap_entity(kind: EntityKind, dispatch: Dispatch, raw: Any) -> Entity:
    """Wrap raw entity data.

    Args:
        kind: Entity kind configuration
        dispatch: Dispatcher the entity's methods will call
        raw: Raw entity data

    Returns:
        A new Entity with the kind's methods attached

    Raises:
        MalformedEntityError: If raw lacks a sys block with id and type
    """
    plain = to_plain_object(raw)
    entity = Entity(kind.bare(), dispatch, plain)
    return enhance_with_methods(entity, kind.methods)


@dataclass(frozen=True)
class Collection:
    """A page of wrapped entities.

    Attributes:
        items: Wrapped entities in server order
        total: Total matching entities on the server
        skip: Offset of this page
        limit: Page size requested
        sys: Read-only sys block (type "Array")
        extra: Any other top-level keys of the response
    """

    items: tuple[Entity, ...]
    total: int | None = None
    skip: int | None = None
    limit: int | None = None
    sys: Mapping[str, Any] = field(default_factory=lambda: freeze({"type": "Array"}))
    extra: Mapping[str, Any] = field(default_factory=lambda: freeze({}))

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self) -> Iterator[Entity]:
        return iter(self.items)

    def __getitem__(self, index: int) -> Entity:
        return self.items[index]

    def to_plain(self) -> dict[str, Any]:
        """Deep mutable copy of the page, items included."""
        plain: dict[str, Any] = {"sys": to_plain(self.sys)}
        for key in _PAGINATION_KEYS:
            value = getattr(self, key)
            if value is not None:
                plain[key] = value
        plain["items"] = [item.to_plain() for item in self.items]
        plain.update(to_plain(self.extra))
        return plain


WrapOne = Callable[[Dispatch, Any], Entity]
WrapMany = Callable[[Dispatch, Any], Collection]


def wrap_collection(wrap_one: WrapOne) -> WrapMany:
    """Build a collection wrapper from a single-entity wrapper.

    Example:
        >>> wrap_asset_collection = wrap_collection(wrap_asset)
        >>> page = wrap_asset_collection(dispatch, raw_page)
    """

    def wrap(dispatch: Dispatch, raw: Any) -> Collection:
        if not isinstance(raw, Mapping) or not isinstance(raw.get("items"), list):
            raise MalformedEntityError(
                "Collection data must be a mapping with an 'items' list",
                missing="items",
            )

        items = tuple(wrap_one(dispatch, item) for item in raw["items"])
        extra = {
            key: value
            for key, value in raw.items()
            if key not in ("sys", "items", *_PAGINATION_KEYS)
        }
        return Collection(
            items=items,
            total=raw.get("total"),
            skip=raw.get("skip"),
            limit=raw.get("limit"),
            sys=freeze(raw.get("sys") or {"type": "Array"}),
            extra=freeze(extra),
        )

    return wrap
