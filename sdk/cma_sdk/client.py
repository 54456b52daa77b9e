"""
CMA client for the Python SDK.

This module provides a small entry point over the wrappers:
- CmaClient: fetch, list, page through and create entities of any kind

It does not talk to the network itself. Every request goes through the
dispatcher it was created with, and every response is wrapped with the
entity kind registered for the requested type.

Example:
    >>> client = CmaClient(dispatch)
    >>> asset = await client.get("Asset", space_id="s1", environment_id="master", asset_id="a1")
    >>> async for entry in client.iterate("Entry", space_id="s1", environment_id="master"):
    ...     print(entry.sys["id"])

Invariants:
    - Identifying params are checked before anything is dispatched
    - Responses are wrapped with the kind registered for the type name
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from functools import partial
from typing import Any

from .config import ClientSettings, get_settings
from .dispatch import ActionDescriptor, Dispatch
from .errors import ValidationError
from .registry import KindRegistry, get_registry
from .validate import require_known, require_params
from .wrapper import Collection, Entity, EntityKind, wrap_collection, wrap_entity

logger = logging.getLogger(__name__)


def _with_id(kind: EntityKind) -> tuple[str, ...]:
    if kind.id_param is None:
        return kind.required_params
    return (*kind.required_params, kind.id_param)


class CmaClient:
    """Entry point for fetching and creating wrapped entities.

    Example:
        >>> client = CmaClient(dispatch)
        >>> page = await client.get_many("ContentType", space_id="s1", environment_id="master")
        >>> [ct.name for ct in page]
    """

    def __init__(
        self,
        dispatch: Dispatch,
        *,
        settings: ClientSettings | None = None,
        registry: KindRegistry | None = None,
    ) -> None:
        """Initialize client.

        Args:
            dispatch: Dispatcher performing the actual requests
            settings: Optional settings (defaults to environment)
            registry: Optional kind registry (defaults to built-in kinds)
        """
        self._dispatch = dispatch
        self.settings = settings or get_settings()
        self.registry = registry or get_registry()

    def _kind(self, entity_type: str) -> EntityKind:
        require_known(entity_type, self.registry.names(), what="entity type")
        return self.registry[entity_type]

    async def get(self, entity_type: str, **params: Any) -> Entity:
        """Get one entity.

        Args:
            entity_type: Type name ("Asset", "Entry", ...)
            **params: Identifying params, including the entity's own id

        Returns:
            Wrapped entity

        Raises:
            ValidationError: If the type is unknown or a param is missing
        """
        kind = self._kind(entity_type)
        require_params(
            params,
            _with_id(kind),
            context=f"getting {entity_type}",
        )

        data = await self._dispatch(
            ActionDescriptor(entity_type=entity_type, action="get", params=params)
        )
        return wrap_entity(kind, self._dispatch, data)

    async def get_many(
        self,
        entity_type: str,
        query: dict[str, Any] | None = None,
        **params: Any,
    ) -> Collection:
        """Get one page of entities.

        Args:
            entity_type: Type name
            query: Optional query (skip, limit, filters)
            **params: Params addressing the collection

        Returns:
            Collection of wrapped entities with pagination metadata
        """
        kind = self._kind(entity_type)
        require_params(params, kind.required_params, context=f"listing {entity_type}")

        data = await self._dispatch(
            ActionDescriptor(
                entity_type=entity_type,
                action="getMany",
                params={**params, "query": dict(query or {})},
            )
        )
        return wrap_collection(partial(wrap_entity, kind))(self._dispatch, data)

    async def iterate(
        self,
        entity_type: str,
        query: dict[str, Any] | None = None,
        page_size: int | None = None,
        **params: Any,
    ) -> AsyncIterator[Entity]:
        """Iterate over every entity of a collection, page by page.

        Args:
            entity_type: Type name
            query: Optional filters; skip and limit are managed here
            page_size: Items per page (defaults to settings.default_page_size)
            **params: Params addressing the collection

        Yields:
            Wrapped entities in server order
        """
        limit = page_size if page_size is not None else self.settings.default_page_size
        if limit < 1:
            raise ValidationError(
                f"page_size must be a positive integer, got {page_size!r}",
                field_name="page_size",
                expected="int >= 1",
            )

        skip = 0
        while True:
            page = await self.get_many(
                entity_type,
                query={**(query or {}), "skip": skip, "limit": limit},
                **params,
            )
            for item in page:
                yield item

            skip += len(page)
            if not page.items or page.total is None or skip >= page.total:
                break
            logger.debug(f"Fetching next {entity_type} page at skip={skip}")

    async def create(
        self,
        entity_type: str,
        data: dict[str, Any],
        entity_id: str | None = None,
        **params: Any,
    ) -> Entity:
        """Create an entity.

        Args:
            entity_type: Type name
            data: Entity data (without sys)
            entity_id: Optional id to create the entity with
            **params: Params addressing the collection

        Returns:
            The created entity, wrapped
        """
        kind = self._kind(entity_type)
        require_params(params, kind.required_params, context=f"creating {entity_type}")

        action = "create"
        if entity_id is not None and kind.id_param:
            action = "createWithId"
            params = {**params, kind.id_param: entity_id}

        created = await self._dispatch(
            ActionDescriptor(
                entity_type=entity_type,
                action=action,
                params=params,
                payload=dict(data),
            )
        )
        return wrap_entity(kind, self._dispatch, created)
