"""
Entity methods and the method-attachment utility.

A method is a plain function ``fn(dispatch, entity, *args, **kwargs)``.
The entity is passed explicitly and every method starts by taking a plain
snapshot of it, so changes made to the entity after wrapping are what gets
sent.

Method tables are composed from the groups below:
- CRUD_METHODS: update, delete
- PUBLISH_METHODS: publish, unpublish and the draft/published checks
- ARCHIVE_METHODS: archive, unarchive, is_archived

Invariants:
    - Each server method dispatches exactly one action
    - Results are re-wrapped into a new entity; the receiver is untouched
    - Dispatcher errors propagate unchanged
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from dataclasses import replace
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from . import checks
from .dispatch import ActionDescriptor, Dispatch, version_headers

if TYPE_CHECKING:
    from .wrapper import Entity

logger = logging.getLogger(__name__)

Method = Callable[..., Any]


def enhance_with_methods(entity: Entity, methods: Mapping[str, Method]) -> Entity:
    """Attach methods to an entity.

    The entity passed in is not modified; a new one is returned carrying
    its data and both its existing methods and the given ones.

    Args:
        entity: Entity to enhance
        methods: Name -> method function

    Returns:
        New Entity
    """
    merged = {**entity.kind.methods, **methods}
    return entity.with_kind(replace(entity.kind, methods=MappingProxyType(merged)))


def method_table(*groups: Mapping[str, Method], **extra: Method) -> Mapping[str, Method]:
    """Merge method groups into one read-only table."""
    table: dict[str, Method] = {}
    for group in groups:
        table.update(group)
    table.update(extra)
    return MappingProxyType(table)


async def _send(
    dispatch: Dispatch,
    entity: Entity,
    action: str,
    *,
    payload: Any = None,
    headers: dict[str, str] | None = None,
    **extra_params: Any,
) -> Any:
    """Build one action descriptor from the entity's current state and dispatch it."""
    descriptor = ActionDescriptor(
        entity_type=entity.entity_type,
        action=action,
        params={**entity.params(), **extra_params},
        payload=payload,
        headers=headers,
    )
    logger.debug(f"Dispatching {action} for {entity.entity_type} {entity.sys['id']}")
    return await dispatch(descriptor)


async def update(dispatch: Dispatch, entity: Entity) -> Entity:
    """Send the entity's current data to the server.

    Returns:
        The entity as stored by the server
    """
    raw = entity.to_plain()
    data = await _send(
        dispatch,
        entity,
        "update",
        payload=raw,
        headers=version_headers(raw["sys"]),
    )
    return entity.rewrap(data)


async def delete(dispatch: Dispatch, entity: Entity) -> None:
    """Delete the entity on the server.

    The entity must not be used for further server calls afterwards.
    """
    await _send(dispatch, entity, "delete")


async def publish(dispatch: Dispatch, entity: Entity) -> Entity:
    raw = entity.to_plain()
    data = await _send(
        dispatch,
        entity,
        "publish",
        payload=raw,
        headers=version_headers(raw["sys"]),
    )
    return entity.rewrap(data)


async def unpublish(dispatch: Dispatch, entity: Entity) -> Entity:
    data = await _send(dispatch, entity, "unpublish")
    return entity.rewrap(data)


async def archive(dispatch: Dispatch, entity: Entity) -> Entity:
    data = await _send(dispatch, entity, "archive")
    return entity.rewrap(data)


async def unarchive(dispatch: Dispatch, entity: Entity) -> Entity:
    data = await _send(dispatch, entity, "unarchive")
    return entity.rewrap(data)


def is_published(dispatch: Dispatch, entity: Entity) -> bool:
    """Whether the entity is published. It may still have unpublished changes."""
    return checks.is_published(entity.to_plain())


def is_updated(dispatch: Dispatch, entity: Entity) -> bool:
    """Whether the entity was published and has changed since."""
    return checks.is_updated(entity.to_plain())


def is_draft(dispatch: Dispatch, entity: Entity) -> bool:
    """Whether the entity has never been published, or was unpublished."""
    return checks.is_draft(entity.to_plain())


def is_archived(dispatch: Dispatch, entity: Entity) -> bool:
    """Whether the entity is archived and hidden from delivery."""
    return checks.is_archived(entity.to_plain())


CRUD_METHODS: Mapping[str, Method] = MappingProxyType(
    {
        "update": update,
        "delete": delete,
    }
)

PUBLISH_METHODS: Mapping[str, Method] = MappingProxyType(
    {
        "publish": publish,
        "unpublish": unpublish,
        "is_published": is_published,
        "is_updated": is_updated,
        "is_draft": is_draft,
    }
)

ARCHIVE_METHODS: Mapping[str, Method] = MappingProxyType(
    {
        "archive": archive,
        "unarchive": unarchive,
        "is_archived": is_archived,
    }
)
