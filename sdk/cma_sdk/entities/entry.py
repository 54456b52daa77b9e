"""
Entries: locale-indexed content conforming to a content type.

Example:
    >>> entry = wrap_entry(dispatch, raw)
    >>> entry.fields["title"]["en-US"] = "Hello"
    >>> entry = await entry.update()
    >>> entry = await entry.publish()
    >>> snapshots = await entry.get_snapshots()
"""

from __future__ import annotations

from typing import Any

from ..dispatch import ActionDescriptor, Dispatch
from ..methods import ARCHIVE_METHODS, CRUD_METHODS, PUBLISH_METHODS, method_table
from ..wrapper import Collection, Entity, EntityKind, wrap_collection, wrap_entity
from .base import ENVIRONMENT_PARAMS, environment_scoped
from .entry_snapshot import wrap_snapshot, wrap_snapshot_collection


async def get_snapshots(
    dispatch: Dispatch,
    entity: Entity,
    query: dict[str, Any] | None = None,
) -> Collection:
    """Get the saved snapshots of this entry.

    Args:
        query: Optional query (skip, limit, ...)

    Returns:
        Collection of snapshots
    """
    data = await dispatch(
        ActionDescriptor(
            entity_type="Snapshot",
            action="getManyForEntry",
            params={**entity.params(), "query": dict(query or {})},
        )
    )
    return wrap_snapshot_collection(dispatch, data)


async def get_snapshot(dispatch: Dispatch, entity: Entity, snapshot_id: str) -> Entity:
    """Get one saved snapshot of this entry."""
    data = await dispatch(
        ActionDescriptor(
            entity_type="Snapshot",
            action="getForEntry",
            params={**entity.params(), "snapshot_id": snapshot_id},
        )
    )
    return wrap_snapshot(dispatch, data)


ENTRY = EntityKind(
    entity_type="Entry",
    params=environment_scoped("entry_id"),
    methods=method_table(
        CRUD_METHODS,
        PUBLISH_METHODS,
        ARCHIVE_METHODS,
        get_snapshots=get_snapshots,
        get_snapshot=get_snapshot,
    ),
    required_params=ENVIRONMENT_PARAMS,
    id_param="entry_id",
)


def wrap_entry(dispatch: Dispatch, data: Any) -> Entity:
    """Wrap raw entry data."""
    return wrap_entity(ENTRY, dispatch, data)


wrap_entry_collection = wrap_collection(wrap_entry)
