"""
Snapshots: read-only saved versions of an entry.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from ..dispatch import Dispatch
from ..wrapper import Entity, EntityKind, wrap_collection, wrap_entity
from .base import ENVIRONMENT_PARAMS


def _params(sys: Mapping[str, Any]) -> dict[str, Any]:
    return {"snapshot_id": sys["id"]}


SNAPSHOT = EntityKind(
    entity_type="Snapshot",
    params=_params,
    required_params=(*ENVIRONMENT_PARAMS, "entry_id"),
    id_param="snapshot_id",
)


def wrap_snapshot(dispatch: Dispatch, data: Any) -> Entity:
    return wrap_entity(SNAPSHOT, dispatch, data)


wrap_snapshot_collection = wrap_collection(wrap_snapshot)
