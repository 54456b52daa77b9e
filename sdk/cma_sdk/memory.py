"""
In-memory dispatcher for testing.

This module provides a dispatcher that keeps entities in dicts, for:
- Unit tests
- Integration tests
- Local development without a server

Invariants:
    - All data is lost when the dispatcher is dropped
    - Every successful write bumps sys.version by exactly one
    - Writes carrying a stale version header fail with VersionMismatchError
    - Uploaded files get a url only after a number of "get" checks

How to change safely:
    - This is test-only code, changes don't affect the wrappers
    - Keep the dispatcher contract: one ActionDescriptor in, raw JSON out
    - Add features to help with testing scenarios
"""

from __future__ import annotations

import asyncio
import copy
import logging
import uuid
from collections import defaultdict
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional, Tuple

from .dispatch import VERSION_HEADER, ActionDescriptor
from .errors import DispatchError, NotFoundError, VersionMismatchError
from .registry import get_registry
from .wrapper import EntityKind

logger = logging.getLogger(__name__)

_LINKS = (
    ("space_id", "space", "Space"),
    ("environment_id", "environment", "Environment"),
    ("organization_id", "organization", "Organization"),
)


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def _link(link_type: str, link_id: str) -> Dict[str, Any]:
    return {"sys": {"type": "Link", "linkType": link_type, "id": link_id}}


class InMemoryDispatcher:
    """In-memory implementation of the dispatcher contract.

    Supports get, getMany, create, createWithId, update, delete, publish,
    unpublish, archive, unarchive, processForLocale, processForAllLocales,
    entry snapshots (getManyForEntry, getForEntry) and getInstallationsForOrg.

    Attributes:
        processing_checks: Number of "get" calls of the asset after a
            processing trigger before its files carry a url. A get does not
            say which locale it polls, so every get counts down every pending
            locale: concurrent polls of N locales share one countdown and
            finish after processing_checks gets in total, not per locale.
        calls: Every descriptor received, in order

    Example:
        >>> dispatcher = InMemoryDispatcher()
        >>> client = CmaClient(dispatcher)
        >>> entry = await client.create("Entry", {"fields": {}}, space_id="s1", environment_id="master")
        >>> entry = await entry.publish()
    """

    def __init__(self, processing_checks: int = 1) -> None:
        """Initialize in-memory dispatcher.

        Args:
            processing_checks: Gets of the asset needed before its processing
                files get a url, shared across locales
        """
        self.processing_checks = processing_checks
        self.calls: List[ActionDescriptor] = []
        self._entities: Dict[Tuple[str, str], Dict[str, Any]] = {}
        self._processing: Dict[Tuple[str, str], Dict[str, int]] = defaultdict(dict)
        self._snapshots: Dict[str, List[Dict[str, Any]]] = defaultdict(list)
        self._lock = asyncio.Lock()
        self._handlers: Dict[str, Callable[[ActionDescriptor], Any]] = {
            "get": self._get,
            "getMany": self._get_many,
            "create": self._create,
            "createWithId": self._create,
            "update": self._update,
            "delete": self._delete,
            "publish": self._publish,
            "unpublish": self._unpublish,
            "archive": self._archive,
            "unarchive": self._unarchive,
            "processForLocale": self._process,
            "processForAllLocales": self._process,
            "getManyForEntry": self._get_snapshots,
            "getForEntry": self._get_snapshot,
            "getInstallationsForOrg": self._get_installations_for_org,
        }

    async def __call__(self, action: ActionDescriptor) -> Any:
        """Handle one action descriptor."""
        self.calls.append(action)
        handler = self._handlers.get(action.action)
        if handler is None:
            raise DispatchError(
                f"Unsupported action '{action.action}'",
                code="UNSUPPORTED_ACTION",
                action=action.action,
                entity_type=action.entity_type,
            )
        async with self._lock:
            result = handler(action)
        logger.debug(f"Handled {action.entity_type}.{action.action}")
        return copy.deepcopy(result)

    # =========================================================================
    # Testing helpers
    # =========================================================================

    def seed(self, raw: Dict[str, Any]) -> Dict[str, Any]:
        """Store raw entity data as if it came from the server."""
        entity_type = raw["sys"]["type"]
        key = (entity_type, self._id_of(entity_type, raw["sys"]))
        self._entities[key] = copy.deepcopy(raw)
        return copy.deepcopy(raw)

    def stored(self, entity_type: str, entity_id: str) -> Optional[Dict[str, Any]]:
        """Get a copy of the stored data for an entity, or None."""
        raw = self._entities.get((entity_type, entity_id))
        return copy.deepcopy(raw) if raw is not None else None

    def actions(self) -> List[str]:
        """Action names received so far, in order."""
        return [call.action for call in self.calls]

    # =========================================================================
    # Internals
    # =========================================================================

    def _kind(self, entity_type: str) -> EntityKind:
        kind = get_registry().get(entity_type)
        if kind is None or kind.id_param is None:
            raise DispatchError(
                f"Unknown entity type '{entity_type}'",
                code="UNKNOWN_ENTITY_TYPE",
                entity_type=entity_type,
            )
        return kind

    def _id_of(self, entity_type: str, sys: Dict[str, Any]) -> str:
        kind = self._kind(entity_type)
        return kind.params(sys)[kind.id_param]

    def _lookup(self, action: ActionDescriptor) -> Tuple[Tuple[str, str], Dict[str, Any]]:
        kind = self._kind(action.entity_type)
        entity_id = action.params.get(kind.id_param)
        key = (action.entity_type, entity_id)
        raw = self._entities.get(key)
        if raw is None:
            raise NotFoundError(
                "The resource could not be found",
                entity_type=action.entity_type,
                entity_id=str(entity_id),
                action=action.action,
            )
        return key, raw

    def _check_version(self, action: ActionDescriptor, raw: Dict[str, Any]) -> None:
        sent = (action.headers or {}).get(VERSION_HEADER)
        if sent is None:
            return
        current = raw["sys"]["version"]
        if int(sent) != current:
            raise VersionMismatchError(
                f"Version mismatch for {action.entity_type} '{raw['sys']['id']}': "
                f"sent {sent}, current is {current}",
                entity_type=action.entity_type,
                entity_id=raw["sys"]["id"],
                expected_version=int(sent),
                actual_version=current,
                action=action.action,
            )

    def _bump(self, raw: Dict[str, Any]) -> None:
        raw["sys"]["version"] += 1
        raw["sys"]["updatedAt"] = _now()

    def _matches(self, raw: Dict[str, Any], params: Dict[str, Any]) -> bool:
        for param, link, _ in _LINKS:
            if param not in params:
                continue
            target = raw["sys"].get(link) or {}
            if (target.get("sys") or {}).get("id") != params[param]:
                return False
        return True

    # =========================================================================
    # Handlers
    # =========================================================================

    def _get(self, action: ActionDescriptor) -> Dict[str, Any]:
        key, raw = self._lookup(action)
        pending = self._processing.get(key)
        if pending:
            for locale in list(pending):
                pending[locale] -= 1
                if pending[locale] <= 0:
                    file = raw["fields"]["file"][locale]
                    file["url"] = file.pop("upload", None) or f"//assets.example/{key[1]}/{locale}"
                    del pending[locale]
        return raw

    def _get_many(self, action: ActionDescriptor) -> Dict[str, Any]:
        query = action.params.get("query") or {}
        skip = int(query.get("skip", 0))
        limit = int(query.get("limit", 100))
        items = [
            raw
            for (entity_type, _), raw in self._entities.items()
            if entity_type == action.entity_type and self._matches(raw, action.params)
        ]
        return {
            "sys": {"type": "Array"},
            "total": len(items),
            "skip": skip,
            "limit": limit,
            "items": items[skip : skip + limit],
        }

    def _create(self, action: ActionDescriptor) -> Dict[str, Any]:
        kind = self._kind(action.entity_type)
        entity_id = action.params.get(kind.id_param) or uuid.uuid4().hex
        key = (action.entity_type, entity_id)
        if key in self._entities:
            raise DispatchError(
                f"{action.entity_type} '{entity_id}' already exists",
                code="ALREADY_EXISTS",
                action=action.action,
                entity_type=action.entity_type,
            )

        now = _now()
        sys: Dict[str, Any] = {
            "id": entity_id,
            "type": action.entity_type,
            "version": 1,
            "createdAt": now,
            "updatedAt": now,
        }
        for param, link, link_type in _LINKS:
            if param in action.params and param != kind.id_param:
                sys[link] = _link(link_type, action.params[param])
        if action.entity_type == "AppInstallation":
            sys["appDefinition"] = _link("AppDefinition", entity_id)

        raw = {k: v for k, v in (action.payload or {}).items() if k != "sys"}
        raw["sys"] = sys
        self._entities[key] = raw
        return raw

    def _update(self, action: ActionDescriptor) -> Dict[str, Any]:
        key, raw = self._lookup(action)
        self._check_version(action, raw)
        sys = raw["sys"]
        updated = {k: v for k, v in (action.payload or {}).items() if k != "sys"}
        updated["sys"] = sys
        self._bump(updated)
        self._entities[key] = updated
        return updated

    def _delete(self, action: ActionDescriptor) -> None:
        key, _ = self._lookup(action)
        del self._entities[key]
        self._processing.pop(key, None)
        return None

    def _publish(self, action: ActionDescriptor) -> Dict[str, Any]:
        _, raw = self._lookup(action)
        self._check_version(action, raw)
        raw["sys"]["publishedVersion"] = raw["sys"]["version"]
        raw["sys"]["publishedAt"] = _now()
        self._bump(raw)
        if action.entity_type == "Entry":
            self._record_snapshot(raw)
        return raw

    def _unpublish(self, action: ActionDescriptor) -> Dict[str, Any]:
        _, raw = self._lookup(action)
        raw["sys"].pop("publishedVersion", None)
        raw["sys"].pop("publishedAt", None)
        self._bump(raw)
        return raw

    def _archive(self, action: ActionDescriptor) -> Dict[str, Any]:
        _, raw = self._lookup(action)
        raw["sys"]["archivedVersion"] = raw["sys"]["version"]
        raw["sys"]["archivedAt"] = _now()
        self._bump(raw)
        return raw

    def _unarchive(self, action: ActionDescriptor) -> Dict[str, Any]:
        _, raw = self._lookup(action)
        raw["sys"].pop("archivedVersion", None)
        raw["sys"].pop("archivedAt", None)
        self._bump(raw)
        return raw

    def _process(self, action: ActionDescriptor) -> Dict[str, Any]:
        key, raw = self._lookup(action)
        self._check_version(action, raw)
        if "locales" in action.params:
            locales = list(action.params["locales"])
        else:
            locales = [action.params["locale"]]

        files = (raw.get("fields") or {}).get("file") or {}
        for locale in locales:
            if locale not in files:
                raise DispatchError(
                    f"Asset '{key[1]}' has no file for locale '{locale}'",
                    code="UNPROCESSABLE",
                    action=action.action,
                    entity_type=action.entity_type,
                )
            self._processing[key][locale] = self.processing_checks
        return raw

    def _record_snapshot(self, raw: Dict[str, Any]) -> None:
        entry_id = raw["sys"]["id"]
        snapshot = {
            "sys": {
                "id": uuid.uuid4().hex,
                "type": "Snapshot",
                "snapshotType": "publish",
                "snapshotEntityType": "Entry",
                "createdAt": _now(),
            },
            "snapshot": copy.deepcopy(raw),
        }
        self._snapshots[entry_id].append(snapshot)

    def _get_snapshots(self, action: ActionDescriptor) -> Dict[str, Any]:
        items = self._snapshots.get(action.params.get("entry_id"), [])
        return {
            "sys": {"type": "Array"},
            "total": len(items),
            "skip": 0,
            "limit": len(items),
            "items": items,
        }

    def _get_snapshot(self, action: ActionDescriptor) -> Dict[str, Any]:
        entry_id = action.params.get("entry_id")
        snapshot_id = action.params.get("snapshot_id")
        for snapshot in self._snapshots.get(entry_id, []):
            if snapshot["sys"]["id"] == snapshot_id:
                return snapshot
        raise NotFoundError(
            "The resource could not be found",
            entity_type="Snapshot",
            entity_id=str(snapshot_id),
            action=action.action,
        )

    def _get_installations_for_org(self, action: ActionDescriptor) -> Dict[str, Any]:
        app_definition_id = action.params.get("app_definition_id")
        items = [
            raw
            for (entity_type, entity_id), raw in self._entities.items()
            if entity_type == "AppInstallation" and entity_id == app_definition_id
        ]
        return {
            "sys": {"type": "Array"},
            "total": len(items),
            "skip": 0,
            "limit": len(items),
            "items": items,
        }
