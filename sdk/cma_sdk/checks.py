"""
Publishing state derived from an entity's sys block.

Nothing here is stored on the server as a flag:
- published: sys.publishedVersion is set
- updated: published, and sys.version > sys.publishedVersion + 1
- draft: no sys.publishedVersion
- archived: sys.archivedVersion is set
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any


def _sys(data: Mapping[str, Any]) -> Mapping[str, Any]:
    return data.get("sys") or {}


def is_published(data: Mapping[str, Any]) -> bool:
    return _sys(data).get("publishedVersion") is not None


def is_updated(data: Mapping[str, Any]) -> bool:
    # Publishing bumps version once, so an untouched published entity
    # sits at publishedVersion + 1.
    sys = _sys(data)
    published_version = sys.get("publishedVersion")
    if published_version is None:
        return False
    return sys.get("version", 0) > published_version + 1


def is_draft(data: Mapping[str, Any]) -> bool:
    return _sys(data).get("publishedVersion") is None


def is_archived(data: Mapping[str, Any]) -> bool:
    return _sys(data).get("archivedVersion") is not None
