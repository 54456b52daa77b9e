"""
Plain-object snapshots for wrapped entities.

Converts between three shapes of the same JSON data:
- plain: nested dicts and lists, freely mutable, JSON-serializable
- frozen: nested read-only mappings and tuples
- wrapped: an Entity (see wrapper.py)

Invariants:
    - to_plain(freeze(x)) == x for any JSON value x
    - plain copies never share mutable containers with their source
"""

from __future__ import annotations

import copy
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any

from .errors import MalformedEntityError


def freeze(value: Any) -> Any:
    """Return a deep read-only copy of a JSON value."""
    if isinstance(value, Mapping):
        return MappingProxyType({k: freeze(v) for k, v in value.items()})
    if isinstance(value, (list, tuple)):
        return tuple(freeze(v) for v in value)
    return copy.deepcopy(value)


def to_plain(value: Any) -> Any:
    """Return a deep mutable copy of a JSON value, undoing freeze()."""
    if isinstance(value, Mapping):
        return {k: to_plain(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_plain(v) for v in value]
    return copy.deepcopy(value)


def to_plain_object(raw: Any) -> dict[str, Any]:
    """Validate raw entity data and return an isolated plain copy.

    Args:
        raw: Raw entity data as returned by a dispatcher

    Returns:
        Deep copy of the data

    Raises:
        MalformedEntityError: If raw is not a mapping or its sys block lacks id/type
    """
    if not isinstance(raw, Mapping):
        raise MalformedEntityError(
            f"Entity data must be a mapping, got {type(raw).__name__}",
            missing="sys",
        )

    sys = raw.get("sys")
    if not isinstance(sys, Mapping):
        raise MalformedEntityError("Entity data has no 'sys' block", missing="sys")

    for key in ("id", "type"):
        if not sys.get(key):
            raise MalformedEntityError(
                f"Entity 'sys' block is missing '{key}'",
                missing=f"sys.{key}",
            )

    return to_plain(raw)


def link_id(sys: Mapping[str, Any], link: str) -> str:
    """Get the id of a link held in a sys block.

    Example:
        >>> link_id({"space": {"sys": {"type": "Link", "id": "s1"}}}, "space")
        's1'

    Raises:
        MalformedEntityError: If the link is absent
    """
    target = sys.get(link)
    if isinstance(target, Mapping):
        target_sys = target.get("sys")
        if isinstance(target_sys, Mapping) and target_sys.get("id"):
            return target_sys["id"]
    raise MalformedEntityError(
        f"Entity 'sys' block has no '{link}' link",
        missing=f"sys.{link}",
    )
