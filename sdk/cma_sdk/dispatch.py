"""
Dispatcher contract.

The dispatcher is the only boundary to the network. Wrapped entities
never build URLs or headers themselves beyond the version header; they
describe an action and hand it to the dispatcher they were wrapped with.

Example:
    >>> async def dispatch(action: ActionDescriptor) -> dict:
    ...     return await transport.send(action)
    >>>
    >>> asset = wrap_asset(dispatch, raw)
    >>> await asset.publish()
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass, field
from typing import Any

VERSION_HEADER = "X-CMA-Version"


@dataclass(frozen=True)
class ActionDescriptor:
    """One request for the dispatcher.

    Attributes:
        entity_type: Entity kind the action targets ("Asset", "Entry", ...)
        action: Action name ("get", "update", "publish", ...)
        params: Identifying parameters (space_id, environment_id, entity id, ...)
        payload: Request body, if any
        headers: Extra request headers, if any
    """

    entity_type: str
    action: str
    params: dict[str, Any] = field(default_factory=dict)
    payload: Any = None
    headers: dict[str, str] | None = None


Dispatch = Callable[[ActionDescriptor], Awaitable[Any]]


def version_headers(sys: Mapping[str, Any]) -> dict[str, str]:
    """Headers carrying the entity version for optimistic concurrency."""
    version = sys.get("version")
    if version is None:
        return {}
    return {VERSION_HEADER: str(version)}
