"""
Identifying-param builders shared by entity kinds.

Most entities live in an environment of a space, some directly in a
space, and a few in an organization. The builders below turn an entity's
sys block into the params its actions are addressed with.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any

from ..snapshot import link_id

ParamBuilder = Callable[[Mapping[str, Any]], dict[str, Any]]

SPACE_PARAMS = ("space_id",)
ENVIRONMENT_PARAMS = ("space_id", "environment_id")


def space_scoped(id_param: str) -> ParamBuilder:
    """Params for an entity living directly in a space."""

    def params(sys: Mapping[str, Any]) -> dict[str, Any]:
        return {"space_id": link_id(sys, "space"), id_param: sys["id"]}

    return params


def environment_scoped(id_param: str, id_link: str | None = None) -> ParamBuilder:
    """Params for an entity living in an environment.

    Args:
        id_param: Name of the param holding the entity's own id
        id_link: Take the id from this sys link instead of sys.id
    """

    def params(sys: Mapping[str, Any]) -> dict[str, Any]:
        entity_id = link_id(sys, id_link) if id_link else sys["id"]
        return {
            "space_id": link_id(sys, "space"),
            "environment_id": link_id(sys, "environment"),
            id_param: entity_id,
        }

    return params


def organization_scoped(id_param: str) -> ParamBuilder:
    """Params for an entity owned by an organization."""

    def params(sys: Mapping[str, Any]) -> dict[str, Any]:
        return {"organization_id": link_id(sys, "organization"), id_param: sys["id"]}

    return params
