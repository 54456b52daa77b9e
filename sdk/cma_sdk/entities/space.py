"""
Spaces and environments.

A space is the top-level container; environments are branches of a
space's content. Both only support update and delete at this level.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from ..dispatch import Dispatch
from ..methods import CRUD_METHODS
from ..snapshot import link_id
from ..wrapper import Entity, EntityKind, wrap_collection, wrap_entity
from .base import SPACE_PARAMS


def _space_params(sys: Mapping[str, Any]) -> dict[str, Any]:
    return {"space_id": sys["id"]}


def _environment_params(sys: Mapping[str, Any]) -> dict[str, Any]:
    return {"space_id": link_id(sys, "space"), "environment_id": sys["id"]}


SPACE = EntityKind(
    entity_type="Space",
    params=_space_params,
    methods=CRUD_METHODS,
    id_param="space_id",
)

ENVIRONMENT = EntityKind(
    entity_type="Environment",
    params=_environment_params,
    methods=CRUD_METHODS,
    required_params=SPACE_PARAMS,
    id_param="environment_id",
)


def wrap_space(dispatch: Dispatch, data: Any) -> Entity:
    return wrap_entity(SPACE, dispatch, data)


def wrap_environment(dispatch: Dispatch, data: Any) -> Entity:
    return wrap_entity(ENVIRONMENT, dispatch, data)


wrap_space_collection = wrap_collection(wrap_space)
wrap_environment_collection = wrap_collection(wrap_environment)
