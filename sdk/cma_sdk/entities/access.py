"""
Space access: memberships, roles, API keys and uploads.

These live directly in a space. Uploads can only be deleted; memberships,
roles and API keys support update and delete.
"""

from __future__ import annotations

from typing import Any

from ..dispatch import Dispatch
from ..methods import CRUD_METHODS, delete, method_table
from ..wrapper import Entity, EntityKind, wrap_collection, wrap_entity
from .base import SPACE_PARAMS, space_scoped

SPACE_MEMBERSHIP = EntityKind(
    entity_type="SpaceMembership",
    params=space_scoped("space_membership_id"),
    methods=CRUD_METHODS,
    required_params=SPACE_PARAMS,
    id_param="space_membership_id",
)

ROLE = EntityKind(
    entity_type="Role",
    params=space_scoped("role_id"),
    methods=CRUD_METHODS,
    required_params=SPACE_PARAMS,
    id_param="role_id",
)

API_KEY = EntityKind(
    entity_type="ApiKey",
    params=space_scoped("api_key_id"),
    methods=CRUD_METHODS,
    required_params=SPACE_PARAMS,
    id_param="api_key_id",
)

UPLOAD = EntityKind(
    entity_type="Upload",
    params=space_scoped("upload_id"),
    methods=method_table(delete=delete),
    required_params=SPACE_PARAMS,
    id_param="upload_id",
)


def wrap_space_membership(dispatch: Dispatch, data: Any) -> Entity:
    return wrap_entity(SPACE_MEMBERSHIP, dispatch, data)


def wrap_role(dispatch: Dispatch, data: Any) -> Entity:
    return wrap_entity(ROLE, dispatch, data)


def wrap_api_key(dispatch: Dispatch, data: Any) -> Entity:
    return wrap_entity(API_KEY, dispatch, data)


def wrap_upload(dispatch: Dispatch, data: Any) -> Entity:
    return wrap_entity(UPLOAD, dispatch, data)


wrap_space_membership_collection = wrap_collection(wrap_space_membership)
wrap_role_collection = wrap_collection(wrap_role)
wrap_api_key_collection = wrap_collection(wrap_api_key)
wrap_upload_collection = wrap_collection(wrap_upload)
