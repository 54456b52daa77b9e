"""
Editor interfaces: how a content type's fields are edited.

There is one editor interface per content type; it is addressed by the
content type's id.
"""

from __future__ import annotations

from typing import Any

from ..dispatch import Dispatch
from ..methods import method_table, update
from ..wrapper import Entity, EntityKind, wrap_collection, wrap_entity
from .base import ENVIRONMENT_PARAMS, environment_scoped


def get_control_for_field(
    dispatch: Dispatch, entity: Entity, field_id: str
) -> dict[str, Any] | None:
    """Get the control configured for a field, or None."""
    for control in entity.to_plain().get("controls") or []:
        if control.get("fieldId") == field_id:
            return control
    return None


EDITOR_INTERFACE = EntityKind(
    entity_type="EditorInterface",
    params=environment_scoped("content_type_id", id_link="contentType"),
    methods=method_table(update=update, get_control_for_field=get_control_for_field),
    required_params=ENVIRONMENT_PARAMS,
    id_param="content_type_id",
)


def wrap_editor_interface(dispatch: Dispatch, data: Any) -> Entity:
    return wrap_entity(EDITOR_INTERFACE, dispatch, data)


wrap_editor_interface_collection = wrap_collection(wrap_editor_interface)
