"""
Content types: the field definitions entries conform to.

Content types are published but never archived. Their ``fields`` is a
list of field definitions, not a locale-indexed mapping.
"""

from __future__ import annotations

from typing import Any

from ..dispatch import ActionDescriptor, Dispatch
from ..methods import CRUD_METHODS, PUBLISH_METHODS, method_table
from ..wrapper import Entity, EntityKind, wrap_collection, wrap_entity
from .base import ENVIRONMENT_PARAMS, environment_scoped
from .editor_interface import wrap_editor_interface


async def get_editor_interface(dispatch: Dispatch, entity: Entity) -> Entity:
    """Get the editor interface of this content type."""
    data = await dispatch(
        ActionDescriptor(
            entity_type="EditorInterface",
            action="get",
            params=entity.params(),
        )
    )
    return wrap_editor_interface(dispatch, data)


CONTENT_TYPE = EntityKind(
    entity_type="ContentType",
    params=environment_scoped("content_type_id"),
    methods=method_table(
        CRUD_METHODS,
        PUBLISH_METHODS,
        get_editor_interface=get_editor_interface,
    ),
    required_params=ENVIRONMENT_PARAMS,
    id_param="content_type_id",
)


def wrap_content_type(dispatch: Dispatch, data: Any) -> Entity:
    """Wrap raw content type data."""
    return wrap_entity(CONTENT_TYPE, dispatch, data)


wrap_content_type_collection = wrap_collection(wrap_content_type)
