"""
App definitions and installations.

An app definition belongs to an organization. An app installation puts a
definition into an environment and is addressed by the definition's id.

Example:
    >>> definition = wrap_app_definition(dispatch, raw)
    >>> installations = await definition.get_installations_for_org(
    ...     organization_id="org_1", app_definition_id="app_1"
    ... )
"""

from __future__ import annotations

from typing import Any

from ..dispatch import ActionDescriptor, Dispatch
from ..methods import CRUD_METHODS, method_table
from ..validate import require_params
from ..wrapper import Collection, Entity, EntityKind, wrap_collection, wrap_entity
from .base import ENVIRONMENT_PARAMS, environment_scoped, organization_scoped

_INSTALLATIONS_FOR_ORG_PARAMS = ("organization_id", "app_definition_id")


async def get_installations_for_org(
    dispatch: Dispatch,
    entity: Entity,
    organization_id: str | None = None,
    app_definition_id: str | None = None,
) -> Collection:
    """Get every installation of an app definition across an organization.

    Args:
        organization_id: Organization owning the definition
        app_definition_id: Definition whose installations to list

    Returns:
        Collection of app installations

    Raises:
        ValidationError: If either id is missing
    """
    params = {"organization_id": organization_id, "app_definition_id": app_definition_id}
    require_params(params, _INSTALLATIONS_FOR_ORG_PARAMS, context="get_installations_for_org")

    data = await dispatch(
        ActionDescriptor(
            entity_type="AppDefinition",
            action="getInstallationsForOrg",
            params=params,
        )
    )
    return wrap_app_installation_collection(dispatch, data)


APP_DEFINITION = EntityKind(
    entity_type="AppDefinition",
    params=organization_scoped("app_definition_id"),
    methods=method_table(CRUD_METHODS, get_installations_for_org=get_installations_for_org),
    required_params=("organization_id",),
    id_param="app_definition_id",
)

APP_INSTALLATION = EntityKind(
    entity_type="AppInstallation",
    params=environment_scoped("app_definition_id", id_link="appDefinition"),
    methods=CRUD_METHODS,
    required_params=ENVIRONMENT_PARAMS,
    id_param="app_definition_id",
)


def wrap_app_definition(dispatch: Dispatch, data: Any) -> Entity:
    return wrap_entity(APP_DEFINITION, dispatch, data)


def wrap_app_installation(dispatch: Dispatch, data: Any) -> Entity:
    return wrap_entity(APP_INSTALLATION, dispatch, data)


wrap_app_definition_collection = wrap_collection(wrap_app_definition)
wrap_app_installation_collection = wrap_collection(wrap_app_installation)
