"""
Webhooks and their call history.

Call details and health are returned as plain data; they are reports,
not entities with their own actions.

Example:
    >>> webhook = wrap_webhook(dispatch, raw)
    >>> calls = await webhook.get_calls()
    >>> health = await webhook.get_health()
"""

from __future__ import annotations

from typing import Any

from ..dispatch import ActionDescriptor, Dispatch
from ..methods import CRUD_METHODS, method_table
from ..snapshot import to_plain
from ..wrapper import Entity, EntityKind, wrap_collection, wrap_entity
from .base import SPACE_PARAMS, space_scoped


async def _report(dispatch: Dispatch, entity: Entity, action: str, **params: Any) -> Any:
    data = await dispatch(
        ActionDescriptor(
            entity_type="Webhook",
            action=action,
            params={**entity.params(), **params},
        )
    )
    return to_plain(data)


async def get_calls(dispatch: Dispatch, entity: Entity) -> Any:
    """Get an overview of recent calls made by this webhook."""
    return await _report(dispatch, entity, "getManyCallDetails")


async def get_call(dispatch: Dispatch, entity: Entity, call_id: str) -> Any:
    """Get request and response details of one webhook call."""
    return await _report(dispatch, entity, "getCallDetails", call_id=call_id)


async def get_health(dispatch: Dispatch, entity: Entity) -> Any:
    """Get the success rate of recent calls."""
    return await _report(dispatch, entity, "getHealthStatus")


WEBHOOK = EntityKind(
    entity_type="Webhook",
    params=space_scoped("webhook_definition_id"),
    methods=method_table(
        CRUD_METHODS,
        get_calls=get_calls,
        get_call=get_call,
        get_health=get_health,
    ),
    required_params=SPACE_PARAMS,
    id_param="webhook_definition_id",
)


def wrap_webhook(dispatch: Dispatch, data: Any) -> Entity:
    """Wrap raw webhook data."""
    return wrap_entity(WEBHOOK, dispatch, data)


wrap_webhook_collection = wrap_collection(wrap_webhook)
