"""
Locales configured for an environment.
"""

from __future__ import annotations

from typing import Any

from ..dispatch import Dispatch
from ..methods import CRUD_METHODS
from ..wrapper import Entity, EntityKind, wrap_collection, wrap_entity
from .base import ENVIRONMENT_PARAMS, environment_scoped

LOCALE = EntityKind(
    entity_type="Locale",
    params=environment_scoped("locale_id"),
    methods=CRUD_METHODS,
    required_params=ENVIRONMENT_PARAMS,
    id_param="locale_id",
)


def wrap_locale(dispatch: Dispatch, data: Any) -> Entity:
    return wrap_entity(LOCALE, dispatch, data)


wrap_locale_collection = wrap_collection(wrap_locale)
