"""
Assets: locale-indexed files with title and description.

An asset's file starts out with an ``upload`` url and only carries a
``url`` once processed. See processing.py for the processing poll.

Example:
    >>> asset = wrap_asset(dispatch, raw)
    >>> asset = await asset.process_for_locale("en-US")
    >>> asset = await asset.publish()
"""

from __future__ import annotations

from typing import Any

from ..dispatch import Dispatch
from ..methods import ARCHIVE_METHODS, CRUD_METHODS, PUBLISH_METHODS, method_table
from ..processing import process_for_all_locales, process_for_locale
from ..wrapper import Entity, EntityKind, wrap_collection, wrap_entity
from .base import ENVIRONMENT_PARAMS, environment_scoped

ASSET = EntityKind(
    entity_type="Asset",
    params=environment_scoped("asset_id"),
    methods=method_table(
        CRUD_METHODS,
        PUBLISH_METHODS,
        ARCHIVE_METHODS,
        process_for_locale=process_for_locale,
        process_for_all_locales=process_for_all_locales,
    ),
    required_params=ENVIRONMENT_PARAMS,
    id_param="asset_id",
)


def wrap_asset(dispatch: Dispatch, data: Any) -> Entity:
    """Wrap raw asset data."""
    return wrap_entity(ASSET, dispatch, data)


wrap_asset_collection = wrap_collection(wrap_asset)
