"""
CMA Python SDK - Client library for a content-management REST API.

This SDK wraps raw API responses into plain-data entities with methods:
- Entity wrappers per type (assets, entries, content types, webhooks, ...)
- Collections with pagination metadata
- Asset processing with bounded polling
- CmaClient for fetching and creating entities by type name

Requests never go to the network directly. Every entity closes over a
dispatcher, an async callable taking an ActionDescriptor and returning
raw JSON, supplied by the caller.

Example:
    >>> from cma_sdk import CmaClient
    >>>
    >>> client = CmaClient(dispatch)
    >>> asset = await client.get("Asset", space_id="s1", environment_id="master", asset_id="a1")
    >>> asset.fields["title"]["en-US"] = "New title"
    >>> asset = await asset.update()
    >>> asset = await asset.process_for_all_locales()
    >>> asset = await asset.publish()

Invariants:
    - sys is read-only on wrapped entities
    - sys.version only changes through server responses
    - Server round-trips return new entities

Version: 1.0.0
"""

__version__ = "1.0.0"

from .client import CmaClient
from .config import ClientSettings, get_settings
from .dispatch import VERSION_HEADER, ActionDescriptor, Dispatch
from .entities import (
    wrap_api_key,
    wrap_api_key_collection,
    wrap_app_definition,
    wrap_app_definition_collection,
    wrap_app_installation,
    wrap_app_installation_collection,
    wrap_asset,
    wrap_asset_collection,
    wrap_content_type,
    wrap_content_type_collection,
    wrap_editor_interface,
    wrap_editor_interface_collection,
    wrap_entry,
    wrap_entry_collection,
    wrap_environment,
    wrap_environment_collection,
    wrap_locale,
    wrap_locale_collection,
    wrap_role,
    wrap_role_collection,
    wrap_snapshot,
    wrap_snapshot_collection,
    wrap_space,
    wrap_space_collection,
    wrap_space_membership,
    wrap_space_membership_collection,
    wrap_upload,
    wrap_upload_collection,
    wrap_webhook,
    wrap_webhook_collection,
)
from .errors import (
    AssetProcessingTimeoutError,
    CmaError,
    DispatchError,
    MalformedEntityError,
    NotFoundError,
    ValidationError,
    VersionMismatchError,
)
from .memory import InMemoryDispatcher
from .methods import enhance_with_methods, method_table
from .registry import (
    DuplicateRegistrationError,
    KindRegistry,
    get_registry,
)
from .snapshot import freeze, to_plain
from .wrapper import Collection, Entity, EntityKind, wrap_collection, wrap_entity

__all__ = [
    # Version
    "__version__",
    # Wrapping
    "Entity",
    "EntityKind",
    "Collection",
    "wrap_entity",
    "wrap_collection",
    "enhance_with_methods",
    "method_table",
    "freeze",
    "to_plain",
    # Dispatch
    "ActionDescriptor",
    "Dispatch",
    "VERSION_HEADER",
    "InMemoryDispatcher",
    # Client
    "CmaClient",
    "ClientSettings",
    "get_settings",
    # Registry
    "KindRegistry",
    "get_registry",
    "DuplicateRegistrationError",
    # Entity wrappers
    "wrap_api_key",
    "wrap_api_key_collection",
    "wrap_app_definition",
    "wrap_app_definition_collection",
    "wrap_app_installation",
    "wrap_app_installation_collection",
    "wrap_asset",
    "wrap_asset_collection",
    "wrap_content_type",
    "wrap_content_type_collection",
    "wrap_editor_interface",
    "wrap_editor_interface_collection",
    "wrap_entry",
    "wrap_entry_collection",
    "wrap_environment",
    "wrap_environment_collection",
    "wrap_locale",
    "wrap_locale_collection",
    "wrap_role",
    "wrap_role_collection",
    "wrap_snapshot",
    "wrap_snapshot_collection",
    "wrap_space",
    "wrap_space_collection",
    "wrap_space_membership",
    "wrap_space_membership_collection",
    "wrap_upload",
    "wrap_upload_collection",
    "wrap_webhook",
    "wrap_webhook_collection",
    # Errors
    "CmaError",
    "MalformedEntityError",
    "DispatchError",
    "NotFoundError",
    "VersionMismatchError",
    "AssetProcessingTimeoutError",
    "ValidationError",
]
