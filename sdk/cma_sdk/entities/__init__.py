"""
Built-in entity kinds.

Each kind module exposes its EntityKind plus a ``wrap_<kind>`` and
``wrap_<kind>_collection`` pair sharing the generic wrapper.
"""

from .access import (
    API_KEY,
    ROLE,
    SPACE_MEMBERSHIP,
    UPLOAD,
    wrap_api_key,
    wrap_api_key_collection,
    wrap_role,
    wrap_role_collection,
    wrap_space_membership,
    wrap_space_membership_collection,
    wrap_upload,
    wrap_upload_collection,
)
from .app import (
    APP_DEFINITION,
    APP_INSTALLATION,
    wrap_app_definition,
    wrap_app_definition_collection,
    wrap_app_installation,
    wrap_app_installation_collection,
)
from .asset import ASSET, wrap_asset, wrap_asset_collection
from .content_type import CONTENT_TYPE, wrap_content_type, wrap_content_type_collection
from .editor_interface import (
    EDITOR_INTERFACE,
    wrap_editor_interface,
    wrap_editor_interface_collection,
)
from .entry import ENTRY, wrap_entry, wrap_entry_collection
from .entry_snapshot import SNAPSHOT, wrap_snapshot, wrap_snapshot_collection
from .locale import LOCALE, wrap_locale, wrap_locale_collection
from .space import (
    ENVIRONMENT,
    SPACE,
    wrap_environment,
    wrap_environment_collection,
    wrap_space,
    wrap_space_collection,
)
from .webhook import WEBHOOK, wrap_webhook, wrap_webhook_collection

BUILTIN_KINDS = (
    SPACE,
    ENVIRONMENT,
    CONTENT_TYPE,
    EDITOR_INTERFACE,
    ENTRY,
    ASSET,
    SNAPSHOT,
    LOCALE,
    WEBHOOK,
    SPACE_MEMBERSHIP,
    ROLE,
    API_KEY,
    UPLOAD,
    APP_DEFINITION,
    APP_INSTALLATION,
)

__all__ = [
    "BUILTIN_KINDS",
    "API_KEY",
    "APP_DEFINITION",
    "APP_INSTALLATION",
    "ASSET",
    "CONTENT_TYPE",
    "EDITOR_INTERFACE",
    "ENTRY",
    "ENVIRONMENT",
    "LOCALE",
    "ROLE",
    "SNAPSHOT",
    "SPACE",
    "SPACE_MEMBERSHIP",
    "UPLOAD",
    "WEBHOOK",
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
]
