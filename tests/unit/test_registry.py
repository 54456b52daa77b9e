"""
Unit tests for the entity kind registry.

Tests cover:
- Kind registration and lookup
- Duplicate detection
- Built-in kinds in the global registry
"""

import pytest

from cma_sdk.entities import ASSET, BUILTIN_KINDS
from cma_sdk.registry import (
    DuplicateRegistrationError,
    KindRegistry,
    get_registry,
    reset_registry,
)
from cma_sdk.wrapper import EntityKind


class TestKindRegistry:
    """Tests for KindRegistry."""

    def test_register_and_get(self):
        """Registered kinds are found by type name."""
        registry = KindRegistry()

        registry.register(ASSET)

        assert registry.get("Asset") is ASSET
        assert registry["Asset"] is ASSET
        assert "Asset" in registry
        assert len(registry) == 1

    def test_get_unknown(self):
        """Unknown names return None from get and raise from indexing."""
        registry = KindRegistry()

        assert registry.get("Asset") is None
        with pytest.raises(KeyError):
            registry["Asset"]

    def test_duplicate_raises(self):
        """Registering the same type name twice raises error."""
        registry = KindRegistry()
        registry.register(ASSET)
        other = EntityKind(entity_type="Asset", params=lambda sys: {})

        with pytest.raises(DuplicateRegistrationError, match="entity type 'Asset' already registered"):
            registry.register(other)

        assert registry.get("Asset") is ASSET

    def test_names_sorted(self):
        registry = KindRegistry()
        for name in ("Widget", "Asset", "Gadget"):
            registry.register(EntityKind(entity_type=name, params=lambda sys: {}))

        assert registry.names() == ["Asset", "Gadget", "Widget"]
        assert [kind.entity_type for kind in registry] == ["Widget", "Asset", "Gadget"]


class TestGlobalRegistry:
    """Tests for the global registry."""

    def test_builtin_kinds(self):
        """The global registry holds every built-in kind."""
        registry = get_registry()

        assert len(registry) == len(BUILTIN_KINDS) == 15
        assert registry.names() == [
            "ApiKey",
            "AppDefinition",
            "AppInstallation",
            "Asset",
            "ContentType",
            "EditorInterface",
            "Entry",
            "Environment",
            "Locale",
            "Role",
            "Snapshot",
            "Space",
            "SpaceMembership",
            "Upload",
            "Webhook",
        ]

    def test_same_instance(self):
        assert get_registry() is get_registry()

    def test_reset(self):
        """Reset drops custom registrations."""
        get_registry().register(EntityKind(entity_type="Widget", params=lambda sys: {}))

        reset_registry()

        assert "Widget" not in get_registry()
