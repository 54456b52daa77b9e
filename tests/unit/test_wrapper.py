"""
Unit tests for the generic entity and collection wrappers.

Tests cover:
- Round-trip between raw data and wrapped entities
- Isolation from the caller's input
- Read-only sys metadata
- Attribute, item and method access
- Method attachment without mutation
- Collection ordering and pagination metadata
"""

import json
from unittest.mock import AsyncMock

import pytest

from cma_sdk.entities import ASSET, wrap_asset, wrap_asset_collection, wrap_entry
from cma_sdk.errors import MalformedEntityError
from cma_sdk.methods import enhance_with_methods
from cma_sdk.wrapper import Collection, Entity, EntityKind, wrap_collection, wrap_entity


@pytest.fixture
def dispatch():
    """Dispatcher that must not be called while wrapping."""
    return AsyncMock()


class TestWrapEntity:
    """Tests for wrap_entity."""

    def test_round_trip(self, dispatch, asset_data):
        """Wrapping then converting to plain gives back the input."""
        asset = wrap_asset(dispatch, asset_data)

        assert asset.to_plain() == asset_data

    def test_round_trip_entry(self, dispatch, entry_data):
        """Round-trip holds for other kinds too."""
        assert wrap_entry(dispatch, entry_data).to_plain() == entry_data

    def test_no_dispatch_at_wrap_time(self, dispatch, asset_data):
        """Wrapping never calls the dispatcher."""
        wrap_asset(dispatch, asset_data)

        dispatch.assert_not_called()

    def test_input_is_copied(self, dispatch, asset_data):
        """Mutating the original input after wrapping has no effect."""
        asset = wrap_asset(dispatch, asset_data)

        asset_data["fields"]["title"]["en-US"] = "Changed"
        asset_data["sys"]["version"] = 99

        assert asset.fields["title"]["en-US"] == "Playsam Streamliner"
        assert asset.sys["version"] == 1

    def test_to_plain_is_a_copy(self, dispatch, asset_data):
        """Mutating a plain snapshot does not touch the entity."""
        asset = wrap_asset(dispatch, asset_data)

        plain = asset.to_plain()
        plain["fields"]["title"]["en-US"] = "Changed"
        plain["sys"]["id"] = "other"

        assert asset.fields["title"]["en-US"] == "Playsam Streamliner"
        assert asset.sys["id"] == "asset_1"

    def test_malformed_data(self, dispatch):
        """Raw data without sys id is rejected."""
        with pytest.raises(MalformedEntityError):
            wrap_asset(dispatch, {"sys": {"type": "Asset"}, "fields": {}})

    def test_repr(self, dispatch, asset_data):
        """repr names type, id and version."""
        assert repr(wrap_asset(dispatch, asset_data)) == "<Asset id='asset_1' version=1>"

    def test_to_json(self, dispatch, asset_data):
        """to_json serializes the plain snapshot."""
        asset = wrap_asset(dispatch, asset_data)

        assert json.loads(asset.to_json()) == asset_data

    def test_equality(self, dispatch, asset_data):
        """Entities compare by type and data."""
        first = wrap_asset(dispatch, asset_data)
        second = wrap_asset(dispatch, asset_data)

        assert first == second
        assert first is not second

        second.fields["title"]["en-US"] = "Other"
        assert first != second


class TestFrozenSys:
    """Tests for read-only sys metadata."""

    @pytest.fixture
    def asset(self, dispatch, asset_data):
        return wrap_asset(dispatch, asset_data)

    def test_item_assignment_rejected(self, asset):
        """Assigning into sys raises and leaves it unchanged."""
        with pytest.raises(TypeError):
            asset.sys["version"] = 5

        assert asset.sys["version"] == 1

    def test_nested_assignment_rejected(self, asset):
        """Nested sys links are read-only too."""
        with pytest.raises(TypeError):
            asset.sys["space"]["sys"]["id"] = "other"

        assert asset.sys["space"]["sys"]["id"] == "space_1"

    def test_attribute_replacement_rejected(self, asset):
        """sys cannot be replaced as attribute or item."""
        with pytest.raises(AttributeError):
            asset.sys = {"id": "other", "type": "Asset"}
        with pytest.raises(TypeError):
            asset["sys"] = {"id": "other", "type": "Asset"}
        with pytest.raises(AttributeError):
            del asset.sys

        assert asset.sys["id"] == "asset_1"
        assert asset.to_plain()["sys"]["id"] == "asset_1"


class TestEntityAccess:
    """Tests for data and method access."""

    @pytest.fixture
    def asset(self, dispatch, asset_data):
        return wrap_asset(dispatch, asset_data)

    def test_attribute_and_item_access(self, asset):
        """Top-level keys are reachable as attributes and items."""
        assert asset.fields is asset["fields"]
        assert asset.metadata == {"tags": []}
        assert asset.get("missing", "default") == "default"
        assert "fields" in asset
        assert "sys" in asset
        assert asset.keys() == ["sys", "fields", "metadata"]

    def test_fields_are_mutable(self, asset):
        """Fields may be changed in place or replaced."""
        asset.fields["title"]["en-US"] = "New"
        asset.metadata = {"tags": [{"sys": {"id": "t1"}}]}
        asset["extra"] = 1

        plain = asset.to_plain()
        assert plain["fields"]["title"]["en-US"] == "New"
        assert plain["metadata"]["tags"][0]["sys"]["id"] == "t1"
        assert plain["extra"] == 1

    def test_delete_data_key(self, asset):
        """Top-level data keys can be removed."""
        del asset.metadata

        assert "metadata" not in asset.to_plain()

    def test_unknown_attribute(self, asset):
        """Unknown names raise AttributeError."""
        with pytest.raises(AttributeError, match="Asset has no attribute 'nope'"):
            asset.nope

    def test_methods_are_bound(self, asset):
        """Names from the method table resolve to callables."""
        assert callable(asset.publish)
        assert callable(asset.process_for_locale)
        assert "publish" in dir(asset)

    def test_methods_cannot_be_overwritten(self, asset):
        """Method names cannot be assigned."""
        with pytest.raises(AttributeError):
            asset.publish = None

    def test_closed_method_table(self, dispatch, entry_data):
        """Entries have no asset processing methods."""
        entry = wrap_entry(dispatch, entry_data)

        with pytest.raises(AttributeError):
            entry.process_for_locale

    def test_params(self, asset):
        """Identifying params come from sys."""
        assert asset.params() == {
            "space_id": "space_1",
            "environment_id": "master",
            "asset_id": "asset_1",
        }

    def test_kind(self, asset):
        assert asset.entity_type == "Asset"
        assert asset.kind.id_param == "asset_id"


class TestEnhanceWithMethods:
    """Tests for enhance_with_methods."""

    def test_original_not_mutated(self, dispatch, asset_data):
        """The source entity keeps its method table."""
        asset = wrap_asset(dispatch, asset_data)

        enhanced = enhance_with_methods(asset, {"shout": lambda d, e: e.sys["id"].upper()})

        assert enhanced.shout() == "ASSET_1"
        with pytest.raises(AttributeError):
            asset.shout
        assert enhanced is not asset
        assert enhanced.to_plain() == asset.to_plain()

    def test_methods_see_live_state(self, dispatch, asset_data):
        """Methods read the entity's state at call time."""
        asset = enhance_with_methods(
            wrap_asset(dispatch, asset_data),
            {"title": lambda d, e: e.to_plain()["fields"]["title"]["en-US"]},
        )

        asset.fields["title"]["en-US"] = "After wrap"

        assert asset.title() == "After wrap"

    def test_existing_methods_kept(self, dispatch, asset_data):
        """Previously attached methods survive enhancement."""
        enhanced = enhance_with_methods(wrap_asset(dispatch, asset_data), {"extra": lambda d, e: 1})

        assert callable(enhanced.publish)
        assert enhanced.extra() == 1

    def test_generic_kind(self, dispatch):
        """Any kind can be wrapped with a custom table."""
        kind = EntityKind(
            entity_type="Widget",
            params=lambda sys: {"widget_id": sys["id"]},
            methods={"ident": lambda d, e: e.params()},
        )

        widget = wrap_entity(kind, dispatch, {"sys": {"id": "w1", "type": "Widget"}})

        assert isinstance(widget, Entity)
        assert widget.ident() == {"widget_id": "w1"}


class TestWrapCollection:
    """Tests for wrap_collection."""

    def test_preserves_order_and_count(self, dispatch, make_asset_data, make_collection_data):
        """Items are wrapped in server order."""
        raw = make_collection_data(
            [make_asset_data(asset_id=f"asset_{i}") for i in range(5)],
            total=12,
            skip=5,
            limit=5,
        )

        page = wrap_asset_collection(dispatch, raw)

        assert isinstance(page, Collection)
        assert len(page) == 5
        assert [a.sys["id"] for a in page] == [f"asset_{i}" for i in range(5)]
        assert (page.total, page.skip, page.limit) == (12, 5, 5)
        assert page.sys["type"] == "Array"
        assert all(item.entity_type == "Asset" for item in page)

    def test_empty(self, dispatch, make_collection_data):
        """Empty pages are fine."""
        page = wrap_asset_collection(dispatch, make_collection_data([]))

        assert len(page) == 0
        assert page.total == 0

    def test_round_trip(self, dispatch, make_asset_data, make_collection_data):
        """Collections round-trip including extra keys."""
        raw = make_collection_data([make_asset_data()])
        raw["includes"] = {"Asset": []}

        page = wrap_asset_collection(dispatch, raw)

        assert page.to_plain() == raw
        assert page.extra["includes"] == {"Asset": ()}

    def test_items_are_independent(self, dispatch, make_asset_data, make_collection_data):
        """Each item is its own entity."""
        page = wrap_asset_collection(dispatch, make_collection_data([make_asset_data()] * 2))

        page[0].fields["title"]["en-US"] = "Changed"

        assert page[1].fields["title"]["en-US"] == "Playsam Streamliner"

    @pytest.mark.parametrize("raw", [{"total": 0}, {"items": None}, []])
    def test_malformed(self, dispatch, raw):
        """items must be a list."""
        with pytest.raises(MalformedEntityError):
            wrap_asset_collection(dispatch, raw)

    def test_item_errors_propagate(self, dispatch, make_collection_data):
        """A malformed item fails the whole page."""
        with pytest.raises(MalformedEntityError):
            wrap_asset_collection(dispatch, make_collection_data([{"fields": {}}]))

    def test_higher_order(self, dispatch, make_asset_data, make_collection_data):
        """wrap_collection builds a wrapper from any single-entity wrapper."""
        wrap_many = wrap_collection(lambda d, raw: wrap_entity(ASSET, d, raw))

        page = wrap_many(dispatch, make_collection_data([make_asset_data()]))

        assert page[0].sys["id"] == "asset_1"
