"""
Shared fixtures for the CMA SDK test suite.
"""

import copy
from typing import Any, Dict, Optional

import pytest

from cma_sdk.config import reset_settings
from cma_sdk.registry import reset_registry


def link(link_type: str, link_id: str) -> Dict[str, Any]:
    return {"sys": {"type": "Link", "linkType": link_type, "id": link_id}}


def _asset_data(
    asset_id: str = "asset_1",
    version: int = 1,
    locales: tuple = ("en-US",),
    processed: bool = False,
    **sys_extra: Any,
) -> Dict[str, Any]:
    files = {}
    for locale in locales:
        file = {"fileName": "image.jpg", "contentType": "image/jpeg"}
        if processed:
            file["url"] = f"//images.example/{asset_id}/{locale}/image.jpg"
        else:
            file["upload"] = f"https://uploads.example/{locale}/image.jpg"
        files[locale] = file

    return {
        "sys": {
            "id": asset_id,
            "type": "Asset",
            "version": version,
            "space": link("Space", "space_1"),
            "environment": link("Environment", "master"),
            "createdAt": "2024-01-01T00:00:00Z",
            "updatedAt": "2024-01-01T00:00:00Z",
            **sys_extra,
        },
        "fields": {
            "title": {locale: "Playsam Streamliner" for locale in locales},
            "file": files,
        },
        "metadata": {"tags": []},
    }


def _entry_data(
    entry_id: str = "entry_1",
    version: int = 1,
    **sys_extra: Any,
) -> Dict[str, Any]:
    return {
        "sys": {
            "id": entry_id,
            "type": "Entry",
            "version": version,
            "space": link("Space", "space_1"),
            "environment": link("Environment", "master"),
            "contentType": link("ContentType", "post"),
            **sys_extra,
        },
        "fields": {
            "title": {"en-US": "Hello", "de-DE": "Hallo"},
            "body": {"en-US": "First post"},
        },
    }


def _collection_data(items: list, total: Optional[int] = None, skip: int = 0, limit: int = 100) -> Dict[str, Any]:
    return {
        "sys": {"type": "Array"},
        "total": len(items) if total is None else total,
        "skip": skip,
        "limit": limit,
        "items": copy.deepcopy(items),
    }


@pytest.fixture(autouse=True)
def clean_globals():
    """Fresh settings and registry for every test."""
    reset_settings()
    reset_registry()
    yield
    reset_settings()
    reset_registry()


@pytest.fixture
def make_asset_data():
    """Factory for raw asset data."""
    return _asset_data


@pytest.fixture
def make_entry_data():
    """Factory for raw entry data."""
    return _entry_data


@pytest.fixture
def make_collection_data():
    """Factory for raw collection data."""
    return _collection_data


@pytest.fixture
def asset_data():
    """Raw unprocessed asset with an en-US file."""
    return _asset_data()


@pytest.fixture
def entry_data():
    """Raw draft entry."""
    return _entry_data()
