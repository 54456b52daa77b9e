"""
Configuration for the CMA SDK.

Uses pydantic-settings for environment variable loading. Every setting is
a default only; explicit arguments passed to a method always win.

Environment variables:
    CMA_PROCESSING_CHECK_WAIT_MS: Delay between asset processing polls
    CMA_PROCESSING_CHECK_RETRIES: Maximum asset processing polls
    CMA_DEFAULT_PAGE_SIZE: Page size used when iterating collections
"""

from __future__ import annotations

import threading

from pydantic import Field
from pydantic_settings import BaseSettings

_settings: ClientSettings | None = None
_settings_lock = threading.Lock()


class ClientSettings(BaseSettings):
    """SDK configuration loaded from environment."""

    # Asset processing poll
    processing_check_wait_ms: int = Field(
        default=500, ge=0, description="Milliseconds to wait between processing checks"
    )
    processing_check_retries: int = Field(
        default=5, ge=1, description="Maximum number of processing checks"
    )

    # Pagination
    default_page_size: int = Field(
        default=100, ge=1, le=1000, description="Items per page when iterating"
    )

    model_config = {"env_prefix": "CMA_"}


def get_settings() -> ClientSettings:
    """Get the process-wide settings, loading them on first use."""
    global _settings
    with _settings_lock:
        if _settings is None:
            _settings = ClientSettings()
        return _settings


def reset_settings() -> None:
    """Drop cached settings so the environment is read again (for testing only)."""
    global _settings
    with _settings_lock:
        _settings = None
