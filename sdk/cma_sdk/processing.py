"""
Asset processing.

After an upload, an asset's files have to be processed before they carry
a url. Processing is triggered with one dispatch and then polled:

    Triggered -> Polling -> Succeeded | TimedOut

- Triggered: one processForLocale / processForAllLocales action. If it
  fails the error propagates and nothing is polled.
- Polling: the asset is fetched with a "get" action up to
  processing_check_retries times, waiting processing_check_wait
  milliseconds between fetches, until the file for the locale has a url.
- TimedOut: AssetProcessingTimeoutError. The server may still finish
  processing later; fetch the asset again to find out.

For all locales, one poll per locale runs concurrently, each with its own
budget. The call only succeeds if every locale succeeds: one timed out
locale fails the whole call even when the others finished.

Defaults for both options come from ClientSettings.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from .config import get_settings
from .dispatch import ActionDescriptor, Dispatch, version_headers
from .errors import AssetProcessingTimeoutError, ValidationError
from .validate import processing_options

if TYPE_CHECKING:
    from .wrapper import Entity

logger = logging.getLogger(__name__)


def _files(raw: Mapping[str, Any]) -> Mapping[str, Any]:
    fields = raw.get("fields") or {}
    return fields.get("file") or {}


def has_url(raw: Any, locale: str) -> bool:
    """Whether the asset's file for a locale has been processed."""
    if not isinstance(raw, Mapping):
        return False
    file = _files(raw).get(locale) or {}
    return bool(file.get("url"))


def _resolve_options(
    processing_check_wait: int | float | None,
    processing_check_retries: int | None,
) -> tuple[float, int]:
    settings = get_settings()
    return processing_options(
        processing_check_wait,
        processing_check_retries,
        default_wait_ms=settings.processing_check_wait_ms,
        default_retries=settings.processing_check_retries,
    )


async def poll_until_processed(
    dispatch: Dispatch,
    entity_type: str,
    params: dict[str, Any],
    locale: str,
    *,
    wait_ms: float,
    retries: int,
) -> Any:
    """Fetch the asset until its file for a locale has a url.

    Args:
        dispatch: Dispatcher to fetch with
        entity_type: Entity type for the get action
        params: Identifying params of the asset
        locale: Locale to check
        wait_ms: Milliseconds between fetches
        retries: Maximum number of fetches

    Returns:
        Raw asset data once processed, or None if the budget ran out
    """
    for attempt in range(1, retries + 1):
        raw = await dispatch(ActionDescriptor(entity_type=entity_type, action="get", params=dict(params)))
        if has_url(raw, locale):
            logger.debug(f"Asset {params} processed for {locale} after {attempt} check(s)")
            return raw
        if attempt < retries:
            await asyncio.sleep(wait_ms / 1000)

    logger.warning(f"Asset {params} not processed for {locale} after {retries} check(s)")
    return None


async def process_for_locale(
    dispatch: Dispatch,
    entity: Entity,
    locale: str,
    *,
    processing_check_wait: int | float | None = None,
    processing_check_retries: int | None = None,
) -> Entity:
    """Trigger processing of one locale's file and wait for it.

    Args:
        locale: Locale whose file should be processed
        processing_check_wait: Milliseconds between checks (default 500)
        processing_check_retries: Maximum checks (default 5)

    Returns:
        The processed asset

    Raises:
        ValidationError: If the options are invalid or the locale has no file
        AssetProcessingTimeoutError: If the file has no url after the last check
    """
    raw = entity.to_plain()
    wait_ms, retries = _resolve_options(processing_check_wait, processing_check_retries)
    if locale not in _files(raw):
        raise ValidationError(
            f"Asset has no file for locale '{locale}'; expected fields.file['{locale}']",
            field_name=f"fields.file.{locale}",
            expected="{fileName: str, contentType: str, upload: str}",
        )

    params = entity.params()
    await dispatch(
        ActionDescriptor(
            entity_type=entity.entity_type,
            action="processForLocale",
            params={**params, "locale": locale},
            headers=version_headers(raw["sys"]),
        )
    )

    processed = await poll_until_processed(
        dispatch, entity.entity_type, params, locale, wait_ms=wait_ms, retries=retries
    )
    if processed is None:
        raise AssetProcessingTimeoutError(raw["sys"]["id"], [locale])
    return entity.rewrap(processed)


async def process_for_all_locales(
    dispatch: Dispatch,
    entity: Entity,
    *,
    processing_check_wait: int | float | None = None,
    processing_check_retries: int | None = None,
) -> Entity:
    """Trigger processing of every locale's file and wait for all of them.

    Args:
        processing_check_wait: Milliseconds between checks (default 500)
        processing_check_retries: Maximum checks per locale (default 5)

    Returns:
        The asset as seen by the last locale check to finish

    Raises:
        ValidationError: If the options are invalid or the asset has no files
        AssetProcessingTimeoutError: If any locale's file has no url after its last check
    """
    raw = entity.to_plain()
    wait_ms, retries = _resolve_options(processing_check_wait, processing_check_retries)
    locales = list(_files(raw))
    if not locales:
        raise ValidationError(
            "Asset has no files to process; expected fields.file",
            field_name="fields.file",
            expected="{<locale>: {fileName: str, contentType: str, upload: str}}",
        )

    params = entity.params()
    await dispatch(
        ActionDescriptor(
            entity_type=entity.entity_type,
            action="processForAllLocales",
            params={**params, "locales": locales},
            headers=version_headers(raw["sys"]),
        )
    )

    finished: list[Any] = []

    async def poll(locale: str) -> Any:
        processed = await poll_until_processed(
            dispatch, entity.entity_type, params, locale, wait_ms=wait_ms, retries=retries
        )
        if processed is not None:
            finished.append(processed)
        return processed

    results = await asyncio.gather(*(poll(locale) for locale in locales), return_exceptions=True)
    for result in results:
        if isinstance(result, BaseException):
            raise result

    timed_out = [locale for locale, result in zip(locales, results) if result is None]
    if timed_out:
        raise AssetProcessingTimeoutError(raw["sys"]["id"], locales, timed_out)
    return entity.rewrap(finished[-1])
