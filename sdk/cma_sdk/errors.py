"""
Error types for the CMA SDK.

This module defines all exception types raised by the SDK:
- CmaError: Base exception
- MalformedEntityError: Raw data lacks the identifying sys block
- DispatchError: Failure reported by a dispatcher
- NotFoundError: Dispatcher could not find the entity
- VersionMismatchError: Optimistic concurrency conflict
- AssetProcessingTimeoutError: Asset processing poll budget exhausted
- ValidationError: Structured argument is missing or malformed

Invariants:
    - All errors inherit from CmaError
    - Errors raised by a dispatcher reach the caller unchanged
    - Error messages name the offending field
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence


class CmaError(Exception):
    """Base exception for all CMA SDK errors.

    Attributes:
        message: Error message
        code: Error code for programmatic handling
        details: Additional error context
    """

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or "CMA_ERROR"
        self.details = details or {}


class MalformedEntityError(CmaError):
    """Raw entity data cannot be wrapped or addressed.

    Raised when:
    - The raw data is not a mapping
    - The sys block is missing, or lacks id/type
    - A link needed to address the entity (space, environment, ...) is absent
    """

    def __init__(
        self,
        message: str,
        missing: Optional[str] = None,
    ) -> None:
        super().__init__(
            message,
            code="MALFORMED_ENTITY",
            details={"missing": missing},
        )
        self.missing = missing


class DispatchError(CmaError):
    """Failure reported by a dispatcher.

    The wrapping layer never raises this itself; it exists so dispatcher
    implementations share a common base with the rest of the SDK.
    """

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        action: Optional[str] = None,
        entity_type: Optional[str] = None,
    ) -> None:
        super().__init__(
            message,
            code=code or "DISPATCH_ERROR",
            details={"action": action, "entity_type": entity_type},
        )
        self.action = action
        self.entity_type = entity_type


class NotFoundError(DispatchError):
    """The addressed entity does not exist."""

    def __init__(
        self,
        message: str,
        entity_type: str,
        entity_id: str,
        action: Optional[str] = None,
    ) -> None:
        super().__init__(
            message,
            code="NOT_FOUND",
            action=action,
            entity_type=entity_type,
        )
        self.details["entity_id"] = entity_id
        self.entity_id = entity_id


class VersionMismatchError(DispatchError):
    """The version sent with a write is not the current server version.

    Raised when two writers race on the same entity id; the loser
    must re-fetch and retry.
    """

    def __init__(
        self,
        message: str,
        entity_type: str,
        entity_id: str,
        expected_version: Optional[int] = None,
        actual_version: Optional[int] = None,
        action: Optional[str] = None,
    ) -> None:
        super().__init__(
            message,
            code="VERSION_MISMATCH",
            action=action,
            entity_type=entity_type,
        )
        self.details.update(
            {
                "entity_id": entity_id,
                "expected_version": expected_version,
                "actual_version": actual_version,
            }
        )
        self.entity_id = entity_id
        self.expected_version = expected_version
        self.actual_version = actual_version


class AssetProcessingTimeoutError(CmaError):
    """Asset processing did not finish within the poll budget.

    Processing may still complete server-side. Fetch the asset again and
    check whether the file url is present.

    Attributes:
        asset_id: The asset being processed
        locales: Locales processing was requested for
        timed_out_locales: Locales whose file never carried a url
    """

    def __init__(
        self,
        asset_id: str,
        locales: Sequence[str],
        timed_out_locales: Optional[Sequence[str]] = None,
    ) -> None:
        timed_out = list(timed_out_locales if timed_out_locales is not None else locales)
        msg = (
            f"Asset '{asset_id}' is taking longer than expected to process "
            f"(locales: {', '.join(timed_out)}). Fetch the asset again to check its state."
        )
        super().__init__(
            msg,
            code="ASSET_PROCESSING_TIMEOUT",
            details={
                "asset_id": asset_id,
                "locales": list(locales),
                "timed_out_locales": timed_out,
            },
        )
        self.asset_id = asset_id
        self.locales = list(locales)
        self.timed_out_locales = timed_out


class ValidationError(CmaError):
    """A structured argument is missing or malformed.

    Raised before anything is dispatched.

    Raised when:
    - A required identifying parameter is missing
    - A processing option is out of range
    - A locale has no file to process
    """

    def __init__(
        self,
        message: str,
        field_name: Optional[str] = None,
        expected: Optional[str] = None,
        errors: Optional[List[str]] = None,
    ) -> None:
        super().__init__(
            message,
            code="VALIDATION_ERROR",
            details={"field": field_name, "expected": expected, "errors": errors or []},
        )
        self.field_name = field_name
        self.expected = expected
        self.errors = errors or []
