"""
Argument validation for the CMA SDK.

Checks run before anything is dispatched so callers get a message naming
the missing or invalid field and the shape that was expected.

Invariants:
    - Validation errors are deterministic
    - Messages include the expected shape
    - Unknown names suggest similar valid ones
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from difflib import get_close_matches
from typing import Any

from .errors import ValidationError


def describe_shape(names: Iterable[str]) -> str:
    """Render the expected shape of a params mapping."""
    return "{" + ", ".join(f"{name}: str" for name in names) + "}"


def require_params(
    params: Mapping[str, Any],
    required: Iterable[str],
    *,
    context: str = "request",
) -> None:
    """Check that every required param is present and non-empty.

    Args:
        params: Params supplied by the caller
        required: Names that must be present
        context: What the params are for, used in the message

    Raises:
        ValidationError: Naming the first missing param and the expected shape

    Example:
        >>> require_params(
        ...     {"organization_id": "org", "app_definition_id": "app"},
        ...     ("organization_id", "app_definition_id"),
        ... )
    """
    required = tuple(required)
    missing = [name for name in required if not params.get(name)]
    if not missing:
        return

    shape = describe_shape(required)
    errors = [f"Missing '{name}'" for name in missing]
    message = f"Missing '{missing[0]}' for {context}; expected {shape}"

    unknown = [name for name in params if name not in required]
    suggestions = get_close_matches(missing[0], unknown, n=1)
    if suggestions:
        message += f". Got '{suggestions[0]}' instead, did you mean '{missing[0]}'?"

    raise ValidationError(message, field_name=missing[0], expected=shape, errors=errors)


def require_known(name: str, known: Iterable[str], *, what: str) -> None:
    """Check that a name is one of the known ones.

    Raises:
        ValidationError: With close matches as suggestions
    """
    known = sorted(known)
    if name in known:
        return
    message = f"Unknown {what} '{name}'"
    suggestions = get_close_matches(name, known, n=3)
    if suggestions:
        message += f". Did you mean: {', '.join(suggestions)}?"
    raise ValidationError(message, field_name=what, expected=f"one of {known}")


def processing_options(
    wait_ms: int | float | None,
    retries: int | None,
    *,
    default_wait_ms: int,
    default_retries: int,
) -> tuple[float, int]:
    """Resolve and check asset processing options.

    Returns:
        Tuple of (wait in milliseconds, retries)

    Raises:
        ValidationError: If wait is negative or retries is below one
    """
    wait_ms = default_wait_ms if wait_ms is None else wait_ms
    retries = default_retries if retries is None else retries

    if isinstance(wait_ms, bool) or not isinstance(wait_ms, (int, float)) or wait_ms < 0:
        raise ValidationError(
            f"processing_check_wait must be a non-negative number of milliseconds, got {wait_ms!r}",
            field_name="processing_check_wait",
            expected="number >= 0",
        )
    if isinstance(retries, bool) or not isinstance(retries, int) or retries < 1:
        raise ValidationError(
            f"processing_check_retries must be a positive integer, got {retries!r}",
            field_name="processing_check_retries",
            expected="int >= 1",
        )
    return float(wait_ms), retries
