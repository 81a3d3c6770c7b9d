"""Maps HTTP failures to typed domain exceptions.

This is the single place that interprets status codes.  The functions
*return* the exception; the caller raises it, so the mapping can be
tested without any network.

| Condition             | Exception               |
|-----------------------|-------------------------|
| HTTP 401              | AuthenticationError     |
| HTTP 403              | PermissionDeniedError   |
| HTTP 404              | NotFoundError           |
| HTTP 429              | RateLimitError          |
| any other status      | ApiError                |
| no response received  | NetworkError            |
| anything else         | IntercomCliError        |
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime
from typing import Any

import httpx

from intercom_cli.exceptions import (
    SET_TOKEN_COMMAND,
    ApiError,
    AuthenticationError,
    IntercomCliError,
    NetworkError,
    NotFoundError,
    PermissionDeniedError,
    RateLimitError,
)
from intercom_cli.utils.timefmt import format_local, parse_timestamp, to_local

RATE_LIMIT_RESET_HEADER = "X-RateLimit-Reset"


def classify_response(response: httpx.Response) -> IntercomCliError:
    """Translate a non-2xx *response* into a domain exception."""
    status = response.status_code
    body = _json_body(response)

    if status == 401:
        return AuthenticationError(
            "Invalid access token",
            hint=f"Please check your access token:\n    {SET_TOKEN_COMMAND}",
        )

    if status == 403:
        return PermissionDeniedError(
            "You do not have permission to perform this action",
        )

    if status == 404:
        return NotFoundError(_first_error_message(body) or "Resource not found")

    if status == 429:
        reset_at = rate_limit_reset(response.headers)
        return RateLimitError(
            "Too many requests. Please try again later.",
            hint=f"Rate limit resets at: {format_local(reset_at)}" if reset_at else None,
            reset_at=reset_at,
        )

    message = _first_error_message(body) or _top_level_message(body) or "An error occurred"
    return ApiError(message, status_code=status)


def classify_exception(exc: Exception) -> IntercomCliError:
    """Translate an exception raised while performing a request."""
    if isinstance(exc, IntercomCliError):
        return exc
    if isinstance(exc, httpx.HTTPStatusError):
        return classify_response(exc.response)
    if isinstance(exc, httpx.TransportError):
        return NetworkError(
            "Could not reach Intercom API",
            hint=f"{type(exc).__name__}: {exc}" if str(exc) else None,
        )
    return IntercomCliError(str(exc) or type(exc).__name__)


def rate_limit_reset(headers: Mapping[str, str]) -> datetime | None:
    """Parse the reset header (epoch seconds) into a local datetime."""
    raw = headers.get(RATE_LIMIT_RESET_HEADER)
    if raw is None:
        return None
    try:
        seconds = float(raw)
    except ValueError:
        return None
    moment = parse_timestamp(seconds)
    return to_local(moment) if moment is not None else None


# ---------------------------------------------------------------------------
# Body helpers
# ---------------------------------------------------------------------------

def _json_body(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return None


def _first_error_message(body: Any) -> str | None:
    if not isinstance(body, Mapping):
        return None
    errors = body.get("errors")
    if not isinstance(errors, list) or not errors:
        return None
    first = errors[0]
    if isinstance(first, Mapping) and first.get("message"):
        return str(first["message"])
    return None


def _top_level_message(body: Any) -> str | None:
    if isinstance(body, Mapping) and body.get("message"):
        return str(body["message"])
    return None
