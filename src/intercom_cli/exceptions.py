"""Custom exception hierarchy for intercom-cli.

All exceptions that cross layer boundaries must inherit from
:class:`IntercomCliError`.  Raw third-party exceptions (e.g. from httpx)
must NEVER propagate beyond the infrastructure layer — they must be
caught and re-raised as a typed subclass defined here.

Hierarchy
---------
IntercomCliError
├── AuthenticationError
├── PermissionDeniedError
├── NotFoundError
├── RateLimitError
├── ApiError
├── NetworkError
├── CredentialStoreError
├── EnvironmentError
└── LocalValidationError
    ├── ResponseShapeError
    └── ConfigurationError
"""

from __future__ import annotations

from datetime import datetime

SET_TOKEN_COMMAND = "intercom auth set-token <your-access-token>"
"""Command shown whenever the user needs to (re)configure a token."""


class IntercomCliError(Exception):
    """Base exception for all intercom-cli errors.

    Every user-visible error condition must map to a subclass of this
    exception so that the CLI error boundary can render a clean message
    without leaking internal stack traces.
    """

    label: str = "Error"
    """Prefix rendered before the message by the CLI error boundary."""

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint: str | None = hint
        """Optional actionable guidance shown below the error message."""


# --- Remote API failures ---------------------------------------------------

class AuthenticationError(IntercomCliError):
    """Raised when the access token is missing or rejected (HTTP 401)."""

    label = "Authentication Error"


class PermissionDeniedError(IntercomCliError):
    """Raised when the token lacks permission for the action (HTTP 403)."""

    label = "Permission Error"


class NotFoundError(IntercomCliError):
    """Raised when the requested resource does not exist (HTTP 404)."""

    label = "Not Found"


class RateLimitError(IntercomCliError):
    """Raised when the API rejects the call for rate limiting (HTTP 429)."""

    label = "Rate Limit"

    def __init__(
        self,
        message: str,
        *,
        hint: str | None = None,
        reset_at: datetime | None = None,
    ) -> None:
        super().__init__(message, hint=hint)
        self.reset_at: datetime | None = reset_at
        """Local time at which the rate-limit window resets, if reported."""


class ApiError(IntercomCliError):
    """Raised for any other non-2xx response."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int,
        hint: str | None = None,
    ) -> None:
        super().__init__(message, hint=hint)
        self.status_code: int = status_code
        self.label = f"Error {status_code}"


class NetworkError(IntercomCliError):
    """Raised when no HTTP response could be obtained."""

    label = "Network Error"


# --- Local state -----------------------------------------------------------

class CredentialStoreError(IntercomCliError):
    """Raised when the persisted token file cannot be read or written."""


class EnvironmentError(IntercomCliError):
    """Raised when a required runtime dependency is not available."""


class LocalValidationError(IntercomCliError):
    """Raised when locally supplied input is unusable."""


class ResponseShapeError(LocalValidationError):
    """Raised when an API response does not have the expected structure."""


class ConfigurationError(LocalValidationError):
    """Raised when runtime settings are invalid."""


def missing_token_error() -> AuthenticationError:
    """Build the error raised when no token is configured anywhere."""
    return AuthenticationError(
        "No access token found",
        hint="\n".join(
            (
                "To set up authentication, run:",
                f"    {SET_TOKEN_COMMAND}",
                "Or set the INTERCOM_ACCESS_TOKEN environment variable.",
            )
        ),
    )
