"""Domain models for intercom-cli.

All models are **frozen** dataclasses — immutable value objects with no
behaviour beyond data access and validation on construction.  They carry
zero I/O and zero dependencies on external packages.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any

from intercom_cli.exceptions import LocalValidationError

HTTP_METHODS: tuple[str, ...] = ("GET", "POST", "PUT", "DELETE")

Record = dict[str, Any]
"""A single decoded JSON object returned by the API."""


# ---------------------------------------------------------------------------
# Requests
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class RequestDescriptor:
    """Everything needed to issue one API call.

    ``path`` is relative to the configured base URL and must start with
    ``/``.  ``method`` is normalised to upper case.
    """

    method: str
    path: str
    params: Mapping[str, Any] = field(default_factory=dict)
    body: Any = None

    def __post_init__(self) -> None:
        method = self.method.upper()
        if method not in HTTP_METHODS:
            raise LocalValidationError(
                f"Unsupported HTTP method: {self.method}",
                hint=f"Use one of: {', '.join(HTTP_METHODS)}",
            )
        if not self.path.startswith("/"):
            raise LocalValidationError(
                f"Request path must start with '/': {self.path!r}",
            )
        object.__setattr__(self, "method", method)
        object.__setattr__(self, "params", dict(self.params))

    def query(self) -> dict[str, Any]:
        """Query parameters with ``None`` values removed."""
        return {key: value for key, value in self.params.items() if value is not None}


# ---------------------------------------------------------------------------
# Output columns
# ---------------------------------------------------------------------------

class ColumnType(str, Enum):
    """Rendering hint for a column's values."""

    PLAIN = "plain"
    DATE = "date"
    BOOLEAN = "boolean"
    ARRAY = "array"


@dataclass(frozen=True, slots=True)
class Column:
    """Maps a dotted field path in a record to a display column."""

    key: str
    """Dot-separated path, e.g. ``"assignee.name"``."""

    header: str
    """Label shown in the header row."""

    width: int | None = None
    """Fixed display width for table output."""

    type: ColumnType = ColumnType.PLAIN


# ---------------------------------------------------------------------------
# Responses
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class ListPage:
    """One page of a paginated list response."""

    records: list[Record]
    next_cursor: str | None = None

    def __len__(self) -> int:
        return len(self.records)

    @property
    def has_more(self) -> bool:
        return self.next_cursor is not None


# ---------------------------------------------------------------------------
# Credentials
# ---------------------------------------------------------------------------

class TokenSource(str, Enum):
    """Where a resolved access token came from."""

    ENVIRONMENT = "environment"
    FILE = "file"


@dataclass(frozen=True, slots=True)
class StoredCredential:
    """The persisted credential record."""

    access_token: str
    updated_at: datetime | None = None


@dataclass(frozen=True, slots=True)
class ResolvedToken:
    """A bearer token together with its origin."""

    token: str
    source: TokenSource

    def masked(self) -> str:
        """Return the token with its middle hidden."""
        return mask_token(self.token)


def mask_token(token: str) -> str:
    """Show only the ends of *token*.

    Long tokens keep their first and last ten characters; short ones
    keep only the first four.
    """
    if len(token) > 20:
        return f"{token[:10]}...{token[-10:]}"
    return f"{token[:4]}..."
