"""Response-shape parsing for the three endpoint families.

Intercom answers with one of:

* a single record (``GET /contacts/{id}``),
* a list with pagination metadata (``GET /contacts``),
* a search result (``POST /contacts/search``).

The functions here check the shape at the boundary and raise
:class:`~intercom_cli.exceptions.ResponseShapeError` on mismatch, so
formatting code never has to guess.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from intercom_cli.core.models import ListPage, Record
from intercom_cli.exceptions import ResponseShapeError


def parse_record(body: Any) -> Record:
    """Validate a single-record response."""
    if not isinstance(body, Mapping):
        raise ResponseShapeError(
            f"Expected a JSON object, got {_describe(body)}.",
        )
    return body if isinstance(body, dict) else dict(body)


def parse_list(body: Any, key: str = "data") -> ListPage:
    """Validate a list response and extract its next-page cursor."""
    return ListPage(
        records=_records(body, key),
        next_cursor=next_cursor(body),
    )


def parse_search(body: Any, key: str = "data") -> list[Record]:
    """Validate a search response and return its records."""
    return _records(body, key)


def next_cursor(body: Any) -> str | None:
    """Return ``pages.next.starting_after`` or ``None``.

    Older API versions report ``pages.next`` as a URL string; that form
    carries no cursor and is treated as the last page.
    """
    if not isinstance(body, Mapping):
        return None
    pages = body.get("pages")
    if not isinstance(pages, Mapping):
        return None
    nxt = pages.get("next")
    if not isinstance(nxt, Mapping):
        return None
    cursor = nxt.get("starting_after")
    if cursor is None or cursor == "":
        return None
    return str(cursor)


def _records(body: Any, key: str) -> list[Record]:
    record = parse_record(body)
    if key not in record:
        raise ResponseShapeError(
            f"Response is missing the '{key}' list.",
        )
    items = record[key]
    if not isinstance(items, list):
        raise ResponseShapeError(
            f"Expected '{key}' to be a list, got {_describe(items)}.",
        )
    for index, item in enumerate(items):
        if not isinstance(item, Mapping):
            raise ResponseShapeError(
                f"Expected '{key}[{index}]' to be an object, got {_describe(item)}.",
            )
    return items


def _describe(value: object) -> str:
    if value is None:
        return "null"
    return type(value).__name__
