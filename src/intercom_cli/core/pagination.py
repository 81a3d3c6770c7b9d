"""Cursor-based pagination driver.

Requests are strictly sequential: the next page is requested only after
the previous one has been received.  Records are accumulated in exactly
the order the API returned them.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from intercom_cli.core.models import Record, RequestDescriptor
from intercom_cli.core.protocols import RequestExecutor
from intercom_cli.core.responses import parse_list
from intercom_cli.exceptions import ResponseShapeError
from intercom_cli.utils.log import get_logger

logger = get_logger(__name__)

CURSOR_PARAM = "starting_after"
DEFAULT_MAX_PAGES = 1000


def fetch_all(
    executor: RequestExecutor,
    path: str,
    params: Mapping[str, Any] | None = None,
    *,
    list_key: str = "data",
    max_pages: int | None = DEFAULT_MAX_PAGES,
) -> list[Record]:
    """Fetch every page of *path* and return the concatenated records.

    Parameters
    ----------
    executor:
        Performs each request; see :class:`RequestExecutor`.
    path:
        List endpoint, e.g. ``"/contacts"``.
    params:
        Base query parameters sent with every page.
    list_key:
        Name of the list field in each page body.
    max_pages:
        Upper bound on requests.  ``None`` removes the bound.

    Raises
    ------
    ResponseShapeError
        If a page is malformed, a cursor repeats, or the page bound is
        exceeded.  Records gathered so far are discarded.
    """
    base = dict(params or {})
    records: list[Record] = []
    seen: set[str] = set()
    cursor: str | None = None
    pages = 0

    while True:
        if max_pages is not None and pages >= max_pages:
            raise ResponseShapeError(
                f"Pagination exceeded {max_pages} pages for {path}.",
                hint="The API kept returning a next-page cursor.",
            )

        query = dict(base)
        if cursor is not None:
            query[CURSOR_PARAM] = cursor

        body = executor.execute(RequestDescriptor("GET", path, params=query))
        page = parse_list(body, list_key)
        pages += 1
        records.extend(page.records)
        logger.debug(
            "Fetched page %d of %s (%d records, next=%s)",
            pages, path, len(page), page.next_cursor,
        )

        if page.next_cursor is None:
            return records
        if page.next_cursor in seen:
            raise ResponseShapeError(
                f"Pagination cursor repeated for {path}: {page.next_cursor}",
            )
        seen.add(page.next_cursor)
        cursor = page.next_cursor
