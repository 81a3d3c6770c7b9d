"""Pure transforms from records to display text.

Nothing here writes to a stream; the CLI layer decides where the text
goes.  Every function is deterministic for a given local timezone and
locale.
"""

from __future__ import annotations

import csv
import io
import json
from collections.abc import Mapping, Sequence
from typing import Any

from intercom_cli.core.models import Column, ColumnType, Record
from intercom_cli.utils.timefmt import format_local, parse_timestamp

PLACEHOLDER = "-"
"""Rendered for absent or null values."""


class _Missing:
    """Sentinel for a path that does not resolve."""

    _instance: _Missing | None = None

    def __new__(cls) -> _Missing:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING = _Missing()


# ---------------------------------------------------------------------------
# Value extraction
# ---------------------------------------------------------------------------

def resolve_path(record: Any, path: str) -> Any:
    """Walk the dot-separated *path* through nested mappings.

    Returns :data:`MISSING` if any segment is absent, null, or reached
    through something that is not a mapping.
    """
    current: Any = record
    for segment in path.split("."):
        if not isinstance(current, Mapping):
            return MISSING
        current = current.get(segment)
        if current is None:
            return MISSING
    return current


def format_value(value: Any, column_type: ColumnType = ColumnType.PLAIN) -> str:
    """Render one resolved value according to *column_type*."""
    if value is MISSING or value is None:
        return PLACEHOLDER

    if column_type is ColumnType.DATE:
        moment = parse_timestamp(value)
        return format_local(moment) if moment is not None else str(value)

    if column_type is ColumnType.BOOLEAN:
        return "Yes" if value else "No"

    if column_type is ColumnType.ARRAY:
        if isinstance(value, (list, tuple)):
            return ", ".join(_plain(item) for item in value)
        return _plain(value)

    return _plain(value)


def _plain(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (Mapping, list, tuple)):
        return json.dumps(value, ensure_ascii=False, separators=(",", ":"))
    return str(value)


# ---------------------------------------------------------------------------
# Records → rows
# ---------------------------------------------------------------------------

def normalize(data: Any) -> list[Any]:
    """Return *data* as a list of records.

    A single record becomes a one-element list; ``None`` becomes empty.
    """
    if data is None:
        return []
    if isinstance(data, list):
        return data
    if isinstance(data, tuple):
        return list(data)
    return [data]


def headers(columns: Sequence[Column]) -> list[str]:
    return [column.header for column in columns]


def build_row(record: Record, columns: Sequence[Column]) -> list[str]:
    """Render *record* into one display string per column."""
    return [format_value(resolve_path(record, col.key), col.type) for col in columns]


def build_rows(records: Sequence[Record], columns: Sequence[Column]) -> list[list[str]]:
    return [build_row(record, columns) for record in records]


# ---------------------------------------------------------------------------
# Serialisations
# ---------------------------------------------------------------------------

def to_json(data: Any) -> str:
    """Pretty-print *data* unchanged, ignoring any column selection."""
    return json.dumps(data, indent=2, ensure_ascii=False)


def to_csv(records: Sequence[Record], columns: Sequence[Column]) -> str:
    """Header line plus one line per record, every field quoted.

    Embedded quotes are doubled.
    """
    buf = io.StringIO()
    writer = csv.writer(buf, quoting=csv.QUOTE_ALL, lineterminator="\n")
    writer.writerow(headers(columns))
    writer.writerows(build_rows(records, columns))
    return buf.getvalue()
