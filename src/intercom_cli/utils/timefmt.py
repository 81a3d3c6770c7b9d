"""Timestamp parsing and local-time rendering shared by every layer."""

from __future__ import annotations

from datetime import datetime, timezone

LOCAL_TIME_FORMAT = "%x %X"
"""Locale-dependent date and time representation."""


def parse_timestamp(value: object) -> datetime | None:
    """Interpret *value* as a point in time.

    Accepts epoch seconds (``int``, ``float`` or a numeric string) and
    ISO-8601 strings, including a trailing ``Z``.  Naive ISO values are
    taken as UTC.  Returns ``None`` for anything else.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return _from_epoch(value)
    if not isinstance(value, str):
        return None

    text = value.strip()
    if not text:
        return None
    try:
        return _from_epoch(float(text))
    except ValueError:
        pass

    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _from_epoch(seconds: float) -> datetime | None:
    try:
        return datetime.fromtimestamp(seconds, tz=timezone.utc)
    except (OverflowError, OSError, ValueError):
        return None


def to_local(moment: datetime) -> datetime:
    """Convert an aware datetime to the local timezone."""
    return moment.astimezone()


def format_local(moment: datetime) -> str:
    """Render *moment* in local time using the locale's conventions."""
    return to_local(moment).strftime(LOCAL_TIME_FORMAT)
