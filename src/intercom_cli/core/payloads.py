"""Request-body builders for the command layer.

Pure functions: they validate caller-supplied values and assemble the
JSON bodies the API expects.  Invalid input raises
:class:`~intercom_cli.exceptions.LocalValidationError` before any
request is made.
"""

from __future__ import annotations

import json
from typing import Any

from intercom_cli.exceptions import LocalValidationError

SEARCH_OPERATOR_CONTAINS = "~"


def compact(fields: dict[str, Any]) -> dict[str, Any]:
    """Drop keys whose value is ``None`` or an empty string."""
    return {key: value for key, value in fields.items() if value is not None and value != ""}


def parse_custom_attributes(raw: str | None) -> dict[str, Any] | None:
    """Decode the ``--custom`` JSON argument.

    Returns ``None`` when *raw* is ``None``.
    """
    if raw is None:
        return None
    try:
        value = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise LocalValidationError(
            "Invalid JSON for custom attributes",
            hint='Pass a JSON object, e.g. --custom \'{"plan": "pro"}\'',
        ) from exc
    if not isinstance(value, dict):
        raise LocalValidationError(
            "Custom attributes must be a JSON object",
            hint='Pass a JSON object, e.g. --custom \'{"plan": "pro"}\'',
        )
    return value


def with_custom_attributes(payload: dict[str, Any], raw: str | None) -> dict[str, Any]:
    custom = parse_custom_attributes(raw)
    if custom is not None:
        payload["custom_attributes"] = custom
    return payload


def search_query(field: str, value: str, operator: str = SEARCH_OPERATOR_CONTAINS) -> dict[str, Any]:
    """Single-clause search body."""
    return {"query": {"field": field, "operator": operator, "value": value}}


def require_admin_id(admin_id: str | None) -> str:
    """Return *admin_id* or fail when no acting admin is configured."""
    if admin_id is None or not str(admin_id).strip():
        raise LocalValidationError(
            "No admin ID configured for this action",
            hint="Pass --admin-id <id> or set the INTERCOM_ADMIN_ID environment variable.",
        )
    return str(admin_id).strip()


# ---------------------------------------------------------------------------
# Conversations
# ---------------------------------------------------------------------------

def reply_payload(
    admin_id: str,
    message: str,
    message_type: str = "comment",
    assignee_id: str | None = None,
) -> dict[str, Any]:
    return compact(
        {
            "type": "admin",
            "message_type": message_type,
            "body": message,
            "admin_id": admin_id,
            "assignee_id": assignee_id,
        }
    )


def assign_payload(
    admin_id: str,
    *,
    admin: str | None = None,
    team: str | None = None,
) -> dict[str, Any]:
    """Assignment body; exactly one of *admin* or *team* is required."""
    if bool(admin) == bool(team):
        raise LocalValidationError(
            "Please specify either --admin or --team",
        )
    return {
        "type": "admin" if admin else "team",
        "admin_id": admin_id,
        "assignee_id": admin or team,
    }


def snooze_payload(admin_id: str, until: int) -> dict[str, Any]:
    if until <= 0:
        raise LocalValidationError(
            f"Invalid snooze timestamp: {until}",
            hint="Pass a Unix timestamp in seconds.",
        )
    return {
        "admin_id": admin_id,
        "snoozed_until": until,
    }


# ---------------------------------------------------------------------------
# Contacts
# ---------------------------------------------------------------------------

def convert_payload(contact_id: str, email: str | None = None) -> dict[str, Any]:
    """Body for converting a lead contact into a user."""
    return {"contact": {"id": contact_id}, "user": compact({"email": email})}
