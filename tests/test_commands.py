"""Tests for command handlers (cli/commands/*).

Each test parses a real argv with the application parser, then runs the
bound handler against an :class:`IntercomClient` served by
``httpx.MockTransport``.  Assertions cover the request sent and the
text rendered.
"""

from __future__ import annotations

import csv
import io
import json
from collections.abc import Callable
from dataclasses import replace
from typing import Any

import httpx
import pytest
from conftest import TEST_TOKEN, RecordingTransport, json_response

from intercom_cli.cli import exit_codes
from intercom_cli.cli.app import _build_parser
from intercom_cli.cli.context import CommandContext
from intercom_cli.config import Settings
from intercom_cli.core.models import mask_token
from intercom_cli.exceptions import LocalValidationError, NotFoundError
from intercom_cli.infra.credentials import CredentialResolver, CredentialStore

Invoke = Callable[..., tuple[int, RecordingTransport]]


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

@pytest.fixture()
def invoke(
    make_client: Callable[..., Any],
    settings: Settings,
    store: CredentialStore,
    resolver: CredentialResolver,
) -> Invoke:
    """Run ``intercom <argv>`` against *responder*; return (code, transport)."""

    def runner(
        argv: list[str],
        responder: Callable[[httpx.Request], httpx.Response] | None = None,
        *,
        admin_id: str | None = "991",
    ) -> tuple[int, RecordingTransport]:
        args = _build_parser().parse_args(argv)
        client, transport = make_client(responder or (lambda r: json_response({})))
        ctx = CommandContext(
            settings=replace(settings, admin_id=admin_id),
            client=client,
            store=store,
            resolver=resolver,
            output_format=args.format,
        )
        return args.handler(ctx, args), transport

    return runner


def _list_body(records: list[dict[str, Any]], key: str = "data") -> dict[str, Any]:
    return {"type": "list", key: records, "pages": {"next": None}}


def _csv_rows(text: str) -> list[list[str]]:
    return list(csv.reader(io.StringIO(text)))


# ---------------------------------------------------------------------------
# auth
# ---------------------------------------------------------------------------

class TestAuth:
    def test_set_token_persists(
        self, invoke: Invoke, store: CredentialStore, capsys: pytest.CaptureFixture[str],
    ) -> None:
        code, transport = invoke(["auth", "set-token", "tok_abc"])
        assert code == exit_codes.SUCCESS
        assert store.load().access_token == "tok_abc"  # type: ignore[union-attr]
        assert transport.requests == []
        assert "Access token saved successfully" in capsys.readouterr().err

    def test_set_token_prompts_when_omitted(
        self, invoke: Invoke, store: CredentialStore, monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        monkeypatch.setattr(
            "intercom_cli.cli.prompts.prompt_access_token", lambda: "tok_prompted",
        )
        invoke(["auth", "set-token"])
        assert store.load().access_token == "tok_prompted"  # type: ignore[union-attr]

    def test_blank_token_rejected(self, invoke: Invoke) -> None:
        with pytest.raises(LocalValidationError):
            invoke(["auth", "set-token", "   "])

    def test_remove_token(
        self, invoke: Invoke, store: CredentialStore, capsys: pytest.CaptureFixture[str],
    ) -> None:
        store.save("tok_abc")
        invoke(["auth", "remove-token"])
        assert store.load() is None
        assert "removed" in capsys.readouterr().err

    def test_remove_token_when_absent(
        self, invoke: Invoke, capsys: pytest.CaptureFixture[str],
    ) -> None:
        invoke(["auth", "remove-token"])
        assert "No token found to remove" in capsys.readouterr().err

    def test_status_masks_token(self, invoke: Invoke, capsys: pytest.CaptureFixture[str]) -> None:
        invoke(["auth", "status"])
        err = capsys.readouterr().err
        assert mask_token(TEST_TOKEN) in err
        assert TEST_TOKEN not in err
        assert "environment variable" in err


# ---------------------------------------------------------------------------
# users
# ---------------------------------------------------------------------------

class TestUsers:
    def test_list_csv(self, invoke: Invoke, capsys: pytest.CaptureFixture[str]) -> None:
        body = _list_body([{"id": "1", "email": "a@b.com", "name": "Ada"}])
        code, transport = invoke(["-f", "csv", "users", "list", "-l", "5"], lambda r: json_response(body))

        assert code == exit_codes.SUCCESS
        assert transport.requests[0].url.path == "/users"
        assert transport.requests[0].url.params["per_page"] == "5"
        captured = capsys.readouterr()
        rows = _csv_rows(captured.out)
        assert rows[0] == ["ID", "Email", "Name", "Created", "Last Seen"]
        assert rows[1][:3] == ["1", "a@b.com", "Ada"]
        assert "Found 1 users" in captured.err

    def test_get_by_email_looks_up(self, invoke: Invoke, capsys: pytest.CaptureFixture[str]) -> None:
        body = _list_body([{"id": "7", "email": "ada@example.com"}])
        _, transport = invoke(
            ["users", "get", "ada@example.com", "-f", "json"], lambda r: json_response(body),
        )
        request = transport.requests[0]
        assert request.url.path == "/users"
        assert request.url.params["email"] == "ada@example.com"
        assert json.loads(capsys.readouterr().out)["id"] == "7"

    def test_get_by_email_no_match(self, invoke: Invoke, capsys: pytest.CaptureFixture[str]) -> None:
        code, _ = invoke(["users", "get", "nobody@example.com"], lambda r: json_response(_list_body([])))
        assert code == exit_codes.SUCCESS
        assert "User not found" in capsys.readouterr().err

    def test_create_with_custom_attributes(self, invoke: Invoke) -> None:
        _, transport = invoke(
            ["users", "create", "-e", "a@b.com", "--custom", '{"plan": "pro"}', "-f", "json"],
            lambda r: json_response({"id": "1"}),
        )
        assert transport.bodies() == [
            {"email": "a@b.com", "custom_attributes": {"plan": "pro"}},
        ]

    def test_create_bad_custom_json_sends_nothing(self, invoke: Invoke) -> None:
        with pytest.raises(LocalValidationError, match="Invalid JSON"):
            invoke(["users", "create", "-e", "a@b.com", "--custom", "{oops"])

    def test_update_puts_id(self, invoke: Invoke) -> None:
        _, transport = invoke(
            ["users", "update", "u1", "-n", "Ada", "-f", "json"], lambda r: json_response({"id": "u1"}),
        )
        assert transport.requests[0].method == "PUT"
        assert transport.requests[0].url.path == "/users/u1"
        assert transport.bodies() == [{"id": "u1", "name": "Ada"}]

    def test_search(self, invoke: Invoke) -> None:
        _, transport = invoke(
            ["users", "search", "ada", "-f", "json"], lambda r: json_response({"data": []}),
        )
        assert transport.requests[0].url.path == "/search"
        assert transport.bodies()[0]["query"]["field"] == "email"


# ---------------------------------------------------------------------------
# contacts
# ---------------------------------------------------------------------------

class TestContacts:
    def test_csv_placeholder_scenario(self, invoke: Invoke, capsys: pytest.CaptureFixture[str]) -> None:
        body = _list_body([{"id": "42", "email": "a@b.com", "name": None}])
        invoke(["contacts", "list", "-f", "csv"], lambda r: json_response(body))
        assert capsys.readouterr().out.splitlines() == [
            '"ID","Email","Name","Phone","Created"',
            '"42","a@b.com","-","-","-"',
        ]

    def test_list_all_follows_cursor(self, invoke: Invoke, capsys: pytest.CaptureFixture[str]) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            if request.url.params.get("starting_after") == "c1":
                return json_response(_list_body([{"id": "2"}]))
            return json_response(
                {"data": [{"id": "1"}], "pages": {"next": {"starting_after": "c1"}}},
            )

        _, transport = invoke(["contacts", "list", "--all", "-f", "json"], handler)
        assert len(transport.requests) == 2
        assert [r["id"] for r in json.loads(capsys.readouterr().out)] == ["1", "2"]

    def test_empty_table(self, invoke: Invoke, capsys: pytest.CaptureFixture[str]) -> None:
        invoke(["contacts", "list"], lambda r: json_response(_list_body([])))
        assert capsys.readouterr().out.strip() == "No data found"

    def test_create_defaults_role(self, invoke: Invoke) -> None:
        _, transport = invoke(
            ["contacts", "create", "-e", "a@b.com", "-f", "json"], lambda r: json_response({"id": "1"}),
        )
        assert transport.bodies() == [{"role": "user", "email": "a@b.com"}]

    def test_delete_without_force_sends_nothing(
        self, invoke: Invoke, capsys: pytest.CaptureFixture[str],
    ) -> None:
        code, transport = invoke(["contacts", "delete", "42"])
        assert code == exit_codes.SUCCESS
        assert transport.requests == []
        err = capsys.readouterr().err
        assert "This will permanently delete the contact." in err
        assert "Use --force to skip this confirmation." in err

    def test_delete_with_force(self, invoke: Invoke, capsys: pytest.CaptureFixture[str]) -> None:
        _, transport = invoke(["contacts", "delete", "42", "--force"])
        assert transport.requests[0].method == "DELETE"
        assert transport.requests[0].url.path == "/contacts/42"
        assert "Contact deleted successfully" in capsys.readouterr().err

    def test_convert(self, invoke: Invoke) -> None:
        _, transport = invoke(
            ["contacts", "convert", "c1", "-e", "a@b.com", "-f", "json"],
            lambda r: json_response({"id": "u1"}),
        )
        assert transport.requests[0].url.path == "/contacts/convert"
        assert transport.bodies() == [{"contact": {"id": "c1"}, "user": {"email": "a@b.com"}}]

    def test_not_found_propagates(self, invoke: Invoke) -> None:
        with pytest.raises(NotFoundError, match="Contact Not Found"):
            invoke(
                ["contacts", "get", "missing"],
                lambda r: json_response({"errors": [{"message": "Contact Not Found"}]}, 404),
            )


# ---------------------------------------------------------------------------
# conversations
# ---------------------------------------------------------------------------

class TestConversations:
    def test_list_filters(self, invoke: Invoke) -> None:
        _, transport = invoke(
            ["conversations", "list", "-s", "open", "--unassigned", "-f", "json"],
            lambda r: json_response(_list_body([], key="conversations")),
        )
        params = transport.requests[0].url.params
        assert params["state"] == "open"
        assert params["assignee_id"] == "unassigned"
        assert params["per_page"] == "20"

    def test_get_prints_thread(self, invoke: Invoke, capsys: pytest.CaptureFixture[str]) -> None:
        conversation = {
            "id": "c1",
            "state": "open",
            "created_at": 1700000000,
            "source": {"type": "email", "body": "Help please", "author": {"name": "Ada", "type": "user"}},
            "conversation_parts": {
                "conversation_parts": [
                    {"body": "On it", "author": {"name": "Bob", "type": "admin"}, "created_at": 1700000100},
                ],
            },
        }
        _, transport = invoke(["conversations", "get", "c1"], lambda r: json_response(conversation))
        assert transport.requests[0].url.params["display_as"] == "plaintext"
        out = capsys.readouterr().out
        assert "Conversation Messages:" in out
        assert "Help please" in out
        assert "Bob (admin)" in out
        assert "On it" in out

    def test_thread_author_names_printed_verbatim(
        self, invoke: Invoke, capsys: pytest.CaptureFixture[str],
    ) -> None:
        conversation = {
            "id": "c2",
            "source": {"body": "Hi", "author": {"name": "Ops [/bot]", "type": "user"}},
            "conversation_parts": {
                "conversation_parts": [
                    {"body": "Done", "author": {"name": "[bold]Eve", "type": "admin"}},
                ],
            },
        }
        assert invoke(["conversations", "get", "c2"], lambda r: json_response(conversation))[0] == 0
        out = capsys.readouterr().out
        assert "Ops [/bot] (user)" in out
        assert "[bold]Eve (admin)" in out

    def test_get_metadata_only(self, invoke: Invoke, capsys: pytest.CaptureFixture[str]) -> None:
        _, transport = invoke(
            ["conversations", "get", "c1", "--metadata-only"], lambda r: json_response({"id": "c1"}),
        )
        assert "display_as" not in transport.requests[0].url.params
        assert "Conversation Messages:" not in capsys.readouterr().out

    def test_reply(self, invoke: Invoke) -> None:
        _, transport = invoke(["conversations", "reply", "c1", "-m", "Thanks!", "-t", "note"])
        assert transport.requests[0].url.path == "/conversations/c1/reply"
        assert transport.bodies() == [
            {"type": "admin", "message_type": "note", "body": "Thanks!", "admin_id": "991"},
        ]

    def test_admin_id_flag_overrides_setting(self, invoke: Invoke) -> None:
        _, transport = invoke(["conversations", "close", "c1", "--admin-id", "555"])
        assert transport.requests[0].url.path == "/conversations/c1/close"
        assert transport.bodies() == [{"admin_id": "555"}]

    @pytest.mark.parametrize(
        "argv",
        [
            ["conversations", "close", "c1"],
            ["conversations", "reply", "c1", "-m", "hi"],
            ["conversations", "tag", "c1", "t1"],
        ],
    )
    def test_missing_admin_id_sends_nothing(self, invoke: Invoke, argv: list[str]) -> None:
        with pytest.raises(LocalValidationError, match="No admin ID"):
            invoke(argv, admin_id=None)

    def test_snooze(self, invoke: Invoke, capsys: pytest.CaptureFixture[str]) -> None:
        _, transport = invoke(["conversations", "snooze", "c1", "-u", "1700000000"])
        assert transport.requests[0].url.path == "/conversations/c1/snooze"
        assert transport.bodies() == [{"admin_id": "991", "snoozed_until": 1700000000}]
        assert "Conversation snoozed until" in capsys.readouterr().err

    def test_assign_team(self, invoke: Invoke) -> None:
        _, transport = invoke(["conversations", "assign", "c1", "-t", "77"])
        assert transport.bodies() == [{"type": "team", "admin_id": "991", "assignee_id": "77"}]

    def test_assign_needs_target(self, invoke: Invoke) -> None:
        with pytest.raises(LocalValidationError, match="either --admin or --team"):
            invoke(["conversations", "assign", "c1"])

    def test_tag_and_untag(self, invoke: Invoke) -> None:
        _, tagged = invoke(["conversations", "tag", "c1", "t9"])
        assert tagged.requests[0].url.path == "/conversations/c1/tags"
        assert tagged.bodies() == [{"id": "t9", "admin_id": "991"}]

        _, untagged = invoke(["conversations", "untag", "c1", "t9"])
        assert untagged.requests[0].method == "DELETE"
        assert untagged.requests[0].url.path == "/conversations/c1/tags/t9"
        assert untagged.bodies() == [{"admin_id": "991"}]

    def test_search_uses_conversations_key(self, invoke: Invoke, capsys: pytest.CaptureFixture[str]) -> None:
        _, transport = invoke(
            ["conversations", "search", "refund", "-f", "json"],
            lambda r: json_response({"conversations": [{"id": "c1"}]}),
        )
        assert transport.bodies()[0]["query"]["field"] == "source.body"
        assert json.loads(capsys.readouterr().out) == [{"id": "c1"}]


# ---------------------------------------------------------------------------
# companies
# ---------------------------------------------------------------------------

class TestCompanies:
    def test_create(self, invoke: Invoke) -> None:
        _, transport = invoke(
            ["companies", "create", "-i", "acme-1", "-n", "Acme", "-s", "50", "-f", "json"],
            lambda r: json_response({"id": "x"}),
        )
        assert transport.bodies() == [{"company_id": "acme-1", "name": "Acme", "size": 50}]

    def test_create_requires_name(self, invoke: Invoke) -> None:
        with pytest.raises(SystemExit):
            invoke(["companies", "create", "-i", "acme-1"])

    def test_users_of_company(self, invoke: Invoke) -> None:
        _, transport = invoke(
            ["companies", "users", "x", "-f", "json"], lambda r: json_response(_list_body([])),
        )
        assert transport.requests[0].url.path == "/companies/x/users"

    def test_attach_and_detach(self, invoke: Invoke) -> None:
        _, attached = invoke(["companies", "attach-user", "co1", "u1"])
        assert attached.requests[0].method == "POST"
        assert attached.requests[0].url.path == "/users/u1/companies"
        assert attached.bodies() == [{"id": "co1"}]

        _, detached = invoke(["companies", "detach-user", "co1", "u1"])
        assert detached.requests[0].method == "DELETE"
        assert detached.requests[0].url.path == "/users/u1/companies/co1"


# ---------------------------------------------------------------------------
# articles
# ---------------------------------------------------------------------------

class TestArticles:
    def test_create_defaults_to_draft(self, invoke: Invoke) -> None:
        _, transport = invoke(
            ["articles", "create", "-t", "Setup", "-a", "12", "-p", "3", "-f", "json"],
            lambda r: json_response({"id": "a1"}),
        )
        assert transport.bodies() == [
            {"title": "Setup", "author_id": 12, "state": "draft", "parent_id": 3},
        ]

    def test_list_state_filter(self, invoke: Invoke) -> None:
        _, transport = invoke(
            ["articles", "list", "-s", "published", "-f", "json"], lambda r: json_response(_list_body([])),
        )
        assert transport.requests[0].url.params["state"] == "published"

    def test_search_uses_phrase(self, invoke: Invoke) -> None:
        _, transport = invoke(
            ["articles", "search", "billing", "-f", "json"], lambda r: json_response({"data": []}),
        )
        request = transport.requests[0]
        assert request.method == "GET"
        assert request.url.path == "/articles/search"
        assert request.url.params["phrase"] == "billing"

    def test_get_shows_content(self, invoke: Invoke, capsys: pytest.CaptureFixture[str]) -> None:
        article = {"id": "a1", "title": "Setup", "body": "<p>Step one</p>"}
        invoke(["articles", "get", "a1"], lambda r: json_response(article))
        out = capsys.readouterr().out
        assert "Article Content:" in out
        assert "No description" in out
        assert "<p>Step one</p>" in out

    def test_collections(self, invoke: Invoke) -> None:
        _, transport = invoke(
            ["articles", "collections", "-f", "json"], lambda r: json_response(_list_body([])),
        )
        assert transport.requests[0].url.path == "/help_center/collections"
