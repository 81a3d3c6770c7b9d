"""``intercom conversations`` — inbox actions.

Actions that act on behalf of an admin (reply, close, open, snooze,
assign, tag, untag) need an acting admin ID, taken from ``--admin-id``
or ``INTERCOM_ADMIN_ID``.  A missing ID is reported before any request
is sent.
"""

from __future__ import annotations

import argparse
from typing import Any

from intercom_cli.cli import exit_codes
from intercom_cli.cli.commands import add_group
from intercom_cli.cli.console import escape_markup, get_rich_console, success
from intercom_cli.cli.context import CommandContext, announce_count
from intercom_cli.core import columns
from intercom_cli.core.formatting import resolve_path
from intercom_cli.core.payloads import (
    assign_payload,
    reply_payload,
    search_query,
    snooze_payload,
)
from intercom_cli.core.responses import parse_list, parse_record, parse_search
from intercom_cli.utils.timefmt import format_local, parse_timestamp

LIST_KEY = "conversations"
STATES: tuple[str, ...] = ("open", "closed", "snoozed")
REPLY_TYPES: tuple[str, ...] = ("comment", "note")
RULE_WIDTH = 80


def register(subparsers: argparse._SubParsersAction, common: argparse.ArgumentParser) -> None:
    sub = add_group(
        subparsers,
        "conversations",
        aliases=("conversation", "conv"),
        help="Manage conversations",
    )

    acting = argparse.ArgumentParser(add_help=False)
    acting.add_argument(
        "--admin-id",
        default=None,
        help="acting admin ID (defaults to INTERCOM_ADMIN_ID)",
    )

    list_p = sub.add_parser("list", parents=[common], help="List conversations")
    list_p.add_argument("-l", "--limit", type=int, default=20, help="limit number of results")
    list_p.add_argument("-s", "--state", choices=STATES, help="filter by state")
    assignee = list_p.add_mutually_exclusive_group()
    assignee.add_argument("-a", "--assignee", help="filter by assignee ID")
    assignee.add_argument(
        "--unassigned", action="store_true", help="show only unassigned conversations",
    )
    list_p.add_argument("--all", action="store_true", help="fetch every page (ignore limit)")
    list_p.set_defaults(handler=list_conversations)

    get_p = sub.add_parser("get", parents=[common], help="Get conversation details")
    get_p.add_argument("id")
    get_p.add_argument(
        "--metadata-only",
        action="store_true",
        help="show only conversation metadata without messages",
    )
    get_p.set_defaults(handler=get_conversation)

    reply_p = sub.add_parser("reply", parents=[common, acting], help="Reply to a conversation")
    reply_p.add_argument("id")
    reply_p.add_argument("-m", "--message", required=True, help="message to send")
    reply_p.add_argument("-t", "--type", choices=REPLY_TYPES, default="comment", help="reply type")
    reply_p.add_argument("-a", "--assignee", help="assign to admin ID")
    reply_p.set_defaults(handler=reply_conversation)

    close_p = sub.add_parser("close", parents=[common, acting], help="Close a conversation")
    close_p.add_argument("id")
    close_p.set_defaults(handler=close_conversation)

    open_p = sub.add_parser("open", parents=[common, acting], help="Open a conversation")
    open_p.add_argument("id")
    open_p.set_defaults(handler=open_conversation)

    snooze_p = sub.add_parser("snooze", parents=[common, acting], help="Snooze a conversation")
    snooze_p.add_argument("id")
    snooze_p.add_argument(
        "-u", "--until", type=int, required=True, help="snooze until (Unix timestamp)",
    )
    snooze_p.set_defaults(handler=snooze_conversation)

    assign_p = sub.add_parser(
        "assign", parents=[common, acting], help="Assign a conversation to an admin or team",
    )
    assign_p.add_argument("id")
    target = assign_p.add_mutually_exclusive_group()
    target.add_argument("-a", "--admin", help="admin ID")
    target.add_argument("-t", "--team", help="team ID")
    assign_p.set_defaults(handler=assign_conversation)

    search_p = sub.add_parser("search", parents=[common], help="Search conversations")
    search_p.add_argument("query")
    search_p.set_defaults(handler=search_conversations)

    tag_p = sub.add_parser("tag", parents=[common, acting], help="Add a tag to a conversation")
    tag_p.add_argument("id")
    tag_p.add_argument("tag_id", metavar="tag-id")
    tag_p.set_defaults(handler=tag_conversation)

    untag_p = sub.add_parser(
        "untag", parents=[common, acting], help="Remove a tag from a conversation",
    )
    untag_p.add_argument("id")
    untag_p.add_argument("tag_id", metavar="tag-id")
    untag_p.set_defaults(handler=untag_conversation)


# ---------------------------------------------------------------------------
# Read
# ---------------------------------------------------------------------------

def list_conversations(ctx: CommandContext, args: argparse.Namespace) -> int:
    params: dict[str, Any] = {}
    if args.state:
        params["state"] = args.state
    if args.assignee:
        params["assignee_id"] = args.assignee
    if args.unassigned:
        params["assignee_id"] = "unassigned"

    if args.all:
        data = ctx.client.fetch_all("/conversations", params, list_key=LIST_KEY)
    else:
        params["per_page"] = args.limit
        data = parse_list(ctx.client.get("/conversations", params), LIST_KEY).records

    announce_count(len(data), "conversations")
    ctx.render(data, columns.CONVERSATIONS)
    return exit_codes.SUCCESS


def get_conversation(ctx: CommandContext, args: argparse.Namespace) -> int:
    params = {} if args.metadata_only else {"display_as": "plaintext"}
    conversation = parse_record(ctx.client.get(f"/conversations/{args.id}", params))

    if ctx.output_format == "json":
        ctx.render(conversation)
        return exit_codes.SUCCESS

    ctx.render(conversation, columns.CONVERSATIONS)
    if not args.metadata_only:
        print_thread(conversation)
    return exit_codes.SUCCESS


def search_conversations(ctx: CommandContext, args: argparse.Namespace) -> int:
    body = ctx.client.post("/conversations/search", search_query("source.body", args.query))
    data = parse_search(body, LIST_KEY)
    announce_count(len(data), "conversations")
    ctx.render(data, columns.CONVERSATIONS)
    return exit_codes.SUCCESS


def print_thread(conversation: dict[str, Any], console: Any = None) -> None:
    """Print the initial message and every conversation part."""
    out = console if console is not None else get_rich_console(stderr=False)

    out.print("\n[cyan]Conversation Messages:[/cyan]")
    out.print("[dim]" + "═" * RULE_WIDTH + "[/dim]")

    source_body = resolve_path(conversation, "source.body")
    if source_body:
        author = _author_name(conversation.get("source", {}).get("author"), "Customer")
        author_type = resolve_path(conversation, "source.author.type") or "user"
        when = _when(conversation.get("created_at"))
        header = escape_markup(f"[Initial Message] {author} ({author_type}) - {when}")
        out.print(f"[blue]{header}[/blue]")
        out.print(str(source_body), markup=False)
        out.print("[dim]" + "─" * RULE_WIDTH + "[/dim]")

    parts = resolve_path(conversation, "conversation_parts.conversation_parts")
    if isinstance(parts, list) and parts:
        for index, part in enumerate(parts, start=1):
            if not isinstance(part, dict):
                continue
            author = _author_name(part.get("author"), "Unknown")
            author_type = resolve_path(part, "author.type") or "unknown"
            style = {"admin": "green", "user": "blue"}.get(str(author_type), "dim")
            when = _when(part.get("created_at"))
            header = escape_markup(f"[{index}] {author} ({author_type}) - {when}")
            out.print(f"[{style}]{header}[/{style}]")
            if part.get("body"):
                out.print(str(part["body"]), markup=False)
            else:
                out.print("[italic]No message body[/italic]")
            out.print("[dim]" + "─" * RULE_WIDTH + "[/dim]")
    elif not source_body:
        out.print("[yellow]This conversation has no messages.[/yellow]")


def _author_name(author: Any, default: str) -> str:
    if not isinstance(author, dict):
        return default
    return str(author.get("name") or author.get("email") or default)


def _when(value: Any) -> str:
    moment = parse_timestamp(value)
    return format_local(moment) if moment is not None else "-"


# ---------------------------------------------------------------------------
# Actions
# ---------------------------------------------------------------------------

def reply_conversation(ctx: CommandContext, args: argparse.Namespace) -> int:
    payload = reply_payload(ctx.admin_id(args.admin_id), args.message, args.type, args.assignee)
    ctx.client.post(f"/conversations/{args.id}/reply", payload)
    success("Reply sent successfully")
    return exit_codes.SUCCESS


def close_conversation(ctx: CommandContext, args: argparse.Namespace) -> int:
    payload = {"admin_id": ctx.admin_id(args.admin_id)}
    ctx.client.post(f"/conversations/{args.id}/close", payload)
    success("Conversation closed successfully")
    return exit_codes.SUCCESS


def open_conversation(ctx: CommandContext, args: argparse.Namespace) -> int:
    payload = {"admin_id": ctx.admin_id(args.admin_id)}
    ctx.client.post(f"/conversations/{args.id}/open", payload)
    success("Conversation opened successfully")
    return exit_codes.SUCCESS


def snooze_conversation(ctx: CommandContext, args: argparse.Namespace) -> int:
    payload = snooze_payload(ctx.admin_id(args.admin_id), args.until)
    ctx.client.post(f"/conversations/{args.id}/snooze", payload)
    until = parse_timestamp(args.until)
    success(f"Conversation snoozed until {format_local(until) if until else args.until}")
    return exit_codes.SUCCESS


def assign_conversation(ctx: CommandContext, args: argparse.Namespace) -> int:
    payload = assign_payload(ctx.admin_id(args.admin_id), admin=args.admin, team=args.team)
    ctx.client.post(f"/conversations/{args.id}/assign", payload)
    success("Conversation assigned successfully")
    return exit_codes.SUCCESS


def tag_conversation(ctx: CommandContext, args: argparse.Namespace) -> int:
    payload = {"id": args.tag_id, "admin_id": ctx.admin_id(args.admin_id)}
    ctx.client.post(f"/conversations/{args.id}/tags", payload)
    success("Tag added successfully")
    return exit_codes.SUCCESS


def untag_conversation(ctx: CommandContext, args: argparse.Namespace) -> int:
    payload = {"admin_id": ctx.admin_id(args.admin_id)}
    ctx.client.delete(f"/conversations/{args.id}/tags/{args.tag_id}", payload)
    success("Tag removed successfully")
    return exit_codes.SUCCESS
