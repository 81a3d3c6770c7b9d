"""``intercom articles`` — help-center articles and collections."""

from __future__ import annotations

import argparse
from typing import Any

from intercom_cli.cli import exit_codes
from intercom_cli.cli.commands import add_group
from intercom_cli.cli.console import get_rich_console, success
from intercom_cli.cli.context import CommandContext, announce_count, confirm_destructive
from intercom_cli.core import columns
from intercom_cli.core.formatting import PLACEHOLDER
from intercom_cli.core.payloads import compact
from intercom_cli.core.responses import parse_list, parse_record, parse_search

STATES: tuple[str, ...] = ("published", "draft")
RULE_WIDTH = 60


def register(subparsers: argparse._SubParsersAction, common: argparse.ArgumentParser) -> None:
    sub = add_group(
        subparsers, "articles", aliases=("article",), help="Manage help center articles",
    )

    list_p = sub.add_parser("list", parents=[common], help="List all articles")
    list_p.add_argument("-l", "--limit", type=int, default=50, help="limit number of results")
    list_p.add_argument("-s", "--state", choices=STATES, help="filter by state")
    list_p.set_defaults(handler=list_articles)

    get_p = sub.add_parser("get", parents=[common], help="Get article by ID")
    get_p.add_argument("id")
    get_p.set_defaults(handler=get_article)

    create_p = sub.add_parser("create", parents=[common], help="Create a new article")
    create_p.add_argument("-t", "--title", required=True, help="article title")
    create_p.add_argument("-a", "--author", type=int, required=True, help="author (admin) ID")
    create_p.add_argument("-d", "--description", help="article description")
    create_p.add_argument("-b", "--body", help="article body content")
    create_p.add_argument("-s", "--state", choices=STATES, default="draft", help="article state")
    create_p.add_argument("-p", "--parent", type=int, help="parent collection ID")
    create_p.set_defaults(handler=create_article)

    update_p = sub.add_parser("update", parents=[common], help="Update an article")
    update_p.add_argument("id")
    update_p.add_argument("-t", "--title", help="article title")
    update_p.add_argument("-d", "--description", help="article description")
    update_p.add_argument("-b", "--body", help="article body content")
    update_p.add_argument("-s", "--state", choices=STATES, help="article state")
    update_p.add_argument("-p", "--parent", type=int, help="parent collection ID")
    update_p.set_defaults(handler=update_article)

    delete_p = sub.add_parser("delete", parents=[common], help="Delete an article permanently")
    delete_p.add_argument("id")
    delete_p.add_argument("--force", action="store_true", help="skip confirmation")
    delete_p.set_defaults(handler=delete_article)

    search_p = sub.add_parser("search", parents=[common], help="Search articles")
    search_p.add_argument("query")
    search_p.set_defaults(handler=search_articles)

    collections_p = sub.add_parser("collections", parents=[common], help="List all collections")
    collections_p.set_defaults(handler=list_collections)

    create_coll_p = sub.add_parser(
        "create-collection", parents=[common], help="Create a new collection",
    )
    create_coll_p.add_argument("-n", "--name", required=True, help="collection name")
    create_coll_p.add_argument("-d", "--description", help="collection description")
    create_coll_p.set_defaults(handler=create_collection)


def list_articles(ctx: CommandContext, args: argparse.Namespace) -> int:
    params: dict[str, Any] = {"per_page": args.limit}
    if args.state:
        params["state"] = args.state

    data = parse_list(ctx.client.get("/articles", params)).records
    announce_count(len(data), "articles")
    ctx.render(data, columns.ARTICLES)
    return exit_codes.SUCCESS


def get_article(ctx: CommandContext, args: argparse.Namespace) -> int:
    article = parse_record(ctx.client.get(f"/articles/{args.id}"))

    if ctx.output_format == "json":
        ctx.render(article)
        return exit_codes.SUCCESS

    ctx.render(article, columns.ARTICLES)
    print_article(article)
    return exit_codes.SUCCESS


def print_article(article: dict[str, Any], console: Any = None) -> None:
    """Print title, description and body below the metadata table."""
    out = console if console is not None else get_rich_console(stderr=False)
    from rich.markup import escape

    out.print("\n[cyan]Article Content:[/cyan]")
    out.print("[dim]" + "─" * RULE_WIDTH + "[/dim]")
    out.print(f"[bold]Title:[/bold] {escape(str(article.get('title') or PLACEHOLDER))}")
    description = article.get("description") or "No description"
    out.print(f"[bold]Description:[/bold] {escape(str(description))}")
    out.print("[dim]" + "─" * RULE_WIDTH + "[/dim]")
    out.print(str(article.get("body") or "No content"), markup=False)


def create_article(ctx: CommandContext, args: argparse.Namespace) -> int:
    payload = compact(
        {
            "title": args.title,
            "author_id": args.author,
            "state": args.state,
            "description": args.description,
            "body": args.body,
            "parent_id": args.parent,
        }
    )
    article = parse_record(ctx.client.post("/articles", payload))
    success("Article created successfully")
    ctx.render(article, columns.ARTICLES)
    return exit_codes.SUCCESS


def update_article(ctx: CommandContext, args: argparse.Namespace) -> int:
    payload = compact(
        {
            "title": args.title,
            "description": args.description,
            "body": args.body,
            "state": args.state,
            "parent_id": args.parent,
        }
    )
    article = parse_record(ctx.client.put(f"/articles/{args.id}", payload))
    success("Article updated successfully")
    ctx.render(article, columns.ARTICLES)
    return exit_codes.SUCCESS


def delete_article(ctx: CommandContext, args: argparse.Namespace) -> int:
    if not confirm_destructive(args, "article"):
        return exit_codes.SUCCESS

    ctx.client.delete(f"/articles/{args.id}")
    success("Article deleted successfully")
    return exit_codes.SUCCESS


def search_articles(ctx: CommandContext, args: argparse.Namespace) -> int:
    data = parse_search(ctx.client.get("/articles/search", {"phrase": args.query}))
    announce_count(len(data), "articles")
    ctx.render(data, columns.ARTICLES)
    return exit_codes.SUCCESS


def list_collections(ctx: CommandContext, args: argparse.Namespace) -> int:
    data = parse_list(ctx.client.get("/help_center/collections")).records
    announce_count(len(data), "collections")
    ctx.render(data, columns.COLLECTIONS)
    return exit_codes.SUCCESS


def create_collection(ctx: CommandContext, args: argparse.Namespace) -> int:
    payload = compact({"name": args.name, "description": args.description})
    collection = parse_record(ctx.client.post("/help_center/collections", payload))
    success("Collection created successfully")
    ctx.render(collection, columns.COLLECTIONS)
    return exit_codes.SUCCESS
