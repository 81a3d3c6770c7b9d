"""``intercom users`` — list, inspect, create, update, delete and search users."""

from __future__ import annotations

import argparse

from intercom_cli.cli import exit_codes
from intercom_cli.cli.commands import add_group
from intercom_cli.cli.console import console, success
from intercom_cli.cli.context import CommandContext, announce_count, confirm_destructive
from intercom_cli.core import columns
from intercom_cli.core.payloads import compact, search_query, with_custom_attributes
from intercom_cli.core.responses import parse_list, parse_record, parse_search


def register(subparsers: argparse._SubParsersAction, common: argparse.ArgumentParser) -> None:
    sub = add_group(subparsers, "users", aliases=("user",), help="Manage users")

    list_p = sub.add_parser("list", parents=[common], help="List all users")
    list_p.add_argument("-l", "--limit", type=int, default=50, help="limit number of results")
    list_p.add_argument("-a", "--all", action="store_true", help="fetch all users (ignore limit)")
    list_p.set_defaults(handler=list_users)

    get_p = sub.add_parser("get", parents=[common], help="Get user by ID or email")
    get_p.add_argument("id_or_email", metavar="id-or-email")
    get_p.set_defaults(handler=get_user)

    create_p = sub.add_parser("create", parents=[common], help="Create a new user")
    create_p.add_argument("-e", "--email", required=True, help="user email")
    create_p.add_argument("-n", "--name", help="user name")
    create_p.add_argument("-p", "--phone", help="phone number")
    create_p.add_argument("-c", "--company-id", help="company ID")
    create_p.add_argument("--custom", metavar="JSON", help="custom attributes as JSON")
    create_p.set_defaults(handler=create_user)

    update_p = sub.add_parser("update", parents=[common], help="Update a user")
    update_p.add_argument("id")
    update_p.add_argument("-e", "--email", help="user email")
    update_p.add_argument("-n", "--name", help="user name")
    update_p.add_argument("-p", "--phone", help="phone number")
    update_p.add_argument("--custom", metavar="JSON", help="custom attributes as JSON")
    update_p.set_defaults(handler=update_user)

    delete_p = sub.add_parser("delete", parents=[common], help="Delete a user permanently")
    delete_p.add_argument("id")
    delete_p.add_argument("--force", action="store_true", help="skip confirmation")
    delete_p.set_defaults(handler=delete_user)

    search_p = sub.add_parser("search", parents=[common], help="Search users by email")
    search_p.add_argument("query")
    search_p.set_defaults(handler=search_users)


def list_users(ctx: CommandContext, args: argparse.Namespace) -> int:
    if args.all:
        console.print("[yellow]Fetching all users... This may take a while.[/yellow]")
        data = ctx.client.fetch_all("/users")
    else:
        data = parse_list(ctx.client.get("/users", {"per_page": args.limit})).records

    announce_count(len(data), "users")
    ctx.render(data, columns.USERS)
    return exit_codes.SUCCESS


def get_user(ctx: CommandContext, args: argparse.Namespace) -> int:
    id_or_email: str = args.id_or_email
    if "@" in id_or_email:
        matches = parse_list(ctx.client.get("/users", {"email": id_or_email})).records
        user = matches[0] if matches else None
    else:
        user = parse_record(ctx.client.get(f"/users/{id_or_email}"))

    if user is None:
        console.print("[yellow]User not found[/yellow]")
        return exit_codes.SUCCESS

    ctx.render(user, columns.USERS)
    return exit_codes.SUCCESS


def create_user(ctx: CommandContext, args: argparse.Namespace) -> int:
    payload = compact({"email": args.email, "name": args.name, "phone": args.phone})
    if args.company_id:
        payload["companies"] = [{"company_id": args.company_id}]
    with_custom_attributes(payload, args.custom)

    user = parse_record(ctx.client.post("/users", payload))
    success("User created successfully")
    ctx.render(user, columns.USERS)
    return exit_codes.SUCCESS


def update_user(ctx: CommandContext, args: argparse.Namespace) -> int:
    payload = compact({"id": args.id, "email": args.email, "name": args.name, "phone": args.phone})
    with_custom_attributes(payload, args.custom)

    user = parse_record(ctx.client.put(f"/users/{args.id}", payload))
    success("User updated successfully")
    ctx.render(user, columns.USERS)
    return exit_codes.SUCCESS


def delete_user(ctx: CommandContext, args: argparse.Namespace) -> int:
    if not confirm_destructive(args, "user"):
        return exit_codes.SUCCESS

    ctx.client.delete(f"/users/{args.id}")
    success("User deleted successfully")
    return exit_codes.SUCCESS


def search_users(ctx: CommandContext, args: argparse.Namespace) -> int:
    data = parse_search(ctx.client.post("/search", search_query("email", args.query)))
    announce_count(len(data), "users")
    ctx.render(data, columns.USERS)
    return exit_codes.SUCCESS
