"""``intercom contacts`` — contact CRUD, search, and lead-to-user conversion."""

from __future__ import annotations

import argparse

from intercom_cli.cli import exit_codes
from intercom_cli.cli.commands import add_group
from intercom_cli.cli.console import console, success
from intercom_cli.cli.context import CommandContext, announce_count, confirm_destructive
from intercom_cli.core import columns
from intercom_cli.core.payloads import (
    compact,
    convert_payload,
    search_query,
    with_custom_attributes,
)
from intercom_cli.core.responses import parse_list, parse_record, parse_search

ROLES: tuple[str, ...] = ("user", "lead")


def register(subparsers: argparse._SubParsersAction, common: argparse.ArgumentParser) -> None:
    sub = add_group(subparsers, "contacts", aliases=("contact",), help="Manage contacts")

    list_p = sub.add_parser("list", parents=[common], help="List all contacts")
    list_p.add_argument("-l", "--limit", type=int, default=50, help="limit number of results")
    list_p.add_argument("-a", "--all", action="store_true", help="fetch all contacts (ignore limit)")
    list_p.set_defaults(handler=list_contacts)

    get_p = sub.add_parser("get", parents=[common], help="Get contact by ID")
    get_p.add_argument("id")
    get_p.set_defaults(handler=get_contact)

    create_p = sub.add_parser("create", parents=[common], help="Create a new contact")
    create_p.add_argument("-e", "--email", help="contact email")
    create_p.add_argument("-n", "--name", help="contact name")
    create_p.add_argument("-p", "--phone", help="phone number")
    create_p.add_argument("-r", "--role", choices=ROLES, default="user", help="contact role")
    create_p.add_argument("--custom", metavar="JSON", help="custom attributes as JSON")
    create_p.set_defaults(handler=create_contact)

    update_p = sub.add_parser("update", parents=[common], help="Update a contact")
    update_p.add_argument("id")
    update_p.add_argument("-e", "--email", help="contact email")
    update_p.add_argument("-n", "--name", help="contact name")
    update_p.add_argument("-p", "--phone", help="phone number")
    update_p.add_argument("--custom", metavar="JSON", help="custom attributes as JSON")
    update_p.set_defaults(handler=update_contact)

    delete_p = sub.add_parser("delete", parents=[common], help="Delete a contact permanently")
    delete_p.add_argument("id")
    delete_p.add_argument("--force", action="store_true", help="skip confirmation")
    delete_p.set_defaults(handler=delete_contact)

    search_p = sub.add_parser("search", parents=[common], help="Search contacts by email")
    search_p.add_argument("query")
    search_p.set_defaults(handler=search_contacts)

    convert_p = sub.add_parser("convert", parents=[common], help="Convert a contact to a user")
    convert_p.add_argument("id")
    convert_p.add_argument(
        "-e", "--email", help="user email (required if contact has no email)",
    )
    convert_p.set_defaults(handler=convert_contact)


def list_contacts(ctx: CommandContext, args: argparse.Namespace) -> int:
    if args.all:
        console.print("[yellow]Fetching all contacts... This may take a while.[/yellow]")
        data = ctx.client.fetch_all("/contacts")
    else:
        data = parse_list(ctx.client.get("/contacts", {"per_page": args.limit})).records

    announce_count(len(data), "contacts")
    ctx.render(data, columns.CONTACTS)
    return exit_codes.SUCCESS


def get_contact(ctx: CommandContext, args: argparse.Namespace) -> int:
    contact = parse_record(ctx.client.get(f"/contacts/{args.id}"))
    ctx.render(contact, columns.CONTACTS)
    return exit_codes.SUCCESS


def create_contact(ctx: CommandContext, args: argparse.Namespace) -> int:
    payload = compact(
        {"role": args.role, "email": args.email, "name": args.name, "phone": args.phone}
    )
    with_custom_attributes(payload, args.custom)

    contact = parse_record(ctx.client.post("/contacts", payload))
    success("Contact created successfully")
    ctx.render(contact, columns.CONTACTS)
    return exit_codes.SUCCESS


def update_contact(ctx: CommandContext, args: argparse.Namespace) -> int:
    payload = compact({"id": args.id, "email": args.email, "name": args.name, "phone": args.phone})
    with_custom_attributes(payload, args.custom)

    contact = parse_record(ctx.client.put(f"/contacts/{args.id}", payload))
    success("Contact updated successfully")
    ctx.render(contact, columns.CONTACTS)
    return exit_codes.SUCCESS


def delete_contact(ctx: CommandContext, args: argparse.Namespace) -> int:
    if not confirm_destructive(args, "contact"):
        return exit_codes.SUCCESS

    ctx.client.delete(f"/contacts/{args.id}")
    success("Contact deleted successfully")
    return exit_codes.SUCCESS


def search_contacts(ctx: CommandContext, args: argparse.Namespace) -> int:
    body = ctx.client.post("/contacts/search", search_query("email", args.query))
    data = parse_search(body)
    announce_count(len(data), "contacts")
    ctx.render(data, columns.CONTACTS)
    return exit_codes.SUCCESS


def convert_contact(ctx: CommandContext, args: argparse.Namespace) -> int:
    user = parse_record(ctx.client.post("/contacts/convert", convert_payload(args.id, args.email)))
    success("Contact converted to user successfully")
    ctx.render(user, columns.USERS)
    return exit_codes.SUCCESS
