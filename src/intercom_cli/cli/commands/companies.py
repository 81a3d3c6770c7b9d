"""``intercom companies`` — company CRUD, membership, and search."""

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
    sub = add_group(subparsers, "companies", aliases=("company",), help="Manage companies")

    list_p = sub.add_parser("list", parents=[common], help="List all companies")
    list_p.add_argument("-l", "--limit", type=int, default=50, help="limit number of results")
    list_p.add_argument("-a", "--all", action="store_true", help="fetch all companies (ignore limit)")
    list_p.set_defaults(handler=list_companies)

    get_p = sub.add_parser("get", parents=[common], help="Get company by ID")
    get_p.add_argument("id")
    get_p.set_defaults(handler=get_company)

    create_p = sub.add_parser("create", parents=[common], help="Create a new company")
    create_p.add_argument("-i", "--id", dest="company_id", required=True, help="your internal company ID")
    create_p.add_argument("-n", "--name", required=True, help="company name")
    _add_company_fields(create_p)
    create_p.set_defaults(handler=create_company)

    update_p = sub.add_parser("update", parents=[common], help="Update a company")
    update_p.add_argument("id")
    update_p.add_argument("-n", "--name", help="company name")
    _add_company_fields(update_p)
    update_p.set_defaults(handler=update_company)

    delete_p = sub.add_parser("delete", parents=[common], help="Delete a company permanently")
    delete_p.add_argument("id")
    delete_p.add_argument("--force", action="store_true", help="skip confirmation")
    delete_p.set_defaults(handler=delete_company)

    users_p = sub.add_parser("users", parents=[common], help="List users in a company")
    users_p.add_argument("id")
    users_p.set_defaults(handler=list_company_users)

    attach_p = sub.add_parser("attach-user", parents=[common], help="Attach a user to a company")
    attach_p.add_argument("company_id", metavar="company-id")
    attach_p.add_argument("user_id", metavar="user-id")
    attach_p.set_defaults(handler=attach_user)

    detach_p = sub.add_parser("detach-user", parents=[common], help="Detach a user from a company")
    detach_p.add_argument("company_id", metavar="company-id")
    detach_p.add_argument("user_id", metavar="user-id")
    detach_p.set_defaults(handler=detach_user)

    search_p = sub.add_parser("search", parents=[common], help="Search companies by name")
    search_p.add_argument("query")
    search_p.set_defaults(handler=search_companies)


def _add_company_fields(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("-p", "--plan", help="company plan")
    parser.add_argument("-s", "--size", type=int, help="company size (number of employees)")
    parser.add_argument("-w", "--website", help="company website")
    parser.add_argument("--industry", help="company industry")
    parser.add_argument("--custom", metavar="JSON", help="custom attributes as JSON")


def _company_fields(args: argparse.Namespace) -> dict:
    return {
        "plan": args.plan,
        "size": args.size,
        "website": args.website,
        "industry": args.industry,
    }


def list_companies(ctx: CommandContext, args: argparse.Namespace) -> int:
    if args.all:
        console.print("[yellow]Fetching all companies... This may take a while.[/yellow]")
        data = ctx.client.fetch_all("/companies")
    else:
        data = parse_list(ctx.client.get("/companies", {"per_page": args.limit})).records

    announce_count(len(data), "companies")
    ctx.render(data, columns.COMPANIES)
    return exit_codes.SUCCESS


def get_company(ctx: CommandContext, args: argparse.Namespace) -> int:
    company = parse_record(ctx.client.get(f"/companies/{args.id}"))
    ctx.render(company, columns.COMPANIES)
    return exit_codes.SUCCESS


def create_company(ctx: CommandContext, args: argparse.Namespace) -> int:
    payload = compact({"company_id": args.company_id, "name": args.name, **_company_fields(args)})
    with_custom_attributes(payload, args.custom)

    company = parse_record(ctx.client.post("/companies", payload))
    success("Company created successfully")
    ctx.render(company, columns.COMPANIES)
    return exit_codes.SUCCESS


def update_company(ctx: CommandContext, args: argparse.Namespace) -> int:
    payload = compact({"id": args.id, "name": args.name, **_company_fields(args)})
    with_custom_attributes(payload, args.custom)

    company = parse_record(ctx.client.put(f"/companies/{args.id}", payload))
    success("Company updated successfully")
    ctx.render(company, columns.COMPANIES)
    return exit_codes.SUCCESS


def delete_company(ctx: CommandContext, args: argparse.Namespace) -> int:
    if not confirm_destructive(args, "company"):
        return exit_codes.SUCCESS

    ctx.client.delete(f"/companies/{args.id}")
    success("Company deleted successfully")
    return exit_codes.SUCCESS


def list_company_users(ctx: CommandContext, args: argparse.Namespace) -> int:
    data = parse_list(ctx.client.get(f"/companies/{args.id}/users")).records
    announce_count(len(data), "users in company")
    ctx.render(data, columns.USERS)
    return exit_codes.SUCCESS


def attach_user(ctx: CommandContext, args: argparse.Namespace) -> int:
    ctx.client.post(f"/users/{args.user_id}/companies", {"id": args.company_id})
    success("User attached to company successfully")
    return exit_codes.SUCCESS


def detach_user(ctx: CommandContext, args: argparse.Namespace) -> int:
    ctx.client.delete(f"/users/{args.user_id}/companies/{args.company_id}")
    success("User detached from company successfully")
    return exit_codes.SUCCESS


def search_companies(ctx: CommandContext, args: argparse.Namespace) -> int:
    body = ctx.client.post("/companies/search", search_query("name", args.query))
    data = parse_search(body)
    announce_count(len(data), "companies")
    ctx.render(data, columns.COMPANIES)
    return exit_codes.SUCCESS
