"""``intercom auth`` — manage the stored access token."""

from __future__ import annotations

import argparse

from intercom_cli.cli import exit_codes
from intercom_cli.cli.commands import add_group
from intercom_cli.cli.console import console, success
from intercom_cli.cli.context import CommandContext
from intercom_cli.core.models import TokenSource
from intercom_cli.exceptions import SET_TOKEN_COMMAND, LocalValidationError


def register(subparsers: argparse._SubParsersAction, common: argparse.ArgumentParser) -> None:
    sub = add_group(subparsers, "auth", help="Manage authentication")

    set_token = sub.add_parser(
        "set-token",
        parents=[common],
        help="Set your Intercom access token (prompts when omitted)",
    )
    set_token.add_argument("token", nargs="?", default=None, help="Access token")
    set_token.set_defaults(handler=_set_token)

    remove = sub.add_parser("remove-token", parents=[common], help="Remove stored access token")
    remove.set_defaults(handler=_remove_token)

    status = sub.add_parser("status", parents=[common], help="Check authentication status")
    status.set_defaults(handler=_status)


def _set_token(ctx: CommandContext, args: argparse.Namespace) -> int:
    token: str | None = args.token
    if token is None:
        from intercom_cli.cli.prompts import prompt_access_token

        token = prompt_access_token()
    token = token.strip()
    if not token:
        raise LocalValidationError("Access token must not be empty.")

    ctx.store.save(token)
    success("Access token saved successfully")
    return exit_codes.SUCCESS


def _remove_token(ctx: CommandContext, _args: argparse.Namespace) -> int:
    if ctx.store.remove():
        success("Access token removed successfully")
    else:
        console.print("[yellow]![/yellow] No token found to remove")
    return exit_codes.SUCCESS


def _status(ctx: CommandContext, _args: argparse.Namespace) -> int:
    resolved = ctx.resolver.lookup()
    if resolved is None:
        console.print("[yellow]![/yellow] No access token configured")
        console.print("\nTo set up authentication, run:")
        console.print(f"[cyan]    {SET_TOKEN_COMMAND}[/cyan]")
        return exit_codes.SUCCESS

    source = (
        "INTERCOM_ACCESS_TOKEN environment variable"
        if resolved.source is TokenSource.ENVIRONMENT
        else str(ctx.store.path)
    )
    success("Access token is configured")
    console.print(f"[dim]Token:[/dim] {resolved.masked()}")
    console.print(f"[dim]Source:[/dim] {source}")
    return exit_codes.SUCCESS
