"""Command modules, one per resource kind.

Each module exposes ``register(subparsers, common)`` which adds its
sub-command group to the top-level parser.  Leaf parsers bind a
``handler(ctx, args) -> int`` via ``set_defaults``.
"""

from __future__ import annotations

import argparse

from intercom_cli.cli import exit_codes
from intercom_cli.cli.context import CommandContext, Handler


def add_group(
    subparsers: argparse._SubParsersAction,
    name: str,
    *,
    help: str,
    aliases: tuple[str, ...] = (),
) -> argparse._SubParsersAction:
    """Add a resource group and return its own sub-parser collection.

    Invoking the group without an action prints the group's help.
    """
    group = subparsers.add_parser(name, aliases=list(aliases), help=help, description=help)
    group.set_defaults(handler=group_help(group))
    return group.add_subparsers(dest="action", metavar="<action>")


def group_help(parser: argparse.ArgumentParser) -> Handler:
    def handler(_ctx: CommandContext, _args: argparse.Namespace) -> int:
        parser.print_help()
        return exit_codes.SUCCESS

    return handler


def register_all(subparsers: argparse._SubParsersAction, common: argparse.ArgumentParser) -> None:
    from intercom_cli.cli.commands import (
        articles,
        auth,
        companies,
        contacts,
        conversations,
        users,
    )

    for module in (auth, users, contacts, conversations, companies, articles):
        module.register(subparsers, common)
