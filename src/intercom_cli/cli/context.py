"""Per-invocation state handed to every command handler.

Handlers receive a :class:`CommandContext` instead of reaching for
module-level singletons, which keeps them testable with a substitute
client.
"""

from __future__ import annotations

import argparse
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any

from intercom_cli.cli import output
from intercom_cli.cli.console import console, warning
from intercom_cli.config import Settings
from intercom_cli.core.models import Column
from intercom_cli.core.payloads import require_admin_id
from intercom_cli.infra.credentials import CredentialResolver, CredentialStore
from intercom_cli.infra.http_client import IntercomClient


@dataclass
class CommandContext:
    """Everything a command needs for one run."""

    settings: Settings
    client: IntercomClient
    store: CredentialStore
    resolver: CredentialResolver
    output_format: str = output.DEFAULT_FORMAT

    def render(self, data: Any, columns: Sequence[Column] = ()) -> None:
        output.render(data, self.output_format, columns)

    def admin_id(self, override: str | None = None) -> str:
        """Acting admin: the ``--admin-id`` flag, else ``INTERCOM_ADMIN_ID``."""
        return require_admin_id(override or self.settings.admin_id)


Handler = Callable[[CommandContext, argparse.Namespace], int]


def announce_count(count: int, noun: str) -> None:
    """Print ``Found N <noun>`` on stderr."""
    console.print(f"[green]Found {count} {noun}[/green]\n")


def confirm_destructive(args: argparse.Namespace, noun: str) -> bool:
    """Return ``True`` if ``--force`` was given; otherwise warn.

    Callers exit successfully without doing anything when this returns
    ``False``.
    """
    if getattr(args, "force", False):
        return True
    warning(f"This will permanently delete the {noun}.")
    console.print("Use --force to skip this confirmation.")
    return False
