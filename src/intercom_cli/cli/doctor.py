"""``intercom doctor`` — environment diagnostics command.

Gathers runtime and configuration information and renders a Rich table
summarising whether intercom-cli is ready to talk to the API.  Nothing
here performs network I/O; the token is reported, never verified.
"""

from __future__ import annotations

import platform
import sys
from importlib import metadata

from intercom_cli.cli import exit_codes
from intercom_cli.cli.console import console
from intercom_cli.config import Settings
from intercom_cli.core.models import TokenSource
from intercom_cli.infra.credentials import CredentialResolver
from intercom_cli.version import __version__

OK = "[green]OK[/green]"
WARN = "[yellow]WARN[/yellow]"
FAIL = "[red]FAIL[/red]"

Check = tuple[str, str, str]


# ---------------------------------------------------------------------------
# Diagnostic collectors
# ---------------------------------------------------------------------------

def _python_version_check() -> Check:
    version = platform.python_version()
    ok = sys.version_info[:2] >= (3, 10)
    return "Python", version, OK if ok else "[red]FAIL (>=3.10 required)[/red]"


def _package_check(distribution: str, *, required: bool = True) -> Check:
    """Report the installed version of *distribution*."""
    try:
        return distribution, metadata.version(distribution), OK
    except metadata.PackageNotFoundError:
        return distribution, "NOT INSTALLED", FAIL if required else WARN


def _api_check(settings: Settings) -> Check:
    return "API", f"{settings.api_url} (v{settings.api_version})", OK


def _token_check(resolver: CredentialResolver) -> Check:
    resolved = resolver.lookup()
    if resolved is None:
        return "Token", "not configured", FAIL
    source = "env" if resolved.source is TokenSource.ENVIRONMENT else "file"
    return "Token", f"{resolved.masked()} ({source})", OK


def _admin_check(settings: Settings) -> Check:
    if settings.admin_id:
        return "Admin ID", settings.admin_id, OK
    return "Admin ID", "not set", WARN


def _status_plain(status: str) -> str:
    """Convert rich-markup status to plain text."""
    for word in ("FAIL", "WARN", "OK"):
        if word in status:
            return word
    return status


def _print_plain_doctor_table(checks: list[Check]) -> None:
    print("\nintercom doctor", file=sys.stderr)
    print("=" * 64, file=sys.stderr)
    print(f"{'Component':<14} {'Value':<40} {'Status':<8}", file=sys.stderr)
    print("-" * 64, file=sys.stderr)
    for label, value, status in checks:
        print(f"{label:<14} {value:<40} {_status_plain(status):<8}", file=sys.stderr)
    print(file=sys.stderr)


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------

def collect_checks(settings: Settings, resolver: CredentialResolver) -> list[Check]:
    return [
        ("intercom-cli", __version__, OK),
        _python_version_check(),
        _package_check("httpx"),
        _package_check("rich", required=False),
        _package_check("questionary", required=False),
        _api_check(settings),
        _token_check(resolver),
        _admin_check(settings),
    ]


def run_doctor(settings: Settings, resolver: CredentialResolver) -> int:
    """Execute all diagnostic checks and render a summary table.

    Returns
    -------
    int
        :data:`exit_codes.SUCCESS` when no check failed,
        :data:`exit_codes.GENERAL_ERROR` otherwise.  Warnings do not fail.
    """
    checks = collect_checks(settings, resolver)
    has_failure = any("FAIL" in status for _, _, status in checks)

    try:
        from rich.table import Table
    except ModuleNotFoundError:
        _print_plain_doctor_table(checks)
        print("Some checks failed." if has_failure else "All checks passed.", file=sys.stderr)
        return exit_codes.GENERAL_ERROR if has_failure else exit_codes.SUCCESS

    table = Table(
        title="intercom doctor",
        show_header=True,
        header_style="bold cyan",
        border_style="dim",
    )
    table.add_column("Component", style="bold", min_width=12)
    table.add_column("Value", min_width=20)
    table.add_column("Status", justify="center", min_width=8)
    for label, value, status in checks:
        table.add_row(label, value, status)

    console.print()
    console.print(table)
    console.print()

    if has_failure:
        console.print("[bold red]Some checks failed.[/bold red]")
        return exit_codes.GENERAL_ERROR
    console.print("[bold green]All checks passed.[/bold green]")
    return exit_codes.SUCCESS
