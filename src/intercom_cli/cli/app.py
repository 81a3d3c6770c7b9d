"""CLI application entry point and command routing for intercom-cli.

This module is the **sole error boundary** for the entire application.
It catches :class:`~intercom_cli.exceptions.IntercomCliError`,
``KeyboardInterrupt``, and any unexpected ``Exception``, rendering
user-friendly messages via Rich and returning well-defined exit codes.

Architecture notes
------------------
* No business logic lives here: parsing is delegated to
  :mod:`intercom_cli.cli.commands`, requests to the infra layer.
* Command handlers raise; they never print errors or exit themselves.
* This module is the only place that translates between the domain world
  and the OS process exit code.
"""

from __future__ import annotations

import argparse
import sys

from intercom_cli.cli import exit_codes, output
from intercom_cli.cli.console import console, escape_markup
from intercom_cli.exceptions import IntercomCliError
from intercom_cli.utils.log import get_logger, setup_logging
from intercom_cli.version import __version__

logger = get_logger(__name__)


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------

def _common_parser() -> argparse.ArgumentParser:
    """Options accepted after any leaf command, e.g. ``users list -f csv``."""
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "-f",
        "--format",
        choices=output.FORMATS,
        default=argparse.SUPPRESS,
        help="output format (default: table)",
    )
    return common


def _build_parser() -> argparse.ArgumentParser:
    """Construct the top-level argument parser.

    * ``intercom <resource> <action> [...]``  — API commands
    * ``intercom auth <action>``              — credential management
    * ``intercom doctor``                     — environment diagnostics
    * ``intercom --version``
    """
    from intercom_cli.cli.commands import register_all

    parser = argparse.ArgumentParser(
        prog="intercom",
        description="Command-line client for the Intercom REST API.",
    )
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-f",
        "--format",
        choices=output.FORMATS,
        default=output.DEFAULT_FORMAT,
        help="output format (default: %(default)s)",
    )
    parser.add_argument(
        "-e",
        "--env",
        default="production",
        help="environment whose .env.<env> file is loaded (default: %(default)s)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="log API requests and responses to stderr",
    )

    subparsers = parser.add_subparsers(dest="command", metavar="<command>")
    register_all(subparsers, _common_parser())

    doctor = subparsers.add_parser("doctor", help="Check the local environment")
    doctor.set_defaults(handler=None, doctor=True)
    return parser


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------

def main(argv: list[str] | None = None) -> int:
    """Run the intercom CLI.

    Parameters
    ----------
    argv:
        Explicit argument list.  When ``None`` (default), ``sys.argv[1:]``
        is used.  Accepting *argv* enables deterministic testing without
        monkeypatching.

    Returns
    -------
    int
        OS process exit code.
    """
    from intercom_cli.cli.context import CommandContext
    from intercom_cli.cli.progress import spinner_factory
    from intercom_cli.config import Settings
    from intercom_cli.infra.credentials import CredentialResolver, CredentialStore
    from intercom_cli.infra.http_client import IntercomClient

    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return exit_codes.SUCCESS

    setup_logging(args.verbose)
    settings = Settings.from_env(args.env)
    logger.debug("Using API %s (version %s)", settings.api_url, settings.api_version)

    store = CredentialStore(settings.config_file)
    resolver = CredentialResolver(store)

    if getattr(args, "doctor", False):
        from intercom_cli.cli.doctor import run_doctor

        return run_doctor(settings, resolver)

    with IntercomClient(settings, resolver, progress=spinner_factory) as client:
        ctx = CommandContext(
            settings=settings,
            client=client,
            store=store,
            resolver=resolver,
            output_format=args.format,
        )
        return args.handler(ctx, args)


# ---------------------------------------------------------------------------
# Script-level error boundary
# ---------------------------------------------------------------------------

def cli(argv: list[str] | None = None) -> None:
    """Top-level error boundary invoked by the console-script entry point.

    This function wraps :func:`main` and guarantees the process never
    exits with a raw stack trace during normal usage.
    """
    try:
        code = main(argv)
        sys.exit(code)
    except IntercomCliError as exc:
        console.print(f"[bold red]{exc.label}:[/bold red] {escape_markup(exc)}")
        if exc.hint:
            console.print(f"[yellow]{escape_markup(exc.hint)}[/yellow]")
        sys.exit(exit_codes.GENERAL_ERROR)
    except KeyboardInterrupt:
        console.print("\n[yellow]Aborted by user.[/yellow]")
        sys.exit(exit_codes.KEYBOARD_INTERRUPT)
    except Exception as exc:  # noqa: BLE001
        console.print(
            "[bold red]Unexpected error.[/bold red] "
            "Please report this issue.\n"
            f"  {type(exc).__name__}: {escape_markup(exc)}"
        )
        sys.exit(exit_codes.UNEXPECTED_ERROR)
