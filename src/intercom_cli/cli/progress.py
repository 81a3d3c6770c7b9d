"""Rich-based transient spinner shown while a request is in flight.

The infra layer knows nothing about terminals: it accepts a
``progress`` factory and wraps each request in whatever context manager
the factory returns.  This module supplies that factory for the CLI.

Design
------
* :class:`RequestSpinner` wraps a Rich :class:`~rich.status.Status`.
* The spinner is transient — it leaves nothing behind on stderr.
* Non-interactive stderr (pipes, CI logs) gets no spinner at all.
* Shutdown-safe: stopping an already stopped spinner is a no-op.
"""

from __future__ import annotations

import contextlib
from typing import Any

from intercom_cli.cli.console import console, get_rich_console
from intercom_cli.exceptions import EnvironmentError


class RequestSpinner:
    """Context manager showing a spinner on stderr.

    Usage::

        with RequestSpinner("GET /contacts"):
            client.get("/contacts")
    """

    def __init__(self, message: str = "Loading...") -> None:
        rich_console = get_rich_console()
        self._status: Any = rich_console.status(
            f"[bold blue]{message}",
            spinner="dots",
        )
        self._started: bool = False

    # ------------------------------------------------------------------
    # Context manager
    # ------------------------------------------------------------------

    def __enter__(self) -> RequestSpinner:
        self.start()
        return self

    def __exit__(self, *_args: object) -> None:
        self.stop()

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def start(self) -> None:
        """Start the spinner."""
        if not self._started:
            self._status.start()
            self._started = True

    def stop(self) -> None:
        """Stop the spinner (idempotent)."""
        if self._started:
            self._status.stop()
            self._started = False


def spinner_factory(message: str) -> Any:
    """``progress`` factory for :class:`~intercom_cli.infra.IntercomClient`.

    Falls back to a no-op context when stderr is not a terminal or Rich
    is unavailable.
    """
    if not console.is_terminal():
        return contextlib.nullcontext()
    try:
        return RequestSpinner(message)
    except EnvironmentError:
        return contextlib.nullcontext()
