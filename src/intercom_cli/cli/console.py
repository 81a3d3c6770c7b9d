"""CLI console helpers with optional Rich support.

This module intentionally avoids module-level imports of optional UI
dependencies so bootstrap paths (``--help``, ``--version``) remain
functional even when Rich is not installed.

Two streams are used: rendered data goes to stdout, while status lines,
warnings, diagnostics and logs go to stderr so that piped output stays
clean.
"""

from __future__ import annotations

import sys
from typing import Any, TextIO

from intercom_cli.exceptions import EnvironmentError


def _load_rich_console_class() -> type[Any]:
	"""Return ``rich.console.Console`` class or raise ``EnvironmentError``."""
	try:
		from rich.console import Console
	except ModuleNotFoundError as exc:
		raise EnvironmentError(
			"rich is not installed. Install with: pip install rich",
		) from exc
	return Console


def get_rich_console(*, stderr: bool = True, file: TextIO | None = None) -> Any:
	"""Create a Rich console writing to *file*, else stderr (default) or stdout."""
	console_class = _load_rich_console_class()
	return console_class(stderr=stderr, file=file)


def escape_markup(text: object) -> str:
	"""Escape Rich markup in *text* so API values print verbatim.

	Without Rich the proxy prints plain text, so nothing needs escaping.
	"""
	try:
		from rich.markup import escape
	except ModuleNotFoundError:
		return str(text)
	return escape(str(text))


class _ConsoleProxy:
	"""Minimal ``print``-compatible proxy with Rich fallback."""

	def print(self, *objects: object) -> None:
		"""Render with Rich when available, else plain stderr print."""
		try:
			rich_console = get_rich_console()
		except EnvironmentError:
			print(*objects, file=sys.stderr)
			return
		rich_console.print(*objects)

	def is_terminal(self) -> bool:
		return sys.stderr.isatty()


console = _ConsoleProxy()


def success(message: str) -> None:
	console.print(f"[green]✓[/green] {message}")


def warning(message: str) -> None:
	console.print(f"[yellow]⚠[/yellow] {message}")

