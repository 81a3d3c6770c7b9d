"""Render API data to stdout as a table, CSV, or JSON.

The text itself is produced by :mod:`intercom_cli.core.formatting`;
this module only chooses the format and writes it out.  Tables are
drawn with Rich.
"""

from __future__ import annotations

import sys
from collections.abc import Sequence
from typing import Any, TextIO

from intercom_cli.cli.console import get_rich_console
from intercom_cli.core import formatting
from intercom_cli.core.models import Column
from intercom_cli.exceptions import EnvironmentError, LocalValidationError

FORMATS: tuple[str, ...] = ("table", "csv", "json")
DEFAULT_FORMAT = "table"
NO_DATA_MESSAGE = "No data found"


def _import_rich_table() -> type[Any]:
    """Import rich table lazily for table rendering."""
    try:
        from rich.table import Table
    except ModuleNotFoundError as exc:
        raise EnvironmentError(
            "rich is not installed. Install with: pip install rich",
        ) from exc
    return Table


def render(
    data: Any,
    fmt: str,
    columns: Sequence[Column] = (),
    *,
    out: TextIO | None = None,
    console: Any = None,
) -> None:
    """Write *data* to *out* (stdout by default) in the requested format.

    Parameters
    ----------
    data:
        A record, a list of records, or ``None``.
    fmt:
        One of :data:`FORMATS`.
    columns:
        Column descriptors for table and CSV output; ignored for JSON.
    out:
        Stream for all output.  Defaults to ``sys.stdout``.
    console:
        Rich console for table output.  Defaults to a console on *out*.
    """
    if fmt not in FORMATS:
        raise LocalValidationError(
            f"Unknown output format: {fmt}",
            hint=f"Use one of: {', '.join(FORMATS)}",
        )
    stream = out if out is not None else sys.stdout

    if fmt == "json":
        stream.write(formatting.to_json(data) + "\n")
        return

    records = formatting.normalize(data)
    if not records:
        _no_data(out, console)
        return

    if fmt == "csv":
        stream.write(formatting.to_csv(records, columns))
        return

    if console is None and out is not None:
        console = get_rich_console(file=out)
    render_table(records, columns, console=console)


def render_table(
    records: Sequence[Any],
    columns: Sequence[Column],
    *,
    console: Any = None,
) -> None:
    """Draw an aligned, word-wrapped table with a header row."""
    table_class = _import_rich_table()
    target = console if console is not None else get_rich_console(stderr=False)

    table = table_class(show_header=True, header_style="cyan", show_lines=False)
    for column in columns:
        table.add_column(
            column.header,
            width=column.width,
            overflow="fold",
            no_wrap=False,
        )
    for row in formatting.build_rows(records, columns):
        # Values are data, never markup.
        table.add_row(*(_escape(cell) for cell in row))

    target.print(table, width=max(target.width, _table_width(columns)))


def _table_width(columns: Sequence[Column]) -> int:
    """Minimum width needed to honour every declared column width."""
    widths = [column.width or len(column.header) for column in columns]
    # Each cell has one space of padding either side plus a border.
    return sum(widths) + 3 * len(widths) + 1


def _escape(text: str) -> str:
    from rich.markup import escape

    return escape(text)


def _no_data(out: TextIO | None, console: Any) -> None:
    if console is None and out is not None:
        out.write(NO_DATA_MESSAGE + "\n")
        return
    try:
        target = console if console is not None else get_rich_console(stderr=False)
    except EnvironmentError:
        sys.stdout.write(NO_DATA_MESSAGE + "\n")
        return
    target.print(f"[yellow]{NO_DATA_MESSAGE}[/yellow]")
