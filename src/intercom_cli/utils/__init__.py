"""Shared utilities — time handling, logging, and cross-cutting concerns.

Rules
-----
* No business logic.
* No I/O other than attaching the stderr log handler.
* Importable by any layer.
"""

from intercom_cli.utils.timefmt import format_local, parse_timestamp, to_local

__all__: list[str] = ["format_local", "parse_timestamp", "to_local"]
