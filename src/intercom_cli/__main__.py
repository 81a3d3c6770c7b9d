"""Allow ``python -m intercom_cli`` invocation.

This module simply delegates to the CLI error-boundary entry point so
that ``python -m intercom_cli`` behaves identically to the ``intercom``
console script.
"""

from __future__ import annotations

from intercom_cli.cli.app import cli

if __name__ == "__main__":
    cli()
