"""intercom-cli — command-line client for the Intercom REST API.

Maps subcommands onto API calls and renders the responses as tables,
CSV, or JSON.
"""

from intercom_cli.version import __version__

__all__: list[str] = ["__version__"]
