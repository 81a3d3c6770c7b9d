"""Core layer — pure models, descriptors, and data transformations.

Rules
-----
* No ``print()`` calls.
* No filesystem or network I/O.
* No imports from ``cli`` or ``infra``.
* All functions must be fully typed and deterministic.
"""

from intercom_cli.core.models import (
    Column,
    ColumnType,
    ListPage,
    RequestDescriptor,
    ResolvedToken,
    StoredCredential,
    TokenSource,
)
from intercom_cli.core.pagination import fetch_all
from intercom_cli.core.protocols import RequestExecutor, TokenResolver

__all__: list[str] = [
    "Column",
    "ColumnType",
    "ListPage",
    "RequestDescriptor",
    "RequestExecutor",
    "ResolvedToken",
    "StoredCredential",
    "TokenResolver",
    "TokenSource",
    "fetch_all",
]
