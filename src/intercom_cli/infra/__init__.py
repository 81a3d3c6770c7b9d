"""Infrastructure layer — external system integration.

This layer wraps all interaction with the Intercom HTTP API, the
environment, and the on-disk credential record.  Every raw third-party
exception must be caught here and re-raised as an
:class:`~intercom_cli.exceptions.IntercomCliError` subclass.

Rules
-----
* No imports from ``cli``.
* No user-facing output (no ``print()``, no Rich rendering).
* Must expose clean, typed interfaces consumed by the core layer.
"""

from intercom_cli.infra.credentials import CredentialResolver, CredentialStore
from intercom_cli.infra.error_classifier import classify_exception, classify_response
from intercom_cli.infra.http_client import IntercomClient

__all__: list[str] = [
    "CredentialResolver",
    "CredentialStore",
    "IntercomClient",
    "classify_exception",
    "classify_response",
]
