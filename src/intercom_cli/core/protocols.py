"""Protocols (interfaces) consumed by the core layer.

These define the contracts that infrastructure adapters must satisfy.
Core code depends ONLY on these protocols — never on concrete
implementations — preserving the dependency inversion principle.
"""

from __future__ import annotations

from typing import Any, Protocol

from intercom_cli.core.models import RequestDescriptor, ResolvedToken


class RequestExecutor(Protocol):
    """Contract for anything that can perform a single API call.

    Any object that implements :meth:`execute` with the correct
    signature satisfies this protocol structurally (no explicit
    inheritance required).
    """

    def execute(self, descriptor: RequestDescriptor) -> Any:
        """Perform *descriptor* and return the decoded response body.

        Implementations must map every transport or HTTP failure to an
        :class:`~intercom_cli.exceptions.IntercomCliError` subclass.
        """
        ...  # pragma: no cover


class TokenResolver(Protocol):
    """Contract for bearer-token lookup."""

    def resolve(self) -> ResolvedToken:
        """Return the active token.

        Raises
        ------
        AuthenticationError
            When no token is configured anywhere.
        """
        ...  # pragma: no cover
