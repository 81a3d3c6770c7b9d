"""httpx-backed request pipeline for the Intercom REST API.

This module is the **only** place in the codebase that performs network
I/O.  All httpx exceptions and non-2xx responses are translated by
:mod:`intercom_cli.infra.error_classifier` and raised as typed
:class:`~intercom_cli.exceptions.IntercomCliError` subclasses — nothing
raw escapes the infrastructure boundary.
"""

from __future__ import annotations

import contextlib
from collections.abc import Callable, Mapping
from typing import Any, ContextManager

import httpx

from intercom_cli.config import Settings
from intercom_cli.core.models import Record, RequestDescriptor
from intercom_cli.core.pagination import fetch_all
from intercom_cli.core.protocols import TokenResolver
from intercom_cli.exceptions import IntercomCliError, ResponseShapeError
from intercom_cli.infra.error_classifier import classify_exception, classify_response
from intercom_cli.utils.log import get_logger
from intercom_cli.version import __version__

logger = get_logger(__name__)

ProgressFactory = Callable[[str], ContextManager[Any]]
"""Returns a context manager shown for the duration of one request."""


class IntercomClient:
    """Concrete :class:`~intercom_cli.core.protocols.RequestExecutor`.

    Usage::

        with IntercomClient(settings, resolver) as client:
            contact = client.get("/contacts/123")

    Parameters
    ----------
    settings:
        Base URL, API version, and timeout.
    credentials:
        Consulted once per request for the bearer token.
    transport:
        Optional httpx transport, e.g. ``httpx.MockTransport`` in tests.
    progress:
        Optional factory for a transient progress indicator.
    """

    def __init__(
        self,
        settings: Settings,
        credentials: TokenResolver,
        *,
        transport: httpx.BaseTransport | None = None,
        progress: ProgressFactory | None = None,
    ) -> None:
        self._settings: Settings = settings
        self._credentials: TokenResolver = credentials
        self._progress: ProgressFactory | None = progress
        self._http: httpx.Client = httpx.Client(
            base_url=settings.api_url,
            timeout=settings.timeout,
            transport=transport,
        )

    @property
    def base_url(self) -> str:
        return self._settings.api_url

    # ------------------------------------------------------------------
    # Context manager
    # ------------------------------------------------------------------

    def __enter__(self) -> IntercomClient:
        return self

    def __exit__(self, *_args: object) -> None:
        self.close()

    def close(self) -> None:
        """Close the underlying HTTP connection pool (idempotent)."""
        if not self._http.is_closed:
            self._http.close()

    # ------------------------------------------------------------------
    # Pipeline
    # ------------------------------------------------------------------

    def headers(self) -> dict[str, str]:
        """Build the fixed request headers with a freshly resolved token."""
        token = self._credentials.resolve().token
        return {
            "Authorization": f"Bearer {token}",
            "Accept": "application/json",
            "Content-Type": "application/json",
            "Intercom-Version": self._settings.api_version,
            "User-Agent": f"intercom-cli/{__version__}",
        }

    def execute(self, descriptor: RequestDescriptor) -> Any:
        """Perform *descriptor* and return the decoded JSON body.

        Raises
        ------
        IntercomCliError
            A subclass describing the failure; see
            :mod:`intercom_cli.infra.error_classifier`.
        """
        headers = self.headers()
        logger.debug(
            "API request %s %s params=%s",
            descriptor.method, descriptor.path, descriptor.query(),
        )

        try:
            with self._progress_for(descriptor):
                response = self._http.request(
                    descriptor.method,
                    descriptor.path,
                    params=descriptor.query() or None,
                    json=descriptor.body,
                    headers=headers,
                )
        except IntercomCliError:
            raise
        except Exception as exc:
            error = classify_exception(exc)
            logger.debug("API request failed: %s: %s", type(error).__name__, error)
            raise error from exc

        logger.debug(
            "API response %s %s status=%d",
            descriptor.method, descriptor.path, response.status_code,
        )

        if not response.is_success:
            error = classify_response(response)
            logger.debug("API error: %s: %s", type(error).__name__, error)
            raise error

        return self._decode(response)

    def _progress_for(self, descriptor: RequestDescriptor) -> ContextManager[Any]:
        if self._progress is None:
            return contextlib.nullcontext()
        return self._progress(f"{descriptor.method} {descriptor.path}")

    @staticmethod
    def _decode(response: httpx.Response) -> Any:
        if not response.content:
            return {}
        try:
            return response.json()
        except ValueError as exc:
            raise ResponseShapeError(
                "The API returned a response that is not valid JSON.",
            ) from exc

    # ------------------------------------------------------------------
    # Convenience verbs
    # ------------------------------------------------------------------

    def get(self, path: str, params: Mapping[str, Any] | None = None) -> Any:
        return self.execute(RequestDescriptor("GET", path, params=params or {}))

    def post(self, path: str, body: Any = None) -> Any:
        return self.execute(RequestDescriptor("POST", path, body=body))

    def put(self, path: str, body: Any = None) -> Any:
        return self.execute(RequestDescriptor("PUT", path, body=body))

    def delete(self, path: str, body: Any = None) -> Any:
        return self.execute(RequestDescriptor("DELETE", path, body=body))

    def fetch_all(
        self,
        path: str,
        params: Mapping[str, Any] | None = None,
        *,
        list_key: str = "data",
    ) -> list[Record]:
        """Fetch every page of a list endpoint; see :func:`core.pagination.fetch_all`."""
        return fetch_all(self, path, params, list_key=list_key)
