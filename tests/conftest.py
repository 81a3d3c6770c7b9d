"""Shared pytest fixtures and configuration for the intercom-cli test suite.

Guidelines
----------
* No internet access in any test.
* HTTP is served by ``httpx.MockTransport`` at the infra boundary.
* Core tests must be pure — no side effects.
* Tests must not depend on OS state: the credential directory, the
  working directory and the ``INTERCOM_*`` variables are isolated.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable, Iterator
from pathlib import Path
from typing import Any

import httpx
import pytest

from intercom_cli.config import Settings
from intercom_cli.infra.credentials import CredentialResolver, CredentialStore
from intercom_cli.infra.http_client import IntercomClient

TEST_TOKEN = "dG9rOmFiY2RlZmdoaWprbG1ub3BxcnN0dXZ3eHl6MDEyMzQ1"

_ENV_VARS = (
    "INTERCOM_ACCESS_TOKEN",
    "INTERCOM_ADMIN_ID",
    "INTERCOM_API_URL",
    "INTERCOM_API_VERSION",
    "INTERCOM_CLI_CONFIG_DIR",
    "INTERCOM_TIMEOUT",
)


@pytest.fixture(autouse=True)
def isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point every run at an empty config dir and a clean environment."""
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    config_dir = tmp_path / "config"
    monkeypatch.setenv("INTERCOM_CLI_CONFIG_DIR", str(config_dir))
    monkeypatch.chdir(tmp_path)
    return config_dir


@pytest.fixture(autouse=True)
def reset_logging() -> Iterator[None]:
    """Drop handlers bound to captured streams once a test finishes."""
    yield
    root = logging.getLogger("intercom_cli")
    for handler in root.handlers[:]:
        root.removeHandler(handler)
    root.setLevel(logging.NOTSET)
    root.propagate = True


@pytest.fixture()
def settings(isolated_env: Path) -> Settings:
    return Settings(config_dir=isolated_env, admin_id="991")


@pytest.fixture()
def store(settings: Settings) -> CredentialStore:
    return CredentialStore(settings.config_file)


@pytest.fixture()
def resolver(store: CredentialStore) -> CredentialResolver:
    return CredentialResolver(store, environ={"INTERCOM_ACCESS_TOKEN": TEST_TOKEN})


Responder = Callable[[httpx.Request], httpx.Response]


class RecordingTransport(httpx.MockTransport):
    """MockTransport that remembers every request it served."""

    def __init__(self, responder: Responder) -> None:
        self.requests: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            return responder(request)

        super().__init__(handler)

    def bodies(self) -> list[Any]:
        return [json.loads(r.content) if r.content else None for r in self.requests]


@pytest.fixture()
def make_client(
    settings: Settings, resolver: CredentialResolver,
) -> Iterator[Callable[[Responder], tuple[IntercomClient, RecordingTransport]]]:
    """Build an :class:`IntercomClient` backed by *responder*."""
    clients: list[IntercomClient] = []

    def factory(responder: Responder) -> tuple[IntercomClient, RecordingTransport]:
        transport = RecordingTransport(responder)
        client = IntercomClient(settings, resolver, transport=transport)
        clients.append(client)
        return client, transport

    yield factory
    for client in clients:
        client.close()


def json_response(payload: Any, status: int = 200, **kwargs: Any) -> httpx.Response:
    return httpx.Response(status, json=payload, **kwargs)
