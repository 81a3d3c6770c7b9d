"""Access-token persistence and lookup.

The token record lives in ``<config_dir>/config.json``::

    {"accessToken": "...", "updatedAt": "2026-01-01T00:00:00+00:00"}

Lookup order is the ``INTERCOM_ACCESS_TOKEN`` environment variable,
then the file.  Nothing is cached: every call to
:meth:`CredentialResolver.resolve` reads afresh.
"""

from __future__ import annotations

import json
import os
from collections.abc import Mapping
from datetime import datetime, timezone
from pathlib import Path

from intercom_cli.core.models import ResolvedToken, StoredCredential, TokenSource
from intercom_cli.exceptions import CredentialStoreError, missing_token_error
from intercom_cli.utils.log import get_logger

logger = get_logger(__name__)

TOKEN_ENV_VAR = "INTERCOM_ACCESS_TOKEN"


class CredentialStore:
    """Reads and writes the persisted credential record."""

    def __init__(self, path: Path) -> None:
        self._path: Path = path

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> StoredCredential | None:
        """Return the stored credential, or ``None`` if there is none.

        A missing, unreadable, or malformed file counts as "no token".
        """
        try:
            raw = json.loads(self._path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return None
        except (OSError, ValueError) as exc:
            logger.debug("Ignoring unreadable credential file %s: %s", self._path, exc)
            return None

        if not isinstance(raw, dict):
            return None
        token = raw.get("accessToken")
        if not isinstance(token, str) or not token:
            return None
        return StoredCredential(
            access_token=token,
            updated_at=_parse_updated_at(raw.get("updatedAt")),
        )

    def save(self, token: str) -> StoredCredential:
        """Persist *token*, replacing any previous record."""
        credential = StoredCredential(
            access_token=token,
            updated_at=datetime.now(timezone.utc),
        )
        record = {
            "accessToken": credential.access_token,
            "updatedAt": credential.updated_at.isoformat() if credential.updated_at else None,
        }
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self._path.write_text(json.dumps(record, indent=2), encoding="utf-8")
            os.chmod(self._path, 0o600)
        except OSError as exc:
            raise CredentialStoreError(f"Failed to save token: {exc}") from exc
        logger.debug("Saved access token to %s", self._path)
        return credential

    def remove(self) -> bool:
        """Delete the record.  Returns ``False`` if there was none."""
        try:
            self._path.unlink()
        except FileNotFoundError:
            return False
        except OSError as exc:
            raise CredentialStoreError(f"Failed to remove token: {exc}") from exc
        logger.debug("Removed access token file %s", self._path)
        return True


class CredentialResolver:
    """Concrete :class:`~intercom_cli.core.protocols.TokenResolver`.

    Parameters
    ----------
    store:
        Persisted credential record, consulted second.
    environ:
        Environment mapping, consulted first.  Defaults to ``os.environ``.
    """

    def __init__(self, store: CredentialStore, environ: Mapping[str, str] | None = None) -> None:
        self._store: CredentialStore = store
        self._environ: Mapping[str, str] = os.environ if environ is None else environ

    def lookup(self) -> ResolvedToken | None:
        """Return the active token, or ``None`` if none is configured."""
        env_token = self._environ.get(TOKEN_ENV_VAR)
        if env_token:
            return ResolvedToken(env_token, TokenSource.ENVIRONMENT)
        stored = self._store.load()
        if stored is not None:
            return ResolvedToken(stored.access_token, TokenSource.FILE)
        return None

    def resolve(self) -> ResolvedToken:
        """Return the active token or raise ``AuthenticationError``."""
        resolved = self.lookup()
        if resolved is None:
            raise missing_token_error()
        return resolved


def _parse_updated_at(value: object) -> datetime | None:
    if not isinstance(value, str):
        return None
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None
