"""Runtime settings for intercom-cli.

Settings are read from environment variables once per invocation and
passed explicitly to every collaborator.  ``.env`` files in the working
directory are honoured, but real environment variables always win.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

from intercom_cli.exceptions import ConfigurationError
from intercom_cli.utils.log import get_logger

logger = get_logger(__name__)

DEFAULT_API_URL = "https://api.intercom.io"
DEFAULT_API_VERSION = "2.11"
DEFAULT_TIMEOUT = 30.0
DEFAULT_ENVIRONMENT = "production"


def default_config_dir() -> Path:
    """Per-user directory holding the credential record."""
    return Path.home() / ".intercom-cli"


@dataclass(frozen=True)
class Settings:
    """Configuration for a single CLI invocation."""

    api_url: str = DEFAULT_API_URL
    api_version: str = DEFAULT_API_VERSION
    config_dir: Path = field(default_factory=default_config_dir)
    admin_id: str | None = None
    timeout: float = DEFAULT_TIMEOUT
    environment: str = DEFAULT_ENVIRONMENT

    @property
    def config_file(self) -> Path:
        """Location of the persisted credential record."""
        return self.config_dir / "config.json"

    @classmethod
    def from_env(cls, environment: str = DEFAULT_ENVIRONMENT) -> Settings:
        """Create settings from environment variables and ``.env`` files.

        ``.env.<environment>`` is loaded before ``.env`` so that the more
        specific file takes precedence for keys defined in both.
        """
        load_env_files(environment)

        raw_timeout = os.getenv("INTERCOM_TIMEOUT", str(DEFAULT_TIMEOUT))
        try:
            timeout = float(raw_timeout)
        except ValueError as exc:
            raise ConfigurationError(
                f"Invalid INTERCOM_TIMEOUT value: {raw_timeout!r}",
                hint="Use a number of seconds, e.g. INTERCOM_TIMEOUT=30",
            ) from exc

        config_dir = os.getenv("INTERCOM_CLI_CONFIG_DIR")

        return cls(
            api_url=os.getenv("INTERCOM_API_URL", DEFAULT_API_URL).rstrip("/"),
            api_version=os.getenv("INTERCOM_API_VERSION", DEFAULT_API_VERSION),
            config_dir=Path(config_dir) if config_dir else default_config_dir(),
            admin_id=os.getenv("INTERCOM_ADMIN_ID") or None,
            timeout=timeout,
            environment=environment,
        )


def load_env_files(environment: str, directory: Path | None = None) -> list[Path]:
    """Load ``.env.<environment>`` and ``.env`` from *directory*.

    Returns the files that were actually loaded.
    """
    base = directory or Path.cwd()
    loaded: list[Path] = []
    for env_path in (base / f".env.{environment}", base / ".env"):
        if env_path.is_file():
            load_dotenv(env_path, override=False)
            logger.debug("Loaded configuration from %s", env_path)
            loaded.append(env_path)
    return loaded
