"""Interactive prompts for the CLI layer.

This module is responsible for asking the user for input that was not
supplied on the command line.  It holds no business logic: callers
validate and persist whatever it returns.
"""

from __future__ import annotations

from typing import Any

from intercom_cli.exceptions import EnvironmentError, LocalValidationError


def _import_questionary() -> Any:
    """Import questionary lazily for interactive prompts."""
    try:
        import questionary
    except ModuleNotFoundError as exc:
        raise EnvironmentError(
            "questionary is not installed. Install with: pip install questionary",
        ) from exc
    return questionary


def prompt_access_token() -> str:
    """Ask for an access token with hidden input.

    Raises
    ------
    KeyboardInterrupt
        If the user presses Ctrl+C during the prompt.
    LocalValidationError
        If the prompt is cancelled or the answer is blank.
    """
    questionary = _import_questionary()

    answer: str | None = questionary.password(
        "Intercom access token:",
    ).ask()  # Returns None on Ctrl+C / Esc

    if answer is None or not answer.strip():
        raise LocalValidationError(
            "No access token entered.",
            hint="Paste the token from your Intercom developer hub, then press Enter.",
        )
    return answer.strip()
