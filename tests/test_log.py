"""Tests for logging setup (utils/log.py)."""

from __future__ import annotations

import logging

import pytest

from intercom_cli.utils.log import ROOT_LOGGER, get_logger, setup_logging


class TestSetupLogging:
    def test_verbose_logs_debug_to_stderr(self, capsys: pytest.CaptureFixture[str]) -> None:
        setup_logging(verbose=True)
        get_logger("intercom_cli.tests").debug("Fetched page %d of %s", 2, "/contacts")
        captured = capsys.readouterr()
        assert "Fetched page 2 of /contacts" in captured.err
        assert captured.out == ""

    def test_quiet_by_default(self, capsys: pytest.CaptureFixture[str]) -> None:
        setup_logging()
        get_logger("intercom_cli.tests").debug("hidden")
        assert "hidden" not in capsys.readouterr().err

    def test_repeat_setup_keeps_one_handler(self) -> None:
        setup_logging()
        setup_logging(verbose=True)
        root = logging.getLogger(ROOT_LOGGER)
        assert len(root.handlers) == 1
        assert root.level == logging.DEBUG
        assert root.propagate is False


class TestGetLogger:
    def test_unconfigured_logger_writes_nothing_to_stdout(
        self, capsys: pytest.CaptureFixture[str],
    ) -> None:
        get_logger("intercom_cli.tests").debug("quiet")
        assert capsys.readouterr().out == ""
