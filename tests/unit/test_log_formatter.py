##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other schemadao
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to schemadao.
##############################################################################

"""
Tests for the `log_formatter.py` module.
"""

import logging

import pytest
from pytest_mock import MockerFixture

from schemadao.log_formatter import FORMATS, SQL_DEBUG_ENV_VAR, set_sql_debug, setup_logging, sql_debug_enabled


@pytest.fixture
def scratch_logger() -> logging.Logger:
    """
    A logger nobody else uses, stripped of handlers after the test.

    Yields:
        The logger.
    """
    logger = logging.getLogger("schemadao.tests.scratch")
    yield logger
    logger.handlers.clear()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


@pytest.mark.parametrize("level, fmt", [("DEBUG", FORMATS["DEBUG"]), ("info", FORMATS["DEFAULT"])])
def test_setup_logging(mocker: MockerFixture, scratch_logger: logging.Logger, level: str, fmt: str):
    """
    Test that `setup_logging` attaches a formatted handler and installs colored output.

    Args:
        mocker: PyTest mocker fixture.
        scratch_logger: A throwaway logger.
        level: The requested log level.
        fmt: The format expected for that level.
    """
    mock_install = mocker.patch("coloredlogs.install")

    setup_logging(scratch_logger, level.upper())

    assert scratch_logger.level == logging.getLevelName(level.upper())
    assert scratch_logger.propagate is False
    assert scratch_logger.handlers[-1].formatter._fmt == fmt
    mock_install.assert_called_once_with(level=level.upper(), logger=scratch_logger, fmt=fmt)


def test_setup_logging_without_colors(mocker: MockerFixture, scratch_logger: logging.Logger):
    """
    Test that colored output can be turned off.

    Args:
        mocker: PyTest mocker fixture.
        scratch_logger: A throwaway logger.
    """
    mock_install = mocker.patch("coloredlogs.install")
    setup_logging(scratch_logger, "WARNING", colors=False)
    mock_install.assert_not_called()


class TestSQLDebugToggle:
    """
    Tests for `set_sql_debug` and `sql_debug_enabled`.
    """

    def test_off_by_default(self):
        """
        Test that statement logging is off with no override and no environment variable.
        """
        assert sql_debug_enabled() is False

    @pytest.mark.parametrize("value, expected", [("1", True), ("yes", True), ("0", False), ("", False)])
    def test_environment_variable(self, monkeypatch: pytest.MonkeyPatch, value: str, expected: bool):
        """
        Test how the environment variable's value is read.

        Args:
            monkeypatch: PyTest monkeypatch fixture.
            value: The environment variable's value.
            expected: Whether logging should be on.
        """
        monkeypatch.setenv(SQL_DEBUG_ENV_VAR, value)
        assert sql_debug_enabled() is expected

    def test_override_wins_over_environment(self, monkeypatch: pytest.MonkeyPatch):
        """
        Test that an explicit setting wins until it is reset to None.

        Args:
            monkeypatch: PyTest monkeypatch fixture.
        """
        monkeypatch.setenv(SQL_DEBUG_ENV_VAR, "1")
        set_sql_debug(False)
        assert sql_debug_enabled() is False
        set_sql_debug(None)
        assert sql_debug_enabled() is True
        set_sql_debug()
        monkeypatch.delenv(SQL_DEBUG_ENV_VAR)
        assert sql_debug_enabled() is True
