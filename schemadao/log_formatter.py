##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other schemadao
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to schemadao.
##############################################################################

"""This module handles setting up logging for schemadao, including the SQL debug toggle."""

import logging
import os
import sys

import coloredlogs


FORMATS = {
    "DEFAULT": "[%(asctime)s: %(levelname)s] %(message)s",
    "DEBUG": "[%(asctime)s: %(levelname)s] [%(module)s: %(lineno)d] %(message)s",
}

SQL_DEBUG_ENV_VAR = "SCHEMADAO_DEBUG"

_SQL_DEBUG_OVERRIDE = None


def setup_logging(logger: logging.Logger, log_level: str = "INFO", colors: bool = True):
    """
    Setup and configure Python logging.

    Args:
        logger: A logging.Logger object.
        log_level: Logger level.
        colors: If True use colored logs.
    """
    fmt = FORMATS["DEBUG"] if log_level.upper() == "DEBUG" else FORMATS["DEFAULT"]
    formatter = logging.Formatter(fmt)
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)
    logger.addHandler(handler)

    logger.setLevel(log_level)
    logger.propagate = False

    if colors is True:
        coloredlogs.install(level=log_level, logger=logger, fmt=fmt)


def set_sql_debug(enable: bool = True):
    """
    Turn statement/bind-argument logging on or off regardless of the environment.

    Args:
        enable: True to log every statement, False to silence it. None defers
            back to the `SCHEMADAO_DEBUG` environment variable.
    """
    global _SQL_DEBUG_OVERRIDE  # pylint: disable=global-statement
    _SQL_DEBUG_OVERRIDE = enable


def sql_debug_enabled() -> bool:
    """
    Check whether verbose statement logging is on.

    Returns:
        True if `set_sql_debug` enabled it, or if it was never set and the
        `SCHEMADAO_DEBUG` environment variable is non-empty.
    """
    if _SQL_DEBUG_OVERRIDE is not None:
        return _SQL_DEBUG_OVERRIDE
    return os.environ.get(SQL_DEBUG_ENV_VAR, "") not in ("", "0")
