##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other schemadao
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to schemadao.
##############################################################################

"""
Utility functions to support schemadao CLI command handlers.
"""

import logging
from argparse import Namespace
from typing import Any, Dict

from schemadao.config.configfile import get_config
from schemadao.record.values import RawExpression
from schemadao.utils import parse_json_argument


LOG = logging.getLogger("schemadao")

RAW_KEY = "$raw"


def parse_values_argument(raw: str, arg_name: str) -> Dict[str, Any]:
    """
    Parse a JSON object of column values given on the command line.

    A value written as `{"$raw": "CURRENT_TIMESTAMP"}` becomes a
    `RawExpression` and is emitted verbatim into the SQL.

    Args:
        raw: The JSON text.
        arg_name: The argument name, used in error messages.

    Returns:
        Column values keyed by column name.

    Raises:
        ValueError: If the text isn't a JSON object or a nested object isn't a raw expression.
    """
    values = parse_json_argument(raw, arg_name)
    for column, value in values.items():
        if isinstance(value, dict):
            if set(value) != {RAW_KEY}:
                raise ValueError(f'{arg_name}: nested objects must look like {{"{RAW_KEY}": "<sql>"}} ({column}).')
            values[column] = RawExpression(value[RAW_KEY])
    LOG.debug(f"Parsed {arg_name}: {values}")
    return values


def resolve_db_path(args: Namespace) -> str:
    """
    Work out which SQLite database a command should open.

    Args:
        args: Parsed CLI arguments. `args.db` wins over the app config.

    Returns:
        The database path.
    """
    if getattr(args, "db", None):
        return args.db
    return get_config(getattr(args, "config", None)).database.path


def resolve_dialect(args: Namespace) -> str:
    """
    Work out which dialect a command should render for.

    Args:
        args: Parsed CLI arguments. `args.dialect` wins over the app config.

    Returns:
        The dialect name.
    """
    if getattr(args, "dialect", None):
        return args.dialect
    return get_config(getattr(args, "config", None)).database.dialect
