##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other schemadao
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to schemadao.
##############################################################################

"""
Conversion of record values into driver bind arguments.

Every value kind has exactly one renderer, looked up in `RENDERERS`. Adding a
kind means adding a `ValueKind` member and a renderer here.
"""

import math
from decimal import Decimal
from typing import Any, Callable, Dict

from schemadao.exceptions import ValueRenderError
from schemadao.record.values import ValueKind, classify_value
from schemadao.schema.types import Column
from schemadao.sqlgen.dialect import Dialect


def _render_null(column: Column, value: Any, dialect: Dialect) -> None:  # pylint: disable=unused-argument
    return None


def _render_text(column: Column, value: str, dialect: Dialect) -> str:  # pylint: disable=unused-argument
    return value


def _render_integer(column: Column, value: int, dialect: Dialect) -> int:  # pylint: disable=unused-argument
    return int(value)


def _render_unsigned(column: Column, value: int, dialect: Dialect) -> Any:
    if dialect.native_unsigned:
        return value
    return str(value)


def _render_float(column: Column, value: float, dialect: Dialect) -> Any:
    """
    Integer columns get the float truncated toward zero. Other columns get
    fixed-point decimal text, never scientific notation.
    """
    if not math.isfinite(value):
        raise ValueRenderError(column.name, value, f"Non-finite float {value} for column {column.name}.")
    if column.is_number:
        return int(value)
    return format(Decimal(repr(value)), "f")


def _render_blob(column: Column, value: Any, dialect: Dialect) -> bytes:  # pylint: disable=unused-argument
    return bytes(value)


def _render_raw(column: Column, value: Any, dialect: Dialect):  # pylint: disable=unused-argument
    raise ValueRenderError(
        column.name, value, f"Raw SQL expression for column {column.name} must be inlined, not bound."
    )


RENDERERS: Dict[ValueKind, Callable[[Column, Any, Dialect], Any]] = {
    ValueKind.NULL: _render_null,
    ValueKind.TEXT: _render_text,
    ValueKind.INTEGER: _render_integer,
    ValueKind.UNSIGNED: _render_unsigned,
    ValueKind.FLOAT: _render_float,
    ValueKind.BLOB: _render_blob,
    ValueKind.RAW: _render_raw,
}


def render_value(column: Column, value: Any, dialect: Dialect) -> Any:
    """
    Turn a record value into the argument handed to the database driver.

    Args:
        column: The column the value is bound to.
        value: The record value.
        dialect: The dialect the statement is built for.

    Returns:
        The bind argument: `None`, `str`, `int`, or `bytes`.

    Raises:
        ValueRenderError: If the value has no renderer, is a non-finite float,
            or is a `RawExpression`.
    """
    kind = classify_value(value, column.name)
    return RENDERERS[kind](column, value, dialect)
