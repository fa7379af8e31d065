##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other schemadao
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to schemadao.
##############################################################################

"""
The closed set of value kinds a record field may hold.

A field value is one of:

- `None`, meaning SQL NULL
- `str`
- `int` (including `bool`), signed 64-bit or unsigned 64-bit
- `float`
- `bytes`
- `RawExpression`, literal SQL emitted verbatim instead of being bound

`MISSING` is not a value. It is what a record returns for a column that was
never set or fetched.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any

from schemadao.exceptions import ValueRenderError


INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1
UINT64_MAX = 2**64 - 1


class _Missing:
    """Sentinel type for a column that holds no value at all."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "MISSING"

    def __reduce__(self):
        return (_Missing, ())


MISSING = _Missing()


@dataclass(frozen=True)
class RawExpression:
    """
    A literal SQL expression, such as `CURRENT_TIMESTAMP` or `SYS_GUID()`.

    The text is written into the statement where a placeholder would otherwise
    go and is never passed as a bind argument, so it is never quoted or escaped.
    Only build these from trusted text.
    """

    text: str

    def __post_init__(self):
        if not isinstance(self.text, str) or not self.text.strip():
            raise ValueError("A RawExpression needs non-empty SQL text.")

    def __str__(self) -> str:
        return self.text


class ValueKind(Enum):
    """
    The kinds of value the SQL generator knows how to render.
    """

    NULL = "null"
    TEXT = "text"
    INTEGER = "integer"
    UNSIGNED = "unsigned"
    FLOAT = "float"
    BLOB = "blob"
    RAW = "raw"


def classify_value(value: Any, column: str = "?") -> ValueKind:
    """
    Work out which `ValueKind` a runtime value belongs to.

    Args:
        value: The value to classify.
        column: The column the value belongs to, used in error messages.

    Returns:
        The value's kind.

    Raises:
        ValueRenderError: If the value falls outside every kind, including ints
            that don't fit in 64 bits.
    """
    if value is None:
        return ValueKind.NULL
    if isinstance(value, RawExpression):
        return ValueKind.RAW
    if isinstance(value, str):
        return ValueKind.TEXT
    if isinstance(value, int):
        if INT64_MIN <= value <= INT64_MAX:
            return ValueKind.INTEGER
        if INT64_MAX < value <= UINT64_MAX:
            return ValueKind.UNSIGNED
        raise ValueRenderError(column, value, f"Integer {value} for column {column} does not fit in 64 bits.")
    if isinstance(value, float):
        return ValueKind.FLOAT
    if isinstance(value, (bytes, bytearray, memoryview)):
        return ValueKind.BLOB
    raise ValueRenderError(column, value)
