##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other schemadao
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to schemadao.
##############################################################################

"""
Module of all schemadao-specific exception types.

Errors fall into four families so that callers can decide whether to roll
back an enclosing transaction:

- `SchemaError` and its subclasses: the request does not fit the schema.
- `ValueRenderError`: a value cannot be rendered for its column.
- `ExecutionError`: the database driver rejected a statement.
- `PartialSaveError`: a graph save stopped part of the way through.

A lookup that matches no rows is not an error anywhere in schemadao.
"""
from typing import Any


__all__ = (
    "DAOError",
    "SchemaError",
    "UnknownTableError",
    "UnknownColumnError",
    "MissingFieldMapError",
    "MissingKeyError",
    "ValueRenderError",
    "ExecutionError",
    "PartialSaveError",
    "DialectNotSupportedError",
)


class DAOError(Exception):
    """
    Base class for every error raised by schemadao.
    """


class SchemaError(DAOError):
    """
    Exception to signal that a request does not fit the schema it was
    made against.
    """


class UnknownTableError(SchemaError):
    """
    Exception to signal that a table is not defined in the schema.
    """

    def __init__(self, table: str, message: str = None):
        self.table = table
        super().__init__(message or f"Unknown table '{table}'.")


class UnknownColumnError(SchemaError):
    """
    Exception to signal that a column is not defined for a table.
    """

    def __init__(self, table: str, column: str):
        self.table = table
        self.column = column
        super().__init__(f"Column '{column}' does not exist in table '{table}'.")


class MissingFieldMapError(SchemaError):
    """
    Exception to signal that no field map (or an empty one) was given where
    one is required.
    """


class MissingKeyError(SchemaError):
    """
    Exception to signal that a key column needed for a WHERE clause or for
    foreign-key propagation has no usable value.
    """

    def __init__(self, table: str, column: str):
        self.table = table
        self.column = column
        super().__init__(f"Key column '{column}' of table '{table}' has no value.")


class ValueRenderError(DAOError):
    """
    Exception to signal that a value cannot be rendered for a column.
    """

    def __init__(self, column: str, value: Any, message: str = None):
        self.column = column
        self.value = value
        super().__init__(message or f"Unrenderable value type {type(value).__name__} for column {column}.")


class ExecutionError(DAOError):
    """
    Exception raised when the database driver fails to execute a statement.
    The driver's exception is available as `__cause__`.
    """

    def __init__(self, operation: str, table: str, sql: str, message: str = None):
        self.operation = operation
        self.table = table
        self.sql = sql
        super().__init__(message or f"{operation} on table '{table}' failed: {sql}")


class PartialSaveError(DAOError):
    """
    Exception raised when a graph save fails part of the way through.

    Attributes:
        rows_affected: The rows affected by the statements that succeeded before the failure.
        error: The error that stopped the save.
    """

    def __init__(self, rows_affected: int, error: Exception):
        self.rows_affected = rows_affected
        self.error = error
        super().__init__(f"Graph save aborted after {rows_affected} row(s) affected: {error}")


class DialectNotSupportedError(DAOError):
    """
    Exception to signal that the provided SQL dialect is not supported.
    """
