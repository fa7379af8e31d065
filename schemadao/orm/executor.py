##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other schemadao
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to schemadao.
##############################################################################

"""
Execution of generated statements over a DB-API 2.0 connection.

The executor is the only place schemadao talks to a driver. It opens a
cursor per statement, always closes it, reads back generated identities, and
wraps every driver error in an `ExecutionError`.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Sequence

from schemadao.exceptions import ExecutionError
from schemadao.log_formatter import sql_debug_enabled
from schemadao.schema.types import Column
from schemadao.sqlgen.dialect import Dialect, IdentityStrategy
from schemadao.sqlgen.generator import Statement


LOG = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExecResult:
    """
    The outcome of a data-modifying statement.

    Attributes:
        rows_affected: The number of rows the statement changed.
        identity: The identity value read back after an INSERT, if any.
    """

    rows_affected: int
    identity: Any = None


def _row_to_dict(columns: Sequence[str], row: Any) -> Dict[str, Any]:
    """
    Map a result row onto column names by position.

    Rows may be tuples, `sqlite3.Row` objects, or mappings. Mapping keys are
    ignored because servers may fold the case of unquoted identifiers.
    """
    values = list(row.values()) if isinstance(row, Mapping) else list(row)
    return dict(zip(columns, values))


class StatementExecutor:
    """
    Runs `Statement` objects on one connection.

    Attributes:
        connection: Any DB-API 2.0 connection, or an object that quacks like one.
        dialect: The dialect the statements were built for.

    Methods:
        execute: Run an INSERT, UPDATE, DELETE, or DDL statement.
        query: Run a SELECT and return its rows.
    """

    def __init__(self, connection: Any, dialect: Dialect):
        """
        Args:
            connection: The connection statements run on.
            dialect: The dialect the statements were built for.
        """
        self.connection = connection
        self.dialect = dialect

    def _log(self, operation: str, table: str, statement: Statement):
        if sql_debug_enabled():
            LOG.info(f"{operation} on '{table}': sql -> {statement.sql} bind_args -> {list(statement.bind_args)}")
        else:
            LOG.debug(f"{operation} on '{table}': {statement.sql}")

    def execute(self, statement: Statement, operation: str, table: str, identity_column: Column = None) -> ExecResult:
        """
        Run a statement that doesn't return rows (apart from a returned identity).

        Args:
            statement: The statement to run.
            operation: A label for logs and errors, e.g. "INSERT".
            table: The table the statement targets, for logs and errors.
            identity_column: The definition of `statement.identity_column`. Only
                needed when the dialect reads identities through output binds.

        Returns:
            The rows affected and, for an INSERT, the generated identity.

        Raises:
            ExecutionError: If the driver raises while preparing, running, or
                reading back the statement.
        """
        self._log(operation, table, statement)
        strategy = statement.identity_strategy if statement.identity_column else IdentityStrategy.NONE

        try:
            cursor = self.connection.cursor()
        except Exception as exc:
            raise ExecutionError(operation, table, statement.sql) from exc

        try:
            args = list(statement.bind_args)
            output = None
            if strategy is IdentityStrategy.OUT_BIND:
                output = self.dialect.output_variable(cursor, identity_column or Column(statement.identity_column))
                args.append(output)

            cursor.execute(statement.sql, args)

            rows = None
            if strategy is IdentityStrategy.RETURNING_ROW:
                rows = cursor.fetchall()
            rows_affected = max(cursor.rowcount, 0)
            if rows is not None:
                rows_affected = max(rows_affected, len(rows))

            identity = None
            if strategy is not IdentityStrategy.NONE:
                identity = self.dialect.read_identity(cursor, strategy, output=output, rows=rows)
        except Exception as exc:
            raise ExecutionError(operation, table, statement.sql) from exc
        finally:
            cursor.close()

        LOG.debug(f"{operation} on '{table}' affected {rows_affected} row(s)")
        return ExecResult(rows_affected=rows_affected, identity=identity)

    def query(self, statement: Statement, table: str) -> List[Dict[str, Any]]:
        """
        Run a SELECT.

        Args:
            statement: The SELECT statement.
            table: The table being read, for logs and errors.

        Returns:
            One dict of column name to value per row. Empty if nothing matched.

        Raises:
            ExecutionError: If the driver raises.
        """
        self._log("SELECT", table, statement)

        try:
            cursor = self.connection.cursor()
        except Exception as exc:
            raise ExecutionError("SELECT", table, statement.sql) from exc

        try:
            cursor.execute(statement.sql, list(statement.bind_args))
            rows = cursor.fetchall()
            columns = statement.columns or [description[0] for description in cursor.description]
        except Exception as exc:
            raise ExecutionError("SELECT", table, statement.sql) from exc
        finally:
            cursor.close()

        return [_row_to_dict(columns, row) for row in rows]
