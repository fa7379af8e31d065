##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other schemadao
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to schemadao.
##############################################################################

"""
The persistence orchestrator.

`ORM` ties a `Schema`, a `SQLGenerator`, and a DB-API connection together. It
decides whether a record needs an INSERT, an UPDATE, or nothing at all, walks
record graphs parent-first so that foreign keys are known before children are
written, and loads related records on request.

Every operation accepts an optional `connection` that replaces the default one
for that call. A plain connection and a connection with an open transaction
(see `transact`) are therefore interchangeable.
"""

import logging
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterator, List, Mapping, Optional, Tuple, Union

from schemadao.exceptions import DAOError, MissingKeyError, PartialSaveError, SchemaError
from schemadao.orm.executor import StatementExecutor
from schemadao.record.record import Record
from schemadao.record.values import MISSING, RawExpression
from schemadao.schema.types import ChildTable, Schema, Table
from schemadao.sqlgen.dialect import Dialect
from schemadao.sqlgen.dialect_factory import dialect_factory
from schemadao.sqlgen.generator import SQLGenerator


LOG = logging.getLogger(__name__)


@dataclass
class _SaveProgress:
    rows_affected: int = 0


class ORM:
    """
    Saves, deletes, and loads `Record` objects described by a `Schema`.

    The ORM holds no per-record state, so one instance can serve many threads
    as long as each thread uses its own connection and its own records.

    Attributes:
        schema: The schema records are validated against.
        generator: Builds the SQL for every operation.
        connection: The default DB-API connection. May be None if every call
            passes its own.

    Methods:
        save: Insert, update, or skip a single record.
        insert: Insert a single record.
        update: Update the changed columns of a single record.
        delete: Delete a single record.
        save_all: Save a record and all of its children, parent first.
        retrieve: Load the first record matching a query.
        retrieve_many: Load every record matching a query.
        fleshen_children: Load a record's children for every declared relationship.
        get_parents_via_child: Load the parents of a record.
        transact: Run a block of work in a transaction.
        create_tables: Create every table in the schema.
        drop_tables: Drop every table in the schema.
    """

    def __init__(self, schema: Schema, generator: SQLGenerator, connection: Any = None):
        """
        Args:
            schema: The schema records are validated against.
            generator: Builds the SQL for every operation.
            connection: The default connection.
        """
        self.schema = schema
        self.generator = generator
        self.connection = connection

    @classmethod
    def from_dialect(
        cls,
        schema: Schema,
        dialect: Union[str, Dialect],
        connection: Any = None,
        identity_generator: Callable[[], Any] = None,
    ) -> "ORM":
        """
        Build an ORM for a dialect given by name or instance.

        Args:
            schema: The schema records are validated against.
            dialect: A `Dialect` or the name of a registered dialect.
            connection: The default connection.
            identity_generator: Optional replacement for the dialect's default identity.

        Returns:
            A new ORM.

        Raises:
            DialectNotSupportedError: If `dialect` names no registered dialect.
        """
        generator = SQLGenerator(dialect_factory.resolve(dialect), identity_generator=identity_generator)
        return cls(schema, generator, connection)

    def __repr__(self) -> str:
        return f"ORM(schema={self.schema.name!r}, generator={self.generator!r})"

    @property
    def dialect(self) -> Dialect:
        """The dialect the generator builds statements for."""
        return self.generator.dialect

    def _executor(self, connection: Any) -> StatementExecutor:
        conn = connection if connection is not None else self.connection
        if conn is None:
            raise ValueError("No database connection: pass one to the ORM or to this call.")
        return StatementExecutor(conn, self.dialect)

    def save(self, record: Record, connection: Any = None) -> int:
        """
        Write a record if it needs writing.

        An unsaved record is inserted, a saved record with changes is updated
        with only its changed columns, and a saved record without changes
        issues no SQL at all.

        Args:
            record: The record to save.
            connection: Optional connection overriding the default.

        Returns:
            The number of rows affected.
        """
        if not record.is_saved:
            return self.insert(record, connection)
        if not record.is_dirty():
            LOG.debug(f"Skipping save of unchanged {record.table} record.")
            return 0
        return self.update(record, connection)

    def insert(self, record: Record, connection: Any = None) -> int:
        """
        Insert a record and copy any generated identity back into it.

        Args:
            record: The record to insert.
            connection: Optional connection overriding the default.

        Returns:
            The number of rows affected.

        Raises:
            SchemaError: If the record doesn't fit its table.
            ValueRenderError: If a value can't be rendered.
            ExecutionError: If the driver fails.
        """
        table = self.schema.get_table(record.table)
        statement = self.generator.binding_insert(self.schema, record.table, record.fields)
        identity_column = table.columns.get(statement.identity_column) if statement.identity_column else None

        result = self._executor(connection).execute(statement, "INSERT", table.name, identity_column)

        for column, value in statement.generated_values.items():
            record.set(column, value)
        if statement.identity_column and result.identity is not None:
            record.set(statement.identity_column, result.identity)
        record.mark_saved()
        return result.rows_affected

    def update(self, record: Record, connection: Any = None) -> int:
        """
        Update the changed columns of a saved record.

        Args:
            record: The record to update.
            connection: Optional connection overriding the default.

        Returns:
            The number of rows affected. 0 if nothing changed.

        Raises:
            SchemaError: If a key column was changed or is missing.
            ExecutionError: If the driver fails.
        """
        table = self.schema.get_table(record.table)
        changed = record.changed_values()
        if not changed:
            return 0

        keys = self._key_values(table, record)
        for column in keys:
            if column in changed:
                raise SchemaError(
                    f"Key column '{column}' of a saved {record.table} record changed; key columns cannot be updated."
                )

        statement = self.generator.binding_update(self.schema, record.table, changed, keys)
        result = self._executor(connection).execute(statement, "UPDATE", table.name)
        record.mark_saved()
        return result.rows_affected

    def delete(self, record: Record, connection: Any = None) -> int:
        """
        Delete the row a record represents.

        The record's values are left untouched and it is marked saved.

        Args:
            record: The record to delete.
            connection: Optional connection overriding the default.

        Returns:
            The number of rows affected.

        Raises:
            MissingKeyError: If a key column has no value or holds a raw expression.
            ExecutionError: If the driver fails.
        """
        table = self.schema.get_table(record.table)
        statement = self.generator.binding_delete(self.schema, record.table, self._key_values(table, record))
        result = self._executor(connection).execute(statement, "DELETE", table.name)
        record.mark_saved()
        return result.rows_affected

    @staticmethod
    def _key_values(table: Table, record: Record) -> Dict[str, Any]:
        return {column: record.get(column) for column in table.key_columns() if record.get(column) is not MISSING}

    def save_all(self, record: Record, connection: Any = None) -> int:
        """
        Save a record and then, recursively, all of its children.

        Before each child is saved the parent's join column values are copied
        into the child's foreign key columns. The walk stops at the first error.
        Nothing is rolled back here; run the call inside `transact` for
        all-or-nothing behavior.

        Args:
            record: The root of the record graph.
            connection: Optional connection overriding the default.

        Returns:
            The total number of rows affected.

        Raises:
            PartialSaveError: If any save fails. It carries the rows affected
                before the failure and the original error.
        """
        progress = _SaveProgress()
        try:
            self._save_graph(record, connection, progress)
        except DAOError as exc:
            LOG.error(f"Saving the {record.table} record graph failed after {progress.rows_affected} row(s): {exc}")
            raise PartialSaveError(progress.rows_affected, exc) from exc
        return progress.rows_affected

    def _save_graph(self, record: Record, connection: Any, progress: _SaveProgress):
        progress.rows_affected += self.save(record, connection)

        table = self.schema.get_table(record.table)
        for child_key, children in record.children.items():
            relationship = self._relationship(table, record.table, child_key)
            for child in children:
                for local, foreign in relationship.join_pairs():
                    value = record.get(local)
                    if value is MISSING or value is None or isinstance(value, RawExpression):
                        raise MissingKeyError(table.name, local)
                    child.set(foreign, value)
                self._save_graph(child, connection, progress)

    def _relationship(self, table: Table, table_key: str, child_key: str) -> ChildTable:
        try:
            relationship = table.children.get(self.schema.resolve_table_key(child_key))
        except SchemaError:
            relationship = None
        if relationship is None:
            raise SchemaError(f"Table '{table_key}' has no child relationship with '{child_key}'.")
        return relationship

    def retrieve_many(
        self, table: str, query: Mapping[str, Any] = None, connection: Any = None
    ) -> List[Record]:
        """
        Load every record of a table that matches a query.

        Args:
            table: The table key or alias.
            query: Column values to match by equality. None or empty loads every row.
            connection: Optional connection overriding the default.

        Returns:
            Saved, unchanged records. Empty if nothing matched.
        """
        table_key = self.schema.resolve_table_key(table)
        statement = self.generator.binding_retrieve(self.schema, table_key, query if query is not None else {})
        rows = self._executor(connection).query(statement, self.schema.table_name(table_key))
        return [Record.from_row(table_key, row) for row in rows]

    def retrieve(self, table: str, query: Mapping[str, Any] = None, connection: Any = None) -> Optional[Record]:
        """
        Load the first record of a table that matches a query.

        Args:
            table: The table key or alias.
            query: Column values to match by equality.
            connection: Optional connection overriding the default.

        Returns:
            A saved, unchanged record, or None if nothing matched.
        """
        records = self.retrieve_many(table, query, connection)
        return records[0] if records else None

    @staticmethod
    def _join_query(
        source: Record, table: Table, pairs: List[Tuple[str, str]], from_local: bool
    ) -> Optional[Dict[str, Any]]:
        """
        Build the query that finds the records on the other side of a relationship.

        Returns:
            The query, or None if a join value is NULL (nothing can match).

        Raises:
            MissingKeyError: If a join value was never set or fetched.
        """
        query = {}
        for local, foreign in pairs:
            have, want = (local, foreign) if from_local else (foreign, local)
            value = source.get(have)
            if value is MISSING:
                raise MissingKeyError(table.name, have)
            if value is None:
                return None
            query[want] = value
        return query

    def fleshen_children(self, record: Record, connection: Any = None) -> Record:
        """
        Load a record's children for every relationship its table declares.

        Each child collection on the record is replaced by what the database holds.

        Args:
            record: The parent record.
            connection: Optional connection overriding the default.

        Returns:
            The same record, with its children loaded.
        """
        table = self.schema.get_table(record.table)
        for child_key, relationship in table.children.items():
            query = self._join_query(record, table, relationship.join_pairs(), from_local=True)
            children = [] if query is None else self.retrieve_many(child_key, query, connection)
            LOG.debug(f"Loaded {len(children)} {child_key} child record(s) for {record.table}.")
            record.set_children(child_key, children)
        return record

    def get_parents_via_child(self, child: Record, connection: Any = None) -> List[Record]:
        """
        Load the parent records of a child through every relationship that points at its table.

        Args:
            child: The child record.
            connection: Optional connection overriding the default.

        Returns:
            The parent records, grouped by relationship in schema order.
        """
        table = self.schema.get_table(child.table)
        parents = []
        for parent_key, relationship in self.schema.parents_of(child.table):
            query = self._join_query(child, table, relationship.join_pairs(), from_local=False)
            if query is not None:
                parents.extend(self.retrieve_many(parent_key, query, connection))
        return parents

    @contextmanager
    def transact(self, connection: Any = None) -> Iterator[Any]:
        """
        Run a block of work in a transaction.

        The connection is committed if the block finishes and rolled back if it
        raises. The original error is always re-raised; a failing rollback is
        logged and does not replace it.

        Args:
            connection: Optional connection overriding the default.

        Yields:
            The connection the transaction runs on. Pass it to ORM calls inside the block.
        """
        conn = connection if connection is not None else self.connection
        if conn is None:
            raise ValueError("No database connection: pass one to the ORM or to this call.")

        try:
            yield conn
        except BaseException:
            try:
                conn.rollback()
            except Exception as rollback_exc:  # pylint: disable=broad-exception-caught
                LOG.error(f"Rolling back the transaction failed: {rollback_exc}")
            raise
        conn.commit()

    def create_tables(self, connection: Any = None):
        """
        Create every table in the schema.

        Args:
            connection: Optional connection overriding the default.
        """
        executor = self._executor(connection)
        for table_key in self.schema.tables:
            statement = self.generator.create_table(self.schema, table_key)
            executor.execute(statement, "CREATE TABLE", self.schema.table_name(table_key))
            LOG.info(f"Created table '{self.schema.table_name(table_key)}'.")

    def drop_tables(self, connection: Any = None):
        """
        Drop every table in the schema.

        Args:
            connection: Optional connection overriding the default.
        """
        executor = self._executor(connection)
        for table_key in reversed(list(self.schema.tables)):
            statement = self.generator.drop_table(self.schema, table_key)
            executor.execute(statement, "DROP TABLE", self.schema.table_name(table_key))
            LOG.info(f"Dropped table '{self.schema.table_name(table_key)}'.")
