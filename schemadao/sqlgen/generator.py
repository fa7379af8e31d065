##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other schemadao
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to schemadao.
##############################################################################

"""
Parameterized SQL synthesis from a schema and a column/value mapping.

`SQLGenerator` is a pure function of its inputs: it never touches a database,
never mutates the mappings it is given, and is safe to share between threads.
Columns are always traversed in sorted order so the same input produces the
same SQL text every time.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, List, Mapping, Optional, Sequence, Tuple

from schemadao.exceptions import MissingFieldMapError, MissingKeyError, UnknownTableError
from schemadao.record.values import MISSING, RawExpression
from schemadao.schema.types import Schema, Table
from schemadao.sqlgen.dialect import Dialect, IdentityStrategy
from schemadao.sqlgen.rendering import render_value


LOG = logging.getLogger(__name__)

WHERE_BIND_PREFIX = "w_"


@dataclass(frozen=True)
class Statement:
    """
    A SQL statement ready to hand to a driver.

    Attributes:
        sql: The statement text.
        bind_args: Positional bind arguments, one per bound placeholder, in order.
        columns: The INSERT column list, UPDATE SET list, or SELECT list in emission order.
        placeholders: The text emitted for each entry of `columns` in an INSERT
            or UPDATE: a driver placeholder or an inlined raw expression.
        where_columns: The columns of the WHERE clause in emission order.
        identity_column: The column whose generated value should be read back, if any.
        identity_strategy: How the generated value is read back.
        generated_values: Values synthesized on the caller's behalf that the
            record should take on once the statement succeeds.
    """

    sql: str
    bind_args: Tuple[Any, ...] = ()
    columns: Tuple[str, ...] = ()
    placeholders: Tuple[str, ...] = ()
    where_columns: Tuple[str, ...] = ()
    identity_column: Optional[str] = None
    identity_strategy: IdentityStrategy = IdentityStrategy.NONE
    generated_values: Mapping[str, Any] = field(default_factory=dict)


class SQLGenerator:
    """
    Builds INSERT, UPDATE, DELETE, SELECT, and DDL statements for one dialect.

    Attributes:
        dialect: The dialect statements are built for.
        identity_generator: Produces the identity for caller-keyed tables whose
            key is absent. Defaults to the dialect's `default_identity`.

    Methods:
        binding_insert: Build an INSERT.
        binding_update: Build an UPDATE keyed by the table's key columns.
        binding_delete: Build a DELETE keyed by the table's key columns.
        binding_retrieve: Build a SELECT filtered by equality on the query columns.
        create_table: Build a CREATE TABLE.
        drop_table: Build a DROP TABLE.
    """

    def __init__(self, dialect: Dialect, identity_generator: Callable[[], Any] = None):
        """
        Args:
            dialect: The dialect statements are built for.
            identity_generator: Optional replacement for the dialect's default identity.
        """
        self.dialect: Dialect = dialect
        self.identity_generator: Callable[[], Any] = identity_generator or dialect.default_identity

    def __repr__(self) -> str:
        return f"SQLGenerator(dialect={self.dialect!r})"

    def _table(self, schema: Schema, table: str) -> Table:
        if not table:
            raise UnknownTableError(table, "Empty table name.")
        return schema.get_table(table)

    def _slot(self, table: Table, column: str, value: Any, bind_name: str) -> Tuple[str, bool, Any]:
        """
        Work out what goes in one value slot of a statement.

        Returns:
            `(text, bound, argument)`: the placeholder or inlined expression, whether
            an argument is bound, and the rendered argument.
        """
        column_def = table.column(column)
        if isinstance(value, RawExpression):
            return self.dialect.inline(value.text), False, None
        return self.dialect.placeholder(bind_name), True, render_value(column_def, value, self.dialect)

    def _where(
        self, table: Table, columns: Sequence[str], source: Mapping[str, Any], required: bool
    ) -> Tuple[List[str], List[Any]]:
        """
        Build equality predicates for a WHERE clause.

        Args:
            table: The table the predicates are on.
            columns: The columns to match, in emission order.
            source: Where to take each column's value from.
            required: If True every column needs a non-NULL value.

        Returns:
            The predicate strings and their bind arguments.

        Raises:
            MissingKeyError: If `required` and a value is missing, NULL, or a raw
                expression that would be re-evaluated instead of matching the stored key.
        """
        predicates, args = [], []
        for column in columns:
            value = source.get(column, MISSING)
            if required and (value is MISSING or value is None or isinstance(value, RawExpression)):
                raise MissingKeyError(table.name, column)
            if value is None:
                table.column(column)
                predicates.append(f"{column} IS NULL")
                continue
            text, bound, arg = self._slot(table, column, value, WHERE_BIND_PREFIX + column)
            predicates.append(f"{column} = {text}")
            if bound:
                args.append(arg)
        return predicates, args

    def binding_insert(self, schema: Schema, table: str, values: Mapping[str, Any]) -> Statement:
        """
        Build an INSERT for one row.

        If the table's identity column has no value, a database-generated
        identity is read back with the dialect's auto strategy. For a caller-keyed
        table the identity generator fills the value in first: a `RawExpression`
        is inlined and read back, and a plain value is bound and reported in
        `generated_values`. A key the caller gives as a `RawExpression` is read
        back the same way when the dialect can return expression values.

        Args:
            schema: The schema holding the table.
            table: The table key or alias.
            values: Column values for the new row. Not modified.

        Returns:
            The INSERT statement.

        Raises:
            UnknownTableError: If the table is empty or undefined.
            MissingFieldMapError: If `values` is None.
            UnknownColumnError: If a column isn't part of the table.
            ValueRenderError: If a value can't be rendered.
        """
        schema_table = self._table(schema, table)
        if values is None:
            raise MissingFieldMapError(f"No field map given for INSERT into '{table}'.")

        data = dict(values)
        pk = schema_table.primary
        identity_column = None
        strategy = IdentityStrategy.NONE
        generated = {}

        if data.get(pk) is None:
            data.pop(pk, None)
            if schema_table.caller_supplies_pk:
                identity = self.identity_generator()
                data[pk] = identity
                if isinstance(identity, RawExpression):
                    strategy = self.dialect.identity_strategy(from_expression=True)
                else:
                    generated[pk] = identity
            else:
                strategy = self.dialect.identity_strategy(from_expression=False)
        elif isinstance(data[pk], RawExpression):
            strategy = self.dialect.identity_strategy(from_expression=True)
        if strategy is not IdentityStrategy.NONE:
            identity_column = pk

        columns, placeholders, bind_args = [], [], []
        for column in sorted(data):
            text, bound, arg = self._slot(schema_table, column, data[column], column)
            columns.append(column)
            placeholders.append(text)
            if bound:
                bind_args.append(arg)

        if columns:
            sql = f"INSERT INTO {schema_table.name} ({', '.join(columns)}) VALUES ({', '.join(placeholders)})"
        else:
            sql = self.dialect.empty_insert(schema_table.name, pk)
        if identity_column:
            sql += self.dialect.identity_clause(identity_column, strategy)

        LOG.debug(f"Built INSERT for '{schema_table.name}': {sql}")
        return Statement(
            sql=sql,
            bind_args=tuple(bind_args),
            columns=tuple(columns),
            placeholders=tuple(placeholders),
            identity_column=identity_column,
            identity_strategy=strategy,
            generated_values=generated,
        )

    def binding_update(
        self, schema: Schema, table: str, values: Mapping[str, Any], keys: Mapping[str, Any] = None
    ) -> Statement:
        """
        Build an UPDATE for one row.

        The SET list holds the non-key columns of `values`. The WHERE clause
        matches every key column of the table, reading the key values from
        `keys` if given and from `values` otherwise. Identities are never generated.

        Args:
            schema: The schema holding the table.
            table: The table key or alias.
            values: The columns to update. Not modified.
            keys: Optional key column values identifying the row.

        Returns:
            The UPDATE statement. Bind arguments are the SET values followed by the key values.

        Raises:
            UnknownTableError: If the table is empty or undefined.
            MissingFieldMapError: If `values` is None or holds no non-key column.
            MissingKeyError: If a key column has no value or holds a raw expression.
            UnknownColumnError: If a column isn't part of the table.
        """
        schema_table = self._table(schema, table)
        if values is None:
            raise MissingFieldMapError(f"No field map given for UPDATE of '{table}'.")

        key_columns = schema_table.key_columns()
        set_columns = sorted(column for column in values if column not in key_columns)
        if not set_columns:
            raise MissingFieldMapError(f"No non-key columns to UPDATE in '{table}'.")

        assignments, placeholders, bind_args = [], [], []
        for column in set_columns:
            text, bound, arg = self._slot(schema_table, column, values[column], column)
            assignments.append(f"{column} = {text}")
            placeholders.append(text)
            if bound:
                bind_args.append(arg)

        predicates, where_args = self._where(
            schema_table, key_columns, keys if keys is not None else values, required=True
        )
        sql = f"UPDATE {schema_table.name} SET {', '.join(assignments)} WHERE {' AND '.join(predicates)}"

        LOG.debug(f"Built UPDATE for '{schema_table.name}': {sql}")
        return Statement(
            sql=sql,
            bind_args=tuple(bind_args + where_args),
            columns=tuple(set_columns),
            placeholders=tuple(placeholders),
            where_columns=tuple(key_columns),
        )

    def binding_delete(self, schema: Schema, table: str, values: Mapping[str, Any]) -> Statement:
        """
        Build a DELETE for one row, matched on the table's key columns.

        Args:
            schema: The schema holding the table.
            table: The table key or alias.
            values: A mapping holding at least the key column values.

        Returns:
            The DELETE statement.

        Raises:
            UnknownTableError: If the table is empty or undefined.
            MissingFieldMapError: If `values` is None.
            MissingKeyError: If a key column has no value or holds a raw expression.
        """
        schema_table = self._table(schema, table)
        if values is None:
            raise MissingFieldMapError(f"No field map given for DELETE from '{table}'.")

        key_columns = schema_table.key_columns()
        predicates, bind_args = self._where(schema_table, key_columns, values, required=True)
        sql = f"DELETE FROM {schema_table.name} WHERE {' AND '.join(predicates)}"

        LOG.debug(f"Built DELETE for '{schema_table.name}': {sql}")
        return Statement(sql=sql, bind_args=tuple(bind_args), where_columns=tuple(key_columns))

    def binding_retrieve(self, schema: Schema, table: str, query: Mapping[str, Any]) -> Statement:
        """
        Build a SELECT of every column of a table, filtered by equality.

        Query keys may be column aliases. A `None` value matches NULL and a
        `RawExpression` is compared verbatim. An empty query selects every row.

        Args:
            schema: The schema holding the table.
            table: The table key or alias.
            query: Column values to match.

        Returns:
            The SELECT statement. `columns` lists the selected columns in order.

        Raises:
            UnknownTableError: If the table is empty or undefined.
            MissingFieldMapError: If `query` is None.
            UnknownColumnError: If a query column isn't part of the table.
        """
        schema_table = self._table(schema, table)
        if query is None:
            raise MissingFieldMapError(f"No query map given for SELECT from '{table}'.")

        resolved = {schema_table.resolve_column(column): value for column, value in query.items()}
        where_columns = sorted(resolved)
        predicates, bind_args = self._where(schema_table, where_columns, resolved, required=False)

        select_columns = sorted(schema_table.columns)
        sql = f"SELECT {', '.join(select_columns)} FROM {schema_table.name}"
        if predicates:
            sql += f" WHERE {' AND '.join(predicates)}"

        LOG.debug(f"Built SELECT for '{schema_table.name}': {sql}")
        return Statement(
            sql=sql,
            bind_args=tuple(bind_args),
            columns=tuple(select_columns),
            where_columns=tuple(where_columns),
        )

    def create_table(self, schema: Schema, table: str) -> Statement:
        """
        Build a CREATE TABLE for a schema table.

        A single-key table whose identity the database generates gets the
        dialect's auto identity column. Other tables get an explicit primary
        key constraint over their key columns.

        Args:
            schema: The schema holding the table.
            table: The table key or alias.

        Returns:
            The CREATE TABLE statement.
        """
        schema_table = self._table(schema, table)
        auto_identity = not schema_table.caller_supplies_pk and not schema_table.multi_key

        definitions = []
        for name, column in schema_table.columns.items():
            if auto_identity and name == schema_table.primary:
                definitions.append(f"{name} {self.dialect.auto_identity_ddl()}")
            else:
                definitions.append(self.dialect.column_ddl(column))
        if not auto_identity:
            definitions.append(f"PRIMARY KEY ({', '.join(schema_table.key_columns())})")

        return Statement(sql=f"CREATE TABLE {schema_table.name} ({', '.join(definitions)})")

    def drop_table(self, schema: Schema, table: str) -> Statement:
        """
        Build a DROP TABLE for a schema table.

        Args:
            schema: The schema holding the table.
            table: The table key or alias.

        Returns:
            The DROP TABLE statement.
        """
        schema_table = self._table(schema, table)
        return Statement(sql=f"DROP TABLE {schema_table.name}")
