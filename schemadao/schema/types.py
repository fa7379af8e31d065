##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other schemadao
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to schemadao.
##############################################################################

"""
This module houses the frozen dataclasses that describe a relational schema:
tables, their columns, their keys, and the parent/child relationships between
them.

Every class here is immutable once constructed. Mappings are exposed as
read-only views and sequences as tuples, so a `Schema` can be shared freely
between threads and between `ORM` instances.
"""

import logging
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import FrozenSet, List, Mapping, Tuple

from schemadao.exceptions import SchemaError, UnknownColumnError, UnknownTableError


LOG = logging.getLogger(__name__)


def _freeze_mapping(obj, attr: str):
    object.__setattr__(obj, attr, MappingProxyType(dict(getattr(obj, attr))))


def _freeze_sequence(obj, attr: str):
    object.__setattr__(obj, attr, tuple(getattr(obj, attr)))


@dataclass(frozen=True)
class Column:
    """
    A single column of a SQL table.

    Attributes:
        name: The column name.
        db_type: The database type used when creating the table. Optional.
        allow_null: Whether the column accepts NULL.
        is_number: Whether the column holds integers. Floats bound to such a
            column are truncated.
        is_identity: Whether this column is the table's identity column.
        is_foreign_key: Whether this column refers to a parent table.
        is_unique: Whether the column carries a unique constraint.
        length: Maximum length for character columns, 0 for none.
        default_value: A default value used when creating the table.
    """

    name: str
    db_type: str = ""
    allow_null: bool = True
    is_number: bool = False
    is_identity: bool = False
    is_foreign_key: bool = False
    is_unique: bool = False
    length: int = 0
    default_value: str = ""


@dataclass(frozen=True)
class ChildTable:
    """
    A relationship between a parent table and one of its child tables.

    A single-column join uses `local_column` (in the parent) and `foreign_column`
    (in the child). A composite join sets `multi_key` and lists the columns
    pairwise in `local_columns` and `foreign_columns`.
    """

    parent_table: str = ""
    local_column: str = ""
    foreign_column: str = ""
    multi_key: bool = False
    local_columns: Tuple[str, ...] = ()
    foreign_columns: Tuple[str, ...] = ()

    def __post_init__(self):
        _freeze_sequence(self, "local_columns")
        _freeze_sequence(self, "foreign_columns")

        if self.multi_key:
            if not self.local_columns or len(self.local_columns) != len(self.foreign_columns):
                raise SchemaError(
                    f"Composite relationship from '{self.parent_table}' needs matching local and foreign "
                    f"column lists, got {list(self.local_columns)} and {list(self.foreign_columns)}."
                )
        elif not self.local_column or not self.foreign_column:
            raise SchemaError(f"Relationship from '{self.parent_table}' needs both a local and a foreign column.")

    def join_pairs(self) -> List[Tuple[str, str]]:
        """
        Get the (parent column, child column) pairs that join the two tables.

        Returns:
            A list of `(local, foreign)` tuples in declaration order.
        """
        if self.multi_key:
            return list(zip(self.local_columns, self.foreign_columns))
        return [(self.local_column, self.foreign_column)]


@dataclass(frozen=True)
class Table:
    """
    The metadata for a single SQL table.

    Attributes:
        primary: The identity (primary key) column.
        columns: The columns of the table keyed by column name.
        name: The physical table name. Defaults to the table's key in the schema.
        caller_supplies_pk: If False the database generates the identity value
            (auto increment); if True the caller or the dialect's default identity
            expression supplies it.
        multi_key: If True rows are keyed by `primary` plus `foreign_keys`. The
            caller supplies every key column, so `caller_supplies_pk` must be set.
        foreign_keys: Additional key columns used when `multi_key` is set.
        column_aliases: Alternative names accepted in retrieval queries.
        children: Relationships to child tables keyed by the child's table key.
    """

    primary: str
    columns: Mapping[str, Column]
    name: str = ""
    caller_supplies_pk: bool = False
    multi_key: bool = False
    foreign_keys: Tuple[str, ...] = ()
    column_aliases: Mapping[str, str] = field(default_factory=dict)
    children: Mapping[str, ChildTable] = field(default_factory=dict)

    def __post_init__(self):
        _freeze_mapping(self, "columns")
        _freeze_sequence(self, "foreign_keys")
        _freeze_mapping(self, "column_aliases")
        _freeze_mapping(self, "children")

    def key_columns(self) -> Tuple[str, ...]:
        """
        Get the columns that identify a single row.

        Returns:
            `(primary,)`, or `(primary, *foreign_keys)` for a multi-key table.
        """
        if self.multi_key:
            return (self.primary,) + tuple(self.foreign_keys)
        return (self.primary,)

    def has_column(self, name: str) -> bool:
        """Check whether `name` is a column of this table."""
        return name in self.columns

    def resolve_column(self, name: str) -> str:
        """
        Follow a column alias to the real column name.

        Args:
            name: A column name or alias.

        Returns:
            The real column name, or `name` unchanged if it is not an alias.
        """
        return self.column_aliases.get(name, name)

    def column(self, name: str) -> Column:
        """
        Look up a column, raising if it doesn't exist.

        Args:
            name: The column name.

        Returns:
            The `Column` definition.

        Raises:
            UnknownColumnError: If the column isn't part of this table.
        """
        try:
            return self.columns[name]
        except KeyError:
            raise UnknownColumnError(self.name, name) from None


@dataclass(frozen=True)
class Schema:
    """
    A named collection of tables.

    The schema validates itself on construction and is read-only afterwards.

    Attributes:
        name: The schema name.
        tables: Table definitions keyed by table key.
        table_aliases: Alternative table keys accepted by every lookup.
    """

    name: str
    tables: Mapping[str, Table]
    table_aliases: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self):
        tables = {}
        for key, table in dict(self.tables).items():
            if not table.name:
                table = replace(table, name=key)
            children = {
                child_key: rel if rel.parent_table else replace(rel, parent_table=key)
                for child_key, rel in table.children.items()
            }
            if children != dict(table.children):
                table = replace(table, children=children)
            tables[key] = table
        object.__setattr__(self, "tables", tables)
        _freeze_mapping(self, "tables")
        _freeze_mapping(self, "table_aliases")
        self._validate()

    def _validate(self):
        """
        Check the cross references inside the schema.

        Raises:
            SchemaError: If a key column, relationship, or alias refers to something undefined.
        """
        for key, table in self.tables.items():
            for key_col in table.key_columns():
                if not table.has_column(key_col):
                    raise SchemaError(f"Key column '{key_col}' of table '{key}' is not a defined column.")

            # Composite keys are never created with a database identity column.
            if table.multi_key and not table.caller_supplies_pk:
                raise SchemaError(f"Multi-key table '{key}' must set 'caller_supplies_pk'.")

            for alias, target in table.column_aliases.items():
                if not table.has_column(target):
                    raise SchemaError(f"Column alias '{alias}' of table '{key}' points at unknown column '{target}'.")

            for child_key, rel in table.children.items():
                if rel.parent_table != key:
                    raise SchemaError(
                        f"Relationship '{key}' -> '{child_key}' names '{rel.parent_table}' as its parent table."
                    )
                child = self.tables.get(child_key)
                if child is None:
                    raise SchemaError(f"Table '{key}' declares unknown child table '{child_key}'.")
                for local, foreign in rel.join_pairs():
                    if not table.has_column(local):
                        raise SchemaError(f"Relationship '{key}' -> '{child_key}': unknown local column '{local}'.")
                    if not child.has_column(foreign):
                        raise SchemaError(
                            f"Relationship '{key}' -> '{child_key}': unknown foreign column '{foreign}'."
                        )

        for alias, target in self.table_aliases.items():
            if target not in self.tables:
                raise SchemaError(f"Table alias '{alias}' points at unknown table '{target}'.")

        LOG.debug(f"Validated schema '{self.name}' with {len(self.tables)} table(s).")

    def resolve_table_key(self, key: str) -> str:
        """
        Follow a table alias to the table key.

        Args:
            key: A table key or alias.

        Returns:
            The table key.

        Raises:
            UnknownTableError: If neither a table nor an alias has this name.
        """
        if not key:
            raise UnknownTableError(key, "Empty table name.")
        if key in self.tables:
            return key
        target = self.table_aliases.get(key)
        if target is None:
            raise UnknownTableError(key)
        return target

    def get_table(self, key: str) -> Table:
        """
        Look up a table by key or alias.

        Args:
            key: A table key or alias.

        Returns:
            The `Table` definition.

        Raises:
            UnknownTableError: If the table isn't defined.
        """
        return self.tables[self.resolve_table_key(key)]

    def table_name(self, key: str) -> str:
        """
        Get the name a table is known by in SQL.

        Args:
            key: A table key or alias.

        Returns:
            The table's `name` override if one was given, otherwise its key.
        """
        return self.get_table(key).name

    def columns_of(self, key: str) -> FrozenSet[str]:
        """
        Get the column names of a table.

        Args:
            key: A table key or alias.

        Returns:
            The set of column names.
        """
        return frozenset(self.get_table(key).columns)

    def parents_of(self, key: str) -> List[Tuple[str, ChildTable]]:
        """
        Find every relationship in which the given table is the child.

        Args:
            key: The child table key or alias.

        Returns:
            `(parent_key, relationship)` tuples in schema order.
        """
        child_key = self.resolve_table_key(key)
        return [
            (parent_key, parent.children[child_key])
            for parent_key, parent in self.tables.items()
            if child_key in parent.children
        ]
