##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other schemadao
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to schemadao.
##############################################################################

"""
Abstract base class for SQL dialects.

A dialect is a small strategy object. The statement synthesis algorithm lives
once in `SQLGenerator`; a dialect only answers the questions that differ
between databases:

- how a bind placeholder is spelled
- how a database-generated identity value is read back after an INSERT
- which expression supplies a default identity for caller-keyed tables
- how column types are spelled in CREATE TABLE

New dialects subclass `Dialect` and are registered with the dialect factory
(see `schemadao.sqlgen.dialect_factory`).
"""

import logging
from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, List, Mapping, Optional, Sequence

from schemadao.schema.types import Column


LOG = logging.getLogger(__name__)


class IdentityStrategy(Enum):
    """
    How the executor learns the identity value an INSERT generated.

    Attributes:
        NONE: The value can't be (or needn't be) read back.
        LAST_ROW_ID: Read `cursor.lastrowid`.
        RETURNING_ROW: The INSERT ends in `RETURNING <column>`; read the returned row.
        OUT_BIND: The INSERT ends in `RETURNING <column> INTO <bind>`; read an output bind variable.
    """

    NONE = "none"
    LAST_ROW_ID = "last_row_id"
    RETURNING_ROW = "returning_row"
    OUT_BIND = "out_bind"


class Dialect(ABC):
    """
    Base class for every SQL dialect supported by schemadao.

    Attributes:
        name: The canonical dialect name.
        native_unsigned: Whether the driver binds unsigned 64-bit integers natively.
            When False, unsigned values are bound as decimal text.
        auto_identity_strategy: How an auto-increment identity is read back.
        expression_identity_strategy: How an identity produced by a raw SQL
            expression (e.g. a GUID function) is read back.
        integer_type: DDL type for integer columns.
        text_type: DDL type for text columns without a length.
        blob_type: DDL type for binary columns.

    Methods:
        placeholder: Spell the bind placeholder for a named slot.
        inline: Spell raw SQL text for the driver.
        default_identity: The identity value used when a caller-keyed table's key is absent.
        identity_strategy: Pick the read-back strategy for an INSERT.
        identity_clause: The suffix an INSERT needs to return its identity.
        empty_insert: An INSERT that supplies no column values.
        output_variable: Create the output bind variable used by `OUT_BIND`.
        read_identity: Read the generated identity after executing an INSERT.
        column_type: The DDL type of a column.
        auto_identity_ddl: The DDL for a database-generated identity column.
    """

    name: str = ""
    native_unsigned: bool = False
    auto_identity_strategy: IdentityStrategy = IdentityStrategy.LAST_ROW_ID
    expression_identity_strategy: IdentityStrategy = IdentityStrategy.RETURNING_ROW
    integer_type: str = "INTEGER"
    text_type: str = "TEXT"
    blob_type: str = "BLOB"

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"

    @abstractmethod
    def placeholder(self, bind_name: str) -> str:
        """
        Spell the bind placeholder for one value slot.

        Args:
            bind_name: A name unique within the statement. Positional dialects ignore it.

        Returns:
            The placeholder text, e.g. `?`, `%s`, or `:name`.
        """
        raise NotImplementedError("Subclasses of `Dialect` must implement a `placeholder` method.")

    @abstractmethod
    def default_identity(self) -> Any:
        """
        Produce the identity used when a caller-keyed table's key is absent.

        Returns:
            Either a `RawExpression` evaluated by the database or a plain value
            that is bound like any other.
        """
        raise NotImplementedError("Subclasses of `Dialect` must implement a `default_identity` method.")

    @abstractmethod
    def auto_identity_ddl(self) -> str:
        """
        Get the type and constraints of a database-generated identity column.

        Returns:
            The text that follows the column name in CREATE TABLE.
        """
        raise NotImplementedError("Subclasses of `Dialect` must implement an `auto_identity_ddl` method.")

    def inline(self, text: str) -> str:
        """
        Spell raw SQL text so it survives the driver's parameter substitution.

        Args:
            text: The text of a `RawExpression`.

        Returns:
            The text to place in the statement.
        """
        return text

    def identity_strategy(self, from_expression: bool) -> IdentityStrategy:
        """
        Pick how an INSERT's identity will be read back.

        Args:
            from_expression: True if the identity comes from a raw SQL expression,
                False if the database auto-generates it.

        Returns:
            The strategy to use.
        """
        return self.expression_identity_strategy if from_expression else self.auto_identity_strategy

    def identity_clause(self, column: str, strategy: IdentityStrategy) -> str:
        """
        Get the text to append to an INSERT so that it returns its identity.

        Args:
            column: The identity column.
            strategy: The read-back strategy.

        Returns:
            The clause (with a leading space) or an empty string.
        """
        if strategy is IdentityStrategy.RETURNING_ROW:
            return f" RETURNING {column}"
        if strategy is IdentityStrategy.OUT_BIND:
            return f" RETURNING {column} INTO {self.placeholder(column)}"
        return ""

    def empty_insert(self, table_name: str, identity_column: str) -> str:  # pylint: disable=unused-argument
        """
        Build an INSERT that supplies no column values.

        Args:
            table_name: The table to insert into.
            identity_column: The table's identity column.

        Returns:
            The INSERT statement text.
        """
        return f"INSERT INTO {table_name} DEFAULT VALUES"

    def output_variable(self, cursor: Any, column: Column) -> Any:
        """
        Create an output bind variable to receive a returned identity.

        Only dialects using `IdentityStrategy.OUT_BIND` need this.

        Args:
            cursor: The driver cursor the INSERT will run on.
            column: The identity column.

        Returns:
            A driver-specific output variable.
        """
        raise NotImplementedError(f"The {self.name} dialect does not use output bind variables.")

    def read_identity(
        self,
        cursor: Any,
        strategy: IdentityStrategy,
        output: Any = None,
        rows: Optional[Sequence[Any]] = None,
    ) -> Any:
        """
        Read back the identity value an INSERT generated.

        Args:
            cursor: The cursor the INSERT ran on.
            strategy: The strategy the INSERT was built with.
            output: The output bind variable for `OUT_BIND`.
            rows: The rows fetched from the cursor for `RETURNING_ROW`.

        Returns:
            The identity value, or None if it can't be determined.
        """
        if strategy is IdentityStrategy.LAST_ROW_ID:
            return cursor.lastrowid
        if strategy is IdentityStrategy.RETURNING_ROW:
            if not rows:
                return None
            first = rows[0]
            if isinstance(first, Mapping):
                return next(iter(first.values()), None)
            return first[0]
        if strategy is IdentityStrategy.OUT_BIND:
            value = output.getvalue()
            if isinstance(value, list):
                return value[0] if value else None
            return value
        return None

    def column_type(self, column: Column) -> str:
        """
        Get the DDL type of a column.

        An explicit `db_type` always wins. Otherwise integer columns use
        `integer_type`, columns with a length use `VARCHAR(length)`, and the
        rest use `text_type`.

        Args:
            column: The column definition.

        Returns:
            The SQL type.
        """
        if column.db_type:
            return column.db_type
        if column.is_number:
            return self.integer_type
        if column.length:
            return self.varchar_type(column.length)
        return self.text_type

    def varchar_type(self, length: int) -> str:
        """Spell a bounded character type."""
        return f"VARCHAR({length})"

    def column_ddl(self, column: Column) -> str:
        """
        Build the CREATE TABLE entry for an ordinary column.

        Args:
            column: The column definition.

        Returns:
            The column definition text.
        """
        parts: List[str] = [column.name, self.column_type(column)]
        if column.default_value != "":
            default = column.default_value
            if not column.is_number:
                default = "'" + default.replace("'", "''") + "'"
            parts.append(f"DEFAULT {default}")
        if not column.allow_null:
            parts.append("NOT NULL")
        if column.is_unique:
            parts.append("UNIQUE")
        return " ".join(parts)
