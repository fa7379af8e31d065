##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other schemadao
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to schemadao.
##############################################################################

"""
The dynamic record: one row of one table, with change tracking.

A `Record` is not thread safe. Its change-set and saved flag belong to a
single caller at a time.
"""

import logging
from types import MappingProxyType
from typing import Any, Dict, FrozenSet, Iterable, List, Mapping, Optional, Set, Tuple

from schemadao.exceptions import ValueRenderError
from schemadao.record.values import MISSING, RawExpression


LOG = logging.getLogger(__name__)


def _differs(old: Any, new: Any) -> bool:
    """
    Decide whether `new` is a change relative to `old`.

    Values of different types always differ so that `1`, `1.0`, and `True`
    are not treated as the same stored value.
    """
    if old is MISSING:
        return True
    if type(old) is not type(new):  # pylint: disable=unidiomatic-typecheck
        return True
    return old != new


class Record:
    """
    A row of a table held as a mapping from column name to value.

    The record remembers the values it had when it was last saved (or fetched)
    and reports a column as changed only while its current value differs from
    that snapshot. Setting a column to the value it already has is therefore
    not a change, and setting it back to its saved value undoes the change.

    Attributes:
        table: The key of the table this record belongs to.
        children: Child records keyed by child table key, in insertion order.
        parent: The record this one was added to as a child, if any. The parent
            owns the child, never the other way around.

    Methods:
        set: Store a value for a column.
        get: Read a column's value.
        is_dirty: Whether the record needs saving.
        mark_saved: Record a successful write.
        add_child: Append a child record.
        children_of: The child records for one child table.
        from_row (classmethod): Build a clean, saved record from a result row.
    """

    def __init__(self, table: str, fields: Mapping[str, Any] = None):
        """
        Create an unsaved record.

        Args:
            table: The key of the table this record belongs to.
            fields: Initial column values. Each is stored through `set`.
        """
        self.table: str = table
        self.children: Dict[str, List["Record"]] = {}
        self.parent: Optional["Record"] = None
        self._fields: Dict[str, Any] = {}
        self._saved_fields: Dict[str, Any] = {}
        self._changed: Set[str] = set()
        self._saved: bool = False

        for column, value in (fields or {}).items():
            self.set(column, value)

    def __repr__(self) -> str:
        return f"Record(table={self.table!r}, fields={self._fields!r}, saved={self._saved})"

    def __contains__(self, column: str) -> bool:
        return column in self._fields

    @classmethod
    def from_row(cls, table: str, row: Mapping[str, Any]) -> "Record":
        """
        Build a record from a row read out of the database.

        Args:
            table: The key of the table the row came from.
            row: Column values keyed by column name.

        Returns:
            A saved record with an empty change-set.
        """
        record = cls(table)
        record._fields = dict(row)
        record.mark_saved()
        return record

    @property
    def fields(self) -> Mapping[str, Any]:
        """A read-only view of every column value the record holds."""
        return MappingProxyType(self._fields)

    @property
    def changed_fields(self) -> FrozenSet[str]:
        """The columns whose value differs from the last saved value."""
        return frozenset(self._changed)

    @property
    def is_saved(self) -> bool:
        """Whether the record has been written to (or read from) the database."""
        return self._saved

    def set(self, column: str, value: Any) -> bool:
        """
        Store a value for a column.

        Args:
            column: The column name.
            value: The new value. `None` means SQL NULL.

        Returns:
            True if the column now counts as changed.

        Raises:
            ValueError: If `value` is the `MISSING` sentinel.
        """
        if value is MISSING:
            raise ValueError(f"Cannot set column '{column}' of a {self.table} record to MISSING.")

        self._fields[column] = value
        if self._saved and not _differs(self._saved_fields.get(column, MISSING), value):
            self._changed.discard(column)
            return False

        self._changed.add(column)
        return True

    def get(self, column: str, default: Any = MISSING) -> Any:
        """
        Read a column's value.

        Args:
            column: The column name.
            default: What to return if the column holds no value.

        Returns:
            The stored value (`None` for SQL NULL), or `default` if the column
            was never set or fetched.
        """
        return self._fields.get(column, default)

    @staticmethod
    def value_is_null(value: Any) -> bool:
        """Check whether a value read from a record is SQL NULL."""
        return value is None

    def get_int_always(self, column: str) -> int:
        """
        Read a column as an integer, converting strings and floats.

        Args:
            column: The column name.

        Returns:
            The value as an int.

        Raises:
            ValueRenderError: If the column is empty, NULL, or can't be converted.
        """
        value = self.get(column)
        if value is MISSING or value is None or isinstance(value, RawExpression):
            raise ValueRenderError(column, value, f"Column {column} has no integer value ({value!r}).")
        if isinstance(value, (int, float)):
            return int(value)
        if isinstance(value, str):
            try:
                return int(value.strip())
            except ValueError as exc:
                raise ValueRenderError(column, value, f"Column {column} value {value!r} is not an integer.") from exc
        raise ValueRenderError(column, value)

    def get_string_always(self, column: str) -> str:
        """
        Read a column as a string, converting numbers and decoding bytes as UTF-8.

        Args:
            column: The column name.

        Returns:
            The value as a str.

        Raises:
            ValueRenderError: If the column is empty, NULL, or can't be converted.
        """
        value = self.get(column)
        if value is MISSING or value is None or isinstance(value, RawExpression):
            raise ValueRenderError(column, value, f"Column {column} has no string value ({value!r}).")
        if isinstance(value, str):
            return value
        if isinstance(value, (bytes, bytearray)):
            return bytes(value).decode("utf-8")
        if isinstance(value, (int, float)):
            return str(value)
        raise ValueRenderError(column, value)

    def changed_values(self) -> Dict[str, Any]:
        """
        Get the values of the changed columns.

        Returns:
            A dict of changed column name to current value.
        """
        return {column: self._fields[column] for column in sorted(self._changed)}

    def is_dirty(self) -> bool:
        """
        Check whether the record needs to be saved.

        Returns:
            True if the record was never saved or has changed columns.
        """
        return not self._saved or bool(self._changed)

    def mark_saved(self):
        """
        Record a successful write: the current values become the saved snapshot
        and the change-set is emptied.
        """
        self._saved = True
        self._saved_fields = dict(self._fields)
        self._changed.clear()

    def add_child(self, table: str, record: "Record"):
        """
        Append a child record and point its `parent` back at this record.

        Args:
            table: The child table key.
            record: The child record.
        """
        record.parent = self
        self.children.setdefault(table, []).append(record)

    def set_children(self, table: str, records: Iterable["Record"]):
        """
        Replace the child records for one child table.

        Args:
            table: The child table key.
            records: The new child records.
        """
        self.children[table] = []
        for record in records:
            self.add_child(table, record)

    def children_of(self, table: str) -> Tuple["Record", ...]:
        """
        Get the child records for one child table.

        Args:
            table: The child table key.

        Returns:
            The child records in insertion order, empty if there are none.
        """
        return tuple(self.children.get(table, ()))

    def to_dict(self) -> Dict[str, Any]:
        """
        Copy the record's column values into a plain dict.

        Returns:
            A dict of column name to value.
        """
        return dict(self._fields)
