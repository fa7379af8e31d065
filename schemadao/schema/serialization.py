##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other schemadao
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to schemadao.
##############################################################################

"""
Conversion of schemas to and from plain dictionaries, JSON, and YAML.

The dictionary layout mirrors the dataclass fields:

```yaml
name: people_db
table_aliases: {persons: people}
tables:
  people:
    primary: PersonID
    columns:
      PersonID: {is_number: true, is_identity: true}
      Name: {db_type: VARCHAR(255)}
    children:
      addresses: {local_column: PersonID, foreign_column: PersonID}
```

A column's `name` defaults to its key in `columns`.
"""

import json
import logging
import os
from dataclasses import asdict
from typing import Any, Dict

from filelock import FileLock

from schemadao.exceptions import SchemaError
from schemadao.schema.types import ChildTable, Column, Schema, Table
from schemadao.utils import load_structured_file


LOG = logging.getLogger(__name__)


def _column_from_dict(col_key: str, data: Dict[str, Any]) -> Column:
    data = dict(data or {})
    data.setdefault("name", col_key)
    return Column(**data)


def _table_from_dict(table_key: str, data: Dict[str, Any]) -> Table:
    data = dict(data)
    try:
        primary = data.pop("primary")
    except KeyError:
        raise SchemaError(f"Table '{table_key}' has no 'primary' column.") from None

    try:
        columns = {key: _column_from_dict(key, col) for key, col in (data.pop("columns", None) or {}).items()}
        children = {key: ChildTable(**rel) for key, rel in (data.pop("children", None) or {}).items()}
        return Table(primary=primary, columns=columns, children=children, **data)
    except TypeError as exc:
        raise SchemaError(f"Invalid definition for table '{table_key}': {exc}") from exc


def schema_from_dict(data: Dict[str, Any]) -> Schema:
    """
    Build a `Schema` from its dictionary form.

    Args:
        data: A dictionary with `name`, `tables`, and optionally `table_aliases`.

    Returns:
        The validated, frozen `Schema`.

    Raises:
        SchemaError: If the dictionary doesn't describe a valid schema.
    """
    if not isinstance(data, dict) or "tables" not in data:
        raise SchemaError("A schema definition must be a mapping with a 'tables' entry.")

    tables = {key: _table_from_dict(key, table) for key, table in (data["tables"] or {}).items()}
    return Schema(
        name=data.get("name", ""),
        tables=tables,
        table_aliases=data.get("table_aliases") or {},
    )


def schema_to_dict(schema: Schema) -> Dict[str, Any]:
    """
    Convert a `Schema` into plain dictionaries, lists, and scalars.

    Args:
        schema: The schema to convert.

    Returns:
        A dictionary that `schema_from_dict` turns back into an equal schema.
    """
    tables = {}
    for key, table in schema.tables.items():
        tables[key] = {
            "primary": table.primary,
            "name": table.name,
            "caller_supplies_pk": table.caller_supplies_pk,
            "multi_key": table.multi_key,
            "foreign_keys": list(table.foreign_keys),
            "column_aliases": dict(table.column_aliases),
            "columns": {col_key: asdict(col) for col_key, col in table.columns.items()},
            "children": {
                child_key: {
                    **asdict(rel),
                    "local_columns": list(rel.local_columns),
                    "foreign_columns": list(rel.foreign_columns),
                }
                for child_key, rel in table.children.items()
            },
        }
    return {"name": schema.name, "table_aliases": dict(schema.table_aliases), "tables": tables}


def load_schema(filepath: str) -> Schema:
    """
    Load a schema from a JSON or YAML file.

    Args:
        filepath: Path to a `.json`, `.yaml`, or `.yml` schema file.

    Returns:
        The loaded `Schema`.

    Raises:
        ValueError: If the file doesn't exist or has an unsupported extension.
        SchemaError: If the contents aren't a valid schema.
    """
    if not filepath or not os.path.exists(filepath):
        raise ValueError(f"Schema file '{filepath}' does not exist.")

    LOG.debug(f"Loading schema from {filepath}...")
    schema = schema_from_dict(load_structured_file(filepath))
    LOG.debug(f"Loaded schema '{schema.name}' from {filepath}.")
    return schema


def dump_schema_to_json_file(schema: Schema, filepath: str):
    """
    Dump a schema to a JSON file.

    Args:
        schema: The schema to write.
        filepath: The path to the JSON file where the schema will be written.

    Raises:
        ValueError: If the `filepath` is not provided.
    """
    if not filepath:
        raise ValueError("A valid file path must be provided.")

    directory = os.path.dirname(filepath)
    if directory:
        os.makedirs(directory, exist_ok=True)

    # Create a lock file alongside the target JSON file
    lock_file = f"{filepath}.lock"
    with FileLock(lock_file):  # pylint: disable=abstract-class-instantiated
        temp_filepath = f"{filepath}.tmp"  # Use a temporary file for atomic writes
        with open(temp_filepath, "w") as json_file:
            json.dump(schema_to_dict(schema), json_file, indent=4)

        os.replace(temp_filepath, filepath)

    LOG.debug(f"Schema '{schema.name}' successfully dumped to {filepath}.")
