##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other schemadao
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to schemadao.
##############################################################################

"""
Static metadata describing the tables schemadao persists records into.

Modules:
    types: The frozen `Schema`, `Table`, `Column`, and `ChildTable` dataclasses.
    serialization: Conversion to and from dictionaries, JSON files, and YAML files.
"""

from schemadao.schema.serialization import dump_schema_to_json_file, load_schema, schema_from_dict, schema_to_dict
from schemadao.schema.types import ChildTable, Column, Schema, Table


__all__ = [
    "ChildTable",
    "Column",
    "Schema",
    "Table",
    "dump_schema_to_json_file",
    "load_schema",
    "schema_from_dict",
    "schema_to_dict",
]
