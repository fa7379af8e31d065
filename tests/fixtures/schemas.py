##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other schemadao
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to schemadao.
##############################################################################

"""
Fixtures providing the schemas used across the test suite.

The "people" schema has:
- `people`: auto-increment `PersonID`, a `name` column alias, and two child tables
- `addresses`: auto-increment `AddressID` and a composite child relationship to `address_notes`
- `address_notes`: a multi-key table keyed by `(NoteNo, AddressID, PersonID)`
- `badges`: a caller-keyed table whose identity comes from the dialect's default identity
"""

import os
from typing import Any, Dict

import pytest
import yaml

from schemadao.schema import schema_from_dict
from tests.fixture_types import FixtureDict, FixtureSchema, FixtureStr


def people_schema_dict() -> Dict[str, Any]:
    """
    Build a fresh copy of the "people" schema in dictionary form.

    Returns:
        The schema dictionary.
    """
    return {
        "name": "people_db",
        "table_aliases": {"persons": "people"},
        "tables": {
            "people": {
                "primary": "PersonID",
                "column_aliases": {"name": "Name"},
                "columns": {
                    "PersonID": {"is_number": True, "is_identity": True, "allow_null": False},
                    "Name": {"length": 64},
                    "NullText": {},
                    "Age": {"is_number": True},
                    "Score": {},
                },
                "children": {
                    "addresses": {"local_column": "PersonID", "foreign_column": "PersonID"},
                    "badges": {"local_column": "PersonID", "foreign_column": "OwnerID"},
                },
            },
            "addresses": {
                "primary": "AddressID",
                "columns": {
                    "AddressID": {"is_number": True, "is_identity": True, "allow_null": False},
                    "PersonID": {"is_number": True, "is_foreign_key": True},
                    "Street": {},
                },
                "children": {
                    "address_notes": {
                        "multi_key": True,
                        "local_columns": ["AddressID", "PersonID"],
                        "foreign_columns": ["AddressID", "PersonID"],
                    },
                },
            },
            "address_notes": {
                "primary": "NoteNo",
                "caller_supplies_pk": True,
                "multi_key": True,
                "foreign_keys": ["AddressID", "PersonID"],
                "columns": {
                    "NoteNo": {"is_number": True, "allow_null": False},
                    "AddressID": {"is_number": True, "is_foreign_key": True, "allow_null": False},
                    "PersonID": {"is_number": True, "is_foreign_key": True, "allow_null": False},
                    "Body": {},
                },
            },
            "badges": {
                "primary": "BadgeID",
                "caller_supplies_pk": True,
                "columns": {
                    "BadgeID": {"length": 32, "is_identity": True},
                    "OwnerID": {"is_number": True, "is_foreign_key": True},
                    "Label": {"default_value": "member"},
                },
            },
        },
    }


@pytest.fixture
def schemas_people_dict() -> FixtureDict[str, Any]:
    """
    The "people" schema in dictionary form. A new copy is built for every test.

    Returns:
        The schema dictionary.
    """
    return people_schema_dict()


@pytest.fixture
def schemas_people_schema(schemas_people_dict: FixtureDict[str, Any]) -> FixtureSchema:
    """
    The "people" schema as a `Schema` object.

    Args:
        schemas_people_dict: The "people" schema in dictionary form.

    Returns:
        The loaded `Schema`.
    """
    return schema_from_dict(schemas_people_dict)


@pytest.fixture
def schemas_people_yaml_file(tmp_path, schemas_people_dict: FixtureDict[str, Any]) -> FixtureStr:
    """
    Write the "people" schema to a YAML file.

    Args:
        tmp_path: PyTest tmp_path fixture.
        schemas_people_dict: The "people" schema in dictionary form.

    Returns:
        The path to the YAML file.
    """
    filepath = os.path.join(str(tmp_path), "schema.yaml")
    with open(filepath, "w") as schema_file:
        yaml.safe_dump(schemas_people_dict, schema_file)
    return filepath


@pytest.fixture
def schemas_person_schema() -> FixtureSchema:
    """
    A schema holding a single auto-increment `Person` table.

    Returns:
        The loaded `Schema`.
    """
    return schema_from_dict(
        {
            "name": "person_db",
            "tables": {
                "Person": {
                    "primary": "PersonID",
                    "columns": {
                        "PersonID": {"is_number": True, "is_identity": True},
                        "Name": {},
                        "NullText": {},
                    },
                }
            },
        }
    )
