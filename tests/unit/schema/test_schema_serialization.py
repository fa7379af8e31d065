##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other schemadao
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to schemadao.
##############################################################################

"""
Tests for the `serialization.py` module of the `schema/` directory.
"""

import json
import os
from typing import Any

import pytest

from schemadao.exceptions import SchemaError
from schemadao.schema import dump_schema_to_json_file, load_schema, schema_from_dict, schema_to_dict
from tests.fixture_types import FixtureDict, FixtureSchema, FixtureStr


def test_column_name_defaults_to_key(schemas_people_schema: FixtureSchema):
    """
    Test that a column without a `name` is named after its key.

    Args:
        schemas_people_schema: The "people" schema.
    """
    assert schemas_people_schema.get_table("people").column("Name").name == "Name"


def test_schema_from_dict_reads_flags(schemas_people_schema: FixtureSchema):
    """
    Test that table and column flags survive loading.

    Args:
        schemas_people_schema: The "people" schema.
    """
    notes = schemas_people_schema.get_table("address_notes")
    assert notes.caller_supplies_pk is True
    assert notes.multi_key is True
    assert notes.foreign_keys == ("AddressID", "PersonID")
    assert schemas_people_schema.get_table("people").column("Name").length == 64


def test_missing_primary_raises(schemas_people_dict: FixtureDict[str, Any]):
    """
    Test that a table without a primary column is rejected.

    Args:
        schemas_people_dict: The "people" schema in dictionary form.
    """
    del schemas_people_dict["tables"]["badges"]["primary"]
    with pytest.raises(SchemaError, match="'badges' has no 'primary'"):
        schema_from_dict(schemas_people_dict)


def test_unknown_field_raises(schemas_people_dict: FixtureDict[str, Any]):
    """
    Test that an unknown table or column field becomes a `SchemaError`.

    Args:
        schemas_people_dict: The "people" schema in dictionary form.
    """
    schemas_people_dict["tables"]["people"]["columns"]["Name"]["colour"] = "blue"
    with pytest.raises(SchemaError, match="Invalid definition for table 'people'"):
        schema_from_dict(schemas_people_dict)


def test_not_a_mapping_raises():
    """
    Test that a definition without `tables` is rejected.
    """
    with pytest.raises(SchemaError, match="'tables' entry"):
        schema_from_dict(["people"])


def test_dict_round_trip(schemas_people_schema: FixtureSchema):
    """
    Test that `schema_to_dict` output loads back into an equal schema.

    Args:
        schemas_people_schema: The "people" schema.
    """
    assert schema_from_dict(schema_to_dict(schemas_people_schema)) == schemas_people_schema


def test_load_schema_from_yaml(schemas_people_yaml_file: FixtureStr, schemas_people_schema: FixtureSchema):
    """
    Test that a YAML schema file loads into the expected schema.

    Args:
        schemas_people_yaml_file: Path to the "people" schema as YAML.
        schemas_people_schema: The "people" schema.
    """
    assert load_schema(schemas_people_yaml_file) == schemas_people_schema


def test_load_schema_missing_file_raises(tmp_path):
    """
    Test that loading a file that doesn't exist raises a `ValueError`.

    Args:
        tmp_path: PyTest tmp_path fixture.
    """
    with pytest.raises(ValueError, match="does not exist"):
        load_schema(os.path.join(str(tmp_path), "nope.yaml"))


def test_dump_and_load_json(tmp_path, schemas_people_schema: FixtureSchema):
    """
    Test that a dumped JSON schema file is valid JSON and loads back unchanged.

    Args:
        tmp_path: PyTest tmp_path fixture.
        schemas_people_schema: The "people" schema.
    """
    filepath = os.path.join(str(tmp_path), "nested", "schema.json")
    dump_schema_to_json_file(schemas_people_schema, filepath)

    with open(filepath, "r") as json_file:
        assert json.load(json_file)["name"] == "people_db"
    assert not os.path.exists(f"{filepath}.tmp")
    assert load_schema(filepath) == schemas_people_schema


def test_dump_without_path_raises(schemas_people_schema: FixtureSchema):
    """
    Test that dumping without a file path raises a `ValueError`.

    Args:
        schemas_people_schema: The "people" schema.
    """
    with pytest.raises(ValueError, match="valid file path"):
        dump_schema_to_json_file(schemas_people_schema, "")
