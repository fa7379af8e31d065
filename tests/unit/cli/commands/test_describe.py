##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other schemadao
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to schemadao.
##############################################################################

"""
Tests for the `describe.py` file of the `cli/` folder.
"""

import pytest
from _pytest.capture import CaptureFixture

from schemadao.cli.commands.describe import DescribeCommand
from schemadao.exceptions import UnknownTableError
from tests.fixture_types import FixtureCallable, FixtureSchema, FixtureStr


def test_describe_parser_sets_func(create_parser: FixtureCallable):
    """
    Ensure the `describe` command sets the correct default function and arguments.

    Args:
        create_parser: A function that creates a parser for a command.
    """
    command = DescribeCommand()
    parser = create_parser(command)
    args = parser.parse_args(["describe", "schema.yaml", "persons"])
    assert args.func.__name__ == command.process_command.__name__
    assert args.schema == "schema.yaml"
    assert args.table == "persons"
    assert parser.parse_args(["describe", "schema.yaml"]).table is None


def test_describe_schema(schemas_people_schema: FixtureSchema):
    """
    Test the table summary of a whole schema.

    Args:
        schemas_people_schema: The "people" schema.
    """
    output = DescribeCommand.describe_schema(schemas_people_schema)
    assert output.startswith("Schema: people_db")
    assert "NoteNo, AddressID, PersonID" in output
    assert "addresses, badges" in output


def test_describe_table(schemas_people_schema: FixtureSchema):
    """
    Test the column listing of one table looked up by alias.

    Args:
        schemas_people_schema: The "people" schema.
    """
    output = DescribeCommand.describe_table(schemas_people_schema, "persons")
    assert output.startswith("Table: people")
    for column in ("PersonID", "Name", "NullText", "Age", "Score"):
        assert column in output
    assert "64" in output


def test_describe_unknown_table(schemas_people_schema: FixtureSchema):
    """
    Test that describing an undefined table raises `UnknownTableError`.

    Args:
        schemas_people_schema: The "people" schema.
    """
    with pytest.raises(UnknownTableError):
        DescribeCommand.describe_table(schemas_people_schema, "ghosts")


def test_describe_process_command(
    create_parser: FixtureCallable, schemas_people_yaml_file: FixtureStr, capsys: CaptureFixture
):
    """
    Test that running the command prints the schema summary.

    Args:
        create_parser: A function that creates a parser for a command.
        schemas_people_yaml_file: The "people" schema as a YAML file.
        capsys: PyTest capsys fixture.
    """
    args = create_parser(DescribeCommand()).parse_args(["describe", schemas_people_yaml_file])
    args.func(args)
    assert "Schema: people_db" in capsys.readouterr().out
