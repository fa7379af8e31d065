##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other schemadao
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to schemadao.
##############################################################################

"""
Tests for the `utils.py` module.
"""

import json
import os
from types import SimpleNamespace

import pytest
import yaml

from schemadao.utils import deep_merge, load_structured_file, load_yaml, nested_dict_to_namespaces, parse_json_argument


def test_load_yaml(tmp_path):
    """
    Test reading a YAML file.

    Args:
        tmp_path: PyTest tmp_path fixture.
    """
    filepath = os.path.join(str(tmp_path), "data.yaml")
    with open(filepath, "w") as data_file:
        yaml.dump({"a": [1, 2]}, data_file)
    assert load_yaml(filepath) == {"a": [1, 2]}


@pytest.mark.parametrize("ext", [".json", ".yaml", ".yml", ".JSON"])
def test_load_structured_file(tmp_path, ext: str):
    """
    Test that JSON and YAML files are both read, chosen by extension.

    Args:
        tmp_path: PyTest tmp_path fixture.
        ext: The file extension.
    """
    filepath = os.path.join(str(tmp_path), f"data{ext}")
    with open(filepath, "w") as data_file:
        json.dump({"a": 1}, data_file)  # JSON is valid YAML
    assert load_structured_file(filepath) == {"a": 1}


def test_load_structured_file_bad_extension(tmp_path):
    """
    Test that unsupported extensions are refused.

    Args:
        tmp_path: PyTest tmp_path fixture.
    """
    with pytest.raises(ValueError, match="Unsupported file extension"):
        load_structured_file(os.path.join(str(tmp_path), "data.toml"))


def test_parse_json_argument():
    """
    Test parsing JSON objects given on the command line.
    """
    assert parse_json_argument('{"a": 1}', "--values") == {"a": 1}
    assert parse_json_argument(None, "--values") == {}
    with pytest.raises(ValueError, match="--values is not valid JSON"):
        parse_json_argument("{", "--values")
    with pytest.raises(ValueError, match="must be a JSON object, got list"):
        parse_json_argument("[]", "--values")


def test_nested_dict_to_namespaces():
    """
    Test that nested dicts become nested namespaces.
    """
    result = nested_dict_to_namespaces({"a": {"b": 1}, "c": 2})
    assert result == SimpleNamespace(a=SimpleNamespace(b=1), c=2)
    with pytest.raises(TypeError):
        nested_dict_to_namespaces(["not", "a", "dict"])


class TestDeepMerge:
    """
    Tests for `deep_merge`.
    """

    def test_nested_values_merge(self):
        """
        Test that nested keys merge and the override wins on conflicts.
        """
        base = {"database": {"dialect": "sqlite", "path": "a.db"}, "logging": {"level": "INFO"}}
        override = {"database": {"dialect": "oracle"}, "extra": [1]}
        assert deep_merge(base, override) == {
            "database": {"dialect": "oracle", "path": "a.db"},
            "logging": {"level": "INFO"},
            "extra": [1],
        }

    def test_inputs_are_not_modified(self):
        """
        Test that neither input changes and the result shares no nested dicts with them.
        """
        base = {"database": {"dialect": "sqlite"}}
        override = {"database": {"path": "b.db"}}
        merged = deep_merge(base, override)
        merged["database"]["dialect"] = "mysql"

        assert base == {"database": {"dialect": "sqlite"}}
        assert override == {"database": {"path": "b.db"}}

    def test_none_override(self):
        """
        Test that a missing override just copies the base.
        """
        base = {"a": {"b": 1}}
        merged = deep_merge(base, None)
        assert merged == base
        assert merged["a"] is not base["a"]

    def test_scalar_replaces_dict(self):
        """
        Test that a non-dict override replaces a dict wholesale.
        """
        assert deep_merge({"a": {"b": 1}}, {"a": None}) == {"a": None}
