##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other schemadao
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to schemadao.
##############################################################################

"""
Module for project-wide utility functions.
"""

import json
import logging
import os
from types import SimpleNamespace
from typing import Any, Dict

import yaml


LOG = logging.getLogger(__name__)


def load_yaml(filepath: str) -> Dict:
    """
    Safely read a YAML file and return its contents.

    Args:
        filepath: The file path to the YAML file to be read.

    Returns:
        A dict representing the contents of the YAML file.
    """
    with open(filepath, "r") as _file:
        return yaml.safe_load(_file)


def load_structured_file(filepath: str) -> Dict:
    """
    Read a JSON or YAML file, chosen by its extension.

    Args:
        filepath: The path to a `.json`, `.yaml`, or `.yml` file.

    Returns:
        The parsed contents of the file.

    Raises:
        ValueError: If the extension is not one of the supported ones.
    """
    _, ext = os.path.splitext(filepath)
    ext = ext.lower()
    if ext == ".json":
        with open(filepath, "r") as _file:
            return json.load(_file)
    if ext in (".yaml", ".yml"):
        return load_yaml(filepath)
    raise ValueError(f"Unsupported file extension '{ext}' for {filepath}. Expected .json, .yaml, or .yml.")


def parse_json_argument(raw: str, arg_name: str) -> Dict[str, Any]:
    """
    Parse a JSON object given on the command line.

    Args:
        raw: The raw JSON text. An empty value gives an empty dict.
        arg_name: The argument name, used in error messages.

    Returns:
        The decoded JSON object.

    Raises:
        ValueError: If the text is not valid JSON or is not a JSON object.
    """
    if not raw:
        return {}
    try:
        decoded = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise ValueError(f"{arg_name} is not valid JSON: {exc}") from exc
    if not isinstance(decoded, dict):
        raise ValueError(f"{arg_name} must be a JSON object, got {type(decoded).__name__}.")
    return decoded


def nested_dict_to_namespaces(dic: Dict) -> SimpleNamespace:
    """
    Convert a nested dictionary into a nested SimpleNamespace structure.

    Args:
        dic: The nested dictionary to be converted.

    Returns:
        A SimpleNamespace object representing the nested structure of the input dictionary.

    Raises:
        TypeError: If the input is not a dictionary.
    """

    def recurse(dic):
        if not isinstance(dic, dict):
            return dic
        for key, val in list(dic.items()):
            dic[key] = recurse(val)
        return SimpleNamespace(**dic)

    if not isinstance(dic, dict):
        raise TypeError(f"Expected a dictionary, got {type(dic).__name__}.")

    return recurse(dic)


def deep_merge(base: Dict, override: Dict) -> Dict:
    """
    Merge `override` into a copy of `base`, descending into nested dicts.

    Args:
        base: The dictionary providing default values.
        override: The dictionary whose values win.

    Returns:
        A new merged dictionary. Neither input is modified.
    """
    merged = {}
    for key, val in base.items():
        merged[key] = deep_merge(val, {}) if isinstance(val, dict) else val
    for key, val in (override or {}).items():
        if isinstance(val, dict) and isinstance(merged.get(key), dict):
            merged[key] = deep_merge(merged[key], val)
        else:
            merged[key] = val
    return merged
