##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other schemadao
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to schemadao.
##############################################################################

"""
This module provides functionality for locating and loading the schemadao
application configuration file (`schemadao.yaml`) and filling in defaults for
anything the file leaves out.
"""
import logging
import os
from typing import Dict, Optional

from schemadao.config import Config
from schemadao.config.config_filepaths import APP_FILENAME, DEFAULT_DB_PATH, SCHEMADAO_HOME
from schemadao.utils import deep_merge, load_yaml


LOG: logging.Logger = logging.getLogger(__name__)

DEFAULT_CONFIG: Dict = {
    "database": {"dialect": "sqlite", "path": DEFAULT_DB_PATH},
    "schema": {"path": "schema.yaml"},
    "logging": {"level": "INFO", "debug_sql": False},
}


def load_config(filepath: str) -> Optional[Dict]:
    """
    Reads a schemadao YAML configuration file and returns its contents as a dictionary.

    Args:
        filepath: The path to the YAML configuration file.

    Returns:
        A dictionary containing the contents of the YAML file or None if file doesn't exist.
    """
    if not os.path.isfile(filepath):
        LOG.info(f"No app config file at {filepath}")
        return None
    LOG.info(f"Reading app config from file {filepath}")
    return load_yaml(filepath) or {}


def find_config_file(path: str = None) -> Optional[str]:
    """
    Locate the schemadao application configuration file (`schemadao.yaml`).

    If no directory is provided the search order is:
      1. The current working directory.
      2. The `SCHEMADAO_HOME` directory.

    If a `path` is explicitly provided, only that location is checked. It may be
    the configuration file itself or the directory holding it.

    Args:
        path: A specific file or directory to look for the configuration in.

    Returns:
        The full path to the configuration file if found, otherwise `None`.
    """
    if path is None:
        for directory in (os.getcwd(), SCHEMADAO_HOME):
            candidate = os.path.join(directory, APP_FILENAME)
            if os.path.isfile(candidate):
                return candidate
        return None

    if os.path.isfile(path):
        return path

    app_path = os.path.join(path, APP_FILENAME)
    if os.path.exists(app_path):
        return app_path

    return None


def get_config(path: str = None) -> Config:
    """
    Build the `Config` object, merging the configuration file (if any) over the defaults.

    Args:
        path: An optional configuration file or directory. See `find_config_file`.

    Returns:
        The loaded `Config`. When no file is found every section holds its default.
    """
    filepath = find_config_file(path)
    app_dict = load_config(filepath) if filepath else None
    if app_dict is None:
        LOG.debug("Using default schemadao configuration.")
        app_dict = {}

    merged = deep_merge(DEFAULT_CONFIG, app_dict)
    merged["database"]["path"] = os.path.expanduser(str(merged["database"]["path"]))
    return Config(merged)
