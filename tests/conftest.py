##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other schemadao
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to schemadao.
##############################################################################

"""
This module contains pytest fixtures to be used throughout the entire test suite.
"""
import os
from glob import glob

import pytest

from schemadao.log_formatter import set_sql_debug
from tests.fixture_types import FixtureModification


# pylint: disable=redefined-outer-name


#######################################
# Loading in Module Specific Fixtures #
#######################################

fixture_glob = os.path.join("tests", "fixtures", "**", "*.py")
pytest_plugins = [
    fixture_file.replace(os.sep, ".").replace(".py", "")
    for fixture_file in glob(fixture_glob, recursive=True)
    if not fixture_file.endswith("__init__.py")
]


#######################################
######### Fixture Definitions #########
#######################################


@pytest.fixture(autouse=True)
def reset_sql_debug(monkeypatch: pytest.MonkeyPatch) -> FixtureModification:
    """
    Make sure every test starts with statement logging following the
    environment, and that the environment doesn't have it turned on.

    Args:
        monkeypatch: PyTest monkeypatch fixture.
    """
    monkeypatch.delenv("SCHEMADAO_DEBUG", raising=False)
    set_sql_debug(None)
    yield
    set_sql_debug(None)
