##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other schemadao
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to schemadao.
##############################################################################

"""
This module stores constants representing file paths that will be needed for
schemadao's configuration.
"""

import os


APP_FILENAME: str = "schemadao.yaml"
USER_HOME: str = os.path.expanduser("~")
SCHEMADAO_HOME: str = os.environ.get("SCHEMADAO_HOME", os.path.join(USER_HOME, ".schemadao"))
DEFAULT_DB_PATH: str = os.path.join(SCHEMADAO_HOME, "schemadao.db")
