##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other schemadao
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to schemadao.
##############################################################################

"""
Persistence of records through a DB-API 2.0 connection.

Modules:
    executor: Runs generated statements and reads back identities.
    orm: The `ORM` orchestrator.
"""

from schemadao.orm.executor import ExecResult, StatementExecutor
from schemadao.orm.orm import ORM


__all__ = ["ORM", "ExecResult", "StatementExecutor"]
