##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other schemadao
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to schemadao.
##############################################################################

"""
Ready-made database connections.

Any DB-API 2.0 connection works with schemadao. This package only ships a
configured SQLite connection since `sqlite3` is always available.
"""

from schemadao.connections.sqlite_connection import SQLiteConnection


__all__ = ["SQLiteConnection"]
