##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other schemadao
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to schemadao.
##############################################################################

"""
The built-in SQL dialects.

Modules:
    mysql: MySQL and MariaDB.
    oracle: Oracle.
    postgresql: PostgreSQL.
    sqlite: SQLite.
"""

from schemadao.sqlgen.dialects.mysql import MySQLDialect
from schemadao.sqlgen.dialects.oracle import OracleDialect
from schemadao.sqlgen.dialects.postgresql import PostgreSQLDialect
from schemadao.sqlgen.dialects.sqlite import SQLiteDialect


__all__ = ["MySQLDialect", "OracleDialect", "PostgreSQLDialect", "SQLiteDialect"]
