##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other schemadao
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to schemadao.
##############################################################################

"""
The SQLite dialect.
"""

from schemadao.record.values import RawExpression
from schemadao.sqlgen.dialect import Dialect, IdentityStrategy


class SQLiteDialect(Dialect):
    """
    SQLite with the `sqlite3` driver (qmark paramstyle).

    Auto-increment identities are read from `cursor.lastrowid`. Expression
    identities rely on `RETURNING`, which needs SQLite 3.35 or newer.
    """

    name = "sqlite"
    auto_identity_strategy = IdentityStrategy.LAST_ROW_ID
    expression_identity_strategy = IdentityStrategy.RETURNING_ROW

    def placeholder(self, bind_name: str) -> str:
        return "?"

    def default_identity(self) -> RawExpression:
        return RawExpression("lower(hex(randomblob(16)))")

    def auto_identity_ddl(self) -> str:
        return "INTEGER PRIMARY KEY AUTOINCREMENT"
