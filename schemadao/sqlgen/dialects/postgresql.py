##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other schemadao
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to schemadao.
##############################################################################

"""
The PostgreSQL dialect.
"""

from schemadao.record.values import RawExpression
from schemadao.sqlgen.dialect import Dialect, IdentityStrategy


class PostgreSQLDialect(Dialect):
    """
    PostgreSQL with a format-paramstyle driver such as psycopg.

    Every generated identity is read back through `INSERT ... RETURNING`.
    Unquoted identifiers are folded to lower case by the server, so result
    rows are mapped back to schema columns by position.
    """

    name = "postgresql"
    auto_identity_strategy = IdentityStrategy.RETURNING_ROW
    expression_identity_strategy = IdentityStrategy.RETURNING_ROW
    integer_type = "BIGINT"
    blob_type = "BYTEA"

    def placeholder(self, bind_name: str) -> str:
        return "%s"

    def inline(self, text: str) -> str:
        # format paramstyle: a literal percent sign must be doubled
        return text.replace("%", "%%")

    def default_identity(self) -> RawExpression:
        return RawExpression("gen_random_uuid()::text")

    def auto_identity_ddl(self) -> str:
        return "BIGINT GENERATED BY DEFAULT AS IDENTITY PRIMARY KEY"
