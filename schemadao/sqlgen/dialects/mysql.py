##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other schemadao
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to schemadao.
##############################################################################

"""
The MySQL and MariaDB dialect.
"""

import uuid

from schemadao.sqlgen.dialect import Dialect, IdentityStrategy


class MySQLDialect(Dialect):
    """
    MySQL or MariaDB with a format-paramstyle driver such as PyMySQL.

    MySQL has no way to return a value produced by an arbitrary expression, so
    the default identity for caller-keyed tables is a UUID generated here and
    bound like any other value. The record learns it without a round trip.
    """

    name = "mysql"
    native_unsigned = True
    auto_identity_strategy = IdentityStrategy.LAST_ROW_ID
    expression_identity_strategy = IdentityStrategy.NONE
    integer_type = "BIGINT"
    blob_type = "LONGBLOB"

    def placeholder(self, bind_name: str) -> str:
        return "%s"

    def inline(self, text: str) -> str:
        # format paramstyle: a literal percent sign must be doubled
        return text.replace("%", "%%")

    def default_identity(self) -> str:
        return str(uuid.uuid4())

    def empty_insert(self, table_name: str, identity_column: str) -> str:
        return f"INSERT INTO {table_name} () VALUES ()"

    def auto_identity_ddl(self) -> str:
        return "BIGINT AUTO_INCREMENT PRIMARY KEY"
