##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other schemadao
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to schemadao.
##############################################################################

"""
The Oracle dialect.
"""

from typing import Any

from schemadao.record.values import RawExpression
from schemadao.schema.types import Column
from schemadao.sqlgen.dialect import Dialect, IdentityStrategy


class OracleDialect(Dialect):
    """
    Oracle with the python-oracledb driver (named paramstyle).

    Oracle has no `lastrowid` for identities, so every generated identity is
    returned through `RETURNING <column> INTO :<column>` and an output bind
    variable created on the cursor.
    """

    name = "oracle"
    auto_identity_strategy = IdentityStrategy.OUT_BIND
    expression_identity_strategy = IdentityStrategy.OUT_BIND
    integer_type = "NUMBER(19)"
    text_type = "VARCHAR2(4000)"

    def placeholder(self, bind_name: str) -> str:
        return f":{bind_name}"

    def default_identity(self) -> RawExpression:
        return RawExpression("SYS_GUID()")

    def empty_insert(self, table_name: str, identity_column: str) -> str:
        return f"INSERT INTO {table_name} ({identity_column}) VALUES (DEFAULT)"

    def output_variable(self, cursor: Any, column: Column) -> Any:
        return cursor.var(int if column.is_number else str)

    def varchar_type(self, length: int) -> str:
        return f"VARCHAR2({length})"

    def auto_identity_ddl(self) -> str:
        return "NUMBER GENERATED BY DEFAULT AS IDENTITY PRIMARY KEY"
