##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other schemadao
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to schemadao.
##############################################################################

"""
SQL statement synthesis.

Modules:
    dialect: The `Dialect` base class and `IdentityStrategy`.
    dialects: The built-in SQLite, PostgreSQL, MySQL, and Oracle dialects.
    dialect_factory: Lookup of dialects by name.
    generator: `SQLGenerator` and the `Statement` it produces.
    rendering: Conversion of record values into bind arguments.
"""

from schemadao.sqlgen.dialect import Dialect, IdentityStrategy
from schemadao.sqlgen.dialect_factory import DialectFactory, dialect_factory
from schemadao.sqlgen.generator import SQLGenerator, Statement
from schemadao.sqlgen.rendering import render_value


__all__ = [
    "Dialect",
    "DialectFactory",
    "IdentityStrategy",
    "SQLGenerator",
    "Statement",
    "dialect_factory",
    "render_value",
]
