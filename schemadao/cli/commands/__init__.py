##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other schemadao
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to schemadao.
##############################################################################

"""
schemadao CLI Commands Package.

Each module holds one command built around the `CommandEntryPoint` interface.

Modules:
    command_entry_point: Defines the abstract base class `CommandEntryPoint` for all CLI commands.
    describe: Implements the `describe` command for viewing a schema's tables and columns.
    init_db: Implements the `init-db` command for creating a schema's tables in SQLite.
    render: Implements the `render` command for previewing generated SQL.
    retrieve: Implements the `retrieve` command for querying rows from SQLite.
"""

from schemadao.cli.commands.describe import DescribeCommand
from schemadao.cli.commands.init_db import InitDbCommand
from schemadao.cli.commands.render import RenderCommand
from schemadao.cli.commands.retrieve import RetrieveCommand


# Keep these in alphabetical order
ALL_COMMANDS = [
    DescribeCommand(),
    InitDbCommand(),
    RenderCommand(),
    RetrieveCommand(),
]
