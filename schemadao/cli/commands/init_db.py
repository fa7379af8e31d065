##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other schemadao
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to schemadao.
##############################################################################

"""
CLI module for creating the tables of a schema in a SQLite database.
"""

import logging
from argparse import ArgumentParser, Namespace

from schemadao.cli.commands.command_entry_point import CommandEntryPoint
from schemadao.cli.utils import resolve_db_path
from schemadao.connections.sqlite_connection import SQLiteConnection
from schemadao.orm.orm import ORM
from schemadao.schema.serialization import load_schema


LOG = logging.getLogger("schemadao")


class InitDbCommand(CommandEntryPoint):
    """
    Handles the `init-db` CLI command.

    Methods:
        add_parser: Adds the `init-db` command to the CLI parser.
        process_command: Creates every table of the schema.
    """

    def add_parser(self, subparsers: ArgumentParser):
        """
        Add the `init-db` command parser to the CLI argument parser.

        Parameters:
            subparsers: The subparsers object to which the `init-db` command parser will be added.
        """
        init_db: ArgumentParser = subparsers.add_parser(
            "init-db",
            help="Create every table of a schema in a SQLite database.",
        )
        init_db.set_defaults(func=self.process_command)
        init_db.add_argument("schema", type=str, help="Path to a JSON or YAML schema file.")
        init_db.add_argument(
            "--db", type=str, default=None, help="The SQLite database file. Defaults to database.path from the app config."
        )

    def process_command(self, args: Namespace):
        """
        CLI command to create the tables of a schema.

        Args:
            args: Parsed CLI arguments.
        """
        schema = load_schema(args.schema)
        db_path = resolve_db_path(args)
        with SQLiteConnection(db_path) as conn:
            ORM.from_dialect(schema, "sqlite", conn).create_tables()
        LOG.info(f"Created {len(schema.tables)} table(s) in {db_path}.")
