##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other schemadao
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to schemadao.
##############################################################################

"""
CLI module for querying rows from a SQLite database.
"""

import logging
from argparse import ArgumentParser, Namespace

from tabulate import tabulate

from schemadao.cli.commands.command_entry_point import CommandEntryPoint
from schemadao.cli.utils import parse_values_argument, resolve_db_path
from schemadao.connections.sqlite_connection import SQLiteConnection
from schemadao.orm.orm import ORM
from schemadao.schema.serialization import load_schema


LOG = logging.getLogger("schemadao")


class RetrieveCommand(CommandEntryPoint):
    """
    Handles the `retrieve` CLI command.

    Methods:
        add_parser: Adds the `retrieve` command to the CLI parser.
        process_command: Prints every row matching the query.
    """

    def add_parser(self, subparsers: ArgumentParser):
        """
        Add the `retrieve` command parser to the CLI argument parser.

        Parameters:
            subparsers: The subparsers object to which the `retrieve` command parser will be added.
        """
        retrieve: ArgumentParser = subparsers.add_parser(
            "retrieve",
            help="Display the rows of a table that match a query.",
        )
        retrieve.set_defaults(func=self.process_command)
        retrieve.add_argument("schema", type=str, help="Path to a JSON or YAML schema file.")
        retrieve.add_argument("table", type=str, help="The table key or alias.")
        retrieve.add_argument(
            "--where", type=str, default="{}", help="Column values to match as a JSON object. Empty matches every row."
        )
        retrieve.add_argument(
            "--db", type=str, default=None, help="The SQLite database file. Defaults to database.path from the app config."
        )

    def process_command(self, args: Namespace):
        """
        CLI command to print matching rows.

        Args:
            args: Parsed CLI arguments.
        """
        schema = load_schema(args.schema)
        query = parse_values_argument(args.where, "--where")
        with SQLiteConnection(resolve_db_path(args)) as conn:
            records = ORM.from_dialect(schema, "sqlite", conn).retrieve_many(args.table, query)

        if not records:
            LOG.info(f"No {args.table} rows matched {query}.")
            return

        headers = sorted(schema.get_table(args.table).columns)
        print(tabulate([[record.get(column) for column in headers] for record in records], headers))
