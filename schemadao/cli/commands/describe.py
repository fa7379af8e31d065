##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other schemadao
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to schemadao.
##############################################################################

"""
CLI module for displaying the contents of a schema file.
"""

import logging
from argparse import ArgumentParser, Namespace

from tabulate import tabulate

from schemadao.cli.commands.command_entry_point import CommandEntryPoint
from schemadao.schema.serialization import load_schema
from schemadao.schema.types import Schema


LOG = logging.getLogger("schemadao")


def _yes(flag: bool) -> str:
    return "yes" if flag else ""


class DescribeCommand(CommandEntryPoint):
    """
    Handles the `describe` CLI command for viewing tables and columns.

    Methods:
        add_parser: Adds the `describe` command to the CLI parser.
        process_command: Prints a summary of every table, or the columns of one table.
    """

    def add_parser(self, subparsers: ArgumentParser):
        """
        Add the `describe` command parser to the CLI argument parser.

        Parameters:
            subparsers: The subparsers object to which the `describe` command parser will be added.
        """
        describe: ArgumentParser = subparsers.add_parser(
            "describe",
            help="Display the tables of a schema, or the columns of one table.",
        )
        describe.set_defaults(func=self.process_command)
        describe.add_argument("schema", type=str, help="Path to a JSON or YAML schema file.")
        describe.add_argument("table", type=str, nargs="?", default=None, help="Optional table key or alias.")

    def process_command(self, args: Namespace):
        """
        CLI command to describe a schema.

        Args:
            args: Parsed CLI arguments.
        """
        schema = load_schema(args.schema)
        if args.table:
            print(self.describe_table(schema, args.table))
        else:
            print(self.describe_schema(schema))

    @staticmethod
    def describe_schema(schema: Schema) -> str:
        """
        Tabulate every table of a schema.

        Args:
            schema: The schema to describe.

        Returns:
            The formatted table.
        """
        rows = [
            [key, table.name, ", ".join(table.key_columns()), len(table.columns), ", ".join(table.children)]
            for key, table in schema.tables.items()
        ]
        headers = ["Table", "SQL Name", "Key", "Columns", "Children"]
        return f"Schema: {schema.name}\n" + tabulate(rows, headers)

    @staticmethod
    def describe_table(schema: Schema, table: str) -> str:
        """
        Tabulate the columns of one table.

        Args:
            schema: The schema holding the table.
            table: The table key or alias.

        Returns:
            The formatted table.
        """
        schema_table = schema.get_table(table)
        key_columns = schema_table.key_columns()
        rows = [
            [
                column.name,
                column.db_type,
                _yes(column.name in key_columns),
                _yes(column.allow_null),
                _yes(column.is_number),
                _yes(column.is_unique),
                column.length or "",
            ]
            for column in schema_table.columns.values()
        ]
        headers = ["Column", "Type", "Key", "Nullable", "Number", "Unique", "Length"]
        return f"Table: {schema_table.name}\n" + tabulate(rows, headers)
