##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other schemadao
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to schemadao.
##############################################################################

"""
CLI module for rendering statements without running them.

This module defines the `RenderCommand` class, which handles the `render`
subcommand. It builds the INSERT, UPDATE, DELETE, or SELECT statement for a
table and a set of column values and prints the SQL and its bind arguments.
"""

import logging
from argparse import ArgumentParser, Namespace

from schemadao.cli.commands.command_entry_point import CommandEntryPoint
from schemadao.cli.utils import parse_values_argument, resolve_dialect
from schemadao.schema.serialization import load_schema
from schemadao.sqlgen.dialect_factory import dialect_factory
from schemadao.sqlgen.generator import SQLGenerator, Statement


LOG = logging.getLogger("schemadao")

OPERATIONS = ("insert", "update", "delete", "select")


class RenderCommand(CommandEntryPoint):
    """
    Handles the `render` CLI command for previewing generated SQL.

    Methods:
        add_parser: Adds the `render` command to the CLI parser.
        process_command: Builds and prints the requested statement.
    """

    def add_parser(self, subparsers: ArgumentParser):
        """
        Add the `render` command parser to the CLI argument parser.

        Parameters:
            subparsers: The subparsers object to which the `render` command parser will be added.
        """
        render: ArgumentParser = subparsers.add_parser(
            "render",
            help="Print the SQL and bind arguments schemadao would run for a table.",
        )
        render.set_defaults(func=self.process_command)
        render.add_argument("schema", type=str, help="Path to a JSON or YAML schema file.")
        render.add_argument("table", type=str, help="The table key or alias.")
        render.add_argument("operation", choices=OPERATIONS, help="The statement to render.")
        render.add_argument(
            "--values",
            type=str,
            default="{}",
            help='Column values as a JSON object, e.g. \'{"Name": "Joe"}\'. '
            'Use {"$raw": "<sql>"} for a literal SQL expression.',
        )
        render.add_argument(
            "--dialect",
            type=str,
            default=None,
            help=f"The SQL dialect. Options: {', '.join(dialect_factory.list_available())}. "
            "Defaults to database.dialect from the app config.",
        )

    def process_command(self, args: Namespace):
        """
        CLI command to print a generated statement.

        Args:
            args: Parsed CLI arguments.
        """
        schema = load_schema(args.schema)
        values = parse_values_argument(args.values, "--values")
        generator = SQLGenerator(dialect_factory.create(resolve_dialect(args)))

        builders = {
            "insert": generator.binding_insert,
            "update": generator.binding_update,
            "delete": generator.binding_delete,
            "select": generator.binding_retrieve,
        }
        statement: Statement = builders[args.operation](schema, args.table, values)

        print(statement.sql)
        print(f"bind_args: {list(statement.bind_args)}")
        if statement.identity_column:
            print(f"identity: {statement.identity_column} ({statement.identity_strategy.value})")
