##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other schemadao
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to schemadao.
##############################################################################

"""
Main entry point into schemadao's command-line interface.
"""

import logging
import sys
import traceback

from schemadao.cli.argparse_main import build_main_parser
from schemadao.config.configfile import get_config
from schemadao.log_formatter import set_sql_debug, setup_logging


LOG = logging.getLogger("schemadao")


def main():
    """
    Entry point for the schemadao command-line interface (CLI) operations.

    This function sets up the argument parser, handles command-line arguments,
    initializes logging, and executes the appropriate function based on the
    provided command. Any exception raised by a command is logged and turned
    into exit status 1.
    """
    parser = build_main_parser()
    if len(sys.argv) == 1:
        parser.print_help(sys.stdout)
        return 1
    args = parser.parse_args()

    setup_logging(logger=LOG, log_level=args.level.upper(), colors=True)

    try:
        if get_config(args.config).logging.debug_sql:
            set_sql_debug(True)
        args.func(args)
        # pylint complains that this exception is too broad - being at the literal top of the program stack, it's ok.
    except Exception as excpt:  # pylint: disable=broad-except
        LOG.debug(traceback.format_exc())
        LOG.error(str(excpt))
        sys.exit(1)

    sys.exit()


if __name__ == "__main__":
    main()
