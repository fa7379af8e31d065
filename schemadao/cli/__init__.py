##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other schemadao
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to schemadao.
##############################################################################

"""
schemadao CLI Package.

Subpackages:
    commands: The command implementations of the `schemadao` CLI.

Modules:
    argparse_main: Sets up the top-level argument parser and registers every sub-command.
    utils: Helpers shared by the command handlers.
"""
