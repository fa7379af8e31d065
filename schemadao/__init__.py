##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other schemadao
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to schemadao.
##############################################################################

"""
schemadao: schema-driven persistence for dynamic records.

This module contains the source code for schemadao.
"""


__version__ = "0.4.0"
VERSION = __version__
