##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other schemadao
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to schemadao.
##############################################################################

"""
The `abstracts` package provides ABC classes that can be used throughout
schemadao's codebase.

Modules:
    factory: Contains `BaseFactory`, used to manage pluggable components such as SQL dialects.
"""

from schemadao.abstracts.factory import BaseFactory


__all__ = ["BaseFactory"]
