##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other schemadao
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to schemadao.
##############################################################################

"""
The runtime representation of a row.

Modules:
    record: The change-tracking `Record`.
    values: `RawExpression`, the `MISSING` sentinel, and value classification.
"""

from schemadao.record.record import Record
from schemadao.record.values import MISSING, RawExpression, ValueKind, classify_value


__all__ = ["MISSING", "RawExpression", "Record", "ValueKind", "classify_value"]
