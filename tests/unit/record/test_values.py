##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other schemadao
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to schemadao.
##############################################################################

"""
Tests for the `values.py` module.
"""

import pickle

import pytest

from schemadao.exceptions import ValueRenderError
from schemadao.record.values import INT64_MAX, INT64_MIN, MISSING, UINT64_MAX, RawExpression, ValueKind, classify_value


@pytest.mark.parametrize(
    "value, kind",
    [
        (None, ValueKind.NULL),
        ("text", ValueKind.TEXT),
        ("", ValueKind.TEXT),
        (0, ValueKind.INTEGER),
        (True, ValueKind.INTEGER),
        (INT64_MIN, ValueKind.INTEGER),
        (INT64_MAX, ValueKind.INTEGER),
        (INT64_MAX + 1, ValueKind.UNSIGNED),
        (UINT64_MAX, ValueKind.UNSIGNED),
        (1.5, ValueKind.FLOAT),
        (b"\x00\x01", ValueKind.BLOB),
        (bytearray(b"ab"), ValueKind.BLOB),
        (RawExpression("CURRENT_TIMESTAMP"), ValueKind.RAW),
    ],
)
def test_classify_value(value, kind: ValueKind):
    """
    Test that every supported value lands in the expected kind.

    Args:
        value: The value to classify.
        kind: The expected kind.
    """
    assert classify_value(value) is kind


@pytest.mark.parametrize("value", [UINT64_MAX + 1, INT64_MIN - 1, object(), [1, 2], {"a": 1}])
def test_classify_value_rejects(value):
    """
    Test that values outside every kind raise `ValueRenderError`.

    Args:
        value: The value to classify.
    """
    with pytest.raises(ValueRenderError):
        classify_value(value, "Col")


def test_raw_expression_needs_text():
    """
    Test that a raw expression can't be empty.
    """
    with pytest.raises(ValueError):
        RawExpression("  ")
    assert str(RawExpression("SYS_GUID()")) == "SYS_GUID()"


def test_missing_is_a_falsy_singleton():
    """
    Test that `MISSING` is falsy and keeps its identity through pickling.
    """
    assert not MISSING
    assert repr(MISSING) == "MISSING"
    assert pickle.loads(pickle.dumps(MISSING)) is MISSING
