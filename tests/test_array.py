from __future__ import annotations

import logging

import numpy as np
import pytest

from matrix_market import ArrayValueError, DenseMatrix, UnexpectedEOF, UnsupportedFeature, loads

FOUR_BY_THREE = "%%MatrixMarket matrix array real general\n4 3\n" + "".join(f"{k}.0\n" for k in range(1, 13))


def test_column_major_values_are_reordered():
  m = loads(FOUR_BY_THREE)
  assert isinstance(m, DenseMatrix)
  assert m.kind == "dense"
  assert m.dims() == (4, 3)
  assert m.at(0, 0) == 1.0
  assert m.at(3, 2) == 12.0
  assert m.at(1, 0) == 2.0
  assert m.at(0, 1) == 5.0
  np.testing.assert_array_equal(m.to_numpy(), np.arange(1.0, 13.0).reshape(3, 4).T)


def test_dense_nonzero_count_is_full_size():
  m = loads("%%MatrixMarket matrix array real general\n2 2\n0\n0\n1\n0\n")
  assert m.nonzero_count() == 4


def test_values_are_read_only():
  m = loads(FOUR_BY_THREE)
  with pytest.raises(ValueError):
    m.values[0, 0] = 3.0
  copy = m.to_numpy()
  copy[0, 0] = 3.0
  assert m.at(0, 0) == 1.0


def test_short_body_is_unexpected_eof():
  with pytest.raises(UnexpectedEOF, match="after 3 of 4"):
    loads("%%MatrixMarket matrix array real general\n2 2\n1\n2\n3\n")


def test_bad_value_names_index():
  with pytest.raises(ArrayValueError) as exc:
    loads("%%MatrixMarket matrix array real general\n2 1\n1.5\noops\n")
  assert exc.value.index == 2
  assert exc.value.line == "oops"


def test_two_values_on_one_line_is_an_error():
  with pytest.raises(ArrayValueError):
    loads("%%MatrixMarket matrix array real general\n2 1\n1.5 2.5\n3.5\n")


def test_trailing_content_is_logged(caplog):
  with caplog.at_level(logging.WARNING, logger="matrix_market"):
    m = loads("%%MatrixMarket matrix array real general\n1 1\n4\n5\n")
  assert m.at(0, 0) == 4.0
  assert "after the 1 declared" in caplog.text


def test_symmetric_array_is_unsupported():
  with pytest.raises(UnsupportedFeature):
    loads("%%MatrixMarket matrix array real symmetric\n2 2\n1\n2\n3\n")


def test_pattern_array_is_unsupported():
  with pytest.raises(UnsupportedFeature):
    loads("%%MatrixMarket matrix array pattern general\n1 1\n1\n")


def test_digit_separator_is_rejected():
  with pytest.raises(ArrayValueError) as exc:
    loads("%%MatrixMarket matrix array real general\n2 1\n1_000.5\n2\n")
  assert exc.value.index == 1
