from __future__ import annotations

import gzip
import io

import pytest

from matrix_market import EncodeError, dumps, encode, format_value, load, loads, save
from matrix_market.assemble import CoordinateBuilder


@pytest.mark.parametrize(
  "value, text",
  [(1.0, "1"), (0.015, "0.015"), (-280.0, "-280"), (33.32, "33.32"), (250.5, "250.5"), (1e-07, "1e-07"), (1e20, "1e+20")],
)
def test_format_value(value, text):
  assert format_value(value) == text


def test_sparse_encoding_is_canonical():
  m = loads(
    "%%MatrixMarket matrix coordinate real symmetric\n"
    "% dropped on output\n"
    "3 3 2\n"
    "3 1 2.5\n"
    "1 1 1.0\n"
  )
  assert dumps(m) == (
    "%%MatrixMarket matrix coordinate real general\n"
    "3 3 3\n"
    "1 1 1\n"
    "1 3 2.5\n"
    "3 1 2.5\n"
  )


def test_dense_encoding_is_column_major():
  m = loads("%%MatrixMarket matrix array real general\n2 2\n1\n2\n3\n4.5\n")
  assert dumps(m) == "%%MatrixMarket matrix array real general\n2 2\n1\n2\n3\n4.5\n"


def test_encode_to_binary_and_text_sinks():
  m = loads("%%MatrixMarket matrix coordinate real general\n1 2 1\n1 2 -3.25\n")
  expected = "%%MatrixMarket matrix coordinate real general\n1 2 1\n1 2 -3.25\n"

  binary = io.BytesIO()
  encode(m, binary)
  assert binary.getvalue() == expected.encode()

  text = io.StringIO()
  encode(m, text)
  assert text.getvalue() == expected


def test_round_trip_preserves_values():
  original = loads(
    "%%MatrixMarket matrix coordinate real skew-symmetric\n"
    "4 4 4\n"
    "2 1 0.1\n"
    "3 1 -1e-10\n"
    "4 3 123456.789\n"
    "4 2 2.0\n"
  )
  again = loads(dumps(original))
  assert again.dims() == original.dims()
  assert again.nonzero_count() == original.nonzero_count()
  for i, j, v in original.iter_nonzero():
    assert again.at(i, j) == v


def test_empty_sparse_matrix():
  m = CoordinateBuilder(2, 3).build()
  assert dumps(m) == "%%MatrixMarket matrix coordinate real general\n2 3 0\n"


def test_unsupported_object():
  with pytest.raises(EncodeError):
    encode([[1.0]], io.BytesIO())  # type: ignore[arg-type]


def test_save_and_load(tmp_path):
  m = loads("%%MatrixMarket matrix coordinate real general\n2 2 2\n1 1 1.5\n2 2 -2\n")
  for name in ("m.mtx", "m.mtx.gz"):
    path = tmp_path / name
    save(m, path)
    doc = load(path)
    assert doc.matrix.dims() == (2, 2)
    assert doc.matrix.at(1, 1) == -2.0
  with gzip.open(tmp_path / "m.mtx.gz", "rt") as f:
    assert f.readline() == "%%MatrixMarket matrix coordinate real general\n"


def test_save_rejects_before_creating_file(tmp_path):
  path = tmp_path / "bad.mtx"
  with pytest.raises(EncodeError):
    save("not a matrix", path)  # type: ignore[arg-type]
  assert not path.exists()


def test_builder_is_consumed_once():
  b = CoordinateBuilder(2, 2)
  b.add(0, 0, 1.0)
  b.build()
  with pytest.raises(RuntimeError):
    b.build()
  with pytest.raises(RuntimeError):
    b.add(1, 1, 1.0)
