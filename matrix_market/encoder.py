from __future__ import annotations

import gzip
import io
import logging
from pathlib import Path
from typing import BinaryIO, Iterable, Iterator, TextIO, Union

from .assemble import DenseMatrix, Matrix, SparseMatrix
from .errors import EncodeError
from .header import ElementType, Header, StorageFormat, Symmetry

logger = logging.getLogger(__name__)

# Output is always written with general symmetry; mirrored entries are explicit.
_COORDINATE_HEADER = Header(StorageFormat.COORDINATE, ElementType.REAL, Symmetry.GENERAL)
_ARRAY_HEADER = Header(StorageFormat.ARRAY, ElementType.REAL, Symmetry.GENERAL)


def format_value(v: float) -> str:
  """Shortest decimal text that reads back to `v`, without a trailing `.0`.

  Examples: 1.0 -> "1", 0.015 -> "0.015", -280.5 -> "-280.5", 1e-07 -> "1e-07".
  """
  s = repr(float(v))
  if s.endswith(".0"):
    s = s[:-2]
  return s


def _coordinate_lines(matrix: SparseMatrix) -> Iterator[str]:
  rows, cols = matrix.dims()
  yield _COORDINATE_HEADER.banner() + "\n"
  yield f"{rows} {cols} {matrix.nonzero_count()}\n"
  for i, j, v in matrix.iter_nonzero():
    # correct for one-base
    yield f"{i + 1} {j + 1} {format_value(v)}\n"


def _array_lines(matrix: DenseMatrix) -> Iterator[str]:
  rows, cols = matrix.dims()
  yield _ARRAY_HEADER.banner() + "\n"
  yield f"{rows} {cols}\n"
  # MatrixMarket arrays are column-major.
  for v in matrix.values.ravel(order="F"):
    yield f"{format_value(v)}\n"


def iter_lines(matrix: Matrix) -> Iterable[str]:
  if isinstance(matrix, SparseMatrix):
    return _coordinate_lines(matrix)
  if isinstance(matrix, DenseMatrix):
    return _array_lines(matrix)
  raise EncodeError(f"Cannot encode object of type {type(matrix).__name__}; expected SparseMatrix or DenseMatrix")


def _write(lines: Iterable[str], sink: Union[BinaryIO, TextIO]) -> None:
  binary = not isinstance(sink, io.TextIOBase)
  for line in lines:
    sink.write(line.encode("utf-8") if binary else line)  # type: ignore[arg-type]
  sink.flush()


def encode(matrix: Matrix, sink: Union[BinaryIO, TextIO]) -> None:
  """Write `matrix` in canonical MatrixMarket form to a binary or text sink."""
  _write(iter_lines(matrix), sink)


def dumps(matrix: Matrix) -> str:
  return "".join(iter_lines(matrix))


def save(matrix: Matrix, path: Union[str, Path]) -> None:
  """Write `matrix` to `path`, gzip-compressed when the path ends in `.gz`."""
  path = Path(path)
  # Reject unsupported objects before the file is created.
  lines = iter_lines(matrix)
  logger.info("Saving %s matrix to: %s", matrix.kind, path)
  if path.suffix == ".gz":
    with gzip.open(path, "wb") as f:
      _write(lines, f)
    return
  with path.open("wb") as f:
    _write(lines, f)
