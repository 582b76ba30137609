from __future__ import annotations

import logging
import math
from typing import List, Tuple

from .assemble import CoordinateBuilder, DenseMatrix, Matrix, SparseMatrix, dense_from_column_major
from .errors import ArrayValueError, TripletError, UnexpectedEOF, UnsupportedFeature
from .header import ElementType, StorageFormat, Symmetry
from .reader import LineReader

logger = logging.getLogger(__name__)

# Smallest positive (subnormal) float; anything smaller in magnitude is an explicit zero.
SMALLEST_NONZERO = math.ulp(0.0)


def split_triplet(line: str, line_number: int) -> Tuple[int, int, float]:
  """Split an `i j v` line into two integer indices and a float value."""
  parts = line.split()
  if len(parts) != 3:
    raise TripletError(f"expected 3 fields, got {len(parts)}", line_number=line_number, line=line)
  # int() and float() accept digit separators such as "1_000"; the format does not.
  if any("_" in p for p in parts):
    raise TripletError("digit separator in field", line_number=line_number, line=line)
  try:
    i = int(parts[0])
    j = int(parts[1])
    v = float(parts[2])
  except ValueError as e:
    raise TripletError(str(e), line_number=line_number, line=line) from e
  if not math.isfinite(v):
    raise TripletError("value is not finite", line_number=line_number, line=line)
  return i, j, v


def parse_coordinate(reader: LineReader, *, rows: int, cols: int, declared_lines: int, symmetry: Symmetry) -> SparseMatrix:
  """Parse `i j v` lines until end of stream into a CSR matrix.

  Explicit zeros are dropped before insertion. Off-diagonal entries of
  symmetric and skew-symmetric matrices are mirrored (negated for skew).
  """
  if symmetry is Symmetry.HERMITIAN:
    logger.warning("Hermitian symmetry is not expanded; only stored entries are used")

  builder = CoordinateBuilder(rows, cols)
  entry_lines = 0
  dropped = 0
  for raw in reader:
    line = raw.decode("utf-8", errors="replace")
    if not line.strip():
      continue
    entry_lines += 1
    i, j, v = split_triplet(line.strip(), reader.line_number)
    if not (1 <= i <= rows and 1 <= j <= cols):
      raise TripletError(
        f"index ({i}, {j}) outside matrix of shape ({rows}, {cols})",
        line_number=reader.line_number,
        line=line.strip(),
      )

    # correct for one-base
    i -= 1
    j -= 1

    if abs(v) < SMALLEST_NONZERO:
      dropped += 1
      continue

    builder.add(i, j, v)
    if i != j:
      if symmetry is Symmetry.SYMMETRIC:
        builder.add(j, i, v)
      elif symmetry is Symmetry.SKEW_SYMMETRIC:
        builder.add(j, i, -v)

  if entry_lines != declared_lines:
    logger.warning("Read %d entry lines, size line declared %d", entry_lines, declared_lines)
  logger.debug("Coordinate body: %d lines, %d explicit zeros dropped, %d insertions", entry_lines, dropped, len(builder))
  return builder.build()


def parse_array(reader: LineReader, *, rows: int, cols: int) -> DenseMatrix:
  """Parse `rows * cols` column-major values, one per line, into a dense matrix."""
  expected = rows * cols
  values: List[float] = []
  while len(values) < expected:
    raw = reader.readline()
    if not raw:
      raise UnexpectedEOF(f"Stream ended after {len(values)} of {expected} array values")
    line = raw.decode("utf-8", errors="replace").strip()
    index = len(values) + 1
    if "_" in line:
      raise ArrayValueError("digit separator in value", index=index, line=line)
    try:
      v = float(line)
    except ValueError as e:
      raise ArrayValueError(str(e), index=index, line=line) from e
    if not math.isfinite(v):
      raise ArrayValueError("value is not finite", index=index, line=line)
    values.append(v)

  for raw in reader:
    if raw.strip():
      logger.warning("Ignoring content after the %d declared array values (line %d)", expected, reader.line_number)
      break

  return dense_from_column_major(values, rows, cols)


def parse_body(
  reader: LineReader,
  *,
  storage_format: StorageFormat,
  element_type: ElementType,
  symmetry: Symmetry,
  rows: int,
  cols: int,
  declared_lines: int,
) -> Matrix:
  """Dispatch to the coordinate or array strategy."""
  if element_type is not ElementType.REAL:
    raise UnsupportedFeature(f"Element type {element_type.value!r} is not supported, only 'real'")

  if storage_format is StorageFormat.COORDINATE:
    return parse_coordinate(reader, rows=rows, cols=cols, declared_lines=declared_lines, symmetry=symmetry)

  if symmetry is not Symmetry.GENERAL:
    raise UnsupportedFeature(f"Array format with {symmetry.value!r} symmetry is not supported")
  return parse_array(reader, rows=rows, cols=cols)
