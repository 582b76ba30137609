from __future__ import annotations

import logging
from typing import List, Tuple

from .errors import DimensionError, UnexpectedEOF
from .header import StorageFormat
from .reader import LineReader

logger = logging.getLogger(__name__)


def _parse_int(tokens: List[str], pos: int) -> int:
  token = tokens[pos]
  # int() accepts digit separators such as "1_000"; the format does not.
  if "_" not in token:
    try:
      return int(token)
    except ValueError:
      pass
  raise DimensionError(
    f"Non-integer size token {token!r} at position {pos + 1} in {' '.join(tokens)!r}"
  )


def parse_size_line(line: str, storage_format: StorageFormat) -> Tuple[int, int, int]:
  """Decode `rows cols [entries]` into (rows, cols, declared_lines)."""
  tokens = line.strip().split(" ")
  if storage_format is StorageFormat.COORDINATE:
    if len(tokens) != 3:
      raise DimensionError(f"Expected three values (rows, cols, entries), got: {tokens}")
  elif len(tokens) < 2:
    raise DimensionError(f"Expected at least two values (rows, cols), got: {tokens}")

  rows = _parse_int(tokens, 0)
  cols = _parse_int(tokens, 1)
  if rows <= 0 or cols <= 0:
    raise DimensionError(f"Matrix dimensions must be positive, got ({rows}, {cols})")

  # Dense arrays list every value, so the line count follows from the shape.
  if storage_format is StorageFormat.ARRAY:
    # Extra tokens are ignored but must still be integers.
    for pos in range(2, len(tokens)):
      _parse_int(tokens, pos)
    return rows, cols, rows * cols

  # Coordinate entries may repeat or cover one triangle only; read the count.
  declared = _parse_int(tokens, 2)
  if declared < 0:
    raise DimensionError(f"Number of entries must be non-negative, got {declared}")
  return rows, cols, declared


def parse_dimensions(reader: LineReader, storage_format: StorageFormat) -> Tuple[int, int, int]:
  raw = reader.readline()
  if not raw:
    raise UnexpectedEOF("Stream ended before the size line")
  dims = parse_size_line(raw.decode("utf-8", errors="replace"), storage_format)
  logger.debug("Parsed dimensions: rows=%d cols=%d lines=%d", *dims)
  return dims
