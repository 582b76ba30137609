from __future__ import annotations

import enum
import logging
from dataclasses import dataclass

from .errors import MalformedHeader
from .reader import LineReader

logger = logging.getLogger(__name__)

BANNER = "%%MatrixMarket"
OBJECT_MATRIX = "matrix"


class StorageFormat(enum.Enum):
  ARRAY = "array"
  COORDINATE = "coordinate"


class ElementType(enum.Enum):
  REAL = "real"
  COMPLEX = "complex"
  INTEGER = "integer"
  PATTERN = "pattern"


class Symmetry(enum.Enum):
  # For symmetric and skew-symmetric matrices only one triangle
  # (diagonal included) is stored in the file.
  GENERAL = "general"
  SYMMETRIC = "symmetric"
  SKEW_SYMMETRIC = "skew-symmetric"
  HERMITIAN = "hermitian"


@dataclass(frozen=True)
class Header:
  storage_format: StorageFormat
  element_type: ElementType
  symmetry: Symmetry

  def banner(self) -> str:
    return (
      f"{BANNER} {OBJECT_MATRIX} {self.storage_format.value} "
      f"{self.element_type.value} {self.symmetry.value}"
    )


def _decode(enum_cls: type[enum.Enum], token: str, what: str) -> enum.Enum:
  try:
    return enum_cls(token.lower())
  except ValueError:
    raise MalformedHeader(f"Unsupported {what}: {token!r}", token=token) from None


def parse_header_line(line: str) -> Header:
  # Example: %%MatrixMarket matrix coordinate real general
  tokens = line.rstrip().split(" ")
  if len(tokens) != 5:
    raise MalformedHeader(
      f"Wrong number of header tokens: {tokens} ({len(tokens)}), expected 5",
      token=line.rstrip(),
    )

  if tokens[0].lower() != BANNER.lower():
    raise MalformedHeader(f"Expected header {BANNER!r}, got {tokens[0]!r}", token=tokens[0])
  if tokens[1].lower() != OBJECT_MATRIX:
    raise MalformedHeader(f"Unsupported object: {tokens[1]!r}, expected 'matrix'", token=tokens[1])

  header = Header(
    storage_format=_decode(StorageFormat, tokens[2], "format"),  # type: ignore[arg-type]
    element_type=_decode(ElementType, tokens[3], "element type"),  # type: ignore[arg-type]
    symmetry=_decode(Symmetry, tokens[4], "symmetry"),  # type: ignore[arg-type]
  )
  return header


def parse_header(reader: LineReader) -> Header:
  """Read and decode the mandatory first line of a MatrixMarket stream."""
  raw = reader.readline()
  if not raw:
    raise MalformedHeader("Empty header: stream ended before the first line", token="")
  header = parse_header_line(raw.decode("utf-8", errors="replace"))
  logger.debug("Parsed header: %s", header.banner())
  return header
