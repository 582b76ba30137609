from __future__ import annotations

import gzip
import io
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO, Union

from .assemble import Matrix
from .body import parse_body
from .comments import skip_comments
from .dimensions import parse_dimensions
from .header import ElementType, StorageFormat, Symmetry, parse_header
from .reader import LineReader

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MatrixDescriptor:
  storage_format: StorageFormat
  element_type: ElementType
  symmetry: Symmetry
  rows: int
  cols: int
  # Coordinate: entry lines announced by the size line. Array: rows * cols.
  declared_lines: int
  comment: str = ""


@dataclass(frozen=True, eq=False)
class Document:
  descriptor: MatrixDescriptor
  matrix: Matrix


def parse_document(stream: Union[BinaryIO, io.TextIOBase]) -> Document:
  """Parse header, comments, dimensions and body from `stream`.

  The stages run in that order over one forward-only cursor; any failure
  aborts the whole parse.
  """
  reader = LineReader(stream)
  header = parse_header(reader)
  comment = skip_comments(reader)
  rows, cols, declared_lines = parse_dimensions(reader, header.storage_format)

  descriptor = MatrixDescriptor(
    storage_format=header.storage_format,
    element_type=header.element_type,
    symmetry=header.symmetry,
    rows=rows,
    cols=cols,
    declared_lines=declared_lines,
    comment=comment,
  )
  matrix = parse_body(
    reader,
    storage_format=descriptor.storage_format,
    element_type=descriptor.element_type,
    symmetry=descriptor.symmetry,
    rows=rows,
    cols=cols,
    declared_lines=declared_lines,
  )
  logger.debug("Assembled %s matrix %dx%d with %d nonzeros", matrix.kind, rows, cols, matrix.nonzero_count())
  return Document(descriptor=descriptor, matrix=matrix)


def parse(stream: Union[BinaryIO, io.TextIOBase]) -> Matrix:
  return parse_document(stream).matrix


def loads(data: Union[str, bytes]) -> Matrix:
  if isinstance(data, str):
    data = data.encode("utf-8")
  return parse(io.BytesIO(data))


def load(path: Union[str, Path]) -> Document:
  """Parse a `.mtx` file, decompressing transparently when it ends in `.gz`."""
  path = Path(path)
  logger.info("Loading matrix from: %s", path)
  if path.suffix == ".gz":
    with gzip.open(path, "rb") as f:
      return parse_document(f)
  with path.open("rb") as f:
    return parse_document(f)
