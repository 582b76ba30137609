"""MatrixMarket text format reader and writer.

Parses `%%MatrixMarket matrix ...` streams into an immutable sparse (CSR) or
dense matrix, and writes matrices back out in canonical form:

  doc = load("hor__131.mtx.gz")
  doc.matrix.dims(), doc.matrix.at(0, 0), doc.matrix.nonzero_count()
  save(doc.matrix, "out.mtx")
"""

from __future__ import annotations

from .assemble import CoordinateBuilder, DenseMatrix, Matrix, SparseMatrix
from .catalog import CatalogEntry, fetch, iter_catalog, parse_catalog_entry
from .encoder import dumps, encode, format_value, save
from .errors import (
  ArrayValueError,
  DimensionError,
  EncodeError,
  MalformedHeader,
  MatrixMarketError,
  ParseError,
  RetrievalError,
  TripletError,
  UnexpectedEOF,
  UnsupportedFeature,
)
from .header import ElementType, Header, StorageFormat, Symmetry
from .parser import Document, MatrixDescriptor, load, loads, parse, parse_document

__all__ = [
  "ArrayValueError",
  "CatalogEntry",
  "CoordinateBuilder",
  "DenseMatrix",
  "DimensionError",
  "Document",
  "ElementType",
  "EncodeError",
  "Header",
  "MalformedHeader",
  "Matrix",
  "MatrixDescriptor",
  "MatrixMarketError",
  "ParseError",
  "RetrievalError",
  "SparseMatrix",
  "StorageFormat",
  "Symmetry",
  "TripletError",
  "UnexpectedEOF",
  "UnsupportedFeature",
  "dumps",
  "encode",
  "fetch",
  "format_value",
  "iter_catalog",
  "load",
  "loads",
  "parse",
  "parse_catalog_entry",
  "parse_document",
  "save",
]
