"""In-memory matrices produced by the parser.

`SparseMatrix` and `DenseMatrix` are independent frozen dataclasses sharing the
same capabilities (`dims`, `at`, `nonzero_count`); `Matrix` is their union and
`kind` tells them apart. Backing arrays are read-only once assembled.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, List, Literal, Tuple, Union

import numpy as np
import scipy.sparse as sp


def _check_index(i: int, j: int, rows: int, cols: int) -> None:
  if not (0 <= i < rows and 0 <= j < cols):
    raise IndexError(f"Index ({i}, {j}) out of range for matrix of shape ({rows}, {cols})")


def _freeze(*arrays: np.ndarray) -> None:
  for a in arrays:
    a.flags.writeable = False


@dataclass(frozen=True, eq=False)
class SparseMatrix:
  csr: sp.csr_matrix
  kind: Literal["sparse"] = "sparse"

  def dims(self) -> Tuple[int, int]:
    rows, cols = self.csr.shape
    return int(rows), int(cols)

  def at(self, i: int, j: int) -> float:
    rows, cols = self.dims()
    _check_index(i, j, rows, cols)
    start, end = self.csr.indptr[i], self.csr.indptr[i + 1]
    # Column indices are sorted within each row.
    pos = start + int(np.searchsorted(self.csr.indices[start:end], j))
    if pos < end and self.csr.indices[pos] == j:
      return float(self.csr.data[pos])
    return 0.0

  def nonzero_count(self) -> int:
    return int(self.csr.nnz)

  def iter_nonzero(self) -> Iterator[Tuple[int, int, float]]:
    """Yield (row, col, value) in row-major order: ascending row, then column."""
    indptr, indices, data = self.csr.indptr, self.csr.indices, self.csr.data
    for i in range(self.csr.shape[0]):
      for pos in range(indptr[i], indptr[i + 1]):
        yield i, int(indices[pos]), float(data[pos])

  def to_scipy(self) -> sp.csr_matrix:
    return self.csr.copy()


@dataclass(frozen=True, eq=False)
class DenseMatrix:
  values: np.ndarray  # row-major, shape (rows, cols)
  kind: Literal["dense"] = "dense"

  def dims(self) -> Tuple[int, int]:
    rows, cols = self.values.shape
    return int(rows), int(cols)

  def at(self, i: int, j: int) -> float:
    rows, cols = self.dims()
    _check_index(i, j, rows, cols)
    return float(self.values[i, j])

  def nonzero_count(self) -> int:
    # Every cell of a dense matrix counts as stored.
    rows, cols = self.dims()
    return rows * cols

  def to_numpy(self) -> np.ndarray:
    return self.values.copy()


Matrix = Union[SparseMatrix, DenseMatrix]


class CoordinateBuilder:
  """Accumulates (row, col, value) triplets; consumed once by `build()`.

  Duplicate coordinates are summed at build time, and cells that cancel out
  to exactly zero are not stored.
  """

  def __init__(self, rows: int, cols: int) -> None:
    self.rows = rows
    self.cols = cols
    self._i: List[int] = []
    self._j: List[int] = []
    self._v: List[float] = []
    self._consumed = False

  def __len__(self) -> int:
    return len(self._v)

  def add(self, i: int, j: int, v: float) -> None:
    if self._consumed:
      raise RuntimeError("CoordinateBuilder already consumed by build()")
    self._i.append(i)
    self._j.append(j)
    self._v.append(v)

  def build(self) -> SparseMatrix:
    if self._consumed:
      raise RuntimeError("CoordinateBuilder already consumed by build()")
    self._consumed = True

    coo = sp.coo_matrix(
      (
        np.asarray(self._v, dtype=np.float64),
        (np.asarray(self._i, dtype=np.int64), np.asarray(self._j, dtype=np.int64)),
      ),
      shape=(self.rows, self.cols),
    )
    self._i, self._j, self._v = [], [], []

    csr = coo.tocsr()
    csr.sum_duplicates()
    csr.eliminate_zeros()
    csr.sort_indices()
    _freeze(csr.data, csr.indices, csr.indptr)
    return SparseMatrix(csr)


def dense_from_column_major(values: List[float], rows: int, cols: int) -> DenseMatrix:
  """Place column-major `values` into row-major storage.

  The k-th value lands at (k % rows, k // rows).
  """
  grid = np.ascontiguousarray(np.asarray(values, dtype=np.float64).reshape(cols, rows).T)
  _freeze(grid)
  return DenseMatrix(grid)
