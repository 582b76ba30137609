from __future__ import annotations

from typing import List, Sequence

from .parser import Document


def fmt_density(x: float) -> str:
  """Render a fill ratio in [0, 1].

  Sparse matrices sit far below 1, so three significant digits are kept
  instead of a fixed decimal count; a full matrix prints as "1".
  """
  if x >= 1.0:
    return "1"
  return f"{x:.3g}"


def format_table(header: Sequence[str], rows: Sequence[Sequence[str]]) -> List[str]:
  """Left-aligned columns, indented by two spaces, with a dashed rule under the header."""
  widths = [max(len(r[c]) for r in [header, *rows]) for c in range(len(header))]

  def _line(cells: Sequence[str]) -> str:
    return "  " + "  ".join(cell.ljust(w) for cell, w in zip(cells, widths))

  return [_line(header), "  " + "  ".join("-" * w for w in widths)] + [_line(r) for r in rows]


def print_table(header: Sequence[str], rows: Sequence[Sequence[str]]) -> None:
  print("\n".join(format_table(header, rows)))


def describe(doc: Document) -> List[List[str]]:
  """Rows of (property, value) summarizing a parsed document."""
  d = doc.descriptor
  rows, cols = doc.matrix.dims()
  nnz = doc.matrix.nonzero_count()
  return [
    ["format", d.storage_format.value],
    ["type", d.element_type.value],
    ["symmetry", d.symmetry.value],
    ["rows", str(rows)],
    ["cols", str(cols)],
    ["declared lines", str(d.declared_lines)],
    ["nonzeros", str(nnz)],
    ["density", fmt_density(nnz / (rows * cols))],
    ["comment lines", str(len(d.comment.splitlines()))],
  ]
