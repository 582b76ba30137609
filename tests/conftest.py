from __future__ import annotations

import io

import pytest

from matrix_market.reader import LineReader


@pytest.fixture
def reader_for():
  def _make(data):
    if isinstance(data, str):
      data = data.encode("utf-8")
    return LineReader(io.BytesIO(data))
  return _make
