from __future__ import annotations

import io

from matrix_market.reader import LineReader


def test_peek_does_not_consume(reader_for):
  reader = reader_for("%x\n1 2\n")
  assert reader.peek_byte() == b"%"
  assert reader.peek_byte() == b"%"
  assert reader.readline() == b"%x\n"
  assert reader.peek_byte() == b"1"


def test_end_of_stream(reader_for):
  reader = reader_for("last")
  assert reader.readline() == b"last"
  assert reader.peek_byte() == b""
  assert reader.readline() == b""
  assert reader.line_number == 1


def test_iteration_counts_lines(reader_for):
  reader = reader_for("a\nb\nc")
  assert list(reader) == [b"a\n", b"b\n", b"c"]
  assert reader.line_number == 3


def test_text_stream():
  reader = LineReader(io.StringIO("%é\n"))
  assert reader.peek_byte() == b"%"
  assert reader.readline() == "%é\n".encode("utf-8")
