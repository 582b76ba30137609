from __future__ import annotations

import io
from typing import BinaryIO, Union


class LineReader:
  """Forward-only line cursor over a byte stream.

  Every parsing stage shares one reader. The only look-ahead is `peek_byte()`,
  which the comment skipper uses to decide whether the next line is a comment.
  """

  def __init__(self, stream: Union[BinaryIO, io.TextIOBase]) -> None:
    if isinstance(stream, io.TextIOBase):
      # Text streams are re-read as UTF-8 bytes so byte-level peeking works.
      stream = io.BytesIO(stream.read().encode("utf-8"))
    if not hasattr(stream, "peek"):
      stream = io.BufferedReader(stream)  # type: ignore[arg-type]
    self._stream = stream
    self.line_number = 0

  def readline(self) -> bytes:
    """Return the next line including its newline, or b"" at end of stream."""
    line = self._stream.readline()
    if line:
      self.line_number += 1
    return line

  def peek_byte(self) -> bytes:
    """Return the next byte without consuming it, or b"" at end of stream."""
    return self._stream.peek(1)[:1]

  def __iter__(self):
    while True:
      line = self.readline()
      if not line:
        return
      yield line
