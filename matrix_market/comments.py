from __future__ import annotations

from .reader import LineReader

# First bytes that mark a comment or blank line.
_COMMENT_START = (b"%", b"\n", b" ", b"\t")


def skip_comments(reader: LineReader) -> str:
  """Consume the comment and blank lines following the header.

  The consumed lines are returned verbatim (newlines included), in case they
  carry useful information. End of stream simply stops the scan.
  """
  chunks = []
  while reader.peek_byte() in _COMMENT_START:
    chunks.append(reader.readline())
  return b"".join(chunks).decode("utf-8", errors="replace")
