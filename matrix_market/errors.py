from __future__ import annotations

from typing import Optional


class MatrixMarketError(Exception):
  """Root of every error raised by this package."""


class ParseError(MatrixMarketError, ValueError):
  pass


class MalformedHeader(ParseError):
  def __init__(self, message: str, *, token: Optional[str] = None) -> None:
    super().__init__(message)
    self.token = token


class DimensionError(ParseError):
  pass


class TripletError(ParseError):
  def __init__(self, message: str, *, line_number: int, line: str) -> None:
    super().__init__(f"line {line_number}: {message}: {line!r}")
    self.line_number = line_number
    self.line = line


class ArrayValueError(ParseError):
  def __init__(self, message: str, *, index: int, line: str) -> None:
    super().__init__(f"value {index}: {message}: {line!r}")
    self.index = index
    self.line = line


class UnexpectedEOF(ParseError):
  pass


class UnsupportedFeature(MatrixMarketError):
  pass


class EncodeError(MatrixMarketError):
  pass


class RetrievalError(MatrixMarketError):
  pass
