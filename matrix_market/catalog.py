"""NIST MatrixMarket catalog listing and FTP retrieval.

Thin transport glue around the parser: every failure surfaces as a
`RetrievalError` and is never retried here.
"""

from __future__ import annotations

import ftplib
import gzip
import logging
import urllib.error
import urllib.request
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO, Iterable, Iterator, List, Optional, Union

from .errors import RetrievalError

logger = logging.getLogger(__name__)

MARKET_URL = "http://math.nist.gov/MatrixMarket/matrices.html"
FTP_HOST = "math.nist.gov"
FTP_PATH = "pub/MatrixMarket2/{collection}/{set}/{name}.mtx.gz"
FTP_TIMEOUT = 60.0

_LISTING_MARKER = '<A HREF="/MatrixMarket/data/'


@dataclass(frozen=True)
class CatalogEntry:
  collection: str
  set: str
  name: str

  @property
  def filename(self) -> str:
    return f"{self.name}.mtx.gz"

  @property
  def remote_path(self) -> str:
    return FTP_PATH.format(collection=self.collection, set=self.set, name=self.name)


def parse_catalog_entry(line: str) -> Optional[CatalogEntry]:
  # Example: <A HREF="/MatrixMarket/data/Harwell-Boeing/smtape/ash608.html">ASH608</A><BR>
  quoted = line.split('"')
  if len(quoted) < 2:
    return None
  parts = quoted[1].split("/")
  if len(parts) != 6:
    return None
  name = parts[5].split(".")[0]
  if not name:
    return None
  return CatalogEntry(collection=parts[3], set=parts[4], name=name)


def iter_catalog(lines: Iterable[str]) -> Iterator[CatalogEntry]:
  """Yield an entry for every matrix link in the HTML listing."""
  for line in lines:
    if _LISTING_MARKER not in line:
      continue
    entry = parse_catalog_entry(line)
    if entry is None:
      logger.warning("Failed to parse catalog line: %r", line)
      continue
    yield entry


def fetch_listing(url: str = MARKET_URL, *, timeout: float = FTP_TIMEOUT) -> List[str]:
  logger.info("Fetching catalog listing from: %s", url)
  try:
    with urllib.request.urlopen(url, timeout=timeout) as resp:
      body = resp.read()
  except (urllib.error.URLError, OSError) as e:
    raise RetrievalError(f"Failed to fetch catalog listing from {url}: {e}") from e
  return body.decode("latin-1").splitlines()


def download(
  entry: CatalogEntry,
  dest_dir: Union[str, Path] = ".",
  *,
  overwrite: bool = False,
  host: str = FTP_HOST,
) -> Path:
  """Download `entry` as `<dest_dir>/<name>.mtx.gz`, reusing an existing file."""
  target = Path(dest_dir) / entry.filename
  if target.exists() and not overwrite:
    logger.debug("Using cached file: %s", target)
    return target

  target.parent.mkdir(parents=True, exist_ok=True)
  partial = target.with_name(target.name + ".part")
  logger.info("Downloading ftp://%s/%s", host, entry.remote_path)
  try:
    with ftplib.FTP(host, timeout=FTP_TIMEOUT) as ftp:
      ftp.login("anonymous", "anonymous")
      with partial.open("wb") as f:
        ftp.retrbinary(f"RETR {entry.remote_path}", f.write)
  except (ftplib.Error, OSError) as e:
    partial.unlink(missing_ok=True)
    raise RetrievalError(f"Failed to download {entry.remote_path} from {host}: {e}") from e

  partial.replace(target)
  return target


def fetch(collection: str, set: str, name: str, dest_dir: Union[str, Path] = ".") -> BinaryIO:
  """Download a matrix (if needed) and return a decompressing byte stream.

  The gzip header is checked before returning, so a corrupt download is a
  `RetrievalError` here rather than a decode failure during parsing. The
  caller owns the returned stream and should close it.
  """
  path = download(CatalogEntry(collection=collection, set=set, name=name), dest_dir)
  stream = gzip.open(path, "rb")
  try:
    stream.peek(1)
  except (OSError, EOFError) as e:
    stream.close()
    raise RetrievalError(f"Failed to decompress {path}: {e}") from e
  return stream  # type: ignore[return-value]
