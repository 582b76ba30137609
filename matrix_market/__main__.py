from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .catalog import MARKET_URL, CatalogEntry, download, fetch_listing, iter_catalog
from .encoder import save
from .errors import MatrixMarketError
from .logging_config import setup_logging
from .parser import load
from .reporting import describe, print_table


def _parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
  p = argparse.ArgumentParser(
    prog="python -m matrix_market",
    description="MatrixMarket reader/writer and NIST catalog client.",
  )
  p.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
  p.add_argument("--log-file", default=None, help="Also write logs to this file")
  sub = p.add_subparsers(dest="command", required=True)

  info = sub.add_parser("info", help="Parse a .mtx/.mtx.gz file and print a summary")
  info.add_argument("path", type=Path)

  convert = sub.add_parser("convert", help="Parse SRC and write it in canonical form to DST")
  convert.add_argument("src", type=Path)
  convert.add_argument("dst", type=Path)

  listing = sub.add_parser("list", help="List matrices from the NIST catalog page")
  listing.add_argument("--url", default=MARKET_URL, help="Catalog listing URL")

  fetch = sub.add_parser("fetch", help="Download a matrix from the NIST FTP server")
  fetch.add_argument("collection")
  fetch.add_argument("set")
  fetch.add_argument("name")
  fetch.add_argument("--dest", type=Path, default=Path("."), help="Download directory")
  fetch.add_argument("--overwrite", action="store_true", help="Download even if the file exists")
  return p.parse_args(argv)


def _run(args: argparse.Namespace) -> None:
  if args.command == "info":
    doc = load(args.path)
    print(f"{args.path}:")
    print_table(["property", "value"], describe(doc))
    return

  if args.command == "convert":
    doc = load(args.src)
    save(doc.matrix, args.dst)
    print(f"Wrote: {args.dst}")
    return

  if args.command == "list":
    for entry in iter_catalog(fetch_listing(args.url)):
      print(f"{entry.collection}/{entry.set}/{entry.name}")
    return

  if args.command == "fetch":
    entry = CatalogEntry(collection=args.collection, set=args.set, name=args.name)
    path = download(entry, args.dest, overwrite=args.overwrite)
    print(f"Wrote: {path}")
    return

  raise SystemExit(f"Unknown command: {args.command}")


def main(argv: Optional[List[str]] = None) -> None:
  args = _parse_args(argv)
  setup_logging(logging.DEBUG if args.verbose else logging.WARNING, log_file=args.log_file)
  try:
    _run(args)
  except (MatrixMarketError, OSError) as e:
    raise SystemExit(f"error: {e}") from e


if __name__ == "__main__":
  main(sys.argv[1:])
