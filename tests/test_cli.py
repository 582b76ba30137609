from __future__ import annotations

import logging

import pytest

from matrix_market import load
from matrix_market.__main__ import main


@pytest.fixture(autouse=True)
def _reset_logging():
  yield
  logger = logging.getLogger("matrix_market")
  logger.handlers.clear()
  logger.setLevel(logging.NOTSET)


SYMMETRIC = (
  "%%MatrixMarket matrix coordinate real symmetric\n"
  "% test matrix\n"
  "3 3 2\n"
  "1 1 4.0\n"
  "3 2 -1.0\n"
)


def test_info(tmp_path, capsys):
  path = tmp_path / "sym.mtx"
  path.write_text(SYMMETRIC)
  main(["info", str(path)])
  out = capsys.readouterr().out
  assert "symmetric" in out
  assert "nonzeros" in out
  assert "3" in out


def test_convert(tmp_path, capsys):
  src = tmp_path / "sym.mtx"
  dst = tmp_path / "out.mtx"
  src.write_text(SYMMETRIC)
  main(["convert", str(src), str(dst)])
  assert "Wrote:" in capsys.readouterr().out
  assert dst.read_text() == (
    "%%MatrixMarket matrix coordinate real general\n"
    "3 3 3\n"
    "1 1 4\n"
    "2 3 -1\n"
    "3 2 -1\n"
  )
  assert load(dst).matrix.nonzero_count() == 3


def test_parse_error_exits_nonzero(tmp_path):
  path = tmp_path / "bad.mtx"
  path.write_text("%MatrixMarket matrix coordinate real general\n")
  with pytest.raises(SystemExit) as exc:
    main(["info", str(path)])
  assert "error:" in str(exc.value.code)


def test_missing_file_exits_nonzero(tmp_path):
  with pytest.raises(SystemExit):
    main(["info", str(tmp_path / "missing.mtx")])


def test_logs_go_to_stderr(tmp_path, capsys):
  path = tmp_path / "short.mtx"
  path.write_text("%%MatrixMarket matrix coordinate real general\n2 2 3\n1 1 1.0\n")
  main(["-v", "info", str(path)])
  captured = capsys.readouterr()
  assert "declared 3" in captured.err
  assert "declared 3" not in captured.out
  assert "nonzeros" in captured.out
