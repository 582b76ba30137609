"""Handler setup for the `matrix_market` logger, used by the command line tool.

Library modules only create loggers; handlers are attached here. Records go to
stderr so they never interleave with command output on stdout.
"""
import logging
import sys
from typing import List, Optional

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%H:%M:%S"


def setup_logging(level: int = logging.WARNING, log_file: Optional[str] = None) -> logging.Logger:
  logger = logging.getLogger("matrix_market")
  logger.setLevel(level)
  # Calling this twice must not duplicate output.
  logger.handlers.clear()

  handlers: List[logging.Handler] = [logging.StreamHandler(sys.stderr)]
  if log_file:
    handlers.append(logging.FileHandler(log_file, mode="w", encoding="utf-8"))

  formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)
  for handler in handlers:
    handler.setLevel(level)
    handler.setFormatter(formatter)
    logger.addHandler(handler)

  logger.debug("Logging to stderr%s", f" and {log_file}" if log_file else "")
  return logger
