import logging
import sys


LOG_FORMAT = "[%(asctime)s] %(levelname)-8s %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def parse_level(level: str | int) -> int:
  """Accepts either a logging level name ('DEBUG', 'info', ...) or a number."""
  if isinstance(level, int):
    return level
  return getattr(logging, str(level).strip().upper(), logging.INFO)


def create_console_logger(name: str, level: str | int = logging.INFO) -> logging.Logger:
  log = logging.getLogger(name)
  log.setLevel(parse_level(level))

  # loggers are shared by name, only attach the handler once
  if not log.handlers:
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    log.addHandler(handler)
    log.propagate = False

  return log
