"""Logging setup for the digest pipeline.

Everything goes through the root logger. The CLI prints results on stdout,
so log records default to stderr; ``LOG_OUTPUT=file`` or ``both`` adds a
rotating file under ``logs/``.
"""

from __future__ import annotations

import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import List, Literal

LogOutput = Literal["stderr", "file", "both"]

DEFAULT_LOG_FILE = "logs/blog-digest.log"
LOG_LINE_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(filename)s:%(lineno)d | %(message)s"

# Per-request connection chatter from the HTTP stack
_CHATTY_LOGGERS = ("urllib3", "charset_normalizer")


def _handlers(output: str, file_path: str) -> List[logging.Handler]:
    if output not in ("stderr", "file", "both"):
        raise ValueError(f"LOG_OUTPUT must be stderr, file or both, got: {output!r}")
    handlers: List[logging.Handler] = []
    if output in ("stderr", "both"):
        handlers.append(logging.StreamHandler(sys.stderr))
    if output in ("file", "both"):
        path = Path(file_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(RotatingFileHandler(path, maxBytes=10 * 1024 * 1024, backupCount=5, encoding="utf-8"))
    return handlers


def configure_logging(
    level: str | int | None = None,
    output: LogOutput | None = None,
    file_path: str | None = None,
) -> None:
    """Install handlers on the root logger, replacing any existing ones.

    Unset arguments fall back to ``LOG_LEVEL`` (INFO), ``LOG_OUTPUT``
    (stderr) and ``LOG_FILE_PATH``, read at call time so values from a
    ``.env`` file loaded by ``main`` apply.
    """
    if level is None:
        level = os.environ.get("LOG_LEVEL") or "INFO"
    if isinstance(level, str):
        level = level.upper()
    output = (output or os.environ.get("LOG_OUTPUT") or "stderr").lower()
    file_path = file_path or os.environ.get("LOG_FILE_PATH") or DEFAULT_LOG_FILE

    handlers = _handlers(output, file_path)
    root = logging.getLogger()
    root.setLevel(level)
    root.handlers.clear()
    formatter = logging.Formatter(LOG_LINE_FORMAT)
    for handler in handlers:
        handler.setFormatter(formatter)
        root.addHandler(handler)

    if root.getEffectiveLevel() > logging.DEBUG:
        for name in _CHATTY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Return the ``digest.*`` logger for a module."""
    return logging.getLogger(name)
