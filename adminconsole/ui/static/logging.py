#!/usr/bin/env python3
# adminconsole/ui/static/logging.py
from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from typing import Optional

from adminconsole.ui.utils import ANSI, PRINT_MUTEX, enable_windows_vt, strip_ansi

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class ColorizingStreamHandler(logging.StreamHandler):
    """
    StreamHandler that colours records by level when ANSI is available.

    Writes hold the shared print mutex and start at column 0 with the line
    erased, so a log record never lands in the middle of the edit line.
    """

    _LEVEL_COLORS = {
        logging.DEBUG: ANSI["bright_black"],
        logging.INFO: "",
        logging.WARNING: ANSI["yellow"],
        logging.ERROR: ANSI["red"],
        logging.CRITICAL: ANSI["magenta"],
    }

    def __init__(self, stream=None) -> None:
        super().__init__(stream)
        self._use_ansi = enable_windows_vt() and getattr(self.stream, "isatty", lambda: False)()

    def emit(self, record: logging.LogRecord) -> None:
        try:
            message = self.format(record)
            if self._use_ansi:
                color = self._LEVEL_COLORS.get(record.levelno, "")
                if color:
                    message = f"{color}{message}{ANSI['reset']}"
                message = "\r\x1b[K" + message
            else:
                message = strip_ansi(message)
            with PRINT_MUTEX:
                self.stream.write(message + self.terminator)
                self.flush()
        except Exception:
            self.handleError(record)


class PlainFormatter(logging.Formatter):
    """Formatter that strips ANSI (good for log files)."""

    def format(self, record: logging.LogRecord) -> str:
        return strip_ansi(super().format(record))


def resolve_level(level: int | str | None, default: int = logging.INFO) -> int:
    """Map 'DEBUG'/'info'/20/None to a logging level number."""
    if level is None:
        return default
    if isinstance(level, int):
        return level
    name = level.strip().upper()
    if name not in LOG_LEVELS:
        raise ValueError(f"Unknown log level {level!r}; expected one of {LOG_LEVELS}")
    return logging.getLevelName(name)


def init_logger(
    name: str = "adminconsole",
    level: int | str | None = logging.INFO,
    logfile: Optional[str] = None,
    *,
    stream=None,
) -> logging.Logger:
    """
    Initialize a colour-safe logger.

    Console: level-coloured ANSI on a terminal, plain otherwise (stderr).
    File (optional): rotating, plain text, UTF-8.
    """
    numeric_level = resolve_level(level)
    logger = logging.getLogger(name)
    logger.setLevel(numeric_level)
    logger.propagate = False

    if not any(isinstance(h, ColorizingStreamHandler) for h in logger.handlers):
        console_handler = ColorizingStreamHandler(stream=stream or sys.stderr)
        console_handler.setLevel(numeric_level)
        console_handler.setFormatter(
            logging.Formatter("[%(levelname)s] %(message)s"))
        logger.addHandler(console_handler)

    if logfile and not any(isinstance(h, RotatingFileHandler) for h in logger.handlers):
        file_handler = RotatingFileHandler(
            logfile, maxBytes=2_000_000, backupCount=3, encoding="utf-8"
        )
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(
            PlainFormatter(
                "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
        logger.addHandler(file_handler)

    return logger
