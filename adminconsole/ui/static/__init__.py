#!/usr/bin/env python3
# adminconsole/ui/static/__init__.py
from __future__ import annotations
from .table import format_table
from .logging import (
    LOG_LEVELS,
    init_logger,
    resolve_level,
    ColorizingStreamHandler,
    PlainFormatter,
)

__all__ = [
    "format_table",
    "LOG_LEVELS",
    "init_logger",
    "resolve_level",
    "ColorizingStreamHandler",
    "PlainFormatter",
]
