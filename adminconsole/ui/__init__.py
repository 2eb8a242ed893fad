#!/usr/bin/env python3
# adminconsole/ui/__init__.py
from __future__ import annotations
# Re-export convenient top-level API
from .utils import (
    ANSI,
    CARRIAGE_RETURN,
    ERASE_TO_EOL,
    strip_ansi,
    enable_windows_vt,
    clear_screen,
    PRINT_MUTEX,
    print_line,
    colorize,
    cursor_left,
    cursor_right,
    escape_markup,
    render_markup,
)
from .static import (
    format_table,
    LOG_LEVELS,
    init_logger,
    resolve_level,
    ColorizingStreamHandler,
    PlainFormatter,
)

__all__ = [
    "ANSI",
    "CARRIAGE_RETURN",
    "ERASE_TO_EOL",
    "strip_ansi",
    "enable_windows_vt",
    "clear_screen",
    "colorize",
    "cursor_left",
    "cursor_right",
    "escape_markup",
    "render_markup",
    "PRINT_MUTEX",
    "print_line",
    "format_table",
    "LOG_LEVELS",
    "init_logger",
    "resolve_level",
    "ColorizingStreamHandler",
    "PlainFormatter",
]
