#!/usr/bin/env python3
# adminconsole/ui/utils/__init__.py
from __future__ import annotations
from .ansi import (
    ANSI,
    CARRIAGE_RETURN,
    ERASE_TO_EOL,
    strip_ansi,
    enable_windows_vt,
    clear_screen,
    colorize,
    cursor_left,
    cursor_right,
    escape_markup,
    render_markup,
)
from .console import PRINT_MUTEX, print_line

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
]
