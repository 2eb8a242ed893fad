#!/usr/bin/env python3
# adminconsole/ui/utils/ansi.py
from __future__ import annotations

import ctypes
import os
import re
from typing import Optional

# ---- Core SGR maps ----------------------------------------------------------

# Foreground 30-37 / bright 90-97, plus the few styles the console uses.
ANSI = {
    "reset": "\x1b[0m",

    "bold": "\x1b[1m",
    "dim": "\x1b[2m",
    "underline": "\x1b[4m",

    "red": "\x1b[31m",
    "green": "\x1b[32m",
    "yellow": "\x1b[33m",
    "blue": "\x1b[34m",
    "magenta": "\x1b[35m",
    "cyan": "\x1b[36m",
    "white": "\x1b[37m",

    "bright_black": "\x1b[90m",
    "bright_red": "\x1b[91m",
    "bright_green": "\x1b[92m",
    "bright_yellow": "\x1b[93m",
    "bright_blue": "\x1b[94m",
    "bright_cyan": "\x1b[96m",
}

# Cursor / line control used by the line editor.
ERASE_TO_EOL = "\x1b[K"
CARRIAGE_RETURN = "\r"

# Useful compiled regex
ANSI_REGEX = re.compile(r"\x1b\[[0-9;]*[A-Za-z]")
# Markup tags: [red], [bold], [/red], [/]
_TAG_RE = re.compile(r"\[(/?)([a-zA-Z_][\w-]*)?\]")

_vt_enabled_cache: Optional[bool] = None  # cached across calls


# ---- Utilities --------------------------------------------------------------

def strip_ansi(text: str) -> str:
    """Remove ANSI escape sequences from text."""
    return ANSI_REGEX.sub("", text)


def enable_windows_vt() -> bool:
    """
    Enable ANSI (VT) processing on Windows consoles when possible.
    Returns True if ANSI escapes should work on the current process.
    On non-Windows systems, always returns True.
    """
    global _vt_enabled_cache
    if _vt_enabled_cache is not None:
        return _vt_enabled_cache

    if os.name != "nt":
        _vt_enabled_cache = True
        return True

    if os.environ.get("WT_SESSION") or os.environ.get("TERM", "").startswith(("xterm", "vt100")):
        _vt_enabled_cache = True
        return True

    try:
        kernel32 = ctypes.windll.kernel32  # type: ignore[attr-defined]
        ENABLE_VIRTUAL_TERMINAL_PROCESSING = 0x0004
        handle = kernel32.GetStdHandle(-11)  # STD_OUTPUT_HANDLE
        mode = ctypes.c_uint()
        if handle in (0, -1) or not kernel32.GetConsoleMode(handle, ctypes.byref(mode)):
            _vt_enabled_cache = False
        else:
            _vt_enabled_cache = bool(kernel32.SetConsoleMode(
                handle, mode.value | ENABLE_VIRTUAL_TERMINAL_PROCESSING))
    except Exception:
        _vt_enabled_cache = False

    return _vt_enabled_cache


def clear_screen() -> None:
    """Clear the terminal screen reliably on Windows and POSIX."""
    os.system("cls" if os.name == "nt" else "clear")


def cursor_left(columns: int) -> str:
    return f"\x1b[{columns}D" if columns > 0 else ""


def cursor_right(columns: int) -> str:
    return f"\x1b[{columns}C" if columns > 0 else ""


# ---- High-level helpers -----------------------------------------------------


def colorize(text: str, *styles: str) -> str:
    """
    Wrap text with one or more SGR styles/keys from ANSI (e.g., 'red', 'bold').
    Always auto-resets at the end.
    """
    seq = "".join(ANSI[s] for s in styles if s in ANSI)
    return f"{seq}{text}{ANSI['reset']}" if seq else text


def escape_markup(text: str) -> str:
    """Escape '[' so user-provided text is never read as a markup tag."""
    return text.replace("[", "[[")


# ---- Markup renderer --------------------------------------------------------

# Supported tags:
#   [red]...[/red], [bold]...[/bold], universal close [/]
# Rules:
# - Tags nest as a simple stack.
# - Unknown tags are passed through literally.
# - '[[' is a literal '['.
# - On any closing tag, emit ANSI['reset'] then re-emit remaining stack styles.

def render_markup(text: str, *, plain: bool = False) -> str:
    """Render bracket markup to ANSI, or drop the tags when `plain` is set."""
    out: list[str] = []
    stack: list[str] = []         # ANSI sequences for active styles
    stack_keys: list[str] = []    # tag names to match closers

    i = 0
    while i < len(text):
        if text.startswith("[[", i):
            out.append("[")
            i += 2
            continue
        m = _TAG_RE.match(text, i)
        if m is None:
            out.append(text[i])
            i += 1
            continue

        is_close = bool(m.group(1))
        tag = m.group(2) or ""
        i = m.end()

        if not is_close:
            if tag in ANSI:
                stack.append(ANSI[tag])
                stack_keys.append(tag)
                if not plain:
                    out.append(ANSI[tag])
            else:
                out.append(m.group(0))      # unknown -> literal
            continue

        if tag == "":
            stack.clear()
            stack_keys.clear()
            if not plain:
                out.append(ANSI["reset"])
            continue

        if tag in stack_keys:
            while stack_keys:
                popped_key = stack_keys.pop()
                stack.pop()
                if popped_key == tag:
                    break
            if not plain:
                out.append(ANSI["reset"])
                if stack:
                    out.append("".join(stack))
        else:
            out.append(m.group(0))          # unknown closer -> literal

    if stack and not plain:
        out.append(ANSI["reset"])
    return "".join(out)
