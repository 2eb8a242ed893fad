#!/usr/bin/env python3
# adminconsole/interface/cli.py
from __future__ import annotations

"""
Console frontends: where key events come from and where lines are drawn.

Selection order (make_cli):
    1) PromptToolkitCLI: raw-mode terminal keys via prompt_toolkit's input layer
    2) PipeCLI: stdin is not a terminal; each input line is replayed as keys

ScriptedCLI keeps everything in memory for tests and scripted hosts.
"""

import asyncio
import sys
import threading
from contextlib import ExitStack
from typing import Iterable, Optional, TextIO

from prompt_toolkit.input import create_input

from adminconsole.interface.keys import EOF, KeyEvent, text_to_events, translate_key_press
from adminconsole.ui import (
    CARRIAGE_RETURN,
    ERASE_TO_EOL,
    PRINT_MUTEX,
    cursor_left,
    cursor_right,
    enable_windows_vt,
    render_markup,
)


class BaseCLI:
    """
    Base interface for console frontends.

    Subclasses should implement:
        - read_key()            next KeyEvent (awaitable)
        - render()              redraw prompt + buffer, place the cursor
        - move_cursor()         cursor-only move on the edit line
        - end_line()            the edit line is finished
        - write_line()          one line of output (may carry [color] markup)

    This base also provides context manager support to guarantee teardown.
    """

    def setup(self) -> None:  # pragma: no cover - interface
        ...

    def teardown(self) -> None:  # pragma: no cover - interface
        ...

    async def read_key(self) -> KeyEvent:  # pragma: no cover - interface
        raise NotImplementedError

    def render(self, prompt: str, text: str, cursor: int) -> None:  # pragma: no cover - interface
        ...

    def move_cursor(self, delta: int) -> None:  # pragma: no cover - interface
        ...

    def end_line(self) -> None:  # pragma: no cover - interface
        ...

    def write_line(self, text: str = "") -> None:  # pragma: no cover - interface
        ...

    def write_lines(self, lines: Iterable[str]) -> None:
        for line in lines:
            self.write_line(line)

    # Context manager helpers
    def __enter__(self) -> "BaseCLI":
        self.setup()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.teardown()


class QueueCLI(BaseCLI):
    """Frontend whose keys arrive through an asyncio queue."""

    def __init__(self) -> None:
        self._keys: asyncio.Queue[KeyEvent] = asyncio.Queue()

    def feed(self, *events: KeyEvent) -> None:
        for event in events:
            self._keys.put_nowait(event)

    def feed_text(self, text: str, *, submit: bool = True) -> None:
        """Queue `text` as typed characters (plus Enter when `submit`)."""
        self.feed(*text_to_events(text, submit=submit))

    def close(self) -> None:
        """Signal end of input."""
        self._keys.put_nowait(EOF)

    async def read_key(self) -> KeyEvent:
        return await self._keys.get()


class TerminalCLI(QueueCLI):
    """Draws the edit line with ANSI sequences on a text stream."""

    def __init__(self, stream: Optional[TextIO] = None) -> None:
        super().__init__()
        self.stream = stream or sys.stdout

    def _write(self, data: str) -> None:
        with PRINT_MUTEX:
            self.stream.write(data)
            self.stream.flush()

    def render(self, prompt: str, text: str, cursor: int) -> None:
        self._write(
            CARRIAGE_RETURN + render_markup(prompt) + text + ERASE_TO_EOL
            + cursor_left(len(text) - cursor))

    def move_cursor(self, delta: int) -> None:
        self._write(cursor_right(delta) if delta > 0 else cursor_left(-delta))

    def end_line(self) -> None:
        self._write("\n")

    def write_line(self, text: str = "") -> None:
        self._write(CARRIAGE_RETURN + ERASE_TO_EOL + render_markup(text) + "\n")


# ===== Preferred: prompt_toolkit raw input =====
class PromptToolkitCLI(TerminalCLI):
    """Raw-mode key reader attached to the running event loop."""

    def __init__(self, stream: Optional[TextIO] = None) -> None:
        super().__init__(stream)
        self._input = create_input()
        self._exit_stack = ExitStack()

    def setup(self) -> None:
        enable_windows_vt()
        self._exit_stack.enter_context(self._input.raw_mode())
        # attach() registers a reader on the running loop; call inside it.
        self._exit_stack.enter_context(self._input.attach(self._on_input_ready))

    def _on_input_ready(self) -> None:
        for key_press in self._input.read_keys():
            self.feed(*translate_key_press(key_press))
        if self._input.closed:
            self.close()

    def teardown(self) -> None:
        self._exit_stack.close()


# ===== Fallback: piped stdin =====
class PipeCLI(TerminalCLI):
    """
    Replays lines from a non-interactive stdin as key events.

    A daemon thread blocks on readline and hands each line to the loop, so a
    console stop never waits on the pipe.
    """

    def __init__(self, stdin: Optional[TextIO] = None, stream: Optional[TextIO] = None) -> None:
        super().__init__(stream)
        self.stdin = stdin or sys.stdin
        self._reader: Optional[threading.Thread] = None
        self._prompt = ""
        self._text = ""

    def setup(self) -> None:
        if self._reader is not None:
            return
        loop = asyncio.get_running_loop()
        self._reader = threading.Thread(
            target=self._pump, args=(loop,), name="console-stdin", daemon=True)
        self._reader.start()

    def _pump(self, loop: asyncio.AbstractEventLoop) -> None:
        for line in iter(self.stdin.readline, ""):
            loop.call_soon_threadsafe(self.feed_text, line.rstrip("\r\n"))
        loop.call_soon_threadsafe(self.close)

    # Nothing is drawn per keystroke; the finished line is echoed once.
    def render(self, prompt: str, text: str, cursor: int) -> None:
        self._prompt, self._text = prompt, text

    def move_cursor(self, delta: int) -> None:
        pass

    def end_line(self) -> None:
        self._write(render_markup(self._prompt, plain=True) + self._text + "\n")


# ===== In-memory: tests and scripted hosts =====
class ScriptedCLI(QueueCLI):
    """
    Frontend fed from code; output is kept as plain text.

    `lines` holds finished lines (echoed input and written output), `screen`
    the edit line as last drawn, `cursor` the on-screen cursor column inside
    the buffer. When the queued keys run out, input ends (EOF).
    """

    def __init__(self, keys: Iterable[KeyEvent] = ()) -> None:
        super().__init__()
        self.lines: list[str] = []
        self.screen = ""
        self.cursor = 0
        self.renders = 0
        self.feed(*keys)

    async def read_key(self) -> KeyEvent:
        if self._keys.empty():
            return EOF
        return self._keys.get_nowait()

    def render(self, prompt: str, text: str, cursor: int) -> None:
        self.screen = render_markup(prompt, plain=True) + text
        self.cursor = cursor
        self.renders += 1

    def move_cursor(self, delta: int) -> None:
        self.cursor += delta

    def end_line(self) -> None:
        self.lines.append(self.screen)
        self.screen = ""
        self.cursor = 0

    def write_line(self, text: str = "") -> None:
        self.lines.extend(render_markup(text, plain=True).split("\n"))


def make_cli(stdin: Optional[TextIO] = None) -> BaseCLI:
    """
    Factory to select the frontend for the current stdin.
    """
    stdin = stdin or sys.stdin
    if stdin.isatty():
        return PromptToolkitCLI()
    return PipeCLI(stdin)
