#!/usr/bin/env python3
# adminconsole/interface/editor.py
from __future__ import annotations

"""
Raw-keystroke line editor.

The editor reads KeyEvents from a frontend one at a time and applies them to
an EditSession (buffer, cursor, suggestion cycle) until Enter is pressed.
History persists across sessions for the lifetime of the editor.

Key handling:
    Enter              end the session, return the buffer
    Backspace/Delete   delete before/at the cursor
    Left/Right         move the cursor (no redraw)
    Up/Down            browse history; the live line is kept aside and restored
    Tab                cycle completions (see completion.py)
    Home/End           jump to start/end
    printable char     insert at the cursor, reset the completion cycle
"""

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Optional

from adminconsole.interface.completion import CompletionError, TabCompleter
from adminconsole.interface.keys import KeyEvent, KeyKind
from adminconsole.ui import escape_markup

if TYPE_CHECKING:
    from adminconsole.interface.cli import BaseCLI

logger = logging.getLogger(__name__)


class EditInterrupted(Exception):
    """Ctrl-C was pressed at the prompt."""


@dataclass
class EditSession:
    """Mutable state of the line being typed."""

    buffer: list[str] = field(default_factory=list)
    cursor: int = 0
    suggestions: list[str] = field(default_factory=list)
    suggestion_index: int = -1
    # Text before the completed token and the full text after the last
    # completion, so a cycle can swap a multi-word suggestion back out.
    completion_base: str = ""
    completed_text: Optional[str] = None

    @property
    def text(self) -> str:
        return "".join(self.buffer)

    @property
    def cycle_active(self) -> bool:
        return self.suggestion_index != -1 and bool(self.suggestions)

    def set_text(self, text: str) -> None:
        """Replace the buffer wholesale and put the cursor at the end."""
        self.buffer = list(text)
        self.cursor = len(self.buffer)

    def insert(self, char: str) -> None:
        self.buffer.insert(self.cursor, char)
        self.cursor += 1

    def reset_cycle(self) -> None:
        self.suggestions = []
        self.suggestion_index = -1
        self.completion_base = ""
        self.completed_text = None

    def advance_cycle(self) -> None:
        self.suggestion_index = (self.suggestion_index + 1) % len(self.suggestions)

    def apply_completion(self, base: str, selected: str) -> None:
        text = f"{base} {selected}" if base else selected
        self.set_text(text)
        self.completion_base = base
        self.completed_text = text


class History:
    """
    Submitted lines plus the browsing position.

    `index == len(entries)` means the live (unsubmitted) line is shown;
    `pending_input` holds that live line while older entries are browsed.
    """

    def __init__(self) -> None:
        self.entries: list[str] = []
        self.index = 0
        self.pending_input = ""

    def __len__(self) -> int:
        return len(self.entries)

    def append(self, line: str) -> None:
        """Record a submitted line (adjacent duplicates are skipped) and return to the live line."""
        if line and (not self.entries or self.entries[-1] != line):
            self.entries.append(line)
        self.index = len(self.entries)

    def previous(self, live_text: str) -> Optional[str]:
        """Step back; returns the entry to show, or None without history."""
        if not self.entries:
            return None
        if self.index == len(self.entries):
            self.pending_input = live_text
        self.index = max(0, self.index - 1)
        return self.entries[self.index]

    def next(self) -> Optional[str]:
        """Step forward; past the newest entry the live line comes back."""
        if not self.entries:
            return None
        self.index = min(len(self.entries), self.index + 1)
        if self.index == len(self.entries):
            return self.pending_input
        return self.entries[self.index]


class LineEditor:
    """Turns key events from a frontend into completed lines."""

    def __init__(self, cli: "BaseCLI", completer: TabCompleter, history: Optional[History] = None) -> None:
        self.cli = cli
        self.completer = completer
        self.history = history if history is not None else History()
        self.prompt = ""
        self.session = EditSession()

    async def read_line(self, prompt: str = "") -> str:
        """
        Run one edit session and return the submitted line.

        Raises EOFError when input ends and EditInterrupted on Ctrl-C.
        """
        self.prompt = prompt
        self.session = EditSession()
        self._redraw()
        while True:
            event = await self.cli.read_key()
            line = await self.handle_key(event)
            if line is not None:
                return line

    async def handle_key(self, event: KeyEvent) -> Optional[str]:
        """Apply one key to the current session; returns the line on Enter."""
        session = self.session
        kind = event.kind

        if kind is KeyKind.ENTER:
            self.cli.end_line()
            return session.text

        if kind is KeyKind.EOF:
            self.cli.end_line()
            raise EOFError
        if kind is KeyKind.INTERRUPT:
            self.cli.end_line()
            raise EditInterrupted

        if kind is KeyKind.BACKSPACE:
            if session.cursor > 0:
                del session.buffer[session.cursor - 1]
                session.cursor -= 1
                session.reset_cycle()
                self._redraw()
        elif kind is KeyKind.DELETE:
            if session.cursor < len(session.buffer):
                del session.buffer[session.cursor]
                session.reset_cycle()
                self._redraw()
        elif kind is KeyKind.LEFT:
            if session.cursor > 0:
                session.cursor -= 1
                self.cli.move_cursor(-1)
        elif kind is KeyKind.RIGHT:
            if session.cursor < len(session.buffer):
                session.cursor += 1
                self.cli.move_cursor(1)
        elif kind is KeyKind.UP:
            entry = self.history.previous(session.text)
            if entry is not None:
                session.set_text(entry)
                self._redraw()
        elif kind is KeyKind.DOWN:
            entry = self.history.next()
            if entry is not None:
                session.set_text(entry)
                self._redraw()
        elif kind is KeyKind.TAB:
            if session.buffer:
                await self._complete()
        elif kind is KeyKind.HOME:
            self.cli.move_cursor(-session.cursor)
            session.cursor = 0
        elif kind is KeyKind.END:
            self.cli.move_cursor(len(session.buffer) - session.cursor)
            session.cursor = len(session.buffer)
        elif kind is KeyKind.CHAR and event.char:
            session.insert(event.char)
            session.reset_cycle()
            self._redraw()
        # anything else is ignored
        return None

    async def _complete(self) -> None:
        try:
            changed = await self.completer.complete(self.session)
        except CompletionError as exc:
            logger.error("Autocomplete for command '%s' failed: %s", exc.command_name, exc)
            self.cli.write_line(f"[red]Error: autocomplete failed: {escape_markup(str(exc))}[/]")
            self._redraw()
            return
        if changed:
            self._redraw()

    def _redraw(self) -> None:
        self.cli.render(self.prompt, self.session.text, self.session.cursor)
