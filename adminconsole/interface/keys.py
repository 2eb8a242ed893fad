#!/usr/bin/env python3
# adminconsole/interface/keys.py
from __future__ import annotations

"""
Key events consumed by the line editor.

Frontends translate whatever their input layer produces (prompt_toolkit key
presses, piped text, scripted tests) into KeyEvent values.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Iterable

from prompt_toolkit.key_binding.key_processor import KeyPress
from prompt_toolkit.keys import Keys


class KeyKind(Enum):
    ENTER = "enter"
    BACKSPACE = "backspace"
    DELETE = "delete"
    LEFT = "left"
    RIGHT = "right"
    UP = "up"
    DOWN = "down"
    TAB = "tab"
    HOME = "home"
    END = "end"
    CHAR = "char"
    INTERRUPT = "interrupt"   # Ctrl-C
    EOF = "eof"               # Ctrl-D / input closed
    OTHER = "other"


@dataclass(frozen=True, slots=True)
class KeyEvent:
    kind: KeyKind
    char: str = ""

    @classmethod
    def character(cls, char: str) -> "KeyEvent":
        return cls(KeyKind.CHAR, char)


ENTER = KeyEvent(KeyKind.ENTER)
BACKSPACE = KeyEvent(KeyKind.BACKSPACE)
DELETE = KeyEvent(KeyKind.DELETE)
LEFT = KeyEvent(KeyKind.LEFT)
RIGHT = KeyEvent(KeyKind.RIGHT)
UP = KeyEvent(KeyKind.UP)
DOWN = KeyEvent(KeyKind.DOWN)
TAB = KeyEvent(KeyKind.TAB)
HOME = KeyEvent(KeyKind.HOME)
END = KeyEvent(KeyKind.END)
INTERRUPT = KeyEvent(KeyKind.INTERRUPT)
EOF = KeyEvent(KeyKind.EOF)
OTHER = KeyEvent(KeyKind.OTHER)

# prompt_toolkit key -> editor key. Enter, Tab and Backspace arrive as
# their control-key aliases (c-m / c-j, c-i, c-h).
_PT_KEYS = {
    Keys.ControlM: ENTER,
    Keys.ControlJ: ENTER,
    Keys.ControlH: BACKSPACE,
    Keys.Delete: DELETE,
    Keys.Left: LEFT,
    Keys.Right: RIGHT,
    Keys.Up: UP,
    Keys.Down: DOWN,
    Keys.ControlI: TAB,
    Keys.Home: HOME,
    Keys.End: END,
    Keys.ControlA: HOME,
    Keys.ControlE: END,
    Keys.ControlC: INTERRUPT,
    Keys.ControlD: EOF,
}


def is_printable(char: str) -> bool:
    return len(char) == 1 and char.isprintable()


def translate_key_press(key_press: KeyPress) -> list[KeyEvent]:
    """Translate one prompt_toolkit KeyPress into editor events."""
    key = key_press.key
    if key == Keys.BracketedPaste:
        return list(text_to_events(key_press.data, submit=False))
    if isinstance(key, Keys):
        return [_PT_KEYS.get(key, OTHER)]
    if is_printable(key):
        return [KeyEvent.character(key)]
    return [OTHER]


def text_to_events(text: str, *, submit: bool = True) -> Iterable[KeyEvent]:
    """
    Yield one event per character of `text`.

    Newlines become ENTER; a final ENTER is appended when `submit` is set and
    the text does not already end with a newline.
    """
    for char in text:
        if char in "\r\n":
            yield ENTER
        elif char == "\t":
            yield TAB
        elif is_printable(char):
            yield KeyEvent.character(char)
        else:
            yield OTHER
    if submit and not text.endswith(("\n", "\r")):
        yield ENTER
