from __future__ import annotations

import asyncio

import pytest

from adminconsole.commands import CommandRegistry
from adminconsole.interface import EditInterrupted, History, LineEditor, ScriptedCLI, TabCompleter
from adminconsole.interface.keys import (
    BACKSPACE,
    DELETE,
    DOWN,
    END,
    HOME,
    INTERRUPT,
    LEFT,
    RIGHT,
    TAB,
    UP,
)
from conftest import keys


def make_editor(*events, history=None):
    cli = ScriptedCLI(keys(*events))
    return LineEditor(cli, TabCompleter(CommandRegistry()), history), cli


def read(editor, prompt="> "):
    return asyncio.run(editor.read_line(prompt))


def test_enter_returns_buffer_and_echoes_line():
    editor, cli = make_editor("users online\n")
    assert read(editor) == "users online"
    assert cli.lines == ["> users online"]


def test_backspace_delete_and_cursor_moves():
    editor, cli = make_editor("abc", LEFT, BACKSPACE, HOME, DELETE, "\n")
    assert read(editor) == "c"


def test_insert_in_the_middle():
    editor, _ = make_editor("ac", LEFT, "b", END, "d\n")
    assert read(editor) == "abcd"


def test_cursor_stays_inside_buffer():
    editor, cli = make_editor("ab", RIGHT, RIGHT, HOME, LEFT, LEFT)
    with pytest.raises(EOFError):
        read(editor)
    assert editor.session.cursor == 0


def test_history_up_then_down_restores_live_line():
    history = History()
    history.append("users")
    history.append("kick bob")
    editor, _ = make_editor("dra", UP, UP, DOWN, DOWN, "ft\n", history=history)
    assert read(editor) == "draft"


def test_history_up_stops_at_oldest_entry():
    history = History()
    history.append("first")
    history.append("second")
    editor, _ = make_editor(UP, UP, UP, "\n", history=history)
    assert read(editor) == "first"


def test_history_without_entries_ignores_arrows():
    editor, _ = make_editor("x", UP, DOWN, "\n")
    assert read(editor) == "x"


def test_history_skips_adjacent_duplicates():
    history = History()
    for line in ("users", "users", "kick bob", "users"):
        history.append(line)
    assert history.entries == ["users", "kick bob", "users"]
    assert history.index == len(history)


def test_end_of_input_raises_eoferror():
    editor, _ = make_editor("partial")
    with pytest.raises(EOFError):
        read(editor)


def test_ctrl_c_raises_edit_interrupted():
    editor, _ = make_editor("abc", INTERRUPT)
    with pytest.raises(EditInterrupted):
        read(editor)


def test_tab_on_empty_buffer_does_nothing():
    editor, cli = make_editor(TAB, "\n")
    assert read(editor) == ""
    assert cli.lines == ["> "]
