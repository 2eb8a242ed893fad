from __future__ import annotations

import asyncio
import io
import logging

import pytest
from prompt_toolkit.key_binding.key_processor import KeyPress
from prompt_toolkit.keys import Keys

from adminconsole.interface import CommandConsole, KeyEvent, KeyKind, PipeCLI, translate_key_press
from adminconsole.ui import (
    ANSI,
    escape_markup,
    format_table,
    init_logger,
    render_markup,
    resolve_level,
    strip_ansi,
)


def test_render_markup_plain_and_ansi():
    assert render_markup("[red]Error:[/] done", plain=True) == "Error: done"
    assert render_markup("[red]x[/]") == f"{ANSI['red']}x{ANSI['reset']}"


def test_unknown_tags_and_escapes_stay_literal():
    assert render_markup("[online] [[red]", plain=True) == "[online] [red]"
    assert render_markup(escape_markup("[red]x"), plain=True) == "[red]x"


def test_format_table_aligns_columns():
    lines = format_table([["kick", "Disconnects"], ["users", "Shows"]], headers=["Command", "Description"])
    assert lines[1] == "| Command | Description |"
    assert lines[3] == "| kick    | Disconnects |"
    assert lines[0] == lines[-1] == "-" * len(lines[1])


def test_format_table_right_alignment_and_ragged_rows():
    lines = format_table([["7", "1.5 KB"], ["12"]], headers=["ID", "Size"], align=(">", ">"), border=False)
    assert lines == [
        "| ID |   Size |",
        "| -- | ------ |",
        "|  7 | 1.5 KB |",
        "| 12 |        |",
    ]


@pytest.mark.parametrize(
    "key, expected",
    [
        (Keys.ControlM, KeyKind.ENTER),
        (Keys.ControlI, KeyKind.TAB),
        (Keys.ControlH, KeyKind.BACKSPACE),
        (Keys.Up, KeyKind.UP),
        (Keys.ControlC, KeyKind.INTERRUPT),
        (Keys.ControlD, KeyKind.EOF),
        (Keys.F5, KeyKind.OTHER),
    ],
)
def test_translate_special_keys(key, expected):
    assert [e.kind for e in translate_key_press(KeyPress(key))] == [expected]


def test_translate_characters_and_paste():
    assert translate_key_press(KeyPress("a")) == [KeyEvent.character("a")]
    pasted = translate_key_press(KeyPress(Keys.BracketedPaste, "ab"))
    assert pasted == [KeyEvent.character("a"), KeyEvent.character("b")]


def test_resolve_level():
    assert resolve_level("debug") == logging.DEBUG
    assert resolve_level(None) == logging.INFO
    with pytest.raises(ValueError):
        resolve_level("loud")


def test_init_logger_writes_plain_text_to_non_tty_stream(tmp_path):
    stream = io.StringIO()
    logfile = tmp_path / "console.log"
    logger = init_logger("adminconsole", "INFO", str(logfile), stream=stream)
    logger.warning("disk %s", "full")
    logger.debug("hidden")
    for handler in logger.handlers:
        handler.flush()

    assert stream.getvalue() == "[WARNING] disk full\n"
    assert "adminconsole: disk full" in logfile.read_text(encoding="utf-8")


def test_pipe_frontend_replays_lines():
    out = io.StringIO()
    console = CommandConsole(PipeCLI(io.StringIO("help missingcmd\n"), out))
    asyncio.run(console.start())

    text = strip_ansi(out.getvalue())
    assert "> help missingcmd\n" in text
    assert "Unknown command 'missingcmd'." in text
    assert console.history.entries == ["help missingcmd"]
