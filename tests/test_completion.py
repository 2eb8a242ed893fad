from __future__ import annotations

import asyncio

from adminconsole.commands import CommandRegistry
from adminconsole.interface import EditSession, LineEditor, ScriptedCLI, TabCompleter
from adminconsole.interface.keys import BACKSPACE, TAB
from conftest import keys, make_command


def registry_with(*descriptors):
    registry = CommandRegistry()
    registry.register_many(descriptors)
    return registry


def snapshots(editor, *events):
    """Apply events one at a time; return the buffer after each TAB."""

    async def run():
        editor.session = EditSession()
        seen = []
        for event in keys(*events):
            await editor.handle_key(event)
            if event is TAB:
                seen.append(editor.session.text)
        return seen

    return asyncio.run(run())


def make_editor(registry, prefix=""):
    cli = ScriptedCLI()
    return LineEditor(cli, TabCompleter(registry, prefix=prefix)), cli


def test_command_names_cycle_with_builtins():
    editor, _ = make_editor(registry_with(make_command("header")))
    assert snapshots(editor, "he", TAB, TAB, TAB) == ["header", "help", "header"]


def test_typing_resets_the_cycle():
    editor, _ = make_editor(registry_with(make_command("header")))
    seen = snapshots(editor, "he", TAB, BACKSPACE, BACKSPACE, BACKSPACE, BACKSPACE, "l", TAB, TAB)
    assert seen == ["header", "help", "help"]


def test_no_candidates_leaves_buffer():
    editor, _ = make_editor(registry_with(make_command("header")))
    assert snapshots(editor, "zz", TAB) == ["zz"]


def test_client_prefix_is_kept():
    editor, _ = make_editor(registry_with(make_command("status")), prefix="/")
    assert snapshots(editor, "/st", TAB) == ["/status"]


def test_argument_candidates_are_filtered_once_then_cycled():
    calls = []

    def suggest(args):
        calls.append(list(args))
        return ["alice", "albert", "bob"]

    editor, _ = make_editor(registry_with(make_command("kick", suggest=suggest)))
    assert snapshots(editor, "kick al", TAB, TAB, TAB) == [
        "kick alice", "kick albert", "kick alice"]
    # suggest sees every token after the command name
    assert calls[0] == ["al"]
    assert calls[1] == ["alice"]


def test_multi_word_suggestion_is_quoted_and_swapped():
    suggest = lambda args: ["Too many requests", "Spam"]
    editor, _ = make_editor(registry_with(make_command("kick", suggest=suggest)))
    assert snapshots(editor, "kick bob ", TAB, TAB, TAB) == [
        'kick bob "Too many requests"', "kick bob Spam", 'kick bob "Too many requests"']


def test_async_suggest():
    async def suggest(args):
        await asyncio.sleep(0)
        return ["newest", "popular"]

    editor, _ = make_editor(registry_with(make_command("list", suggest=suggest)))
    assert snapshots(editor, "list p", TAB) == ["list popular"]


def test_command_without_suggest_ignores_tab():
    editor, _ = make_editor(registry_with(make_command("broadcast")))
    assert snapshots(editor, "broadcast he", TAB) == ["broadcast he"]


def test_failing_suggest_reports_error_and_keeps_buffer():
    def suggest(args):
        raise RuntimeError("backend offline")

    editor, cli = make_editor(registry_with(make_command("kick", suggest=suggest)))
    assert snapshots(editor, "kick b", TAB) == ["kick b"]
    assert cli.lines == ["Error: autocomplete failed: RuntimeError: backend offline"]


def test_help_argument_completes_command_names():
    editor, _ = make_editor(registry_with(make_command("kick"), make_command("history")))
    assert snapshots(editor, "help ki", TAB) == ["help kick"]
    assert snapshots(editor, "help ", TAB, TAB, TAB) == ["help history", "help kick", "help history"]
    # only the first argument; built-ins are not offered
    assert snapshots(editor, "help kick ", TAB) == ["help kick "]
    assert snapshots(editor, "help ex", TAB) == ["help ex"]


def test_help_argument_with_client_prefix():
    editor, _ = make_editor(registry_with(make_command("status")), prefix="/")
    assert snapshots(editor, "/help /st", TAB) == ["/help /status"]
    assert snapshots(editor, "/help st", TAB) == ["/help status"]
