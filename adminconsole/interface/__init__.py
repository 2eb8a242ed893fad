#!/usr/bin/env python3
# adminconsole/interface/__init__.py
from __future__ import annotations

"""
Package for the interactive console and command dispatch.

Provides:
- Key events and console frontends (prompt_toolkit raw input / pipe / scripted).
- The line editor with history and Tab completion.
- Tokenizer helpers for submitted lines.
- Host profiles and the dispatch loop.
- Plugin command loader.
"""


# Parser and keys FIRST (completion and editor depend on them)
from .parser import tokenize, split_command, strip_prefix, build_usage
from .keys import KeyEvent, KeyKind, text_to_events, translate_key_press

# Completion + editor
from .completion import BUILT_IN_COMMANDS, CompletionError, TabCompleter
from .editor import EditInterrupted, EditSession, History, LineEditor

# CLI frontends
from .cli import (
    BaseCLI,
    QueueCLI,
    TerminalCLI,
    PromptToolkitCLI,
    PipeCLI,
    ScriptedCLI,
    make_cli,
)

# Hosts + dispatcher
from .hosts import CLIENT, SERVER, HOSTS, HostProfile, get_host
from .handler import CommandConsole

# Loader
from .loader import HostContext, load_commands

__all__ = [
    # parser
    "tokenize",
    "split_command",
    "strip_prefix",
    "build_usage",
    # keys
    "KeyEvent",
    "KeyKind",
    "text_to_events",
    "translate_key_press",
    # completion / editor
    "BUILT_IN_COMMANDS",
    "CompletionError",
    "TabCompleter",
    "EditInterrupted",
    "EditSession",
    "History",
    "LineEditor",
    # cli
    "BaseCLI",
    "QueueCLI",
    "TerminalCLI",
    "PromptToolkitCLI",
    "PipeCLI",
    "ScriptedCLI",
    "make_cli",
    # hosts / handler
    "CLIENT",
    "SERVER",
    "HOSTS",
    "HostProfile",
    "get_host",
    "CommandConsole",
    # loader
    "HostContext",
    "load_commands",
]
