#!/usr/bin/env python3
# adminconsole/commands/__init__.py
from __future__ import annotations

"""
Package for command descriptors and registration.

Provides:
- Data structures and protocols (`CommandDescriptor`, `CommandResult`, `CommandCallback`).
- The per-console registry and a decorator (`CommandRegistry`, `command`).

This package re-exports public APIs from:
- command_types.py
- commands.py
"""


# Re-export from submodules
from .command_types import (
    CommandDescriptor,
    CommandResult,
    CommandCallback,
    SuggestCallback,
    normalize_name,
)
from .commands import CommandRegistry, command

__all__ = [
    "CommandDescriptor",
    "CommandResult",
    "CommandCallback",
    "SuggestCallback",
    "normalize_name",
    "CommandRegistry",
    "command",
]
