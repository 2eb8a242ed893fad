#!/usr/bin/env python3
# adminconsole/interface/parser.py
from __future__ import annotations

"""
Tokenizing helpers for submitted lines.

Responsibilities:
- Split a line into tokens, keeping double-quoted spans together.
- Separate the command name (normalized, prefix stripped) from its arguments.
- Render usage strings for help output.
"""

import re
from typing import Optional

from adminconsole.commands import CommandDescriptor, normalize_name

# A quoted span (closing quote optional: an open quote runs to end of line),
# or a maximal run of non-whitespace starting with anything but a quote.
_TOKEN_RE = re.compile(r'"(?P<quoted>[^"]*)(?:"|$)|(?P<bare>[^\s"]\S*)')


def tokenize(command_line: str) -> list[str]:
    """
    Split a raw line into tokens.

    'kick bob "too many requests"' -> ['kick', 'bob', 'too many requests']
    'say "unterminated text'       -> ['say', 'unterminated text']
    'say ab"cd ef"'                -> ['say', 'ab"cd', 'ef']
    Never raises; whitespace-only input yields [].
    """
    tokens: list[str] = []
    for match in _TOKEN_RE.finditer(command_line):
        quoted = match.group("quoted")
        if quoted is not None:
            tokens.append(quoted)
        else:
            # a closing quote glued to a bare word is not part of it
            tokens.append(match.group("bare").rstrip('"'))
    return tokens


def strip_prefix(token: str, prefix: str) -> str:
    """Remove a host command prefix (e.g. '/') from the start of a token."""
    if prefix and token.startswith(prefix):
        return token[len(prefix):]
    return token


def split_command(command_line: str, prefix: str = "") -> tuple[Optional[str], list[str]]:
    """
    Return (command_name, args) for a line, or (None, []) when it has no tokens.

    The name is lower-cased and stripped of the host's command prefix.
    """
    tokens = tokenize(command_line)
    if not tokens:
        return None, []
    command_name, *arg_tokens = tokens
    return normalize_name(strip_prefix(command_name, prefix)), arg_tokens


def build_usage(descriptor: CommandDescriptor, prefix: str = "") -> str:
    """
    Render a usage line.

    Examples:
        'kick <user> [reason]'
        '/list [category]'
    """
    head = f"{prefix}{descriptor.name}"
    return f"{head} {descriptor.usage}" if descriptor.usage else head
