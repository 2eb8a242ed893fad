#!/usr/bin/env python3
# adminconsole/commands/command_types.py
from __future__ import annotations

"""
Command data structures and protocols.

This module defines:
- CommandCallback / SuggestCallback: callable protocols for command bodies
  and argument completers. Either may be a plain function or a coroutine
  function.
- CommandResult: a normalized result container for command outputs.
- CommandDescriptor: immutable metadata plus behaviour for one command.
"""

import inspect
from dataclasses import dataclass
from typing import Any, Optional, Protocol, Sequence


class CommandCallback(Protocol):
    """Protocol for any command body."""

    def __call__(self, args: Sequence[str]) -> Any:  # pragma: no cover - signature only
        ...


class SuggestCallback(Protocol):
    """Protocol for argument completers; may suspend (coroutine function)."""

    def __call__(self, args: Sequence[str]) -> Any:  # pragma: no cover - signature only
        ...


@dataclass(slots=True)
class CommandResult:
    """
    Normalized result container from command execution.

    Attributes:
        ok: True if the command completed successfully.
        message: Human-readable summary or primary output.
        data: Optional machine-readable payload (dict/list/primitive).
    """
    ok: bool = True
    message: str = ""
    data: Any = None

    def __str__(self) -> str:
        # Keep CLI printing predictable
        return self.message if self.message else ("ok" if self.ok else "error")


def normalize_name(name: str) -> str:
    """Lower-case and trim a command name."""
    return name.strip().lower()


@dataclass(frozen=True, slots=True)
class CommandDescriptor:
    """
    A console command: metadata and a callable to execute.

    Important fields:
        name: Unique command name, normalized to lower-case.
        description: Short, user-facing description.
        execute: Command body, called with the positional argument tokens.
        usage: Argument hint shown after the name, e.g. '<user> [reason]'.
        example: One-line example invocation (optional).
        suggest: Optional argument completer. Receives every token after
            the command name and returns candidate strings.
    """

    name: str
    description: str
    execute: CommandCallback
    usage: str = ""
    example: str = ""
    suggest: Optional[SuggestCallback] = None

    def __post_init__(self) -> None:
        normalized = normalize_name(self.name)
        if not normalized or any(ch.isspace() for ch in normalized):
            raise ValueError(
                f"Command name must be a single non-empty word, got {self.name!r}")
        object.__setattr__(self, "name", normalized)

    @property
    def has_suggest(self) -> bool:
        return self.suggest is not None

    async def invoke(self, args: Sequence[str]) -> Any:
        """Execute the command body, awaiting it when it is a coroutine."""
        result = self.execute(list(args))
        if inspect.isawaitable(result):
            result = await result
        return result

    async def complete(self, args: Sequence[str]) -> list[str]:
        """Return argument candidates, or an empty list without a completer."""
        if self.suggest is None:
            return []
        candidates = self.suggest(list(args))
        if inspect.isawaitable(candidates):
            candidates = await candidates
        return [str(c) for c in (candidates or ())]
