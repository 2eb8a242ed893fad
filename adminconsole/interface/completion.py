#!/usr/bin/env python3
# adminconsole/interface/completion.py
from __future__ import annotations

"""
Tab completion for the line editor.

Completion cycles through a candidate list instead of showing a menu:
- First token: registered command names plus the built-ins, sorted.
- Later tokens: candidates from the command's own `suggest` callback
  (registered command names for `help`),
  filtered once by the token being typed, then cycled unfiltered.

The buffer is split on single spaces here, not with the quote-aware
tokenizer; the split only has to locate the token under completion.
"""

from typing import TYPE_CHECKING, Sequence

from adminconsole.commands import CommandRegistry, normalize_name
from adminconsole.interface.parser import strip_prefix

if TYPE_CHECKING:
    from adminconsole.interface.editor import EditSession

# Built-in verbs always available
BUILT_IN_COMMANDS: tuple[str, ...] = ("help", "exit")


class CompletionError(Exception):
    """A command's suggest callback failed."""

    def __init__(self, command_name: str, cause: BaseException) -> None:
        super().__init__(f"{type(cause).__name__}: {cause}")
        self.command_name = command_name
        self.cause = cause


def _split_current_token(raw_input: str) -> list[str]:
    """Split on single spaces; 'kick ' -> ['kick', ''] marks a new empty token."""
    return raw_input.split(" ")


def _quote(candidate: str) -> str:
    return f'"{candidate}"' if any(ch.isspace() for ch in candidate) else candidate


class TabCompleter:
    """Computes and cycles suggestions for one console's registry."""

    def __init__(
        self,
        registry: CommandRegistry,
        *,
        builtins: Sequence[str] = BUILT_IN_COMMANDS,
        prefix: str = "",
    ) -> None:
        self.registry = registry
        self.builtins = tuple(builtins)
        self.prefix = prefix

    def command_candidates(self, token: str) -> list[str]:
        """Command names starting with `token`, sorted, built-ins last."""
        typed = normalize_name(strip_prefix(token, self.prefix))
        candidates = sorted(
            name for name in self.registry.names() if name.startswith(typed))
        candidates.extend(
            name for name in self.builtins if name.startswith(typed) and name not in candidates)
        return candidates

    async def complete(self, session: "EditSession") -> bool:
        """
        Apply one Tab press to `session`.

        Returns True when the buffer changed. Raises CompletionError when the
        command's suggest callback fails; the session is left untouched then.
        """
        text = session.text
        if not text:
            return False

        parts = _split_current_token(text)
        if len(parts) == 1:
            return self._complete_command(session, parts[0])
        return await self._complete_argument(session, parts)

    def _complete_command(self, session: "EditSession", token: str) -> bool:
        if not session.cycle_active:
            session.suggestions = self.command_candidates(token)
            session.suggestion_index = 0
        else:
            session.advance_cycle()

        if not session.suggestions:
            return False

        head = self.prefix if self.prefix and token.startswith(self.prefix) else ""
        session.apply_completion("", head + session.suggestions[session.suggestion_index])
        return True

    async def _argument_candidates(self, command_name: str, args: list[str]) -> list[str]:
        if command_name == "help" and "help" in self.builtins:
            # help takes one command name; built-ins have no help page
            if len(args) != 1:
                return []
            head = self.prefix if self.prefix and args[0].startswith(self.prefix) else ""
            return [head + name for name in sorted(self.registry.names())]

        descriptor = self.registry.lookup(command_name)
        if descriptor is None or not descriptor.has_suggest:
            return []
        try:
            return list(await descriptor.complete(args) or [])
        except Exception as exc:
            raise CompletionError(command_name, exc) from exc

    async def _complete_argument(self, session: "EditSession", parts: list[str]) -> bool:
        command_name = normalize_name(strip_prefix(parts[0], self.prefix))
        candidates = await self._argument_candidates(command_name, parts[1:])
        if not candidates:
            return False

        if not session.cycle_active:
            typed = parts[-1].lstrip('"').lower()
            session.suggestions = [
                c for c in candidates if c.lower().startswith(typed)]
            session.suggestion_index = 0
            base = " ".join(parts[:-1])
        else:
            session.advance_cycle()
            base = session.completion_base if session.text == session.completed_text \
                else " ".join(parts[:-1])

        if not session.suggestions:
            return False

        selected = _quote(session.suggestions[session.suggestion_index])
        session.apply_completion(base, selected)
        return True
