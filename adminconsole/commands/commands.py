#!/usr/bin/env python3
# adminconsole/commands/commands.py
from __future__ import annotations

"""
Command registry and decorator utilities.

This module provides:
- CommandRegistry: in-memory registry of command descriptors, one per console.
- command: decorator turning a function into a CommandDescriptor.
"""

import logging
from typing import Any, Callable, Dict, Iterable, Iterator, Optional, ValuesView

from adminconsole.commands.command_types import (
    CommandDescriptor,
    SuggestCallback,
    normalize_name,
)

logger = logging.getLogger(__name__)


class CommandRegistry:
    """Holds the command descriptors of one console and provides lookup utilities."""

    def __init__(self, *, sort_listing: bool = False) -> None:
        # Normalized name -> descriptor
        self._commands_by_name: Dict[str, CommandDescriptor] = {}
        self.sort_listing = sort_listing

    # ---------------- Registration ----------------

    def register(self, descriptor: CommandDescriptor) -> None:
        """Register a command; an existing command of that name is replaced."""
        key = descriptor.name
        if key in self._commands_by_name:
            logger.warning(
                "Command '%s' is already registered. The old command will be overwritten.", key)
        self._commands_by_name[key] = descriptor
        logger.debug("Command '%s' registered.", key)

    def register_many(self, descriptors: Iterable[CommandDescriptor]) -> None:
        for descriptor in descriptors:
            self.register(descriptor)

    # ---------------- Lookup ----------------

    def lookup(self, name: str) -> Optional[CommandDescriptor]:
        """Return the command by name, or None if not found."""
        return self._commands_by_name.get(normalize_name(name))

    get = lookup

    def list(self) -> Iterable[CommandDescriptor]:
        """
        Return all descriptors for listings.

        Insertion order by default, by name when the registry sorts listings.
        The returned view is lazy and can be iterated any number of times.
        """
        if self.sort_listing:
            return _SortedView(self._commands_by_name.values())
        return self._commands_by_name.values()

    def names(self) -> list[str]:
        """Return all command names for completion."""
        return list(self._commands_by_name.keys())

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and normalize_name(name) in self._commands_by_name

    def __len__(self) -> int:
        return len(self._commands_by_name)

    def __iter__(self) -> Iterator[CommandDescriptor]:
        return iter(self.list())


class _SortedView:
    """Restartable, name-sorted iteration over a live values view."""

    __slots__ = ("_values",)

    def __init__(self, values: ValuesView[CommandDescriptor]) -> None:
        self._values = values

    def __iter__(self) -> Iterator[CommandDescriptor]:
        return iter(sorted(self._values, key=lambda d: d.name))

    def __len__(self) -> int:
        return len(self._values)


def command(
    *,
    name: str | None = None,
    description: str | None = None,
    usage: str = "",
    example: str = "",
    suggest: SuggestCallback | None = None,
) -> Callable[[Callable[..., Any]], CommandDescriptor]:
    """
    Decorator to build a CommandDescriptor from a function.

    - Function name is transformed from snake_case to kebab-case for `name` if not provided.
    - The docstring is the description unless one is given.
    """

    def wrapper(func: Callable[..., Any]) -> CommandDescriptor:
        return CommandDescriptor(
            name=(name or func.__name__).replace("_", "-"),
            description=(description or (func.__doc__ or "")).strip(),
            execute=func,
            usage=usage,
            example=example,
            suggest=suggest,
        )

    return wrapper
