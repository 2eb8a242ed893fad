#!/usr/bin/env python3
# adminconsole/interface/loader.py
from __future__ import annotations

"""
Plugin command loader.

Features:
- Imports the command groups a host asks for from a plugin package
  (default: 'plugins'), e.g. 'plugins.licensing.entrypoint'.
- An entry module may export COMMAND / COMMANDS (ready descriptors) and/or
  build_commands(context) for commands that need host services.
"""

import importlib
import logging
from dataclasses import dataclass, field
from types import ModuleType
from typing import TYPE_CHECKING, Any, Iterable, Mapping, Optional

from adminconsole.commands import CommandDescriptor

if TYPE_CHECKING:
    from adminconsole.interface.handler import CommandConsole

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class HostContext:
    """What a plugin may use when building its commands."""

    console: "CommandConsole"
    services: Mapping[str, Any] = field(default_factory=dict)
    config: Any = None

    def service(self, name: str) -> Optional[Any]:
        return self.services.get(name)


def _collect(objs: Any) -> list[CommandDescriptor]:
    if isinstance(objs, CommandDescriptor):
        return [objs]
    if isinstance(objs, Iterable):
        return [item for item in objs if isinstance(item, CommandDescriptor)]
    return []


def commands_from_module(module: ModuleType, context: HostContext) -> list[CommandDescriptor]:
    """Return the descriptors exported by an entry module."""
    found: list[CommandDescriptor] = []
    if hasattr(module, "COMMAND"):
        found.extend(_collect(getattr(module, "COMMAND")))
    if hasattr(module, "COMMANDS"):
        found.extend(_collect(getattr(module, "COMMANDS")))
    builder = getattr(module, "build_commands", None)
    if callable(builder):
        found.extend(_collect(builder(context)))
    return found


def _import_group(commands_package: str, group: str) -> ModuleType:
    """Import '<package>.<group>.entrypoint', or '<package>.<group>' without one."""
    try:
        return importlib.import_module(f"{commands_package}.{group}.entrypoint")
    except ModuleNotFoundError as exc:
        if exc.name != f"{commands_package}.{group}.entrypoint":
            raise
    return importlib.import_module(f"{commands_package}.{group}")


def load_commands(
    context: HostContext,
    groups: Iterable[str],
    commands_package: str = "plugins",
) -> int:
    """
    Import each command group and register its commands on the console.

    Returns the number of commands registered.
    """
    registered_count = 0
    for group in groups:
        module = _import_group(commands_package, group)
        descriptors = commands_from_module(module, context)
        context.console.register_many(descriptors)
        registered_count += len(descriptors)
        logger.debug("Loaded %d command(s) from group '%s'.", len(descriptors), group)
    return registered_count
