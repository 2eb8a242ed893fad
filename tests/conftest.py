from __future__ import annotations

import logging

import pytest

from adminconsole.commands import CommandDescriptor
from adminconsole.interface import SERVER, CommandConsole, KeyEvent, ScriptedCLI, text_to_events


def keys(*parts):
    """Build a key list from strings (typed, no Enter) and KeyEvent values."""
    events: list[KeyEvent] = []
    for part in parts:
        if isinstance(part, str):
            events.extend(text_to_events(part, submit=False))
        else:
            events.append(part)
    return events


def noop(args):
    return None


def make_command(name, execute=noop, **kwargs) -> CommandDescriptor:
    kwargs.setdefault("description", f"{name} command")
    return CommandDescriptor(name=name, execute=execute, **kwargs)


@pytest.fixture
def scripted_console():
    """Factory: a server (or client) console over a ScriptedCLI fed with `events`."""

    def factory(*events, host=SERVER):
        return CommandConsole(ScriptedCLI(keys(*events)), host=host)

    return factory


@pytest.fixture(autouse=True)
def restore_loggers():
    """Boot reconfigures the package loggers; put them back for caplog."""
    names = ("adminconsole", "plugins")
    saved = {}
    for name in names:
        logger = logging.getLogger(name)
        saved[name] = (list(logger.handlers), logger.propagate, logger.level)
    yield
    for name, (handlers, propagate, level) in saved.items():
        logger = logging.getLogger(name)
        for handler in logger.handlers:
            if handler not in handlers:
                handler.close()
        logger.handlers[:] = handlers
        logger.propagate = propagate
        logger.setLevel(level)
