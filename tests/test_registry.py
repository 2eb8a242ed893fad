from __future__ import annotations

import asyncio
import logging

import pytest

from adminconsole.commands import CommandDescriptor, CommandRegistry, CommandResult, command
from conftest import make_command


def test_register_and_lookup_is_case_insensitive():
    registry = CommandRegistry()
    registry.register(make_command("Users"))
    assert registry.lookup("USERS").name == "users"
    assert "users" in registry
    assert registry.lookup("missing") is None


def test_reregistration_overwrites_with_warning(caplog):
    registry = CommandRegistry()
    first = make_command("foo", description="first")
    second = make_command("foo", description="second")
    registry.register(first)
    with caplog.at_level(logging.WARNING, logger="adminconsole"):
        registry.register(second)

    assert registry.lookup("foo") is second
    assert registry.lookup("foo").description == "second"
    assert len(registry) == 1
    assert any("already registered" in r.getMessage() for r in caplog.records)


def test_listing_order():
    names = ["users", "broadcast", "kick"]
    plain = CommandRegistry()
    ordered = CommandRegistry(sort_listing=True)
    for name in names:
        plain.register(make_command(name))
        ordered.register(make_command(name))

    assert [d.name for d in plain.list()] == names
    assert [d.name for d in ordered.list()] == sorted(names)
    # the sorted view is live and restartable
    ordered.register(make_command("apply"))
    assert [d.name for d in ordered.list()][0] == "apply"
    assert [d.name for d in ordered.list()][0] == "apply"


@pytest.mark.parametrize("bad", ["", "   ", "two words"])
def test_invalid_names_are_rejected(bad):
    with pytest.raises(ValueError):
        CommandDescriptor(name=bad, description="", execute=lambda args: None)


def test_command_decorator_uses_docstring():
    @command()
    def show_status(args):
        """Shows the status."""
        return CommandResult(message="up")

    assert show_status.name == "show-status"
    assert show_status.description == "Shows the status."
    assert not show_status.has_suggest


def test_invoke_and_complete_accept_coroutines():
    async def body(args):
        return CommandResult(message=",".join(args))

    async def suggest(args):
        return ["a", "b"]

    descriptor = CommandDescriptor(name="echo", description="", execute=body, suggest=suggest)

    result = asyncio.run(descriptor.invoke(["x", "y"]))
    assert result.message == "x,y"
    assert asyncio.run(descriptor.complete([""])) == ["a", "b"]
