from __future__ import annotations

import pytest

from adminconsole.interface import build_usage, split_command, strip_prefix, tokenize
from conftest import make_command


@pytest.mark.parametrize(
    "line, expected",
    [
        ('foo "bar baz" qux', ["foo", "bar baz", "qux"]),
        ("  kick   bob  ", ["kick", "bob"]),
        ("", []),
        ("   ", []),
        ('say "unterminated text', ["say", "unterminated text"]),
        ('broadcast ""', ["broadcast", ""]),
        ('say ab"cd ef"', ["say", 'ab"cd', "ef"]),
        ("list\tnewest", ["list", "newest"]),
    ],
)
def test_tokenize(line, expected):
    assert tokenize(line) == expected


def test_split_command_lowercases_name_only():
    assert split_command("KICK Bob Spam") == ("kick", ["Bob", "Spam"])


def test_split_command_empty_line():
    assert split_command("   ") == (None, [])


def test_split_command_strips_host_prefix():
    assert split_command("/List newest", "/") == ("list", ["newest"])
    # Without the prefix the name is taken as typed
    assert split_command("list newest", "/") == ("list", ["newest"])


def test_strip_prefix():
    assert strip_prefix("/status", "/") == "status"
    assert strip_prefix("status", "") == "status"


def test_build_usage():
    descriptor = make_command("kick", usage="<username> [reason]")
    assert build_usage(descriptor) == "kick <username> [reason]"
    assert build_usage(make_command("status"), "/") == "/status"
