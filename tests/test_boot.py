from __future__ import annotations

import pytest

from adminconsole.boot import boot_console, load_config
from adminconsole.interface import ScriptedCLI
from adminconsole.services import LICENSE_SERVER
from test_plugins import FakeServer


def test_boot_server_loads_groups(tmp_path, capsys):
    config = load_config(tmp_path, environ={"CONSOLE_PROMPT": "admin> "})
    state = boot_console("server", config=config, services={LICENSE_SERVER: FakeServer()},
                        cli=ScriptedCLI())

    assert state.loaded_count == 6
    assert state.host.prompt == "admin> "
    assert state.console.host is state.host
    out = capsys.readouterr().out
    assert "[  OK  ] Load command groups: system, licensing" in out


def test_boot_client_applies_prefix_override(tmp_path, capsys):
    config = load_config(tmp_path, environ={"CONSOLE_COMMAND_PREFIX": "!", "CONSOLE_SHOW_BANNER": "no"})
    state = boot_console("client", config=config, cli=ScriptedCLI())

    assert state.host.name == "client"
    assert state.host.command_prefix == "!"
    # no service: only the system group contributes
    assert state.loaded_count == 2
    assert "[  OK  ]" not in capsys.readouterr().out


def test_boot_reports_failed_step(tmp_path, capsys):
    config = load_config(tmp_path, environ={"CONSOLE_PLUGIN_PACKAGE": "no_such_plugins"})
    with pytest.raises(ModuleNotFoundError):
        boot_console("server", config=config, cli=ScriptedCLI())
    assert "[FAILED] Locate commands package 'no_such_plugins'" in capsys.readouterr().out
