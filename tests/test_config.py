from __future__ import annotations

import pytest

from adminconsole.boot import load_config


def test_defaults(tmp_path):
    config = load_config(tmp_path, environ={})
    assert config.host == "server"
    assert config.prompt is None
    assert config.log_level == "INFO"
    assert config.show_banner is True
    assert config.sort_commands is None
    assert config.plugin_package == "plugins"
    assert config.extra == {}


def test_toml_sections_are_flattened(tmp_path):
    (tmp_path / "config.toml").write_text(
        'log_level = "debug"\n'
        'theme = "dark"\n'
        "[console]\n"
        'prompt = "$ "\n'
        "sort_commands = false\n",
        encoding="utf-8",
    )
    config = load_config(tmp_path, environ={})
    assert config.log_level == "DEBUG"
    assert config.prompt == "$ "
    assert config.sort_commands is False
    assert config.extra == {"THEME": "dark"}


def test_ini_and_env_precedence(tmp_path):
    (tmp_path / "config.ini").write_text(
        "[console]\nhost = client\nlog_level = warning\n", encoding="utf-8")
    config = load_config(tmp_path, environ={"CONSOLE_LOG_LEVEL": "error", "OTHER": "x"})
    assert config.host == "client"
    assert config.log_level == "ERROR"
    assert "OTHER" not in config.extra


def test_overrides_win(tmp_path):
    config = load_config(tmp_path, environ={"CONSOLE_HOST": "client"}, host="server")
    assert config.host == "server"


def test_relative_log_file_resolves_against_base(tmp_path):
    config = load_config(tmp_path, environ={"CONSOLE_LOG_FILE_PATH": "logs/console.log"})
    assert config.log_file_path == (tmp_path / "logs" / "console.log").resolve()


@pytest.mark.parametrize(
    "key, value",
    [
        ("CONSOLE_LOG_LEVEL", "loud"),
        ("CONSOLE_SHOW_BANNER", "maybe"),
        ("CONSOLE_HOST", "toaster"),
        ("CONSOLE_PLUGIN_PACKAGE", "not a package"),
    ],
)
def test_invalid_values_raise(tmp_path, key, value):
    with pytest.raises(ValueError):
        load_config(tmp_path, environ={key: value})


def test_invalid_json_raises(tmp_path):
    (tmp_path / "config.json").write_text("{not json", encoding="utf-8")
    with pytest.raises(ValueError):
        load_config(tmp_path, environ={})
