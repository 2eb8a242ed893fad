#!/usr/bin/env python3
# adminconsole/boot/config.py
from __future__ import annotations

"""
Configuration loader (stdlib-only).

Precedence (low → high):
  1) Built-in defaults
  2) Files in the working directory: config.ini, config.json, config.toml
  3) Environment variables prefixed CONSOLE_ (e.g. CONSOLE_LOG_LEVEL)

Validation:
  - HOST: one of the registered host profiles ('server', 'client')
  - PROMPT / COMMAND_PREFIX: None (host default) or str
  - LOG_LEVEL: one of {'DEBUG','INFO','WARNING','ERROR','CRITICAL'}
  - LOG_FILE_PATH: None or normalized path
  - SHOW_BANNER: bool
  - SORT_COMMANDS: None (host default) or bool
  - PLUGIN_PACKAGE: importable dotted name
"""

import configparser
import json
import os
import re
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping, Optional

from adminconsole.interface.hosts import HOSTS
from adminconsole.ui import LOG_LEVELS

ENV_PREFIX = "CONSOLE_"

# ---------- defaults ----------

DEFAULTS: dict[str, Any] = {
    "HOST": "server",
    "PROMPT": None,             # host default
    "COMMAND_PREFIX": None,     # host default
    "LOG_LEVEL": "INFO",
    "LOG_FILE_PATH": None,
    "SHOW_BANNER": True,
    "SORT_COMMANDS": None,      # host default
    "PLUGIN_PACKAGE": "plugins",
}


# ---------- data model ----------

@dataclass(frozen=True)
class ConsoleConfig:
    host: str
    prompt: str | None
    command_prefix: str | None
    log_level: str
    log_file_path: Path | None
    show_banner: bool
    sort_commands: bool | None
    plugin_package: str

    # Unrecognized keys preserved for debugging/forward-compat
    extra: dict[str, Any] = field(default_factory=dict)


# ---------- file loaders (stdlib) ----------

def _load_ini_file(path: Path) -> dict[str, str]:
    cfg = configparser.ConfigParser()
    if not cfg.read(path, encoding="utf-8"):
        return {}
    flat: dict[str, str] = {}
    for sec in cfg.sections():
        for k, v in cfg.items(sec):
            flat[k.upper()] = v
    return flat


def _load_json_file(path: Path) -> dict[str, Any]:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return {}
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid JSON in {path}: {exc}") from exc


def _load_toml_file(path: Path) -> dict[str, Any]:
    try:
        with path.open("rb") as f:
            return tomllib.load(f)
    except FileNotFoundError:
        return {}
    except tomllib.TOMLDecodeError as exc:
        raise ValueError(f"Invalid TOML in {path}: {exc}") from exc


def _flatten_mapping(obj: Any, prefix: str = "") -> dict[str, Any]:
    """
    Flatten nested dicts to UPPER_SNAKE keys.
    Example: {'console': {'prompt': '$ '}} -> {'CONSOLE_PROMPT': '$ '}
    """
    flat: dict[str, Any] = {}
    if isinstance(obj, Mapping):
        for k, v in obj.items():
            key = f"{prefix}_{k}" if prefix else str(k)
            if isinstance(v, Mapping):
                flat.update(_flatten_mapping(v, key))
            else:
                flat[str(key).upper()] = v
    return flat


def _strip_env_prefix(d: Mapping[str, Any]) -> dict[str, Any]:
    """Accept both 'LOG_LEVEL' and 'CONSOLE_LOG_LEVEL' spellings in files."""
    out: dict[str, Any] = {}
    for k, v in d.items():
        key = str(k).upper()
        out[key[len(ENV_PREFIX):] if key.startswith(ENV_PREFIX) else key] = v
    return out


def _find_config_files(base: Path) -> list[Path]:
    return [
        base / "config.ini",
        base / "config.json",
        base / "config.toml",
    ]


# ---------- normalization & coercion ----------

_BOOL_TRUE = {"1", "true", "yes", "y", "on"}
_BOOL_FALSE = {"0", "false", "no", "n", "off"}


def _as_bool(val: Any) -> bool:
    if isinstance(val, bool):
        return val
    s = str(val).strip().lower()
    if s in _BOOL_TRUE:
        return True
    if s in _BOOL_FALSE:
        return False
    raise ValueError(f"Expected boolean, got: {val!r}")


def _as_opt_bool(val: Any) -> bool | None:
    return None if _as_opt_str(val) is None else _as_bool(val)


def _as_opt_str(val: Any) -> str | None:
    return None if val is None or str(val).strip().lower() in {"", "none"} else str(val)


def _as_log_level(val: Any) -> str:
    lv = _as_opt_str(val)
    if lv is None:
        return DEFAULTS["LOG_LEVEL"]
    up = lv.strip().upper()
    if up not in LOG_LEVELS:
        raise ValueError(
            f"LOG_LEVEL must be one of {list(LOG_LEVELS)}, got {lv!r}")
    return up


def _as_host(val: Any) -> str:
    name = (_as_opt_str(val) or DEFAULTS["HOST"]).strip().lower()
    if name not in HOSTS:
        raise ValueError(f"HOST must be one of {sorted(HOSTS)}, got {val!r}")
    return name


def _as_opt_path(val: Any, base: Path) -> Path | None:
    v = _as_opt_str(val)
    if v is None:
        return None
    p = Path(os.path.expandvars(os.path.expanduser(v)))
    return p if p.is_absolute() else (base / p).resolve()


def _as_package(val: Any) -> str:
    name = _as_opt_str(val) or DEFAULTS["PLUGIN_PACKAGE"]
    if not re.fullmatch(r"[A-Za-z_][\w]*(\.[A-Za-z_][\w]*)*", name):
        raise ValueError(f"PLUGIN_PACKAGE must be a dotted module name, got {name!r}")
    return name


# ---------- merge & load ----------

def _merge_sources(base: Path, environ: Mapping[str, str]) -> dict[str, Any]:
    merged: dict[str, Any] = dict(DEFAULTS)

    for file in _find_config_files(base):
        if not file.exists():
            continue
        if file.suffix == ".ini":
            merged.update(_strip_env_prefix(_load_ini_file(file)))
        elif file.suffix == ".json":
            merged.update(_strip_env_prefix(_flatten_mapping(_load_json_file(file))))
        elif file.suffix == ".toml":
            merged.update(_strip_env_prefix(_flatten_mapping(_load_toml_file(file))))

    # Environment variables override all; only CONSOLE_* keys
    merged.update({
        k[len(ENV_PREFIX):]: v for k, v in environ.items() if k.startswith(ENV_PREFIX)
    })
    return merged


def _validate_and_build(config: Mapping[str, Any], base: Path) -> ConsoleConfig:
    recognized = set(DEFAULTS.keys())
    extra = {k: v for k, v in config.items() if k not in recognized}

    return ConsoleConfig(
        host=_as_host(config.get("HOST")),
        prompt=_as_opt_str(config.get("PROMPT")),
        command_prefix=_as_opt_str(config.get("COMMAND_PREFIX")),
        log_level=_as_log_level(config.get("LOG_LEVEL")),
        log_file_path=_as_opt_path(config.get("LOG_FILE_PATH"), base),
        show_banner=_as_bool(config.get("SHOW_BANNER", DEFAULTS["SHOW_BANNER"])),
        sort_commands=_as_opt_bool(config.get("SORT_COMMANDS")),
        plugin_package=_as_package(config.get("PLUGIN_PACKAGE")),
        extra=extra,
    )


def load_config(
    base: Optional[Path] = None,
    environ: Optional[Mapping[str, str]] = None,
    **overrides: Any,
) -> ConsoleConfig:
    """
    Load, merge and validate configuration.

    `overrides` (e.g. host='client') win over every other source.
    Raises ValueError on invalid values.
    """
    base = (base or Path.cwd()).resolve()
    merged = _merge_sources(base, os.environ if environ is None else environ)
    merged.update({k.upper(): v for k, v in overrides.items() if v is not None})
    return _validate_and_build(merged, base)
