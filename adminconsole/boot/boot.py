#!/usr/bin/env python3
# adminconsole/boot/boot.py
from __future__ import annotations
"""
Boot sequence for the admin console.

Each step prints a Linux-style status line ([  OK  ] / [FAILED]); a failing
step re-raises after reporting. SHOW_BANNER = false silences the OK lines.
"""

import importlib
import logging
import platform
from dataclasses import dataclass, field
from typing import Any, Callable, Mapping, Optional

from adminconsole.boot.config import ConsoleConfig, load_config
from adminconsole.interface import (
    BaseCLI,
    CommandConsole,
    HostContext,
    HostProfile,
    get_host,
    load_commands,
)
from adminconsole.ui import colorize, enable_windows_vt, init_logger, print_line

LOGGER_NAME = "adminconsole"


@dataclass(slots=True)
class BootState:
    console: CommandConsole
    host: HostProfile
    config: ConsoleConfig
    logger: logging.Logger
    loaded_count: int
    services: Mapping[str, Any] = field(default_factory=dict)


def _step(label: str, fn: Callable[[], Any], *, quiet: bool = False) -> Any:
    """Run a boot step with status output."""
    try:
        out = fn()
    except Exception as exc:
        print_line(
            colorize(f"[FAILED] {label} ({type(exc).__name__}: {exc})", "red")
        )
        raise
    if not quiet:
        print_line(colorize(f"[  OK  ] {label}", "green"))
    return out


def boot_console(
    host: Optional[str] = None,
    config: Optional[ConsoleConfig] = None,
    services: Optional[Mapping[str, Any]] = None,
    cli: Optional[BaseCLI] = None,
) -> BootState:
    """
    Build a ready-to-start console for `host` ('server' or 'client').

    `host` wins over the configured HOST. `services` are handed to the
    plugins through HostContext (see adminconsole.services for the names).
    """
    services = dict(services or {})

    # ---------- config ----------
    # Loaded first: SHOW_BANNER decides whether the OK lines are printed.
    if config is None:
        config = _step("Load configuration", lambda: load_config(host=host), quiet=True)
    quiet = not config.show_banner

    # ---------- console + env ----------
    _step("Enable ANSI sequences", enable_windows_vt, quiet=quiet)
    _step(
        f"Detect environment: {platform.system()} {platform.release()} / Python {platform.python_version()}",
        lambda: None,
        quiet=quiet,
    )

    # ---------- logging ----------
    log_file = str(config.log_file_path) if config.log_file_path else None

    def _init_loggers() -> logging.Logger:
        if config.log_file_path is not None:
            config.log_file_path.parent.mkdir(parents=True, exist_ok=True)
        # One rotating file per process: only the console logger writes it.
        init_logger(config.plugin_package, config.log_level)
        return init_logger(LOGGER_NAME, config.log_level, log_file)

    logger = _step("Initialize logger", _init_loggers, quiet=quiet)

    # ---------- host ----------
    profile = _step(
        f"Resolve host profile '{host or config.host}'",
        lambda: get_host(host or config.host).with_overrides(
            prompt=config.prompt,
            command_prefix=config.command_prefix,
            sort_listing=config.sort_commands,
        ),
        quiet=quiet,
    )

    # ---------- commands ----------
    console = CommandConsole(cli, host=profile)
    context = HostContext(console=console, services=services, config=config)

    pkg_name = config.plugin_package
    _step(f"Locate commands package '{pkg_name}'",
          lambda: importlib.import_module(pkg_name), quiet=quiet)
    loaded_count = _step(
        f"Load command groups: {', '.join(profile.plugin_groups)}",
        lambda: load_commands(context, profile.plugin_groups, pkg_name),
        quiet=quiet,
    )
    _step(f"Boot complete ({loaded_count} commands)", lambda: None, quiet=quiet)

    return BootState(
        console=console,
        host=profile,
        config=config,
        logger=logger,
        loaded_count=loaded_count,
        services=services,
    )
