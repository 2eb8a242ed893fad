#!/usr/bin/env python3
# adminconsole/boot/__init__.py
from __future__ import annotations
"""
Boot sequence package.

Exports:
- boot_console: Startup pipeline with Linux-style [  OK  ] / [FAILED] lines.
- BootState: Dataclass holding the console, host profile, config and command count.
- ConsoleConfig / load_config: Layered configuration (defaults, files, CONSOLE_* env).
"""


from .config import ConsoleConfig, load_config
from .boot import BootState, boot_console

__all__ = ["boot_console", "BootState", "ConsoleConfig", "load_config"]
