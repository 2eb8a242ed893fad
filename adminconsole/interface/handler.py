#!/usr/bin/env python3
# adminconsole/interface/handler.py
from __future__ import annotations

"""
Command dispatch loop and help formatting.

One CommandConsole owns a registry, a line editor and its history. The loop
reads a line, records it in history, tokenizes it and runs either a built-in
(help, exit) or a registered command. A failing command is logged and
reported; it never ends the loop.
"""

import asyncio
import difflib
import logging
from typing import Any, Iterable, Optional

from adminconsole.commands import CommandDescriptor, CommandRegistry, CommandResult
from adminconsole.interface.cli import BaseCLI, make_cli
from adminconsole.interface.completion import BUILT_IN_COMMANDS, TabCompleter
from adminconsole.interface.editor import EditInterrupted, History, LineEditor
from adminconsole.interface.hosts import SERVER, HostProfile
from adminconsole.interface.parser import build_usage, split_command, strip_prefix
from adminconsole.ui import escape_markup, format_table

logger = logging.getLogger(__name__)


class CommandConsole:
    """Interactive operator console for one host process."""

    def __init__(
        self,
        cli: Optional[BaseCLI] = None,
        *,
        host: HostProfile = SERVER,
        registry: Optional[CommandRegistry] = None,
    ) -> None:
        self.host = host
        self.registry = registry if registry is not None else CommandRegistry(
            sort_listing=host.sort_listing)
        self.cli = cli if cli is not None else make_cli()
        self.completer = TabCompleter(
            self.registry, builtins=BUILT_IN_COMMANDS, prefix=host.command_prefix)
        self.editor = LineEditor(self.cli, self.completer)
        self._running = False
        self._loop: Optional[asyncio.AbstractEventLoop] = None
        self._read_task: Optional[asyncio.Future[str]] = None

    # ---------------- Registration ----------------

    def register(self, descriptor: CommandDescriptor) -> None:
        if descriptor.name in BUILT_IN_COMMANDS:
            logger.warning(
                "Command '%s' is shadowed by the built-in of the same name.", descriptor.name)
        self.registry.register(descriptor)

    def register_many(self, descriptors: Iterable[CommandDescriptor]) -> None:
        for descriptor in descriptors:
            self.register(descriptor)

    @property
    def history(self) -> History:
        return self.editor.history

    @property
    def is_running(self) -> bool:
        return self._running

    # ---------------- Help ----------------

    def _display_name(self, name: str) -> str:
        return f"{self.host.command_prefix}{name}"

    def command_summary(self) -> list[str]:
        """Render the command overview: registered commands, then built-ins."""
        rows = [
            [self._display_name(d.name), d.description,
             build_usage(d, self.host.command_prefix)]
            for d in self.registry.list()
            if d.name not in BUILT_IN_COMMANDS
        ]
        rows.append([self._display_name("help"), self.host.help_description,
                     self._display_name("help [command]")])
        rows.append([self._display_name("exit"), self.host.exit_description,
                     self._display_name("exit")])
        lines = ["[green]Available commands:[/]"]
        lines.extend(escape_markup(line) for line in format_table(
            rows, headers=["Command", "Description", "Usage"]))
        lines.append(f"Type '{self._display_name('help')} <command>' for more information on a specific command.")
        return lines

    def format_command_help(self, name: str) -> Optional[list[str]]:
        """Render help for one registered command, or None if unknown."""
        descriptor = self.registry.lookup(name)
        if descriptor is None:
            return None
        return [
            f"[green]Help for '{self._display_name(descriptor.name)}':[/]",
            f"  Description: {escape_markup(descriptor.description or '(none)')}",
            f"  Usage:       {escape_markup(build_usage(descriptor, self.host.command_prefix))}",
            f"  Example:     {escape_markup(descriptor.example or '(none)')}",
        ]

    def _suggest_similar_names(self, name: str) -> str:
        """Return a short suggestion string for misspelled commands."""
        universe = self.registry.names() + list(BUILT_IN_COMMANDS)
        matches = difflib.get_close_matches(name, universe, n=3, cutoff=0.6)
        if not matches:
            return ""
        return f" Did you mean: {', '.join(self._display_name(m) for m in matches)}?"

    # ---------------- Dispatch ----------------

    async def handle_line(self, input_line: str) -> None:
        """Tokenize one submitted line and run the built-in or command it names."""
        command_name, args = split_command(input_line, self.host.command_prefix)
        if command_name is None:
            return

        if command_name == "exit":
            logger.info(self.host.shutdown_message)
            self._running = False
            return

        if command_name == "help":
            self._show_help(args)
            return

        descriptor = self.registry.lookup(command_name)
        if descriptor is None:
            self.cli.write_line(
                f"[red]Unknown command '{escape_markup(self._display_name(command_name))}'."
                f"{escape_markup(self._suggest_similar_names(command_name))}"
                f" Type '{self._display_name('help')}' to see all available commands.[/]")
            return

        await self._execute(descriptor, args)

    def _show_help(self, args: list[str]) -> None:
        if not args:
            self.cli.write_lines(self.command_summary())
            return
        target = strip_prefix(args[0], self.host.command_prefix).lower()
        lines = self.format_command_help(target)
        if lines is None:
            self.cli.write_line(
                f"[red]Unknown command '{escape_markup(self._display_name(target))}'.[/]")
            return
        self.cli.write_lines(lines)

    async def _execute(self, descriptor: CommandDescriptor, args: list[str]) -> None:
        try:
            result = await descriptor.invoke(args)
        except Exception as exc:
            logger.error("Error executing command '%s': %s", descriptor.name, exc)
            logger.debug("Traceback for command '%s'", descriptor.name, exc_info=True)
            self.cli.write_line(
                f"[red]Error: {escape_markup(f'{type(exc).__name__}: {exc}')}[/]")
            return
        self._write_result(result)

    def _write_result(self, result: Any) -> None:
        # Normalize output
        if result is None:
            return
        if isinstance(result, CommandResult):
            if not result.message:
                return
            self.cli.write_line(
                result.message if result.ok else f"[red]Error: {result.message}[/]")
            return
        self.cli.write_line(str(result))

    async def run_lines(self, lines: Iterable[str]) -> None:
        """Dispatch lines without the editor, recording them in history."""
        self._running = True
        for line in lines:
            if not self._running:
                break
            await self._submit(line)
        self._running = False

    async def _submit(self, line: str) -> None:
        if not line.strip():
            return
        self.history.append(line)
        await self.handle_line(line)

    # ---------------- Loop ----------------

    async def start(self) -> None:
        """
        Run the console until 'exit', stop() or end of input.

        No-op if already running. Never raises on command or input failures.
        """
        if self._running:
            return
        self._running = True
        self._loop = asyncio.get_running_loop()
        logger.info(
            "Console started. Press 'Tab' for autocompletion, arrow keys for command history.")

        try:
            with self.cli:
                self.cli.write_lines(self.command_summary())
                self.cli.write_line()
                while self._running:
                    line = await self._read_line()
                    if line is None:
                        break
                    await self._submit(line)
        except Exception:
            logger.exception("Console loop failed")
        finally:
            self._running = False
            self._read_task = None
            logger.info("Console stopped.")

    async def _read_line(self) -> Optional[str]:
        self._read_task = asyncio.ensure_future(
            self.editor.read_line(self.host.prompt))
        if not self._running:
            # stop() ran before the task existed and had nothing to cancel
            self._read_task.cancel()
        try:
            return await self._read_task
        except asyncio.CancelledError:
            if self._running:
                raise
            return None
        except EOFError:
            logger.info("Console input closed.")
            self._running = False
            return None
        except EditInterrupted:
            logger.info(self.host.shutdown_message)
            self._running = False
            return None
        finally:
            self._read_task = None

    def stop(self) -> None:
        """
        Stop the loop from outside (signal handler or another thread).

        A pending key read is cancelled so the loop exits without another key.
        """
        self._running = False
        task, loop = self._read_task, self._loop
        if task is None or loop is None or task.done():
            return
        try:
            in_loop = asyncio.get_running_loop() is loop
        except RuntimeError:
            in_loop = False
        if in_loop:
            task.cancel()
        else:
            loop.call_soon_threadsafe(task.cancel)
