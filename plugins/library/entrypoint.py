# plugins/library/entrypoint.py
from __future__ import annotations

import asyncio
import logging
from datetime import datetime, timedelta
from typing import Callable

from adminconsole.commands import CommandDescriptor, CommandResult
from adminconsole.interface import HostContext
from adminconsole.services import LICENSE_CLIENT, LicenseClient
from adminconsole.ui import escape_markup, format_table

logger = logging.getLogger(__name__)

STATUS_TIMEOUT = 5.0
INFO_TIMEOUT = 5.0
RENEWAL_WARNING_DAYS = 7
LIST_TIMEOUT = 10.0
LIST_CATEGORIES = ("all", "newest", "popular")


def format_file_size(size: int) -> str:
    """1536 -> '1.5 KB'"""
    suffixes = ("B", "KB", "MB", "GB", "TB")
    value = float(size)
    index = 0
    while value >= 1024 and index < len(suffixes) - 1:
        value /= 1024
        index += 1
    return f"{value:.2f}".rstrip("0").rstrip(".") + f" {suffixes[index]}"


def format_timespan(span: timedelta) -> str:
    hours, rest = divmod(span.seconds, 3600)
    minutes, seconds = divmod(rest, 60)
    return f"{span.days}d {hours}h {minutes}m {seconds}s"


class LibraryCommands:
    """Client commands that query the license server."""

    def __init__(self, client: LicenseClient, clock: Callable[[], datetime] = datetime.now) -> None:
        self.client = client
        self.clock = clock

    # ---------- status ----------
    async def status(self, args: list[str]) -> CommandResult:
        logger.info("Requesting server status information")
        try:
            status = await asyncio.wait_for(self.client.get_server_status(), STATUS_TIMEOUT)
        except asyncio.TimeoutError:
            return CommandResult(ok=False, message="Timeout waiting for server response.")

        rows = [
            ["Server Version", status.version],
            ["Server Uptime", format_timespan(status.uptime)],
            ["Connected Users", status.connected_users],
            ["Total Users", status.total_users],
            ["Active Licenses", status.active_licenses],
            ["Expired Licenses", status.expired_licenses],
        ]
        connection = "[green]Connected[/]" if status.is_connected else "[red]Disconnected[/]"
        lines = [escape_markup(line) for line in format_table(rows, headers=["Property", "Value"])]
        lines.append(f"Connection: {connection}")
        return CommandResult(message="\n".join(lines), data=status)

    # ---------- info ----------
    async def info(self, args: list[str]) -> CommandResult:
        logger.info("Requesting license information from server")
        try:
            response = await asyncio.wait_for(self.client.get_license_info(), INFO_TIMEOUT)
        except asyncio.TimeoutError:
            return CommandResult(ok=False, message="Timeout waiting for server response.")

        lic, conn = response.license, response.connection
        state = "[green]Active[/]" if lic.is_active else "[red]Inactive[/]"
        lines = [
            "[cyan]License Information[/]",
            f"  Username:        {escape_markup(lic.username)}",
            f"  License Key:     {escape_markup(lic.license_key)}",
            f"  Expiration Date: {lic.expiration_date:%Y-%m-%d %H:%M}",
            f"  Status:          {state}",
            f"  First Login:     {lic.first_login:%Y-%m-%d %H:%M}",
            f"  Last Login:      {lic.last_login:%Y-%m-%d %H:%M}",
            f"  IP Address:      {escape_markup(lic.ip_address)}",
            f"  Client ID:       {escape_markup(lic.client_id)}",
            f"  Rate Limit:      {lic.rate_limit}",
            "[cyan]Connection Information[/]",
            f"  Server Address:  {escape_markup(conn.server_address)}",
            f"  Connected Since: {conn.connected_since:%Y-%m-%d %H:%M:%S}",
            f"  Ping:            {conn.ping_ms}ms",
        ]

        days_remaining = (lic.expiration_date - self.clock()).days
        if days_remaining <= RENEWAL_WARNING_DAYS:
            lines.append(
                f"[yellow]Your license will expire in {days_remaining} days. Please consider renewal.[/]")
        else:
            lines.append(f"Your license is valid for {days_remaining} more days.")
        return CommandResult(message="\n".join(lines), data=response)

    # ---------- list ----------
    async def list_games(self, args: list[str]) -> CommandResult:
        category = args[0].lower() if args else "all"
        logger.info("Requesting game list from server (category: %s)", category)
        try:
            games = await asyncio.wait_for(self.client.get_game_list(category), LIST_TIMEOUT)
        except asyncio.TimeoutError:
            return CommandResult(ok=False, message="Timeout waiting for server response.")

        if not games:
            return CommandResult(message="[cyan]No games available in this category.[/]", data=[])

        rows = [
            [game.id, game.title, format_file_size(game.size), game.version,
             game.upload_date.strftime("%Y-%m-%d %H:%M")]
            for game in games
        ]
        lines = [f"[green]Found {len(games)} games:[/]"]
        lines.extend(escape_markup(line) for line in format_table(
            rows, headers=["ID", "Title", "Size", "Version", "Upload Date"],
            align=(">", "<", ">")))
        return CommandResult(message="\n".join(lines), data=list(games))

    @staticmethod
    def suggest_list(args: list[str]) -> list[str]:
        return list(LIST_CATEGORIES) if len(args) <= 1 else []

    def descriptors(self) -> list[CommandDescriptor]:
        return [
            CommandDescriptor(
                name="status",
                description="Shows the current status of the server and your connection",
                execute=self.status,
                example="/status",
            ),
            CommandDescriptor(
                name="info",
                description="Shows information about your license and connection",
                execute=self.info,
                example="/info",
            ),
            CommandDescriptor(
                name="list",
                description="Lists all available games on the server",
                execute=self.list_games,
                usage="[category]",
                example="/list newest",
                suggest=self.suggest_list,
            ),
        ]


def build_commands(context: HostContext) -> list[CommandDescriptor]:
    client = context.service(LICENSE_CLIENT)
    if client is None:
        logger.info("No license client attached; library commands are disabled.")
        return []
    return LibraryCommands(client).descriptors()
