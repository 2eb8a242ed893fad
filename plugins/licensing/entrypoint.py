# plugins/licensing/entrypoint.py
from __future__ import annotations

import logging
from typing import Optional

from adminconsole.commands import CommandDescriptor, CommandResult
from adminconsole.interface import HostContext
from adminconsole.services import LICENSE_SERVER, LicenseServer, UserRecord
from adminconsole.ui import escape_markup, format_table

logger = logging.getLogger(__name__)

DEFAULT_KICK_REASON = "Disconnected by administrator"


def _format_expiration(user: UserRecord) -> str:
    return user.license_expiration.strftime("%d.%m.%Y %H:%M")


class LicensingCommands:
    """Server administration commands over a LicenseServer."""

    def __init__(self, server: LicenseServer) -> None:
        self.server = server

    def _find_user(self, username: str) -> Optional[UserRecord]:
        wanted = username.lower()
        for user in self.server.get_all_users():
            if user.username.lower() == wanted:
                return user
        return None

    # ---------- users ----------
    def users(self, args: list[str]) -> CommandResult:
        online_only = bool(args) and args[0].lower() == "online"
        users = self.server.get_online_users() if online_only else self.server.get_all_users()
        if not users:
            return CommandResult(message="No users online." if online_only else "No users registered.")

        rows = [
            [user.username,
             "Online" if user.is_online else "Offline",
             user.license_key,
             _format_expiration(user),
             user.ip or "-"]
            for user in users
        ]
        table = format_table(rows, headers=["Username", "Status", "License", "Valid until", "IP address"])
        heading = f"[cyan]{len(users)} user(s) {'online' if online_only else 'registered'}:[/]"
        return CommandResult(
            message="\n".join([heading, *(escape_markup(line) for line in table)]),
            data=list(users),
        )

    @staticmethod
    def suggest_users(args: list[str]) -> list[str]:
        return ["online"] if len(args) <= 1 else []

    # ---------- kick ----------
    def kick(self, args: list[str]) -> CommandResult:
        if not args:
            return CommandResult(ok=False, message="A username is required. Usage: kick <username> [reason]")

        username = args[0]
        reason = " ".join(args[1:]) if len(args) > 1 else DEFAULT_KICK_REASON
        user = self._find_user(username)
        if user is None:
            return CommandResult(ok=False, message=f"User '{escape_markup(username)}' not found.")
        if not user.is_online:
            return CommandResult(ok=False, message=f"User '{escape_markup(username)}' is not online.")

        self.server.disconnect_client(user.client_id, reason)
        logger.info("Kicked user '%s' (%s).", user.username, reason)
        return CommandResult(
            message=f"[green]User '{escape_markup(user.username)}' was disconnected. "
                    f"Reason: {escape_markup(reason)}[/]")

    def suggest_kick(self, args: list[str]) -> list[str]:
        if len(args) > 1:
            return []
        return sorted(user.username for user in self.server.get_online_users())

    # ---------- broadcast ----------
    def broadcast(self, args: list[str]) -> CommandResult:
        if not args:
            return CommandResult(ok=False, message="A message is required. Usage: broadcast <message>")
        message = " ".join(args)
        self.server.broadcast_message(message)
        logger.info("Broadcast sent: %s", message)
        return CommandResult(message=f'[green]Message sent to all clients: "{escape_markup(message)}"[/]')

    # ---------- extend ----------
    def extend(self, args: list[str]) -> CommandResult:
        if len(args) < 2:
            return CommandResult(
                ok=False, message="A license key and a number of days are required. Usage: extend <license> <days>")

        license_key = args[0]
        try:
            days = int(args[1])
        except ValueError:
            days = 0
        if days <= 0:
            return CommandResult(ok=False, message="The number of days must be a positive number.")

        if not self.server.extend_license(license_key, days):
            return CommandResult(ok=False, message=f"License '{escape_markup(license_key)}' could not be extended.")

        owner = next((u for u in self.server.get_all_users() if u.license_key == license_key), None)
        if owner is None:
            return CommandResult(message=f"[green]License '{escape_markup(license_key)}' was extended by {days} days.[/]")
        return CommandResult(
            message=f"[green]The license of user '{escape_markup(owner.username)}' was extended by {days} days.[/]\n"
                    f"[cyan]New expiration date: {_format_expiration(owner)}[/]")

    def suggest_extend(self, args: list[str]) -> list[str]:
        if len(args) > 1:
            return []
        return sorted({user.license_key for user in self.server.get_all_users()})

    def descriptors(self) -> list[CommandDescriptor]:
        return [
            CommandDescriptor(
                name="users",
                description="Shows all users",
                execute=self.users,
                usage="[online]",
                example="users online",
                suggest=self.suggest_users,
            ),
            CommandDescriptor(
                name="kick",
                description="Disconnects a user from the server",
                execute=self.kick,
                usage="<username> [reason]",
                example='kick JaneDoe "Unauthorized activity"',
                suggest=self.suggest_kick,
            ),
            CommandDescriptor(
                name="broadcast",
                description="Sends a message to all connected clients",
                execute=self.broadcast,
                usage="<message>",
                example='broadcast "Server update in 10 minutes, please save!"',
            ),
            CommandDescriptor(
                name="extend",
                description="Extends a license",
                execute=self.extend,
                usage="<license> <days>",
                example="extend LICS-ABCD-1234-5678 30",
                suggest=self.suggest_extend,
            ),
        ]


def build_commands(context: HostContext) -> list[CommandDescriptor]:
    server = context.service(LICENSE_SERVER)
    if server is None:
        logger.info("No license server attached; licensing commands are disabled.")
        return []
    return LicensingCommands(server).descriptors()
