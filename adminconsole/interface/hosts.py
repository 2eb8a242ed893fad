#!/usr/bin/env python3
# adminconsole/interface/hosts.py
from __future__ import annotations

"""
Host profiles.

The server and client processes run the same console engine; a profile holds
everything that differs between them: prompt, optional command prefix,
wording of the built-in commands, listing order and the plugin command
groups to load.
"""

import dataclasses
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True, slots=True)
class HostProfile:
    name: str
    prompt: str
    exit_description: str
    shutdown_message: str
    command_prefix: str = ""
    help_description: str = "Shows help for a command"
    sort_listing: bool = True
    plugin_groups: tuple[str, ...] = ("system",)

    def with_overrides(
        self,
        *,
        prompt: Optional[str] = None,
        command_prefix: Optional[str] = None,
        sort_listing: Optional[bool] = None,
    ) -> "HostProfile":
        """Return a copy with any non-None setting replaced (config overrides)."""
        changes = {
            key: value
            for key, value in (
                ("prompt", prompt),
                ("command_prefix", command_prefix),
                ("sort_listing", sort_listing),
            )
            if value is not None
        }
        return dataclasses.replace(self, **changes) if changes else self


SERVER = HostProfile(
    name="server",
    prompt="> ",
    exit_description="Shuts down the server",
    shutdown_message="Server is shutting down...",
    sort_listing=True,
    plugin_groups=("system", "licensing"),
)

CLIENT = HostProfile(
    name="client",
    prompt="[green]>[/] ",
    exit_description="Exits the application",
    shutdown_message="Application is shutting down...",
    command_prefix="/",
    sort_listing=False,
    plugin_groups=("system", "library"),
)

HOSTS: dict[str, HostProfile] = {profile.name: profile for profile in (SERVER, CLIENT)}


def get_host(name: str) -> HostProfile:
    """Return the profile registered under `name` (case-insensitive)."""
    try:
        return HOSTS[name.strip().lower()]
    except KeyError:
        raise ValueError(
            f"Unknown host {name!r}; expected one of {sorted(HOSTS)}") from None
