#!/usr/bin/env python3
# adminconsole/services.py
from __future__ import annotations

"""
Interfaces of the licensing services the host commands talk to.

The implementations (network server, client connection, storage) live
outside this package and are injected at boot under the names below.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Protocol, Sequence

LICENSE_SERVER = "license_server"
LICENSE_CLIENT = "license_client"


@dataclass(frozen=True, slots=True)
class UserRecord:
    username: str
    client_id: str
    license_key: str
    license_expiration: datetime
    ip: str = ""
    is_online: bool = False


@dataclass(frozen=True, slots=True)
class GameEntry:
    id: int
    title: str
    size: int
    version: str
    upload_date: datetime


@dataclass(frozen=True, slots=True)
class ServerStatus:
    version: str
    uptime: timedelta
    connected_users: int
    total_users: int
    active_licenses: int
    expired_licenses: int
    is_connected: bool = True


@dataclass(frozen=True, slots=True)
class LicenseInfo:
    username: str
    license_key: str
    expiration_date: datetime
    is_active: bool
    first_login: datetime
    last_login: datetime
    ip_address: str
    client_id: str
    rate_limit: int


@dataclass(frozen=True, slots=True)
class ConnectionInfo:
    server_address: str
    connected_since: datetime
    ping_ms: int


@dataclass(frozen=True, slots=True)
class LicenseInfoResponse:
    license: LicenseInfo
    connection: ConnectionInfo


class LicenseServer(Protocol):
    """Server-side session and license operations."""

    def get_all_users(self) -> Sequence[UserRecord]:
        ...

    def get_online_users(self) -> Sequence[UserRecord]:
        ...

    def disconnect_client(self, client_id: str, reason: str) -> None:
        ...

    def broadcast_message(self, message: str) -> None:
        ...

    def extend_license(self, license_key: str, days: int) -> bool:
        ...


class LicenseClient(Protocol):
    """Client-side requests to the license server; all may suspend."""

    async def get_server_status(self) -> ServerStatus:
        ...

    async def get_game_list(self, category: str = "all") -> Sequence[GameEntry]:
        ...

    async def get_license_info(self) -> LicenseInfoResponse:
        ...
