"""Lookup of host entries in an OpenSSH-style client configuration file."""

from __future__ import annotations

import asyncio
import getpass
import logging
import re
import socket
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from .proxy import Stream

logger = logging.getLogger(__name__)

_PORT_RE = re.compile(r"\+?[0-9]+")


class ConfigError(Exception):
    """Base class for configuration errors."""


class HostNotFound(ConfigError):
    """No ``Host`` entry matches the requested host."""

    def __init__(self, message: str = "Host not found") -> None:
        super().__init__(message)


class NoHome(ConfigError):
    """The user's home directory could not be determined."""

    def __init__(self, message: str = "No home directory") -> None:
        super().__init__(message)


class NotResolvable(ConfigError):
    """The host name resolved to no address."""

    def __init__(self, message: str = "Cannot resolve the address") -> None:
        super().__init__(message)


class AddKeysToAgent(Enum):
    """Value of the ``AddKeysToAgent`` option."""

    YES = "yes"
    CONFIRM = "confirm"
    ASK = "ask"
    NO = "no"


def _home_dir() -> Path | None:
    try:
        return Path.home()
    except (RuntimeError, KeyError, OSError):
        return None


def _parse_port(text: str) -> int | None:
    if not _PORT_RE.fullmatch(text):
        return None
    port = int(text)
    return port if port <= 0xFFFF else None


@dataclass
class Config:
    """Connection settings for one host."""

    user: str
    host_name: str
    port: int = 22
    identity_file: str | None = None
    proxy_command: str | None = None
    add_keys_to_agent: AddKeysToAgent = field(default=AddKeysToAgent.NO)

    @classmethod
    def default(cls, host_name: str) -> "Config":
        """Settings for ``host_name`` as the current user on port 22."""
        return cls(user=getpass.getuser(), host_name=host_name)

    def _update_proxy_command(self) -> None:
        if self.proxy_command is not None:
            self.proxy_command = self.proxy_command.replace("%h", self.host_name)
            self.proxy_command = self.proxy_command.replace("%p", str(self.port))

    async def stream(self) -> Stream:
        """Open a stream to the host, through the proxy command if one is set."""
        self._update_proxy_command()
        if self.proxy_command is not None:
            cmd = self.proxy_command.split(" ")
            return await Stream.proxy_command(cmd[0], cmd[1:])
        loop = asyncio.get_running_loop()
        infos = await loop.getaddrinfo(
            self.host_name, self.port, type=socket.SOCK_STREAM
        )
        if not infos:
            raise NotResolvable()
        sockaddr = infos[0][4]
        return await Stream.tcp_connect((sockaddr[0], sockaddr[1]))


def parse_home(host: str) -> Config:
    """Look ``host`` up in ``~/.ssh/config``."""
    home = _home_dir()
    if home is None:
        raise NoHome()
    return parse_path(home / ".ssh" / "config", host)


def parse_path(path: str | Path, host: str) -> Config:
    """Look ``host`` up in the configuration file at ``path``."""
    with open(path, encoding="utf-8") as f:
        text = f.read()
    return parse(text, host)


def parse(file: str, host: str) -> Config:
    """Look ``host`` up in configuration text; raise HostNotFound if absent."""
    config: Config | None = None
    for raw in file.splitlines():
        line = raw.strip()
        n = line.find(" ")
        if n < 0:
            continue
        key, value = line[:n], line[n:]
        lower = key.lower()
        if config is None:
            if lower == "host" and value.lstrip() == host:
                config = Config.default(host)
                config.port = 22
            continue
        if lower == "host":
            break
        if lower == "user":
            config.user = value.lstrip()
        elif lower == "hostname":
            config.host_name = value.lstrip()
        elif lower == "port":
            port = _parse_port(value.lstrip())
            if port is not None:
                config.port = port
        elif lower == "identityfile":
            ident = value.lstrip()
            if ident.startswith("~/"):
                home = _home_dir()
                if home is None:
                    raise NoHome()
                config.identity_file = str(home / ident[2:])
            else:
                config.identity_file = ident
        elif lower == "proxycommand":
            config.proxy_command = value.lstrip()
        elif lower == "addkeystoagent":
            mapping = {
                "yes": AddKeysToAgent.YES,
                "confirm": AddKeysToAgent.CONFIRM,
                "ask": AddKeysToAgent.ASK,
            }
            config.add_keys_to_agent = mapping.get(value.lower(), AddKeysToAgent.NO)
        else:
            logger.debug("%r", lower)
    if config is None:
        raise HostNotFound()
    return config