"""A byte stream over either a TCP socket or a proxy command's pipes."""

from __future__ import annotations

import asyncio
from typing import Sequence


class Stream:
    """Bidirectional async stream: a TCP connection or a child process.

    For a child process, reads come from its stdout and writes go to its stdin.
    """

    def __init__(
        self,
        reader: asyncio.StreamReader | None = None,
        writer: asyncio.StreamWriter | None = None,
        process: asyncio.subprocess.Process | None = None,
    ) -> None:
        self.reader = reader
        self.writer = writer
        self.process = process

    @classmethod
    async def tcp_connect(cls, addr: tuple) -> "Stream":
        """Open a direct TCP connection to ``(host, port)``."""
        reader, writer = await asyncio.open_connection(addr[0], addr[1])
        return cls(reader, writer)

    @classmethod
    async def proxy_command(cls, cmd: str, args: Sequence[str] = ()) -> "Stream":
        """Start ``cmd`` with ``args`` and talk to it through its stdin and stdout."""
        process = await asyncio.create_subprocess_exec(
            cmd,
            *args,
            stdin=asyncio.subprocess.PIPE,
            stdout=asyncio.subprocess.PIPE,
        )
        return cls(process.stdout, process.stdin, process)

    async def read(self, n: int = -1) -> bytes:
        """Read up to ``n`` bytes (all until EOF if ``n`` is -1)."""
        if self.reader is None:
            return b""
        return await self.reader.read(n)

    async def write(self, data: bytes) -> int:
        """Queue ``data`` for sending; return the number of bytes accepted."""
        if self.writer is None:
            return 0
        self.writer.write(data)
        return len(data)

    async def flush(self) -> None:
        """Wait until queued data has been handed to the transport."""
        if self.writer is not None:
            await self.writer.drain()

    async def shutdown(self) -> None:
        """Close the sending side of the stream."""
        if self.writer is None:
            return
        if self.process is not None:
            writer, self.writer = self.writer, None
            await writer.drain()
            writer.close()
            try:
                await writer.wait_closed()
            except (BrokenPipeError, ConnectionResetError):
                pass
        elif self.writer.can_write_eof():
            await self.writer.drain()
            self.writer.write_eof()

    async def __aenter__(self) -> "Stream":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.shutdown()
        if self.process is not None:
            await self.process.wait()
        elif self.writer is not None:
            writer, self.writer = self.writer, None
            writer.close()
            try:
                await writer.wait_closed()
            except (ConnectionError, OSError):
                pass