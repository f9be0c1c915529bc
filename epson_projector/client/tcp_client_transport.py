# Copyright (c) 2023 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

"""
Epson Projector TCP/IP client transport.

Provides an implementation of EpsonProjectorClientTransport over a TCP/IP
socket.
"""

from __future__ import annotations

import asyncio

from ..internal_types import *
from ..exceptions import EpsonProjectorTransportError
from ..constants import ACK, DEFAULT_TIMEOUT, DEFAULT_PORT
from ..pkg_logging import logger
from ..protocol import ESC_VP_NET_MAGIC, HANDSHAKE_RESPONSE_LENGTH

from .client_transport import EpsonProjectorClientTransport

_IO_ERRORS = (
    OSError,
    asyncio.TimeoutError,
    asyncio.IncompleteReadError,
    asyncio.LimitOverrunError,
  )

class TcpEpsonProjectorClientTransport(EpsonProjectorClientTransport):
    """Epson Projector TCP/IP client transport.

    The connection is opened lazily by send(), and reopened by the next send()
    after a disconnect or failure.
    """

    reader: Optional[asyncio.StreamReader] = None
    writer: Optional[asyncio.StreamWriter] = None
    host: str
    port: int
    timeout_secs: float

    _transaction_lock: asyncio.Lock
    """A mutex to ensure that only one command/response exchange is in progress at a time;
    this allows multiple callers to use the same transport without worrying
    about mixing up responses."""

    def __init__(
            self,
            host: str,
            port: int=DEFAULT_PORT,
            timeout_secs: float=DEFAULT_TIMEOUT,
          ) -> None:
        super().__init__()
        self.host = host
        self.port = port
        self.timeout_secs = timeout_secs
        self._transaction_lock = asyncio.Lock()

    @property
    def is_connected(self) -> bool:
        return self.writer is not None and not self.writer.is_closing()

    async def _connect(self) -> None:
        """Opens the TCP connection, with timeout (nonlocking)."""
        await self._close_streams()
        logger.debug(f"Connecting to projector at {self.host}:{self.port}")
        try:
            self.reader, self.writer = await asyncio.wait_for(
                asyncio.open_connection(self.host, self.port), self.timeout_secs)
        except _IO_ERRORS as e:
            raise EpsonProjectorTransportError(f"{self}: Unable to connect: {e!r}") from e
        logger.info(f"{self}: connected")

    async def _read_response(self, command: bytes) -> bytes:
        """Reads the complete response to a command, with timeout (nonlocking).

        The handshake reply is a fixed-length packet. Every other response ends
        with the ':' prompt.
        """
        assert self.reader is not None
        if command.startswith(ESC_VP_NET_MAGIC):
            return await asyncio.wait_for(
                self.reader.readexactly(HANDSHAKE_RESPONSE_LENGTH), self.timeout_secs)
        return await asyncio.wait_for(self.reader.readuntil(ACK), self.timeout_secs)

    async def send(self, data: bytes) -> bytes:
        """Sends a command and reads its response, with timeout.

        On error, the connection is closed and EpsonProjectorTransportError is raised.
        """
        async with self._transaction_lock:
            if not self.is_connected:
                await self._connect()
            assert self.writer is not None
            try:
                logger.debug(f"Writing {len(data)} bytes: {data!r}")
                self.writer.write(data)
                await asyncio.wait_for(self.writer.drain(), self.timeout_secs)
                response = await self._read_response(data)
                logger.debug(f"Read {len(response)} bytes: {response!r}")
            except _IO_ERRORS as e:
                await self._close_streams()
                raise EpsonProjectorTransportError(f"{self}: Exchange failed for {data!r}: {e!r}") from e
        return response

    async def _close_streams(self) -> None:
        writer = self.writer
        self.reader = None
        self.writer = None
        if writer is not None:
            try:
                writer.close()
                await writer.wait_closed()
            except Exception:
                logger.debug("Exception while closing writer", exc_info=True)

    async def disconnect(self) -> None:
        if self.writer is not None:
            logger.debug(f"{self}: disconnecting")
        await self._close_streams()

    def __str__(self) -> str:
        return f"TcpEpsonProjectorClientTransport({self.host}:{self.port})"

    def __repr__(self) -> str:
        return str(self)
