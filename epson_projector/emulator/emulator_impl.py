# Copyright (c) 2023 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

"""
Epson Projector emulator.

Provides a simple emulation of an Epson projector's ESC/VP.net command set,
either in-process (EmulatedClientTransport) or on TCP/IP (EpsonProjectorEmulatorServer).
"""

from __future__ import annotations

import asyncio

from ..internal_types import *
from ..pkg_logging import logger
from ..constants import ACK, ERR
from ..exceptions import EpsonProjectorTransportError
from ..protocol import (
    ESC_VP_NET_MAGIC,
    HANDSHAKE_RESPONSE_LENGTH,
    HANDSHAKE_SUCCESS,
    color_mode_names,
  )
from ..protocol.command_meta import POWER_LAMP_ON, POWER_WARMUP
from ..client import EpsonProjectorClientTransport

LEVEL_KEYWORDS = ("BRIGHT", "CONTRAST", "DENSITY", "TINT", "SHARP", "RED", "GREEN", "BLUE", "CTEMP")
"""Numeric image settings supported by the emulator"""

STANDBY_NETWORK_ON = 4

class EmulatorConnection:
    """Per-connection state. Commands are only answered after a successful handshake."""
    authorized: bool = False

class EpsonProjectorEmulator:
    """An emulated projector.

    Attributes may be changed directly by tests to put the projector in a given state
    or to inject faults.
    """
    power_status: int
    power_on_status: int
    """Power status reported after an accepted PWR ON (1 = Lamp ON, 2 = Warmup)"""
    lamp_hours: int
    serial_number: str
    mute: bool
    freeze: bool
    levels: Dict[str, int]
    color_mode: int
    handshake_return_code: int
    garbled_keys: Set[str]
    """Query keywords whose responses are replaced with garbage"""
    commands: List[bytes]
    """Every command received, in order"""

    def __init__(
            self,
            power_status: int=STANDBY_NETWORK_ON,
            lamp_hours: int=1234,
            serial_number: str="X4ZK1234567",
            color_mode: int=0x06,
          ):
        self.power_status = power_status
        self.power_on_status = POWER_LAMP_ON
        self.lamp_hours = lamp_hours
        self.serial_number = serial_number
        self.mute = False
        self.freeze = False
        self.levels = dict((keyword, 128) for keyword in LEVEL_KEYWORDS)
        self.color_mode = color_mode
        self.handshake_return_code = HANDSHAKE_SUCCESS
        self.garbled_keys = set()
        self.commands = []

    @property
    def lamp_is_on(self) -> bool:
        return self.power_status in (POWER_LAMP_ON, POWER_WARMUP)

    def handshake_response(self) -> bytes:
        code = self.handshake_return_code
        status = 0x20 if code == HANDSHAKE_SUCCESS else code
        response = ESC_VP_NET_MAGIC + b"\x10\x03\x00\x00" + bytes([status, code])
        assert len(response) == HANDSHAKE_RESPONSE_LENGTH
        return response

    def query_value(self, keyword: str) -> Optional[str]:
        """Returns the value reported for a query keyword, or None if the query is rejected"""
        if keyword == "PWR":
            return f"{self.power_status:02d}"
        if keyword == "LAMP":
            return str(self.lamp_hours)
        if keyword == "SNO":
            return self.serial_number
        if not self.lamp_is_on:
            return None
        if keyword == "MUTE":
            return "ON" if self.mute else "OFF"
        if keyword == "FREEZE":
            return "ON" if self.freeze else "OFF"
        if keyword == "CMODE":
            return f"{self.color_mode:02X}"
        if keyword in self.levels:
            return str(self.levels[keyword])
        return None

    def set_value(self, keyword: str, arg: bytes) -> bool:
        """Applies a set command; returns False if the command is rejected"""
        if keyword == "PWR":
            if arg == b"ON":
                if not self.lamp_is_on:
                    self.power_status = self.power_on_status
                return True
            if arg == b"OFF":
                self.power_status = STANDBY_NETWORK_ON
                return True
            return False
        if not self.lamp_is_on:
            return False
        if keyword in ("MUTE", "FREEZE"):
            if arg not in (b"ON", b"OFF"):
                return False
            setattr(self, keyword.lower(), arg == b"ON")
            return True
        if keyword == "CMODE":
            if len(arg) != 2 or arg[0] != 0x30 or not arg[1] in color_mode_names:
                return False
            self.color_mode = arg[1]
            return True
        if keyword in self.levels:
            if len(arg) != 3 or not arg.isdigit() or int(arg) > 255:
                return False
            self.levels[keyword] = int(arg)
            return True
        return False

    def handle_command(self, connection: EmulatorConnection, command: bytes) -> bytes:
        """Handle a single command, and return the complete response."""
        self.commands.append(command)
        logger.debug(f"Emulator: received command {command!r}")
        if command.startswith(ESC_VP_NET_MAGIC):
            connection.authorized = self.handshake_return_code == HANDSHAKE_SUCCESS
            return self.handshake_response()
        if not connection.authorized or not command.endswith(b"\r"):
            return ERR + ACK
        body = command[:-1]
        if body.endswith(b"?"):
            keyword = body[:-1].decode("ascii", errors="replace")
            if keyword in self.garbled_keys:
                return b"\x00\x00\r" + ACK
            value = self.query_value(keyword)
            if value is None:
                return ERR + ACK
            return f"{keyword}={value}\r".encode("ascii") + ACK
        keyword_bytes, _, arg = body.partition(b" ")
        if self.set_value(keyword_bytes.decode("ascii", errors="replace"), arg):
            return ACK
        return ERR + ACK

class EmulatedClientTransport(EpsonProjectorClientTransport):
    """An in-process client transport connected to an emulated projector.

    Tracks overlapping send() calls in max_in_flight.
    """
    emulator: EpsonProjectorEmulator
    connection: Optional[EmulatorConnection] = None
    in_flight: int = 0
    max_in_flight: int = 0
    fail_sends: int = 0
    """Number of upcoming sends that fail with EpsonProjectorTransportError"""
    disconnect_count: int = 0

    def __init__(self, emulator: EpsonProjectorEmulator):
        self.emulator = emulator

    @property
    def is_connected(self) -> bool:
        return self.connection is not None

    async def send(self, data: bytes) -> bytes:
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            # let any concurrent caller run; overlapping exchanges show up in max_in_flight
            await asyncio.sleep(0)
            if self.fail_sends > 0:
                self.fail_sends -= 1
                self.connection = None
                raise EpsonProjectorTransportError(f"{self}: Emulated connection failure")
            if self.connection is None:
                self.connection = EmulatorConnection()
            response = self.emulator.handle_command(self.connection, bytes(data))
            await asyncio.sleep(0)
            return response
        finally:
            self.in_flight -= 1

    async def disconnect(self) -> None:
        if self.connection is not None:
            self.disconnect_count += 1
        self.connection = None

    def __str__(self) -> str:
        return "EmulatedClientTransport()"

    def __repr__(self) -> str:
        return str(self)

class EpsonProjectorEmulatorServer(AsyncContextManager['EpsonProjectorEmulatorServer']):
    """Serves an emulated projector on TCP/IP."""
    emulator: EpsonProjectorEmulator
    bind_addr: str
    port: int
    """The requested port; 0 picks a free port (see bound_port)"""
    server: Optional[asyncio.Server] = None

    def __init__(
            self,
            emulator: Optional[EpsonProjectorEmulator]=None,
            bind_addr: Optional[str]=None,
            port: int=0,
          ):
        self.emulator = EpsonProjectorEmulator() if emulator is None else emulator
        self.bind_addr = '127.0.0.1' if bind_addr is None else bind_addr
        self.port = port

    @property
    def bound_port(self) -> int:
        assert self.server is not None
        return self.server.sockets[0].getsockname()[1]

    async def _read_command(self, reader: asyncio.StreamReader) -> bytes:
        first = await reader.readexactly(1)
        if first == ESC_VP_NET_MAGIC[:1]:
            return first + await reader.readexactly(HANDSHAKE_RESPONSE_LENGTH - 1)
        return first + await reader.readuntil(b"\r")

    async def handle_connection(self, reader: asyncio.StreamReader, writer: asyncio.StreamWriter) -> None:
        connection = EmulatorConnection()
        peer = writer.get_extra_info('peername')
        logger.debug(f"Emulator: connection from {peer}")
        try:
            while True:
                try:
                    command = await self._read_command(reader)
                except asyncio.IncompleteReadError:
                    logger.debug(f"Emulator: {peer} disconnected")
                    break
                writer.write(self.emulator.handle_command(connection, command))
                await writer.drain()
        except ConnectionError:
            logger.debug(f"Emulator: connection from {peer} closed", exc_info=True)
        finally:
            writer.close()

    async def start(self) -> None:
        self.server = await asyncio.start_server(self.handle_connection, host=self.bind_addr, port=self.port)
        logger.debug(f"Emulator: Listening on {self.bind_addr}:{self.bound_port}")

    async def close_and_wait(self) -> None:
        if self.server is not None:
            try:
                self.server.close()
                await self.server.wait_closed()
            finally:
                self.server = None

    async def __aenter__(self) -> EpsonProjectorEmulatorServer:
        await self.start()
        return self

    async def __aexit__(self,
            exc_type: Optional[Type[BaseException]],
            exc: Optional[BaseException],
            tb: Optional[TracebackType]
      ) -> None:
        await self.close_and_wait()
