"""Tests for the TCP/IP transport against the emulator server."""

from __future__ import annotations

import pytest

from epson_projector import (
    EpsonProjectorClient,
    EpsonProjectorError,
    EpsonProjectorTransportError,
    TcpEpsonProjectorClientTransport,
    epson_projector_connect,
)
from epson_projector.emulator import EpsonProjectorEmulator, EpsonProjectorEmulatorServer
from epson_projector.protocol import ESC_VP_NET_HANDSHAKE


@pytest.mark.asyncio
async def test_poll_and_control_over_tcp():
    emulator = EpsonProjectorEmulator(power_status=1)
    async with EpsonProjectorEmulatorServer(emulator) as server:
        async with EpsonProjectorClient.create("127.0.0.1", port=server.bound_port, timeout_secs=5.0) as client:
            snapshot = await client.poll()
            assert snapshot.statistics["Power mode"] == "Lamp ON"
            assert snapshot.statistics["Image color mode"] == "6"
            assert await client.control("RGB#Red", 42)
            assert await client.control("Image color mode", "Theatre")
            assert emulator.levels["RED"] == 42
            assert emulator.color_mode == 0x05
    assert emulator.commands[0] == ESC_VP_NET_HANDSHAKE


@pytest.mark.asyncio
async def test_reconnects_after_power_off():
    emulator = EpsonProjectorEmulator(power_status=1)
    async with EpsonProjectorEmulatorServer(emulator) as server:
        async with EpsonProjectorClient.create("127.0.0.1", port=server.bound_port, timeout_secs=5.0) as client:
            assert await client.control("Power", "0")
            assert not client.transport.is_connected
            assert await client.control("Power", "1")
            assert client.transport.is_connected
    assert emulator.commands.count(ESC_VP_NET_HANDSHAKE) == 2
    assert emulator.power_status == 1


@pytest.mark.asyncio
async def test_rejected_command_reads_through_prompt():
    emulator = EpsonProjectorEmulator()
    async with EpsonProjectorEmulatorServer(emulator) as server:
        async with TcpEpsonProjectorClientTransport("127.0.0.1", port=server.bound_port, timeout_secs=5.0) as transport:
            assert len(await transport.send(ESC_VP_NET_HANDSHAKE)) == 16
            assert await transport.send(b"BRIGHT 010\r") == b"ERR\r:"
            assert await transport.send(b"PWR?\r") == b"PWR=04\r:"


@pytest.mark.asyncio
async def test_connection_failure_raises_transport_error():
    server = EpsonProjectorEmulatorServer()
    await server.start()
    port = server.bound_port
    await server.close_and_wait()

    transport = TcpEpsonProjectorClientTransport("127.0.0.1", port=port, timeout_secs=1.0)
    with pytest.raises(EpsonProjectorTransportError):
        await transport.send(ESC_VP_NET_HANDSHAKE)
    assert not transport.is_connected


@pytest.mark.asyncio
async def test_epson_projector_connect(monkeypatch):
    monkeypatch.delenv("EPSON_PROJECTOR_PORT", raising=False)
    emulator = EpsonProjectorEmulator()
    async with EpsonProjectorEmulatorServer(emulator) as server:
        monkeypatch.setenv("EPSON_PROJECTOR_HOST", f"tcp://127.0.0.1:{server.bound_port}")
        client = await epson_projector_connect()
        async with client:
            assert client.transport.is_connected
            snapshot = await client.poll()
            assert snapshot.statistics["Power mode"] == "Standby Mode (Network ON)"


@pytest.mark.asyncio
async def test_epson_projector_connect_refused_handshake():
    emulator = EpsonProjectorEmulator()
    emulator.handshake_return_code = 0x43
    async with EpsonProjectorEmulatorServer(emulator) as server:
        with pytest.raises(EpsonProjectorError):
            await epson_projector_connect(f"127.0.0.1:{server.bound_port}")
