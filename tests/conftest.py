"""Pytest configuration for the epson_projector tests."""

from __future__ import annotations

import pytest

from epson_projector import EpsonProjectorClient
from epson_projector.emulator import EmulatedClientTransport, EpsonProjectorEmulator


class FakeClock:
    """Monotonic clock that only moves when a test advances it."""

    def __init__(self, now: float = 1000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, secs: float) -> None:
        self.now += secs


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def emulator() -> EpsonProjectorEmulator:
    return EpsonProjectorEmulator()


@pytest.fixture
def lamp_on_emulator(emulator: EpsonProjectorEmulator) -> EpsonProjectorEmulator:
    emulator.power_status = 1
    return emulator


@pytest.fixture
def transport(emulator: EpsonProjectorEmulator) -> EmulatedClientTransport:
    return EmulatedClientTransport(emulator)


@pytest.fixture
def client(transport: EmulatedClientTransport, clock: FakeClock) -> EpsonProjectorClient:
    return EpsonProjectorClient(transport, clock=clock)
