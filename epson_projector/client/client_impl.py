# Copyright (c) 2023 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

"""
Epson Projector client.

Exposes polling and control of a single projector over one ESC/VP.net session.
"""

from __future__ import annotations

import asyncio

from ..internal_types import *
from ..exceptions import InvalidControlRequestError
from ..constants import CONTROL_COOLDOWN, DEFAULT_PORT, DEFAULT_TIMEOUT
from ..pkg_logging import logger
from ..snapshot import Snapshot

from .client_transport import EpsonProjectorClientTransport
from .tcp_client_transport import TcpEpsonProjectorClientTransport
from .session import EpsonProjectorSession
from .state_cache import DeviceStateCache
from .controller import ControlValue, EpsonProjectorController
from .collector import EpsonProjectorStatisticsCollector

ControlRequest = Union[Tuple[str, ControlValue], Mapping[str, Any]]
"""A (property, value) pair, or a mapping with 'property' and 'value' keys"""

def _unpack_control_request(request: ControlRequest) -> Tuple[str, ControlValue]:
    if isinstance(request, Mapping):
        if not 'property' in request or not 'value' in request:
            raise InvalidControlRequestError(f"Control request must have 'property' and 'value': {request!r}")
        return str(request['property']), request['value']
    if isinstance(request, (tuple, list)) and len(request) == 2:
        return str(request[0]), request[1]
    raise InvalidControlRequestError(f"Invalid control request: {request!r}")

class EpsonProjectorClient:
    """Epson Projector client.

    Polls and controls never overlap on the session: both hold the same lock for
    their entire duration.
    """

    transport: EpsonProjectorClientTransport
    session: EpsonProjectorSession
    cache: DeviceStateCache
    controller: EpsonProjectorController
    collector: EpsonProjectorStatisticsCollector

    _lock: asyncio.Lock

    def __init__(
            self,
            transport: EpsonProjectorClientTransport,
            cooldown_secs: float=CONTROL_COOLDOWN,
            clock: Optional[Callable[[], float]]=None,
          ):
        self.transport = transport
        self.session = EpsonProjectorSession(transport)
        self.cache = DeviceStateCache(cooldown_secs=cooldown_secs, clock=clock)
        self.controller = EpsonProjectorController(self.session, self.cache)
        self.collector = EpsonProjectorStatisticsCollector(self.session)
        self._lock = asyncio.Lock()

    async def poll(self) -> Snapshot:
        """Returns the current snapshot of the projector.

        Within the cooldown window after a successful control, the cached snapshot
        is returned without contacting the projector. If the session cannot be
        authorized, the previous snapshot (or an empty one) is returned and the
        cache is left alone.
        """
        async with self._lock:
            if self.cache.should_serve_cached():
                logger.debug("Device is occupied. Skipping statistics refresh call.")
                cached = self.cache.cached()
                assert cached is not None
                return cached
            snapshot = await self.collector.collect()
            if snapshot is None:
                previous = self.cache.cached()
                return Snapshot() if previous is None else previous
            self.cache.store(snapshot)
            return snapshot.copy()

    async def control(self, property_name: str, value: ControlValue) -> bool:
        """Sets a single property. Returns True iff the projector accepted the command."""
        async with self._lock:
            return await self.controller.control(property_name, value)

    async def control_batch(self, requests: Optional[Sequence[ControlRequest]]) -> List[bool]:
        """Applies each control request in order, one at a time.

        Raises InvalidControlRequestError, before anything is sent, if requests is
        None, empty, or contains a malformed entry.
        """
        if requests is None or len(requests) == 0:
            raise InvalidControlRequestError("Controllable properties cannot be None or empty")
        unpacked = [_unpack_control_request(request) for request in requests]
        results: List[bool] = []
        for property_name, value in unpacked:
            results.append(await self.control(property_name, value))
        return results

    @classmethod
    def create(
            cls,
            host: str,
            port: int=DEFAULT_PORT,
            timeout_secs: float=DEFAULT_TIMEOUT,
            cooldown_secs: float=CONTROL_COOLDOWN,
          ) -> Self:
        """Creates a client for a projector reachable over TCP/IP. No connection is
           made until the first poll or control."""
        transport = TcpEpsonProjectorClientTransport(host, port=port, timeout_secs=timeout_secs)
        return cls(transport, cooldown_secs=cooldown_secs)

    async def _async_dispose(self) -> None:
        await self.transport.aclose()

    async def __aenter__(self) -> EpsonProjectorClient:
        logger.debug(f"{self}: Entering async context manager")
        return self

    async def __aexit__(
            self,
            exc_type: Optional[Type[BaseException]],
            exc_val: Optional[BaseException],
            exc_tb: Optional[TracebackType]
          ) -> None:
        logger.debug(f"{self}: Exiting async context manager, exc={exc_val}")
        await self._async_dispose()

    async def aclose(self) -> None:
        await self._async_dispose()

    def __str__(self) -> str:
        return f"EpsonProjectorClient(transport={self.transport})"

    def __repr__(self) -> str:
        return str(self)
