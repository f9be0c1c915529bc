# Copyright (c) 2023 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

"""
Epson Projector client abstract transport interface.

Provides a low-level abstract interface for sending opaque command bytes
to an Epson projector and receiving the opaque response bytes. Does not provide
the ESC/VP.net handshake or any higher-level abstractions such as semantic
commands or responses.

This abstraction allows for the implementation of emulators and alternate network
transports.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from ..internal_types import *


class EpsonProjectorClientTransport(ABC):
    @property
    @abstractmethod
    def is_connected(self) -> bool:
        """True iff a session with the projector is currently open.

        Must be implemented by subclasses.
        """
        raise NotImplementedError()

    @abstractmethod
    async def send(self, data: bytes) -> bytes:
        """Sends a complete command and returns the complete raw response.

        Opens the connection if necessary. Raises EpsonProjectorTransportError on
        any connection or I/O failure.

        Must be implemented by subclasses.
        """
        raise NotImplementedError()

    @abstractmethod
    async def disconnect(self) -> None:
        """Closes the connection, if open. A later send() reconnects.

        Has no effect if the transport is not connected. Does not raise.

        Must be implemented by subclasses.
        """
        raise NotImplementedError()

    async def aclose(self) -> None:
        """Closes the transport.

        May be overridden by subclasses. The default implementation simply calls
        disconnect().
        """
        await self.disconnect()

    async def __aenter__(self) -> EpsonProjectorClientTransport:
        """Enters a context that will close the transport on exit."""
        return self

    async def __aexit__(
            self,
            exc_type: Optional[Type[BaseException]],
            exc: Optional[BaseException],
            tb: Optional[TracebackType],
          ) -> None:
        await self.aclose()
