# Copyright (c) 2023 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

"""
ESC/VP.net session helpers layered over a client transport: the authorization
handshake, command/response exchange with a single bounded retry, and
control command acknowledgement.
"""

from __future__ import annotations

from ..internal_types import *
from ..pkg_logging import logger
from ..protocol import (
    ESC_VP_NET_HANDSHAKE,
    HANDSHAKE_SUCCESS,
    QueryMeta,
    decode_text,
    decode_response,
    is_accepted,
  )

from .client_transport import EpsonProjectorClientTransport

class EpsonProjectorSession:
    transport: EpsonProjectorClientTransport

    def __init__(self, transport: EpsonProjectorClientTransport):
        self.transport = transport

    async def exchange(self, command: bytes, marker: str) -> str:
        """Sends a command and returns the decoded response.

        If marker is absent from the response, the identical command is sent exactly
        once more and the second response is returned whether or not it carries the
        marker. Transport errors propagate.
        """
        try:
            response = decode_text(await self.transport.send(command))
            if marker not in response:
                logger.debug(f"Response {response!r} lacks {marker!r}; resending {command!r}")
                response = decode_text(await self.transport.send(command))
            return response
        except Exception:
            logger.debug(f"An error occurred while processing the command {command!r}")
            raise

    async def query(self, query: QueryMeta) -> Union[int, str]:
        """Runs a query; returns the parsed value or query.not_found"""
        response = await self.exchange(query.command, query.marker)
        logger.debug(f"{query.name} response {response!r}")
        return decode_response(response, query)

    async def query_int(self, query: QueryMeta) -> int:
        result = await self.query(query)
        assert isinstance(result, int)
        return result

    async def query_str(self, query: QueryMeta) -> str:
        result = await self.query(query)
        assert isinstance(result, str)
        return result

    async def authorize(self) -> int:
        """Performs the ESC/VP.net handshake.

        Returns the return code carried in the last byte of the reply (0 on
        success), or -1 if the reply is empty.
        """
        try:
            response = await self.transport.send(ESC_VP_NET_HANDSHAKE)
        except Exception:
            logger.error("Exception occurred during the ESC/VP.net handshake", exc_info=True)
            raise
        if len(response) == 0:
            return -1
        return response[-1]

    async def ensure_authorized(self) -> bool:
        """Returns True if the transport is connected or a new handshake succeeds.

        A refused handshake closes the connection so that the next attempt starts
        from a fresh session.
        """
        if self.transport.is_connected:
            return True
        result = await self.authorize()
        if result != HANDSHAKE_SUCCESS:
            logger.warning(f"ESC/VP.net handshake refused with return code {result}")
            await self.transport.disconnect()
            return False
        logger.debug("ESC/VP.net handshake succeeded")
        return True

    async def send_control(self, command: bytes) -> bool:
        """Sends a control command; returns True iff the projector acknowledged it"""
        response = await self.transport.send(command)
        return is_accepted(response)

    def __str__(self) -> str:
        return f"EpsonProjectorSession(transport={self.transport})"

    def __repr__(self) -> str:
        return str(self)
