# Copyright (c) 2023 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

"""
Epson Projector simple client connection API.
"""

from __future__ import annotations

from ..internal_types import *
from ..exceptions import EpsonProjectorError
from ..pkg_logging import logger
from .client_config import EpsonProjectorClientConfig
from .client_impl import EpsonProjectorClient

async def epson_projector_connect(
        host: Optional[str]=None,
        config: Optional[EpsonProjectorClientConfig]=None
      ) -> EpsonProjectorClient:
    """Create an Epson projector client from a configuration and open its
       session (including the ESC/VP.net handshake).

    Args:
        host: The hostname or IPV4 address of the projector.
                May optionally be prefixed with "tcp://".
                May be suffixed with ":<port>" to specify a
                non-default port.
                If None, the host will be taken from the
                config or the EPSON_PROJECTOR_HOST environment variable.
        config: An EpsonProjectorClientConfig object that specifies
                the default host, port, timeouts, etc. to use.
                If None, a default config will be created.

    Raises EpsonProjectorError if the projector refuses the handshake.
    """
    config = EpsonProjectorClientConfig(
        default_host=host,
        base_config=config
      )
    final_host, final_port = config.resolve_host()
    client = EpsonProjectorClient.create(
        final_host,
        port=final_port,
        timeout_secs=config.timeout_secs,
        cooldown_secs=config.cooldown_secs,
      )
    try:
        if not await client.session.ensure_authorized():
            raise EpsonProjectorError(f"Projector at {final_host}:{final_port} refused the ESC/VP.net handshake")
    except BaseException:
        await client.aclose()
        raise
    logger.info(f"Connected to projector at {final_host}:{final_port}")
    return client
