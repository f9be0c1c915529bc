# Copyright (c) 2023 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

"""Package epson_projector provides an API for monitoring and controlling
Epson projectors via the ESC/VP.net TCP/IP protocol.
"""

from .version import __version__

from .pkg_logging import logger

from .internal_types import Jsonable, JsonableDict

from .exceptions import (
    EpsonProjectorError,
    EpsonProjectorTransportError,
    InvalidControlRequestError,
  )

from .constants import DEFAULT_PORT, DEFAULT_TIMEOUT, CONTROL_COOLDOWN

from .snapshot import ControlType, ControlDescriptor, Snapshot

from .client import (
    EpsonProjectorClient,
    EpsonProjectorClientConfig,
    EpsonProjectorClientTransport,
    TcpEpsonProjectorClientTransport,
    DeviceStateCache,
    epson_projector_connect,
  )

from .protocol import (
    CommandTemplate,
    QueryMeta,
    ControlMeta,
    color_modes,
    power_modes,
    queries,
    controls,
    encode_command,
    decode_response,
    is_accepted,
  )
