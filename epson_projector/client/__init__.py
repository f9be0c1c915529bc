# Copyright (c) 2023 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

"""
Epson Projector client.

Provides polling and control of an Epson projector over ESC/VP.net.
"""

from .client_transport import EpsonProjectorClientTransport
from .tcp_client_transport import TcpEpsonProjectorClientTransport
from .session import EpsonProjectorSession
from .state_cache import DeviceStateCache
from .controller import EpsonProjectorController
from .collector import EpsonProjectorStatisticsCollector
from .client_config import EpsonProjectorClientConfig
from .client_impl import EpsonProjectorClient
from .simple import epson_projector_connect
