# Copyright (c) 2023 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

"""
Epson Projector client configuration.

Provides a general config object for an EpsonProjectorClient.
"""

from __future__ import annotations

import os

from ..internal_types import *
from ..exceptions import EpsonProjectorError
from ..constants import (
    CONTROL_COOLDOWN,
    DEFAULT_PORT,
    DEFAULT_TIMEOUT,
  )

class EpsonProjectorClientConfig:
    """Epson Projector client configuration."""
    default_host: Optional[str]
    default_port: int
    timeout_secs: float
    cooldown_secs: float

    def __init__(
            self,
            default_host: Optional[str]=None,
            *,
            default_port: Optional[int]=None,
            timeout_secs: Optional[float]=None,
            cooldown_secs: Optional[float]=None,
            base_config: Optional[EpsonProjectorClientConfig]=None
          ) -> None:
        """Creates a configuration for an Epson Projector client.

           Args:
             default_host: The default hostname or IPV4 address of the projector.
                   May optionally be prefixed with "tcp://".
                   May be suffixed with ":<port>" to specify a
                   non-default port, which will override the default_port argument.
                   If None, the default host will be taken from the
                     EPSON_PROJECTOR_HOST environment variable.
             default_port: The default TCP/IP port number to use.
                    If None, the default port will be taken from EPSON_PROJECTOR_PORT.
                    If that environment variable is not found, the default ESC/VP.net
                    port (3629) will be used.
             timeout_secs:
                   The timeout for each TCP/IP operation, in seconds.
                   If None, the timeout will be taken from the
                   EPSON_PROJECTOR_TIMEOUT environment variable.
                   If the environment variable is not found, the
                   default timeout will be used.
             cooldown_secs:
                   Seconds after a successful control operation during which
                   polls are answered from the cached snapshot. If None,
                   CONTROL_COOLDOWN (5 seconds) is used.
             base_config:
                     An optional base configuration to use.
        """
        if base_config is None:
            self.init_from_defaults()
        else:
            self.init_from_base_config(base_config)

        if default_host is not None and default_host != '':
            self.default_host = default_host

        if default_port is not None and default_port > 0:
            self.default_port = default_port

        if timeout_secs is not None:
            self.timeout_secs = timeout_secs

        if cooldown_secs is not None:
            self.cooldown_secs = cooldown_secs

    def init_from_defaults(self) -> None:
        """Initializes the configuration from defaults."""
        default_host: Optional[str] = os.environ.get('EPSON_PROJECTOR_HOST')
        if default_host == '':
            default_host = None
        self.default_host = default_host
        default_port_str = os.environ.get('EPSON_PROJECTOR_PORT')
        if default_port_str is None or default_port_str == '':
            self.default_port = DEFAULT_PORT
        else:
            self.default_port = int(default_port_str)
        timeout_str = os.environ.get('EPSON_PROJECTOR_TIMEOUT')
        if timeout_str is None or timeout_str == '':
            self.timeout_secs = DEFAULT_TIMEOUT
        else:
            self.timeout_secs = float(timeout_str)
        self.cooldown_secs = CONTROL_COOLDOWN

    def init_from_base_config(self, base_config: EpsonProjectorClientConfig) -> None:
        """Initializes the configuration from a base configuration."""
        self.default_host = base_config.default_host
        self.default_port = base_config.default_port
        self.timeout_secs = base_config.timeout_secs
        self.cooldown_secs = base_config.cooldown_secs

    @classmethod
    def from_jsonable(
            cls,
            jsonable: JsonableDict,
            base_config: Optional[EpsonProjectorClientConfig]=None
          ) -> Self:
        """Creates a configuration from a JSON object such as
           {"default_host": "10.0.0.5", "default_port": 3629, "timeout_secs": 2.0, "cooldown_secs": 5.0}.
           Missing keys fall back to the base configuration or the defaults."""
        unknown = set(jsonable.keys()) - set(['default_host', 'default_port', 'timeout_secs', 'cooldown_secs'])
        if len(unknown) > 0:
            raise EpsonProjectorError(f"Unknown Epson projector config keys: {sorted(unknown)}")
        default_host = jsonable.get('default_host')
        default_port = jsonable.get('default_port')
        timeout_secs = jsonable.get('timeout_secs')
        cooldown_secs = jsonable.get('cooldown_secs')
        return cls(
            default_host=None if default_host is None else str(default_host),
            default_port=None if default_port is None else int(default_port),
            timeout_secs=None if timeout_secs is None else float(timeout_secs),
            cooldown_secs=None if cooldown_secs is None else float(cooldown_secs),
            base_config=base_config,
          )

    def resolve_host(self) -> Tuple[str, int]:
        """Returns the (hostname, port) to connect to.

        Strips an optional "tcp://" prefix and honors a ":<port>" suffix.
        """
        host = self.default_host
        if host is None or host == '':
            raise EpsonProjectorError("No projector host configured (set EPSON_PROJECTOR_HOST)")
        if '://' in host:
            if not host.startswith('tcp://'):
                raise EpsonProjectorError(f"Unsupported protocol in host specifier: {host}")
            host = host[len('tcp://'):]
        port = self.default_port
        if ':' in host:
            host, port_str = host.rsplit(':', 1)
            port = int(port_str)
        return host, port

    def __str__(self) -> str:
        return (
            f"EpsonProjectorClientConfig("
            f"default_host={self.default_host}, "
            f"default_port={self.default_port}, "
            f"timeout_secs={self.timeout_secs!r}, "
            f"cooldown_secs={self.cooldown_secs!r})"
          )

    def __repr__(self) -> str:
        return str(self)
