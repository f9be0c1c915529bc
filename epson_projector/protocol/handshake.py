# Copyright (c) 2023 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

from __future__ import annotations

# Initial connection handshake (ESC/VP.net):
#   Client: "ESC/VP.net" <version 0x10> <type 0x03 CONNECT> <reserved 0x00 0x00> <status 0x00> <header count 0x00>
#   Projector: 16-byte reply with the same layout. The final byte is treated as the return code;
#              0 means the session is authorized.
#   <Normal ESC/VP21 command/response session begins>

ESC_VP_NET_MAGIC = b"ESC/VP.net"
"""Identifier that starts every ESC/VP.net handshake packet."""

ESC_VP_NET_HANDSHAKE = ESC_VP_NET_MAGIC + b"\x10\x03\x00\x00\x00\x00"
"""Sent to the projector on a fresh connection to request a command session."""

HANDSHAKE_RESPONSE_LENGTH = len(ESC_VP_NET_HANDSHAKE)
"""The projector's handshake reply is the same length as the request (16 bytes). Note there
   is no terminating carriage return or prompt."""

HANDSHAKE_SUCCESS = 0
"""Return code (last byte of the handshake reply) for a successfully authorized session."""

HANDSHAKE_UNAUTHORIZED = 0x41
HANDSHAKE_FORBIDDEN = 0x43
"""Return codes seen when the projector refuses the session."""
