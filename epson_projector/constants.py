# Copyright (c) 2023 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

"""Constants used by epson_projector"""

DEFAULT_PORT = 3629
"""The listen port number used by the projector for ESC/VP.net control."""

DEFAULT_TIMEOUT = 2.0
"""The default timeout for all TCP/IP control operations, in seconds."""

CONTROL_COOLDOWN = 5.0
"""After a successful control operation, polls within this many seconds are
   answered from the cached snapshot instead of querying the projector. Many
   image parameters take a moment to settle after being set."""

ACK = b":"
"""Sent by the projector as the complete response to an accepted control command.
   Also terminates every other response as a prompt."""

ERR = b"ERR\r"
"""Sent by the projector when a command is rejected or not understood."""

SLIDER_RANGE_START = 0
SLIDER_RANGE_END = 255
"""Inclusive range of all numeric image settings."""
