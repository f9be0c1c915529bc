# Copyright (c) 2023 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

"""
Low-level protocol definitions for Epson projectors (ESC/VP.net / ESC/VP21).
"""

from .handshake import (
    ESC_VP_NET_MAGIC,
    ESC_VP_NET_HANDSHAKE,
    HANDSHAKE_RESPONSE_LENGTH,
    HANDSHAKE_SUCCESS,
  )

from .command_meta import (
    CommandTemplate,
    QueryMeta,
    ControlMeta,
    ControlOperation,
    ValueType,
    color_modes,
    color_mode_names,
    power_modes,
    queries,
    controls,
    slider_properties,
    name_to_control_meta,
    resolve_color_mode,
  )

from .codec import (
    NOT_FOUND_INT,
    NOT_FOUND_STR,
    decode_text,
    encode_command,
    decode_response,
    is_accepted,
  )
