# Copyright (c) 2023 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

"""
Encoding of command values and decoding of ESC/VP21 responses.

Responses to queries have the form b"KEY=VALUE\\r:", where the trailing ':' is the
projector's prompt. An accepted control command is answered with the prompt alone.
"""

from __future__ import annotations

from string import hexdigits

from ..internal_types import *
from ..exceptions import EpsonProjectorError
from ..constants import ACK
from .command_meta import CommandTemplate, QueryMeta, ValueType

NOT_FOUND_INT = -1
"""Sentinel for a numeric value missing from a response"""

NOT_FOUND_STR = ""
"""Sentinel for a string value missing from a response"""

def decode_text(data: bytes) -> str:
    """Decodes a raw response into text"""
    return data.decode("utf-8", errors="replace")

def encode_command(template: CommandTemplate, value: int) -> bytes:
    """Returns a copy of the template with value written into its value field.

    Three-byte fields receive the value as zero-padded ASCII digits. One-byte fields
    receive the raw byte value. The value is not clamped; a value that does not fit
    the field raises EpsonProjectorError.
    """
    width = template.value_width
    if width == 0:
        raise EpsonProjectorError(f"{template} has no value field")
    if width == 1:
        if not 0 <= value <= 0xff:
            raise EpsonProjectorError(f"Value {value} does not fit in one byte for {template}")
        field = bytes([value])
    else:
        field = f"{value:0{width}d}".encode("ascii")
        if value < 0 or len(field) != width:
            raise EpsonProjectorError(f"Value {value} does not fit in {width} digits for {template}")
    data = bytearray(template.data)
    offset = template.value_offset
    data[offset:offset + width] = field
    return bytes(data)

def _parse_value(raw_value: str, value_type: ValueType, value_width: Optional[int]=None) -> Optional[Union[int, str]]:
    if value_width is not None and len(raw_value) != value_width:
        return None
    if value_type == ValueType.INT:
        if raw_value.isascii() and raw_value.isdigit():
            return int(raw_value)
    elif value_type == ValueType.HEX:
        if len(raw_value) > 0 and all(c in hexdigits for c in raw_value):
            return int(raw_value, 16)
    elif value_type == ValueType.SWITCH:
        if raw_value == "ON":
            return 1
        if raw_value == "OFF":
            return 0
    elif len(raw_value) > 0:
        return raw_value
    return None

def decode_response(response: Union[bytes, str], query: QueryMeta) -> Union[int, str]:
    """Extracts the value for query.key from a response.

    Only carriage-return-terminated KEY=VALUE segments are considered. Returns
    NOT_FOUND_INT (numeric queries) or NOT_FOUND_STR (string queries) if no valid
    value is present.
    """
    text = response if isinstance(response, str) else decode_text(response)
    # the last segment is not terminated by '\r'
    for segment in text.split("\r")[:-1]:
        key, sep, raw_value = segment.lstrip(":").partition("=")
        if sep == "" or key.strip() != query.key:
            continue
        value = _parse_value(raw_value, query.value_type, query.value_width)
        if value is not None:
            return value
    return query.not_found

def is_accepted(response: bytes) -> bool:
    """Returns True iff the response is the single-byte acknowledgement b':' (58)"""
    return response == ACK
