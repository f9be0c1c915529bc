#!/usr/bin/env python3

"""
Epson projector known ESC/VP21 commands and metadata.

This module contains the command templates, query metadata and lookup tables
for the subset of the Epson ESC/VP21 command set that this package monitors and
controls. All tables are built once at import time and are read-only.

There is no protocol implementation here; only metadata about the protocol.
"""
from __future__ import annotations

from enum import Enum

from ..internal_types import *

color_modes: Mapping[str, int] = MappingProxyType({
    "sRGB": 0x01,
    "Presentation": 0x04,
    "Theatre": 0x05,
    "Dynamic": 0x06,
    "Sports": 0x08,
    "DICOM SIM": 0x0F,
    "Blackboard": 0x11,
    "Whiteboard": 0x12,
    "Photo": 0x14,
  })
"""Image color mode names, and the one-byte protocol codes they correspond to."""

color_mode_names: Mapping[int, str] = MappingProxyType(dict((v, k) for k, v in color_modes.items()))
"""Image color mode protocol codes, and the mode names they correspond to."""

power_modes: Mapping[int, str] = MappingProxyType({
    0: "Standby Mode (Network OFF)",
    1: "Lamp ON",
    2: "Warmup",
    3: "Cooldown",
    4: "Standby Mode (Network ON)",
    5: "Abnormality standby",
    9: "A/V standby",
  })
"""Response values for the PWR? query, and the projector power states they correspond to."""

POWER_LAMP_ON = 1
POWER_WARMUP = 2

class ValueType(Enum):
    """How the value part of a KEY=VALUE response is parsed"""
    INT = "int"
    """Unsigned decimal integer"""
    HEX = "hex"
    """Unsigned hexadecimal integer"""
    STR = "str"
    """Non-empty raw string"""
    SWITCH = "switch"
    """ON or OFF, parsed as 1 or 0"""

class QueryMeta:
    """Metadata for a single query command and the response it produces"""
    name: str
    command: bytes
    key: str
    value_type: ValueType
    value_width: Optional[int]
    """Exact number of characters in the value, or None if the width varies"""

    def __init__(
            self,
            name: str,
            command: bytes,
            key: str,
            value_type: ValueType=ValueType.INT,
            value_width: Optional[int]=None,
          ):
        self.name = name
        self.command = command
        self.key = key
        self.value_type = value_type
        self.value_width = value_width

    @property
    def marker(self) -> str:
        """Substring that must appear in a valid response; a reply without it is retried once"""
        return self.key

    @property
    def not_found(self) -> Union[int, str]:
        """The sentinel returned when the response does not carry a value"""
        return "" if self.value_type == ValueType.STR else -1

    def __str__(self) -> str:
        return f"QueryMeta({self.name}: {self.command!r})"

    def __repr__(self) -> str:
        return str(self)

class CommandTemplate:
    """An immutable command with a fixed-width value field just before the trailing carriage return.

    The template itself is never modified; protocol.codec.encode_command() returns a
    fresh copy with the value injected.
    """
    name: str
    data: bytes
    value_width: int

    def __init__(self, name: str, data: bytes, value_width: int=0):
        assert data.endswith(b"\r")
        assert value_width < len(data)
        self.name = name
        self.data = bytes(data)
        self.value_width = value_width

    @property
    def value_offset(self) -> int:
        """Offset of the first byte of the value field"""
        return len(self.data) - 1 - self.value_width

    def __str__(self) -> str:
        return f"CommandTemplate({self.name}: {self.data!r})"

    def __repr__(self) -> str:
        return str(self)

class ControlOperation(Enum):
    """The shape of a control operation"""
    TOGGLE = "toggle"
    NUMERIC = "numeric"
    COLOR_MODE = "color_mode"

class ControlMeta:
    """Metadata for a controllable property"""
    property_name: str
    operation: ControlOperation
    query: QueryMeta
    on_command: Optional[bytes]
    off_command: Optional[bytes]
    template: Optional[CommandTemplate]

    def __init__(
            self,
            property_name: str,
            operation: ControlOperation,
            query: QueryMeta,
            on_command: Optional[bytes]=None,
            off_command: Optional[bytes]=None,
            template: Optional[CommandTemplate]=None,
          ):
        if operation == ControlOperation.TOGGLE:
            assert on_command is not None and off_command is not None
        else:
            assert template is not None and template.value_width > 0
        self.property_name = property_name
        self.operation = operation
        self.query = query
        self.on_command = on_command
        self.off_command = off_command
        self.template = template

    def __str__(self) -> str:
        return f"ControlMeta({self.property_name}: {self.operation.value})"

    def __repr__(self) -> str:
        return str(self)

_Q = QueryMeta
_T = CommandTemplate

_query_metas: List[QueryMeta] = [
    # power status is always two digits (e.g., PWR=04)
    _Q("power_status", b"PWR?\r", "PWR", value_width=2),
    _Q("mute_status", b"MUTE?\r", "MUTE", ValueType.SWITCH),
    _Q("freeze_status", b"FREEZE?\r", "FREEZE", ValueType.SWITCH),
    _Q("lamp_hours", b"LAMP?\r", "LAMP"),
    _Q("serial_number", b"SNO?\r", "SNO", ValueType.STR),
    _Q("brightness", b"BRIGHT?\r", "BRIGHT"),
    _Q("contrast", b"CONTRAST?\r", "CONTRAST"),
    _Q("density", b"DENSITY?\r", "DENSITY"),
    _Q("tint", b"TINT?\r", "TINT"),
    _Q("sharp", b"SHARP?\r", "SHARP"),
    _Q("red", b"RED?\r", "RED"),
    _Q("green", b"GREEN?\r", "GREEN"),
    _Q("blue", b"BLUE?\r", "BLUE"),
    _Q("color_temperature", b"CTEMP?\r", "CTEMP"),
    # The projector reports color mode codes in hex (e.g., CMODE=0F)
    _Q("color_mode", b"CMODE?\r", "CMODE", ValueType.HEX),
  ]

queries: Mapping[str, QueryMeta] = MappingProxyType(dict((q.name, q) for q in _query_metas))
"""All known queries, indexed by query name"""

PROPERTY_POWER_MODE = "Power mode"
PROPERTY_POWER = "Power"
PROPERTY_LAMP_HOURS = "Lamp operation time (hrs)"
PROPERTY_SERIAL_NUMBER = "Serial number"
PROPERTY_MUTE = "A/V Mute"
PROPERTY_FREEZE = "Freeze"
PROPERTY_COLOR_MODE = "Image color mode"

def _toggle(property_name: str, query_name: str, keyword: bytes) -> ControlMeta:
    return ControlMeta(
        property_name,
        ControlOperation.TOGGLE,
        queries[query_name],
        on_command=keyword + b" ON\r",
        off_command=keyword + b" OFF\r",
      )

def _numeric(property_name: str, query_name: str, keyword: bytes) -> ControlMeta:
    return ControlMeta(
        property_name,
        ControlOperation.NUMERIC,
        queries[query_name],
        template=_T(query_name, keyword + b" 000\r", value_width=3),
      )

_control_metas: List[ControlMeta] = [
    _toggle(PROPERTY_POWER, "power_status", b"PWR"),
    _toggle(PROPERTY_MUTE, "mute_status", b"MUTE"),
    _toggle(PROPERTY_FREEZE, "freeze_status", b"FREEZE"),
    _numeric("Image settings#Brightness", "brightness", b"BRIGHT"),
    _numeric("Image settings#Contrast", "contrast", b"CONTRAST"),
    _numeric("Image settings#Density", "density", b"DENSITY"),
    _numeric("Image settings#Tint", "tint", b"TINT"),
    _numeric("Image settings#Sharp", "sharp", b"SHARP"),
    _numeric("RGB#Red", "red", b"RED"),
    _numeric("RGB#Green", "green", b"GREEN"),
    _numeric("RGB#Blue", "blue", b"BLUE"),
    _numeric("Image settings#Color temperature", "color_temperature", b"CTEMP"),
    ControlMeta(
        PROPERTY_COLOR_MODE,
        ControlOperation.COLOR_MODE,
        queries["color_mode"],
        template=_T("color_mode", b"CMODE 00\r", value_width=1),
      ),
  ]

controls: Mapping[str, ControlMeta] = MappingProxyType(dict((c.property_name, c) for c in _control_metas))
"""All controllable properties, indexed by property name"""

slider_properties: Tuple[str, ...] = tuple(
    c.property_name for c in _control_metas if c.operation == ControlOperation.NUMERIC)
"""Numeric image settings in the order they are polled"""

def name_to_control_meta(property_name: str) -> Optional[ControlMeta]:
    """Returns the control metadata for a property name, or None if the property cannot be controlled"""
    return controls.get(property_name)

def resolve_color_mode(value: Union[str, int, float]) -> Optional[int]:
    """Returns the protocol code for a color mode given either its name or its numeric code.

    Returns None if the value does not identify a known color mode.
    """
    if isinstance(value, str):
        code = color_modes.get(value)
        if code is not None:
            return code
    try:
        code = int(float(value))
    except (ValueError, OverflowError):
        return None
    return code if code in color_mode_names else None
