# Copyright (c) 2023 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

"""
Epson Projector control operations.

Translates a property name and value into an ESC/VP21 command, sends it, checks
the projector's acknowledgement and patches the cached snapshot on success.
"""

from __future__ import annotations

from ..internal_types import *
from ..constants import SLIDER_RANGE_START, SLIDER_RANGE_END
from ..pkg_logging import logger
from ..protocol import (
    ControlMeta,
    ControlOperation,
    encode_command,
    name_to_control_meta,
    resolve_color_mode,
  )
from ..protocol.command_meta import PROPERTY_POWER

from .session import EpsonProjectorSession
from .state_cache import DeviceStateCache

ControlValue = Union[str, int, float]

def _parse_switch(value: ControlValue) -> Optional[bool]:
    """Returns False for "0" (or any numeric zero), True for any other number,
       and None if the value is not a number"""
    try:
        return float(value) != 0.0
    except (ValueError, OverflowError):
        return None

def _parse_numeric(value: ControlValue) -> Optional[int]:
    """Parses a decimal value and truncates it to an integer; None if not a number"""
    try:
        return int(float(value))
    except (ValueError, OverflowError):
        return None

class EpsonProjectorController:
    session: EpsonProjectorSession
    cache: DeviceStateCache

    def __init__(self, session: EpsonProjectorSession, cache: DeviceStateCache):
        self.session = session
        self.cache = cache

    def prepare_command(self, control_meta: ControlMeta, value: ControlValue) -> Optional[Tuple[bytes, str]]:
        """Returns the command to send and the value to record on success,
           or None if the value is not valid for the property."""
        property_name = control_meta.property_name
        if control_meta.operation == ControlOperation.TOGGLE:
            switch_on = _parse_switch(value)
            if switch_on is None:
                logger.warning(f"Rejecting {property_name}={value!r}: expected 0 (off) or 1 (on)")
                return None
            if switch_on:
                assert control_meta.on_command is not None
                return control_meta.on_command, "1"
            assert control_meta.off_command is not None
            return control_meta.off_command, "0"

        assert control_meta.template is not None
        if control_meta.operation == ControlOperation.NUMERIC:
            int_value = _parse_numeric(value)
            if int_value is None or not SLIDER_RANGE_START <= int_value <= SLIDER_RANGE_END:
                logger.warning(
                    f"Rejecting {property_name}={value!r}: expected a number in "
                    f"[{SLIDER_RANGE_START}, {SLIDER_RANGE_END}]")
                return None
            return encode_command(control_meta.template, int_value), str(int_value)

        code = resolve_color_mode(value)
        if code is None:
            logger.warning(f"Rejecting {property_name}={value!r}: unknown color mode")
            return None
        return encode_command(control_meta.template, code), str(code)

    async def control(self, property_name: str, value: ControlValue) -> bool:
        """Applies a single control operation.

        Returns True iff the projector accepted the command. Unsupported properties,
        invalid values, a refused handshake and a rejected command all return False.
        Transport errors propagate.
        """
        control_meta = name_to_control_meta(property_name)
        if control_meta is None:
            logger.warning(f"Control operation {property_name!r} is not supported.")
            return False

        prepared = self.prepare_command(control_meta, value)
        if prepared is None:
            return False
        command, new_value = prepared

        if not await self.session.ensure_authorized():
            logger.debug(f"Not authorized/connected; abandoning control of {property_name}")
            return False

        try:
            success = await self.session.send_control(command)
        except Exception:
            logger.debug(
                f"An error occurred during sending the control operation for property "
                f"{property_name!r} and value {value!r}", exc_info=True)
            raise

        if not success:
            logger.warning(f"Projector did not accept {property_name}={new_value} ({command!r})")
            return False

        logger.debug(f"Projector accepted {property_name}={new_value}")
        self.cache.mark_control()
        self.cache.patch(property_name, new_value)
        if property_name == PROPERTY_POWER and new_value == "0":
            # the projector may drop the session while powering down
            await self.session.transport.disconnect()
        return True
