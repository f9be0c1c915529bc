# Copyright (c) 2023 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

"""
Epson Projector statistics collection.

Queries the projector and builds a Snapshot. Each query stands on its own: a
property the projector does not report is omitted from the snapshot, and the
rest of the poll continues.
"""

from __future__ import annotations

from ..internal_types import *
from ..constants import SLIDER_RANGE_START, SLIDER_RANGE_END
from ..pkg_logging import logger
from ..protocol import (
    NOT_FOUND_INT,
    NOT_FOUND_STR,
    color_modes,
    color_mode_names,
    controls,
    power_modes,
    queries,
    slider_properties,
  )
from ..protocol.command_meta import (
    POWER_LAMP_ON,
    POWER_WARMUP,
    PROPERTY_COLOR_MODE,
    PROPERTY_FREEZE,
    PROPERTY_LAMP_HOURS,
    PROPERTY_MUTE,
    PROPERTY_POWER,
    PROPERTY_POWER_MODE,
    PROPERTY_SERIAL_NUMBER,
  )
from ..snapshot import ControlDescriptor, Snapshot

from .session import EpsonProjectorSession

class EpsonProjectorStatisticsCollector:
    session: EpsonProjectorSession

    def __init__(self, session: EpsonProjectorSession):
        self.session = session

    async def collect(self) -> Optional[Snapshot]:
        """Polls the projector.

        Returns None if the session could not be authorized. Image settings are only
        queried while the lamp is on or warming up.
        """
        if not await self.session.ensure_authorized():
            logger.debug("Not authorized/connected; skipping statistics collection")
            return None

        snapshot = Snapshot()

        power_status = await self.session.query_int(queries["power_status"])
        if power_status != NOT_FOUND_INT:
            logger.debug(f"Received power status: {power_status}")
            power_mode = power_modes.get(power_status)
            if power_mode is None:
                logger.warning(f"Unknown power status {power_status}")
            else:
                snapshot.add(PROPERTY_POWER_MODE, power_mode)
            power_switch = 1 if power_status == POWER_LAMP_ON else 0
            snapshot.add(PROPERTY_POWER, power_switch, ControlDescriptor.create_switch(PROPERTY_POWER, power_switch))

        lamp_hours = await self.session.query_int(queries["lamp_hours"])
        if lamp_hours != NOT_FOUND_INT:
            snapshot.add(PROPERTY_LAMP_HOURS, lamp_hours)

        serial_number = await self.session.query_str(queries["serial_number"])
        if serial_number != NOT_FOUND_STR:
            snapshot.add(PROPERTY_SERIAL_NUMBER, serial_number)

        if power_status in (POWER_LAMP_ON, POWER_WARMUP):
            await self.collect_image_settings(snapshot)

        logger.debug(f"Collected statistics: {snapshot.statistics}")
        return snapshot

    async def collect_image_settings(self, snapshot: Snapshot) -> None:
        for property_name in (PROPERTY_MUTE, PROPERTY_FREEZE):
            status = await self.session.query_int(controls[property_name].query)
            if status != NOT_FOUND_INT:
                snapshot.add(property_name, status, ControlDescriptor.create_switch(property_name, status))

        for property_name in slider_properties:
            level = await self.session.query_int(controls[property_name].query)
            if level != NOT_FOUND_INT:
                snapshot.add(
                    property_name,
                    level,
                    ControlDescriptor.create_slider(property_name, level, SLIDER_RANGE_START, SLIDER_RANGE_END),
                  )

        color_mode = await self.session.query_int(controls[PROPERTY_COLOR_MODE].query)
        if color_mode != NOT_FOUND_INT:
            if color_mode in color_mode_names:
                snapshot.add(
                    PROPERTY_COLOR_MODE,
                    color_mode,
                    ControlDescriptor.create_dropdown(PROPERTY_COLOR_MODE, color_modes, color_mode),
                  )
            else:
                logger.debug(f"Ignoring unknown image color mode {color_mode:#04x}")
