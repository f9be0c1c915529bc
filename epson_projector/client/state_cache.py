# Copyright (c) 2023 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

"""
Cache of the most recent projector snapshot, and the post-control cooldown window
during which polls are answered from it.
"""

from __future__ import annotations

import time

from ..internal_types import *
from ..constants import CONTROL_COOLDOWN
from ..pkg_logging import logger
from ..snapshot import Snapshot

class DeviceStateCache:
    snapshot: Optional[Snapshot] = None
    last_control_time: Optional[float] = None
    cooldown_secs: float
    clock: Callable[[], float]

    def __init__(
            self,
            cooldown_secs: float=CONTROL_COOLDOWN,
            clock: Optional[Callable[[], float]]=None,
          ):
        self.cooldown_secs = cooldown_secs
        self.clock = time.monotonic if clock is None else clock

    def should_serve_cached(self) -> bool:
        """True iff a snapshot exists and the last successful control is within the cooldown window"""
        if self.snapshot is None or self.last_control_time is None:
            return False
        return self.clock() - self.last_control_time < self.cooldown_secs

    def cached(self) -> Optional[Snapshot]:
        """Returns a copy of the cached snapshot, or None"""
        return None if self.snapshot is None else self.snapshot.copy()

    def store(self, snapshot: Snapshot) -> None:
        self.snapshot = snapshot

    def mark_control(self) -> None:
        """Starts the cooldown window"""
        self.last_control_time = self.clock()

    def patch(self, property_name: str, value: str) -> None:
        """Updates one statistic and its control descriptor, if any, in place.

        Before the first poll there is nothing to patch; that is logged, not raised.
        """
        if self.snapshot is None:
            logger.debug(f"No cached snapshot yet; not updating {property_name}")
            return
        self.snapshot.statistics[property_name] = value
        control = self.snapshot.get_control(property_name)
        if control is not None:
            control.update(value)
