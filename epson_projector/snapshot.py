# Copyright (c) 2023 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

"""
Snapshot of the monitored statistics and controllable properties of a projector.
"""

from __future__ import annotations

import time
from copy import deepcopy
from enum import Enum

from .internal_types import *

class ControlType(Enum):
    """The UI shape of a controllable property"""
    SWITCH = "switch"
    SLIDER = "slider"
    DROPDOWN = "dropdown"

class ControlDescriptor:
    """A controllable property, its current value and the metadata needed to present it.

    Values are always kept as strings, matching the statistics map. Each descriptor
    owns its metadata; the constructor takes a deep copy of it.
    """
    name: str
    control_type: ControlType
    value: str
    metadata: JsonableDict
    timestamp: float
    """Wall-clock time (seconds since the epoch) the value was last updated"""

    def __init__(
            self,
            name: str,
            control_type: ControlType,
            value: str,
            metadata: Optional[JsonableDict]=None,
            timestamp: Optional[float]=None,
          ):
        self.name = name
        self.control_type = control_type
        self.value = value
        self.metadata = {} if metadata is None else deepcopy(metadata)
        self.timestamp = time.time() if timestamp is None else timestamp

    @classmethod
    def create_switch(cls, name: str, value: int, label_on: str="On", label_off: str="Off") -> Self:
        return cls(name, ControlType.SWITCH, str(value), dict(label_on=label_on, label_off=label_off))

    @classmethod
    def create_slider(cls, name: str, value: int, range_start: int, range_end: int) -> Self:
        metadata: JsonableDict = dict(
            range_start=float(range_start),
            range_end=float(range_end),
            label_start=str(float(range_start)),
            label_end=str(float(range_end)),
          )
        return cls(name, ControlType.SLIDER, str(value), metadata)

    @classmethod
    def create_dropdown(cls, name: str, options: Mapping[str, int], value: int) -> Self:
        """Creates a dropdown whose options are the decimal codes and whose labels are the option names"""
        metadata: JsonableDict = dict(
            options=[str(code) for code in options.values()],
            labels=list(options.keys()),
          )
        return cls(name, ControlType.DROPDOWN, str(value), metadata)

    def update(self, value: str, timestamp: Optional[float]=None) -> None:
        self.value = value
        self.timestamp = time.time() if timestamp is None else timestamp

    def copy(self) -> ControlDescriptor:
        return ControlDescriptor(
            self.name,
            self.control_type,
            self.value,
            metadata=self.metadata,
            timestamp=self.timestamp,
          )

    def to_jsonable(self) -> JsonableDict:
        return dict(
            name=self.name,
            type=self.control_type.value,
            value=self.value,
            metadata=deepcopy(self.metadata),
            timestamp=self.timestamp,
          )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ControlDescriptor):
            return NotImplemented
        return self.to_jsonable() == other.to_jsonable()

    def __str__(self) -> str:
        return f"ControlDescriptor({self.name}: {self.control_type.value}={self.value!r})"

    def __repr__(self) -> str:
        return str(self)

class Snapshot:
    """The complete set of currently known statistics and control descriptors for a projector.

    A property appears only if the projector actually reported it.
    """
    statistics: Dict[str, str]
    controls: List[ControlDescriptor]

    def __init__(
            self,
            statistics: Optional[Dict[str, str]]=None,
            controls: Optional[List[ControlDescriptor]]=None,
          ):
        self.statistics = {} if statistics is None else statistics
        self.controls = [] if controls is None else controls

    def get_control(self, name: str) -> Optional[ControlDescriptor]:
        for control in self.controls:
            if control.name == name:
                return control
        return None

    def add(self, name: str, value: Union[str, int], control: Optional[ControlDescriptor]=None) -> None:
        """Publishes a statistic and, optionally, its control descriptor"""
        self.statistics[name] = str(value)
        if control is not None:
            self.controls.append(control)

    @property
    def is_empty(self) -> bool:
        return len(self.statistics) == 0 and len(self.controls) == 0

    def copy(self) -> Snapshot:
        """Returns a deep copy; the cached snapshot is never handed out directly"""
        return Snapshot(dict(self.statistics), [c.copy() for c in self.controls])

    def to_jsonable(self) -> JsonableDict:
        return dict(
            statistics=dict(self.statistics),
            controls=[c.to_jsonable() for c in self.controls],
          )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Snapshot):
            return NotImplemented
        return self.to_jsonable() == other.to_jsonable()

    def __str__(self) -> str:
        return f"Snapshot(statistics={self.statistics}, controls={self.controls})"

    def __repr__(self) -> str:
        return str(self)
