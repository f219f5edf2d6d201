from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Hashable, List, Optional, Union

from pydantic import BaseModel, Field, model_validator

Offset = Union[int, float]

DEFAULT_EVENT_TITLE = "Sample Item"
DEFAULT_EVENT_LOCATION = "Sample Location"


class InvalidIntervalError(ValueError):
    def __init__(self, start: Offset, end: Offset, event_id: Hashable | None = None) -> None:
        self.start = start
        self.end = end
        self.event_id = event_id
        label = f" for event {event_id!r}" if event_id is not None else ""
        super().__init__(f"Invalid interval{label}: start {start} must be before end {end}")


def ensure_interval(start: Offset, end: Offset, event_id: Hashable | None = None) -> None:
    if not start < end:
        raise InvalidIntervalError(start, end, event_id)


@dataclass(frozen=True)
class Event:
    start: Offset
    end: Offset
    event_id: Hashable = None

    def __post_init__(self) -> None:
        ensure_interval(self.start, self.end, self.event_id)


@dataclass(frozen=True)
class AssignedEvent:
    event_id: Hashable
    start: Offset
    end: Offset
    column: int


@dataclass(frozen=True)
class LaidOutEvent:
    event_id: Hashable
    start: Offset
    end: Offset
    column: int
    column_count: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "event_id": self.event_id,
            "start": self.start,
            "end": self.end,
            "column": self.column,
            "column_count": self.column_count,
        }


@dataclass(frozen=True)
class EventGeometry:
    event_id: Hashable
    top: float
    height: float
    width_percent: float
    left_percent: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "event_id": self.event_id,
            "top": self.top,
            "height": self.height,
            "width_percent": self.width_percent,
            "left_percent": self.left_percent,
        }


@dataclass(frozen=True)
class DayLayoutPlan:
    events: List[LaidOutEvent]
    geometry: List[EventGeometry]
    cluster_count: int
    day: str = ""
    column_counts: List[int] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "day": self.day,
            "cluster_count": self.cluster_count,
            "column_counts": list(self.column_counts),
            "events": [event.to_dict() for event in self.events],
            "geometry": [item.to_dict() for item in self.geometry],
        }


class ScheduledEvent(BaseModel):
    start: float
    end: float
    event_id: Optional[Union[int, str]] = None
    title: str = DEFAULT_EVENT_TITLE
    location: str = DEFAULT_EVENT_LOCATION

    @model_validator(mode="after")
    def ensure_start_before_end(self) -> ScheduledEvent:
        if not (math.isfinite(self.start) and math.isfinite(self.end)):
            msg = f"Event offsets must be finite, got start={self.start} end={self.end}"
            raise ValueError(msg)
        ensure_interval(self.start, self.end, self.event_id)
        return self

    def to_event(self, fallback_id: Hashable) -> Event:
        event_id = self.event_id if self.event_id is not None else fallback_id
        return Event(start=_as_number(self.start), end=_as_number(self.end), event_id=event_id)


class DaySchedule(BaseModel):
    day: str = ""
    events: List[ScheduledEvent] = Field(default_factory=list)

    @model_validator(mode="before")
    @classmethod
    def accept_bare_event_list(cls, data: Any) -> Any:
        if isinstance(data, list):
            return {"events": data}
        return data

    @model_validator(mode="after")
    def ensure_unique_event_ids(self) -> DaySchedule:
        seen: set[Hashable] = set()
        for event_id in self.event_ids():
            if event_id in seen:
                msg = f"Duplicate event_id found: {event_id}"
                raise ValueError(msg)
            seen.add(event_id)
        return self

    def event_ids(self) -> List[Hashable]:
        # Events without an explicit id are identified by their input position.
        return [
            event.event_id if event.event_id is not None else index
            for index, event in enumerate(self.events)
        ]

    def to_events(self) -> List[Event]:
        return [event.to_event(index) for index, event in enumerate(self.events)]

    def events_by_id(self) -> dict[Hashable, ScheduledEvent]:
        return dict(zip(self.event_ids(), self.events))


def _as_number(value: float) -> Offset:
    return int(value) if float(value).is_integer() else value
