from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

from domain.models import DayLayoutPlan, Event


class DayLayoutEngine(Protocol):
    def build_plan(self, events: Sequence[Event], day: str = "") -> DayLayoutPlan:
        ...
