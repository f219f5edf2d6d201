from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import Protocol

from domain.models import DayLayoutPlan, DaySchedule


class ScheduleRepository(Protocol):
    def load_all(self, directory: Path) -> Sequence[DaySchedule]: ...

    def load_all_with_paths(self, directory: Path) -> Sequence[tuple[Path, DaySchedule]]: ...

    def load_by_path(self, path: Path) -> DaySchedule: ...


class LayoutPlanRepository(Protocol):
    def load(self, path: Path) -> dict: ...

    def save(self, plan: DayLayoutPlan, path: Path) -> None: ...
