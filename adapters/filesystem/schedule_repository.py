from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

from adapters.filesystem.json_utils import load_json
from domain.models import DaySchedule
from domain.ports.repositories import ScheduleRepository

LAYOUT_PLAN_SUFFIX = ".layout.json"


class FileSystemScheduleRepository(ScheduleRepository):
    def load_all(self, directory: Path) -> list[DaySchedule]:
        return [schedule for _, schedule in self.load_all_with_paths(directory)]

    def load_all_with_paths(self, directory: Path) -> list[tuple[Path, DaySchedule]]:
        return [(path, self.load_by_path(path)) for path in sorted(self._iter_paths(directory))]

    def load_by_path(self, path: Path) -> DaySchedule:
        if not path.exists():
            msg = f"Schedule file not found: {path}"
            raise FileNotFoundError(msg)
        schedule = DaySchedule.model_validate(load_json(path))
        if not schedule.day:
            schedule = schedule.model_copy(update={"day": path.stem})
        return schedule

    def _iter_paths(self, directory: Path) -> Iterable[Path]:
        for path in directory.glob("*.json"):
            if path.name.endswith(LAYOUT_PLAN_SUFFIX):
                continue
            yield path
