from __future__ import annotations

from pathlib import Path
from typing import Any

from filelock import FileLock

from adapters.filesystem.json_utils import load_json, write_json_atomic
from domain.models import DayLayoutPlan
from domain.ports.repositories import LayoutPlanRepository


class FileSystemLayoutRepository(LayoutPlanRepository):
    def load(self, path: Path) -> dict[str, Any]:
        payload = load_json(path)
        return payload if isinstance(payload, dict) else {}

    def save(self, plan: DayLayoutPlan, path: Path) -> None:
        lock_path = path.with_suffix(f"{path.suffix}.lock")
        with FileLock(str(lock_path)):
            write_json_atomic(path, plan.to_dict())
