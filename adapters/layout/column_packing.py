from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass

from domain.models import DayLayoutPlan, Event, LaidOutEvent, Offset
from domain.ports.layout import DayLayoutEngine
from domain.services.event_geometry import DEFAULT_WIDTH_PRECISION, derive_all_geometry
from domain.services.pack_columns import iter_laid_out_clusters

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LayoutConfig:
    pixels_per_minute: float = 1.0
    width_precision: int | None = DEFAULT_WIDTH_PRECISION
    axis_start: Offset = 0


class ColumnPackingLayoutEngine(DayLayoutEngine):
    def __init__(self, config: LayoutConfig | None = None) -> None:
        self.config = config or LayoutConfig()

    def build_plan(self, events: Sequence[Event], day: str = "") -> DayLayoutPlan:
        laid_out: list[LaidOutEvent] = []
        column_counts: list[int] = []
        for cluster_events in iter_laid_out_clusters(events):
            column_counts.append(cluster_events[0].column_count)
            laid_out.extend(cluster_events)

        geometry = derive_all_geometry(
            laid_out,
            pixels_per_minute=self.config.pixels_per_minute,
            width_precision=self.config.width_precision,
            axis_start=self.config.axis_start,
        )
        logger.debug(
            "Laid out day %r: %d events in %d clusters, widest cluster has %d columns",
            day,
            len(laid_out),
            len(column_counts),
            max(column_counts, default=0),
        )
        return DayLayoutPlan(
            events=laid_out,
            geometry=geometry,
            cluster_count=len(column_counts),
            day=day,
            column_counts=column_counts,
        )

    def build_plans(self, days: Mapping[str, Sequence[Event]]) -> dict[str, DayLayoutPlan]:
        return {day: self.build_plan(events, day=day) for day, events in days.items()}
