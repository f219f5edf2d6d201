from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Hashable, Protocol

from domain.models import LaidOutEvent, Offset


class Interval(Protocol):
    @property
    def start(self) -> Offset: ...

    @property
    def end(self) -> Offset: ...


@dataclass(frozen=True)
class ColumnCollision:
    first_event_id: Hashable
    second_event_id: Hashable
    column: int


def events_overlap(first: Interval, second: Interval) -> bool:
    if first.start < second.end and second.start < first.end:
        return True
    return first.start == second.start and first.end == second.end


def split_clusters(laid_out: Sequence[LaidOutEvent]) -> list[list[LaidOutEvent]]:
    # Packer output is in cluster order; a new cluster starts where the running max end stops.
    clusters: list[list[LaidOutEvent]] = []
    max_end: Offset | None = None
    for event in laid_out:
        if max_end is None or event.start >= max_end:
            clusters.append([])
            max_end = event.end
        else:
            max_end = max(max_end, event.end)
        clusters[-1].append(event)
    return clusters


def find_column_collisions(laid_out: Sequence[LaidOutEvent]) -> list[ColumnCollision]:
    collisions: list[ColumnCollision] = []
    for cluster in split_clusters(laid_out):
        by_column: dict[int, list[LaidOutEvent]] = {}
        for event in cluster:
            by_column.setdefault(event.column, []).append(event)
        for column, events in sorted(by_column.items()):
            for index, first in enumerate(events):
                for second in events[index + 1 :]:
                    if events_overlap(first, second):
                        collisions.append(
                            ColumnCollision(
                                first_event_id=first.event_id,
                                second_event_id=second.event_id,
                                column=column,
                            )
                        )
    return collisions
