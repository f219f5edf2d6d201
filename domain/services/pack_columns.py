from __future__ import annotations

import logging
import math
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field

from domain.models import AssignedEvent, Event, LaidOutEvent, Offset
from domain.services.sort_events import sort_events

logger = logging.getLogger(__name__)


@dataclass
class Cluster:
    """Working state for one run of transitively overlapping events.

    ``columns[i]`` holds the end of the latest event placed in column ``i`` and
    ``max_end`` the latest end seen in the cluster so far.
    """

    max_end: Offset = -math.inf
    events: list[AssignedEvent] = field(default_factory=list)
    columns: list[Offset] = field(default_factory=list)

    @property
    def column_count(self) -> int:
        return len(self.columns)

    def is_empty(self) -> bool:
        return not self.events

    def accepts(self, event: Event) -> bool:
        return event.start < self.max_end

    def place(self, event: Event) -> AssignedEvent:
        self.max_end = max(self.max_end, event.end)
        column = self._first_free_column(event.start)
        if column is None:
            column = len(self.columns)
            self.columns.append(event.end)
        else:
            self.columns[column] = event.end
        assigned = AssignedEvent(
            event_id=event.event_id,
            start=event.start,
            end=event.end,
            column=column,
        )
        self.events.append(assigned)
        return assigned

    def _first_free_column(self, start: Offset) -> int | None:
        # Touching intervals are not free: the occupant must end strictly before.
        for index, column_end in enumerate(self.columns):
            if start > column_end:
                return index
        return None


def iter_clusters(sorted_events: Iterable[Event]) -> Iterator[Cluster]:
    cluster = Cluster()
    for event in sorted_events:
        if not cluster.accepts(event):
            if not cluster.is_empty():
                yield cluster
            cluster = Cluster()
        cluster.place(event)
    if not cluster.is_empty():
        yield cluster


def emit_cluster(cluster: Cluster) -> list[LaidOutEvent]:
    column_count = cluster.column_count
    return [
        LaidOutEvent(
            event_id=assigned.event_id,
            start=assigned.start,
            end=assigned.end,
            column=assigned.column,
            column_count=column_count,
        )
        for assigned in cluster.events
    ]


def iter_laid_out_clusters(events: Iterable[Event]) -> Iterator[list[LaidOutEvent]]:
    for cluster in iter_clusters(sort_events(events)):
        yield emit_cluster(cluster)


def pack_columns(events: Iterable[Event]) -> list[LaidOutEvent]:
    laid_out: list[LaidOutEvent] = []
    cluster_count = 0
    for cluster_events in iter_laid_out_clusters(events):
        cluster_count += 1
        laid_out.extend(cluster_events)
    logger.debug("Packed %d events into %d clusters", len(laid_out), cluster_count)
    return laid_out
