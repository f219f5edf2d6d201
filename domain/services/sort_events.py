from __future__ import annotations

from collections.abc import Iterable

from domain.models import Event


def sort_events(events: Iterable[Event]) -> list[Event]:
    # sorted() is stable: events sharing a start keep their input order.
    return sorted(events, key=lambda event: event.start)
