from __future__ import annotations

from collections.abc import Iterable
from decimal import ROUND_HALF_UP, Decimal

from domain.models import EventGeometry, LaidOutEvent, Offset

DEFAULT_WIDTH_PRECISION = 2


def column_width_percent(
    column_count: int,
    precision: int | None = DEFAULT_WIDTH_PRECISION,
) -> float:
    if column_count < 1:
        msg = f"column_count must be positive, got {column_count}"
        raise ValueError(msg)
    width = 100 / column_count
    if precision is None:
        return width
    # Exact halves round up, not to even.
    quantum = Decimal(10) ** -precision
    return float(Decimal(str(width)).quantize(quantum, rounding=ROUND_HALF_UP))


def derive_geometry(
    event: LaidOutEvent,
    *,
    pixels_per_minute: float = 1.0,
    width_precision: int | None = DEFAULT_WIDTH_PRECISION,
    axis_start: Offset = 0,
) -> EventGeometry:
    # Left offset is computed from the already rounded width so columns tile exactly.
    width = column_width_percent(event.column_count, width_precision)
    return EventGeometry(
        event_id=event.event_id,
        top=(event.start - axis_start) * pixels_per_minute,
        height=(event.end - event.start) * pixels_per_minute,
        width_percent=width,
        left_percent=event.column * width,
    )


def derive_all_geometry(
    events: Iterable[LaidOutEvent],
    *,
    pixels_per_minute: float = 1.0,
    width_precision: int | None = DEFAULT_WIDTH_PRECISION,
    axis_start: Offset = 0,
) -> list[EventGeometry]:
    return [
        derive_geometry(
            event,
            pixels_per_minute=pixels_per_minute,
            width_precision=width_precision,
            axis_start=axis_start,
        )
        for event in events
    ]
