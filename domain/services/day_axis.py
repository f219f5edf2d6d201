from __future__ import annotations

from dataclasses import dataclass

DEFAULT_START_HOUR = 9
DEFAULT_END_HOUR = 21
MINUTES_PER_HOUR = 60
HALF_HOUR_MINUTES = 30


@dataclass(frozen=True)
class AxisLabel:
    offset: int
    text: str
    meridiem: str | None
    half_hour: bool

    def to_dict(self) -> dict[str, object]:
        return {
            "offset": self.offset,
            "text": self.text,
            "meridiem": self.meridiem,
            "half_hour": self.half_hour,
        }


def validate_hours(start_hour: int, end_hour: int) -> None:
    if not (0 <= start_hour <= 24 and 0 <= end_hour <= 24):
        msg = f"Hours must be within 0..24, got {start_hour}..{end_hour}"
        raise ValueError(msg)
    if start_hour >= end_hour:
        msg = f"start_hour must be before end_hour, got {start_hour}..{end_hour}"
        raise ValueError(msg)


def half_hour_slots(start_hour: int, end_hour: int) -> int:
    validate_hours(start_hour, end_hour)
    return (end_hour - start_hour) * 2


def axis_height(start_hour: int = DEFAULT_START_HOUR, end_hour: int = DEFAULT_END_HOUR) -> int:
    return half_hour_slots(start_hour, end_hour) * HALF_HOUR_MINUTES


def build_day_axis(
    start_hour: int = DEFAULT_START_HOUR,
    end_hour: int = DEFAULT_END_HOUR,
) -> list[AxisLabel]:
    labels: list[AxisLabel] = []
    for slot in range(half_hour_slots(start_hour, end_hour) + 1):
        half_hour = slot % 2 == 1
        hour, meridiem = _twelve_hour_clock(start_hour + slot // 2)
        minutes = "30" if half_hour else "00"
        labels.append(
            AxisLabel(
                offset=slot * HALF_HOUR_MINUTES,
                text=f"{hour}:{minutes}",
                meridiem=None if half_hour else meridiem,
                half_hour=half_hour,
            )
        )
    return labels


def _twelve_hour_clock(hour: int) -> tuple[int, str]:
    if hour == 12:
        return 12, "PM"
    if hour > 12:
        return hour - 12, "PM"
    return hour, "AM"
