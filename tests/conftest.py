from __future__ import annotations

import os
from collections.abc import Callable, Generator
from pathlib import Path

import pytest

from app.config import AppSettings, CalendarSettings
from domain.models import Event


def _clear_daylayout_env() -> None:
    for key in list(os.environ):
        if key.startswith("DAYLAYOUT_"):
            os.environ.pop(key, None)


_clear_daylayout_env()


@pytest.fixture(autouse=True)
def clear_daylayout_env() -> Generator[None, None, None]:
    _clear_daylayout_env()
    yield
    _clear_daylayout_env()


@pytest.fixture
def sample_events() -> list[Event]:
    return [
        Event(start=30, end=150, event_id=0),
        Event(start=540, end=600, event_id=1),
        Event(start=560, end=620, event_id=2),
        Event(start=610, end=670, event_id=3),
    ]


@pytest.fixture
def calendar_settings(tmp_path: Path) -> CalendarSettings:
    return CalendarSettings(
        title="Test Calendar",
        start_hour=9,
        end_hour=21,
        pixels_per_minute=1.0,
        width_precision=2,
        sample_schedule_path=None,
        output_dir=tmp_path / "layouts",
    )


@pytest.fixture
def calendar_settings_factory(
    calendar_settings: CalendarSettings,
) -> Callable[..., CalendarSettings]:
    def _factory(**overrides: object) -> CalendarSettings:
        return calendar_settings.model_copy(update=overrides)

    return _factory


@pytest.fixture
def app_settings(calendar_settings: CalendarSettings) -> AppSettings:
    return AppSettings(calendar=calendar_settings)


@pytest.fixture
def app_settings_factory(
    calendar_settings_factory: Callable[..., CalendarSettings],
) -> Callable[..., AppSettings]:
    def _factory(**overrides: object) -> AppSettings:
        return AppSettings(calendar=calendar_settings_factory(**overrides))

    return _factory
