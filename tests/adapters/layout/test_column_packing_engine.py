from __future__ import annotations

import logging

import pytest

from adapters.layout.column_packing import ColumnPackingLayoutEngine, LayoutConfig
from domain.models import Event
from tests.helpers.layout_fixtures import columns_by_id, make_events


def test_build_plan_matches_sample_day(sample_events: list[Event]) -> None:
    plan = ColumnPackingLayoutEngine().build_plan(sample_events, day="sample")
    assert plan.day == "sample"
    assert plan.cluster_count == 2
    assert plan.column_counts == [1, 2]
    assert columns_by_id(plan.events) == {0: (0, 1), 1: (0, 2), 2: (1, 2), 3: (0, 2)}
    geometry = {item.event_id: item for item in plan.geometry}
    assert (geometry[2].top, geometry[2].height) == (560, 60)
    assert (geometry[2].left_percent, geometry[2].width_percent) == (50, 50)
    assert (geometry[0].left_percent, geometry[0].width_percent) == (0, 100)


def test_build_plan_applies_layout_config() -> None:
    engine = ColumnPackingLayoutEngine(
        LayoutConfig(pixels_per_minute=0.5, width_precision=None, axis_start=540)
    )
    plan = engine.build_plan(make_events([(540, 600), (560, 620), (570, 580)]))
    first = plan.geometry[0]
    assert (first.top, first.height) == (0, 30)
    assert plan.geometry[1].width_percent == 100 / 3


def test_build_plan_for_empty_day() -> None:
    plan = ColumnPackingLayoutEngine().build_plan([])
    assert plan.events == []
    assert plan.geometry == []
    assert plan.cluster_count == 0
    assert plan.to_dict()["column_counts"] == []


def test_build_plans_lays_out_each_day_independently() -> None:
    engine = ColumnPackingLayoutEngine()
    plans = engine.build_plans(
        {
            "mon": make_events([(0, 100), (10, 100), (20, 100)]),
            "tue": make_events([(0, 100)]),
        }
    )
    assert set(plans) == {"mon", "tue"}
    assert plans["mon"].column_counts == [3]
    assert plans["tue"].column_counts == [1]
    assert plans["tue"].day == "tue"


def test_plan_serializes_to_dict(sample_events: list[Event]) -> None:
    payload = ColumnPackingLayoutEngine().build_plan(sample_events, day="sample").to_dict()
    assert payload["events"][2] == {
        "event_id": 2,
        "start": 560,
        "end": 620,
        "column": 1,
        "column_count": 2,
    }
    assert payload["geometry"][2]["left_percent"] == 50


def test_build_plan_logs_cluster_summary(
    sample_events: list[Event], caplog: pytest.LogCaptureFixture
) -> None:
    with caplog.at_level(logging.DEBUG, logger="adapters.layout.column_packing"):
        ColumnPackingLayoutEngine().build_plan(sample_events, day="sample")
    assert "4 events in 2 clusters" in caplog.text
