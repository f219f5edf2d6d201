from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from fastapi import Body, Depends, FastAPI, HTTPException, Query, Request
from fastapi.responses import HTMLResponse, ORJSONResponse, RedirectResponse
from fastapi.templating import Jinja2Templates

from adapters.filesystem.schedule_repository import FileSystemScheduleRepository
from adapters.layout.column_packing import ColumnPackingLayoutEngine
from app.config import AppSettings, load_settings
from domain.models import DayLayoutPlan, DaySchedule, InvalidIntervalError
from domain.services.day_axis import axis_height, build_day_axis

TEMPLATES_DIR = Path(__file__).parent / "web" / "templates"

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))
logger = logging.getLogger(__name__)

SAMPLE_SCHEDULE: dict[str, Any] = {
    "day": "sample",
    "events": [
        {"start": 30, "end": 150},
        {"start": 540, "end": 600},
        {"start": 560, "end": 620},
        {"start": 610, "end": 670},
    ],
}


@dataclass(frozen=True)
class LayoutContext:
    settings: AppSettings
    engine: ColumnPackingLayoutEngine
    schedule_repo: FileSystemScheduleRepository


def create_app(settings: AppSettings) -> FastAPI:
    app = FastAPI(title=settings.calendar.title)

    context = LayoutContext(
        settings=settings,
        engine=ColumnPackingLayoutEngine(settings.calendar.to_layout_config()),
        schedule_repo=FileSystemScheduleRepository(),
    )

    def get_context() -> LayoutContext:
        return context

    @app.get("/")
    def index() -> RedirectResponse:
        return RedirectResponse(url="/calendar")

    @app.get("/api/health")
    def api_health() -> ORJSONResponse:
        return ORJSONResponse({"status": "ok"})

    @app.post("/api/layout")
    def api_layout(
        schedule: DaySchedule,
        context: LayoutContext = Depends(get_context),
    ) -> ORJSONResponse:
        plan = build_layout(context, schedule)
        return ORJSONResponse(plan.to_dict())

    @app.post("/api/layout/batch")
    def api_layout_batch(
        schedules: list[DaySchedule] = Body(...),
        context: LayoutContext = Depends(get_context),
    ) -> ORJSONResponse:
        days = [schedule.day for schedule in schedules]
        if any(not day for day in days):
            raise HTTPException(status_code=400, detail="Every schedule in a batch needs a day")
        if len(set(days)) != len(days):
            raise HTTPException(status_code=400, detail="Duplicate day in batch")
        try:
            plans = context.engine.build_plans(
                {schedule.day: schedule.to_events() for schedule in schedules}
            )
        except InvalidIntervalError as exc:
            logger.warning("Batch layout rejected: %s", exc)
            raise HTTPException(status_code=422, detail=str(exc)) from exc
        return ORJSONResponse({"days": {day: plan.to_dict() for day, plan in plans.items()}})

    @app.get("/api/axis")
    def api_axis(
        start_hour: int | None = Query(default=None),
        end_hour: int | None = Query(default=None),
        context: LayoutContext = Depends(get_context),
    ) -> ORJSONResponse:
        calendar = context.settings.calendar
        first = calendar.start_hour if start_hour is None else start_hour
        last = calendar.end_hour if end_hour is None else end_hour
        try:
            labels = build_day_axis(first, last)
        except ValueError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        return ORJSONResponse(
            {
                "start_hour": first,
                "end_hour": last,
                "height": axis_height(first, last) * calendar.pixels_per_minute,
                "labels": [label.to_dict() for label in labels],
            }
        )

    @app.get("/calendar", response_class=HTMLResponse)
    def calendar_page(
        request: Request,
        context: LayoutContext = Depends(get_context),
    ) -> HTMLResponse:
        calendar = context.settings.calendar
        schedule = load_sample_schedule(context)
        plan = build_layout(context, schedule)
        details = schedule.events_by_id()
        items = [
            {
                "event": event,
                "geometry": geometry,
                "title": details[event.event_id].title,
                "location": details[event.event_id].location,
            }
            for event, geometry in zip(plan.events, plan.geometry)
        ]
        return templates.TemplateResponse(
            request,
            "calendar.html",
            {
                "title": calendar.title,
                "labels": build_day_axis(calendar.start_hour, calendar.end_hour),
                "height": axis_height(calendar.start_hour, calendar.end_hour)
                * calendar.pixels_per_minute,
                "slot_height": 30 * calendar.pixels_per_minute,
                "items": items,
            },
        )

    return app


def build_layout(context: LayoutContext, schedule: DaySchedule) -> DayLayoutPlan:
    try:
        return context.engine.build_plan(schedule.to_events(), day=schedule.day)
    except InvalidIntervalError as exc:
        logger.warning("Layout rejected for day %r: %s", schedule.day, exc)
        raise HTTPException(status_code=422, detail=str(exc)) from exc


def load_sample_schedule(context: LayoutContext) -> DaySchedule:
    path = context.settings.calendar.sample_schedule_path
    if path is None:
        return DaySchedule.model_validate(SAMPLE_SCHEDULE)
    try:
        return context.schedule_repo.load_by_path(path)
    except FileNotFoundError as exc:
        logger.exception("Sample schedule is missing.")
        raise HTTPException(status_code=404, detail="Sample schedule not found") from exc


app = create_app(load_settings())
