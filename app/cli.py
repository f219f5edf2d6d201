from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from adapters.filesystem.layout_repository import FileSystemLayoutRepository
from adapters.filesystem.schedule_repository import FileSystemScheduleRepository
from adapters.layout.column_packing import ColumnPackingLayoutEngine
from app.config import AppSettings, load_settings
from domain.models import DayLayoutPlan, DaySchedule
from domain.services.day_axis import build_day_axis
from domain.services.layout_checks import find_column_collisions

app = typer.Typer(no_args_is_help=True)
console = Console()


def _configure(config_path: Optional[Path], log_level: Optional[str]) -> AppSettings:
    settings = load_settings(config_path)
    logging.basicConfig(level=(log_level or settings.log_level).upper())
    return settings


def _load_schedule(input_path: Path) -> DaySchedule:
    if not input_path.exists():
        console.print(f"[red]File not found:[/] {input_path}")
        raise typer.Exit(code=1)
    try:
        return FileSystemScheduleRepository().load_by_path(input_path)
    except (ValidationError, ValueError) as exc:
        console.print(f"[red]Invalid schedule:[/] {exc}")
        raise typer.Exit(code=1) from exc


def _render_table(schedule: DaySchedule, plan: DayLayoutPlan) -> Table:
    details = schedule.events_by_id()
    table = Table(title=f"Layout {plan.day}".strip())
    table.add_column("Event")
    table.add_column("Title")
    table.add_column("Start", justify="right")
    table.add_column("End", justify="right")
    table.add_column("Column", justify="right")
    table.add_column("Columns", justify="right")
    table.add_column("Left %", justify="right")
    table.add_column("Width %", justify="right")
    for event, geometry in zip(plan.events, plan.geometry):
        scheduled = details.get(event.event_id)
        table.add_row(
            str(event.event_id),
            scheduled.title if scheduled else "",
            str(event.start),
            str(event.end),
            str(event.column),
            str(event.column_count),
            f"{geometry.left_percent:g}",
            f"{geometry.width_percent:g}",
        )
    return table


@app.command("layout")
def layout(
    input_path: Path = typer.Argument(..., help="Day schedule JSON file."),
    output_path: Optional[Path] = typer.Option(
        None, "--output", "-o", help="Write the layout plan as JSON instead of printing a table.",
    ),
    config_path: Optional[Path] = typer.Option(None, "--config", help="YAML settings file."),
    log_level: Optional[str] = typer.Option(None, "--log-level", help="Logging level."),
) -> None:
    settings = _configure(config_path, log_level)
    schedule = _load_schedule(input_path)
    engine = ColumnPackingLayoutEngine(settings.calendar.to_layout_config())
    plan = engine.build_plan(schedule.to_events(), day=schedule.day)

    if output_path is None:
        console.print(_render_table(schedule, plan))
        return
    FileSystemLayoutRepository().save(plan, output_path)
    console.print(f"[green]Wrote[/] {output_path}")


@app.command("layout-dir")
def layout_dir(
    input_dir: Path = typer.Argument(..., help="Directory with day schedule JSON files."),
    output_dir: Optional[Path] = typer.Option(
        None, help="Directory to write layout plans. Defaults to calendar.output_dir.",
    ),
    config_path: Optional[Path] = typer.Option(None, "--config", help="YAML settings file."),
    log_level: Optional[str] = typer.Option(None, "--log-level", help="Logging level."),
) -> None:
    settings = _configure(config_path, log_level)
    try:
        pairs = FileSystemScheduleRepository().load_all_with_paths(input_dir)
    except (ValidationError, ValueError) as exc:
        console.print(f"[red]Invalid schedule in {input_dir}:[/] {exc}")
        raise typer.Exit(code=1) from exc
    if not pairs:
        console.print(f"[yellow]No schedule files found in {input_dir}[/]")
        raise typer.Exit(code=0)

    target_dir = output_dir or settings.calendar.output_dir
    target_dir.mkdir(parents=True, exist_ok=True)
    engine = ColumnPackingLayoutEngine(settings.calendar.to_layout_config())
    layout_repo = FileSystemLayoutRepository()
    for path, schedule in pairs:
        plan = engine.build_plan(schedule.to_events(), day=schedule.day)
        target_path = target_dir / f"{path.stem}.layout.json"
        layout_repo.save(plan, target_path)
        console.print(f"[green]Wrote[/] {target_path}")


@app.command("validate")
def validate(
    input_path: Path = typer.Argument(..., help="Day schedule JSON file to validate."),
) -> None:
    schedule = _load_schedule(input_path)
    plan = ColumnPackingLayoutEngine().build_plan(schedule.to_events(), day=schedule.day)
    collisions = find_column_collisions(plan.events)
    if collisions:
        for collision in collisions:
            console.print(
                f"[red]Collision in column {collision.column}:[/] "
                f"{collision.first_event_id} / {collision.second_event_id}"
            )
        raise typer.Exit(code=1)
    console.print(
        f"[green]Valid schedule:[/] {input_path} "
        f"({len(plan.events)} events, {plan.cluster_count} clusters)"
    )


@app.command("axis")
def axis(
    start_hour: Optional[int] = typer.Option(None, help="First hour shown on the day axis."),
    end_hour: Optional[int] = typer.Option(None, help="Last hour shown on the day axis."),
    config_path: Optional[Path] = typer.Option(None, "--config", help="YAML settings file."),
) -> None:
    settings = load_settings(config_path)
    first = settings.calendar.start_hour if start_hour is None else start_hour
    last = settings.calendar.end_hour if end_hour is None else end_hour
    try:
        labels = build_day_axis(first, last)
    except ValueError as exc:
        console.print(f"[red]Invalid hours:[/] {exc}")
        raise typer.Exit(code=1) from exc
    for label in labels:
        suffix = f" {label.meridiem}" if label.meridiem else ""
        console.print(f"{label.offset:>4}  {label.text}{suffix}")


@app.command("serve")
def serve(
    host: str = typer.Option("127.0.0.1", help="Bind address."),
    port: int = typer.Option(8080, help="Bind port."),
    config_path: Optional[Path] = typer.Option(None, "--config", help="YAML settings file."),
) -> None:
    import uvicorn

    from app.web_main import create_app

    settings = _configure(config_path, None)
    uvicorn.run(create_app(settings), host=host, port=port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    app()
