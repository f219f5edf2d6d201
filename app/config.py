from __future__ import annotations

import os
from pathlib import Path
from typing import ClassVar

from pydantic import BaseModel, Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic_settings.sources import PydanticBaseSettingsSource, YamlConfigSettingsSource

from adapters.layout.column_packing import LayoutConfig
from domain.services.day_axis import DEFAULT_END_HOUR, DEFAULT_START_HOUR, validate_hours

DEFAULT_CONFIG_PATH = Path("config/calendar/app.yaml")
CONFIG_PATH_ENV = "DAYLAYOUT_CONFIG_PATH"


class CalendarSettings(BaseModel):
    title: str = "Day Layout"
    start_hour: int = DEFAULT_START_HOUR
    end_hour: int = DEFAULT_END_HOUR
    pixels_per_minute: float = Field(default=1.0, gt=0)
    width_precision: int | None = Field(default=2, ge=0)
    sample_schedule_path: Path | None = None
    output_dir: Path = Path("data/layouts")
    # When set, offsets are minutes since midnight and geometry starts at start_hour.
    offsets_from_midnight: bool = False

    @field_validator("sample_schedule_path", mode="before")
    @classmethod
    def normalize_optional_path(cls, value: object) -> object:
        if value is None or (isinstance(value, str) and not value.strip()):
            return None
        return value

    @model_validator(mode="after")
    def ensure_hour_range(self) -> CalendarSettings:
        validate_hours(self.start_hour, self.end_hour)
        return self

    @property
    def axis_start_minutes(self) -> int:
        return self.start_hour * 60

    def to_layout_config(self) -> LayoutConfig:
        return LayoutConfig(
            pixels_per_minute=self.pixels_per_minute,
            width_precision=self.width_precision,
            axis_start=self.axis_start_minutes if self.offsets_from_midnight else 0,
        )


class AppSettings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="DAYLAYOUT_", env_nested_delimiter="__")

    calendar: CalendarSettings = CalendarSettings()
    log_level: str = "INFO"

    _yaml_path: ClassVar[Path | None] = None

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, value: object) -> str:
        return str(value).upper() if value else "INFO"

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        sources: list[PydanticBaseSettingsSource] = [
            init_settings,
            env_settings,
            dotenv_settings,
            file_secret_settings,
        ]
        if cls._yaml_path:
            sources.append(YamlConfigSettingsSource(settings_cls, yaml_file=cls._yaml_path))
        return tuple(sources)


def load_settings(config_path: Path | None = None) -> AppSettings:
    env_path = os.getenv(CONFIG_PATH_ENV)
    resolved_path: Path | None = None

    if config_path is not None:
        resolved_path = config_path
    elif env_path:
        resolved_path = Path(env_path)
    elif DEFAULT_CONFIG_PATH.exists():
        resolved_path = DEFAULT_CONFIG_PATH

    previous = AppSettings._yaml_path
    try:
        if resolved_path is not None:
            if not resolved_path.exists():
                msg = f"Config file not found: {resolved_path}"
                raise FileNotFoundError(msg)
            AppSettings._yaml_path = resolved_path
        return AppSettings()
    finally:
        AppSettings._yaml_path = previous
