from pathlib import Path
from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from lexideck.application.scheduler import SchedulerTuning
from lexideck.domain.constants import (
    DEFAULT_BACK_COLUMN,
    DEFAULT_FRONT_COLUMN,
    EASY_FIRST_INTERVAL_DAYS,
    EASY_GROWTH_BASE,
    FAIL_INTERVAL_MINUTES,
    GOOD_FIRST_INTERVAL_HOURS,
    GOOD_GROWTH_BASE,
    GOOD_SECOND_INTERVAL_DAYS,
    HARD_INTERVAL_MINUTES,
    MAX_ACTIVE_LEARNING_ITEMS,
    REQUEST_TIMEOUT,
)
from lexideck.domain.models import LearningDirection


def default_progress_path() -> Path:
    return Path.home() / ".config/lexideck/progress.json"


def config_files() -> list[Path]:
    """Candidate config files, highest priority first."""
    return [
        Path.home() / ".config/lexideck/config.toml",
        Path.home() / ".lexideck.toml",
    ]


class AppConfig(BaseSettings):
    """
    Configuration model for lexideck.
    Supports loading from:
    1. Environment variables (LEXIDECK_*)
    2. Config file (~/.config/lexideck/config.toml)
    3. Manual overrides (CLI)
    """

    model_config = SettingsConfigDict(
        env_prefix="LEXIDECK_",
        extra="ignore",
    )

    # Catalog source (catalog_path wins over catalog_url; neither -> bundled sample)
    catalog_url: str | None = None
    catalog_path: Path | None = None
    front_column: int = Field(default=DEFAULT_FRONT_COLUMN, ge=0)
    back_column: int = Field(default=DEFAULT_BACK_COLUMN, ge=0)
    request_timeout: float = Field(default=REQUEST_TIMEOUT, gt=0)

    # Persistence
    progress_path: Path = Field(default_factory=default_progress_path)

    # Session
    direction: LearningDirection = LearningDirection.PRIMARY
    verbose: int = 1

    # Scheduler tuning
    fail_interval_minutes: float = Field(default=FAIL_INTERVAL_MINUTES, gt=0)
    hard_interval_minutes: float = Field(default=HARD_INTERVAL_MINUTES, gt=0)
    good_first_interval_hours: float = Field(default=GOOD_FIRST_INTERVAL_HOURS, gt=0)
    good_second_interval_days: float = Field(default=GOOD_SECOND_INTERVAL_DAYS, gt=0)
    good_growth_base: float = Field(default=GOOD_GROWTH_BASE, gt=1)
    easy_first_interval_days: float = Field(default=EASY_FIRST_INTERVAL_DAYS, gt=0)
    easy_growth_base: float = Field(default=EASY_GROWTH_BASE, gt=1)
    max_active_learning: int = Field(default=MAX_ACTIVE_LEARNING_ITEMS, ge=0)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        from pydantic_settings import TomlConfigSettingsSource

        # Find the first existing file
        toml_file = next((f for f in config_files() if f.exists()), None)

        # Earlier sources take priority: overrides > env > file
        if toml_file:
            return (
                init_settings,
                env_settings,
                TomlConfigSettingsSource(settings_cls, toml_file=toml_file),
            )
        return (
            init_settings,
            env_settings,
        )

    @field_validator("catalog_path", mode="before")
    @classmethod
    def resolve_catalog_path(cls, v: Any) -> Path | None:
        if v is None or v == "":
            return None
        return Path(v).expanduser().resolve()

    @field_validator("progress_path", mode="before")
    @classmethod
    def resolve_progress_path(cls, v: Any) -> Path:
        if v is None or v == "":
            return default_progress_path()
        return Path(v).expanduser().resolve()

    def tuning(self) -> SchedulerTuning:
        return SchedulerTuning(
            fail_interval_minutes=self.fail_interval_minutes,
            hard_interval_minutes=self.hard_interval_minutes,
            good_first_interval_hours=self.good_first_interval_hours,
            good_second_interval_days=self.good_second_interval_days,
            good_growth_base=self.good_growth_base,
            easy_first_interval_days=self.easy_first_interval_days,
            easy_growth_base=self.easy_growth_base,
            max_active_learning=self.max_active_learning,
        )


def resolve_config(cli_overrides: dict[str, Any] | None = None) -> AppConfig:
    """
    Multi-layered configuration resolution.
    1. Defaults in AppConfig
    2. ~/.config/lexideck/config.toml (if exists)
    3. Environment variables (LEXIDECK_*)
    4. cli_overrides (passed from Typer; None values are ignored)
    """
    overrides = {k: v for k, v in (cli_overrides or {}).items() if v is not None}
    return AppConfig(**overrides)
