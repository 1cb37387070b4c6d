"""Configuration management using Pydantic Settings.

This module provides centralized configuration for the league statistics
engine, supporting environment variables and .env file loading.

Example:
    >>> from ffu_stats.config import get_settings
    >>> settings = get_settings()
    >>> print(settings.live_season)
    '2025'
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Literal
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

if TYPE_CHECKING:
    from ffu_stats.oracle.power import PowerRatingWeights


class Settings(BaseSettings):
    """Application configuration loaded from environment variables.

    All settings can be overridden via environment variables or .env file.
    Environment variables take precedence over .env file values.

    Attributes:
        data_dir: Root directory of the per-season JSON snapshots.
        live_season: The season currently in progress.
        playoff_cutoff: Worst regular-season rank that still makes playoffs.
        timezone: League timezone used to interpret naive clock readings.
        upr_weight_average: Power-rating weight of average weekly score.
        upr_weight_high_low: Power-rating weight of high plus low game.
        upr_weight_win_pct: Power-rating weight of win fraction.
        upr_weight_sos: Power-rating weight of strength of schedule.
        upr_divisor: Power-rating normalizing divisor.
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_dir: Directory for log files.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Data
    data_dir: str = Field(
        default="data",
        alias="FFU_DATA_DIR",
        description="Root directory of season snapshot files",
    )

    # League
    live_season: str = Field(
        default="2025",
        alias="FFU_LIVE_SEASON",
        pattern=r"^\d{4}$",
        description="Season currently in progress",
    )
    playoff_cutoff: int = Field(
        default=6,
        alias="FFU_PLAYOFF_CUTOFF",
        ge=1,
        le=16,
        description="Top N regular-season finishers that make the playoffs",
    )
    timezone: str = Field(
        default="America/New_York",
        alias="FFU_TIMEZONE",
        description="League timezone for schedule queries",
    )

    # Power rating weights
    upr_weight_average: float = Field(
        default=6.0,
        alias="UPR_WEIGHT_AVERAGE",
        ge=0.0,
        description="Weight of average weekly score",
    )
    upr_weight_high_low: float = Field(
        default=2.0,
        alias="UPR_WEIGHT_HIGH_LOW",
        ge=0.0,
        description="Weight of high game plus low game",
    )
    upr_weight_win_pct: float = Field(
        default=400.0,
        alias="UPR_WEIGHT_WIN_PCT",
        ge=0.0,
        description="Weight of win fraction",
    )
    upr_weight_sos: float = Field(
        default=0.0,
        alias="UPR_WEIGHT_SOS",
        ge=0.0,
        description="Weight of strength of schedule",
    )
    upr_divisor: float = Field(
        default=10.0,
        alias="UPR_DIVISOR",
        gt=0.0,
        description="Divisor applied to the weighted sum",
    )

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        alias="LOG_LEVEL",
        description="Logging level",
    )
    log_dir: str = Field(
        default="logs",
        alias="LOG_DIR",
        description="Directory for log files",
    )

    @field_validator("data_dir", "log_dir")
    @classmethod
    def validate_path(cls, v: str) -> str:
        """Ensure path strings are valid."""
        if not v or v.isspace():
            raise ValueError("Path cannot be empty or whitespace")
        return v

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, v: str) -> str:
        """Ensure the timezone name is known to the tz database."""
        try:
            ZoneInfo(v)
        except (ZoneInfoNotFoundError, ValueError):
            raise ValueError(f"Unknown timezone '{v}'") from None
        return v

    @property
    def data_dir_obj(self) -> Path:
        """Return data directory as Path object."""
        return Path(self.data_dir)

    @property
    def log_dir_obj(self) -> Path:
        """Return log directory as Path object."""
        return Path(self.log_dir)

    @property
    def tzinfo(self) -> ZoneInfo:
        """Return the league timezone."""
        return ZoneInfo(self.timezone)

    def power_weights(self) -> PowerRatingWeights:
        """Build power-rating weights from the configured values."""
        from ffu_stats.oracle.power import PowerRatingWeights

        return PowerRatingWeights(
            average_score=self.upr_weight_average,
            high_low=self.upr_weight_high_low,
            win_percentage=self.upr_weight_win_pct,
            strength_of_schedule=self.upr_weight_sos,
            divisor=self.upr_divisor,
        )

    def ensure_directories(self) -> None:
        """Create required directories if they don't exist."""
        self.log_dir_obj.mkdir(parents=True, exist_ok=True)


# Singleton pattern for settings
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get the application settings singleton.

    Returns:
        Settings instance loaded from environment.
    """
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Reset the settings singleton (useful for testing)."""
    global _settings
    _settings = None
