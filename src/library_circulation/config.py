"""Configuration management for the library circulation core.

Settings cover the ambient concerns around the pure workflows:
1. Logging - level and debug switch
2. Clock - the timezone used by the circulation desk's default clock
3. Tracing - whether desk commands run inside logfire spans

Values come from ``LIBRARY_CIRCULATION_*`` environment variables or a
``.env`` file, validated with Pydantic v2.
"""

from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class LibrarySettings(BaseSettings):
    """Runtime settings for the circulation desk."""

    model_config = SettingsConfigDict(
        # Use LIBRARY_CIRCULATION_ prefix for all env vars
        env_prefix="LIBRARY_CIRCULATION_",
        # Load from .env file if present
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # === Logging Configuration ===

    debug: bool = Field(
        default=False,
        description="Enable debug logging for every state transition",
    )

    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR)",
        pattern=r"^(DEBUG|INFO|WARNING|ERROR)$",
    )

    # === Clock Configuration ===

    timezone: str = Field(
        default="UTC",
        description="IANA timezone for timestamps taken by the desk clock",
        examples=["UTC", "Europe/London", "America/New_York"],
    )

    # === Observability Configuration ===

    trace_workflows: bool = Field(
        default=True,
        description="Wrap circulation desk commands in logfire spans",
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        """Accept log levels in any case."""
        if isinstance(v, str):
            return v.strip().upper()
        return v

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, v: str) -> str:
        """Reject names the zoneinfo database does not know."""
        try:
            ZoneInfo(v)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ValueError(f"Unknown timezone: {v}") from e
        return v

    # === Computed Properties ===

    @property
    def is_development(self) -> bool:
        return self.debug or self.log_level == "DEBUG"

    @property
    def effective_log_level(self) -> str:
        """DEBUG when debug is switched on, otherwise the configured level."""
        return "DEBUG" if self.debug else self.log_level

    @property
    def tzinfo(self) -> ZoneInfo:
        return ZoneInfo(self.timezone)


# === Global Configuration Instance ===


class _ConfigStore:
    """Internal storage for configuration singleton."""

    _instance: LibrarySettings | None = None


def get_config() -> LibrarySettings:
    """Get or create the global configuration instance."""
    if _ConfigStore._instance is None:  # type: ignore[reportPrivateUsage]
        _ConfigStore._instance = LibrarySettings()  # type: ignore[reportPrivateUsage]
    return _ConfigStore._instance  # type: ignore[reportPrivateUsage]


def reset_config() -> None:
    """Reset configuration (useful for testing)."""
    _ConfigStore._instance = None  # type: ignore[reportPrivateUsage]
