from typing import Annotated

from pydantic import Field, TypeAdapter, field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Trailing window for co-activity signals: [today - N days, today]
    SIGNAL_WINDOW_DAYS: int = Field(7, ge=1)
    # Cap for the cross-circle "recent signals" view
    RECENT_SIGNALS_LIMIT: int = Field(10, ge=1)
    # Max hour difference for a same_hour signal
    SAME_HOUR_TOLERANCE: int = Field(1, ge=0, le=23)

    # Activity stream, rhythm and weekly dashboard: last N calendar days including today
    ACTIVITY_WINDOW_DAYS: int = Field(7, ge=1)

    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = False

    model_config = {"env_prefix": "COACTIVITY_", "env_file": ".env", "extra": "ignore"}

    @field_validator("LOG_LEVEL")
    @classmethod
    def _normalize_log_level(cls, value: str) -> str:
        """Accept ``debug`` / ``Info`` etc. from the environment."""
        level = value.strip().upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"unknown log level: {value}")
        return level


settings = Settings()


def resolve_override(name: str, value: int | None) -> int:
    """Return ``value`` checked against the bounds of setting ``name``, or the setting itself.

    Raises pydantic ``ValidationError`` (a ``ValueError``) when ``value`` is out of range.
    """
    if value is None:
        return getattr(settings, name)
    field = Settings.model_fields[name]
    return TypeAdapter(Annotated[(field.annotation, *field.metadata)]).validate_python(value)
