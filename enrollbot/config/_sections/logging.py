"""Logging configuration models."""

from pydantic import BaseModel, ConfigDict


class LoggingSettings(BaseModel):
    model_config = ConfigDict(frozen=True)

    level: str | None = None  # unset falls back to LOG_LEVEL, then INFO
    log_channel_id: int = 0
