"""Enrollment storage configuration models."""

from pydantic import BaseModel, ConfigDict


class StorageSettings(BaseModel):
    model_config = ConfigDict(frozen=True)

    enrollments_path: str = "enrollments.json"
    pending_ttl_seconds: float = 900.0
