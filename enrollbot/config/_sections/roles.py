"""Role configuration models."""

from pydantic import BaseModel, ConfigDict, Field


class RoleSettings(BaseModel):
    model_config = ConfigDict(frozen=True)

    # Held by new members until a university is assigned
    entry_role_id: int = 0
    # University display name -> role ID, also the /enrollment choices
    universities: dict[str, int] = Field(default_factory=dict)
