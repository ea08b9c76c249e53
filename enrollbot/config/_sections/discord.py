"""Discord connection configuration models."""

from pydantic import BaseModel, ConfigDict


class DiscordSettings(BaseModel):
    model_config = ConfigDict(frozen=True)

    bot_token: str = ""
    guild_id: int = 0
    command_prefix: str = "!"
