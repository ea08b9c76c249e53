"""Root EnrollBotSettings model."""

from __future__ import annotations

from typing import Any

from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from enrollbot.config._loader import ConfigFileSettingsSource
from enrollbot.config._sections import (
    ChannelSettings,
    DiscordSettings,
    LoggingSettings,
    RoleSettings,
    StorageSettings,
)

# Discord allows 25 choices per option; one is taken by "Other / N/A"
MAX_UNIVERSITY_CHOICES = 24


class ConfigurationError(Exception):
    """Raised at startup when required settings are missing or malformed."""


class EnrollBotSettings(BaseSettings):
    model_config = {"env_nested_delimiter": "__", "case_sensitive": False, "extra": "ignore", "frozen": True}

    discord: DiscordSettings = Field(default_factory=DiscordSettings)
    channels: ChannelSettings = Field(default_factory=ChannelSettings)
    roles: RoleSettings = Field(default_factory=RoleSettings)
    storage: StorageSettings = Field(default_factory=StorageSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
        **kwargs: Any,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (
            env_settings,
            ConfigFileSettingsSource(settings_cls),
            init_settings,
        )

    def check_required(self) -> None:
        """Raise ConfigurationError listing every missing or invalid setting."""
        problems = []
        if not self.discord.bot_token:
            problems.append("discord.bot_token")
        if not self.discord.guild_id:
            problems.append("discord.guild_id")
        for name in ("enroll_channel_id", "reading_channel_id", "destin_channel_id"):
            if not getattr(self.channels, name):
                problems.append(f"channels.{name}")
        if not self.roles.entry_role_id:
            problems.append("roles.entry_role_id")
        if len(self.roles.universities) > MAX_UNIVERSITY_CHOICES:
            problems.append(f"roles.universities (at most {MAX_UNIVERSITY_CHOICES} entries)")
        for university, role_id in self.roles.universities.items():
            if not role_id:
                problems.append(f"roles.universities[{university!r}]")
        if self.storage.pending_ttl_seconds <= 0:
            problems.append("storage.pending_ttl_seconds")

        if problems:
            raise ConfigurationError(f"Missing or invalid settings: {', '.join(problems)}")
