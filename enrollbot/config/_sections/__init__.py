"""Config section models."""

from enrollbot.config._sections.channels import ChannelSettings
from enrollbot.config._sections.discord import DiscordSettings
from enrollbot.config._sections.logging import LoggingSettings
from enrollbot.config._sections.roles import RoleSettings
from enrollbot.config._sections.storage import StorageSettings

__all__ = [
    "ChannelSettings",
    "DiscordSettings",
    "LoggingSettings",
    "RoleSettings",
    "StorageSettings",
]
