"""Unified configuration for the enrollment bot.

Usage:
    from enrollbot.config import get_settings

    s = get_settings()
    s.discord.bot_token      # "..."
    s.roles.universities     # {"Acme University": 1234, ...}
"""

from __future__ import annotations

from enrollbot.config._settings import ConfigurationError, EnrollBotSettings

_settings: EnrollBotSettings | None = None


def get_settings() -> EnrollBotSettings:
    """Return the singleton EnrollBotSettings instance (created on first call)."""
    global _settings
    if _settings is None:
        _settings = EnrollBotSettings()
    return _settings


def reset_settings() -> None:
    """Force re-creation of the settings singleton (useful for tests)."""
    global _settings
    _settings = None


__all__ = ["ConfigurationError", "EnrollBotSettings", "get_settings", "reset_settings"]
