"""Pytest configuration and fixtures for enrollbot tests."""

import os
from unittest.mock import AsyncMock, MagicMock

import discord
import pytest

from enrollbot.config import EnrollBotSettings, reset_settings
from enrollbot.core.models import EnrollmentForm

GUILD_ID = 1000
ENROLL_CHANNEL_ID = 2001
READING_CHANNEL_ID = 2002
DESTIN_CHANNEL_ID = 2003
ENTRY_ROLE_ID = 3000
ACME_ROLE_ID = 3001
GLOBEX_ROLE_ID = 3002
BOT_USER_ID = 9999

CONFIG_SECTIONS = ("DISCORD", "CHANNELS", "ROLES", "STORAGE", "LOGGING")


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch, tmp_path):
    """Keep settings away from the developer's environment and config files."""
    monkeypatch.setenv("ENROLLBOT_CONFIG", str(tmp_path / "missing.yaml"))
    for key in list(os.environ):
        if key.split("__", 1)[0].upper() in CONFIG_SECTIONS:
            monkeypatch.delenv(key, raising=False)
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def settings(tmp_path):
    """A complete, valid configuration."""
    return EnrollBotSettings(
        discord={"bot_token": "test-token", "guild_id": GUILD_ID},
        channels={
            "enroll_channel_id": ENROLL_CHANNEL_ID,
            "reading_channel_id": READING_CHANNEL_ID,
            "destin_channel_id": DESTIN_CHANNEL_ID,
        },
        roles={
            "entry_role_id": ENTRY_ROLE_ID,
            "universities": {"Acme University": ACME_ROLE_ID, "Globex Institute": GLOBEX_ROLE_ID},
        },
        storage={"enrollments_path": str(tmp_path / "enrollments.json")},
    )


@pytest.fixture
def sample_form():
    """A typical /enrollment submission."""
    return EnrollmentForm(
        name="Alice B",
        email="a@x.edu",
        interests="robotics",
        university="Acme University",
        add_to_email_distro=True,
    )


def http_error(cls=discord.HTTPException, status=500, text="boom"):
    """Build a py-cord HTTP error without a real response."""
    response = MagicMock()
    response.status = status
    response.reason = "Error"
    return cls(response, text)


def make_user(user_id, name, bot=False):
    user = MagicMock()
    user.id = user_id
    user.name = name
    user.bot = bot
    return user


def make_member(user_id=42):
    """A guild member whose role and edit calls are awaitable."""
    member = MagicMock()
    member.id = user_id
    member.add_roles = AsyncMock()
    member.remove_roles = AsyncMock()
    member.edit = AsyncMock()
    return member
