"""Tests for configuration loading."""

from unittest.mock import patch

import pytest
from pydantic import ValidationError

from enrollbot.config import ConfigurationError, EnrollBotSettings, get_settings, reset_settings
from enrollbot.config._loader import find_config_file


class TestEnrollBotSettings:
    """Tests for EnrollBotSettings."""

    def test_defaults(self):
        config = EnrollBotSettings()

        assert config.discord.bot_token == ""
        assert config.roles.universities == {}
        assert config.storage.enrollments_path == "enrollments.json"
        assert config.storage.pending_ttl_seconds == 900.0

    @patch.dict(
        "os.environ",
        {
            "DISCORD__BOT_TOKEN": "abc",
            "DISCORD__GUILD_ID": "123",
            "CHANNELS__ENROLL_CHANNEL_ID": "456",
            "ROLES__UNIVERSITIES": '{"Acme University": 789}',
        },
    )
    def test_env_override(self):
        config = EnrollBotSettings()

        assert config.discord.bot_token == "abc"
        assert config.discord.guild_id == 123
        assert config.channels.enroll_channel_id == 456
        assert config.roles.universities == {"Acme University": 789}

    def test_yaml_file(self, tmp_path, monkeypatch):
        path = tmp_path / "enrollbot.yaml"
        path.write_text(
            "discord:\n"
            "  bot_token: from-yaml\n"
            "  guild_id: 5\n"
            "roles:\n"
            "  entry_role_id: 10\n"
            "  universities:\n"
            "    Acme University: 11\n"
        )
        monkeypatch.setenv("ENROLLBOT_CONFIG", str(path))

        config = EnrollBotSettings()

        assert config.discord.bot_token == "from-yaml"
        assert config.roles.entry_role_id == 10
        assert config.roles.universities == {"Acme University": 11}

    def test_env_beats_yaml(self, tmp_path, monkeypatch):
        path = tmp_path / "enrollbot.yaml"
        path.write_text("discord:\n  bot_token: from-yaml\n")
        monkeypatch.setenv("ENROLLBOT_CONFIG", str(path))
        monkeypatch.setenv("DISCORD__BOT_TOKEN", "from-env")

        assert EnrollBotSettings().discord.bot_token == "from-env"

    @patch.dict("os.environ", {"DISCORD__GUILD_ID": "not-a-number"})
    def test_malformed_id(self):
        with pytest.raises(ValidationError):
            EnrollBotSettings()

    def test_frozen(self, settings):
        with pytest.raises(ValidationError):
            settings.discord.guild_id = 1


class TestCheckRequired:
    """Tests for EnrollBotSettings.check_required."""

    def test_complete_config_passes(self, settings):
        settings.check_required()

    def test_lists_missing_settings(self):
        with pytest.raises(ConfigurationError) as exc_info:
            EnrollBotSettings().check_required()

        message = str(exc_info.value)
        for name in (
            "discord.bot_token",
            "discord.guild_id",
            "channels.enroll_channel_id",
            "channels.reading_channel_id",
            "channels.destin_channel_id",
            "roles.entry_role_id",
        ):
            assert name in message

    def test_too_many_universities(self, settings):
        config = settings.model_copy(
            update={"roles": settings.roles.model_copy(update={"universities": {f"U{i}": i + 1 for i in range(25)}})}
        )

        with pytest.raises(ConfigurationError, match="roles.universities"):
            config.check_required()


class TestGetSettings:
    """Tests for the settings singleton."""

    def test_returns_same_instance(self):
        assert get_settings() is get_settings()

    def test_reset(self):
        first = get_settings()
        reset_settings()

        assert get_settings() is not first


class TestConfigFile:
    """Tests for config file discovery."""

    def test_toml_file(self, tmp_path, monkeypatch):
        path = tmp_path / "enrollbot.toml"
        path.write_text('[discord]\nbot_token = "from-toml"\n\n[roles.universities]\n"Acme University" = 11\n')
        monkeypatch.setenv("ENROLLBOT_CONFIG", str(path))

        config = EnrollBotSettings()

        assert config.discord.bot_token == "from-toml"
        assert config.roles.universities == {"Acme University": 11}

    def test_discovers_file_in_cwd(self, tmp_path, monkeypatch):
        (tmp_path / "enrollbot.yml").write_text("storage:\n  enrollments_path: data.json\n")
        monkeypatch.delenv("ENROLLBOT_CONFIG")
        monkeypatch.chdir(tmp_path)

        assert find_config_file() == tmp_path / "enrollbot.yml"

    def test_explicit_missing_path(self, tmp_path, monkeypatch):
        (tmp_path / "enrollbot.yaml").write_text("discord:\n  bot_token: x\n")
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("ENROLLBOT_CONFIG", str(tmp_path / "nope.yaml"))

        assert find_config_file() is None
