"""Tests for logging configuration."""

import logging
from unittest.mock import MagicMock

from enrollbot.config.logging import ColoredConsoleFormatter, DiscordLogHandler, get_logger


def make_record(name="enrollbot.router", level=logging.INFO, msg="hello", **extra):
    record = logging.LogRecord(name, level, __file__, 1, msg, None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestColoredConsoleFormatter:
    """Tests for ColoredConsoleFormatter."""

    def test_includes_tag_and_message(self):
        output = ColoredConsoleFormatter().format(make_record())

        assert "[enrollbot.router]" in output
        assert "hello" in output

    def test_includes_extras(self):
        output = ColoredConsoleFormatter().format(make_record(user_id=42, channel_id=7))

        assert "user=42" in output
        assert "channel=7" in output


class TestDiscordLogHandler:
    """Tests for DiscordLogHandler."""

    def test_error_lines_are_highlighted(self):
        text = DiscordLogHandler().format_discord_message(make_record(level=logging.ERROR, msg="bad"))

        assert "```diff\n- bad```" in text

    def test_long_lines_are_truncated(self):
        text = DiscordLogHandler().format_discord_message(make_record(msg="x" * 5000))

        assert len(text) <= 2000
        assert text.endswith("...")

    def test_emit_without_bot_is_noop(self):
        handler = DiscordLogHandler()

        handler.emit(make_record())

        assert handler._queue.empty()

    def test_emit_queues_when_bot_set(self):
        handler = DiscordLogHandler()
        handler._bot = MagicMock()

        handler.emit(make_record())
        handler.emit(make_record(name="discord.gateway"))

        assert handler._queue.qsize() == 1


def test_get_logger_namespace():
    assert get_logger("store").name == "enrollbot.store"
