"""
Logging configuration with console and Discord channel handlers.

Usage:
    from enrollbot.config.logging import get_logger
    logger = get_logger("router")
    logger.info("Relayed link", extra={"channel_id": 123})
"""

from __future__ import annotations

import asyncio
import logging
import os
import re
import sys
from datetime import datetime
from queue import Empty, Queue
from typing import Any

# ANSI color codes for console output
COLORS = {
    "DEBUG": "\033[36m",  # Cyan
    "INFO": "\033[32m",  # Green
    "WARNING": "\033[33m",  # Yellow
    "ERROR": "\033[31m",  # Red
    "CRITICAL": "\033[35m",  # Magenta
    "RESET": "\033[0m",
}

# Colors keyed by the last component of the logger name
TAG_COLORS = {
    "bot": "\033[94m",  # Blue
    "commands": "\033[95m",  # Magenta
    "router": "\033[96m",  # Cyan
    "finalizer": "\033[93m",  # Yellow
    "store": "\033[92m",  # Green
    "pending": "\033[97m",  # White
    "discord": "\033[93m",  # Yellow
}

ANSI_ESCAPE = re.compile(r"\x1b\[[0-9;]*m")

# Discord message limit is 2000 chars
DISCORD_MSG_LIMIT = 2000


class ColoredConsoleFormatter(logging.Formatter):
    """Formatter that adds colors and a [tag] prefix per logger."""

    def format(self, record: logging.LogRecord) -> str:
        level_color = COLORS.get(record.levelname, "")
        reset = COLORS["RESET"]

        tag = record.name
        tag_color = TAG_COLORS.get(tag.rsplit(".", 1)[-1], "\033[37m")

        timestamp = datetime.now().strftime("%H:%M:%S")
        level_str = f"{level_color}{record.levelname:8}{reset}"
        tag_str = f"{tag_color}[{tag}]{reset}"

        extra_parts = []
        if getattr(record, "user_id", None):
            extra_parts.append(f"user={record.user_id}")
        if getattr(record, "guild_id", None):
            extra_parts.append(f"guild={record.guild_id}")
        if getattr(record, "channel_id", None):
            extra_parts.append(f"channel={record.channel_id}")

        extra_str = f" ({', '.join(extra_parts)})" if extra_parts else ""
        msg = f"{timestamp} {level_str} {tag_str} {record.getMessage()}{extra_str}"

        if record.exc_info:
            msg += "\n" + self.formatException(record.exc_info)

        return msg


class DiscordLogHandler(logging.Handler):
    """Logging handler that mirrors log lines to a Discord channel.

    Records are queued from any thread and drained by a background task on
    the bot's event loop in small batches to stay under channel rate limits.
    """

    def __init__(self, level: int = logging.INFO):
        super().__init__(level)
        self._queue: Queue[str] = Queue(maxsize=500)
        self._bot: Any = None
        self._channel_id: int | None = None
        self._shutdown = False
        self._task: asyncio.Task[None] | None = None

    def set_bot(self, bot: Any, channel_id: int, loop: asyncio.AbstractEventLoop) -> None:
        """Set the Discord bot client and start the background task."""
        self._bot = bot
        self._channel_id = channel_id
        if self._task is None:
            self._task = loop.create_task(self._worker())

    async def _worker(self) -> None:
        """Background worker that sends queued lines to Discord."""
        batch_size = 5
        flush_interval = 1.0

        while not self._shutdown:
            await asyncio.sleep(flush_interval)

            items: list[str] = []
            while len(items) < batch_size:
                try:
                    items.append(self._queue.get_nowait())
                except Empty:
                    break

            if items:
                await self._send_items(items)

    async def _send_items(self, items: list[str]) -> None:
        channel = self._bot.get_channel(self._channel_id) if self._bot else None
        if channel is None:
            return

        for item in items:
            try:
                await channel.send(item)
            except Exception as e:
                print(f"[logging] Failed to send to Discord: {e}", file=sys.stderr)

    def format_discord_message(self, record: logging.LogRecord) -> str:
        """Format a log record as a single Discord markdown line."""
        timestamp = datetime.now().strftime("%H:%M:%S")
        message = ANSI_ESCAPE.sub("", record.getMessage())

        if record.levelname in ("ERROR", "CRITICAL"):
            text = f"`{timestamp}` **[{record.name}]** ```diff\n- {message}```"
        elif record.levelname == "WARNING":
            text = f"`{timestamp}` **[{record.name}]** ```fix\n{message}```"
        else:
            text = f"`{timestamp}` **[{record.name}]** {message}"

        if len(text) > DISCORD_MSG_LIMIT:
            text = text[: DISCORD_MSG_LIMIT - 10] + "..."
        return text

    def emit(self, record: logging.LogRecord) -> None:
        """Queue a log record for Discord."""
        if self._shutdown or self._bot is None:
            return

        # Lines from discord.* would feed back into the channel send path
        if record.name.startswith("discord"):
            return

        try:
            msg = self.format_discord_message(record)
            try:
                self._queue.put_nowait(msg)
            except Exception:
                pass  # Drop log if queue is full
        except Exception:
            self.handleError(record)

    async def send_direct(self, message: str) -> None:
        """Send a message directly to the log channel (for startup/shutdown)."""
        if self._bot and self._channel_id:
            try:
                channel = self._bot.get_channel(self._channel_id)
                if channel:
                    await channel.send(f"**{message}**")
            except Exception as e:
                print(f"[logging] Failed to send direct message: {e}", file=sys.stderr)

    def shutdown(self) -> None:
        """Stop the background task."""
        self._shutdown = True
        if self._task:
            self._task.cancel()


# Global state
_discord_handler: DiscordLogHandler | None = None
_initialized = False


def _resolve_level(level: str | int | None) -> int:
    if level is None:
        level = os.getenv("LOG_LEVEL", "INFO")
    if isinstance(level, int):
        return level
    return getattr(logging, level.upper(), logging.INFO)


def init_logging(console_level: str | int | None = None, force: bool = False) -> None:
    """Initialize the logging system with the colored console handler."""
    global _initialized

    if _initialized and not force:
        return

    level = _resolve_level(console_level)

    # Clear any existing handlers on root logger (from basicConfig or other sources)
    root_logger = logging.getLogger()
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(ColoredConsoleFormatter())

    root_logger.setLevel(logging.DEBUG)
    root_logger.addHandler(console_handler)
    if _discord_handler is not None:
        root_logger.addHandler(_discord_handler)

    # Reduce noise from third-party libraries
    logging.getLogger("discord").setLevel(logging.WARNING)
    logging.getLogger("discord.gateway").setLevel(logging.WARNING)
    logging.getLogger("discord.client").setLevel(logging.WARNING)
    logging.getLogger("discord.http").setLevel(logging.WARNING)

    _initialized = True


def init_discord_logging(bot: Any, channel_id: int, loop: asyncio.AbstractEventLoop) -> DiscordLogHandler | None:
    """Initialize the Discord log handler after the bot is ready.

    Args:
        bot: Discord bot client
        channel_id: Discord channel ID to send logs to
        loop: asyncio event loop

    Returns:
        The DiscordLogHandler instance, or None if channel_id is unset
    """
    global _discord_handler

    if not channel_id:
        return None

    if _discord_handler is None:
        _discord_handler = DiscordLogHandler(level=logging.INFO)
        logging.getLogger().addHandler(_discord_handler)

    _discord_handler.set_bot(bot, channel_id, loop)
    return _discord_handler


def get_logger(name: str) -> logging.Logger:
    """Get a logger under the enrollbot namespace."""
    if not _initialized:
        init_logging()
    return logging.getLogger(f"enrollbot.{name}")


def shutdown_logging() -> None:
    """Gracefully shutdown logging."""
    global _discord_handler
    if _discord_handler:
        _discord_handler.shutdown()
        logging.getLogger().removeHandler(_discord_handler)
        _discord_handler = None
