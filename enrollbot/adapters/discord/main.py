"""Standalone entry point for the enrollment bot.

Usage:
    enrollbot
    python -m enrollbot

Configuration comes from the environment (and .env), then enrollbot.yaml:
    DISCORD__BOT_TOKEN, DISCORD__GUILD_ID
    CHANNELS__ENROLL_CHANNEL_ID, CHANNELS__READING_CHANNEL_ID, CHANNELS__DESTIN_CHANNEL_ID
    ROLES__ENTRY_ROLE_ID, ROLES__UNIVERSITIES='{"Acme University": 1234}'
"""

from __future__ import annotations

import asyncio
import signal
import sys

from dotenv import load_dotenv
from pydantic import ValidationError

from enrollbot.adapters.discord.bot import EnrollBot
from enrollbot.config import ConfigurationError, EnrollBotSettings, get_settings
from enrollbot.config.logging import get_logger, init_logging

logger = get_logger("main")


def load_settings() -> EnrollBotSettings:
    """Load and check settings, exiting the process on configuration errors."""
    load_dotenv()
    try:
        settings = get_settings()
        init_logging(settings.logging.level, force=True)
        settings.check_required()
    except (ValidationError, ConfigurationError) as e:
        logger.error(f"Configuration error: {e}")
        sys.exit(1)
    return settings


async def main() -> None:
    """Run the enrollment bot until interrupted."""
    settings = load_settings()
    bot = EnrollBot(settings)

    loop = asyncio.get_running_loop()
    stop_event = asyncio.Event()

    def signal_handler():
        logger.info("Received shutdown signal")
        stop_event.set()

    for sig in (signal.SIGINT, signal.SIGTERM):
        loop.add_signal_handler(sig, signal_handler)

    start_task = asyncio.create_task(bot.start(settings.discord.bot_token))
    stop_task = asyncio.create_task(stop_event.wait())
    try:
        done, _ = await asyncio.wait({start_task, stop_task}, return_when=asyncio.FIRST_COMPLETED)
        if start_task in done and start_task.exception() is not None:
            logger.error(f"Bot error: {start_task.exception()}")
    finally:
        stop_task.cancel()
        if not bot.is_closed():
            await bot.close()
        start_task.cancel()
        await asyncio.gather(start_task, stop_task, return_exceptions=True)

    logger.info("Bot stopped")


def run() -> None:
    """Sync entry point for the console script."""
    asyncio.run(main())


if __name__ == "__main__":
    run()
