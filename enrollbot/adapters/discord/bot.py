"""Discord client for the enrollment bot."""

from __future__ import annotations

import asyncio

import discord
from discord.ext import commands as discord_commands

from enrollbot.adapters.discord.commands import build_enrollment_command
from enrollbot.adapters.discord.finalizer import EnrollmentFinalizer
from enrollbot.adapters.discord.router import MessageRouter
from enrollbot.config import EnrollBotSettings
from enrollbot.config.logging import get_logger, init_discord_logging, shutdown_logging
from enrollbot.core.pending import PendingEnrollments
from enrollbot.core.store import EnrollmentStore

logger = get_logger("bot")


def build_intents() -> discord.Intents:
    intents = discord.Intents.default()
    intents.message_content = True
    intents.members = True
    intents.guilds = True
    intents.guild_messages = True
    return intents


class EnrollBot(discord_commands.Bot):
    """Guild bot wiring the /enrollment command to the message router."""

    def __init__(
        self,
        settings: EnrollBotSettings,
        store: EnrollmentStore | None = None,
        pending: PendingEnrollments | None = None,
    ) -> None:
        super().__init__(
            command_prefix=settings.discord.command_prefix,
            intents=build_intents(),
            help_command=None,
            # Commands are synced once, to the configured guild, in on_ready
            auto_sync_commands=False,
        )
        self.settings = settings
        self.store = store or EnrollmentStore(settings.storage.enrollments_path)
        self.pending = pending or PendingEnrollments(ttl_seconds=settings.storage.pending_ttl_seconds)
        self.finalizer = EnrollmentFinalizer(settings, self.store)
        self.router = MessageRouter(self, settings, self.pending, self.finalizer)
        self._commands_synced: bool = False

        self.add_application_command(build_enrollment_command(settings, self.pending))

    async def on_ready(self) -> None:
        """Called when Discord connection is established."""
        logger.info(f"Logged in as {self.user} (ID: {self.user.id})")
        logger.info(f"Guilds: {len(self.guilds)}")

        handler = init_discord_logging(self, self.settings.logging.log_channel_id, asyncio.get_running_loop())
        if handler:
            await handler.send_direct(f"{self.user} is connected")

        # on_ready fires again after reconnects; commands only need one sync
        if not self._commands_synced:
            await self.sync_enrollment_command()

    async def sync_enrollment_command(self) -> None:
        guild_id = self.settings.discord.guild_id
        try:
            await self.sync_commands(guild_ids=[guild_id])
        except (discord.HTTPException, discord.ClientException) as e:
            logger.error(f"Failed to sync slash commands: {e}", extra={"guild_id": guild_id})
            return
        self._commands_synced = True
        names = [command.name for command in self.pending_application_commands]
        logger.info(f"Synced commands {names} to guild {guild_id}")

    async def on_message(self, message: discord.Message) -> None:
        await self.router.route(message)

    async def close(self) -> None:
        """Clean shutdown."""
        shutdown_logging()
        await super().close()
