"""Per-message routing for the enrollment bot.

Every incoming message is checked against three independent rules:

1. `!hello` gets a fixed reply (liveness probe)
2. Links in the reading channel are relayed to the destination channel
3. The bot's own enrollment confirmation finalizes that enrollment
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Any

import discord

from enrollbot.config.logging import get_logger
from enrollbot.core.confirmation import ENROLLMENT_HEADER, ConfirmationParseError, parse_confirmation

if TYPE_CHECKING:
    from enrollbot.adapters.discord.finalizer import EnrollmentFinalizer
    from enrollbot.config import EnrollBotSettings
    from enrollbot.core.pending import PendingEnrollments

logger = get_logger("router")

HELLO_TRIGGER = "!hello"
HELLO_REPLY = "world!"

LINK_PATTERN = re.compile(r"^(https|http|\^\^)")
RELAY_TEMPLATE = ".\n*This was originally posted by `{author}`:*\n{content}"


def format_relay(author_name: str, content: str) -> str:
    return RELAY_TEMPLATE.format(author=author_name, content=content)


def submission_of(message: discord.Message) -> Any:
    """Interaction metadata for a slash command response, or None."""
    return getattr(message, "interaction_metadata", None) or getattr(message, "interaction", None)


class MessageRouter:
    """Dispatches messages to the hello, relay and enrollment handlers.

    Holds no per-message state; pending submissions live in the shared
    PendingEnrollments table.
    """

    def __init__(
        self,
        bot: Any,
        settings: EnrollBotSettings,
        pending: PendingEnrollments,
        finalizer: EnrollmentFinalizer,
    ) -> None:
        self.bot = bot
        self.settings = settings
        self.pending = pending
        self.finalizer = finalizer

    def _is_self(self, user: Any) -> bool:
        return self.bot.user is not None and user.id == self.bot.user.id

    def is_relay_candidate(self, message: discord.Message) -> bool:
        return (
            message.channel.id == self.settings.channels.reading_channel_id
            and LINK_PATTERN.match(message.content) is not None
            and not message.author.bot
        )

    def is_enrollment_confirmation(self, message: discord.Message) -> bool:
        return (
            message.channel.id == self.settings.channels.enroll_channel_id
            and message.content.startswith(ENROLLMENT_HEADER)
            and self._is_self(message.author)
        )

    async def route(self, message: discord.Message) -> None:
        if message.content == HELLO_TRIGGER:
            await self.reply_hello(message)

        if self.is_relay_candidate(message):
            await self.relay(message)

        if self.is_enrollment_confirmation(message):
            await self.finalize_enrollment(message)

    async def reply_hello(self, message: discord.Message) -> None:
        try:
            await message.channel.send(HELLO_REPLY)
        except discord.HTTPException as e:
            logger.error(f"Error sending message: {e}", extra={"channel_id": message.channel.id})

    async def _destination(self) -> Any:
        channel_id = self.settings.channels.destin_channel_id
        channel = self.bot.get_channel(channel_id)
        if channel is None:
            channel = await self.bot.fetch_channel(channel_id)
        return channel

    async def relay(self, message: discord.Message) -> None:
        """Repost a link in the destination channel with attribution."""
        try:
            destination = await self._destination()
            await destination.send(format_relay(message.author.name, message.content))
        except (discord.HTTPException, discord.ClientException) as e:
            logger.error(f"Error relaying message: {e}", extra={"channel_id": message.channel.id})
            return
        logger.info(f"Relayed link from {message.author.name}", extra={"user_id": message.author.id})

    async def finalize_enrollment(self, message: discord.Message) -> None:
        """Finalize the enrollment a confirmation message belongs to.

        The held submission is preferred; the confirmation text is parsed only
        when nothing is pending for it (expired, or posted before a restart).
        """
        submission = submission_of(message)
        if submission is None:
            logger.warning("Enrollment confirmation without interaction metadata, ignoring")
            return

        entry = self.pending.pop(submission.id)
        if entry is not None:
            form, user_id, user_name = entry.form, entry.user_id, entry.user_name
        else:
            try:
                form = parse_confirmation(message.content)
            except ConfirmationParseError as e:
                logger.error(f"Malformed enrollment confirmation, enrollment dropped: {e}")
                return
            user_id, user_name = submission.user.id, submission.user.name

        guild = message.guild or self.bot.get_guild(self.settings.discord.guild_id)
        await self.finalizer.finalize(guild, user_id, user_name, form)
