"""Discord adapter: slash command, message routing and enrollment finalization."""

from enrollbot.adapters.discord.bot import EnrollBot

__all__ = ["EnrollBot"]
