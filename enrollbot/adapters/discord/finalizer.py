"""Applies a confirmed enrollment to the guild and the record store.

Each side effect is attempted independently. Failures are logged and never
retried or rolled back, so a partial failure (e.g. roles changed but the
record not saved) is left as is.
"""

from __future__ import annotations

import discord

from enrollbot.config import EnrollBotSettings
from enrollbot.config.logging import get_logger
from enrollbot.core.models import EnrollmentForm, EnrollmentRecord
from enrollbot.core.store import EnrollmentStore

logger = get_logger("finalizer")


class EnrollmentFinalizer:
    """Role swap, nickname change and persistence for one enrollment."""

    def __init__(self, settings: EnrollBotSettings, store: EnrollmentStore) -> None:
        self.settings = settings
        self.store = store

    async def finalize(
        self,
        guild: discord.Guild | None,
        user_id: int,
        user_name: str,
        form: EnrollmentForm,
    ) -> EnrollmentRecord:
        """Apply the enrollment for the submitting user.

        Args:
            guild: Guild the confirmation was posted in
            user_id: ID of the user who ran /enrollment
            user_name: Their account name at submission time
            form: The submitted values

        Returns:
            The record handed to the store (whether or not the save succeeded)
        """
        member = await self._fetch_member(guild, user_id)
        if member is not None:
            await self.assign_university_role(member, form.university)
            await self.set_nickname(member, form.name)

        record = form.to_record(user_id, user_name)
        await self.persist(record)
        return record

    async def _fetch_member(self, guild: discord.Guild | None, user_id: int) -> discord.Member | None:
        if guild is None:
            logger.error("Enrollment confirmation outside a guild, skipping member updates", extra={"user_id": user_id})
            return None

        member = guild.get_member(user_id)
        if member is not None:
            return member
        try:
            return await guild.fetch_member(user_id)
        except discord.HTTPException as e:
            logger.error(f"Error fetching member: {e}", extra={"user_id": user_id, "guild_id": guild.id})
            return None

    async def assign_university_role(self, member: discord.Member, university: str) -> bool:
        """Swap the entry role for the university's role.

        Universities without a configured role (including Other / N/A) leave
        the member's roles untouched.

        Returns:
            True if the university matched a configured role
        """
        role_id = self.settings.roles.universities.get(university)
        if role_id is None:
            logger.info(f"No role configured for {university!r}, leaving roles unchanged", extra={"user_id": member.id})
            return False

        try:
            await member.remove_roles(discord.Object(id=self.settings.roles.entry_role_id), reason="Enrollment")
        except discord.HTTPException as e:
            logger.error(f"Error removing role: {e}", extra={"user_id": member.id})

        try:
            await member.add_roles(discord.Object(id=role_id), reason=f"Enrolled at {university}")
        except discord.HTTPException as e:
            logger.error(f"Error adding role: {e}", extra={"user_id": member.id})

        return True

    async def set_nickname(self, member: discord.Member, nickname: str) -> None:
        try:
            await member.edit(nick=nickname)
        except discord.HTTPException as e:
            logger.error(f"Error changing nickname: {e}", extra={"user_id": member.id})

    async def persist(self, record: EnrollmentRecord) -> None:
        try:
            await self.store.save(record)
        except (OSError, ValueError):
            logger.exception("Error saving enrollment", extra={"user_id": record.user_id})
