"""The /enrollment slash command.

Options are built at runtime because the university choices come from
configuration. Uses Pycord's application commands system.
"""

import logging

import discord

from enrollbot.config import EnrollBotSettings
from enrollbot.core.confirmation import format_confirmation
from enrollbot.core.models import OTHER_UNIVERSITY, EnrollmentForm
from enrollbot.core.pending import PendingEnrollments

logger = logging.getLogger(__name__)

COMMAND_NAME = "enrollment"


def university_choices(universities: dict[str, int]) -> list[str]:
    """Configured university names followed by the Other / N/A choice."""
    return [name for name in universities if name != OTHER_UNIVERSITY] + [OTHER_UNIVERSITY]


def build_enrollment_options(universities: dict[str, int]) -> list[discord.Option]:
    return [
        discord.Option(str, "First name and last initial", name="name", required=True),
        discord.Option(str, "School email address", name="email", required=True),
        discord.Option(str, "Areas of interest", name="interests", required=True),
        discord.Option(
            str,
            "Your university",
            name="university",
            required=True,
            choices=university_choices(universities),
        ),
        discord.Option(bool, "Add to email distro?", name="add_to_email_distro", required=True),
    ]


async def respond_to_enrollment(
    ctx: discord.ApplicationContext,
    pending: PendingEnrollments,
    form: EnrollmentForm,
) -> None:
    """Hold the submission and post the confirmation message.

    The confirmation is picked up again by the message router once Discord
    delivers it, which is when roles and storage are updated.
    """
    submission_id = ctx.interaction.id
    pending.add(submission_id, ctx.author.id, ctx.author.name, form)

    try:
        await ctx.respond(format_confirmation(form))
    except discord.HTTPException as e:
        pending.discard(submission_id)
        logger.error(f"Cannot respond to slash command: {e}", extra={"user_id": ctx.author.id})


def build_enrollment_command(settings: EnrollBotSettings, pending: PendingEnrollments) -> discord.SlashCommand:
    """Create the guild-scoped /enrollment command."""

    async def enrollment(
        ctx: discord.ApplicationContext,
        name: str,
        email: str,
        interests: str,
        university: str,
        add_to_email_distro: bool,
    ):
        form = EnrollmentForm(
            name=name,
            email=email,
            interests=interests,
            university=university,
            add_to_email_distro=add_to_email_distro,
        )
        await respond_to_enrollment(ctx, pending, form)

    return discord.SlashCommand(
        enrollment,
        name=COMMAND_NAME,
        description="Enrollment commands",
        guild_ids=[settings.discord.guild_id],
        options=build_enrollment_options(settings.roles.universities),
    )
