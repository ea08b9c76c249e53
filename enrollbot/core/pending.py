"""In-memory table of submitted enrollments awaiting their confirmation message.

An entry is added when /enrollment is answered and taken when the bot sees
its own confirmation land in the enrollment channel. Entries that are never
claimed expire after a fixed TTL.
"""

from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass, field

from enrollbot.config.logging import get_logger
from enrollbot.core.models import EnrollmentForm

logger = get_logger("pending")


@dataclass
class PendingEnrollment:
    """A submission that has been answered but not yet finalized."""

    submission_id: int  # interaction ID of the /enrollment invocation
    user_id: int
    user_name: str
    form: EnrollmentForm
    created_at: float = field(default_factory=time.monotonic)


class PendingEnrollments:
    """Pending submissions keyed by interaction ID, with a bounded lifetime.

    Only touched from the bot's event loop, so no locking.
    """

    def __init__(self, ttl_seconds: float = 900.0, clock: Callable[[], float] = time.monotonic) -> None:
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: dict[int, PendingEnrollment] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, submission_id: int) -> bool:
        return submission_id in self._entries

    def add(self, submission_id: int, user_id: int, user_name: str, form: EnrollmentForm) -> PendingEnrollment:
        """Record a submission, replacing any entry with the same ID."""
        self.expire()
        entry = PendingEnrollment(
            submission_id=submission_id,
            user_id=user_id,
            user_name=user_name,
            form=form,
            created_at=self._clock(),
        )
        self._entries[submission_id] = entry
        logger.debug(f"Holding submission {submission_id}", extra={"user_id": user_id})
        return entry

    def pop(self, submission_id: int) -> PendingEnrollment | None:
        """Take a submission out of the table.

        Returns:
            The entry, or None if it was never added or has expired
        """
        self.expire()
        return self._entries.pop(submission_id, None)

    def discard(self, submission_id: int) -> None:
        self._entries.pop(submission_id, None)

    def expire(self) -> list[PendingEnrollment]:
        """Drop entries older than the TTL and return them."""
        cutoff = self._clock() - self.ttl_seconds
        expired = [entry for entry in self._entries.values() if entry.created_at <= cutoff]
        for entry in expired:
            del self._entries[entry.submission_id]
            logger.warning(
                f"Submission {entry.submission_id} expired before its confirmation was seen",
                extra={"user_id": entry.user_id},
            )
        return expired
