"""Enrollment data types.

`EnrollmentForm` is what a student submits through /enrollment;
`EnrollmentRecord` is what ends up in the JSON store.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from pydantic import BaseModel, ConfigDict

# Choice offered alongside the configured universities; never maps to a role
OTHER_UNIVERSITY = "Other / N/A"

YesNo = Literal["Yes", "No"]


def yes_no(value: bool) -> YesNo:
    """Render a boolean the way confirmations and records carry it."""
    return "Yes" if value else "No"


@dataclass(frozen=True)
class EnrollmentForm:
    """Values submitted with one /enrollment invocation."""

    name: str
    email: str
    interests: str
    university: str
    add_to_email_distro: bool

    def to_record(self, user_id: int, user_name: str) -> EnrollmentRecord:
        return EnrollmentRecord(
            user_id=user_id,
            user_name=user_name,
            name=self.name,
            university=self.university,
            email=self.email,
            interests=self.interests,
            email_distro=yes_no(self.add_to_email_distro),
        )


class EnrollmentRecord(BaseModel):
    """A persisted enrollment, keyed by Discord user ID."""

    model_config = ConfigDict(frozen=True)

    user_id: int
    user_name: str
    name: str
    university: str
    email: str
    interests: str
    email_distro: YesNo
