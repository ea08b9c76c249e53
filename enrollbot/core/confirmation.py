"""The confirmation message posted in reply to /enrollment.

The message is both the user-facing acknowledgement and, when no pending
submission is held in memory, the only remaining copy of the form. Fields are
positional:

    Enrolling new student:
    Name: "<name>"
    Email: "<email>"
    Interests: "<interests>"
    University: "<university>"
    Add to email distro: "<Yes|No>"

Known limitation: values containing newlines, or starting/ending with a
double quote, do not survive `parse_confirmation`.
"""

from __future__ import annotations

from enrollbot.core.models import EnrollmentForm, yes_no

ENROLLMENT_HEADER = "Enrolling new student:"
FIELD_DELIMITER = ": "

FIELD_LABELS = ("Name", "Email", "Interests", "University", "Add to email distro")


class ConfirmationParseError(ValueError):
    """Raised when a confirmation message does not have the expected shape."""


def format_confirmation(form: EnrollmentForm) -> str:
    values = (
        form.name,
        form.email,
        form.interests,
        form.university,
        yes_no(form.add_to_email_distro),
    )
    lines = [ENROLLMENT_HEADER]
    lines.extend(f'{label}{FIELD_DELIMITER}"{value}"' for label, value in zip(FIELD_LABELS, values))
    return "\n".join(lines)


def _field_value(line: str, position: int) -> str:
    _, sep, value = line.partition(FIELD_DELIMITER)
    if not sep:
        raise ConfirmationParseError(f"Line {position} has no {FIELD_DELIMITER!r} delimiter: {line!r}")
    return value.strip('"')


def parse_confirmation(content: str) -> EnrollmentForm:
    """Recover the submitted form from a confirmation message.

    Labels are not checked; values are read by position after the header.

    Raises:
        ConfirmationParseError: fewer than six lines, a line without the
            delimiter, or an opt-in marker other than Yes/No.
    """
    lines = content.split("\n")
    if len(lines) < len(FIELD_LABELS) + 1:
        raise ConfirmationParseError(f"Expected {len(FIELD_LABELS) + 1} lines, got {len(lines)}")

    name, email, interests, university, distro = (
        _field_value(line, position) for position, line in enumerate(lines[1 : len(FIELD_LABELS) + 1], start=1)
    )

    if distro not in ("Yes", "No"):
        raise ConfirmationParseError(f"Unexpected email distro marker: {distro!r}")

    return EnrollmentForm(
        name=name,
        email=email,
        interests=interests,
        university=university,
        add_to_email_distro=distro == "Yes",
    )
