# This file holds the contact-field checks applied to create and update bodies.
# It exists so every entity router rejects malformed phone numbers and emails the same way.
# Both checks are pure and raise ValidationError so callers decide how to report the failure.

from __future__ import annotations

import re

from email_validator import EmailNotValidError, validate_email

_PHONE_RE = re.compile(r"^\+?[0-9]{7,15}$")


class ValidationError(ValueError):
    """Raised when a contact field does not match its accepted format."""


def validate_phone(phone: str) -> None:
    """Accept an optional leading `+` followed by 7 to 15 digits."""

    if not _PHONE_RE.fullmatch(phone):
        raise ValidationError(f"invalid phone number: {phone!r}")


def validate_email_address(email: str) -> None:
    """Check `local-part@domain` syntax without DNS lookups or public-domain policy."""

    try:
        validate_email(email, check_deliverability=False, globally_deliverable=False)
    except EmailNotValidError as exc:
        raise ValidationError(f"invalid email address: {email!r} ({exc})") from exc
