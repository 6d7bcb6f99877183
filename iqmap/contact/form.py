"""
Contact form payload.

The landing page sends ``{name, email, subject, message}``.  Name, email
and message are required; subject falls back to a generic label.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Dict, List

DEFAULT_SUBJECT = "IQ Travel Contact Form"
REQUIRED_FIELDS = ("name", "email", "message")

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


class ContactValidationError(ValueError):
    """Raised when a submission is incomplete or malformed.

    ``reason`` is an i18n key (``contact.missing_fields`` or
    ``contact.invalid_email``); ``fields`` lists the offending fields.
    """

    def __init__(self, reason: str, fields: List[str]):
        super().__init__(f"{reason}: {', '.join(fields)}")
        self.reason = reason
        self.fields = fields


@dataclass(frozen=True)
class ContactSubmission:
    name: str
    email: str
    subject: str
    message: str

    @classmethod
    def from_form(
        cls,
        name: str = "",
        email: str = "",
        subject: str = "",
        message: str = "",
    ) -> "ContactSubmission":
        """Trim every field; an empty subject becomes the default."""
        return cls(
            name=(name or "").strip(),
            email=(email or "").strip(),
            subject=(subject or "").strip() or DEFAULT_SUBJECT,
            message=(message or "").strip(),
        )

    def missing_fields(self) -> List[str]:
        return [f for f in REQUIRED_FIELDS if not getattr(self, f)]

    def validate(self) -> None:
        missing = self.missing_fields()
        if missing:
            raise ContactValidationError("contact.missing_fields", missing)
        if not _EMAIL_RE.match(self.email):
            raise ContactValidationError("contact.invalid_email", ["email"])

    def to_payload(self) -> Dict[str, str]:
        return {
            "name": self.name,
            "email": self.email,
            "subject": self.subject,
            "message": self.message,
        }
