"""
Pydantic schemas for outgoing email.
"""

from typing import Optional

from pydantic import BaseModel, Field, field_validator


def validate_address(value: str) -> str:
    """Minimal e‑mail address check: ``local@domain`` with a dotted domain."""
    value = value.strip()
    local, sep, domain = value.partition("@")
    if not sep or not local or "." not in domain or domain.startswith(".") or domain.endswith("."):
        raise ValueError(f"Invalid email address: {value!r}")
    return value


class EmailCreate(BaseModel):
    """Schema for sending a single email."""

    to: str = Field(..., description="Recipient address")
    subject: str = Field(..., min_length=1, max_length=200)
    body: str = Field("", description="Plain text body")
    sender: Optional[str] = Field(None, description="Overrides the configured default sender")

    @field_validator("to")
    @classmethod
    def validate_to(cls, v: str) -> str:
        return validate_address(v)

    @field_validator("sender")
    @classmethod
    def validate_sender(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        return validate_address(v)


class EmailRead(BaseModel):
    """Result of sending an email through the configured ``EmailSender``.

    ``id`` is only set by senders that store messages (the outbox).
    """

    id: Optional[int] = None
    backend: str
    sender: str
    recipient: str
    subject: str
    body: str
    status: str
    request_id: Optional[str] = None
    created_at: Optional[str] = None


class OutboxMessage(BaseModel):
    """A row of the ``email_outbox`` table."""

    id: int
    sender: str
    recipient: str
    subject: str
    body: str
    status: str
    request_id: Optional[str] = None
    created_at: Optional[str] = None
