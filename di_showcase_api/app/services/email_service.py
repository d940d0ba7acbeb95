"""
Email sending: constructor injection.

``EmailService`` does not know how mail leaves the application.  It
receives an ``EmailSender`` in its constructor and the composition root
decides which implementation that is:

* ``OutboxEmailSender`` stores messages in the ``email_outbox`` table;
* ``ConsoleEmailSender`` only writes them to the log;
* ``WebhookEmailSender`` posts them as JSON to an HTTP relay.

Swapping the backend (or substituting a fake in tests) therefore never
touches ``EmailService`` or the routes using it.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import requests

from di_showcase_api.app.core.config import Settings
from di_showcase_api.app.core.context import RequestContext
from di_showcase_api.app.core.db import Database
from di_showcase_api.app.schemas.email import EmailCreate, EmailRead
from di_showcase_api.app.services.logging_service import LoggingService


class EmailDeliveryError(Exception):
    """Raised when an ``EmailSender`` cannot hand a message over."""


@dataclass
class EmailDelivery:
    """What a sender reports back about a message."""

    backend: str
    status: str
    message_id: Optional[int] = None
    created_at: Optional[str] = None


class EmailSender(ABC):
    """Abstract capability: deliver one plain text email."""

    backend = "abstract"

    @abstractmethod
    def send(self, sender: str, recipient: str, subject: str, body: str) -> EmailDelivery:
        ...


class EmailOutbox:
    """Repository for the ``email_outbox`` table."""

    _COLUMNS = "id, sender, recipient, subject, body, status, request_id, created_at"

    def __init__(self, database: Database, context: RequestContext) -> None:
        self.database = database
        self.context = context

    def add(self, sender: str, recipient: str, subject: str, body: str, status: str = "queued") -> Dict[str, Any]:
        conn = self.database.connect()
        try:
            cursor = conn.cursor()
            cursor.execute(
                """
                INSERT INTO email_outbox (sender, recipient, subject, body, status, request_id)
                VALUES (?, ?, ?, ?, ?, ?)
                """,
                (sender, recipient, subject, body, status, self.context.request_id),
            )
            message_id = cursor.lastrowid
            conn.commit()
            row = cursor.execute(
                f"SELECT {self._COLUMNS} FROM email_outbox WHERE id = ?", (message_id,)
            ).fetchone()
            return dict(row)
        finally:
            conn.close()

    def get(self, message_id: int) -> Optional[Dict[str, Any]]:
        conn = self.database.connect()
        try:
            row = conn.execute(
                f"SELECT {self._COLUMNS} FROM email_outbox WHERE id = ?", (message_id,)
            ).fetchone()
            return dict(row) if row else None
        finally:
            conn.close()

    def list_messages(self, recipient: Optional[str] = None, limit: int = 50, offset: int = 0) -> List[Dict[str, Any]]:
        """Return stored messages, newest first."""
        query = f"SELECT {self._COLUMNS} FROM email_outbox"
        params: List[Any] = []
        if recipient:
            query += " WHERE recipient = ?"
            params.append(recipient)
        query += " ORDER BY id DESC LIMIT ? OFFSET ?"
        params.extend([limit, offset])
        conn = self.database.connect()
        try:
            return [dict(row) for row in conn.execute(query, tuple(params)).fetchall()]
        finally:
            conn.close()


class OutboxEmailSender(EmailSender):
    """Queue messages in the database for later delivery."""

    backend = "outbox"

    def __init__(self, outbox: EmailOutbox, log: LoggingService) -> None:
        self.outbox = outbox
        self.log = log

    def send(self, sender: str, recipient: str, subject: str, body: str) -> EmailDelivery:
        row = self.outbox.add(sender, recipient, subject, body)
        self.log.info(f"Queued email {row['id']} for {recipient}", category="email", message_id=row["id"])
        return EmailDelivery(
            backend=self.backend,
            status=row["status"],
            message_id=row["id"],
            created_at=row["created_at"],
        )


class ConsoleEmailSender(EmailSender):
    """Write messages to the log instead of delivering them."""

    backend = "console"

    def __init__(self, log: LoggingService) -> None:
        self.log = log

    def send(self, sender: str, recipient: str, subject: str, body: str) -> EmailDelivery:
        self.log.info(
            f"Email from {sender} to {recipient}: {subject}",
            category="email",
            body=body,
        )
        return EmailDelivery(backend=self.backend, status="logged")


class WebhookEmailSender(EmailSender):
    """Post messages to an HTTP relay configured by ``EMAIL_WEBHOOK_URL``."""

    backend = "webhook"

    def __init__(self, settings: Settings, session: requests.Session, log: LoggingService) -> None:
        if not settings.email_webhook_url:
            raise ValueError("EMAIL_WEBHOOK_URL must be set for the webhook email backend")
        self.url = settings.email_webhook_url
        self.timeout = settings.email_webhook_timeout
        self.session = session
        self.log = log

    def send(self, sender: str, recipient: str, subject: str, body: str) -> EmailDelivery:
        payload = {"from": sender, "to": recipient, "subject": subject, "body": body}
        try:
            response = self.session.post(self.url, json=payload, timeout=self.timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            self.log.error(
                f"Email relay rejected message to {recipient}: {e}",
                category="email",
                url=self.url,
            )
            raise EmailDeliveryError(f"Email relay failed: {e}") from e
        self.log.info(f"Relayed email to {recipient}", category="email", status_code=response.status_code)
        return EmailDelivery(backend=self.backend, status="sent")


class EmailService:
    """Send email on behalf of the application.

    The sender implementation, the default ``From`` address and the
    logger are all supplied from outside.
    """

    def __init__(self, sender: EmailSender, settings: Settings, log: LoggingService) -> None:
        self.sender = sender
        self.default_sender = settings.email_default_sender
        self.log = log

    def send(self, data: EmailCreate) -> EmailRead:
        """Send a validated ``EmailCreate`` payload."""
        return self.send_message(data.to, data.subject, data.body, sender=data.sender)

    def send_message(self, recipient: str, subject: str, body: str, sender: Optional[str] = None) -> EmailRead:
        """Send a message, raising ``ValueError`` for an empty subject or recipient.

        ``EmailDeliveryError`` from the sender propagates unchanged.
        """
        if not recipient or not recipient.strip():
            raise ValueError("Recipient is required")
        if not subject or not subject.strip():
            raise ValueError("Subject is required")
        from_address = sender or self.default_sender
        delivery = self.sender.send(from_address, recipient, subject, body)
        return EmailRead(
            id=delivery.message_id,
            backend=delivery.backend,
            sender=from_address,
            recipient=recipient,
            subject=subject,
            body=body,
            status=delivery.status,
            request_id=self.log.request_id,
            created_at=delivery.created_at,
        )
