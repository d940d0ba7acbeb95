"""
Notifications: extending behaviour by registration.

``NotificationService`` receives every registered
``NotificationChannel`` as a list.  A new way of notifying users is a
new ``NotificationChannel`` subclass plus one line in the composition
root; the service and the API stay untouched.

A failing channel does not prevent delivery through the others.  Every
attempt is recorded in the ``notifications`` table.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from di_showcase_api.app.core.db import Database
from di_showcase_api.app.schemas.email import validate_address
from di_showcase_api.app.schemas.notification import (
    ChannelResult,
    NotificationCreate,
    NotificationReport,
)
from di_showcase_api.app.services.email_service import EmailDeliveryError, EmailService
from di_showcase_api.app.services.logging_service import LoggingService


class NotificationChannel(ABC):
    """One way of reaching a recipient."""

    name = "abstract"

    @abstractmethod
    def notify(self, recipient: str, message: str) -> str:
        """Deliver ``message`` and return a short description of what happened."""


class EmailNotificationChannel(NotificationChannel):
    name = "email"

    def __init__(self, email: EmailService) -> None:
        self.email = email

    def notify(self, recipient: str, message: str) -> str:
        sent = self.email.send_message(validate_address(recipient), "Notification", message)
        return f"{sent.backend}: {sent.status}"


class LogNotificationChannel(NotificationChannel):
    name = "log"

    def __init__(self, log: LoggingService) -> None:
        self.log = log

    def notify(self, recipient: str, message: str) -> str:
        self.log.info(f"Notification for {recipient}: {message}", category="notifications")
        return "written to log"


class NotificationService:
    """Fan a notification out to the registered channels."""

    def __init__(
        self,
        channels: List[NotificationChannel],
        database: Database,
        log: LoggingService,
    ) -> None:
        self.channels = channels
        self.database = database
        self.log = log

    def list_channels(self) -> List[str]:
        return [channel.name for channel in self.channels]

    def _select(self, requested: Optional[List[str]]) -> List[NotificationChannel]:
        if requested is None:
            return list(self.channels)
        by_name = {channel.name: channel for channel in self.channels}
        unknown = [name for name in requested if name not in by_name]
        if unknown:
            raise ValueError(f"Unknown notification channel(s): {', '.join(unknown)}")
        # Keep registration order, drop duplicates.
        return [channel for channel in self.channels if channel.name in set(requested)]

    async def notify(self, data: NotificationCreate) -> NotificationReport:
        """Dispatch ``data`` and report one result per channel.

        Raises ``ValueError`` if ``data.channels`` names a channel that
        is not registered, or if no channel is available at all.
        """
        channels = self._select(data.channels)
        if not channels:
            raise ValueError("No notification channels are enabled")

        results: List[ChannelResult] = []
        for channel in channels:
            try:
                detail = channel.notify(data.recipient, data.message)
                result = ChannelResult(channel=channel.name, status="delivered", detail=detail)
            except (EmailDeliveryError, ValueError) as e:
                self.log.warning(
                    f"Channel {channel.name} failed for {data.recipient}: {e}",
                    category="notifications",
                )
                result = ChannelResult(channel=channel.name, status="failed", detail=str(e))
            self._record(data, result)
            results.append(result)

        return NotificationReport(
            recipient=data.recipient,
            request_id=self.log.request_id,
            results=results,
        )

    def _record(self, data: NotificationCreate, result: ChannelResult) -> None:
        with self.database.cursor() as cursor:
            cursor.execute(
                """
                INSERT INTO notifications (recipient, message, channel, status, detail, request_id)
                VALUES (?, ?, ?, ?, ?, ?)
                """,
                (data.recipient, data.message, result.channel, result.status, result.detail, self.log.request_id),
            )

    async def list_history(
        self,
        recipient: Optional[str] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> List[Dict[str, Any]]:
        query = (
            "SELECT id, recipient, message, channel, status, detail, request_id, created_at"
            " FROM notifications"
        )
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
