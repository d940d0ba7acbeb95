"""
User registration: a service with several injected dependencies.

``RegistrationService`` needs the database, the email service and the
logger.  None of them is created here; the container builds each one
(with its own dependencies) and passes them in.  Adding a fourth
collaborator means adding one constructor parameter, not rewriting the
construction code of every caller.
"""

from __future__ import annotations

import sqlite3
from typing import List, Optional

from di_showcase_api.app.core.config import Settings
from di_showcase_api.app.core.db import Database
from di_showcase_api.app.schemas.user import RegistrationRead, UserCreate, UserRead
from di_showcase_api.app.services.email_service import EmailDeliveryError, EmailService
from di_showcase_api.app.services.logging_service import LoggingService


class DuplicateUserError(ValueError):
    """Raised when the email address is already registered."""


class RegistrationService:
    """Create users and greet them by email."""

    def __init__(
        self,
        database: Database,
        email: EmailService,
        log: LoggingService,
        settings: Settings,
    ) -> None:
        self.database = database
        self.email = email
        self.log = log
        self.welcome_subject = settings.welcome_subject

    async def register(self, data: UserCreate) -> RegistrationRead:
        """Insert a user and send the welcome email.

        Raises ``DuplicateUserError`` if the address is already
        registered.  A welcome email that cannot be sent does not undo
        the registration; the returned ``welcome_email_status`` is
        ``failed`` instead.
        """
        conn = self.database.connect()
        try:
            cursor = conn.cursor()
            try:
                cursor.execute(
                    "INSERT INTO users (email, full_name) VALUES (?, ?)",
                    (data.email, data.full_name),
                )
            except sqlite3.IntegrityError:
                # Release the write lock before the logger opens its own connection.
                conn.rollback()
                self.log.warning(f"Duplicate registration for {data.email}", category="users")
                raise DuplicateUserError(f"User with email {data.email} already exists")
            user_id = cursor.lastrowid
            conn.commit()
            row = cursor.execute(
                "SELECT id, email, full_name, created_at FROM users WHERE id = ?",
                (user_id,),
            ).fetchone()
        finally:
            conn.close()

        self.log.info(f"Registered user {user_id}", category="users", email=data.email)

        greeting = data.full_name or data.email
        try:
            sent = self.email.send_message(
                data.email,
                self.welcome_subject,
                f"Hello {greeting}, your account has been created.",
            )
            welcome_status = sent.status
        except (EmailDeliveryError, ValueError) as e:
            self.log.error(f"Welcome email for user {user_id} failed: {e}", category="users")
            welcome_status = "failed"

        return RegistrationRead(
            id=row["id"],
            email=row["email"],
            full_name=row["full_name"],
            created_at=row["created_at"],
            welcome_email_status=welcome_status,
        )

    async def list_users(self, limit: int = 50, offset: int = 0) -> List[UserRead]:
        conn = self.database.connect()
        try:
            rows = conn.execute(
                "SELECT id, email, full_name, created_at FROM users ORDER BY id LIMIT ? OFFSET ?",
                (limit, offset),
            ).fetchall()
        finally:
            conn.close()
        return [UserRead(**dict(row)) for row in rows]

    async def get_user(self, user_id: int) -> Optional[UserRead]:
        conn = self.database.connect()
        try:
            row = conn.execute(
                "SELECT id, email, full_name, created_at FROM users WHERE id = ?",
                (user_id,),
            ).fetchone()
        finally:
            conn.close()
        return UserRead(**dict(row)) if row else None
