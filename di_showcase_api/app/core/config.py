"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  Defaults are provided for all fields so the
application starts without any configuration.  Tests and embedding
code may construct ``Settings`` explicitly and pass it to
``create_app``.
"""

import os
from dataclasses import dataclass
from typing import List


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).lower() in {"1", "true", "yes"}


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "DI Showcase API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    debug: bool = _env_flag("DEBUG")
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    # Optional path of a log file in addition to the console handler.
    log_file: str = os.getenv("LOG_FILE", "")

    # Path to the SQLite database file.  Relative paths are resolved
    # against the project root by ``core.db``.
    database_url: str = os.getenv("DATABASE_URL", "di_showcase.db")

    # Which ``EmailSender`` implementation is registered: ``outbox``
    # stores messages in the database, ``console`` only logs them and
    # ``webhook`` posts them to ``email_webhook_url``.
    email_backend: str = os.getenv("EMAIL_BACKEND", "outbox")
    email_default_sender: str = os.getenv("EMAIL_DEFAULT_SENDER", "no-reply@example.com")
    email_webhook_url: str = os.getenv("EMAIL_WEBHOOK_URL", "")
    email_webhook_timeout: float = float(os.getenv("EMAIL_WEBHOOK_TIMEOUT", "5"))

    # Comma‑separated list of enabled notification channels, in
    # dispatch order.  Known channels: ``email``, ``log``.
    notification_channels: str = os.getenv("NOTIFICATION_CHANNELS", "email,log")

    welcome_subject: str = os.getenv("WELCOME_SUBJECT", "Welcome aboard")

    def email_backend_name(self) -> str:
        return self.email_backend.strip().lower()

    def enabled_channels(self) -> List[str]:
        """Return the configured notification channel names without duplicates."""
        names: List[str] = []
        for name in self.notification_channels.split(","):
            name = name.strip().lower()
            if name and name not in names:
                names.append(name)
        return names


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.  Environment variables
# must be set before importing this module.
settings = Settings()
