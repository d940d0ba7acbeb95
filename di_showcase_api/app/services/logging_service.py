"""
Application logging service.

``LoggingService`` is the injectable counterpart of a module‑level
logger.  It writes through the standard ``logging`` machinery and also
persists each entry in the ``log_entries`` table tagged with the id of
the current request, so the entries of one request can be listed
together.  It is registered as a scoped service because it depends on
the scoped ``RequestContext``.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, List, Optional

from di_showcase_api.app.core.context import RequestContext
from di_showcase_api.app.core.db import Database
from di_showcase_api.app.core.logging_config import category_logger


LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


class LoggingService:
    """Logger bound to the current request."""

    def __init__(self, database: Database, context: RequestContext) -> None:
        self.database = database
        self.context = context

    @property
    def request_id(self) -> str:
        return self.context.request_id

    def log(self, level: str, message: str, category: str = "app", **details: Any) -> None:
        """Emit ``message`` at ``level`` and store it.

        Parameters
        ----------
        level : str
            One of ``DEBUG``, ``INFO``, ``WARNING`` or ``ERROR``.
        message : str
            Human readable text.
        category : str
            Suffix of the logger name (``di_showcase_api.<category>``).
        **details
            Structured data stored as JSON alongside the entry.
        """
        level = level.upper()
        if level not in LEVELS:
            raise ValueError(f"Unknown log level: {level}")
        category_logger(category).log(getattr(logging, level), "[%s] %s", self.request_id, message)
        details_json = json.dumps(details, default=str) if details else None
        with self.database.cursor() as cursor:
            cursor.execute(
                """
                INSERT INTO log_entries (request_id, level, category, message, details)
                VALUES (?, ?, ?, ?, ?)
                """,
                (self.request_id, level, category, message, details_json),
            )

    def debug(self, message: str, category: str = "app", **details: Any) -> None:
        self.log("DEBUG", message, category, **details)

    def info(self, message: str, category: str = "app", **details: Any) -> None:
        self.log("INFO", message, category, **details)

    def warning(self, message: str, category: str = "app", **details: Any) -> None:
        self.log("WARNING", message, category, **details)

    def error(self, message: str, category: str = "app", **details: Any) -> None:
        self.log("ERROR", message, category, **details)

    def list_entries(
        self,
        level: Optional[str] = None,
        category: Optional[str] = None,
        request_id: Optional[str] = None,
        limit: int = 100,
        offset: int = 0,
    ) -> List[Dict[str, Any]]:
        """Return stored entries, newest first, with optional filters."""
        where_clauses: List[str] = []
        params: List[Any] = []
        if level:
            where_clauses.append("level = ?")
            params.append(level.upper())
        if category:
            where_clauses.append("category = ?")
            params.append(category)
        if request_id:
            where_clauses.append("request_id = ?")
            params.append(request_id)
        query = "SELECT id, request_id, level, category, message, details, created_at FROM log_entries"
        if where_clauses:
            query += " WHERE " + " AND ".join(where_clauses)
        query += " ORDER BY id DESC LIMIT ? OFFSET ?"
        params.extend([limit, offset])

        conn = self.database.connect()
        try:
            rows = conn.execute(query, tuple(params)).fetchall()
        finally:
            conn.close()
        entries = []
        for row in rows:
            details_data = None
            if row["details"]:
                try:
                    details_data = json.loads(row["details"])
                except json.JSONDecodeError:
                    details_data = {"raw": row["details"]}
            entries.append(
                {
                    "id": row["id"],
                    "request_id": row["request_id"],
                    "level": row["level"],
                    "category": row["category"],
                    "message": row["message"],
                    "details": details_data,
                    "created_at": row["created_at"],
                }
            )
        return entries
