"""
Schema for stored log entries.
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel


class LogEntryRead(BaseModel):
    id: int
    request_id: Optional[str] = None
    level: str
    category: str
    message: str
    details: Optional[Dict[str, Any]] = None
    created_at: Optional[str] = None
