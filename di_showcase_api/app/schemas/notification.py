"""
Pydantic schemas for notifications.

A notification is dispatched to every enabled channel, or to the subset
named in ``channels``.  The response reports one result per channel.
"""

from typing import List, Optional

from pydantic import BaseModel, Field


class NotificationCreate(BaseModel):
    recipient: str = Field(..., min_length=1, description="Email address or user handle")
    message: str = Field(..., min_length=1)
    channels: Optional[List[str]] = Field(None, description="Restrict delivery to these channels")


class ChannelResult(BaseModel):
    channel: str
    status: str
    detail: Optional[str] = None


class NotificationReport(BaseModel):
    recipient: str
    request_id: str
    results: List[ChannelResult]


class NotificationRead(BaseModel):
    id: int
    recipient: str
    message: str
    channel: str
    status: str
    detail: Optional[str] = None
    request_id: Optional[str] = None
    created_at: Optional[str] = None
