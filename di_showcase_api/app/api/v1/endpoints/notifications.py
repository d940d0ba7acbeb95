"""
Notification endpoints for API v1.

The set of channels comes from the container; enabling another channel
changes what these routes do without changing their code.
"""

from typing import List, Optional

from fastapi import APIRouter, HTTPException, Query, status

from di_showcase_api.app.core.dependencies import Inject
from di_showcase_api.app.core.wiring import RequestScope
from di_showcase_api.app.schemas.notification import (
    NotificationCreate,
    NotificationRead,
    NotificationReport,
)
from di_showcase_api.app.services.notification_service import NotificationService


router = APIRouter()


@router.post("/", response_model=NotificationReport)
async def send_notification(
    data: NotificationCreate,
    notifications: NotificationService = Inject(RequestScope.notification_service),
) -> NotificationReport:
    """Notify a recipient through every enabled channel (or the requested ones)."""
    try:
        return await notifications.notify(data)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e))


@router.get("/channels", response_model=List[str])
async def list_channels(notifications: NotificationService = Inject(RequestScope.notification_service)) -> List[str]:
    return notifications.list_channels()


@router.get("/", response_model=List[NotificationRead])
async def list_notifications(
    recipient: Optional[str] = Query(None),
    limit: int = Query(50, ge=1, le=500),
    offset: int = Query(0, ge=0),
    notifications: NotificationService = Inject(RequestScope.notification_service),
) -> List[NotificationRead]:
    rows = await notifications.list_history(recipient=recipient, limit=limit, offset=offset)
    return [NotificationRead(**row) for row in rows]
