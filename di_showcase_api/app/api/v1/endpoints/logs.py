"""
Log endpoints for API v1.

Lists entries written through ``LoggingService``.  Filtering by
``request_id`` returns everything logged while handling one request.
"""

from typing import List, Optional

from fastapi import APIRouter, HTTPException, Query, status

from di_showcase_api.app.core.dependencies import Inject
from di_showcase_api.app.core.wiring import RequestScope
from di_showcase_api.app.schemas.log import LogEntryRead
from di_showcase_api.app.services.logging_service import LEVELS, LoggingService

router = APIRouter()


@router.get("/", response_model=List[LogEntryRead])
async def list_logs(
    level: Optional[str] = Query(None, description="DEBUG, INFO, WARNING or ERROR"),
    category: Optional[str] = Query(None, description="Logger category, e.g. email or users"),
    request_id: Optional[str] = Query(None, description="Only entries written by this request"),
    limit: int = Query(100, ge=1, le=500),
    offset: int = Query(0, ge=0),
    log: LoggingService = Inject(RequestScope.log),
) -> List[LogEntryRead]:
    """Retrieve stored log entries, newest first."""
    if level and level.upper() not in LEVELS:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=f"Unknown level: {level}")
    entries = log.list_entries(
        level=level,
        category=category,
        request_id=request_id,
        limit=limit,
        offset=offset,
    )
    return [LogEntryRead(**entry) for entry in entries]
