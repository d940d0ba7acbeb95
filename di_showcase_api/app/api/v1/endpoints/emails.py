"""
Email endpoints for API v1.

The routes depend on ``EmailService`` and ``EmailOutbox`` only; which
``EmailSender`` actually delivers the message is decided by the
composition root.
"""

from typing import List, Optional

from fastapi import APIRouter, HTTPException, Query, status

from di_showcase_api.app.core.dependencies import Inject
from di_showcase_api.app.core.wiring import RequestScope
from di_showcase_api.app.schemas.email import EmailCreate, EmailRead, OutboxMessage
from di_showcase_api.app.services.email_service import EmailDeliveryError, EmailOutbox, EmailService


router = APIRouter()


@router.post("/", response_model=EmailRead, status_code=status.HTTP_201_CREATED)
async def send_email(data: EmailCreate, email: EmailService = Inject(RequestScope.email_service)) -> EmailRead:
    """Send an email through the configured backend.

    Returns 502 if the backend cannot deliver the message.
    """
    try:
        return email.send(data)
    except EmailDeliveryError as e:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e))


@router.get("/outbox", response_model=List[OutboxMessage])
async def list_outbox(
    recipient: Optional[str] = Query(None, description="Filter by recipient address"),
    limit: int = Query(50, ge=1, le=500),
    offset: int = Query(0, ge=0),
    outbox: EmailOutbox = Inject(RequestScope.email_outbox),
) -> List[OutboxMessage]:
    """List queued messages, newest first."""
    return [OutboxMessage(**row) for row in outbox.list_messages(recipient=recipient, limit=limit, offset=offset)]


@router.get("/outbox/{message_id}", response_model=OutboxMessage)
async def get_outbox_message(message_id: int, outbox: EmailOutbox = Inject(RequestScope.email_outbox)) -> OutboxMessage:
    message = outbox.get(message_id)
    if not message:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Message not found")
    return OutboxMessage(**message)
