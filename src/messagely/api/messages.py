"""Message API routes.

Learn: Every route here runs get_current_username first, so a missing
or invalid token is a 401 before the store is touched. Per-message
access (participants may view, only the recipient may mark read) is
decided in the service through the guard.
"""

from fastapi import APIRouter, Depends

from messagely.auth.dependencies import get_current_username, get_message_service
from messagely.schemas.auth import SendMessageRequest
from messagely.services.message_service import MessageService

router = APIRouter(prefix="/messages")


@router.get("/{message_id}")
async def get_message(
    message_id: int,
    username: str = Depends(get_current_username),
    svc: MessageService = Depends(get_message_service),
):
    """Message detail with from_user/to_user expanded. Participants only."""
    message = await svc.get_detail(username, message_id)
    return {"message": message}


@router.post("", status_code=201)
async def send_message(
    body: SendMessageRequest,
    username: str = Depends(get_current_username),
    svc: MessageService = Depends(get_message_service),
):
    """Send a message from the current user."""
    message = await svc.send(username, body.to_username, body.body)
    return {"message": message}


@router.post("/{message_id}/read")
async def mark_read(
    message_id: int,
    username: str = Depends(get_current_username),
    svc: MessageService = Depends(get_message_service),
):
    """Mark a message read. Recipient only; repeating it is a no-op."""
    receipt = await svc.mark_read(username, message_id)
    return {"message": receipt}
