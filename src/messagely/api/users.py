"""User directory routes.

- GET /users → everyone (any logged-in user)
- GET /users/{username} → profile (that user only)
- GET /users/{username}/to → messages received (that user only)
- GET /users/{username}/from → messages sent (that user only)
"""

from fastapi import APIRouter, Depends

from messagely.auth.dependencies import get_current_username, get_user_service
from messagely.services.user_service import UserService

router = APIRouter(prefix="/users")


@router.get("")
async def list_users(
    username: str = Depends(get_current_username),
    svc: UserService = Depends(get_user_service),
):
    return {"users": await svc.list_users(username)}


@router.get("/{target}")
async def get_user(
    target: str,
    username: str = Depends(get_current_username),
    svc: UserService = Depends(get_user_service),
):
    return {"user": await svc.get_user(username, target)}


@router.get("/{target}/to")
async def messages_to(
    target: str,
    username: str = Depends(get_current_username),
    svc: UserService = Depends(get_user_service),
):
    return {"messages": await svc.messages_to(username, target)}


@router.get("/{target}/from")
async def messages_from(
    target: str,
    username: str = Depends(get_current_username),
    svc: UserService = Depends(get_user_service),
):
    return {"messages": await svc.messages_from(username, target)}
