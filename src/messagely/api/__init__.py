"""API route aggregation.

All routers registered here get mounted in main.py.

Learn: Health and auth routers are open. Message and user routes
authenticate per handler through get_current_username, because the
handlers need the username itself, not just a pass/fail.
"""

from fastapi import APIRouter

from messagely.api.auth import router as auth_router
from messagely.api.health import router as health_router
from messagely.api.messages import router as messages_router
from messagely.api.users import router as users_router

api_router = APIRouter(prefix="/api/v1")

# Open routes — no auth required
api_router.include_router(health_router, tags=["health"])
api_router.include_router(auth_router, tags=["auth"])

# Authenticated routes
api_router.include_router(messages_router, tags=["messages"])
api_router.include_router(users_router, tags=["users"])
