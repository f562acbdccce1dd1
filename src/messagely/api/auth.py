"""Auth API — registration and login.

Learn: Routes for the credential lifecycle:
- POST /auth/register → create a user, log them in, return a token
- POST /auth/login → username/password → token
Both are open (no auth required).
"""

from fastapi import APIRouter, Depends

from messagely.auth.dependencies import get_auth_service
from messagely.schemas.auth import LoginRequest, RegisterRequest, TokenResponse
from messagely.services.auth_service import AuthService

router = APIRouter(prefix="/auth")


@router.post("/register", response_model=TokenResponse, status_code=201)
async def register(body: RegisterRequest, svc: AuthService = Depends(get_auth_service)):
    """Register a user and return a token (the user is logged in)."""
    token = await svc.register(
        username=body.username,
        password=body.password,
        first_name=body.first_name,
        last_name=body.last_name,
        phone=body.phone,
    )
    return TokenResponse(token=token)


@router.post("/login", response_model=TokenResponse)
async def login(body: LoginRequest, svc: AuthService = Depends(get_auth_service)):
    """Login with username and password → token."""
    token = await svc.login(body.username, body.password)
    return TokenResponse(token=token)
