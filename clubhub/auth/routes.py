# =============================================================================
# Auth API Routes
# =============================================================================
#
# Endpoints:
#   POST  /auth/register  - Create account
#   POST  /auth/login     - Get a session token
#   POST  /auth/logout    - Client discards its token
#   GET   /auth/me        - Get current user
#   PATCH /auth/me        - Update own profile
#
# =============================================================================

from __future__ import annotations

from fastapi import APIRouter, Depends
from pydantic import EmailStr, Field

from clubhub.api.deps import ClubServices, get_services
from clubhub.auth.context import AuthContext
from clubhub.auth.policies import require_auth
from clubhub.core.errors import NotFound
from clubhub.core.models import (
    ApiModel,
    MessageResponse,
    ProfileUpdate,
    UserCreate,
    UserResponse,
)

router = APIRouter(prefix="/auth", tags=["auth"])


# =============================================================================
# Request/Response Models
# =============================================================================


class LoginRequest(ApiModel):
    email: EmailStr
    password: str = Field(min_length=6)


class LoginResponse(ApiModel):
    token: str
    token_type: str = "bearer"
    expires_in: int  # seconds
    user: UserResponse


class RegisterResponse(ApiModel):
    message: str
    user: UserResponse


# =============================================================================
# Public Endpoints
# =============================================================================


@router.post("/register", response_model=RegisterResponse)
async def register(data: UserCreate, services: ClubServices = Depends(get_services)):
    """
    Create a new account.

    The user joins the default club. No token is returned; log in next.
    """
    user = await services.credentials.register(data)
    await services.clubs.join_default_club(user)
    return RegisterResponse(
        message="User registered successfully",
        user=UserResponse.from_db(user),
    )


@router.post("/login", response_model=LoginResponse)
async def login(data: LoginRequest, services: ClubServices = Depends(get_services)):
    """
    Authenticate and get a session token valid for seven days.
    """
    token, user = await services.credentials.authenticate(data.email, data.password)
    return LoginResponse(
        token=token,
        expires_in=services.credentials.tokens.expires_in,
        user=UserResponse.from_db(user),
    )


# =============================================================================
# Protected Endpoints
# =============================================================================


@router.post("/logout", response_model=MessageResponse)
async def logout(ctx: AuthContext = Depends(require_auth)):
    """
    Logout (client should discard its token).

    Tokens are stateless; there is no server-side revocation.
    """
    return MessageResponse(message="Logged out successfully")


@router.get("/me", response_model=UserResponse)
async def get_current_user(
    ctx: AuthContext = Depends(require_auth),
    services: ClubServices = Depends(get_services),
):
    """
    Get the current authenticated user, as stored now.
    """
    user = await services.credentials.get_user(ctx.user_id)
    if not user:
        raise NotFound("User not found")
    return UserResponse.from_db(user)


@router.patch("/me", response_model=UserResponse)
async def update_current_user(
    data: ProfileUpdate,
    ctx: AuthContext = Depends(require_auth),
    services: ClubServices = Depends(get_services),
):
    """
    Update the current user's display name or avatar.
    """
    user = await services.users.update_profile(ctx, data)
    return UserResponse.from_db(user)
