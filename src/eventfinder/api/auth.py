"""Account and session endpoints"""
from typing import Optional

from fastapi import APIRouter, Depends, Request

from eventfinder.api.deps import get_auth_service, get_current_user, get_session_token
from eventfinder.core.config import settings
from eventfinder.middleware.rate_limiter import limiter
from eventfinder.schemas import ApiResponse, LoginRequest, LoginResponse, User, UserCreate, UserUpdate
from eventfinder.services import AuthService

router = APIRouter(prefix="/auth")


@router.post(
    "/register",
    response_model=ApiResponse[LoginResponse],
    response_model_exclude_none=True,
    status_code=201,
)
@limiter.limit(settings.REGISTER_RATE_LIMIT)
async def register(
    request: Request,
    user_data: UserCreate,
    service: AuthService = Depends(get_auth_service),
):
    """Create an account; the response carries a session token"""
    result = await service.register(user_data)
    return ApiResponse(data=result, message="Account created successfully")


@router.post("/login", response_model=ApiResponse[LoginResponse], response_model_exclude_none=True)
@limiter.limit(settings.LOGIN_RATE_LIMIT)
async def login(
    request: Request,
    credentials: LoginRequest,
    service: AuthService = Depends(get_auth_service),
):
    result = await service.login(credentials.email, credentials.password)
    return ApiResponse(data=result, message="Logged in successfully")


@router.post("/logout", response_model=ApiResponse, response_model_exclude_none=True)
async def logout(
    token: Optional[str] = Depends(get_session_token),
    service: AuthService = Depends(get_auth_service),
):
    await service.logout(token)
    return ApiResponse(message="Logged out")


@router.get("/me", response_model=ApiResponse[User], response_model_exclude_none=True)
async def get_me(user: User = Depends(get_current_user)):
    return ApiResponse(data=user)


@router.put("/me", response_model=ApiResponse[User], response_model_exclude_none=True)
async def update_me(
    changes: UserUpdate,
    token: Optional[str] = Depends(get_session_token),
    service: AuthService = Depends(get_auth_service),
):
    user = await service.update_profile(token, changes)
    return ApiResponse(data=user, message="Profile updated")
