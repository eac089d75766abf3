"""
Account endpoints: registration, user and admin login, profile, user list
and cookie clearing.
"""

import logging

from fastapi import APIRouter, Depends, Request, Response, status
from sqlalchemy.exc import SQLAlchemyError

from food_delivery.api.deps import (
    clear_cookie,
    get_app_settings,
    get_identity_service,
    get_session_service,
    require_admin,
    require_user,
    set_session_cookie,
)
from food_delivery.core.config import Settings
from food_delivery.schemas import (
    AdminLoginResponse,
    Credentials,
    ErrorResponse,
    LoginResponse,
    MessageResponse,
    RegisterResponse,
    UserCreate,
    UserResponse,
)
from food_delivery.services.identity import IdentityService
from food_delivery.services.sessions import SessionContext, SessionService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Users"])


@router.post(
    "/users",
    response_model=RegisterResponse,
    status_code=status.HTTP_201_CREATED,
    responses={409: {"model": ErrorResponse}, 422: {"model": ErrorResponse}},
    summary="Register",
)
async def register_user(
    payload: UserCreate,
    identity: IdentityService = Depends(get_identity_service),
) -> RegisterResponse:
    user = await identity.register(payload)
    return RegisterResponse(message="User registered", user_id=user.id)


@router.post(
    "/users/login",
    response_model=LoginResponse,
    responses={401: {"model": ErrorResponse}},
    summary="Login",
)
async def login_user(
    payload: Credentials,
    response: Response,
    identity: IdentityService = Depends(get_identity_service),
    settings: Settings = Depends(get_app_settings),
) -> LoginResponse:
    """Check credentials and set the session cookie."""
    user, session = await identity.login(payload)
    set_session_cookie(response, session, settings)
    return LoginResponse(message="Login successful", user_id=user.id, name=user.name)


@router.post(
    "/admin/login",
    response_model=AdminLoginResponse,
    responses={401: {"model": ErrorResponse}},
    tags=["Admin"],
    summary="Admin Login",
)
async def login_admin(
    payload: Credentials,
    response: Response,
    identity: IdentityService = Depends(get_identity_service),
    settings: Settings = Depends(get_app_settings),
) -> AdminLoginResponse:
    """Check admin credentials and set an admin session cookie."""
    admin, session = await identity.admin_login(payload)
    set_session_cookie(response, session, settings)
    return AdminLoginResponse(message="Admin login successful", name=admin.name)


@router.get(
    "/user/fetch",
    response_model=UserResponse,
    responses={401: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
    summary="Current User Profile",
)
async def fetch_user(
    session: SessionContext = Depends(require_user),
    identity: IdentityService = Depends(get_identity_service),
) -> UserResponse:
    user = await identity.fetch_profile(session.subject_id)
    return UserResponse.model_validate(user)


@router.get(
    "/allusers",
    response_model=list[UserResponse],
    responses={401: {"model": ErrorResponse}, 403: {"model": ErrorResponse}},
    tags=["Admin"],
    summary="List Users",
)
async def list_users(
    _: SessionContext = Depends(require_admin),
    identity: IdentityService = Depends(get_identity_service),
) -> list[UserResponse]:
    users = await identity.list_users()
    return [UserResponse.model_validate(u) for u in users]


@router.post(
    "/clearCookie{title}",
    response_model=MessageResponse,
    summary="Clear Cookie",
)
async def clear_named_cookie(
    title: str,
    request: Request,
    response: Response,
    sessions: SessionService = Depends(get_session_service),
    settings: Settings = Depends(get_app_settings),
) -> MessageResponse:
    """
    Clear the named cookie. Clearing the session cookie also revokes the
    session it carries. Never fails.
    """
    if title == settings.session_cookie_name:
        try:
            await sessions.revoke(request.cookies.get(title))
        except SQLAlchemyError as e:
            logger.warning(f"Could not revoke session while clearing cookie: {e}")

    clear_cookie(response, title, settings)
    return MessageResponse(message="Cookies cleared")
