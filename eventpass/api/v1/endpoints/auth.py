# eventpass/api/v1/endpoints/auth.py
"""
Admin session endpoints.

POST logs in and sets the HTTP-only session cookie, GET reports the current
session, DELETE clears it and PUT adds another admin user to the tenant.
"""
import logging

from fastapi import APIRouter, Depends, Request, Response, status
from sqlalchemy.orm import Session

from eventpass.api import deps
from eventpass.core.config import settings
from eventpass.core.limiter import LOGIN_RATE_LIMIT, limiter
from eventpass.db.session import get_db
from eventpass.schemas.auth import (
    AdminUserCreate,
    AdminUserCreatedResponse,
    AdminUserSummary,
    AuthStatusResponse,
    LoginRequest,
    LoginResponse,
    LogoutResponse,
)
from eventpass.schemas.token import SessionClaims
from eventpass.services.auth_service import auth_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Auth"])


def _set_session_cookie(response: Response, token: str, max_age: int) -> None:
    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=token,
        httponly=True,
        secure=settings.IS_PRODUCTION,
        samesite="strict",
        max_age=max_age,
        path="/",
    )


@router.post("", response_model=LoginResponse)
@limiter.limit(LOGIN_RATE_LIMIT)
def login(
    request: Request,
    response: Response,
    credentials: LoginRequest,
    db: Session = Depends(get_db),
):
    user, token = auth_service.authenticate(db, credentials)
    _set_session_cookie(response, token, settings.SESSION_TTL_DAYS * 24 * 60 * 60)
    return LoginResponse(user=AdminUserSummary.model_validate(user), token=token)


@router.get("", response_model=AuthStatusResponse)
def get_session(admin: SessionClaims = Depends(deps.get_current_admin)):
    return AuthStatusResponse(user=admin)


@router.delete("", response_model=LogoutResponse)
def logout(response: Response):
    _set_session_cookie(response, "", 0)
    return LogoutResponse()


@router.put(
    "", response_model=AdminUserCreatedResponse, status_code=status.HTTP_201_CREATED
)
def create_admin_user(
    user_in: AdminUserCreate,
    db: Session = Depends(get_db),
    admin: SessionClaims = Depends(deps.get_current_admin),
):
    user = auth_service.create_admin_user(db, user_in, admin)
    return AdminUserCreatedResponse(user=AdminUserSummary.model_validate(user))
