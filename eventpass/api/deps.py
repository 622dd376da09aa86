# eventpass/api/deps.py
from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from eventpass.core.config import settings
from eventpass.core.exceptions import (
    AuthenticationError,
    NotFoundError,
    PermissionDeniedError,
)
from eventpass.core.security import verify_session_token
from eventpass.db.session import get_db
from eventpass.models.tenant import Tenant
from eventpass.schemas.token import SessionClaims
from eventpass.services import tenant_resolver

# Optional: the session cookie is checked first
bearer_scheme = HTTPBearer(auto_error=False)


def get_session_token(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> Optional[str]:
    cookie_token = request.cookies.get(settings.SESSION_COOKIE_NAME)
    if cookie_token:
        return cookie_token
    if credentials and credentials.scheme.lower() == "bearer":
        return credentials.credentials
    return None


def get_current_admin(token: Optional[str] = Depends(get_session_token)) -> SessionClaims:
    if not token:
        raise AuthenticationError("Authentication required")
    claims = verify_session_token(token)
    if claims is None:
        raise AuthenticationError("Invalid or expired token")
    return claims


def require_admin_role(admin: SessionClaims = Depends(get_current_admin)) -> SessionClaims:
    if admin.role != "admin":
        raise PermissionDeniedError("Admin role required")
    return admin


def get_admin_tenant(
    tenant_slug: str,
    db: Session = Depends(get_db),
    admin: SessionClaims = Depends(get_current_admin),
) -> Tenant:
    """Resolves the path tenant and checks the session belongs to it."""
    tenant = tenant_resolver.resolve_or_404(db, tenant_slug)
    if tenant.id != admin.tenant_id:
        raise PermissionDeniedError("Access denied to this tenant")
    return tenant


def require_dev_environment() -> None:
    if settings.IS_PRODUCTION:
        raise NotFoundError("Not found")
