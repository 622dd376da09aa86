# eventpass/services/auth_service.py
import logging
from typing import Tuple

from sqlalchemy.orm import Session

from eventpass import crud
from eventpass.core.exceptions import (
    ConflictError,
    InvalidCredentialsError,
    PermissionDeniedError,
)
from eventpass.core.security import (
    create_session_token,
    dummy_password_hash,
    verify_password,
)
from eventpass.models.admin_user import AdminUser
from eventpass.schemas.auth import AdminUserCreate, LoginRequest
from eventpass.schemas.token import SessionClaims
from eventpass.services import tenant_resolver

logger = logging.getLogger(__name__)


class AuthService:
    def authenticate(self, db: Session, credentials: LoginRequest) -> Tuple[AdminUser, str]:
        """
        Verify an admin login and issue a session token.

        Unknown tenant, unknown email, inactive account and wrong password
        all raise the same InvalidCredentialsError.
        """
        tenant = tenant_resolver.get_by_slug(db, credentials.tenant_slug)
        user = None
        if tenant:
            user = crud.admin_user.get_active_by_email(
                db, tenant_id=tenant.id, email=credentials.email
            )

        # Unknown accounts still pay for a bcrypt check
        password_hash = user.password_hash if user else dummy_password_hash()
        if not verify_password(credentials.password, password_hash) or not user:
            logger.info(
                f"Failed login for {credentials.email} on tenant {credentials.tenant_slug}"
            )
            raise InvalidCredentialsError()

        user = crud.admin_user.touch_last_login(db, db_obj=user)
        token = create_session_token(
            user_id=user.id, tenant_id=user.tenant_id, role=user.role, email=user.email
        )
        logger.info(f"Admin {user.id} logged in to tenant {tenant.slug}")
        return user, token

    def create_admin_user(
        self, db: Session, obj_in: AdminUserCreate, creator: SessionClaims
    ) -> AdminUser:
        tenant = tenant_resolver.resolve_or_404(db, obj_in.tenant_slug)
        if creator.role != "admin" or creator.tenant_id != tenant.id:
            raise PermissionDeniedError("Only admins of this tenant can add users")

        if crud.admin_user.get_by_email(db, tenant_id=tenant.id, email=obj_in.email):
            raise ConflictError("A user with this email already exists", code="USER_EXISTS")

        user = crud.admin_user.create_for_tenant(db, obj_in=obj_in, tenant_id=tenant.id)
        logger.info(f"Admin {creator.user_id} created user {user.id} ({user.role})")
        return user


auth_service = AuthService()
