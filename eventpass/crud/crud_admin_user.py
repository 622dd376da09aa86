# eventpass/crud/crud_admin_user.py
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy.orm import Session

from .base import CRUDBase
from eventpass.core.security import hash_password
from eventpass.models.admin_user import AdminUser
from eventpass.schemas.auth import AdminUserCreate


class CRUDAdminUser(CRUDBase[AdminUser, AdminUserCreate, AdminUserCreate]):
    def get_by_email(
        self, db: Session, *, tenant_id: str, email: str
    ) -> Optional[AdminUser]:
        return (
            db.query(self.model)
            .filter(self.model.tenant_id == tenant_id, self.model.email == email)
            .first()
        )

    def get_active_by_email(
        self, db: Session, *, tenant_id: str, email: str
    ) -> Optional[AdminUser]:
        return (
            db.query(self.model)
            .filter(
                self.model.tenant_id == tenant_id,
                self.model.email == email,
                self.model.is_active.is_(True),
            )
            .first()
        )

    def create_for_tenant(
        self, db: Session, *, obj_in: AdminUserCreate, tenant_id: str
    ) -> AdminUser:
        db_obj = self.model(
            tenant_id=tenant_id,
            email=obj_in.email,
            password_hash=hash_password(obj_in.password),
            name=obj_in.name,
            role=obj_in.role,
        )
        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
        return db_obj

    def touch_last_login(self, db: Session, *, db_obj: AdminUser) -> AdminUser:
        db_obj.last_login_at = datetime.now(timezone.utc)
        db.commit()
        db.refresh(db_obj)
        return db_obj


admin_user = CRUDAdminUser(AdminUser)
