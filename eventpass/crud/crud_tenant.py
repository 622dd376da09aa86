# eventpass/crud/crud_tenant.py
from typing import Optional

from sqlalchemy.orm import Session

from .base import CRUDBase
from eventpass.models.tenant import Tenant
from eventpass.schemas.tenant import TenantSettingsUpdate


class CRUDTenant(CRUDBase[Tenant, TenantSettingsUpdate, TenantSettingsUpdate]):
    def get_by_slug(self, db: Session, *, slug: str) -> Optional[Tenant]:
        return db.query(self.model).filter(self.model.slug == slug).first()

    def update_settings(
        self, db: Session, *, db_obj: Tenant, obj_in: TenantSettingsUpdate
    ) -> Tenant:
        """Merges theme/settings JSON instead of replacing it."""
        data = obj_in.model_dump(exclude_unset=True, by_alias=True)

        for field in ("name", "email", "domains"):
            if field in data:
                setattr(db_obj, field, data[field])

        if data.get("theme"):
            theme = {k: v for k, v in data["theme"].items() if v is not None}
            db_obj.theme = {**(db_obj.theme or {}), **theme}

        tenant_settings = {
            key: data[key]
            for key in ("allowRegistration", "timezone", "currency")
            if key in data and data[key] is not None
        }
        if tenant_settings:
            db_obj.settings = {**(db_obj.settings or {}), **tenant_settings}

        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
        return db_obj


tenant = CRUDTenant(Tenant)
