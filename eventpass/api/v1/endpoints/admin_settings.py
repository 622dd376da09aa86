# eventpass/api/v1/endpoints/admin_settings.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from eventpass import crud
from eventpass.api import deps
from eventpass.db.session import get_db
from eventpass.models.tenant import Tenant as TenantModel
from eventpass.schemas.tenant import Tenant, TenantSettingsUpdate

router = APIRouter(prefix="/admin/{tenant_slug}", tags=["Admin - Settings"])


@router.patch(
    "/settings",
    response_model=Tenant,
    dependencies=[Depends(deps.require_admin_role)],
)
def update_settings(
    settings_in: TenantSettingsUpdate,
    db: Session = Depends(get_db),
    tenant: TenantModel = Depends(deps.get_admin_tenant),
):
    """Theme and registration settings are merged into the stored values."""
    return crud.tenant.update_settings(db, db_obj=tenant, obj_in=settings_in)
