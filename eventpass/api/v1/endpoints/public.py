# eventpass/api/v1/endpoints/public.py
"""
Unauthenticated data behind the tenant and event landing pages.
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from eventpass import crud
from eventpass.core.exceptions import NotFoundError
from eventpass.db.session import get_db
from eventpass.models.tenant import Tenant
from eventpass.schemas.event import Event, TicketType
from eventpass.schemas.tenant import PublicEventPage, PublicTenant
from eventpass.services import tenant_resolver

router = APIRouter(prefix="/public", tags=["Public"])


def _public_tenant(tenant: Tenant) -> PublicTenant:
    return PublicTenant(
        slug=tenant.slug,
        name=tenant.name,
        theme=tenant.theme or {},
        theme_vars=tenant_resolver.theme_vars(tenant),
    )


@router.get("/{tenant_slug}", response_model=PublicTenant)
def get_public_tenant(tenant_slug: str, db: Session = Depends(get_db)):
    tenant = tenant_resolver.resolve_or_404(db, tenant_slug)
    return _public_tenant(tenant)


@router.get("/{tenant_slug}/events/{event_slug}", response_model=PublicEventPage)
def get_public_event(tenant_slug: str, event_slug: str, db: Session = Depends(get_db)):
    tenant = tenant_resolver.resolve_or_404(db, tenant_slug)

    event = crud.event.get_by_slug(db, tenant_id=tenant.id, slug=event_slug)
    # Drafts and cancelled events are not public
    if not event or not event.is_published:
        raise NotFoundError("Event not found")

    visible = crud.ticket_type.get_visible_by_event(db, event_id=event.id)
    event_data = Event.model_validate(event).model_copy(
        update={"ticket_types": [TicketType.model_validate(tt) for tt in visible]}
    )
    return PublicEventPage(tenant=_public_tenant(tenant), event=event_data)
