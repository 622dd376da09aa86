# eventpass/api/v1/endpoints/admin_events.py
"""
Tenant-scoped event administration.

Every route resolves the tenant from the path and requires an admin session
belonging to that tenant.
"""
import logging
from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from eventpass import crud
from eventpass.api import deps
from eventpass.core.exceptions import NotFoundError
from eventpass.db.session import get_db
from eventpass.models.event import Event as EventModel
from eventpass.models.tenant import Tenant
from eventpass.schemas.event import (
    Event,
    EventCreate,
    EventUpdate,
    TicketType,
    TicketTypeCreate,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin/{tenant_slug}/events", tags=["Admin - Events"])


def _get_event_or_404(db: Session, tenant: Tenant, event_id: str) -> EventModel:
    event = crud.event.get_for_tenant(db, tenant_id=tenant.id, event_id=event_id)
    if not event:
        raise NotFoundError("Event not found")
    return event


@router.get("", response_model=List[Event])
def list_events(
    skip: int = 0,
    limit: int = 100,
    db: Session = Depends(get_db),
    tenant: Tenant = Depends(deps.get_admin_tenant),
):
    return crud.event.get_multi_by_tenant(db, tenant_id=tenant.id, skip=skip, limit=limit)


@router.post("", response_model=Event, status_code=status.HTTP_201_CREATED)
def create_event(
    event_in: EventCreate,
    db: Session = Depends(get_db),
    tenant: Tenant = Depends(deps.get_admin_tenant),
):
    event = crud.event.create_with_ticket_types(db, obj_in=event_in, tenant_id=tenant.id)
    logger.info(f"Created event {event.id} ({event.slug}) for tenant {tenant.slug}")
    return event


@router.get("/{event_id}", response_model=Event)
def get_event(
    event_id: str,
    db: Session = Depends(get_db),
    tenant: Tenant = Depends(deps.get_admin_tenant),
):
    return _get_event_or_404(db, tenant, event_id)


@router.patch("/{event_id}", response_model=Event)
def update_event(
    event_id: str,
    event_in: EventUpdate,
    db: Session = Depends(get_db),
    tenant: Tenant = Depends(deps.get_admin_tenant),
):
    event = _get_event_or_404(db, tenant, event_id)
    return crud.event.update(db, db_obj=event, obj_in=event_in)


@router.post(
    "/{event_id}/ticket-types",
    response_model=TicketType,
    status_code=status.HTTP_201_CREATED,
)
def create_ticket_type(
    event_id: str,
    ticket_type_in: TicketTypeCreate,
    db: Session = Depends(get_db),
    tenant: Tenant = Depends(deps.get_admin_tenant),
):
    event = _get_event_or_404(db, tenant, event_id)
    return crud.ticket_type.create_for_event(db, obj_in=ticket_type_in, event_id=event.id)
