# eventpass/crud/crud_event.py
import re
import secrets
from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy.orm import Session

from .base import CRUDBase
from eventpass.models.event import Event
from eventpass.models.ticket_type import TicketType
from eventpass.schemas.event import EventCreate, EventUpdate


def slugify(value: str) -> str:
    slug = re.sub(r"[^a-z0-9]+", "-", value.lower()).strip("-")
    return slug[:90] or "event"


def _json_lists(obj_in, data: dict) -> dict:
    # speakers/agenda are stored with the same camelCase keys the API uses
    for field in ("speakers", "agenda"):
        items = getattr(obj_in, field, None)
        if field in data and items is not None:
            data[field] = [item.model_dump(by_alias=True) for item in items]
    return data


class CRUDEvent(CRUDBase[Event, EventCreate, EventUpdate]):
    def get_by_slug(
        self, db: Session, *, tenant_id: str, slug: str
    ) -> Optional[Event]:
        return (
            db.query(self.model)
            .filter(self.model.tenant_id == tenant_id, self.model.slug == slug)
            .first()
        )

    def get_for_tenant(
        self, db: Session, *, tenant_id: str, event_id: str
    ) -> Optional[Event]:
        return (
            db.query(self.model)
            .filter(self.model.tenant_id == tenant_id, self.model.id == event_id)
            .first()
        )

    def get_multi_by_tenant(
        self, db: Session, *, tenant_id: str, skip: int = 0, limit: int = 100
    ) -> List[Event]:
        return (
            db.query(self.model)
            .filter(self.model.tenant_id == tenant_id)
            .order_by(self.model.start_date)
            .offset(skip)
            .limit(limit)
            .all()
        )

    def _unique_slug(self, db: Session, tenant_id: str, base: str) -> str:
        slug = base
        while self.get_by_slug(db, tenant_id=tenant_id, slug=slug):
            slug = f"{base}-{secrets.token_hex(2)}"
        return slug

    def create_with_ticket_types(
        self, db: Session, *, obj_in: EventCreate, tenant_id: str
    ) -> Event:
        """
        Creates an event and its initial ticket types in one commit.
        A missing slug is derived from the title.
        """
        data = _json_lists(obj_in, obj_in.model_dump(exclude={"ticket_types", "slug"}))
        slug = self._unique_slug(db, tenant_id, obj_in.slug or slugify(obj_in.title))

        db_obj = self.model(**data, tenant_id=tenant_id, slug=slug)
        db.add(db_obj)
        db.flush()

        for tt_in in obj_in.ticket_types:
            db.add(TicketType(**tt_in.model_dump(), event_id=db_obj.id))

        db.commit()
        db.refresh(db_obj)
        return db_obj

    def update(self, db: Session, *, db_obj: Event, obj_in: EventUpdate) -> Event:
        update_data = _json_lists(obj_in, obj_in.model_dump(exclude_unset=True))
        update_data["updated_at"] = datetime.now(timezone.utc)
        return super().update(db, db_obj=db_obj, obj_in=update_data)


event = CRUDEvent(Event)
