# eventpass/crud/crud_ticket.py
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session, joinedload

from .base import CRUDBase
from eventpass.models.ticket import Ticket
from eventpass.services.ticketing.codec import generate_token


class CRUDTicket(CRUDBase[Ticket, Ticket, Ticket]):
    def get_by_token(self, db: Session, *, token: str) -> Optional[Ticket]:
        """Loads the ticket with its attendee, event and ticket type."""
        return (
            db.query(self.model)
            .options(
                joinedload(self.model.attendee),
                joinedload(self.model.event),
                joinedload(self.model.ticket_type),
            )
            .filter(self.model.token == token)
            .first()
        )

    def get_with_relations(self, db: Session, *, ticket_id: str) -> Optional[Ticket]:
        return (
            db.query(self.model)
            .options(
                joinedload(self.model.attendee),
                joinedload(self.model.event),
                joinedload(self.model.ticket_type),
                joinedload(self.model.transaction),
            )
            .filter(self.model.id == ticket_id)
            .first()
        )

    def get_issued_by_event(self, db: Session, *, event_id: str) -> List[Ticket]:
        return (
            db.query(self.model)
            .options(joinedload(self.model.attendee))
            .filter(self.model.event_id == event_id, self.model.status == "issued")
            .all()
        )

    def _unique_token(self, db: Session) -> str:
        while True:
            token = generate_token()
            if not db.query(self.model.id).filter(self.model.token == token).first():
                return token

    def create_for_attendee(
        self,
        db: Session,
        *,
        event_id: str,
        ticket_type_id: str,
        attendee_id: str,
        status: str,
    ) -> Ticket:
        db_obj = self.model(
            token=self._unique_token(db),
            event_id=event_id,
            ticket_type_id=ticket_type_id,
            attendee_id=attendee_id,
            status=status,
        )
        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
        return db_obj

    def set_qr_code(self, db: Session, *, db_obj: Ticket, qr_code: str) -> Ticket:
        db_obj.qr_code = qr_code
        db.commit()
        db.refresh(db_obj)
        return db_obj

    def mark_issued(self, db: Session, *, db_obj: Ticket, qr_code: str) -> Ticket:
        db_obj.status = "issued"
        db_obj.qr_code = qr_code
        db.commit()
        db.refresh(db_obj)
        return db_obj

    def check_in(
        self, db: Session, *, db_obj: Ticket, details: Dict[str, Any]
    ) -> Ticket:
        db_obj.checked_in_at = datetime.now(timezone.utc)
        db_obj.meta = {**(db_obj.meta or {}), **details}
        db.commit()
        db.refresh(db_obj)
        return db_obj


ticket = CRUDTicket(Ticket)
