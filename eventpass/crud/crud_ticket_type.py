# eventpass/crud/crud_ticket_type.py
from typing import List, Optional

from sqlalchemy import or_, update as sql_update
from sqlalchemy.orm import Session

from .base import CRUDBase
from eventpass.models.ticket_type import TicketType
from eventpass.schemas.event import TicketTypeCreate


class CRUDTicketType(CRUDBase[TicketType, TicketTypeCreate, TicketTypeCreate]):
    def get_for_event(
        self, db: Session, *, event_id: str, ticket_type_id: str
    ) -> Optional[TicketType]:
        return (
            db.query(self.model)
            .filter(self.model.id == ticket_type_id, self.model.event_id == event_id)
            .first()
        )

    def get_visible_by_event(self, db: Session, *, event_id: str) -> List[TicketType]:
        return (
            db.query(self.model)
            .filter(self.model.event_id == event_id, self.model.is_visible.is_(True))
            .order_by(self.model.created_at)
            .all()
        )

    def create_for_event(
        self, db: Session, *, obj_in: TicketTypeCreate, event_id: str
    ) -> TicketType:
        db_obj = self.model(**obj_in.model_dump(), event_id=event_id)
        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
        return db_obj

    def increment_sold(
        self, db: Session, *, ticket_type_id: str, force: bool = False
    ) -> bool:
        """
        Atomically count one more sold ticket.

        The capacity check lives in the WHERE clause, so two concurrent
        issuances can never push quantity_sold past quantity. Returns False
        when no row was updated (sold out). ``force`` skips the capacity
        condition for payments that were already captured.
        """
        conditions = [self.model.id == ticket_type_id]
        if not force:
            conditions.append(
                or_(
                    self.model.quantity.is_(None),
                    self.model.quantity_sold < self.model.quantity,
                )
            )
        result = db.execute(
            sql_update(self.model)
            .where(*conditions)
            .values(quantity_sold=self.model.quantity_sold + 1)
            .execution_options(synchronize_session=False)
        )
        db.commit()
        return result.rowcount == 1


ticket_type = CRUDTicketType(TicketType)
