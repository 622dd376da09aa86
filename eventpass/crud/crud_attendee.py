# eventpass/crud/crud_attendee.py
from typing import Optional

from sqlalchemy.orm import Session

from .base import CRUDBase
from eventpass.models.attendee import Attendee
from eventpass.schemas.registration import RegistrationRequest


class CRUDAttendee(CRUDBase[Attendee, RegistrationRequest, RegistrationRequest]):
    def get_by_email(self, db: Session, *, email: str) -> Optional[Attendee]:
        return db.query(self.model).filter(self.model.email == email).first()

    def get_or_create(
        self,
        db: Session,
        *,
        name: str,
        email: str,
        phone: Optional[str] = None,
        company: Optional[str] = None,
    ) -> Attendee:
        """
        Reuses the attendee with this email, or inserts a new one.

        Lookup-then-insert: two concurrent first-time registrations with the
        same email can still produce two rows.
        """
        existing = self.get_by_email(db, email=email)
        if existing:
            return existing

        db_obj = self.model(name=name, email=email, phone=phone, company=company)
        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
        return db_obj


attendee = CRUDAttendee(Attendee)
