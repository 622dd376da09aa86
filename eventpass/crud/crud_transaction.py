# eventpass/crud/crud_transaction.py
from decimal import Decimal
from typing import Optional

from sqlalchemy.orm import Session

from .base import CRUDBase
from eventpass.models.transaction import Transaction


class CRUDTransaction(CRUDBase[Transaction, Transaction, Transaction]):
    def get_by_payment_intent(
        self, db: Session, *, payment_intent_id: str
    ) -> Optional[Transaction]:
        return (
            db.query(self.model)
            .filter(self.model.payment_intent_id == payment_intent_id)
            .first()
        )

    def create_pending(
        self,
        db: Session,
        *,
        ticket_id: str,
        amount: Decimal,
        currency: str,
        payment_intent_id: Optional[str],
    ) -> Transaction:
        db_obj = self.model(
            ticket_id=ticket_id,
            amount=amount,
            currency=currency,
            payment_intent_id=payment_intent_id,
            status="pending",
        )
        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
        return db_obj

    def set_status(
        self, db: Session, *, db_obj: Transaction, status: str
    ) -> Transaction:
        db_obj.status = status
        db.commit()
        db.refresh(db_obj)
        return db_obj


transaction = CRUDTransaction(Transaction)
