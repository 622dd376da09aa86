# eventpass/models/transaction.py
from sqlalchemy import Column, String, DateTime, Numeric, ForeignKey, func
from sqlalchemy.orm import relationship
from eventpass.db.base_class import Base
import uuid


class Transaction(Base):
    """Payment record for a paid ticket."""
    __tablename__ = "transactions"

    id = Column(
        String, primary_key=True, default=lambda: f"txn_{uuid.uuid4().hex[:12]}"
    )
    ticket_id = Column(String, ForeignKey("tickets.id"), nullable=False, index=True)
    payment_intent_id = Column(String(255), nullable=True, index=True)

    # Copied from the ticket type when the transaction is created
    amount = Column(Numeric(10, 2), nullable=False)
    currency = Column(String(3), nullable=False, default="USD")

    # Values: 'pending', 'completed', 'failed'
    status = Column(String(50), nullable=False, default="pending")
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    ticket = relationship("Ticket", back_populates="transaction")
