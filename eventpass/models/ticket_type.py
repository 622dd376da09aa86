# eventpass/models/ticket_type.py
from decimal import Decimal, ROUND_HALF_UP

from sqlalchemy import (
    Column, String, Boolean, DateTime, Integer, Numeric, Text, ForeignKey, JSON, func
)
from sqlalchemy.orm import relationship
from eventpass.db.base_class import Base
import uuid


class TicketType(Base):
    __tablename__ = "ticket_types"

    id = Column(
        String, primary_key=True, default=lambda: f"tt_{uuid.uuid4().hex[:12]}"
    )
    event_id = Column(String, ForeignKey("events.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    price = Column(Numeric(10, 2), nullable=False, default=Decimal("0.00"))
    currency = Column(String(3), nullable=False, default="USD")
    quantity = Column(Integer, nullable=True)  # NULL = unlimited
    quantity_sold = Column(Integer, nullable=False, default=0)
    is_paid = Column(Boolean, nullable=False, default=False)
    is_visible = Column(Boolean, nullable=False, default=True)
    perks = Column(JSON, nullable=False, default=list)
    valid_from = Column(DateTime(timezone=True), nullable=True)
    valid_until = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    event = relationship("Event", back_populates="ticket_types")
    tickets = relationship("Ticket", back_populates="ticket_type")

    @property
    def is_sold_out(self) -> bool:
        if self.quantity is None:
            return False
        return (self.quantity_sold or 0) >= self.quantity

    @property
    def quantity_available(self):
        """Remaining tickets, or None when unlimited."""
        if self.quantity is None:
            return None
        return max(0, self.quantity - (self.quantity_sold or 0))

    @property
    def amount_minor(self) -> int:
        """Price in minor units (cents), rounded half-up."""
        return int(
            (Decimal(self.price or 0) * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
        )
