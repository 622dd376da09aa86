# eventpass/models/ticket.py
from sqlalchemy import Column, String, DateTime, ForeignKey, Text, JSON, func
from sqlalchemy.orm import relationship
from eventpass.db.base_class import Base
import uuid

TICKET_STATUS_MESSAGES = {
    "pending": "Payment is pending for this ticket",
    "failed": "Payment for this ticket failed",
    "cancelled": "This ticket has been cancelled",
}


class Ticket(Base):
    """A single admission, identified by its opaque token."""
    __tablename__ = "tickets"

    id = Column(
        String, primary_key=True, default=lambda: f"tkt_{uuid.uuid4().hex[:12]}"
    )
    token = Column(String(255), unique=True, nullable=False, index=True)
    event_id = Column(String, ForeignKey("events.id"), nullable=False, index=True)
    ticket_type_id = Column(String, ForeignKey("ticket_types.id"), nullable=False, index=True)
    attendee_id = Column(String, ForeignKey("attendees.id"), nullable=False, index=True)

    # Status: 'pending', 'issued', 'failed', 'cancelled'
    status = Column(String(50), nullable=False, default="pending")
    qr_code = Column(Text, nullable=True)  # PNG data URL encoding the token

    checked_in_at = Column(DateTime(timezone=True), nullable=True)
    # Gate/operator/notes recorded at check-in
    meta = Column("metadata", JSON, nullable=False, default=dict)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    event = relationship("Event", back_populates="tickets")
    ticket_type = relationship("TicketType", back_populates="tickets")
    attendee = relationship("Attendee", back_populates="tickets")
    transaction = relationship("Transaction", back_populates="ticket", uselist=False)

    @property
    def is_issued(self) -> bool:
        return self.status == "issued"

    @property
    def can_check_in(self) -> bool:
        return self.status == "issued" and self.checked_in_at is None

    @property
    def status_message(self) -> str:
        return TICKET_STATUS_MESSAGES.get(self.status, "Ticket status is invalid")
