# eventpass/models/attendee.py
from sqlalchemy import Column, String, DateTime, func
from sqlalchemy.orm import relationship
from eventpass.db.base_class import Base
import uuid


class Attendee(Base):
    """A ticket holder. Several tickets may share one attendee (same email)."""
    __tablename__ = "attendees"

    id = Column(
        String, primary_key=True, default=lambda: f"att_{uuid.uuid4().hex[:12]}"
    )
    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False, index=True)
    phone = Column(String(50), nullable=True)
    company = Column(String(255), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    tickets = relationship("Ticket", back_populates="attendee")
