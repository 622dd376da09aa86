# eventpass/models/event.py
from sqlalchemy import (
    Column, String, Text, Integer, DateTime, ForeignKey, JSON, UniqueConstraint, func
)
from sqlalchemy.orm import relationship
from eventpass.db.base_class import Base
import uuid

EVENT_TYPES = ("webinar", "workshop", "concert")
EVENT_STATUSES = ("draft", "published", "cancelled")


class Event(Base):
    __tablename__ = "events"
    __table_args__ = (
        UniqueConstraint("tenant_id", "slug", name="uq_events_tenant_slug"),
    )

    id = Column(
        String, primary_key=True, default=lambda: f"evt_{uuid.uuid4().hex[:12]}"
    )
    tenant_id = Column(String, ForeignKey("tenants.id"), nullable=False, index=True)
    slug = Column(String(100), nullable=False)
    type = Column(String(50), nullable=False)  # webinar, workshop, concert
    title = Column(String(255), nullable=False)
    subtitle = Column(Text, nullable=True)
    description = Column(Text, nullable=True)
    start_date = Column(DateTime(timezone=True), nullable=False)
    end_date = Column(DateTime(timezone=True), nullable=False)
    timezone = Column(String(50), nullable=False, default="UTC")
    location = Column(String(255), nullable=True)
    capacity = Column(Integer, nullable=True)
    status = Column(String(50), nullable=False, default="draft")
    image_url = Column(Text, nullable=True)
    speakers = Column(JSON, nullable=False, default=list)
    agenda = Column(JSON, nullable=False, default=list)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    tenant = relationship("Tenant", back_populates="events")
    ticket_types = relationship(
        "TicketType", back_populates="event", order_by="TicketType.created_at"
    )
    tickets = relationship("Ticket", back_populates="event")

    @property
    def is_published(self) -> bool:
        return self.status == "published"
