# eventpass/schemas/event.py
from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, List, Literal, Optional

from pydantic import Field, model_validator

from eventpass.schemas.base import CamelModel

EventType = Literal["webinar", "workshop", "concert"]
EventStatus = Literal["draft", "published", "cancelled"]


class Speaker(CamelModel):
    name: str = Field(min_length=1)
    title: str = Field(min_length=1)
    bio: str = Field(min_length=1)
    image_url: Optional[str] = None
    social_links: Dict[str, str] = {}


class AgendaItem(CamelModel):
    time: str = Field(min_length=1)
    title: str = Field(min_length=1)
    description: str = Field(min_length=1)
    duration: int = Field(ge=1)
    speaker: Optional[str] = None


class TicketTypeCreate(CamelModel):
    name: str = Field(min_length=1)
    description: Optional[str] = None
    price: Decimal = Field(default=Decimal("0.00"), ge=0, max_digits=10, decimal_places=2)
    currency: str = Field(default="USD", min_length=3, max_length=3)
    quantity: Optional[int] = Field(default=None, ge=1)
    is_paid: bool = False
    is_visible: bool = True
    perks: List[str] = []
    valid_from: Optional[datetime] = None
    valid_until: Optional[datetime] = None

    @model_validator(mode="after")
    def check_paid_has_price(self):
        if self.is_paid and self.price <= 0:
            raise ValueError("Paid ticket types need a price above zero")
        return self


class TicketType(CamelModel):
    id: str
    event_id: str
    name: str
    description: Optional[str] = None
    price: Decimal
    currency: str
    quantity: Optional[int] = None
    quantity_sold: int
    quantity_available: Optional[int] = None
    is_paid: bool
    is_visible: bool
    perks: List[str] = []


class EventBase(CamelModel):
    title: str = Field(min_length=1)
    subtitle: Optional[str] = None
    description: Optional[str] = None
    type: EventType = "webinar"
    start_date: datetime
    end_date: datetime
    timezone: str = "UTC"
    location: Optional[str] = None
    capacity: Optional[int] = Field(default=None, ge=1)
    image_url: Optional[str] = None
    speakers: List[Speaker] = []
    agenda: List[AgendaItem] = []


class EventCreate(EventBase):
    slug: Optional[str] = Field(default=None, pattern=r"^[a-z0-9]+(?:-[a-z0-9]+)*$")
    status: EventStatus = "draft"
    ticket_types: List[TicketTypeCreate] = []

    @model_validator(mode="after")
    def check_dates(self):
        if self.end_date < self.start_date:
            raise ValueError("endDate must not be before startDate")
        return self


class EventUpdate(CamelModel):
    title: Optional[str] = Field(default=None, min_length=1)
    subtitle: Optional[str] = None
    description: Optional[str] = None
    type: Optional[EventType] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    timezone: Optional[str] = None
    location: Optional[str] = None
    capacity: Optional[int] = Field(default=None, ge=1)
    status: Optional[EventStatus] = None
    image_url: Optional[str] = None
    speakers: Optional[List[Speaker]] = None
    agenda: Optional[List[AgendaItem]] = None


class Event(CamelModel):
    id: str
    tenant_id: str
    slug: str
    type: str
    title: str
    subtitle: Optional[str] = None
    description: Optional[str] = None
    start_date: datetime
    end_date: datetime
    timezone: str
    location: Optional[str] = None
    capacity: Optional[int] = None
    status: str
    image_url: Optional[str] = None
    speakers: List[Dict[str, Any]] = []
    agenda: List[Dict[str, Any]] = []
    ticket_types: List[TicketType] = []
