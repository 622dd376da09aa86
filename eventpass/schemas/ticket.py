# eventpass/schemas/ticket.py
from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import Field

from eventpass.schemas.base import CamelModel


class TicketView(CamelModel):
    id: str
    token: str
    status: str
    checked_in_at: Optional[datetime] = None
    qr_code: Optional[str] = None


class AttendeeView(CamelModel):
    name: str
    email: str
    phone: Optional[str] = None
    company: Optional[str] = None


class EventView(CamelModel):
    title: str
    type: str
    start_date: datetime
    end_date: datetime
    location: Optional[str] = None


class TicketTypeView(CamelModel):
    name: str
    description: Optional[str] = None
    perks: List[str] = []


class TicketLookupResponse(CamelModel):
    success: bool = True
    ticket: TicketView
    attendee: AttendeeView
    event: EventView
    ticket_type: TicketTypeView


class CheckInRequest(CamelModel):
    token: str
    gate_id: Optional[str] = None
    operator_id: Optional[str] = None
    notes: Optional[str] = None


class CheckInInfo(CamelModel):
    timestamp: datetime
    gate_id: Optional[str] = None
    operator_id: Optional[str] = None


class CheckInResponse(CamelModel):
    success: bool = True
    message: str = "Check-in successful"
    checkin: CheckInInfo
    ticket: TicketView
    attendee: AttendeeView
    event: EventView


class CheckInStatusTicket(TicketView):
    can_checkin: bool = Field(alias="canCheckin")


class CheckInStatusResponse(CamelModel):
    success: bool = True
    ticket: CheckInStatusTicket
    attendee: AttendeeView
    event: EventView


class CheckInMetadata(CamelModel):
    checkin_gate_id: Optional[str] = None
    checkin_operator_id: Optional[str] = None
    checkin_notes: Optional[str] = None

    def as_dict(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True)
