# eventpass/schemas/registration.py
from datetime import datetime
from typing import Optional

from pydantic import EmailStr, Field

from eventpass.schemas.base import CamelModel


class RegistrationRequest(CamelModel):
    tenant_slug: str = Field(min_length=1, json_schema_extra={"example": "demo"})
    event_slug: str = Field(min_length=1, json_schema_extra={"example": "ai-summit"})
    ticket_type_id: str = Field(min_length=1)
    name: str = Field(min_length=1)
    email: EmailStr
    phone: Optional[str] = None
    company: Optional[str] = None
    ref: Optional[str] = None


class IssuedTicket(CamelModel):
    id: str
    token: str
    qr_code: Optional[str] = None
    status: str


class EventBrief(CamelModel):
    title: str
    date: datetime


class FreeRegistrationResponse(CamelModel):
    success: bool = True
    ticket: IssuedTicket
    event: EventBrief


class PaidRegistrationResponse(CamelModel):
    success: bool = True
    ticket_id: str
    client_secret: str
    amount: int  # minor units
    currency: str
