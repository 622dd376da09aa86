# eventpass/schemas/payment.py
from typing import Literal, Optional

from pydantic import Field

from eventpass.schemas.base import CamelModel
from eventpass.schemas.registration import EventBrief, IssuedTicket


class PaymentIntentRequest(CamelModel):
    ticket_id: str = Field(min_length=1)


class PaymentIntentResponse(CamelModel):
    success: bool = True
    client_secret: str
    amount: int
    currency: str


class SimulatePaymentRequest(CamelModel):
    ticket_id: str = Field(min_length=1)
    simulate: Literal["success", "failure"] = "success"
    delay: int = Field(default=1000, ge=0, le=10000)  # milliseconds


class SimulatedAttendee(CamelModel):
    name: str
    email: str


class SimulatedPayment(CamelModel):
    amount: float
    currency: str
    simulated_payment_intent_id: str


class SimulatedFailureDetails(CamelModel):
    reason: str
    code: Optional[str] = None
    message: str


class SimulatePaymentResponse(CamelModel):
    success: bool
    simulation: bool = True
    error: Optional[str] = None
    details: Optional[SimulatedFailureDetails] = None
    ticket: Optional[IssuedTicket] = None
    event: Optional[EventBrief] = None
    attendee: Optional[SimulatedAttendee] = None
    payment: Optional[SimulatedPayment] = None
