# eventpass/api/v1/endpoints/tickets.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from eventpass import crud
from eventpass.core.exceptions import EventPassError, NotFoundError, TicketStatusError
from eventpass.db.session import get_db
from eventpass.schemas.ticket import (
    AttendeeView,
    EventView,
    TicketLookupResponse,
    TicketTypeView,
    TicketView,
)
from eventpass.services.ticketing.codec import validate_token_format

router = APIRouter(tags=["Tickets"])


@router.get("/ticket/{token}", response_model=TicketLookupResponse)
def get_ticket(token: str, db: Session = Depends(get_db)):
    """Ticket readout used by scanners before checking an attendee in."""
    if not validate_token_format(token):
        raise EventPassError("Invalid ticket token format", code="INVALID_TOKEN")

    ticket = crud.ticket.get_by_token(db, token=token)
    if not ticket:
        raise NotFoundError("Ticket not found")

    if not ticket.is_issued:
        raise TicketStatusError(
            "Invalid ticket status", status=ticket.status, details=ticket.status_message
        )

    return TicketLookupResponse(
        ticket=TicketView.model_validate(ticket),
        attendee=AttendeeView.model_validate(ticket.attendee),
        event=EventView.model_validate(ticket.event),
        ticket_type=TicketTypeView.model_validate(ticket.ticket_type),
    )
