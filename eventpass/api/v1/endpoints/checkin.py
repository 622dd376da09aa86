# eventpass/api/v1/endpoints/checkin.py
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from eventpass.api import deps
from eventpass.db.session import get_db
from eventpass.schemas.ticket import (
    AttendeeView,
    CheckInInfo,
    CheckInRequest,
    CheckInResponse,
    CheckInStatusResponse,
    CheckInStatusTicket,
    EventView,
    TicketView,
)
from eventpass.schemas.token import SessionClaims
from eventpass.services.checkin_service import checkin_service

router = APIRouter(prefix="/checkin", tags=["Check-in"])


@router.post("", response_model=CheckInResponse)
def check_in(
    checkin_in: CheckInRequest,
    db: Session = Depends(get_db),
    admin: SessionClaims = Depends(deps.get_current_admin),
):
    ticket = checkin_service.check_in(db, checkin_in, admin)
    return CheckInResponse(
        checkin=CheckInInfo(
            timestamp=ticket.checked_in_at,
            gate_id=checkin_in.gate_id,
            operator_id=checkin_in.operator_id,
        ),
        ticket=TicketView.model_validate(ticket),
        attendee=AttendeeView.model_validate(ticket.attendee),
        event=EventView.model_validate(ticket.event),
    )


@router.get("", response_model=CheckInStatusResponse)
def get_checkin_status(
    token: str = Query(..., min_length=1),
    db: Session = Depends(get_db),
    admin: SessionClaims = Depends(deps.get_current_admin),
):
    """Ticket status without checking in."""
    ticket = checkin_service.find_ticket(db, token, admin)
    return CheckInStatusResponse(
        ticket=CheckInStatusTicket(
            id=ticket.id,
            token=ticket.token,
            status=ticket.status,
            checked_in_at=ticket.checked_in_at,
            can_checkin=ticket.can_check_in,
        ),
        attendee=AttendeeView.model_validate(ticket.attendee),
        event=EventView.model_validate(ticket.event),
    )
