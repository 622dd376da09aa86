# eventpass/services/checkin_service.py
"""
Check-in at the venue door.

A ticket can be checked in once, only while it is issued, and only inside
the window that opens CHECKIN_OPENS_HOURS_BEFORE hours before the event
starts and closes when the event ends.
"""
import logging
from datetime import timedelta

from sqlalchemy.orm import Session

from eventpass import crud
from eventpass.core.config import settings
from eventpass.core.exceptions import (
    CheckInWindowError,
    ConflictError,
    EventPassError,
    NotFoundError,
    PermissionDeniedError,
    TicketStatusError,
)
from eventpass.models.ticket import Ticket
from eventpass.schemas.ticket import CheckInMetadata, CheckInRequest
from eventpass.schemas.token import SessionClaims
from eventpass.services.ticketing.codec import validate_token_format
from eventpass.utils.datetime import as_utc, utcnow

logger = logging.getLogger(__name__)


class CheckInService:
    def find_ticket(self, db: Session, token: str, admin: SessionClaims) -> Ticket:
        if not validate_token_format(token):
            raise EventPassError("Invalid ticket token format", code="INVALID_TOKEN")

        ticket = crud.ticket.get_by_token(db, token=token)
        if not ticket:
            raise NotFoundError("Ticket not found")
        if ticket.event.tenant_id != admin.tenant_id:
            raise PermissionDeniedError("Access denied to this event")
        return ticket

    def check_in(
        self, db: Session, request: CheckInRequest, admin: SessionClaims
    ) -> Ticket:
        ticket = self.find_ticket(db, request.token, admin)

        if not ticket.is_issued:
            raise TicketStatusError(
                "Ticket is not issued or is invalid",
                status=ticket.status,
                details=ticket.status_message,
            )

        if ticket.checked_in_at:
            raise ConflictError(
                "Ticket already checked in",
                code="ALREADY_CHECKED_IN",
                extra={"checkedInAt": as_utc(ticket.checked_in_at).isoformat()},
            )

        now = utcnow()
        event_start = as_utc(ticket.event.start_date)
        event_end = as_utc(ticket.event.end_date)
        opens_at = event_start - timedelta(hours=settings.CHECKIN_OPENS_HOURS_BEFORE)

        if now < opens_at:
            raise CheckInWindowError(
                f"Check-in opens {settings.CHECKIN_OPENS_HOURS_BEFORE} hours "
                "before the event starts",
                code="CHECKIN_NOT_OPEN",
                extra={"eventStart": event_start.isoformat()},
            )
        if now > event_end:
            raise CheckInWindowError(
                "Check-in is no longer available as the event has ended",
                code="EVENT_ENDED",
                extra={"eventEnd": event_end.isoformat()},
            )

        details = CheckInMetadata(
            checkin_gate_id=request.gate_id,
            checkin_operator_id=request.operator_id,
            checkin_notes=request.notes,
        )
        ticket = crud.ticket.check_in(db, db_obj=ticket, details=details.as_dict())

        logger.info(
            f"Checked in ticket {ticket.id} for event {ticket.event_id} "
            f"(gate={request.gate_id}, operator={request.operator_id})"
        )
        return ticket


checkin_service = CheckInService()
