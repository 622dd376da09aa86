# eventpass/services/reminder_service.py
import logging

from sqlalchemy.orm import Session

from eventpass import crud
from eventpass.core import email
from eventpass.core.config import settings
from eventpass.core.exceptions import EmailDeliveryError, NotFoundError, PermissionDeniedError
from eventpass.models.event import Event
from eventpass.schemas.reminder import ReminderCounts, ReminderRequest, ReminderResponse
from eventpass.schemas.token import SessionClaims

logger = logging.getLogger(__name__)

LEAD_TIME_TEXT = {"24h": "24 hours", "1h": "1 hour"}


def event_link(event: Event) -> str:
    return f"{settings.BASE_URL}/{event.tenant.slug}/{event.type}/{event.slug}"


def reminder_subject(event: Event, when: str, custom_message=None) -> str:
    if custom_message:
        return f"Event Reminder: {event.title}"
    lead_time = LEAD_TIME_TEXT.get(when)
    if lead_time:
        return f"Reminder: {event.title} in {lead_time}"
    return f"Reminder: {event.title}"


class ReminderService:
    def send_reminders(
        self, db: Session, request: ReminderRequest, admin: SessionClaims
    ) -> ReminderResponse:
        """
        Email every attendee holding an issued ticket for the event.

        A failed send is recorded in ``errors`` and the batch carries on.
        """
        event = crud.event.get(db, request.event_id)
        if not event:
            raise NotFoundError("Event not found")
        if event.tenant_id != admin.tenant_id:
            raise PermissionDeniedError("Access denied to this event")

        tickets = crud.ticket.get_issued_by_event(db, event_id=event.id)
        subject = reminder_subject(event, request.when, request.custom_message)
        event_date = event.start_date.strftime("%A, %B %d, %Y %I:%M %p")
        link = event_link(event)

        sent = 0
        errors = []
        for ticket in tickets:
            attendee = ticket.attendee
            try:
                html = email.render_reminder_email(
                    attendee.name, event.title, event_date, link, request.custom_message
                )
                email.send_email(attendee.email, subject, html)
                sent += 1
            except EmailDeliveryError as e:
                logger.warning(f"Reminder to {attendee.email} failed: {e}")
                errors.append(f"Failed to send email to {attendee.email}")

        logger.info(
            f"Sent {sent}/{len(tickets)} reminders ({request.when}) for event {event.id}"
        )
        return ReminderResponse(
            reminders_sent=ReminderCounts(emails=sent, total=sent),
            total_attendees=len(tickets),
            errors=errors or None,
        )


reminder_service = ReminderService()
