# eventpass/services/ticketing/issuance_service.py
"""
Ticket Issuance Service

Handles business logic for:
- Registration (free and paid ticket types)
- Payment completion (webhook or dev simulation)
- Re-fetching the payment intent of a pending ticket
"""

import logging
from typing import Optional, Union

from sqlalchemy.orm import Session

from eventpass import crud
from eventpass.core import email
from eventpass.core.exceptions import (
    ConflictError,
    NotFoundError,
    PermissionDeniedError,
    SoldOutError,
    TicketStatusError,
)
from eventpass.models.attendee import Attendee
from eventpass.models.event import Event
from eventpass.models.ticket import Ticket
from eventpass.models.ticket_type import TicketType
from eventpass.schemas.payment import PaymentIntentResponse
from eventpass.schemas.registration import (
    EventBrief,
    FreeRegistrationResponse,
    IssuedTicket,
    PaidRegistrationResponse,
    RegistrationRequest,
)
from eventpass.services import tenant_resolver
from eventpass.services.payment import (
    CreatePaymentIntentParams,
    PaymentGateway,
    get_payment_gateway,
)
from eventpass.services.ticketing.codec import generate_qr_code

logger = logging.getLogger(__name__)

RegistrationResult = Union[FreeRegistrationResponse, PaidRegistrationResponse]


def format_event_date(event: Event) -> str:
    return event.start_date.strftime("%B %d, %Y")


class TicketIssuanceService:
    """Turns registrations into tickets and settles their payments."""

    def __init__(self, gateway: Optional[PaymentGateway] = None):
        self._gateway = gateway

    @property
    def gateway(self) -> PaymentGateway:
        return self._gateway or get_payment_gateway()

    # ========================================
    # Registration
    # ========================================

    async def register(
        self, db: Session, request: RegistrationRequest
    ) -> RegistrationResult:
        tenant = tenant_resolver.resolve_or_404(db, request.tenant_slug)
        if not tenant.allows_registration:
            raise PermissionDeniedError(
                "Registration is closed for this organization", code="REGISTRATION_CLOSED"
            )

        event = crud.event.get_by_slug(db, tenant_id=tenant.id, slug=request.event_slug)
        ticket_type = None
        if event:
            ticket_type = crud.ticket_type.get_for_event(
                db, event_id=event.id, ticket_type_id=request.ticket_type_id
            )
        if not event or not ticket_type:
            raise NotFoundError("Event or ticket type not found")

        if ticket_type.is_sold_out:
            raise SoldOutError()

        attendee = crud.attendee.get_or_create(
            db,
            name=request.name,
            email=request.email,
            phone=request.phone,
            company=request.company,
        )

        if ticket_type.is_paid:
            return await self._register_paid(db, event, ticket_type, attendee)
        return self._register_free(db, event, ticket_type, attendee)

    def _register_free(
        self, db: Session, event: Event, ticket_type: TicketType, attendee: Attendee
    ) -> FreeRegistrationResponse:
        # Claim the seat before the ticket exists so concurrent registrations
        # cannot both take the last one.
        if not crud.ticket_type.increment_sold(db, ticket_type_id=ticket_type.id):
            raise SoldOutError()

        ticket = crud.ticket.create_for_attendee(
            db,
            event_id=event.id,
            ticket_type_id=ticket_type.id,
            attendee_id=attendee.id,
            status="issued",
        )
        qr_code = generate_qr_code(ticket.token)
        ticket = crud.ticket.set_qr_code(db, db_obj=ticket, qr_code=qr_code)

        self._send_confirmation(event, attendee, ticket)
        logger.info(f"Issued free ticket {ticket.id} for event {event.id}")

        return FreeRegistrationResponse(
            ticket=IssuedTicket.model_validate(ticket),
            event=EventBrief(title=event.title, date=event.start_date),
        )

    async def _register_paid(
        self, db: Session, event: Event, ticket_type: TicketType, attendee: Attendee
    ) -> PaidRegistrationResponse:
        ticket = crud.ticket.create_for_attendee(
            db,
            event_id=event.id,
            ticket_type_id=ticket_type.id,
            attendee_id=attendee.id,
            status="pending",
        )
        amount = ticket_type.amount_minor

        # A gateway failure leaves the ticket pending without a transaction
        intent = await self.gateway.create_payment_intent(
            CreatePaymentIntentParams(
                amount=amount,
                currency=ticket_type.currency,
                customer_email=attendee.email,
                description=f"{event.title} - {ticket_type.name}",
                metadata={
                    "ticketId": ticket.id,
                    "eventId": event.id,
                    "attendeeId": attendee.id,
                },
                idempotency_key=f"ticket-{ticket.id}",
            )
        )

        crud.transaction.create_pending(
            db,
            ticket_id=ticket.id,
            amount=ticket_type.price,
            currency=ticket_type.currency,
            payment_intent_id=intent.intent_id,
        )
        logger.info(
            f"Created pending ticket {ticket.id} with intent {intent.intent_id} "
            f"({amount} {ticket_type.currency})"
        )

        return PaidRegistrationResponse(
            ticket_id=ticket.id,
            client_secret=intent.client_secret,
            amount=amount,
            currency=ticket_type.currency,
        )

    # ========================================
    # Payment completion
    # ========================================

    def complete_payment(self, db: Session, ticket_id: str, succeeded: bool) -> Ticket:
        """
        Settle the payment of a pending ticket.

        On success the ticket is issued with its QR code, the transaction is
        completed, the sold count goes up and the confirmation email is sent.
        On failure only the transaction is marked failed. Completing an
        already issued ticket changes nothing.
        """
        ticket = crud.ticket.get_with_relations(db, ticket_id=ticket_id)
        if not ticket:
            raise NotFoundError("Ticket not found")

        if ticket.is_issued:
            logger.info(f"Ticket {ticket.id} is already issued, nothing to complete")
            return ticket

        transaction = ticket.transaction

        if not succeeded:
            if transaction:
                crud.transaction.set_status(db, db_obj=transaction, status="failed")
            logger.info(f"Payment failed for ticket {ticket.id}")
            return ticket

        if ticket.status != "pending":
            raise TicketStatusError(
                "Ticket is not awaiting payment", status=ticket.status
            )

        qr_code = generate_qr_code(ticket.token)
        ticket = crud.ticket.mark_issued(db, db_obj=ticket, qr_code=qr_code)
        if transaction:
            crud.transaction.set_status(db, db_obj=transaction, status="completed")

        if not crud.ticket_type.increment_sold(db, ticket_type_id=ticket.ticket_type_id):
            # The payment was already captured, so the ticket is honoured anyway
            logger.error(
                f"Ticket type {ticket.ticket_type_id} oversold by paid ticket {ticket.id}"
            )
            crud.ticket_type.increment_sold(
                db, ticket_type_id=ticket.ticket_type_id, force=True
            )

        self._send_confirmation(ticket.event, ticket.attendee, ticket)
        logger.info(f"Payment completed, ticket {ticket.id} issued")
        return ticket

    def complete_payment_by_intent(
        self, db: Session, payment_intent_id: str, succeeded: bool
    ) -> Optional[Ticket]:
        transaction = crud.transaction.get_by_payment_intent(
            db, payment_intent_id=payment_intent_id
        )
        if not transaction:
            logger.warning(f"No transaction found for payment intent {payment_intent_id}")
            return None
        return self.complete_payment(db, transaction.ticket_id, succeeded)

    async def ensure_payment_intent(
        self, db: Session, ticket_id: str
    ) -> PaymentIntentResponse:
        """Return the client secret for a pending ticket, creating the intent if needed."""
        ticket = crud.ticket.get_with_relations(db, ticket_id=ticket_id)
        if not ticket:
            raise NotFoundError("Ticket not found")
        if ticket.status != "pending":
            raise TicketStatusError("Ticket is not awaiting payment", status=ticket.status)

        transaction = ticket.transaction
        if not transaction:
            raise ConflictError("No payment is associated with this ticket")

        ticket_type = ticket.ticket_type
        if transaction.payment_intent_id:
            intent = await self.gateway.get_payment_intent(transaction.payment_intent_id)
        else:
            intent = await self.gateway.create_payment_intent(
                CreatePaymentIntentParams(
                    amount=ticket_type.amount_minor,
                    currency=ticket_type.currency,
                    customer_email=ticket.attendee.email,
                    description=f"{ticket.event.title} - {ticket_type.name}",
                    metadata={"ticketId": ticket.id, "eventId": ticket.event_id},
                    idempotency_key=f"ticket-{ticket.id}",
                )
            )
            crud.transaction.update(
                db, db_obj=transaction, obj_in={"payment_intent_id": intent.intent_id}
            )

        # Price comes from the stored ticket type and transaction
        return PaymentIntentResponse(
            client_secret=intent.client_secret,
            amount=ticket_type.amount_minor,
            currency=transaction.currency,
        )

    def _send_confirmation(self, event: Event, attendee: Attendee, ticket: Ticket) -> None:
        email.send_ticket_confirmation(
            to_email=attendee.email,
            attendee_name=attendee.name,
            event_title=event.title,
            event_date=format_event_date(event),
            qr_code_data=ticket.qr_code,
            ticket_token=ticket.token,
        )


ticket_issuance_service = TicketIssuanceService()
