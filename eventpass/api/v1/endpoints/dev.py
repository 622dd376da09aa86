# eventpass/api/v1/endpoints/dev.py
"""
Development-only payment simulation.

Settles a pending ticket as if the payment provider had answered, without
any real payment. Never mounted in production.
"""
import asyncio
import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from eventpass.api import deps
from eventpass.core.config import settings
from eventpass.core.exceptions import UpstreamError
from eventpass.db.session import get_db
from eventpass.schemas.payment import (
    SimulatedAttendee,
    SimulatedFailureDetails,
    SimulatedPayment,
    SimulatePaymentRequest,
    SimulatePaymentResponse,
)
from eventpass.schemas.registration import EventBrief, IssuedTicket
from eventpass.services.payment.simulated_gateway import simulated_intent_id
from eventpass.services.ticketing.issuance_service import ticket_issuance_service

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/dev",
    tags=["Development"],
    dependencies=[Depends(deps.require_dev_environment)],
)


@router.post(
    "/simulate-payment",
    response_model=SimulatePaymentResponse,
    response_model_exclude_none=True,
)
async def simulate_payment(
    simulation: SimulatePaymentRequest, db: Session = Depends(get_db)
):
    await asyncio.sleep(simulation.delay / 1000)

    if simulation.simulate == "failure":
        ticket_issuance_service.complete_payment(db, simulation.ticket_id, succeeded=False)
        logger.info(f"[PAYMENT SIM] Payment failed for ticket {simulation.ticket_id}")
        return SimulatePaymentResponse(
            success=False,
            error="Simulated payment failure",
            details=SimulatedFailureDetails(
                reason="card_declined",
                code="insufficient_funds",
                message="Your card has insufficient funds.",
            ),
        )

    try:
        ticket = ticket_issuance_service.complete_payment(
            db, simulation.ticket_id, succeeded=True
        )
    except UpstreamError as e:
        logger.error(f"[PAYMENT SIM] Error processing ticket {simulation.ticket_id}: {e}")
        return SimulatePaymentResponse(
            success=False,
            error="Simulated payment processing error",
            details=SimulatedFailureDetails(
                reason="processing_error",
                message="An error occurred while processing the simulated payment.",
            ),
        )

    ticket_type = ticket.ticket_type
    logger.info(
        f"[PAYMENT SIM] Payment succeeded for ticket {ticket.id} "
        f"({ticket.attendee.name}, {ticket.event.title}, {ticket_type.price})"
    )
    return SimulatePaymentResponse(
        success=True,
        ticket=IssuedTicket.model_validate(ticket),
        event=EventBrief(title=ticket.event.title, date=ticket.event.start_date),
        attendee=SimulatedAttendee(name=ticket.attendee.name, email=ticket.attendee.email),
        payment=SimulatedPayment(
            amount=float(ticket_type.price),
            currency=ticket_type.currency,
            simulated_payment_intent_id=simulated_intent_id(),
        ),
    )


@router.get("/simulate-payment")
def simulate_payment_info(info: Optional[str] = Query(default=None)):
    if info == "status":
        return {
            "simulationMode": True,
            "stripeConfigured": settings.STRIPE_CONFIGURED,
            "availableSimulations": ["success", "failure"],
            "supportedScenarios": ["successful_payment", "card_declined", "processing_error"],
        }
    return {
        "message": "Payment simulation endpoint",
        "usage": {
            "method": "POST",
            "body": {
                "ticketId": "string (required)",
                "simulate": "success | failure (default: success)",
                "delay": "number (0-10000ms, default: 1000)",
            },
        },
    }
