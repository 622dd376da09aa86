# eventpass/api/v1/endpoints/payments.py
import logging

from fastapi import APIRouter, Depends, Header, Request
from sqlalchemy.orm import Session

from eventpass.db.session import get_db
from eventpass.schemas.payment import PaymentIntentRequest, PaymentIntentResponse
from eventpass.services.payment import get_payment_gateway
from eventpass.services.payment.gateway import PAYMENT_FAILED, PAYMENT_SUCCEEDED
from eventpass.services.ticketing.issuance_service import ticket_issuance_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Payments"])


@router.post("/payment-intent", response_model=PaymentIntentResponse)
async def get_payment_intent(
    intent_in: PaymentIntentRequest, db: Session = Depends(get_db)
):
    """Client secret for a ticket that is still waiting for its payment."""
    return await ticket_issuance_service.ensure_payment_intent(db, intent_in.ticket_id)


@router.post("/webhook")
async def payment_webhook(
    request: Request,
    stripe_signature: str = Header(default="", alias="Stripe-Signature"),
    db: Session = Depends(get_db),
):
    payload = await request.body()
    event = get_payment_gateway().construct_webhook_event(payload, stripe_signature)
    logger.info(f"Received payment webhook {event.event_id} ({event.event_type})")

    if event.event_type == PAYMENT_SUCCEEDED and event.payment_intent_id:
        ticket_issuance_service.complete_payment_by_intent(
            db, event.payment_intent_id, succeeded=True
        )
    elif event.event_type == PAYMENT_FAILED and event.payment_intent_id:
        logger.warning(
            f"Payment {event.payment_intent_id} failed: {event.failure_message}"
        )
        ticket_issuance_service.complete_payment_by_intent(
            db, event.payment_intent_id, succeeded=False
        )
    else:
        logger.debug(f"Ignoring webhook event type {event.event_type}")

    return {"received": True}
