"""
Stand-in gateway used outside production when Stripe keys are missing.

Intents are fabricated locally and settled through POST /dev/simulate-payment.
Nothing is kept in memory: an intent is fully described by its id, so any
worker can answer for intents created by another one.
"""
import json
import logging
import secrets
import time

from eventpass.core.exceptions import NotFoundError, WebhookSignatureError
from .gateway import (
    CreatePaymentIntentParams,
    PaymentGateway,
    PaymentIntentResult,
    WebhookEvent,
)

logger = logging.getLogger(__name__)

SIMULATED_INTENT_PREFIX = "pi_sim_"


def simulated_intent_id() -> str:
    return f"{SIMULATED_INTENT_PREFIX}{int(time.time() * 1000)}_{secrets.token_hex(5)}"


def simulated_client_secret(intent_id: str) -> str:
    return f"{intent_id}_secret"


class SimulatedGateway(PaymentGateway):
    @property
    def code(self) -> str:
        return "simulated"

    async def create_payment_intent(
        self, params: CreatePaymentIntentParams
    ) -> PaymentIntentResult:
        intent_id = simulated_intent_id()
        logger.info(
            f"[PAYMENT SIM] Created intent {intent_id} for {params.amount} "
            f"{params.currency.upper()}"
        )
        return PaymentIntentResult(
            intent_id=intent_id,
            client_secret=simulated_client_secret(intent_id),
            status="requires_payment_method",
            amount=params.amount,
            currency=params.currency.upper(),
        )

    async def get_payment_intent(self, intent_id: str) -> PaymentIntentResult:
        # Amount and currency live with the stored transaction, not the id
        if not intent_id.startswith(SIMULATED_INTENT_PREFIX):
            raise NotFoundError("Payment intent not found")
        return PaymentIntentResult(
            intent_id=intent_id,
            client_secret=simulated_client_secret(intent_id),
            status="requires_payment_method",
        )

    def construct_webhook_event(self, payload: bytes, signature: str) -> WebhookEvent:
        # No secret to verify against; accept well-formed JSON only
        try:
            body = json.loads(payload)
            data_object = body["data"]["object"]
            return WebhookEvent(
                event_id=body.get("id", "evt_sim"),
                event_type=body["type"],
                payment_intent_id=data_object.get("id"),
            )
        except (ValueError, KeyError, TypeError) as e:
            raise WebhookSignatureError(f"Invalid payload: {e}")
