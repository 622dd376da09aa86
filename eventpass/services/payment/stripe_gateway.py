# eventpass/services/payment/stripe_gateway.py
import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

import stripe

from eventpass.core.exceptions import PaymentProviderError, WebhookSignatureError
from .gateway import (
    CreatePaymentIntentParams,
    PaymentGateway,
    PaymentIntentResult,
    WebhookEvent,
)

logger = logging.getLogger(__name__)


@dataclass
class StripeConfig:
    """Configuration for the Stripe gateway."""
    secret_key: str
    webhook_secret: Optional[str] = None
    api_version: str = "2024-06-20"


class StripeGateway(PaymentGateway):
    """
    Stripe implementation of PaymentGateway.

    Never logs card details. Webhook signatures are always verified.
    """

    def __init__(self, config: StripeConfig):
        self._config = config
        stripe.api_key = config.secret_key
        stripe.api_version = config.api_version

    @property
    def code(self) -> str:
        return "stripe"

    async def create_payment_intent(
        self, params: CreatePaymentIntentParams
    ) -> PaymentIntentResult:
        intent_params: Dict[str, Any] = {
            "amount": params.amount,
            "currency": params.currency.lower(),
            "description": params.description,
            "receipt_email": params.customer_email,
            "metadata": params.metadata,
            "automatic_payment_methods": {"enabled": True},
        }
        if params.idempotency_key:
            intent_params["idempotency_key"] = params.idempotency_key

        try:
            intent = stripe.PaymentIntent.create(**intent_params)
        except stripe.CardError as e:
            logger.error(f"Card error creating payment intent: {e.user_message}")
            raise PaymentProviderError(e.user_message or "Card was declined")
        except stripe.RateLimitError as e:
            logger.error(f"Rate limit error: {e}")
            raise PaymentProviderError("Too many requests to Stripe")
        except stripe.InvalidRequestError as e:
            logger.error(f"Invalid request error: {e}")
            raise PaymentProviderError(str(e))
        except stripe.StripeError as e:
            logger.error(f"Stripe error creating payment intent: {e}")
            raise PaymentProviderError("Payment service temporarily unavailable")

        return self._to_result(intent)

    async def get_payment_intent(self, intent_id: str) -> PaymentIntentResult:
        try:
            intent = stripe.PaymentIntent.retrieve(intent_id)
        except stripe.StripeError as e:
            logger.error(f"Error retrieving payment intent {intent_id}: {e}")
            raise PaymentProviderError("Could not retrieve payment intent")
        return self._to_result(intent)

    def construct_webhook_event(self, payload: bytes, signature: str) -> WebhookEvent:
        if not self._config.webhook_secret:
            raise PaymentProviderError("STRIPE_WEBHOOK_SECRET is not configured")
        try:
            event = stripe.Webhook.construct_event(
                payload, signature, self._config.webhook_secret
            )
        except stripe.SignatureVerificationError:
            logger.warning("Stripe webhook signature verification failed")
            raise WebhookSignatureError("Invalid signature")
        except ValueError as e:
            logger.warning(f"Malformed Stripe webhook payload: {e}")
            raise WebhookSignatureError("Invalid payload")

        data_object = event.data.object
        intent_id = None
        failure_message = None
        if event.type.startswith("payment_intent."):
            intent_id = data_object.id
            last_error = getattr(data_object, "last_payment_error", None)
            if last_error:
                failure_message = last_error.message

        return WebhookEvent(
            event_id=event.id,
            event_type=event.type,
            payment_intent_id=intent_id,
            failure_message=failure_message,
        )

    @staticmethod
    def _to_result(intent) -> PaymentIntentResult:
        return PaymentIntentResult(
            intent_id=intent.id,
            client_secret=intent.client_secret,
            status=intent.status,
            amount=intent.amount,
            currency=intent.currency.upper(),
        )
