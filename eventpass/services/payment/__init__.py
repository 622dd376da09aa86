from .gateway import (
    CreatePaymentIntentParams,
    PaymentGateway,
    PaymentIntentResult,
    WebhookEvent,
)
from .factory import get_payment_gateway

__all__ = [
    "CreatePaymentIntentParams",
    "PaymentGateway",
    "PaymentIntentResult",
    "WebhookEvent",
    "get_payment_gateway",
]
