# eventpass/services/payment/gateway.py
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Dict, Optional

PAYMENT_SUCCEEDED = "payment_intent.succeeded"
PAYMENT_FAILED = "payment_intent.payment_failed"


@dataclass
class CreatePaymentIntentParams:
    """Parameters for creating a payment intent."""
    amount: int  # In smallest currency unit (cents)
    currency: str  # ISO 4217
    customer_email: str
    description: str
    metadata: Dict[str, str] = field(default_factory=dict)
    idempotency_key: Optional[str] = None


@dataclass
class PaymentIntentResult:
    intent_id: str
    client_secret: str
    status: str
    amount: Optional[int] = None  # None when the provider cannot report it
    currency: Optional[str] = None


@dataclass
class WebhookEvent:
    """The parts of a provider webhook the ticketing flow cares about."""
    event_id: str
    event_type: str
    payment_intent_id: Optional[str] = None
    failure_message: Optional[str] = None


class PaymentGateway(ABC):
    """Payment provider seen from the ticketing flow."""

    @property
    @abstractmethod
    def code(self) -> str:
        pass

    @abstractmethod
    async def create_payment_intent(
        self, params: CreatePaymentIntentParams
    ) -> PaymentIntentResult:
        pass

    @abstractmethod
    async def get_payment_intent(self, intent_id: str) -> PaymentIntentResult:
        pass

    @abstractmethod
    def construct_webhook_event(self, payload: bytes, signature: str) -> WebhookEvent:
        """Verify the signature and parse the event. Raises WebhookSignatureError."""
        pass
