# eventpass/services/payment/factory.py
import logging
from typing import Optional

from eventpass.core.config import settings
from eventpass.core.exceptions import PaymentProviderError
from .gateway import PaymentGateway
from .simulated_gateway import SimulatedGateway
from .stripe_gateway import StripeConfig, StripeGateway

logger = logging.getLogger(__name__)

# Global gateway instance (singleton pattern)
_gateway_instance: Optional[PaymentGateway] = None


def _build_gateway() -> PaymentGateway:
    if settings.STRIPE_CONFIGURED:
        logger.info("Stripe payment gateway initialized")
        return StripeGateway(
            StripeConfig(
                secret_key=settings.STRIPE_SECRET_KEY,
                webhook_secret=settings.STRIPE_WEBHOOK_SECRET,
                api_version=settings.STRIPE_API_VERSION,
            )
        )
    if settings.IS_PRODUCTION:
        raise PaymentProviderError("Stripe is not configured")
    logger.warning("Stripe keys missing: using the simulated payment gateway")
    return SimulatedGateway()


def get_payment_gateway() -> PaymentGateway:
    """Get the process-wide payment gateway."""
    global _gateway_instance
    if _gateway_instance is None:
        _gateway_instance = _build_gateway()
    return _gateway_instance
