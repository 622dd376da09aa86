# eventpass/core/exceptions.py
"""
Domain exceptions raised by services and CRUD helpers.

Each exception carries a machine-readable ``code`` and the HTTP status the
API layer should answer with. The handlers in ``eventpass.main`` turn them
into ``{"error": ..., "code": ...}`` responses.
"""
from typing import Any, Dict, Optional


class EventPassError(Exception):
    """Base class for all expected, categorised failures."""

    status_code = 400
    code = "BAD_REQUEST"

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        extra: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        if code:
            self.code = code
        self.extra = extra or {}
        super().__init__(message)


class NotFoundError(EventPassError):
    status_code = 404
    code = "NOT_FOUND"


class SoldOutError(EventPassError):
    status_code = 400
    code = "SOLD_OUT"

    def __init__(self, message: str = "Ticket type is sold out"):
        super().__init__(message)


class TicketStatusError(EventPassError):
    """The ticket exists but its status does not allow the operation."""

    status_code = 409
    code = "INVALID_TICKET_STATUS"

    def __init__(self, message: str, status: str, **extra):
        self.status = status
        super().__init__(message, extra={"status": status, **extra})


class CheckInWindowError(EventPassError):
    status_code = 400
    code = "CHECKIN_WINDOW_CLOSED"


class ConflictError(EventPassError):
    status_code = 409
    code = "CONFLICT"


class InvalidCredentialsError(EventPassError):
    """Unknown email, inactive account and wrong password all end up here."""

    status_code = 401
    code = "INVALID_CREDENTIALS"

    def __init__(self):
        super().__init__("Invalid credentials")


class AuthenticationError(EventPassError):
    status_code = 401
    code = "UNAUTHENTICATED"


class PermissionDeniedError(EventPassError):
    status_code = 403
    code = "ACCESS_DENIED"


class UpstreamError(EventPassError):
    """A third-party dependency failed. Details are logged, never returned."""

    status_code = 500
    code = "UPSTREAM_ERROR"
    public_message = "Internal server error"


class PaymentProviderError(UpstreamError):
    code = "PAYMENT_PROVIDER_ERROR"
    public_message = "Failed to create payment intent"


class QRGenerationError(UpstreamError):
    code = "QR_GENERATION_FAILED"
    public_message = "Failed to process ticket"


class EmailDeliveryError(UpstreamError):
    code = "EMAIL_DELIVERY_FAILED"
    public_message = "Failed to process ticket"


class WebhookSignatureError(EventPassError):
    status_code = 400
    code = "INVALID_SIGNATURE"
