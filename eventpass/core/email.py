# eventpass/core/email.py
"""
Email service using Resend for sending transactional emails.

Templates live in ``eventpass/templates/email`` and are rendered with Jinja2.
Outside production, a missing RESEND_API_KEY means emails are only logged.
"""
import logging
from typing import Optional

import resend
from jinja2 import Environment, PackageLoader, TemplateError, select_autoescape

from eventpass.core.config import settings
from eventpass.core.exceptions import EmailDeliveryError

logger = logging.getLogger(__name__)

_templates = Environment(
    loader=PackageLoader("eventpass", "templates/email"),
    autoescape=select_autoescape(["html"]),
)


def init_resend():
    """Initialize Resend with API key."""
    resend.api_key = settings.RESEND_API_KEY


def render_ticket_email(
    attendee_name: str,
    event_title: str,
    event_date: str,
    qr_code_data: str,
    ticket_token: str,
) -> str:
    return _render(
        "ticket.html",
        attendee_name=attendee_name,
        event_title=event_title,
        event_date=event_date,
        qr_code_data=qr_code_data,
        ticket_token=ticket_token,
    )


def render_reminder_email(
    attendee_name: str,
    event_title: str,
    event_date: str,
    event_link: str,
    custom_message: Optional[str] = None,
) -> str:
    return _render(
        "reminder.html",
        attendee_name=attendee_name,
        event_title=event_title,
        event_date=event_date,
        event_link=event_link,
        custom_message=custom_message,
    )


def _render(template_name: str, **context) -> str:
    try:
        return _templates.get_template(template_name).render(**context)
    except TemplateError as e:
        logger.error(f"[EMAIL ERROR] Failed to render {template_name}: {e}")
        raise EmailDeliveryError(f"Could not render {template_name}: {e}")


def send_email(to_email: str, subject: str, html: str) -> dict:
    """
    Send an email through Resend.

    Returns:
        {"success": True, "id": <provider id or None in dev mode>}

    Raises:
        EmailDeliveryError: if the provider rejects the message or is not
        configured in production.
    """
    if not settings.EMAIL_CONFIGURED:
        if settings.IS_PRODUCTION:
            raise EmailDeliveryError("RESEND_API_KEY is not configured")
        logger.info(f"[EMAIL DEV] Would send '{subject}' to {to_email}")
        return {"success": True, "id": None}

    init_resend()
    params = {
        "from": f"EventPass <{settings.RESEND_FROM_EMAIL}>",
        "to": [to_email],
        "subject": subject,
        "html": html,
    }

    try:
        response = resend.Emails.send(params)
    except Exception as e:
        logger.error(f"[EMAIL ERROR] Failed to send email to {to_email}: {e}")
        raise EmailDeliveryError(f"Resend rejected email to {to_email}: {e}")

    logger.info(f"[EMAIL] '{subject}' sent to {to_email}")
    return {"success": True, "id": response.get("id")}


def send_ticket_confirmation(
    to_email: str,
    attendee_name: str,
    event_title: str,
    event_date: str,
    qr_code_data: str,
    ticket_token: str,
) -> dict:
    html = render_ticket_email(
        attendee_name, event_title, event_date, qr_code_data, ticket_token
    )
    return send_email(to_email, f"Your ticket for {event_title}", html)
