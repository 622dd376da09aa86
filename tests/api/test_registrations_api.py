from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from tests.utils.factories import create_event, create_tenant, create_ticket_type


def _payload(ticket_type, email="ada@example.com", **overrides):
    data = {
        "tenantSlug": "demo",
        "eventSlug": "ai-summit",
        "ticketTypeId": ticket_type.id,
        "name": "Ada Lovelace",
        "email": email,
    }
    data.update(overrides)
    return data


def test_free_registration_then_sold_out(client: TestClient, db: Session, sent_emails) -> None:
    event = create_event(db, create_tenant(db))
    ticket_type = create_ticket_type(db, event, quantity=1)

    first = client.post("/api/v1/register", json=_payload(ticket_type))
    assert first.status_code == 200
    content = first.json()
    assert content["success"] is True
    assert content["ticket"]["status"] == "issued"
    assert content["ticket"]["qrCode"].startswith("data:image/png;base64,")
    assert content["ticket"]["token"].startswith("ticket_")
    assert content["event"]["title"] == "AI Summit"
    assert len(sent_emails) == 1

    second = client.post("/api/v1/register", json=_payload(ticket_type, email="bob@example.com"))
    assert second.status_code == 400
    assert second.json() == {"error": "Ticket type is sold out", "code": "SOLD_OUT"}


def test_paid_registration_returns_client_secret(client: TestClient, db: Session) -> None:
    event = create_event(db, create_tenant(db))
    ticket_type = create_ticket_type(db, event, is_paid=True, price="49.99")

    response = client.post("/api/v1/register", json=_payload(ticket_type))

    assert response.status_code == 200
    content = response.json()
    assert content["ticketId"].startswith("tkt_")
    assert content["clientSecret"].startswith("pi_sim_")
    assert content["amount"] == 4999
    assert content["currency"] == "USD"


def test_unknown_event_is_404(client: TestClient, db: Session) -> None:
    event = create_event(db, create_tenant(db))
    ticket_type = create_ticket_type(db, event)

    response = client.post("/api/v1/register", json=_payload(ticket_type, eventSlug="nope"))

    assert response.status_code == 404
    assert response.json()["code"] == "NOT_FOUND"


def test_unknown_tenant_is_404(client: TestClient, db: Session) -> None:
    response = client.post(
        "/api/v1/register",
        json={
            "tenantSlug": "ghost",
            "eventSlug": "x",
            "ticketTypeId": "tt_x",
            "name": "A",
            "email": "a@example.com",
        },
    )
    assert response.status_code == 404


def test_invalid_email_is_rejected(client: TestClient, db: Session) -> None:
    event = create_event(db, create_tenant(db))
    ticket_type = create_ticket_type(db, event)

    response = client.post("/api/v1/register", json=_payload(ticket_type, email="nope"))

    assert response.status_code == 400
    assert response.json()["error"] == "Invalid input data"


def test_email_failure_is_reported_generically(client: TestClient, db: Session, monkeypatch) -> None:
    from eventpass.core import email
    from eventpass.core.exceptions import EmailDeliveryError

    def broken_send(to_email, subject, html):
        raise EmailDeliveryError("Resend rejected: invalid api key re_123")

    monkeypatch.setattr(email, "send_email", broken_send)
    event = create_event(db, create_tenant(db))
    ticket_type = create_ticket_type(db, event)

    response = client.post("/api/v1/register", json=_payload(ticket_type))

    assert response.status_code == 500
    assert response.json() == {"error": "Failed to process ticket", "code": "EMAIL_DELIVERY_FAILED"}
