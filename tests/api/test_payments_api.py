import json

from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from eventpass.services.payment import factory
from eventpass.services.payment.simulated_gateway import SimulatedGateway
from tests.utils.factories import create_event, create_tenant, create_ticket, create_ticket_type


def _pending_ticket(db: Session, payment_intent_id=None):
    event = create_event(db, create_tenant(db))
    ticket_type = create_ticket_type(db, event, is_paid=True, price="15.50")
    return create_ticket(db, ticket_type, status="pending", payment_intent_id=payment_intent_id)


def _webhook_body(event_type: str, intent_id: str) -> str:
    return json.dumps(
        {"id": "evt_1", "type": event_type, "data": {"object": {"id": intent_id}}}
    )


def test_payment_intent_is_created_then_reused(client: TestClient, db: Session) -> None:
    ticket = _pending_ticket(db)

    first = client.post("/api/v1/payment-intent", json={"ticketId": ticket.id})
    assert first.status_code == 200
    assert first.json()["amount"] == 1550
    assert first.json()["currency"] == "USD"

    second = client.post("/api/v1/payment-intent", json={"ticketId": ticket.id})
    assert second.status_code == 200
    assert second.json()["clientSecret"] == first.json()["clientSecret"]


def test_payment_intent_for_issued_ticket_is_conflict(client: TestClient, db: Session) -> None:
    event = create_event(db, create_tenant(db))
    ticket = create_ticket(db, create_ticket_type(db, event))

    response = client.post("/api/v1/payment-intent", json={"ticketId": ticket.id})

    assert response.status_code == 409
    assert response.json()["status"] == "issued"


def test_webhook_success_issues_ticket(client: TestClient, db: Session, sent_emails) -> None:
    ticket = _pending_ticket(db, payment_intent_id="pi_hook_1")

    response = client.post(
        "/api/v1/webhook",
        content=_webhook_body("payment_intent.succeeded", "pi_hook_1"),
        headers={"Stripe-Signature": "t=1,v1=sig"},
    )

    assert response.status_code == 200
    assert response.json() == {"received": True}
    db.refresh(ticket)
    assert ticket.status == "issued"
    assert ticket.qr_code is not None
    assert len(sent_emails) == 1


def test_webhook_failure_marks_transaction(client: TestClient, db: Session) -> None:
    ticket = _pending_ticket(db, payment_intent_id="pi_hook_2")

    client.post(
        "/api/v1/webhook",
        content=_webhook_body("payment_intent.payment_failed", "pi_hook_2"),
    )

    db.refresh(ticket)
    assert ticket.status == "pending"
    assert ticket.transaction.status == "failed"


def test_webhook_for_unknown_intent_is_acknowledged(client: TestClient, db: Session) -> None:
    response = client.post(
        "/api/v1/webhook",
        content=_webhook_body("payment_intent.succeeded", "pi_unknown"),
    )
    assert response.status_code == 200


def test_malformed_webhook_is_rejected(client: TestClient, db: Session) -> None:
    response = client.post("/api/v1/webhook", content="not json")

    assert response.status_code == 400
    assert response.json()["code"] == "INVALID_SIGNATURE"


def test_payment_intent_survives_gateway_restart(client: TestClient, db: Session, monkeypatch) -> None:
    monkeypatch.setattr(factory, "_gateway_instance", SimulatedGateway())
    event = create_event(db, create_tenant(db))
    ticket_type = create_ticket_type(db, event, is_paid=True, price="15.50")
    registered = client.post(
        "/api/v1/register",
        json={
            "tenantSlug": "demo",
            "eventSlug": "ai-summit",
            "ticketTypeId": ticket_type.id,
            "name": "Ada Lovelace",
            "email": "ada@example.com",
        },
    ).json()

    # Another worker, or the same one after a restart
    monkeypatch.setattr(factory, "_gateway_instance", SimulatedGateway())
    response = client.post("/api/v1/payment-intent", json={"ticketId": registered["ticketId"]})

    assert response.status_code == 200
    assert response.json()["clientSecret"] == registered["clientSecret"]
    assert response.json()["amount"] == 1550
    assert response.json()["currency"] == "USD"
