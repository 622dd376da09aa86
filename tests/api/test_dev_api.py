import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from eventpass.api import deps
from eventpass.core.config import settings
from eventpass.core.exceptions import NotFoundError
from eventpass.models import Transaction
from tests.utils.factories import create_event, create_tenant, create_ticket, create_ticket_type


def _pending_ticket(db: Session):
    event = create_event(db, create_tenant(db))
    ticket_type = create_ticket_type(db, event, quantity=5, is_paid=True, price="25.00")
    return create_ticket(db, ticket_type, status="pending", payment_intent_id="pi_sim_1_abc")


def test_simulated_success_issues_ticket(client: TestClient, db: Session, sent_emails) -> None:
    ticket = _pending_ticket(db)

    response = client.post(
        "/dev/simulate-payment", json={"ticketId": ticket.id, "delay": 0}
    )

    assert response.status_code == 200
    content = response.json()
    assert content["success"] is True
    assert content["simulation"] is True
    assert content["ticket"]["status"] == "issued"
    assert content["ticket"]["qrCode"].startswith("data:image/png;base64,")
    assert content["payment"]["amount"] == 25.0
    assert content["payment"]["simulatedPaymentIntentId"].startswith("pi_sim_")
    assert "details" not in content

    db.refresh(ticket)
    assert ticket.ticket_type.quantity_sold == 1
    assert ticket.transaction.status == "completed"
    assert len(sent_emails) == 1


def test_simulated_failure_leaves_ticket_pending(
    client: TestClient, db: Session, sent_emails
) -> None:
    ticket = _pending_ticket(db)

    response = client.post(
        "/dev/simulate-payment",
        json={"ticketId": ticket.id, "simulate": "failure", "delay": 0},
    )

    assert response.status_code == 200
    content = response.json()
    assert content["success"] is False
    assert content["details"]["reason"] == "card_declined"

    db.refresh(ticket)
    assert ticket.status == "pending"
    assert db.query(Transaction).filter_by(ticket_id=ticket.id).one().status == "failed"
    assert sent_emails == []


def test_simulating_twice_is_idempotent(client: TestClient, db: Session, sent_emails) -> None:
    ticket = _pending_ticket(db)
    body = {"ticketId": ticket.id, "delay": 0}

    client.post("/dev/simulate-payment", json=body)
    response = client.post("/dev/simulate-payment", json=body)

    assert response.status_code == 200
    db.refresh(ticket)
    assert ticket.ticket_type.quantity_sold == 1
    assert len(sent_emails) == 1


def test_unknown_ticket_is_404(client: TestClient, db: Session) -> None:
    response = client.post("/dev/simulate-payment", json={"ticketId": "tkt_missing", "delay": 0})
    assert response.status_code == 404


def test_delay_out_of_range_is_rejected(client: TestClient, db: Session) -> None:
    response = client.post("/dev/simulate-payment", json={"ticketId": "tkt_x", "delay": 20000})
    assert response.status_code == 400


def test_status_info(client: TestClient) -> None:
    response = client.get("/dev/simulate-payment", params={"info": "status"})

    assert response.status_code == 200
    assert response.json()["simulationMode"] is True
    assert response.json()["stripeConfigured"] is False


def test_simulation_is_refused_in_production(client: TestClient, db: Session, monkeypatch) -> None:
    ticket = _pending_ticket(db)
    monkeypatch.setattr(settings, "ENV", "production")

    with pytest.raises(NotFoundError):
        deps.require_dev_environment()

    response = client.post("/dev/simulate-payment", json={"ticketId": ticket.id, "delay": 0})

    assert response.status_code == 404
    db.refresh(ticket)
    assert ticket.status == "pending"


def test_usage_info_without_query(client: TestClient) -> None:
    response = client.get("/dev/simulate-payment")

    assert response.status_code == 200
    assert response.json()["usage"]["method"] == "POST"
