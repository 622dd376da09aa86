from datetime import timedelta

from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from eventpass.utils.datetime import utcnow
from tests.utils.factories import (
    auth_headers,
    create_admin,
    create_event,
    create_tenant,
)


def _event_payload(**overrides):
    start = utcnow() + timedelta(days=10)
    data = {
        "title": "Data Engineering Day",
        "type": "workshop",
        "startDate": start.isoformat(),
        "endDate": (start + timedelta(hours=6)).isoformat(),
        "ticketTypes": [
            {"name": "Standard", "quantity": 50},
            {"name": "Supporter", "price": "40.00", "isPaid": True},
        ],
    }
    data.update(overrides)
    return data


def test_create_and_list_events(client: TestClient, db: Session) -> None:
    tenant = create_tenant(db)
    headers = auth_headers(create_admin(db, tenant))

    response = client.post(
        "/api/v1/admin/demo/events", json=_event_payload(), headers=headers
    )
    assert response.status_code == 201
    content = response.json()
    assert content["slug"] == "data-engineering-day"
    assert content["status"] == "draft"
    assert content["tenantId"] == tenant.id
    assert sorted(tt["name"] for tt in content["ticketTypes"]) == ["Standard", "Supporter"]

    listing = client.get("/api/v1/admin/demo/events", headers=headers)
    assert listing.status_code == 200
    assert [e["id"] for e in listing.json()] == [content["id"]]


def test_duplicate_title_gets_distinct_slug(client: TestClient, db: Session) -> None:
    headers = auth_headers(create_admin(db, create_tenant(db)))

    first = client.post("/api/v1/admin/demo/events", json=_event_payload(), headers=headers)
    second = client.post("/api/v1/admin/demo/events", json=_event_payload(), headers=headers)

    assert first.json()["slug"] != second.json()["slug"]
    assert second.json()["slug"].startswith("data-engineering-day-")


def test_end_before_start_is_rejected(client: TestClient, db: Session) -> None:
    headers = auth_headers(create_admin(db, create_tenant(db)))
    start = utcnow() + timedelta(days=10)

    response = client.post(
        "/api/v1/admin/demo/events",
        json=_event_payload(
            startDate=start.isoformat(), endDate=(start - timedelta(hours=1)).isoformat()
        ),
        headers=headers,
    )

    assert response.status_code == 400


def test_paid_ticket_type_needs_price(client: TestClient, db: Session) -> None:
    tenant = create_tenant(db)
    headers = auth_headers(create_admin(db, tenant))
    event = create_event(db, tenant)

    response = client.post(
        f"/api/v1/admin/demo/events/{event.id}/ticket-types",
        json={"name": "VIP", "isPaid": True},
        headers=headers,
    )
    assert response.status_code == 400

    response = client.post(
        f"/api/v1/admin/demo/events/{event.id}/ticket-types",
        json={"name": "VIP", "isPaid": True, "price": "99.00", "quantity": 10},
        headers=headers,
    )
    assert response.status_code == 201
    assert response.json()["quantityAvailable"] == 10
    assert response.json()["quantitySold"] == 0


def test_update_event(client: TestClient, db: Session) -> None:
    tenant = create_tenant(db)
    headers = auth_headers(create_admin(db, tenant))
    event = create_event(db, tenant, status="draft")

    response = client.patch(
        f"/api/v1/admin/demo/events/{event.id}",
        json={"status": "published", "location": "Berlin"},
        headers=headers,
    )

    assert response.status_code == 200
    assert response.json()["status"] == "published"
    assert response.json()["location"] == "Berlin"
    assert response.json()["title"] == "AI Summit"


def test_events_of_other_tenant_are_hidden(client: TestClient, db: Session) -> None:
    tenant = create_tenant(db)
    other = create_tenant(db, slug="other")
    event = create_event(db, other)
    headers = auth_headers(create_admin(db, tenant))

    assert client.get("/api/v1/admin/other/events", headers=headers).status_code == 403
    assert client.get(f"/api/v1/admin/demo/events/{event.id}", headers=headers).status_code == 404


def test_admin_routes_require_session(client: TestClient, db: Session) -> None:
    create_tenant(db)
    assert client.get("/api/v1/admin/demo/events").status_code == 401


def test_update_settings_merges_theme(client: TestClient, db: Session) -> None:
    tenant = create_tenant(db)
    headers = auth_headers(create_admin(db, tenant))

    response = client.patch(
        "/api/v1/admin/demo/settings",
        json={"name": "Demo Events", "theme": {"primaryColor": "#112233"}, "currency": "EUR"},
        headers=headers,
    )

    assert response.status_code == 200
    content = response.json()
    assert content["name"] == "Demo Events"
    assert content["theme"]["primaryColor"] == "#112233"
    assert content["theme"]["secondaryColor"] == "#EC4899"
    assert content["settings"]["currency"] == "EUR"
    assert content["settings"]["allowRegistration"] is True


def test_settings_reject_bad_colour(client: TestClient, db: Session) -> None:
    tenant = create_tenant(db)
    headers = auth_headers(create_admin(db, tenant))

    response = client.patch(
        "/api/v1/admin/demo/settings",
        json={"theme": {"primaryColor": "red"}},
        headers=headers,
    )

    assert response.status_code == 400


def test_staff_cannot_change_settings(client: TestClient, db: Session) -> None:
    tenant = create_tenant(db)
    staff = create_admin(db, tenant, email="staff@demo.example.com", role="staff")

    response = client.patch(
        "/api/v1/admin/demo/settings", json={"name": "Nope"}, headers=auth_headers(staff)
    )

    assert response.status_code == 403
