"""
Tests for the registration and payment completion flow.

Verifies that TicketIssuanceService:
- Issues free tickets immediately and stops at the ticket type's quantity
- Reuses attendees by email
- Leaves paid tickets pending until their payment completes
- Counts a paid ticket exactly once, however often completion is reported
"""
import asyncio
import logging
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

import pytest

from eventpass import crud
from eventpass.core.exceptions import (
    NotFoundError,
    PaymentProviderError,
    PermissionDeniedError,
    SoldOutError,
)
from eventpass.models import Attendee, Ticket, TicketType
from eventpass.schemas.registration import (
    FreeRegistrationResponse,
    PaidRegistrationResponse,
    RegistrationRequest,
)
from eventpass.schemas.tenant import TenantSettingsUpdate
from eventpass.services.payment import PaymentIntentResult
from eventpass.services.ticketing.issuance_service import TicketIssuanceService
from tests.utils.factories import create_event, create_tenant, create_ticket_type


def run_async(coro):
    """Helper to run async coroutines in sync tests."""
    return asyncio.run(coro)


def _make_gateway(intent_id="pi_test_123", amount=2900):
    gateway = MagicMock()
    gateway.create_payment_intent = AsyncMock(
        return_value=PaymentIntentResult(
            intent_id=intent_id,
            client_secret=f"{intent_id}_secret_abc",
            status="requires_payment_method",
            amount=amount,
            currency="USD",
        )
    )
    return gateway


def _request(ticket_type, email="ada@example.com", **overrides):
    data = {
        "tenant_slug": "demo",
        "event_slug": "ai-summit",
        "ticket_type_id": ticket_type.id,
        "name": "Ada Lovelace",
        "email": email,
    }
    data.update(overrides)
    return RegistrationRequest(**data)


class TestFreeRegistration:
    @pytest.fixture(autouse=True)
    def setup(self, db):
        self.db = db
        self.tenant = create_tenant(db)
        self.event = create_event(db, self.tenant)
        self.service = TicketIssuanceService(gateway=_make_gateway())

    def test_free_ticket_is_issued_with_qr_code(self, sent_emails):
        ticket_type = create_ticket_type(self.db, self.event, quantity=1)

        result = run_async(self.service.register(self.db, _request(ticket_type)))

        assert isinstance(result, FreeRegistrationResponse)
        assert result.ticket.status == "issued"
        assert result.ticket.qr_code.startswith("data:image/png;base64,")
        assert result.event.title == "AI Summit"
        assert len(sent_emails) == 1
        assert sent_emails[0]["to"] == "ada@example.com"
        assert sent_emails[0]["subject"] == "Your ticket for AI Summit"

    def test_second_registration_on_quantity_one_is_sold_out(self):
        ticket_type = create_ticket_type(self.db, self.event, quantity=1)
        run_async(self.service.register(self.db, _request(ticket_type)))

        with pytest.raises(SoldOutError) as exc_info:
            run_async(
                self.service.register(self.db, _request(ticket_type, email="bob@example.com"))
            )

        assert exc_info.value.code == "SOLD_OUT"
        assert self.db.query(Ticket).count() == 1

    def test_quantity_is_never_exceeded(self):
        ticket_type = create_ticket_type(self.db, self.event, quantity=3)

        for i in range(3):
            run_async(
                self.service.register(self.db, _request(ticket_type, email=f"a{i}@example.com"))
            )
        with pytest.raises(SoldOutError):
            run_async(
                self.service.register(self.db, _request(ticket_type, email="late@example.com"))
            )

        self.db.refresh(ticket_type)
        assert ticket_type.quantity_sold == 3

    def test_unlimited_quantity_never_sells_out(self):
        ticket_type = create_ticket_type(self.db, self.event, quantity=None)

        for i in range(5):
            run_async(
                self.service.register(self.db, _request(ticket_type, email=f"a{i}@example.com"))
            )

        self.db.refresh(ticket_type)
        assert ticket_type.quantity_sold == 5

    def test_same_email_reuses_attendee(self):
        ticket_type = create_ticket_type(self.db, self.event)

        run_async(self.service.register(self.db, _request(ticket_type)))
        run_async(self.service.register(self.db, _request(ticket_type, name="Ada L.")))

        assert self.db.query(Attendee).count() == 1
        assert self.db.query(Ticket).count() == 2

    def test_unknown_tenant_event_or_ticket_type(self):
        ticket_type = create_ticket_type(self.db, self.event)

        for overrides in (
            {"tenant_slug": "nope"},
            {"event_slug": "nope"},
            {"ticket_type_id": "tt_missing"},
        ):
            with pytest.raises(NotFoundError):
                run_async(self.service.register(self.db, _request(ticket_type, **overrides)))

    def test_ticket_type_of_another_event_is_not_found(self):
        other_event = create_event(self.db, self.tenant, slug="other")
        foreign_type = create_ticket_type(self.db, other_event)

        with pytest.raises(NotFoundError):
            run_async(self.service.register(self.db, _request(foreign_type)))

    def test_closed_registration_issues_nothing(self):
        ticket_type = create_ticket_type(self.db, self.event)
        crud.tenant.update_settings(
            self.db,
            db_obj=self.tenant,
            obj_in=TenantSettingsUpdate(allow_registration=False),
        )

        with pytest.raises(PermissionDeniedError) as exc_info:
            run_async(self.service.register(self.db, _request(ticket_type)))

        assert exc_info.value.code == "REGISTRATION_CLOSED"
        assert self.db.query(Ticket).count() == 0


class TestPaidRegistration:
    @pytest.fixture(autouse=True)
    def setup(self, db):
        self.db = db
        self.tenant = create_tenant(db)
        self.event = create_event(db, self.tenant)
        self.ticket_type = create_ticket_type(
            db, self.event, quantity=2, is_paid=True, price="29.00"
        )
        self.gateway = _make_gateway()
        self.service = TicketIssuanceService(gateway=self.gateway)

    def _register(self, email="ada@example.com"):
        return run_async(self.service.register(self.db, _request(self.ticket_type, email=email)))

    def test_paid_registration_creates_pending_ticket_and_transaction(self, sent_emails):
        result = self._register()

        assert isinstance(result, PaidRegistrationResponse)
        assert result.client_secret == "pi_test_123_secret_abc"
        assert result.amount == 2900
        assert result.currency == "USD"

        ticket = crud.ticket.get_with_relations(self.db, ticket_id=result.ticket_id)
        assert ticket.status == "pending"
        assert ticket.qr_code is None
        assert ticket.transaction.status == "pending"
        assert ticket.transaction.payment_intent_id == "pi_test_123"
        assert ticket.transaction.amount == Decimal("29.00")
        assert sent_emails == []

        params = self.gateway.create_payment_intent.call_args[0][0]
        assert params.amount == 2900
        assert params.metadata["ticketId"] == ticket.id

    def test_amount_is_rounded_half_up_to_cents(self):
        assert TicketType(price=Decimal("10.005")).amount_minor == 1001
        assert TicketType(price=Decimal("19.99")).amount_minor == 1999
        assert TicketType(price=Decimal("0")).amount_minor == 0

    def test_gateway_failure_leaves_ticket_pending(self):
        self.gateway.create_payment_intent = AsyncMock(
            side_effect=PaymentProviderError("Stripe down")
        )

        with pytest.raises(PaymentProviderError):
            self._register()

        ticket = self.db.query(Ticket).one()
        assert ticket.status == "pending"
        assert ticket.transaction is None

    def test_successful_payment_issues_ticket_once(self, sent_emails):
        result = self._register()

        ticket = self.service.complete_payment(self.db, result.ticket_id, succeeded=True)
        assert ticket.status == "issued"
        assert ticket.qr_code.startswith("data:image/png;base64,")
        assert ticket.transaction.status == "completed"
        assert len(sent_emails) == 1

        # A repeated webhook must not count the ticket twice
        self.service.complete_payment(self.db, result.ticket_id, succeeded=True)

        self.db.refresh(self.ticket_type)
        assert self.ticket_type.quantity_sold == 1
        assert len(sent_emails) == 1

    def test_failed_payment_never_issues_or_emails(self, sent_emails):
        result = self._register()

        ticket = self.service.complete_payment(self.db, result.ticket_id, succeeded=False)

        assert ticket.status == "pending"
        assert ticket.qr_code is None
        assert ticket.transaction.status == "failed"
        assert sent_emails == []
        self.db.refresh(self.ticket_type)
        assert self.ticket_type.quantity_sold == 0

    def test_complete_payment_by_intent(self):
        result = self._register()

        ticket = self.service.complete_payment_by_intent(self.db, "pi_test_123", succeeded=True)

        assert ticket.id == result.ticket_id
        assert ticket.status == "issued"

    def test_complete_payment_by_unknown_intent_is_ignored(self):
        assert self.service.complete_payment_by_intent(self.db, "pi_unknown", True) is None

    def test_complete_unknown_ticket(self):
        with pytest.raises(NotFoundError):
            self.service.complete_payment(self.db, "tkt_missing", succeeded=True)

    def test_ensure_payment_intent_reuses_stored_intent(self):
        result = self._register()
        self.gateway.get_payment_intent = AsyncMock(
            return_value=PaymentIntentResult(
                intent_id="pi_test_123",
                client_secret="pi_test_123_secret_abc",
                status="requires_payment_method",
                amount=2900,
                currency="USD",
            )
        )

        response = run_async(self.service.ensure_payment_intent(self.db, result.ticket_id))

        assert response.client_secret == "pi_test_123_secret_abc"
        self.gateway.get_payment_intent.assert_awaited_once_with("pi_test_123")
        assert self.gateway.create_payment_intent.await_count == 1

    def test_captured_payment_is_honoured_when_type_filled_up(self, sent_emails, caplog):
        result = self._register()
        # Other buyers take every seat while this payment is in flight
        for _ in range(self.ticket_type.quantity):
            assert crud.ticket_type.increment_sold(self.db, ticket_type_id=self.ticket_type.id)

        with caplog.at_level(logging.ERROR):
            ticket = self.service.complete_payment(self.db, result.ticket_id, succeeded=True)

        assert ticket.status == "issued"
        assert ticket.transaction.status == "completed"
        assert len(sent_emails) == 1
        self.db.refresh(self.ticket_type)
        assert self.ticket_type.quantity_sold == self.ticket_type.quantity + 1
        assert "oversold" in caplog.text
