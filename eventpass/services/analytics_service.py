# eventpass/services/analytics_service.py
"""
Tenant dashboard figures.

Registrations are issued tickets and revenue is the sum of completed
transactions. Growth compares the requested window with the window of the
same length immediately before it.
"""
import logging
from datetime import datetime, timedelta
from decimal import Decimal
from typing import Optional

from sqlalchemy import and_, case, func
from sqlalchemy.orm import Session

from eventpass import crud
from eventpass.core.exceptions import EventPassError, NotFoundError
from eventpass.models.event import Event
from eventpass.models.ticket import Ticket
from eventpass.models.transaction import Transaction
from eventpass.schemas.analytics import (
    AnalyticsData,
    AnalyticsRequest,
    EventStats,
    GrowthStats,
)
from eventpass.schemas.token import SessionClaims
from eventpass.utils.datetime import as_utc, utcnow

logger = logging.getLogger(__name__)

DEFAULT_WINDOW_DAYS = 30


def _growth(current, previous) -> float:
    if not previous:
        return 0.0
    return round(float((current - previous) / previous) * 100, 2)


def _money(value) -> Decimal:
    return Decimal(str(value or 0)).quantize(Decimal("0.01"))


class AnalyticsService:
    def _count_events(
        self, db: Session, tenant_id: str, start: datetime, end: datetime,
        event_id: Optional[str],
    ) -> int:
        query = db.query(func.count(Event.id)).filter(
            Event.tenant_id == tenant_id,
            Event.created_at >= start,
            Event.created_at <= end,
        )
        if event_id:
            query = query.filter(Event.id == event_id)
        return query.scalar() or 0

    def _count_registrations(
        self, db: Session, tenant_id: str, start: datetime, end: datetime,
        event_id: Optional[str],
    ) -> int:
        query = (
            db.query(func.count(Ticket.id))
            .join(Event, Ticket.event_id == Event.id)
            .filter(
                Event.tenant_id == tenant_id,
                Ticket.status == "issued",
                Ticket.created_at >= start,
                Ticket.created_at <= end,
            )
        )
        if event_id:
            query = query.filter(Event.id == event_id)
        return query.scalar() or 0

    def _sum_revenue(
        self, db: Session, tenant_id: str, start: datetime, end: datetime,
        event_id: Optional[str],
    ) -> Decimal:
        query = (
            db.query(func.coalesce(func.sum(Transaction.amount), 0))
            .join(Ticket, Transaction.ticket_id == Ticket.id)
            .join(Event, Ticket.event_id == Event.id)
            .filter(
                Event.tenant_id == tenant_id,
                Transaction.status == "completed",
                Transaction.created_at >= start,
                Transaction.created_at <= end,
            )
        )
        if event_id:
            query = query.filter(Event.id == event_id)
        return _money(query.scalar())

    def _event_rows(self, db: Session, tenant_id: str, event_id: Optional[str]):
        registrations = func.count(func.distinct(Ticket.id))
        revenue = func.coalesce(
            func.sum(
                case((Transaction.status == "completed", Transaction.amount), else_=0)
            ),
            0,
        )
        query = (
            db.query(Event, registrations, revenue)
            .outerjoin(Ticket, and_(Ticket.event_id == Event.id, Ticket.status == "issued"))
            .outerjoin(Transaction, Transaction.ticket_id == Ticket.id)
            .filter(Event.tenant_id == tenant_id)
            .group_by(Event.id)
            .order_by(Event.start_date)
        )
        if event_id:
            query = query.filter(Event.id == event_id)
        return query.all()

    def get_dashboard(
        self, db: Session, request: AnalyticsRequest, admin: SessionClaims
    ) -> AnalyticsData:
        tenant_id = admin.tenant_id
        end = as_utc(request.end_date) or utcnow()
        start = as_utc(request.start_date) or end - timedelta(days=DEFAULT_WINDOW_DAYS)
        if start >= end:
            raise EventPassError("startDate must be before endDate", code="INVALID_RANGE")

        if request.event_id and not crud.event.get_for_tenant(
            db, tenant_id=tenant_id, event_id=request.event_id
        ):
            raise NotFoundError("Event not found")

        previous_start = start - (end - start)
        event_id = request.event_id

        total_events = self._count_events(db, tenant_id, start, end, event_id)
        total_registrations = self._count_registrations(db, tenant_id, start, end, event_id)
        total_revenue = self._sum_revenue(db, tenant_id, start, end, event_id)

        previous_events = self._count_events(db, tenant_id, previous_start, start, event_id)
        previous_registrations = self._count_registrations(
            db, tenant_id, previous_start, start, event_id
        )
        previous_revenue = self._sum_revenue(db, tenant_id, previous_start, start, event_id)

        events = [
            EventStats(
                id=event.id,
                title=event.title,
                type=event.type,
                date=event.start_date,
                registrations=count,
                capacity=event.capacity,
                revenue=_money(revenue),
                status=event.status,
            )
            for event, count, revenue in self._event_rows(db, tenant_id, event_id)
        ]

        logger.debug(f"Analytics for tenant {tenant_id} from {start} to {end}")
        return AnalyticsData(
            total_events=total_events,
            total_registrations=total_registrations,
            total_revenue=total_revenue,
            growth_stats=GrowthStats(
                events=_growth(total_events, previous_events),
                registrations=_growth(total_registrations, previous_registrations),
                revenue=_growth(total_revenue, previous_revenue),
            ),
            events=events,
        )


analytics_service = AnalyticsService()
