# eventpass/schemas/analytics.py
from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from eventpass.schemas.base import CamelModel


class AnalyticsRequest(CamelModel):
    event_id: Optional[str] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None


class GrowthStats(CamelModel):
    events: float
    registrations: float
    revenue: float


class EventStats(CamelModel):
    id: str
    title: str
    type: str
    date: datetime
    registrations: int
    capacity: Optional[int] = None
    revenue: Decimal
    status: str


class AnalyticsData(CamelModel):
    total_events: int
    total_registrations: int
    total_revenue: Decimal
    growth_stats: GrowthStats
    events: List[EventStats]


class AnalyticsResponse(CamelModel):
    success: bool = True
    data: AnalyticsData
