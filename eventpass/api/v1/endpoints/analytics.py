# eventpass/api/v1/endpoints/analytics.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from eventpass.api import deps
from eventpass.db.session import get_db
from eventpass.schemas.analytics import AnalyticsRequest, AnalyticsResponse
from eventpass.schemas.token import SessionClaims
from eventpass.services.analytics_service import analytics_service

router = APIRouter(tags=["Analytics"])


@router.post("/analytics", response_model=AnalyticsResponse)
def get_analytics(
    analytics_in: AnalyticsRequest,
    db: Session = Depends(get_db),
    admin: SessionClaims = Depends(deps.get_current_admin),
):
    """Dashboard totals for the session's tenant."""
    return AnalyticsResponse(data=analytics_service.get_dashboard(db, analytics_in, admin))
