# eventpass/api/v1/api.py

from fastapi import APIRouter
from eventpass.api.v1.endpoints import (
    admin_events,
    admin_settings,
    analytics,
    auth,
    checkin,
    payments,
    public,
    registrations,
    reminders,
    tickets,
)

# This is the main router for the v1 API.
# The dev simulation router is mounted separately in eventpass.main.
api_router = APIRouter()

api_router.include_router(auth.router)
api_router.include_router(registrations.router)
api_router.include_router(tickets.router)
api_router.include_router(checkin.router)
api_router.include_router(payments.router)
api_router.include_router(reminders.router)
api_router.include_router(analytics.router)
api_router.include_router(public.router)
api_router.include_router(admin_events.router)
api_router.include_router(admin_settings.router)
