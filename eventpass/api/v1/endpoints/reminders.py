# eventpass/api/v1/endpoints/reminders.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from eventpass.api import deps
from eventpass.db.session import get_db
from eventpass.schemas.reminder import ReminderRequest, ReminderResponse
from eventpass.schemas.token import SessionClaims
from eventpass.services.reminder_service import reminder_service

router = APIRouter(tags=["Reminders"])


@router.post(
    "/send-reminder", response_model=ReminderResponse, response_model_exclude_none=True
)
def send_reminder(
    reminder_in: ReminderRequest,
    db: Session = Depends(get_db),
    admin: SessionClaims = Depends(deps.get_current_admin),
):
    return reminder_service.send_reminders(db, reminder_in, admin)
