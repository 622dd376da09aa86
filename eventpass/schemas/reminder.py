# eventpass/schemas/reminder.py
from typing import List, Literal, Optional

from pydantic import Field

from eventpass.schemas.base import CamelModel


class ReminderRequest(CamelModel):
    event_id: str = Field(min_length=1)
    when: Literal["24h", "1h", "custom"]
    custom_message: Optional[str] = None


class ReminderCounts(CamelModel):
    emails: int
    total: int


class ReminderResponse(CamelModel):
    success: bool = True
    reminders_sent: ReminderCounts
    total_attendees: int
    errors: Optional[List[str]] = None
