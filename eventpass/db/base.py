# eventpass/db/base.py
# Import all models so that Base.metadata knows every table
# (used by Alembic autogenerate and by the test suite).
from eventpass.db.base_class import Base  # noqa: F401
from eventpass.models import (  # noqa: F401
    AdminUser,
    Attendee,
    Event,
    Tenant,
    Ticket,
    TicketType,
    Transaction,
)
