from .tenant import Tenant
from .admin_user import AdminUser
from .event import Event
from .ticket_type import TicketType
from .attendee import Attendee
from .ticket import Ticket
from .transaction import Transaction

__all__ = [
    "Tenant",
    "AdminUser",
    "Event",
    "TicketType",
    "Attendee",
    "Ticket",
    "Transaction",
]
