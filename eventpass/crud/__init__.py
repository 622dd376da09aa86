from .crud_tenant import tenant
from .crud_admin_user import admin_user
from .crud_event import event
from .crud_ticket_type import ticket_type
from .crud_attendee import attendee
from .crud_ticket import ticket
from .crud_transaction import transaction
