# eventpass/db/seed.py
"""
Demo data for local development: ``python -m eventpass.db.seed``.

Every demo admin logs in with the password ``admin123``.
"""
import logging
from datetime import timedelta
from decimal import Decimal

from eventpass import crud
from eventpass.db.base import Base
from eventpass.db.session import SessionLocal, engine
from eventpass.models.tenant import Tenant
from eventpass.schemas.auth import AdminUserCreate
from eventpass.schemas.event import EventCreate, TicketTypeCreate
from eventpass.utils.datetime import utcnow

logger = logging.getLogger(__name__)

DEMO_PASSWORD = "admin123"

DEMO_TENANTS = [
    {"slug": "demo", "name": "TechCorp", "email": "admin@techcorp.com",
     "theme": {"primaryColor": "#6366F1", "secondaryColor": "#EC4899",
               "accentColor": "#10B981", "fontFamily": "Inter"}},
    {"slug": "startup", "name": "StartupEvents", "email": "admin@startupevents.com",
     "theme": {"primaryColor": "#F59E0B", "secondaryColor": "#3B82F6",
               "accentColor": "#8B5CF6", "fontFamily": "Poppins"}},
    {"slug": "musicfest", "name": "Music Festival Co", "email": "admin@musicfest.com",
     "theme": {"primaryColor": "#EF4444", "secondaryColor": "#F97316",
               "accentColor": "#FACC15", "fontFamily": "Montserrat"}},
]


def get_demo_events():
    start = (utcnow() + timedelta(days=14)).replace(hour=17, minute=0, second=0, microsecond=0)
    return {
        "demo": EventCreate(
            slug="advanced-react-patterns",
            type="webinar",
            title="Advanced React Patterns",
            subtitle="Master Modern Development",
            start_date=start,
            end_date=start + timedelta(minutes=90),
            capacity=500,
            status="published",
            speakers=[{"name": "Sarah Chen", "title": "Senior React Developer",
                       "bio": "Builds design systems used by thousands of engineers."}],
            ticket_types=[
                TicketTypeCreate(name="Free Access", quantity=300,
                                 perks=["Live webinar access", "Q&A participation"]),
                TicketTypeCreate(name="Pro Access", price=Decimal("29.00"), quantity=150,
                                 is_paid=True, perks=["Everything in Free", "30-day recording access"]),
            ],
        ),
        "startup": EventCreate(
            slug="fullstack-bootcamp",
            type="workshop",
            title="Full-Stack Development Bootcamp",
            subtitle="Build Real Applications",
            start_date=start + timedelta(days=7),
            end_date=start + timedelta(days=9),
            location="San Francisco, CA",
            capacity=20,
            status="published",
            ticket_types=[
                TicketTypeCreate(name="Early Bird", price=Decimal("299.00"), quantity=10,
                                 is_paid=True, perks=["3-day workshop", "Lunch provided"]),
                TicketTypeCreate(name="Regular Ticket", price=Decimal("399.00"), quantity=10,
                                 is_paid=True, perks=["3-day workshop"]),
            ],
        ),
        "musicfest": EventCreate(
            slug="summer-music-festival",
            type="concert",
            title="Summer Music Festival",
            subtitle="Three Days of Incredible Music",
            start_date=start + timedelta(days=30),
            end_date=start + timedelta(days=32),
            location="Golden Gate Park",
            capacity=5000,
            status="published",
            ticket_types=[
                TicketTypeCreate(name="General Admission", price=Decimal("149.00"),
                                 quantity=3000, is_paid=True, perks=["All stages"]),
                TicketTypeCreate(name="VIP Pass", price=Decimal("399.00"), quantity=500,
                                 is_paid=True, perks=["VIP viewing area", "Express entry"]),
            ],
        ),
    }


def seed_database():
    db = SessionLocal()
    try:
        logger.info("Seeding database...")
        Base.metadata.create_all(bind=engine)

        if db.query(Tenant).first():
            logger.info("Database already seeded.")
            return

        events = get_demo_events()
        for tenant_data in DEMO_TENANTS:
            tenant = crud.tenant.create(db, obj_in=tenant_data)
            crud.admin_user.create_for_tenant(
                db,
                obj_in=AdminUserCreate(
                    email=tenant.email,
                    password=DEMO_PASSWORD,
                    name=f"{tenant.name} Admin",
                    tenant_slug=tenant.slug,
                ),
                tenant_id=tenant.id,
            )
            event = crud.event.create_with_ticket_types(
                db, obj_in=events[tenant.slug], tenant_id=tenant.id
            )
            logger.info(f"Seeded tenant {tenant.slug} with event {event.slug}")

        logger.info("Database seeded successfully.")
    finally:
        db.close()


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    seed_database()
