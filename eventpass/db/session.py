from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from eventpass.core.config import settings

# The engine is the entry point to the database and owns the connection pool.
# It is created once per process and disposed in the application lifespan.
_connect_args = (
    {"check_same_thread": False} if settings.DATABASE_URL.startswith("sqlite") else {}
)
engine = create_engine(
    settings.DATABASE_URL, pool_pre_ping=True, connect_args=_connect_args
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db():
    """One session per request, always closed afterwards."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
