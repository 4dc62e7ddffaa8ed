"""
Database engine, session management, and base model.

Every model inherits from Base. Every request gets its own
session from get_db(); services receive that session and
never open one themselves.
"""

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, DeclarativeBase

from pos_ledger.config import get_settings

settings = get_settings()

# pool_pre_ping=True tests connections before handing them out,
# so a restarted database does not fail the next posting.
engine = create_engine(
    settings.DATABASE_URL,
    pool_pre_ping=True,
)

# autocommit=False: the caller decides when a journal entry and
# its lines become visible. A posting is committed as one unit
# or rolled back as one unit.
SessionLocal = sessionmaker(
    bind=engine,
    autocommit=False,
    autoflush=False,
)


class Base(DeclarativeBase):
    pass


def get_db():
    """
    Provide a database session for a single request.

    The session is always closed when the request finishes,
    even if an error occurs, so connections go back to the pool.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
