# /app/db/database.py

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from app.core.config import get_settings

DATABASE_URL = get_settings().database_url

# The 'check_same_thread' argument is only needed for SQLite.
engine_args = {"connect_args": {"check_same_thread": False}} if DATABASE_URL.startswith("sqlite") else {"pool_pre_ping": True}
engine = create_engine(DATABASE_URL, **engine_args)

# Each instance of this class is a database session.
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def init_db() -> None:
    """Creates any missing tables. Imported lazily so every model is registered first."""
    from . import base  # noqa: F401
    from .base_class import Base
    Base.metadata.create_all(bind=engine)


# Dependency to get a DB session. Used by the API routers.
def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
