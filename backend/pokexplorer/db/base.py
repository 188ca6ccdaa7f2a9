"""Database initialization utilities."""

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from .session import engine
from pokexplorer.models.base import Base
import pokexplorer.models  # noqa: F401  registers the tables on Base.metadata


def init_db() -> None:
    """Initialize database by creating all tables."""
    Base.metadata.create_all(bind=engine)


def check_db_connection(db: Session) -> bool:
    """Check if database connection is healthy."""
    try:
        db.execute(text("SELECT 1"))
        return True
    except SQLAlchemyError:
        return False
