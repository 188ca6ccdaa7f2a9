"""Database package."""
from .session import engine, SessionLocal, get_db
from .base import init_db, check_db_connection

__all__ = ["engine", "SessionLocal", "get_db", "init_db", "check_db_connection"]
