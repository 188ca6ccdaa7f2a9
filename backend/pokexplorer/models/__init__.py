"""Database models package."""
from .base import Base
from .user import User
from .search_history import SearchHistory

__all__ = ["Base", "User", "SearchHistory"]
