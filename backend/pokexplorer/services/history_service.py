"""Per-user search history backed by the relational store."""

from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from .base import BaseService
from pokexplorer.core.exceptions import InfraError
from pokexplorer.models.search_history import SearchHistory
from pokexplorer.models.user import User


class SearchHistoryService(BaseService):
    """Append-only log of the terms each user searched for."""

    def __init__(self, db: Session):
        super().__init__()
        self.db = db

    def record(self, user: User, term: str) -> SearchHistory:
        """Store ``term`` (trimmed and lowercased) for ``user``."""
        entry = SearchHistory(term=term.strip().lower(), user_id=user.id)
        try:
            self.db.add(entry)
            self.db.commit()
            self.db.refresh(entry)
        except SQLAlchemyError as e:
            self.db.rollback()
            self.logger.error(f"Failed to record search '{term}' for user {user.id}: {e}")
            raise InfraError("Error saving search history", error=str(e)) from e
        return entry

    def recent_for(self, user: User, limit: Optional[int] = None) -> List[SearchHistory]:
        """Return up to ``limit`` entries for ``user``, newest first."""
        if limit is None:
            limit = self.config.history_limit
        statement = (
            select(SearchHistory)
            .where(SearchHistory.user_id == user.id)
            .order_by(SearchHistory.timestamp.desc(), SearchHistory.id.desc())
            .limit(limit)
        )
        try:
            return list(self.db.execute(statement).scalars().all())
        except SQLAlchemyError as e:
            raise InfraError("Error fetching search history", error=str(e)) from e
