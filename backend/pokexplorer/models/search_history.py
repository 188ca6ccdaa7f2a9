"""Search history model."""

from sqlalchemy import Column, DateTime, ForeignKey, Index, Integer, String
from sqlalchemy.orm import relationship

from .base import Base, utcnow


class SearchHistory(Base):
    """One search term submitted by a user. Rows are never updated or deleted."""

    __tablename__ = "search_history"
    __table_args__ = (
        Index("ix_search_history_user_timestamp", "user_id", "timestamp"),
    )

    id = Column(Integer, primary_key=True, index=True)
    term = Column(String(255), nullable=False)
    timestamp = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    user_id = Column(Integer, ForeignKey("users.id"), nullable=False)

    user = relationship("User", back_populates="search_history")

    def __repr__(self) -> str:
        return f"<SearchHistory(id={self.id}, term='{self.term}', user_id={self.user_id})>"
