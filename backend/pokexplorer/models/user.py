"""User model."""

from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship

from .base import Base, TimestampMixin


class User(Base, TimestampMixin):
    """A registered account. Only the salted hash of the password is stored."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(100), unique=True, index=True, nullable=False)
    hashed_password = Column(String(255), nullable=False)

    search_history = relationship(
        "SearchHistory",
        back_populates="user",
        cascade="all, delete-orphan",
        order_by="SearchHistory.timestamp.desc()",
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, username='{self.username}')>"
