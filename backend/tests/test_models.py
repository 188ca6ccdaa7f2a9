"""Test database models."""

import pytest
from sqlalchemy.exc import IntegrityError

from pokexplorer.models.user import User
from pokexplorer.models.search_history import SearchHistory


def test_user_creation(db_session):
    """Test user model creation."""
    user = User(username="testuser", hashed_password="hashed_password")
    db_session.add(user)
    db_session.commit()

    assert user.id is not None
    assert user.username == "testuser"
    assert user.created_at is not None


def test_username_is_unique(db_session):
    """Duplicate usernames are rejected by the database."""
    db_session.add(User(username="misty", hashed_password="a"))
    db_session.commit()

    db_session.add(User(username="misty", hashed_password="b"))
    with pytest.raises(IntegrityError):
        db_session.commit()
    db_session.rollback()


def test_username_is_case_sensitive(db_session):
    """Usernames differing only in case are distinct accounts."""
    db_session.add_all([
        User(username="brock", hashed_password="a"),
        User(username="Brock", hashed_password="b"),
    ])
    db_session.commit()

    assert db_session.query(User).count() == 2


def test_search_history_creation(db_session):
    """Test search history model creation."""
    user = User(username="testuser", hashed_password="hashed_password")
    db_session.add(user)
    db_session.commit()

    search = SearchHistory(term="pikachu", user_id=user.id)
    db_session.add(search)
    db_session.commit()

    assert search.id is not None
    assert search.term == "pikachu"
    assert search.user_id == user.id
    assert search.timestamp is not None
    assert user.search_history == [search]
