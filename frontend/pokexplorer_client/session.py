"""Session state and its persistent storage."""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

from loguru import logger


@dataclass
class Session:
    """The token and user pair the client acts as."""

    token: Optional[str] = None
    user: Dict[str, Any] = field(default_factory=dict)

    @property
    def username(self) -> Optional[str]:
        return self.user.get("username")

    @property
    def is_authenticated(self) -> bool:
        return is_valid_pair(self.token, self.user)

    @classmethod
    def from_auth_response(cls, data: Dict[str, Any]) -> "Session":
        """Build a session from a ``{id, username, token}`` auth response."""
        return cls(token=data["token"], user={"id": data.get("id"), "username": data["username"]})


def is_valid_pair(token: Any, user: Any) -> bool:
    return (
        isinstance(token, str)
        and bool(token)
        and isinstance(user, dict)
        and isinstance(user.get("username"), str)
        and bool(user["username"])
    )


class SessionStore:
    """Persists the session as a small JSON file.

    A missing, unreadable or badly shaped file reads back as an empty session.
    """

    def __init__(self, path: Path):
        self.path = Path(path)

    def load(self) -> Session:
        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return Session()
        except (OSError, ValueError) as e:
            logger.warning(f"Ignoring unreadable session file {self.path}: {e}")
            return Session()

        if not isinstance(raw, dict) or not is_valid_pair(raw.get("token"), raw.get("user")):
            return Session()
        return Session(token=raw["token"], user=raw["user"])

    def save(self, session: Session) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(
            json.dumps({"token": session.token, "user": session.user}),
            encoding="utf-8",
        )

    def clear(self) -> None:
        self.path.unlink(missing_ok=True)
