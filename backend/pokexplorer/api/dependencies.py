"""Shared FastAPI dependencies, including the bearer-token gate."""

from typing import Optional

import httpx
from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError
from sqlalchemy.orm import Session

from pokexplorer.core.exceptions import AuthError
from pokexplorer.core.security import decode_access_token
from pokexplorer.db.session import get_db
from pokexplorer.models.user import User
from pokexplorer.services.auth_service import AuthService
from pokexplorer.services.history_service import SearchHistoryService
from pokexplorer.services.pokemon_service import PokemonService


bearer_scheme = HTTPBearer(auto_error=False)


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: Session = Depends(get_db),
) -> User:
    """
    Resolve the user behind the ``Authorization: Bearer <token>`` header.

    Raises:
        AuthError: If the token is missing, fails verification or expired,
            or names a user that no longer exists
    """
    if credentials is None:
        raise AuthError("Not authorized, no token")
    token = credentials.credentials

    try:
        user_id = decode_access_token(token)
    except JWTError as e:
        raise AuthError("Not authorized, invalid token") from e

    user = db.get(User, user_id)
    if user is None:
        raise AuthError("User not found")
    return user


def get_pokeapi_client(request: Request) -> httpx.AsyncClient:
    """Return the PokéAPI client created in the application lifespan."""
    return request.app.state.pokeapi_client


def get_auth_service(db: Session = Depends(get_db)) -> AuthService:
    return AuthService(db)


def get_history_service(db: Session = Depends(get_db)) -> SearchHistoryService:
    return SearchHistoryService(db)


def get_pokemon_service(
    client: httpx.AsyncClient = Depends(get_pokeapi_client),
    history: SearchHistoryService = Depends(get_history_service),
) -> PokemonService:
    return PokemonService(client, history=history)
