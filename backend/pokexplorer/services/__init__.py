"""Service layer initialization."""
from .base import BaseService
from .auth_service import AuthService
from .history_service import SearchHistoryService
from .pokemon_service import PokemonService

__all__ = [
    'BaseService',
    'AuthService',
    'SearchHistoryService',
    'PokemonService',
]
