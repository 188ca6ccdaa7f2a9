"""Pokémon list, detail and search endpoints. All require a bearer token."""

from typing import Any, Dict, List

from fastapi import APIRouter, Depends, Query

from pokexplorer.api.dependencies import (
    get_current_user,
    get_history_service,
    get_pokemon_service,
)
from pokexplorer.models.user import User
from pokexplorer.schemas.search import SearchHistoryRead, SearchRequest
from pokexplorer.services.history_service import SearchHistoryService
from pokexplorer.services.pokemon_service import PokemonService

router = APIRouter(tags=["pokemon"], dependencies=[Depends(get_current_user)])


@router.get("/pokemon")
async def list_pokemon(
    limit: str = Query("20", description="Page size forwarded to PokéAPI"),
    offset: str = Query("0", description="Page offset forwarded to PokéAPI"),
    service: PokemonService = Depends(get_pokemon_service),
) -> Dict[str, Any]:
    """Relay a page of PokéAPI's Pokémon list."""
    return await service.list_pokemon(limit=limit, offset=offset)


@router.get(
    "/pokemon/{name_or_id}",
    responses={404: {"description": "Pokémon not found"}},
)
async def get_pokemon(
    name_or_id: str,
    service: PokemonService = Depends(get_pokemon_service),
) -> Dict[str, Any]:
    """Relay PokéAPI's detail payload for one Pokémon."""
    return await service.get_pokemon_detail(name_or_id)


@router.post(
    "/search",
    responses={400: {"description": "Missing term"}, 404: {"description": "Pokémon not found"}},
)
async def search(
    body: SearchRequest,
    current_user: User = Depends(get_current_user),
    service: PokemonService = Depends(get_pokemon_service),
) -> Dict[str, Any]:
    """Log the term to the caller's history, then look it up."""
    return await service.search(current_user, body.term)


@router.get("/search/history", response_model=List[SearchHistoryRead])
def search_history(
    current_user: User = Depends(get_current_user),
    history: SearchHistoryService = Depends(get_history_service),
):
    """Return the caller's most recent searches, newest first."""
    return history.recent_for(current_user)
