"""Proxy to PokéAPI."""

from typing import Any, Dict, Optional
from urllib.parse import quote

import httpx
from starlette.concurrency import run_in_threadpool

from .base import BaseService
from .history_service import SearchHistoryService
from pokexplorer.core.exceptions import NotFoundError, UpstreamError, ValidationError
from pokexplorer.models.user import User

NOT_FOUND_MESSAGE = "Pokémon not found"


def build_pokeapi_client(base_url: str, timeout: float, **kwargs: Any) -> httpx.AsyncClient:
    """Create the shared HTTP client used to reach PokéAPI."""
    return httpx.AsyncClient(
        base_url=base_url,
        timeout=httpx.Timeout(timeout),
        headers={"Accept": "application/json"},
        **kwargs,
    )


class PokemonService(BaseService):
    """Forwards list, detail and search lookups to PokéAPI.

    Response bodies are relayed unmodified. Upstream 404s become
    NotFoundError; every other failure (HTTP error status, timeout, transport
    error, undecodable body) becomes UpstreamError. Nothing is retried.
    """

    def __init__(self, client: httpx.AsyncClient, history: Optional[SearchHistoryService] = None):
        super().__init__()
        self.client = client
        self.history = history

    async def list_pokemon(self, limit: str = "20", offset: str = "0") -> Dict[str, Any]:
        """Relay one page of the list. Pagination values are forwarded unparsed."""
        try:
            return await self._get_json("/pokemon", params={"limit": limit, "offset": offset})
        except httpx.HTTPError as e:
            self.logger.error(f"Failed to list Pokémon (limit={limit}, offset={offset}): {e}")
            raise UpstreamError("Error fetching Pokémon", error=str(e)) from e

    async def get_pokemon_detail(self, name_or_id: str) -> Dict[str, Any]:
        """Fetch one Pokémon by name or ID. Lookups are case-insensitive."""
        return await self._lookup(name_or_id, failure_message="Error fetching Pokémon details")

    async def search(self, user: User, term: Optional[str]) -> Dict[str, Any]:
        """Record ``term`` in the user's history, then look it up.

        The history entry is written before PokéAPI is contacted and is kept
        even if the lookup fails.
        """
        if term is None or not str(term).strip():
            raise ValidationError("Search term is required")
        if self.history is None:
            raise RuntimeError("PokemonService.search needs a SearchHistoryService")

        term = str(term).strip().lower()
        # Session I/O is synchronous; keep it off the event loop
        await run_in_threadpool(self.history.record, user, term)
        self.logger.info(f"User {user.id} searched for '{term}'")
        return await self._lookup(term, failure_message="Error during search")

    async def _lookup(self, name_or_id: str, failure_message: str) -> Dict[str, Any]:
        identifier = (name_or_id or "").strip().lower()
        if not identifier:
            raise ValidationError("Pokémon name or ID is required")

        try:
            return await self._get_json(f"/pokemon/{quote(identifier, safe='')}")
        except httpx.HTTPStatusError as e:
            if e.response.status_code == httpx.codes.NOT_FOUND:
                raise NotFoundError(NOT_FOUND_MESSAGE) from e
            self.logger.error(f"PokéAPI returned {e.response.status_code} for '{identifier}'")
            raise UpstreamError(failure_message, error=str(e)) from e
        except httpx.TimeoutException as e:
            self.logger.error(f"PokéAPI timed out looking up '{identifier}'")
            raise UpstreamError(failure_message, error=f"Request timed out: {e}") from e
        except httpx.HTTPError as e:
            self.logger.error(f"PokéAPI lookup for '{identifier}' failed: {e}")
            raise UpstreamError(failure_message, error=str(e)) from e

    async def _get_json(self, path: str, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        response = await self.client.get(path, params=params)
        response.raise_for_status()
        try:
            return response.json()
        except ValueError as e:
            raise httpx.DecodingError(f"Invalid JSON from PokéAPI: {e}", request=response.request) from e
