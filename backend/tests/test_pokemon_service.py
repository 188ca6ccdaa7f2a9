"""Tests for PokemonService."""

import threading

import httpx
import pytest

from pokexplorer.core.exceptions import NotFoundError, UpstreamError, ValidationError
from pokexplorer.models.search_history import SearchHistory
from pokexplorer.models.user import User
from pokexplorer.services.history_service import SearchHistoryService
from pokexplorer.services.pokemon_service import PokemonService


@pytest.fixture
def trainer(db_session):
    user = User(username="ash", hashed_password="x")
    db_session.add(user)
    db_session.commit()
    return user


@pytest.fixture
def service(db_session, pokeapi_client):
    return PokemonService(pokeapi_client, history=SearchHistoryService(db_session))


class TestListPokemon:
    @pytest.mark.asyncio
    async def test_forwards_pagination(self, service, fake_pokeapi):
        body = await service.list_pokemon(limit="2", offset="1")

        request = fake_pokeapi.requests[-1]
        assert request.url.path == "/api/v2/pokemon"
        assert request.url.params["limit"] == "2"
        assert request.url.params["offset"] == "1"
        assert [p["name"] for p in body["results"]] == ["charizard", "pikachu"]

    @pytest.mark.asyncio
    async def test_defaults(self, service, fake_pokeapi):
        await service.list_pokemon()

        params = fake_pokeapi.requests[-1].url.params
        assert (params["limit"], params["offset"]) == ("20", "0")

    @pytest.mark.asyncio
    async def test_upstream_failure(self, service, fake_pokeapi):
        fake_pokeapi.status_override = 503

        with pytest.raises(UpstreamError) as exc_info:
            await service.list_pokemon()
        assert "503" in exc_info.value.error


class TestPokemonDetail:
    @pytest.mark.asyncio
    async def test_lookup_is_case_insensitive(self, service, fake_pokeapi):
        lower = await service.get_pokemon_detail("pikachu")
        upper = await service.get_pokemon_detail("PIKACHU")

        assert lower == upper
        assert [r.url.path for r in fake_pokeapi.requests] == ["/api/v2/pokemon/pikachu"] * 2

    @pytest.mark.asyncio
    async def test_lookup_by_id(self, service):
        body = await service.get_pokemon_detail("6")
        assert body["name"] == "charizard"

    @pytest.mark.asyncio
    async def test_unknown_pokemon(self, service):
        with pytest.raises(NotFoundError) as exc_info:
            await service.get_pokemon_detail("missingno")
        assert exc_info.value.status_code == 404

    @pytest.mark.asyncio
    async def test_server_error_is_not_a_not_found(self, service, fake_pokeapi):
        fake_pokeapi.status_override = 500
        with pytest.raises(UpstreamError):
            await service.get_pokemon_detail("pikachu")

    @pytest.mark.asyncio
    async def test_timeout(self, service, fake_pokeapi):
        fake_pokeapi.fail_with = httpx.ReadTimeout("timed out")

        with pytest.raises(UpstreamError) as exc_info:
            await service.get_pokemon_detail("pikachu")
        assert exc_info.value.status_code == 500
        assert "timed out" in exc_info.value.error

    @pytest.mark.asyncio
    async def test_connection_error(self, service, fake_pokeapi):
        fake_pokeapi.fail_with = httpx.ConnectError("connection refused")
        with pytest.raises(UpstreamError):
            await service.get_pokemon_detail("pikachu")


class TestSearch:
    @pytest.mark.asyncio
    async def test_records_then_returns_detail(self, service, trainer, db_session):
        body = await service.search(trainer, "Charizard")

        assert body["name"] == "charizard"
        entry = db_session.query(SearchHistory).one()
        assert entry.term == "charizard"
        assert entry.user_id == trainer.id

    @pytest.mark.asyncio
    @pytest.mark.parametrize("term", ["", None, "   "])
    async def test_empty_term_writes_nothing(self, service, trainer, db_session, fake_pokeapi, term):
        with pytest.raises(ValidationError):
            await service.search(trainer, term)

        assert db_session.query(SearchHistory).count() == 0
        assert fake_pokeapi.requests == []

    @pytest.mark.asyncio
    async def test_history_is_written_even_when_not_found(self, service, trainer, db_session):
        with pytest.raises(NotFoundError):
            await service.search(trainer, "missingno")

        assert [e.term for e in db_session.query(SearchHistory)] == ["missingno"]

    @pytest.mark.asyncio
    async def test_history_is_written_before_lookup(self, db_session, trainer):
        seen = []

        def handler(request):
            seen.append(db_session.query(SearchHistory).count())
            return httpx.Response(404)

        client = httpx.AsyncClient(base_url="https://pokeapi.test/api/v2", transport=httpx.MockTransport(handler))
        service = PokemonService(client, history=SearchHistoryService(db_session))

        with pytest.raises(NotFoundError):
            await service.search(trainer, "mew")
        assert seen == [1]
        await client.aclose()

    @pytest.mark.asyncio
    async def test_history_write_runs_in_worker_thread(self, service, trainer, db_session):
        threads = []
        record = service.history.record

        def tracking_record(user, term):
            threads.append(threading.get_ident())
            return record(user, term)

        service.history.record = tracking_record
        await service.search(trainer, "pikachu")

        assert len(threads) == 1
        assert threads[0] != threading.get_ident()
        assert [e.term for e in db_session.query(SearchHistory)] == ["pikachu"]
