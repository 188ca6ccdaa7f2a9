"""Shared fixtures: in-memory database, fake PokéAPI and an API test client."""

import json
from typing import Dict, List

import httpx
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from pokexplorer.api.dependencies import get_pokeapi_client
from pokexplorer.db.session import get_db
from pokexplorer.main import app
from pokexplorer.models.base import Base
from pokexplorer.services.pokemon_service import build_pokeapi_client

POKEAPI_BASE_URL = "https://pokeapi.test/api/v2"


def pokemon_payload(pokemon_id: int, name: str, *types: str) -> Dict:
    return {
        "id": pokemon_id,
        "name": name,
        "sprites": {
            "front_default": f"https://sprites.test/{pokemon_id}.png",
            "other": {"official-artwork": {"front_default": f"https://artwork.test/{pokemon_id}.png"}},
        },
        "types": [
            {"slot": slot, "type": {"name": type_name, "url": f"{POKEAPI_BASE_URL}/type/{type_name}/"}}
            for slot, type_name in enumerate(types, start=1)
        ],
    }


POKEDEX = {
    "pikachu": pokemon_payload(25, "pikachu", "electric"),
    "charizard": pokemon_payload(6, "charizard", "fire", "flying"),
    "bulbasaur": pokemon_payload(1, "bulbasaur", "grass", "poison"),
}
POKEDEX_BY_ID = {str(p["id"]): p for p in POKEDEX.values()}


class FakePokeAPI:
    """Stand-in for PokéAPI served through ``httpx.MockTransport``."""

    def __init__(self):
        self.requests: List[httpx.Request] = []
        self.fail_with: Exception | None = None
        self.status_override: int | None = None

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.fail_with is not None:
            raise self.fail_with
        if self.status_override is not None:
            return httpx.Response(self.status_override, text="upstream unavailable")

        path = request.url.path.removeprefix("/api/v2").rstrip("/")
        if path == "/pokemon":
            limit = request.url.params.get("limit", "20")
            offset = request.url.params.get("offset", "0")
            if not (limit.isdigit() and offset.isdigit()):
                return httpx.Response(400, text="Bad Request")
            limit, offset = int(limit), int(offset)
            names = sorted(POKEDEX)[offset:offset + limit]
            return httpx.Response(200, json={
                "count": len(POKEDEX),
                "next": None,
                "previous": None,
                "results": [{"name": n, "url": f"{POKEAPI_BASE_URL}/pokemon/{POKEDEX[n]['id']}/"} for n in names],
            })

        if path.startswith("/pokemon/"):
            key = path.split("/")[-1]
            payload = POKEDEX.get(key) or POKEDEX_BY_ID.get(key)
            if payload is None:
                return httpx.Response(404, text="Not Found")
            return httpx.Response(200, content=json.dumps(payload), headers={"Content-Type": "application/json"})

        return httpx.Response(404, text="Not Found")


@pytest.fixture
def db_session():
    """Create a test database session."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture
def fake_pokeapi():
    return FakePokeAPI()


@pytest.fixture
def pokeapi_client(fake_pokeapi):
    return build_pokeapi_client(POKEAPI_BASE_URL, timeout=5, transport=httpx.MockTransport(fake_pokeapi))


@pytest.fixture
def client(db_session, pokeapi_client):
    """API client backed by the in-memory database and the fake PokéAPI."""

    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_pokeapi_client] = lambda: pokeapi_client
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def registered_user(client):
    """Register ``ash`` and return the auth response body."""
    response = client.post("/auth/register", json={"username": "ash", "password": "pikachu1"})
    assert response.status_code == 201
    return response.json()


@pytest.fixture
def auth_headers(registered_user):
    return {"Authorization": f"Bearer {registered_user['token']}"}
