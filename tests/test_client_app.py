"""Tests for the client state machine and its handlers."""

from unittest.mock import MagicMock

import pytest

from pokexplorer_client.api_client import ApiClient, ApiError
from pokexplorer_client.app import ClientApp
from pokexplorer_client.router import AuthState, Route
from pokexplorer_client.session import Session, SessionStore

AUTH_RESPONSE = {"id": 1, "username": "ash", "token": "tok"}
PIKACHU = {"id": 25, "name": "pikachu", "sprites": {}, "types": [{"type": {"name": "electric"}}]}


@pytest.fixture
def store(tmp_path):
    return SessionStore(tmp_path / "session.json")


@pytest.fixture
def api():
    api = MagicMock(spec=ApiClient)
    api.token = None
    api.search_history.return_value = []
    return api


@pytest.fixture
def app(store, api):
    app = ClientApp(store, api)
    app.navigate()
    return app


@pytest.fixture
def logged_in_app(store, api):
    store.save(Session.from_auth_response(AUTH_RESPONSE))
    app = ClientApp(store, api)
    app.navigate("#/dashboard")
    return app


class TestStartup:
    def test_starts_logged_out_on_login(self, app):
        assert app.state is AuthState.LOGGED_OUT
        assert app.route is Route.LOGIN

    def test_stored_session_starts_logged_in(self, logged_in_app, api):
        assert logged_in_app.state is AuthState.LOGGED_IN
        assert logged_in_app.route is Route.DASHBOARD
        assert api.token == "tok"

    def test_guard_while_logged_out(self, app):
        app.navigate("#/dashboard")
        assert app.route is Route.LOGIN

    def test_guard_while_logged_in(self, logged_in_app):
        logged_in_app.navigate("#/login")
        assert logged_in_app.route is Route.DASHBOARD


class TestLogin:
    def test_success_stores_session_and_opens_dashboard(self, app, api, store):
        api.login.return_value = AUTH_RESPONSE

        page = app.login("  ash ", "pikachu1")

        api.login.assert_called_once_with("ash", "pikachu1")
        assert app.route is Route.DASHBOARD
        assert store.load().token == "tok"
        assert api.token == "tok"
        assert "👤 ash" in page

    def test_failure_shows_alert_and_stays(self, app, api, store):
        api.login.side_effect = ApiError("Invalid credentials", 401)

        page = app.login("ash", "wrongpw")

        assert app.route is Route.LOGIN
        assert "Invalid credentials" in page
        assert not store.load().is_authenticated

    def test_empty_fields_do_not_call_api(self, app, api):
        page = app.login("", "")

        api.login.assert_not_called()
        assert "Please fill in all fields" in page


class TestRegister:
    def test_short_password_is_rejected_locally(self, app, api):
        page = app.register("ash", "pika")

        api.register.assert_not_called()
        assert "at least 6 characters" in page

    def test_success_logs_in(self, app, api, store):
        api.register.return_value = AUTH_RESPONSE

        page = app.register("ash", "pikachu1")

        assert app.state is AuthState.LOGGED_IN
        assert app.route is Route.DASHBOARD
        assert "Account created successfully" in page
        assert store.load().username == "ash"

    def test_conflict_shows_server_message(self, app, api):
        api.register.side_effect = ApiError("User already exists", 400)

        page = app.register("ash", "pikachu1")

        assert app.route is Route.LOGIN
        assert "User already exists" in page


class TestSearch:
    def test_renders_card(self, logged_in_app, api):
        api.search.return_value = PIKACHU
        api.search_history.return_value = [{"term": "pikachu", "user": 1, "timestamp": "2026-01-01T00:00:00Z"}]

        page = logged_in_app.search("  PIKACHU ")

        api.search.assert_called_once_with("pikachu")
        assert "#025" in page
        assert "type-electric" in page
        assert "Recent searches" in page

    def test_not_found_renders_error_state_in_place(self, logged_in_app, api):
        api.search.side_effect = ApiError("Pokémon not found", 404)

        page = logged_in_app.search("missingno")

        assert logged_in_app.route is Route.DASHBOARD
        assert "Not found" in page
        assert "Pokémon not found" in page

    def test_empty_term(self, logged_in_app, api):
        page = logged_in_app.search("   ")

        api.search.assert_not_called()
        assert "Please enter a Pokémon name or ID" in page

    def test_history_failure_keeps_result(self, logged_in_app, api):
        api.search.return_value = PIKACHU
        api.search_history.side_effect = ApiError("Server error", 500)

        page = logged_in_app.search("pikachu")

        assert "#025" in page


class TestLogout:
    def test_clears_session_and_returns_to_login(self, logged_in_app, api, store):
        page = logged_in_app.logout()

        assert logged_in_app.state is AuthState.LOGGED_OUT
        assert logged_in_app.route is Route.LOGIN
        assert not store.path.exists()
        assert api.token is None
        assert 'id="loginForm"' in page

    def test_dashboard_is_guarded_after_logout(self, logged_in_app):
        logged_in_app.logout()
        logged_in_app.navigate("#/dashboard")

        assert logged_in_app.route is Route.LOGIN
