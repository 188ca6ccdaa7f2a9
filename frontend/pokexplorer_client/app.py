"""Client controller: the LoggedOut/LoggedIn state machine and its handlers."""

from typing import Any, Dict, List, Optional, Union

from loguru import logger

from . import views
from .api_client import ApiClient, ApiError
from .config import ClientSettings
from .router import AuthState, Route, resolve
from .session import Session, SessionStore

MIN_PASSWORD_LENGTH = 6


class ClientApp:
    """Holds the current route and view, and reacts to user actions.

    The session is re-read from the store on every navigation, so a token
    written or cleared elsewhere takes effect on the next route change.
    Every handler returns the HTML of the view to show.
    """

    def __init__(self, store: SessionStore, api: ApiClient):
        self.store = store
        self.api = api
        self.session = Session()
        self.route = Route.LOGIN
        self.alert_html = ""
        self.grid_html: Optional[str] = None
        self.history: List[Dict[str, Any]] = []
        self._load_session()

    @property
    def state(self) -> AuthState:
        return AuthState.LOGGED_IN if self.session.is_authenticated else AuthState.LOGGED_OUT

    def navigate(self, location: Union[str, Route, None] = None) -> str:
        """Go to ``location`` (a hash such as ``#/dashboard``), applying the guard."""
        self._load_session()
        resolution = resolve(location, self.state)
        if resolution.redirected:
            logger.debug(f"Redirecting {location!r} to {resolution.route.value}")

        if resolution.route != self.route:
            self.grid_html = None
            self.history = []
        self.route = resolution.route
        self.alert_html = ""
        return self.render()

    def render(self) -> str:
        if self.route == Route.DASHBOARD:
            return views.dashboard_view(
                self.session,
                grid_html=self.grid_html,
                alert_html=self.alert_html,
                history=self.history,
            )
        return views.login_view(alert_html=self.alert_html)

    def login(self, username: str, password: str) -> str:
        username = (username or "").strip()
        if not username or not password:
            return self._show_alert("Please fill in all fields")

        try:
            data = self.api.login(username, password)
        except ApiError as e:
            return self._show_alert(e.message or "Error logging in")

        self._start_session(data)
        return self.navigate(Route.DASHBOARD)

    def register(self, username: str, password: str) -> str:
        username = (username or "").strip()
        if not username or not password:
            return self._show_alert("Please fill in all fields")
        if len(password) < MIN_PASSWORD_LENGTH:
            return self._show_alert(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")

        try:
            data = self.api.register(username, password)
        except ApiError as e:
            return self._show_alert(e.message or "Error creating account")

        self._start_session(data)
        self.navigate(Route.DASHBOARD)
        return self._show_alert("Account created successfully", kind="success")

    def search(self, term: str) -> str:
        if self.state is not AuthState.LOGGED_IN:
            return self.navigate(self.route)

        term = (term or "").strip().lower()
        if not term:
            return self._show_alert("Please enter a Pokémon name or ID")

        self.alert_html = ""
        try:
            pokemon = self.api.search(term)
        except ApiError as e:
            self.grid_html = views.not_found_state(e.message)
        else:
            self.grid_html = views.pokemon_grid([pokemon])

        self.refresh_history()
        return self.render()

    def refresh_history(self) -> List[Dict[str, Any]]:
        """Reload the recent-searches panel. Failures keep the previous list."""
        try:
            self.history = self.api.search_history()
        except ApiError as e:
            logger.warning(f"Could not load search history: {e.message}")
        return self.history

    def logout(self) -> str:
        self.store.clear()
        self.session = Session()
        self.api.token = None
        return self.navigate(Route.LOGIN)

    def _load_session(self) -> None:
        self.session = self.store.load()
        self.api.token = self.session.token

    def _start_session(self, data: Dict[str, Any]) -> None:
        self.store.save(Session.from_auth_response(data))
        self._load_session()

    def _show_alert(self, message: str, kind: str = "error") -> str:
        self.alert_html = views.alert(message, kind)
        return self.render()


def build_app(settings: Optional[ClientSettings] = None) -> ClientApp:
    settings = settings or ClientSettings()
    store = SessionStore(settings.storage_path)
    api = ApiClient(settings.api_url, timeout=settings.request_timeout)
    app = ClientApp(store, api)
    app.navigate()
    return app
