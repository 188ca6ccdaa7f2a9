"""Hash routes and the logged-in/logged-out guard."""

from enum import Enum
from typing import NamedTuple, Optional, Union


class AuthState(Enum):
    LOGGED_OUT = "logged_out"
    LOGGED_IN = "logged_in"


class Route(str, Enum):
    LOGIN = "#/login"
    DASHBOARD = "#/dashboard"


class Resolution(NamedTuple):
    route: Route
    redirected: bool


HOME = {
    AuthState.LOGGED_OUT: Route.LOGIN,
    AuthState.LOGGED_IN: Route.DASHBOARD,
}

ALLOWED = {
    AuthState.LOGGED_OUT: {Route.LOGIN},
    AuthState.LOGGED_IN: {Route.DASHBOARD},
}


def parse_route(location: Union[str, Route, None]) -> Optional[Route]:
    """Map a hash such as ``#/dashboard`` to a Route, or None if unknown.

    An empty location means the login route.
    """
    if isinstance(location, Route):
        return location
    if not location:
        return Route.LOGIN
    try:
        return Route(location)
    except ValueError:
        return None


def resolve(location: Union[str, Route, None], state: AuthState) -> Resolution:
    """Return the route to show for ``location`` in ``state``.

    Logged out users can only see the login view and logged in users are sent
    from the login view to the dashboard. Unknown routes go to login, which
    then redirects onwards for a logged in user.
    """
    route = parse_route(location)
    if route is None:
        route = Route.LOGIN
        redirected = True
    else:
        redirected = False

    if route not in ALLOWED[state]:
        return Resolution(HOME[state], True)
    return Resolution(route, redirected)
