"""HTTP client for the Poké-Explorer API."""

from typing import Any, Dict, List, Optional
from urllib.parse import quote

import requests
from loguru import logger
from requests.exceptions import RequestException, Timeout

DEFAULT_ERROR_MESSAGE = "Request failed"


class ApiError(Exception):
    """A failed API call, carrying the server's message when it sent one."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class ApiClient:
    """Thin wrapper over ``requests`` that speaks the backend's JSON contract."""

    def __init__(self, base_url: str, timeout: float = 10.0, http: Optional[requests.Session] = None):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.http = http or requests.Session()
        self.token: Optional[str] = None

    def register(self, username: str, password: str) -> Dict[str, Any]:
        return self._request("POST", "/auth/register", json={"username": username, "password": password})

    def login(self, username: str, password: str) -> Dict[str, Any]:
        return self._request("POST", "/auth/login", json={"username": username, "password": password})

    def search(self, term: str) -> Dict[str, Any]:
        return self._request("POST", "/api/search", json={"term": term})

    def search_history(self) -> List[Dict[str, Any]]:
        return self._request("GET", "/api/search/history")

    def list_pokemon(self, limit: int = 20, offset: int = 0) -> Dict[str, Any]:
        return self._request("GET", "/api/pokemon", params={"limit": limit, "offset": offset})

    def get_pokemon(self, name_or_id: str) -> Dict[str, Any]:
        return self._request("GET", f"/api/pokemon/{quote(str(name_or_id), safe='')}")

    def _request(self, method: str, endpoint: str, **kwargs: Any) -> Any:
        headers: Dict[str, str] = {}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"

        try:
            response = self.http.request(
                method,
                f"{self.base_url}{endpoint}",
                headers=headers,
                timeout=self.timeout,
                **kwargs,
            )
        except Timeout as e:
            logger.error(f"{method} {endpoint} timed out")
            raise ApiError("The server took too long to respond") from e
        except RequestException as e:
            logger.error(f"{method} {endpoint} failed: {e}")
            raise ApiError("Cannot connect to the server") from e

        try:
            data = response.json()
        except ValueError:
            data = None

        if not response.ok:
            message = data.get("message") if isinstance(data, dict) else None
            raise ApiError(message or DEFAULT_ERROR_MESSAGE, status_code=response.status_code)
        if data is None:
            raise ApiError("Invalid response from the server", status_code=response.status_code)
        return data
