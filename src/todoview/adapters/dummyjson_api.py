"""DummyJSON todos adapter - HTTP client for the remote todo service."""

import logging

import requests

from todoview.config import Config, load_config
from todoview.errors import InvalidSourceData, NetworkError, RemoteError

logger = logging.getLogger(__name__)


class DummyJsonAdapter:
    """
    DummyJSON todos API adapter.

    Implements TodoRepository protocol. Translates transport and HTTP
    failures into the todoview error taxonomy. No business logic - just I/O.
    """

    def __init__(self, config: Config | None = None, session: requests.Session | None = None):
        self.config = config or load_config()
        self.base_url = self.config.api_base_url.rstrip("/")
        self._session = session or requests.Session()

    def _request(self, method: str, endpoint: str, **kwargs) -> requests.Response:
        """Send a request, mapping transport failures to NetworkError."""
        url = f"{self.base_url}{endpoint}"
        logger.debug(f"{method} {url}")
        try:
            return self._session.request(
                method, url, timeout=self.config.request_timeout, **kwargs
            )
        except requests.RequestException as e:
            logger.error(f"{method} {url} failed: {e}")
            raise NetworkError("Unable to connect to the API") from e

    def fetch_all(self) -> list[dict]:
        """Fetch every todo. `limit=0` asks the service for an unbounded page."""
        resp = self._request("GET", "/todos", params={"limit": 0})

        if not resp.ok:
            raise InvalidSourceData(f"HTTP error! status: {resp.status_code}")

        try:
            data = resp.json()
        except ValueError as e:
            raise InvalidSourceData("Response body is not JSON") from e

        if not isinstance(data, dict) or not isinstance(data.get("todos"), list):
            raise InvalidSourceData("Invalid response format from API")

        logger.info(f"Fetched {len(data['todos'])} remote todos")
        return data["todos"]

    def create(self, text: str, completed: bool, user_id: int) -> dict:
        """Create a todo. The service echoes it back with an assigned id."""
        resp = self._request(
            "POST",
            "/todos/add",
            json={"todo": text, "completed": completed, "userId": user_id},
        )

        if not resp.ok:
            body = resp.text or resp.reason or ""
            logger.error(f"Todo creation rejected: HTTP {resp.status_code}: {body}")
            raise RemoteError(resp.status_code, body)

        try:
            data = resp.json()
        except ValueError as e:
            raise InvalidSourceData("Created todo is not JSON") from e

        if not isinstance(data, dict):
            raise InvalidSourceData("Created todo is not an object")
        return data
