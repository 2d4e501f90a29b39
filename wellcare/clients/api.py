"""HTTP client for the patients REST service."""

import os
from dataclasses import dataclass
from typing import Any

import httpx

from wellcare.clients.errors import HTTPError, InvalidResponseError, NetworkError
from wellcare.utils.logging import get_logger

logger = get_logger(__name__)

# Android emulator alias for the host machine, where the service usually runs
DEFAULT_BASE_URL = "http://10.0.2.2:5000/api"


@dataclass
class ApiConfig:
    """Configuration for the patients API client."""

    base_url: str = DEFAULT_BASE_URL
    timeout: float | None = None

    @classmethod
    def from_env(cls) -> "ApiConfig":
        """Build a config from WELLCARE_API_URL, falling back to the default host."""
        return cls(base_url=os.getenv("WELLCARE_API_URL", DEFAULT_BASE_URL))


class ApiClient:
    """Thin async wrapper around the patients REST service.

    Every call returns the decoded JSON body (``None`` for an empty body) or
    raises an ApiError subclass. There is no retry, backoff or auth.
    """

    def __init__(self, config: ApiConfig | None = None, client: httpx.AsyncClient | None = None):
        """Initialize API client.

        Args:
            config: Client configuration
            client: Pre-built httpx client (tests inject an ASGI transport)
        """
        self.config = config or ApiConfig()
        self._owns_client = client is None
        self.client = client or httpx.AsyncClient(timeout=self.config.timeout)

    async def __aenter__(self) -> "ApiClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the underlying httpx client if this instance created it."""
        if self._owns_client:
            await self.client.aclose()

    def url_for(self, path: str) -> str:
        """Join a route path onto the configured base URL."""
        return f"{self.config.base_url.rstrip('/')}/{path.lstrip('/')}"

    async def get(self, path: str) -> Any:
        return await self._request("GET", path)

    async def post(self, path: str, body: dict[str, Any]) -> Any:
        return await self._request("POST", path, body)

    async def put(self, path: str, body: dict[str, Any]) -> Any:
        return await self._request("PUT", path, body)

    async def delete(self, path: str) -> Any:
        return await self._request("DELETE", path)

    async def _request(self, method: str, path: str, body: dict[str, Any] | None = None) -> Any:
        """Issue a single request and decode the response."""
        url = self.url_for(path)
        logger.debug(f"{method} {url}")

        try:
            response = await self.client.request(method, url, json=body)
        except httpx.TimeoutException as e:
            logger.warning(f"{method} {url} timed out: {e}")
            raise NetworkError(f"Request to {url} timed out") from e
        except httpx.TransportError as e:
            logger.warning(f"{method} {url} failed: {e}")
            raise NetworkError(f"Failed to reach {url}: {e}") from e

        if response.is_error:
            message = self._error_message(response)
            logger.warning(f"{method} {url} returned {response.status_code}: {message}")
            raise HTTPError(response.status_code, message)

        if not response.content:
            return None

        try:
            return response.json()
        except ValueError as e:
            raise InvalidResponseError(f"Invalid JSON from {url}", status_code=response.status_code) from e

    @staticmethod
    def _error_message(response: httpx.Response) -> str:
        """Pull a human-readable message out of an error response."""
        try:
            data = response.json()
        except ValueError:
            data = None

        if isinstance(data, dict):
            for key in ("message", "error", "detail"):
                if isinstance(data.get(key), str) and data[key]:
                    return data[key]

        return response.text or response.reason_phrase
