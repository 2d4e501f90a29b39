"""Clients for external services."""

from wellcare.clients.api import ApiClient, ApiConfig
from wellcare.clients.errors import ApiError, HTTPError, InvalidResponseError, NetworkError

__all__ = ["ApiClient", "ApiConfig", "ApiError", "HTTPError", "InvalidResponseError", "NetworkError"]
