"""Errors raised by the patients API client."""


class ApiError(Exception):
    """Base class for every failed remote call.

    Screens catch this type, log it and show a generic alert; 404 and 500
    are deliberately treated the same.
    """

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code

    def __str__(self) -> str:
        if self.status_code is None:
            return self.message
        return f"{self.status_code}: {self.message}"


class NetworkError(ApiError):
    """The request never produced a response (connection refused, timeout, ...)."""


class HTTPError(ApiError):
    """The service answered with a non-2xx status."""

    def __init__(self, status_code: int, message: str):
        super().__init__(message, status_code=status_code)


class InvalidResponseError(ApiError):
    """The service answered 2xx but the body could not be decoded or validated."""
