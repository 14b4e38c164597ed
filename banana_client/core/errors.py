"""Error taxonomy shared by the API layer, the services and the UI."""

from __future__ import annotations


class BananaClientError(Exception):
    """Base class for every error the client surfaces to the user."""

    retryable: bool = False


class InputValidationError(BananaClientError):
    """Raised when user input is rejected locally, before any network call."""


class ApiRejectedError(BananaClientError):
    """The server declined the request (wrong code, insufficient coins, ...)."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class NetworkError(BananaClientError):
    """Transient transport failure: connection refused, timeout or a 5xx answer."""

    retryable = True


class MalformedResponseError(BananaClientError):
    """The server answered with a payload that does not match the expected schema."""

    retryable = True


class SessionExpiredError(BananaClientError):
    """The access token could not be refreshed; the user must log in again."""
