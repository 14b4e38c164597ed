"""JSON-over-HTTP transport with bearer authentication and one-shot token refresh."""

from __future__ import annotations

import logging
from typing import Any, TypeVar

import requests
from pydantic import BaseModel, ValidationError

from banana_client.api.schemas import RefreshedToken
from banana_client.config import config
from banana_client.constants.network_constants import TOKEN_REFRESH_PATH
from banana_client.core.errors import (
    ApiRejectedError,
    MalformedResponseError,
    NetworkError,
    SessionExpiredError,
)
from banana_client.core.services.player_session import PlayerSession

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


class ApiClient:
    """Thin request/response layer shared by every endpoint wrapper.

    A 401 on an authenticated request triggers exactly one token refresh and one
    retry. If the refresh itself fails the session is cleared and
    :class:`SessionExpiredError` is raised so the UI can send the user back to
    the login screen.
    """

    def __init__(
        self,
        session: PlayerSession,
        base_url: str | None = None,
        timeout: float | None = None,
        http: requests.Session | None = None,
    ) -> None:
        self._session = session
        self._base_url = (base_url or config.API_BASE_URL).rstrip("/")
        self._timeout = timeout if timeout is not None else config.REQUEST_TIMEOUT_SECONDS
        self._http = http or requests.Session()
        self._http.headers.update({"Content-Type": "application/json"})

    @property
    def session(self) -> PlayerSession:
        return self._session

    def request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        json: Any = None,
        authenticated: bool = True,
        bearer: str | None = None,
    ) -> Any:
        """Send a request and return the decoded JSON body (``None`` when empty).

        ``bearer`` sends an explicit token instead of the session's and disables
        the refresh-and-retry path.
        """
        if bearer is not None:
            response = self._send(method, path, params=params, json=json, authenticated=False, bearer=bearer)
            return self._decode(method, path, response)
        response = self._send(method, path, params=params, json=json, authenticated=authenticated)
        if response.status_code == 401 and authenticated:
            logger.info("%s %s returned 401; refreshing access token", method, path)
            self._refresh_access_token()
            response = self._send(method, path, params=params, json=json, authenticated=True)
        return self._decode(method, path, response)

    def request_model(self, model: type[ModelT], method: str, path: str, **kwargs: Any) -> ModelT:
        data = self.request(method, path, **kwargs)
        return parse_model(model, data)

    def request_model_list(
        self, model: type[ModelT], method: str, path: str, **kwargs: Any
    ) -> list[ModelT]:
        data = self.request(method, path, **kwargs)
        if not isinstance(data, list):
            raise MalformedResponseError(f"Expected a list from {path}.")
        return [parse_model(model, item) for item in data]

    def fetch_bytes(self, url: str) -> bytes:
        """Download a binary resource such as a puzzle image."""
        if url.startswith("/"):
            url = f"{self._base_url}{url}"
        try:
            response = self._http.get(url, timeout=self._timeout)
        except requests.RequestException as exc:
            logger.warning("GET %s failed: %s", url, exc)
            raise NetworkError("Could not download the puzzle image.") from exc
        if response.status_code >= 400:
            raise NetworkError(f"Could not download the puzzle image (HTTP {response.status_code}).")
        return response.content

    def _send(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None,
        json: Any,
        authenticated: bool,
        bearer: str | None = None,
    ) -> requests.Response:
        headers: dict[str, str] = {}
        token = bearer or (self._session.access_token if authenticated else None)
        if token:
            headers["Authorization"] = f"Bearer {token}"
        url = f"{self._base_url}{path}"
        logger.debug("%s %s", method, path)
        try:
            return self._http.request(
                method,
                url,
                params=params,
                json=json,
                headers=headers,
                timeout=self._timeout,
            )
        except requests.RequestException as exc:
            logger.warning("%s %s failed: %s", method, path, exc)
            raise NetworkError("Could not reach the game server.") from exc

    def _refresh_access_token(self) -> None:
        refresh_token = self._session.refresh_token
        if not refresh_token:
            self._expire_session()
            raise SessionExpiredError("Your session has expired. Please log in again.")
        try:
            response = self._send(
                "POST",
                TOKEN_REFRESH_PATH,
                params=None,
                json={"refresh": refresh_token},
                authenticated=False,
            )
            refreshed = parse_model(RefreshedToken, self._decode("POST", TOKEN_REFRESH_PATH, response))
        except (ApiRejectedError, NetworkError, MalformedResponseError) as exc:
            logger.warning("Token refresh failed: %s", exc)
            self._expire_session()
            raise SessionExpiredError("Your session has expired. Please log in again.") from exc
        self._session.set_tokens(refreshed.access)
        self._session.save()
        logger.info("Access token refreshed")

    def _expire_session(self) -> None:
        self._session.clear()

    @staticmethod
    def _decode(method: str, path: str, response: requests.Response) -> Any:
        status = response.status_code
        if status >= 500:
            logger.warning("%s %s returned %s", method, path, status)
            raise NetworkError(f"The game server had a problem (HTTP {status}).")
        body = _json_or_none(response)
        if status >= 400:
            message = _error_message(body) or f"Request failed (HTTP {status})."
            logger.info("%s %s rejected with %s: %s", method, path, status, message)
            raise ApiRejectedError(message, status_code=status)
        return body


def parse_model(model: type[ModelT], data: Any) -> ModelT:
    try:
        return model.model_validate(data)
    except ValidationError as exc:
        logger.warning("Unexpected %s payload: %s", model.__name__, exc)
        raise MalformedResponseError("The game server sent an unexpected response.") from exc


def _json_or_none(response: requests.Response) -> Any:
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return None


def _error_message(body: Any) -> str | None:
    if isinstance(body, dict):
        for key in ("error", "detail", "message"):
            value = body.get(key)
            if isinstance(value, str) and value:
                return value
        for value in body.values():
            # Field errors: {"username": ["already taken"]}
            if isinstance(value, list) and value and isinstance(value[0], str):
                return value[0]
    return None
