"""Endpoint wrappers for registration and the two-step login."""

from __future__ import annotations

from banana_client.api.http_client import ApiClient
from banana_client.api.schemas import AuthTokens, LoginChallenge, RegisteredUser
from banana_client.constants.network_constants import (
    LOGIN_PATH,
    LOGOUT_PATH,
    REGISTER_PATH,
    VERIFY_OTP_PATH,
)


class AuthApi:
    def __init__(self, client: ApiClient) -> None:
        self._client = client

    def register(self, username: str, email: str, password: str) -> RegisteredUser:
        return self._client.request_model(
            RegisteredUser,
            "POST",
            REGISTER_PATH,
            json={"username": username, "email": email, "password": password},
            authenticated=False,
        )

    def login(self, username: str, password: str) -> LoginChallenge:
        """First step: the server checks the password and emails a one-time code."""
        return self._client.request_model(
            LoginChallenge,
            "POST",
            LOGIN_PATH,
            json={"username": username, "password": password},
            authenticated=False,
        )

    def verify_otp(self, email: str, otp: str) -> AuthTokens:
        return self._client.request_model(
            AuthTokens,
            "POST",
            VERIFY_OTP_PATH,
            json={"email": email, "otp": otp},
            authenticated=False,
        )

    def logout(self, access_token: str) -> None:
        """Revoke ``access_token``; sent with that token even if the session is already cleared."""
        self._client.request("POST", LOGOUT_PATH, bearer=access_token)
