"""Two-step login (password, then emailed code), registration and logout."""

from __future__ import annotations

import logging

from banana_client.api.auth_api import AuthApi
from banana_client.api.schemas import LoginChallenge, RegisteredUser, UserRecord
from banana_client.constants.game_constants import OTP_CODE_LENGTH
from banana_client.core.errors import BananaClientError, InputValidationError
from banana_client.core.models import User
from banana_client.core.services.player_session import PlayerSession

logger = logging.getLogger(__name__)


def validate_otp_code(code: str) -> str:
    """Return the trimmed code or raise if it is not exactly six digits."""
    cleaned = code.strip()
    if len(cleaned) != OTP_CODE_LENGTH or not cleaned.isdigit():
        raise InputValidationError(f"Enter the {OTP_CODE_LENGTH}-digit code from your email.")
    return cleaned


def _require(value: str, label: str) -> str:
    cleaned = value.strip()
    if not cleaned:
        raise InputValidationError(f"{label} is required.")
    return cleaned


class AuthService:
    """Drives the login flow and owns writes of tokens into the player session."""

    def __init__(self, api: AuthApi, session: PlayerSession) -> None:
        self._api = api
        self._session = session

    def register(self, username: str, email: str, password: str) -> RegisteredUser:
        username = _require(username, "Username")
        email = _require(email, "Email")
        if "@" not in email:
            raise InputValidationError("Enter a valid email address.")
        if not password:
            raise InputValidationError("Password is required.")
        registered = self._api.register(username, email, password)
        logger.info("Registered account %s", registered.username)
        return registered

    def request_code(self, username: str, password: str) -> LoginChallenge:
        username = _require(username, "Username")
        if not password:
            raise InputValidationError("Password is required.")
        challenge = self._api.login(username, password)
        logger.info("Login code requested for %s", username)
        return challenge

    def verify_code(self, email: str, code: str) -> User:
        code = validate_otp_code(code)
        tokens = self._api.verify_otp(email, code)
        user = _user_from_record(tokens.user, email)
        self._session.set_tokens(tokens.access, tokens.refresh)
        self._session.set_user(user)
        self._session.save()
        logger.info("Logged in as %s (%s)", user.username or user.email, user.role)
        return user

    def end_session(self) -> str | None:
        """Clear the local session at once and return the token it held."""
        access_token = self._session.access_token
        self._session.clear()
        return access_token

    def revoke(self, access_token: str | None) -> None:
        """Tell the server about a logout; failures are logged, never raised."""
        if not access_token:
            return
        try:
            self._api.logout(access_token)
        except BananaClientError as exc:
            logger.warning("Logout request failed: %s", exc)

    def logout(self) -> None:
        self.revoke(self.end_session())


def _user_from_record(record: UserRecord | None, email: str) -> User:
    # Missing balances stay at zero; the next confirmed response fills them in.
    if record is None:
        return User(id=0, username="", email=email)
    return User(
        id=record.id,
        username=record.username,
        email=record.email or email,
        role=record.role or "player",
        score=record.score or 0,
        coins=record.coins or 0,
    )
