"""Owned session state: bearer tokens plus the mirrored player record."""

from __future__ import annotations

import json
import logging
from dataclasses import asdict
from pathlib import Path
from threading import Lock

from banana_client.core.models import User

logger = logging.getLogger(__name__)


class PlayerSession:
    """Tokens and user record for the logged-in player.

    ``score`` and ``coins`` are a cache of server-authoritative values. They only
    change through :meth:`apply_authoritative` (or a fresh login), always with
    numbers the server returned.
    """

    def __init__(self, storage_path: Path | None = None) -> None:
        self._lock = Lock()
        self._storage_path = storage_path
        self._access_token: str | None = None
        self._refresh_token: str | None = None
        self._user: User | None = None

    # --- Tokens ---

    @property
    def access_token(self) -> str | None:
        with self._lock:
            return self._access_token

    @property
    def refresh_token(self) -> str | None:
        with self._lock:
            return self._refresh_token

    def set_tokens(self, access: str, refresh: str | None = None) -> None:
        with self._lock:
            self._access_token = access
            if refresh is not None:
                self._refresh_token = refresh

    def is_authenticated(self) -> bool:
        with self._lock:
            return self._access_token is not None and self._user is not None

    # --- User record ---

    @property
    def user(self) -> User | None:
        with self._lock:
            if self._user is None:
                return None
            return User(**asdict(self._user))

    def set_user(self, user: User) -> None:
        with self._lock:
            self._user = user

    def is_admin(self) -> bool:
        with self._lock:
            return self._user is not None and self._user.is_admin

    @property
    def coins(self) -> int:
        with self._lock:
            return self._user.coins if self._user else 0

    @property
    def score(self) -> int:
        with self._lock:
            return self._user.score if self._user else 0

    def apply_authoritative(self, *, score: int | None = None, coins: int | None = None) -> None:
        """Overwrite mirrored values with numbers confirmed by the server."""
        with self._lock:
            if self._user is None:
                return
            if score is not None:
                self._user.score = score
            if coins is not None:
                self._user.coins = coins

    # --- Persistence ---

    def save(self) -> None:
        if self._storage_path is None:
            return
        with self._lock:
            document = {
                "access_token": self._access_token,
                "refresh_token": self._refresh_token,
                "user": asdict(self._user) if self._user else None,
            }
            path = self._storage_path
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(json.dumps(document, indent=2), encoding="utf-8")

    @classmethod
    def load(cls, storage_path: Path | None) -> PlayerSession:
        """Restore a saved session; an unreadable file yields an empty session."""
        session = cls(storage_path)
        if storage_path is None or not storage_path.exists():
            return session
        try:
            document = json.loads(storage_path.read_text(encoding="utf-8"))
            user_data = document.get("user")
            access = document.get("access_token")
            if user_data and access:
                session._user = User(**user_data)
                session._access_token = access
                session._refresh_token = document.get("refresh_token")
        except (OSError, ValueError, TypeError) as exc:
            logger.warning("Discarding unreadable session file %s: %s", storage_path, exc)
            return cls(storage_path)
        return session

    def clear(self) -> None:
        with self._lock:
            self._access_token = None
            self._refresh_token = None
            self._user = None
            if self._storage_path is not None:
                self._storage_path.unlink(missing_ok=True)
