"""Runtime configuration loaded from the environment (and an optional .env file)."""

from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv

from banana_client.constants.about import APP_NAME
from banana_client.constants.network_constants import (
    DEFAULT_API_BASE_URL,
    DEFAULT_REQUEST_TIMEOUT_SECONDS,
)

load_dotenv()


class Configurations:
    APP_NAME: str = APP_NAME
    API_BASE_URL: str = os.getenv("BANANA_API_BASE_URL", DEFAULT_API_BASE_URL).rstrip("/")
    REQUEST_TIMEOUT_SECONDS: float = float(
        os.getenv("BANANA_REQUEST_TIMEOUT", str(DEFAULT_REQUEST_TIMEOUT_SECONDS))
    )
    SESSION_FILE: Path = Path(
        os.getenv("BANANA_SESSION_FILE", str(Path.home() / ".banana_monkey" / "session.json"))
    )
    LOG_LEVEL: str = os.getenv("BANANA_LOG_LEVEL", "INFO").upper()


config = Configurations()
