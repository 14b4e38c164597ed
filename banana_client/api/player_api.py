"""Endpoint wrappers for the profile, play history and leaderboard views."""

from __future__ import annotations

from banana_client.api.http_client import ApiClient
from banana_client.api.schemas import GameHistoryEntry, LeaderboardEntry, Profile
from banana_client.constants.network_constants import HISTORY_PATH, LEADERBOARD_PATH, PROFILE_PATH


class PlayerApi:
    def __init__(self, client: ApiClient) -> None:
        self._client = client

    def get_profile(self) -> Profile:
        return self._client.request_model(Profile, "GET", PROFILE_PATH)

    def get_history(self) -> list[GameHistoryEntry]:
        return self._client.request_model_list(GameHistoryEntry, "GET", HISTORY_PATH)

    def get_leaderboard(self) -> list[LeaderboardEntry]:
        return self._client.request_model_list(LeaderboardEntry, "GET", LEADERBOARD_PATH)
