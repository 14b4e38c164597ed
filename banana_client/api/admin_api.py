"""Endpoint wrappers for the admin console."""

from __future__ import annotations

from banana_client.api.http_client import ApiClient
from banana_client.api.schemas import AdminStats, PlayerSummary, Puzzle, PuzzleDraft
from banana_client.constants.network_constants import (
    ADMIN_DELETE_PLAYER_PATH,
    ADMIN_DELETE_PUZZLE_PATH,
    ADMIN_PLAYERS_PATH,
    ADMIN_PUZZLES_PATH,
    ADMIN_STATS_PATH,
)


class AdminApi:
    def __init__(self, client: ApiClient) -> None:
        self._client = client

    def list_players(self) -> list[PlayerSummary]:
        return self._client.request_model_list(PlayerSummary, "GET", ADMIN_PLAYERS_PATH)

    def delete_player(self, player_id: int) -> None:
        self._client.request("DELETE", ADMIN_DELETE_PLAYER_PATH.format(player_id=player_id))

    def get_stats(self) -> AdminStats:
        return self._client.request_model(AdminStats, "GET", ADMIN_STATS_PATH)

    def create_puzzle(self, draft: PuzzleDraft) -> Puzzle:
        return self._client.request_model(
            Puzzle, "POST", ADMIN_PUZZLES_PATH, json=draft.model_dump()
        )

    def delete_puzzle(self, puzzle_id: int) -> None:
        self._client.request("DELETE", ADMIN_DELETE_PUZZLE_PATH.format(puzzle_id=puzzle_id))
