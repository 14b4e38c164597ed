"""Endpoint wrappers for the game round: question, answer and power-ups."""

from __future__ import annotations

from banana_client.api.http_client import ApiClient
from banana_client.api.schemas import AnswerResult, DoublePointsResult, FreezeResult, Question
from banana_client.constants.network_constants import (
    ANSWER_PATH,
    DOUBLE_POINTS_PATH,
    FREEZE_TIMER_PATH,
    QUESTION_PATH,
)


class GameApi:
    """Blocking calls used by the round controller (always through a request runner)."""

    def __init__(self, client: ApiClient) -> None:
        self._client = client

    def get_question(self, difficulty: str) -> Question:
        return self._client.request_model(
            Question, "GET", QUESTION_PATH, params={"difficulty": difficulty}
        )

    def submit_answer(self, puzzle_id: str, answer: str, time_taken: int) -> AnswerResult:
        return self._client.request_model(
            AnswerResult,
            "POST",
            ANSWER_PATH,
            json={"puzzle_id": puzzle_id, "answer": answer, "time_taken": time_taken},
        )

    def freeze_timer(self, puzzle_id: str, freeze_seconds: int) -> FreezeResult:
        return self._client.request_model(
            FreezeResult,
            "POST",
            FREEZE_TIMER_PATH,
            json={"puzzle_id": puzzle_id, "freeze_seconds": freeze_seconds},
        )

    def double_points(self, puzzle_id: str) -> DoublePointsResult:
        return self._client.request_model(
            DoublePointsResult, "POST", DOUBLE_POINTS_PATH, json={"puzzle_id": puzzle_id}
        )

    def fetch_image(self, image_url: str) -> bytes:
        return self._client.fetch_bytes(image_url)
