import pytest
import requests

from banana_client.api.auth_api import AuthApi
from banana_client.api.game_api import GameApi
from banana_client.api.http_client import ApiClient
from banana_client.api.player_api import PlayerApi
from banana_client.core.errors import (
    ApiRejectedError,
    MalformedResponseError,
    NetworkError,
    SessionExpiredError,
)

BASE_URL = "http://game.test"

QUESTION_BODY = {
    "puzzle_id": 12,
    "image_url": "/media/puzzles/12.png",
    "difficulty": "medium",
    "points_value": 15,
}


@pytest.fixture()
def client(session, http):
    return ApiClient(session, base_url=BASE_URL + "/", timeout=2.0, http=http)


def test_sends_bearer_token_and_parses_question(client, http):
    http.queue(200, QUESTION_BODY)

    question = GameApi(client).get_question("medium")

    call = http.calls[0]
    assert call["method"] == "GET"
    assert call["url"] == f"{BASE_URL}/api/game/question/"
    assert call["params"] == {"difficulty": "medium"}
    assert call["headers"]["Authorization"] == "Bearer access-1"
    assert question.puzzle_id == "12"
    assert question.points_value == 15


def test_401_refreshes_once_and_retries(client, http, session):
    http.queue(401, {"detail": "Token expired"})
    http.queue(200, {"access": "access-2"})
    http.queue(200, QUESTION_BODY)

    GameApi(client).get_question("medium")

    assert [c["url"] for c in http.calls] == [
        f"{BASE_URL}/api/game/question/",
        f"{BASE_URL}/api/token/refresh/",
        f"{BASE_URL}/api/game/question/",
    ]
    assert http.calls[1]["json"] == {"refresh": "refresh-1"}
    assert "Authorization" not in http.calls[1]["headers"]
    assert http.calls[2]["headers"]["Authorization"] == "Bearer access-2"
    assert session.access_token == "access-2"
    assert session.refresh_token == "refresh-1"


def test_second_401_after_refresh_is_not_retried_again(client, http):
    http.queue(401, {"detail": "Token expired"})
    http.queue(200, {"access": "access-2"})
    http.queue(401, {"detail": "Still not allowed"})

    with pytest.raises(ApiRejectedError) as exc_info:
        GameApi(client).get_question("medium")

    assert exc_info.value.status_code == 401
    assert len(http.calls) == 3


def test_failed_refresh_expires_session(client, http, session):
    http.queue(401, {"detail": "Token expired"})
    http.queue(401, {"detail": "Refresh token invalid"})

    with pytest.raises(SessionExpiredError):
        GameApi(client).get_question("medium")

    assert session.access_token is None
    assert session.user is None
    assert not session.is_authenticated()


def test_missing_refresh_token_expires_session(client, http, session):
    session.clear()
    session.set_tokens("stale")
    http.queue(401, {"detail": "Token expired"})

    with pytest.raises(SessionExpiredError):
        GameApi(client).get_question("medium")

    assert len(http.calls) == 1


def test_client_error_surfaces_server_message(client, http):
    http.queue(400, {"error": "Puzzle already answered"})

    with pytest.raises(ApiRejectedError) as exc_info:
        GameApi(client).submit_answer("12", "banana", 4)

    assert exc_info.value.message == "Puzzle already answered"
    assert exc_info.value.status_code == 400
    assert not exc_info.value.retryable


def test_field_errors_are_used_as_message(client, http):
    http.queue(400, {"username": ["A user with that username already exists."]})

    with pytest.raises(ApiRejectedError, match="already exists"):
        client.request("POST", "/api/register/", json={}, authenticated=False)


def test_server_error_is_retryable_network_error(client, http):
    http.queue(502)

    with pytest.raises(NetworkError) as exc_info:
        GameApi(client).get_question("easy")

    assert exc_info.value.retryable


def test_connection_failure_maps_to_network_error(client, http):
    http.queue_error(requests.ConnectionError("refused"))

    with pytest.raises(NetworkError):
        GameApi(client).get_question("easy")


def test_malformed_payload(client, http):
    http.queue(200, {"puzzle_id": "1", "difficulty": "legendary"})

    with pytest.raises(MalformedResponseError):
        GameApi(client).get_question("easy")


def test_list_endpoint_requires_a_list(client, http):
    http.queue(200, {"results": []})

    with pytest.raises(MalformedResponseError):
        PlayerApi(client).get_leaderboard()


def test_fetch_bytes_resolves_relative_urls(client, http):
    response = requests.Response()
    response.status_code = 200
    response._content = b"\x89PNG"
    http.replies.append(response)

    data = client.fetch_bytes("/media/puzzles/12.png")

    assert data == b"\x89PNG"
    assert http.calls[0]["url"] == f"{BASE_URL}/media/puzzles/12.png"


def test_fetch_bytes_http_error(client, http):
    http.queue(404)

    with pytest.raises(NetworkError):
        client.fetch_bytes("http://cdn.test/missing.png")


def test_logout_uses_captured_token_without_refresh(client, http, session):
    session.clear()
    http.queue(401, {"detail": "Token expired"})

    with pytest.raises(ApiRejectedError):
        AuthApi(client).logout("access-old")

    assert len(http.calls) == 1
    assert http.calls[0]["url"] == f"{BASE_URL}/api/logout/"
    assert http.calls[0]["headers"]["Authorization"] == "Bearer access-old"
