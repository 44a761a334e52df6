import pytest
import requests

from wordle.api_client import ApiError, WordleClient


class FakeResponse:
    def __init__(self, status_code=200, body=None, text="", reason="OK"):
        self.status_code = status_code
        self._body = body
        self.text = text
        self.reason = reason

    def json(self):
        if self._body is None:
            raise ValueError("no json")
        return self._body


class FakeSession:
    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.calls = []

    def request(self, method, url, **kwargs):
        self.calls.append((method, url, kwargs))
        if self.error is not None:
            raise self.error
        return self.response


def test_new_game_sends_bearer_token():
    session = FakeSession(FakeResponse(body={"id": "g1", "attemptsRemaining": 6}))
    client = WordleClient("http://api.test/", token="abc", session=session)

    assert client.new_game()["id"] == "g1"
    method, url, kwargs = session.calls[0]
    assert method == "POST"
    assert url == "http://api.test/api/game/new"
    assert kwargs["headers"] == {"Authorization": "Bearer abc"}


def test_guess_posts_word():
    session = FakeSession(FakeResponse(body={"id": "g1"}))
    WordleClient("http://api.test", token="abc", session=session).guess("g1", "crane")

    method, url, kwargs = session.calls[0]
    assert (method, url) == ("POST", "http://api.test/api/game/g1/guess")
    assert kwargs["json"] == {"word": "crane"}


def test_error_detail_becomes_api_error():
    session = FakeSession(FakeResponse(404, body={"detail": "Game not found"}, reason="Not Found"))
    client = WordleClient("http://api.test", token="abc", session=session)

    with pytest.raises(ApiError) as excinfo:
        client.get_game("nope")
    assert excinfo.value.status_code == 404
    assert excinfo.value.message == "Game not found"


def test_non_json_error_uses_body_text():
    session = FakeSession(FakeResponse(502, text="Bad gateway", reason="Bad Gateway"))
    with pytest.raises(ApiError) as excinfo:
        WordleClient("http://api.test", session=session).get_game("g1")
    assert excinfo.value.message == "Bad gateway"


def test_health_reports_connection_failure_as_false():
    down = FakeSession(error=requests.ConnectionError("refused"))
    up = FakeSession(FakeResponse(body={"status": "ok"}))

    assert WordleClient("http://api.test", session=down).health() is False
    assert WordleClient("http://api.test", session=up).health() is True
    # no token, no auth header
    assert up.calls[0][2]["headers"] == {}
