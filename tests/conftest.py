"""
- A controllable clock so tests can move to "tomorrow"
- A fresh SessionCoordinator on in-memory stores per test
- A client fixture (TestClient) wired to that coordinator, plus token helpers
- SQLite in-memory sessions for the database repositories
"""
from datetime import date, timedelta
from typing import Callable, Dict

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool

from wordle.auth import issue_token
from wordle.bootstrap_db import create_all
from wordle.config import Settings
from wordle.coordinator import SessionCoordinator
from wordle.daily import DailyWordSelector
from wordle.db import make_session_factory
from wordle.main import create_app
from wordle.store import InMemoryGameStore, InMemoryUserStore
from wordle.words import WordList

TEST_SECRET = "test-secret-that-is-long-enough-for-hs256-signing"
TEST_ISSUER = "wordle"
TEST_AUDIENCE = "users"

TEST_WORDS = [
    "crane", "slate", "speed", "erase", "ghost",
    "plumb", "fjord", "nymph", "vexed", "waltz",
]


class FakeClock:
    """Callable returning a date we control."""

    def __init__(self, today: date) -> None:
        self.today = today

    def __call__(self) -> date:
        return self.today

    def advance(self, days: int = 1) -> None:
        self.today = self.today + timedelta(days=days)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(date(2024, 3, 7))


@pytest.fixture
def word_list() -> WordList:
    return WordList(TEST_WORDS)


@pytest.fixture
def selector(word_list, clock) -> DailyWordSelector:
    return DailyWordSelector(word_list, clock=clock)


@pytest.fixture
def game_store() -> InMemoryGameStore:
    return InMemoryGameStore()


@pytest.fixture
def user_store() -> InMemoryUserStore:
    return InMemoryUserStore()


@pytest.fixture
def coordinator(game_store, user_store, selector, clock) -> SessionCoordinator:
    return SessionCoordinator(game_store, user_store, selector, clock=clock)


@pytest.fixture
def todays_word(selector, clock) -> Callable[[], str]:
    return lambda: selector.word_for_date(clock())


@pytest.fixture
def settings() -> Settings:
    return Settings(jwt_key=TEST_SECRET, jwt_issuer=TEST_ISSUER, jwt_audience=TEST_AUDIENCE)


@pytest.fixture
def client(settings, coordinator) -> TestClient:
    # Talks to the app in-process; every request uses the coordinator above.
    return TestClient(create_app(settings, coordinator=coordinator))


@pytest.fixture
def make_token() -> Callable[..., str]:
    def _make(subject: str = "user-1", username: str = "alice", **kwargs) -> str:
        kwargs.setdefault("issuer", TEST_ISSUER)
        kwargs.setdefault("audience", TEST_AUDIENCE)
        return issue_token(TEST_SECRET, subject=subject, username=username, **kwargs)

    return _make


@pytest.fixture
def auth_headers(make_token) -> Callable[..., Dict[str, str]]:
    def _headers(subject: str = "user-1", username: str = "alice") -> Dict[str, str]:
        return {"Authorization": f"Bearer {make_token(subject, username)}"}

    return _headers


@pytest.fixture
def engine():
    # StaticPool + check_same_thread=False lets every session share ONE
    # in-memory SQLite database. Otherwise each connection would see an empty DB.
    engine = create_engine(
        "sqlite+pysqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def sessions(engine):
    return make_session_factory(engine)
