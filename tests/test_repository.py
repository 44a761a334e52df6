"""
Testing the SQLAlchemy repositories against in-memory SQLite.
"""
import pytest

from wordle.db import make_engine, make_session_factory
from wordle.entities import Game, User, utcnow
from wordle.errors import RepositoryInternal, RepositoryNotFound, RepositoryUnavailable
from wordle.models import GameRow, GuessRow
from wordle.repository import DBGameRepository, DBUserRepository


def test_game_round_trip_through_database(sessions, word_list):
    repo = DBGameRepository(sessions)
    game = Game.new("crane", "user-1")
    game.submit_guess("slate", word_list)
    game.submit_guess("crane", word_list)
    repo.save_game(game)

    loaded = repo.get_game(game.id)
    assert loaded == game


def test_save_game_is_an_upsert(sessions, word_list):
    repo = DBGameRepository(sessions)
    game = Game.new("crane", "user-1")
    repo.save_game(game)

    game.submit_guess("slate", word_list)
    repo.save_game(game)
    game.submit_guess("ghost", word_list)
    repo.save_game(game)

    loaded = repo.get_game(game.id)
    assert [g.word for g in loaded.guesses] == ["slate", "ghost"]
    assert loaded.attempts_remaining() == 4


def test_missing_game_and_clear(sessions):
    repo = DBGameRepository(sessions)
    with pytest.raises(RepositoryNotFound):
        repo.get_game("missing")

    first = Game.new("crane", "user-1")
    repo.save_game(first)
    repo.save_game(Game.new("crane", "user-2"))

    assert repo.clear_all_games() == 2
    with pytest.raises(RepositoryNotFound):
        repo.get_game(first.id)
    assert repo.clear_all_games() == 0


def test_user_repository_flow(sessions):
    repo = DBUserRepository(sessions)
    user = User.new("user-1", "alice")
    repo.save_user(user)
    repo.save_user(User.new("user-2", "bob"))

    assert repo.get_user("user-1") == user
    assert repo.update_user_current_game("user-1", "game-1") is True
    assert repo.update_user_current_game("nobody", "game-1") is False
    assert repo.get_user("user-1").current_game_id == "game-1"

    assert repo.reset_all_users_current_game() == 1
    assert repo.get_user("user-1").current_game_id is None
    assert repo.reset_all_users_current_game() == 0

    with pytest.raises(RepositoryNotFound):
        repo.get_user("nobody")


def test_corrupt_row_is_an_internal_error(sessions):
    now = utcnow()
    with sessions() as db, db.begin():
        db.add(GameRow(
            id="broken", user_id="user-1", word="crane", max_attempts=6, day=now.date(),
            completed=False, won=False, created_at=now, updated_at=now,
            guesses=[GuessRow(position=0, word="slate", results=["Bogus"] * 5, created_at=now)],
        ))

    with pytest.raises(RepositoryInternal):
        DBGameRepository(sessions).get_game("broken")


def test_unreachable_database_is_unavailable(tmp_path):
    engine = make_engine(f"sqlite+pysqlite:///{tmp_path}/no/such/dir/wordle.db")
    repo = DBUserRepository(make_session_factory(engine))

    with pytest.raises(RepositoryUnavailable):
        repo.get_user("user-1")
