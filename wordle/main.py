'''
Daily Wordle API

Endpoints:
POST /api/game/new          -> create (or return) today's game for the caller
GET  /api/game/{id}         -> read game state
POST /api/game/{id}/guess   -> submit a guess
GET  /api/health            -> liveness probe (no auth)

All /api/game routes need "Authorization: Bearer <jwt>".
'''

import logging
from typing import Optional, Tuple

from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .auth import Identity, JwtVerifier, require_identity
from .bootstrap_db import create_all
from .config import Settings, load_settings
from .coordinator import SessionCoordinator
from .daily import DailyWordSelector
from .db import make_engine, make_session_factory
from .errors import (
    AuthError,
    GameAlreadyCompleted,
    GameNotFound,
    InvalidWord,
    RepositoryNotFound,
    RepositoryUnavailable,
    WordleError,
)
from .repository import DBGameRepository, DBUserRepository, GameRepository, UserRepository
from .schemas import GameOut, GuessRequest, HealthOut
from .store import InMemoryGameStore, InMemoryUserStore
from .words import default_word_list, load_word_list

logger = logging.getLogger(__name__)


# --- Wiring ---

def build_repositories(settings: Settings) -> Tuple[GameRepository, UserRepository]:
    if not settings.database_enabled:
        logger.info("Using in-memory repositories")
        return InMemoryGameStore(), InMemoryUserStore()

    engine = make_engine(settings.database_url)
    # Dev convenience: auto-create tables locally
    if settings.app_env == "local":
        create_all(engine)
    sessions = make_session_factory(engine)
    logger.info("Using database repositories (%s)", engine.url.render_as_string(hide_password=True))
    return DBGameRepository(sessions), DBUserRepository(sessions)


def build_coordinator(settings: Settings) -> SessionCoordinator:
    if settings.word_list_file:
        word_list = load_word_list(settings.word_list_file)
        logger.info("Loaded %d words from %s", len(word_list), settings.word_list_file)
    else:
        word_list = default_word_list()

    games, users = build_repositories(settings)
    return SessionCoordinator(
        games=games,
        users=users,
        selector=DailyWordSelector(word_list),
        max_attempts=settings.max_attempts,
    )


def get_coordinator(request: Request) -> SessionCoordinator:
    return request.app.state.coordinator


# --- Error mapping ---

GENERIC_AUTH_MESSAGE = "Invalid or missing credentials"


def _status_and_message(exc: WordleError) -> Tuple[int, str]:
    if isinstance(exc, (GameAlreadyCompleted, InvalidWord)):
        return 400, str(exc)
    if isinstance(exc, (GameNotFound, RepositoryNotFound)):
        return 404, "Game not found"
    if isinstance(exc, AuthError):
        return 401, GENERIC_AUTH_MESSAGE
    if isinstance(exc, RepositoryUnavailable):
        return 503, "Service unavailable"
    return 500, "Internal server error"


async def wordle_error_handler(request: Request, exc: WordleError) -> JSONResponse:
    status, message = _status_and_message(exc)
    headers = None
    if status == 401:
        headers = {"WWW-Authenticate": "Bearer"}
    elif status >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc, exc_info=exc)
    return JSONResponse(status_code=status, content={"detail": message}, headers=headers)


# --- App ---

def create_app(
    settings: Optional[Settings] = None,
    coordinator: Optional[SessionCoordinator] = None,
    verifier: Optional[JwtVerifier] = None,
) -> FastAPI:
    if settings is None:
        settings = load_settings()

    app = FastAPI(title="Daily Wordle API", version="1.0.0")

    # Allow everything so browser front-ends and the docs work easily
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(WordleError, wordle_error_handler)

    app.state.settings = settings
    app.state.coordinator = coordinator or build_coordinator(settings)
    app.state.verifier = verifier or JwtVerifier.from_settings(settings)

    # ---------------- Routes ----------------

    @app.get("/api/health", response_model=HealthOut, summary="Health check")
    def health() -> HealthOut:
        return HealthOut()

    @app.post(
        "/api/game/new",
        response_model=GameOut,
        response_model_exclude_none=True,
        summary="Create or return today's game",
    )
    def create_game(
        identity: Identity = Depends(require_identity),
        coordinator: SessionCoordinator = Depends(get_coordinator),
    ) -> GameOut:
        logger.info("Creating new game for user: %s (%s)", identity.username, identity.user_id)
        game = coordinator.get_or_create_today_game(identity.user_id, identity.username)
        return GameOut.from_game(game)

    @app.get(
        "/api/game/{game_id}",
        response_model=GameOut,
        response_model_exclude_none=True,
        summary="Get game state",
    )
    def get_game(
        game_id: str,
        identity: Identity = Depends(require_identity),
        coordinator: SessionCoordinator = Depends(get_coordinator),
    ) -> GameOut:
        return GameOut.from_game(coordinator.fetch_game(identity.user_id, game_id))

    @app.post(
        "/api/game/{game_id}/guess",
        response_model=GameOut,
        response_model_exclude_none=True,
        summary="Submit a guess",
    )
    def make_guess(
        game_id: str,
        payload: GuessRequest,
        identity: Identity = Depends(require_identity),
        coordinator: SessionCoordinator = Depends(get_coordinator),
    ) -> GameOut:
        game = coordinator.submit_guess(identity.user_id, game_id, payload.word)
        return GameOut.from_game(game)

    logger.info("Wordle API ready")
    return app
