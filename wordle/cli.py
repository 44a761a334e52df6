"""
Demo command-line client: `wordle-cli`.

    wordle-cli login --username alice     # mint a local dev token (needs JWT_SECRET)
    wordle-cli new                        # create/fetch today's game
    wordle-cli guess --word crane
    wordle-cli status
    wordle-cli play                       # interactive loop

Token, user id and the last game id are kept in ~/.wordle/config.json.
"""

import argparse
import json
import os
import sys
import uuid
from pathlib import Path
from typing import Any, Dict, List, Optional

import requests
from dotenv import load_dotenv

from .api_client import ApiError, WordleClient
from .auth import issue_token

DEFAULT_API_URL = "http://localhost:8080"
DEFAULT_STATE_FILE = Path.home() / ".wordle" / "config.json"

# Correct -> [A], WrongPosition -> (a), Wrong -> a
MARKS = {
    "Correct": "[{}]",
    "WrongPosition": "({})",
    "Wrong": " {} ",
}


# --- Local state ---

def load_state(path: Path) -> Dict[str, Any]:
    if not path.exists():
        return {}
    with path.open("r", encoding="utf-8") as f:
        return json.load(f)


def save_state(path: Path, state: Dict[str, Any]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as f:
        json.dump(state, f, indent=2)
    os.chmod(path, 0o600)  # holds a bearer token


# --- Rendering ---

def format_guess(guess: Dict[str, Any]) -> str:
    cells = []
    for letter, result in zip(guess["word"], guess["results"]):
        shown = letter.upper() if result == "Correct" else letter
        cells.append(MARKS.get(result, " {} ").format(shown))
    return "".join(cells)


def format_game(game: Dict[str, Any]) -> str:
    lines = [f"Game {game['id']}"]
    for guess in game.get("guesses", []):
        lines.append("  " + format_guess(guess))
    if game.get("completed"):
        outcome = "You won!" if game.get("won") else "Out of attempts."
        lines.append(f"{outcome} The word was: {game.get('word', '?')}")
    else:
        lines.append(f"Attempts remaining: {game['attemptsRemaining']}")
    return "\n".join(lines)


# --- Commands ---

def cmd_login(args, state: Dict[str, Any]) -> int:
    secret = os.getenv("JWT_SECRET")
    if not secret:
        print("JWT_SECRET must be set to mint a local token.", file=sys.stderr)
        return 1

    username = args.username or input("Username: ").strip()
    if not username:
        print("Username is required.", file=sys.stderr)
        return 1

    user_id = str(uuid.uuid4())
    state.update(
        token=issue_token(
            secret,
            subject=user_id,
            username=username,
            issuer=os.getenv("JWT_ISSUER", "wordle"),
            audience=os.getenv("JWT_AUDIENCE", "users"),
        ),
        user_id=user_id,
        username=username,
        current_game_id=None,
    )
    print(f"Logged in as {username} ({user_id})")
    return 0


def cmd_health(client: WordleClient, args, state: Dict[str, Any]) -> int:
    healthy = client.health()
    print("Server is healthy" if healthy else "Server is not reachable")
    return 0 if healthy else 1


def cmd_new(client: WordleClient, args, state: Dict[str, Any]) -> int:
    game = client.new_game()
    state["current_game_id"] = game["id"]
    print(format_game(game))
    return 0


def _game_id(args, state: Dict[str, Any]) -> Optional[str]:
    game_id = getattr(args, "game_id", None) or state.get("current_game_id")
    if not game_id:
        print("No game yet. Run `wordle-cli new` first.", file=sys.stderr)
    return game_id


def cmd_status(client: WordleClient, args, state: Dict[str, Any]) -> int:
    game_id = _game_id(args, state)
    if not game_id:
        return 1
    print(format_game(client.get_game(game_id)))
    return 0


def cmd_guess(client: WordleClient, args, state: Dict[str, Any]) -> int:
    game_id = _game_id(args, state)
    if not game_id:
        return 1
    print(format_game(client.guess(game_id, args.word)))
    return 0


def cmd_play(client: WordleClient, args, state: Dict[str, Any]) -> int:
    game = client.new_game()
    state["current_game_id"] = game["id"]
    print(format_game(game))

    while not game["completed"]:
        try:
            word = input("Guess: ").strip()
        except EOFError:
            print()
            return 0
        if not word:
            continue
        try:
            game = client.guess(game["id"], word)
        except ApiError as e:
            if e.status_code != 400:
                raise
            print(e.message)
            continue
        print(format_game(game))
    return 0


COMMANDS = {
    "health": cmd_health,
    "new": cmd_new,
    "status": cmd_status,
    "guess": cmd_guess,
    "play": cmd_play,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="wordle-cli", description="Play the daily Wordle from your terminal")
    parser.add_argument("--api-url", default=os.getenv("WORDLE_API_URL", DEFAULT_API_URL))
    parser.add_argument("--state-file", type=Path, default=DEFAULT_STATE_FILE)
    parser.add_argument("--insecure", action="store_true", help="skip TLS certificate verification")

    sub = parser.add_subparsers(dest="command", required=True)

    login = sub.add_parser("login", help="mint a local development token")
    login.add_argument("-u", "--username")

    sub.add_parser("health", help="check the server is up")
    sub.add_parser("new", help="start (or fetch) today's game")
    sub.add_parser("play", help="play today's game interactively")

    status = sub.add_parser("status", help="show a game")
    status.add_argument("-g", "--game-id")

    guess = sub.add_parser("guess", help="submit a guess")
    guess.add_argument("-w", "--word", required=True)
    guess.add_argument("-g", "--game-id")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    load_dotenv()
    args = build_parser().parse_args(argv)
    state = load_state(args.state_file)

    if args.command == "login":
        code = cmd_login(args, state)
    else:
        if args.command != "health" and not state.get("token"):
            print("Not logged in. Run `wordle-cli login` first.", file=sys.stderr)
            return 1
        client = WordleClient(args.api_url, token=state.get("token"), verify=not args.insecure)
        try:
            code = COMMANDS[args.command](client, args, state)
        except ApiError as e:
            print(f"Error {e.status_code}: {e.message}", file=sys.stderr)
            return 1
        except requests.RequestException as e:
            print(f"Could not reach {args.api_url}: {e}", file=sys.stderr)
            return 1

    save_state(args.state_file, state)
    return code


if __name__ == "__main__":
    sys.exit(main())
