"""
Settings read from the environment (and a local .env if present).

Dev convenience: load_dotenv() fills in anything missing from a .env file; in
prod the platform injects real env vars.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from .errors import ConfigError

JWT_AUTH_TYPES = ("secret", "rsa", "ed25519")


def _get_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None or value.strip() == "":
        return default
    v = value.strip().lower()
    if v in ("1", "true", "yes", "on"):
        return True
    if v in ("0", "false", "no", "off"):
        return False
    raise ConfigError(f"Environment variable {name} must be a boolean, got '{value}'")


def _get_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None or value.strip() == "":
        return default
    try:
        return int(value)
    except ValueError:
        raise ConfigError(f"Environment variable {name} must be an integer, got '{value}'") from None


@dataclass(frozen=True)
class Settings:
    app_env: str = "local"
    host: str = "0.0.0.0"
    port: int = 8080

    # JWT: "secret" uses jwt_key as a shared HMAC secret, "rsa"/"ed25519" as a PEM public key
    jwt_auth_type: str = "secret"
    jwt_key: str = ""
    jwt_issuer: str = "wordle"
    jwt_audience: str = "users"

    tls_enabled: bool = False
    tls_cert_file: str = "keys/cert.pem"
    tls_key_file: str = "keys/key.pem"

    database_enabled: bool = False
    database_url: str = "sqlite+pysqlite:///wordle.db"

    max_attempts: int = 6
    word_list_file: Optional[str] = None

    log_level: str = "INFO"
    log_dir: Optional[str] = None


def _load_jwt_key(auth_type: str) -> str:
    if auth_type == "secret":
        secret = os.getenv("JWT_SECRET", "")
        if not secret:
            raise ConfigError("JWT_SECRET is not set. Add it to your environment or a local .env.")
        return secret

    key = os.getenv("JWT_PUBLIC_KEY", "")
    if key:
        return key
    key_file = os.getenv("JWT_PUBLIC_KEY_FILE", "keys/jwt/public.pem")
    try:
        return Path(key_file).read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Failed to read JWT public key from {key_file}: {e}") from e


def load_settings() -> Settings:
    load_dotenv()

    auth_type = os.getenv("JWT_AUTH_TYPE", "secret").strip().lower()
    if auth_type not in JWT_AUTH_TYPES:
        raise ConfigError(f"Unsupported JWT_AUTH_TYPE '{auth_type}', expected one of {JWT_AUTH_TYPES}")

    port = _get_int("PORT", 8080)
    if not 0 < port < 65536:
        raise ConfigError(f"PORT out of range: {port}")

    max_attempts = _get_int("MAX_ATTEMPTS", 6)
    if max_attempts < 1:
        raise ConfigError("MAX_ATTEMPTS must be at least 1")

    return Settings(
        app_env=os.getenv("APP_ENV", "local"),
        host=os.getenv("HOST", "0.0.0.0"),
        port=port,
        jwt_auth_type=auth_type,
        jwt_key=_load_jwt_key(auth_type),
        jwt_issuer=os.getenv("JWT_ISSUER", "wordle"),
        jwt_audience=os.getenv("JWT_AUDIENCE", "users"),
        tls_enabled=_get_bool("TLS_ENABLED", False),
        tls_cert_file=os.getenv("TLS_CERT_FILE", "keys/cert.pem"),
        tls_key_file=os.getenv("TLS_KEY_FILE", "keys/key.pem"),
        database_enabled=_get_bool("DATABASE_ENABLED", False),
        database_url=os.getenv("DATABASE_URL", "sqlite+pysqlite:///wordle.db"),
        max_attempts=max_attempts,
        word_list_file=os.getenv("WORD_LIST_FILE") or None,
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        log_dir=os.getenv("LOG_DIR") or None,
    )
