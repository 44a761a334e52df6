"""
JWT bearer authentication.

Tokens are signed elsewhere (an auth service, or `wordle-cli login` in dev);
this module only verifies them. Every failure surfaces as AuthError, and the
HTTP layer answers all of them with the same 401 so clients can't tell an
expired token from a forged one.
"""

import logging
import time
from dataclasses import dataclass
from typing import Any, Dict, Optional

import jwt
from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jwt.algorithms import get_default_algorithms

from .config import Settings
from .errors import AuthError, ConfigError
from .types import UserId

logger = logging.getLogger(__name__)

ALGORITHMS = {
    "secret": "HS256",
    "rsa": "RS256",
    "ed25519": "EdDSA",
}

REQUIRED_CLAIMS = ["exp", "iat", "sub"]


@dataclass(frozen=True)
class Identity:
    user_id: UserId
    username: str


class JwtVerifier:
    def __init__(self, auth_type: str, key: str, issuer: str = "", audience: str = "") -> None:
        algorithm = ALGORITHMS.get(auth_type)
        if algorithm is None:
            raise ConfigError(f"Unsupported JWT auth type: {auth_type}")
        if not key:
            raise ConfigError("JWT key material is empty")

        impl = get_default_algorithms().get(algorithm)
        if impl is None:
            # EdDSA/RS256 need the cryptography package
            raise ConfigError(f"JWT algorithm {algorithm} is not available")
        try:
            self._key = impl.prepare_key(key)
        except (ValueError, TypeError, jwt.InvalidKeyError) as e:
            raise ConfigError(f"Invalid {auth_type} key: {e}") from e

        self.algorithm = algorithm
        self.issuer = issuer
        self.audience = audience

    @classmethod
    def from_settings(cls, settings: Settings) -> "JwtVerifier":
        return cls(
            auth_type=settings.jwt_auth_type,
            key=settings.jwt_key,
            issuer=settings.jwt_issuer,
            audience=settings.jwt_audience,
        )

    def decode(self, token: str) -> Dict[str, Any]:
        try:
            return jwt.decode(
                token,
                self._key,
                algorithms=[self.algorithm],
                issuer=self.issuer or None,
                audience=self.audience or None,
                options={"require": REQUIRED_CLAIMS, "verify_aud": bool(self.audience)},
            )
        except jwt.PyJWTError as e:
            logger.debug("JWT verification failed: %r", e)
            raise AuthError("Invalid or expired token") from e

    def verify(self, token: str) -> Identity:
        claims = self.decode(token)

        subject = claims.get("sub")
        if not isinstance(subject, str) or not subject:
            logger.debug("JWT has no usable subject")
            raise AuthError("Invalid token subject")

        username = claims.get("username")
        if not isinstance(username, str) or not username:
            username = subject

        return Identity(user_id=subject, username=username)


def issue_token(
    secret: str,
    subject: str,
    username: str,
    issuer: str = "",
    audience: str = "",
    ttl_seconds: int = 60 * 60 * 24,
    now: Optional[int] = None,
) -> str:
    """Mint an HS256 token. For local development and tests only."""
    issued_at = int(time.time()) if now is None else now
    claims: Dict[str, Any] = {
        "sub": subject,
        "username": username,
        "iat": issued_at,
        "exp": issued_at + ttl_seconds,
        "roles": ["user"],
    }
    if issuer:
        claims["iss"] = issuer
    if audience:
        claims["aud"] = [audience]
    return jwt.encode(claims, secret, algorithm="HS256")


# --- FastAPI dependency ---

bearer_scheme = HTTPBearer(auto_error=False)


def require_identity(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> Identity:
    if credentials is None or not credentials.credentials:
        raise AuthError("Missing bearer token")
    verifier: JwtVerifier = request.app.state.verifier
    return verifier.verify(credentials.credentials)
