"""
Testing JWT verification.
"""
import time

import jwt
import pytest
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PrivateKey

from wordle.auth import JwtVerifier, issue_token
from wordle.errors import AuthError, ConfigError

from conftest import TEST_AUDIENCE, TEST_ISSUER, TEST_SECRET


@pytest.fixture
def verifier() -> JwtVerifier:
    return JwtVerifier("secret", TEST_SECRET, issuer=TEST_ISSUER, audience=TEST_AUDIENCE)


def test_valid_token_yields_identity(verifier, make_token):
    identity = verifier.verify(make_token("user-1", "alice"))
    assert identity.user_id == "user-1"
    assert identity.username == "alice"


def test_missing_username_falls_back_to_subject(verifier):
    now = int(time.time())
    token = jwt.encode(
        {"sub": "user-9", "iat": now, "exp": now + 60, "iss": TEST_ISSUER, "aud": TEST_AUDIENCE},
        TEST_SECRET,
        algorithm="HS256",
    )
    assert verifier.verify(token).username == "user-9"


@pytest.mark.parametrize(
    "kwargs",
    [
        {"now": int(time.time()) - 7200, "ttl_seconds": 60},  # expired
        {"issuer": "someone-else"},
        {"audience": "other-service"},
    ],
)
def test_rejected_claims(verifier, make_token, kwargs):
    with pytest.raises(AuthError):
        verifier.verify(make_token(**kwargs))


def test_wrong_signature_and_garbage(verifier):
    forged = issue_token("another-secret-that-is-also-long-enough-123", "user-1", "alice",
                         issuer=TEST_ISSUER, audience=TEST_AUDIENCE)
    with pytest.raises(AuthError):
        verifier.verify(forged)
    with pytest.raises(AuthError):
        verifier.verify("not-a-jwt")


def test_required_claims(verifier):
    now = int(time.time())
    no_exp = jwt.encode({"sub": "user-1", "iat": now, "iss": TEST_ISSUER, "aud": TEST_AUDIENCE},
                        TEST_SECRET, algorithm="HS256")
    no_sub = jwt.encode({"iat": now, "exp": now + 60, "iss": TEST_ISSUER, "aud": TEST_AUDIENCE},
                        TEST_SECRET, algorithm="HS256")
    for token in (no_exp, no_sub):
        with pytest.raises(AuthError):
            verifier.verify(token)


def test_issuer_and_audience_are_optional(make_token):
    lenient = JwtVerifier("secret", TEST_SECRET)
    assert lenient.verify(make_token(issuer="anyone", audience="anything")).user_id == "user-1"


def test_ed25519_tokens():
    private_key = Ed25519PrivateKey.generate()
    public_pem = private_key.public_key().public_bytes(
        serialization.Encoding.PEM, serialization.PublicFormat.SubjectPublicKeyInfo
    ).decode()
    now = int(time.time())
    token = jwt.encode(
        {"sub": "user-7", "username": "eve", "iat": now, "exp": now + 60, "iss": "auth", "aud": ["wordle"]},
        private_key,
        algorithm="EdDSA",
    )

    verifier = JwtVerifier("ed25519", public_pem, issuer="auth", audience="wordle")
    assert verifier.verify(token).username == "eve"


def test_bad_configuration():
    with pytest.raises(ConfigError):
        JwtVerifier("hmac512", TEST_SECRET)
    with pytest.raises(ConfigError):
        JwtVerifier("secret", "")
    with pytest.raises(ConfigError):
        JwtVerifier("rsa", "definitely not a pem")
