"""Token service: issue/verify and every way verification fails."""

import uuid
from datetime import datetime, timedelta, timezone

import jwt
import pytest

from aftercare.auth.jwt import (
    TokenBadSignature,
    TokenError,
    TokenExpired,
    TokenMalformed,
    TokenService,
)

SECRET = "unit-test-secret-that-is-long-enough-for-hs256"


@pytest.fixture
def tokens():
    return TokenService(SECRET)


def test_issue_and_verify(tokens):
    user_id = str(uuid.uuid4())
    token = tokens.issue(user_id, "sarah@example.com")
    claims = tokens.verify(token)
    assert claims.user_id == user_id
    assert claims.email == "sarah@example.com"


def test_token_valid_for_seven_days(tokens):
    now = datetime.now(timezone.utc).replace(microsecond=0)
    claims = tokens.verify(tokens.issue("u1", "a@b.co", now=now))
    assert claims.issued_at == now
    assert claims.expires_at - claims.issued_at == timedelta(days=7)


def test_expired_token(tokens):
    issued = datetime.now(timezone.utc) - timedelta(days=8)
    token = tokens.issue("u1", "a@b.co", now=issued)
    with pytest.raises(TokenExpired):
        tokens.verify(token)


def test_token_signed_with_other_secret(tokens):
    other = TokenService("another-secret-that-is-also-long-enough-for-hs256")
    with pytest.raises(TokenBadSignature):
        tokens.verify(other.issue("u1", "a@b.co"))


def test_garbage_token(tokens):
    with pytest.raises(TokenMalformed):
        tokens.verify("not.a.token")


def test_token_without_required_claims(tokens):
    token = jwt.encode({"email": "a@b.co", "type": "access"}, SECRET, algorithm="HS256")
    with pytest.raises(TokenMalformed):
        tokens.verify(token)


def test_token_of_wrong_type(tokens):
    now = datetime.now(timezone.utc)
    token = jwt.encode(
        {
            "sub": "u1",
            "email": "a@b.co",
            "type": "refresh",
            "iat": now,
            "exp": now + timedelta(hours=1),
        },
        SECRET,
        algorithm="HS256",
    )
    with pytest.raises(TokenMalformed):
        tokens.verify(token)


def test_all_failures_are_token_errors():
    assert issubclass(TokenExpired, TokenError)
    assert issubclass(TokenMalformed, TokenError)
    assert issubclass(TokenBadSignature, TokenError)
