"""JWT token creation and verification.

Stateless bearer tokens: the token carries the user id and email, is
signed with the server secret, and expires after a fixed window (7 days
by default). Verification needs nothing but the token and the secret.

There is no revocation list. Rotating the secret invalidates every
token; changing a password does not.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt

TOKEN_TYPE = "access"


class TokenError(Exception):
    """Raised when token verification fails."""


class TokenExpired(TokenError):
    pass


class TokenMalformed(TokenError):
    pass


class TokenBadSignature(TokenError):
    pass


@dataclass(frozen=True)
class TokenClaims:
    user_id: str
    email: str
    issued_at: datetime
    expires_at: datetime


class TokenService:
    """Issues and verifies signed, time-limited access tokens."""

    def __init__(self, secret: str, algorithm: str = "HS256", expires_days: int = 7):
        self.secret = secret
        self.algorithm = algorithm
        self.expires_days = expires_days

    def issue(self, user_id: str, email: str, now: Optional[datetime] = None) -> str:
        """Create a signed access token for a user."""
        issued = now or datetime.now(timezone.utc)
        payload = {
            "sub": str(user_id),
            "email": email,
            "type": TOKEN_TYPE,
            "iat": issued,
            "exp": issued + timedelta(days=self.expires_days),
        }
        return jwt.encode(payload, self.secret, algorithm=self.algorithm)

    def verify(self, token: str) -> TokenClaims:
        """Verify and decode a token.

        Raises TokenExpired, TokenBadSignature or TokenMalformed.
        """
        try:
            payload = jwt.decode(
                token,
                self.secret,
                algorithms=[self.algorithm],
                options={"require": ["exp", "iat", "sub"]},
            )
        except jwt.ExpiredSignatureError:
            raise TokenExpired("Token expired")
        # InvalidSignatureError subclasses DecodeError, so it goes first.
        except jwt.InvalidSignatureError:
            raise TokenBadSignature("Invalid token signature")
        except jwt.InvalidTokenError as e:
            raise TokenMalformed(f"Invalid token: {e}")

        if payload.get("type") != TOKEN_TYPE or not payload.get("email"):
            raise TokenMalformed("Invalid token: unexpected claims")

        return TokenClaims(
            user_id=payload["sub"],
            email=payload["email"],
            issued_at=datetime.fromtimestamp(payload["iat"], tz=timezone.utc),
            expires_at=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
        )
