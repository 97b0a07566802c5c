"""FastAPI auth dependencies.

These are used as Depends() in route handlers to extract and validate the
current user from the request's `Authorization: Bearer <token>` header.

The token alone is not trusted: after signature/expiry checks the user is
loaded again, so a deactivated account is rejected even while its token
is still within its validity window.
"""

import uuid
from typing import Optional

from fastapi import Depends, Header, Request
from sqlalchemy.ext.asyncio import AsyncSession

from aftercare.auth.jwt import TokenExpired, TokenError, TokenService
from aftercare.db.engine import get_db
from aftercare.db.models import User
from aftercare.errors import Unauthorized
from aftercare.services.user_service import UserService


class CurrentIdentity:
    """The authenticated caller, resolved from a verified token."""

    def __init__(self, user: User):
        self.user = user
        self.user_id: uuid.UUID = user.id
        self.email: str = user.email


def get_token_service(request: Request) -> TokenService:
    return request.app.state.tokens


def get_user_service(
    request: Request, db: AsyncSession = Depends(get_db)
) -> UserService:
    return UserService(
        db,
        request.app.state.settings.bcrypt_rounds,
        shield=request.app.state.timing_shield,
    )


def _bearer_token(authorization: Optional[str]) -> Optional[str]:
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


async def _resolve(
    token: str, tokens: TokenService, users: UserService
) -> CurrentIdentity:
    try:
        claims = tokens.verify(token)
    except TokenExpired:
        raise Unauthorized("Token expired")
    except TokenError:
        raise Unauthorized("Invalid token")

    user = await users.get_user(claims.user_id)
    if user is None:
        raise Unauthorized("User not found")
    if not user.is_active:
        raise Unauthorized("Account is deactivated")
    return CurrentIdentity(user)


async def get_current_user(
    authorization: Optional[str] = Header(None),
    tokens: TokenService = Depends(get_token_service),
    users: UserService = Depends(get_user_service),
) -> CurrentIdentity:
    """Resolve the caller or fail with 401.

    This is the "hard" auth dependency, used for every protected route.
    """
    token = _bearer_token(authorization)
    if token is None:
        raise Unauthorized("Access token required")
    return await _resolve(token, tokens, users)


async def get_current_user_optional(
    authorization: Optional[str] = Header(None),
    tokens: TokenService = Depends(get_token_service),
    users: UserService = Depends(get_user_service),
) -> Optional[CurrentIdentity]:
    """Resolve the caller if possible, otherwise None.

    The "soft" variant: a missing, invalid or expired token downgrades the
    request to anonymous instead of rejecting it.
    """
    token = _bearer_token(authorization)
    if token is None:
        return None
    try:
        return await _resolve(token, tokens, users)
    except Unauthorized:
        return None
