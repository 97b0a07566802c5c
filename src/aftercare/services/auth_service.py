"""Auth service: registration, login and self-service account updates.

Orchestrates the user service (credential store) and the token service.
Every successful register/login returns the user together with a fresh
bearer token.
"""

from dataclasses import dataclass

import structlog

from aftercare import validation
from aftercare.auth.jwt import TokenService
from aftercare.db.models import User
from aftercare.errors import (
    FieldError,
    InvalidCredentials,
    Unauthorized,
    UserNotFound,
    ValidationFailed,
)
from aftercare.services.user_service import UserService

logger = structlog.get_logger()


@dataclass
class AuthResult:
    user: User
    token: str


class AuthService:
    """Business logic behind the /auth routes."""

    def __init__(self, users: UserService, tokens: TokenService):
        self.users = users
        self.tokens = tokens

    def _issue(self, user: User) -> str:
        return self.tokens.issue(str(user.id), user.email)

    async def register(
        self,
        first_name: str,
        last_name: str,
        email: str,
        password: str,
        surgery_date=None,
    ) -> AuthResult:
        user = await self.users.create_user(
            first_name, last_name, email, password, surgery_date=surgery_date
        )
        logger.info("auth.registered", user_id=str(user.id))
        return AuthResult(user=user, token=self._issue(user))

    async def login(self, email: str, password: str) -> AuthResult:
        try:
            user = await self.users.verify_credentials(email, password)
        except InvalidCredentials:
            logger.info("auth.login_failed")
            raise
        logger.info("auth.login", user_id=str(user.id))
        return AuthResult(user=user, token=self._issue(user))

    async def get_current_user(self, user_id) -> User:
        if not user_id:
            raise Unauthorized("Authentication token is required")
        user = await self.users.get_user(user_id)
        if not user:
            raise UserNotFound()
        return user

    async def update_profile(self, user_id, first_name: str, last_name: str) -> User:
        problems = [
            FieldError(field, message)
            for field, message in (
                ("firstName", validation.check_name(first_name, "First name")),
                ("lastName", validation.check_name(last_name, "Last name")),
            )
            if message
        ]
        if problems:
            raise ValidationFailed(problems[0].message, problems)
        return await self.users.update_user(
            user_id, first_name=first_name.strip(), last_name=last_name.strip()
        )

    async def update_surgery_date(self, user_id, value) -> User:
        """Store a surgery date. "Future" is judged against today's UTC date."""
        surgery_date = validation.parse_surgery_date(value)
        return await self.users.update_user(user_id, surgery_date=surgery_date)

    async def change_password(
        self, user_id, current_password: str, new_password: str
    ) -> None:
        await self.users.change_password(user_id, current_password, new_password)

    async def refresh_token(self, user_id) -> str:
        user = await self.get_current_user(user_id)
        return self._issue(user)

    async def deactivate(self, user_id) -> User:
        return await self.users.deactivate_user(user_id)
