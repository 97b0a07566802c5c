"""User service: the credential store and account management.

Service layer separates business logic from HTTP routing. API routes call
services, services call the database. Passwords are hashed here, in one
explicit step before the row is written, and are never returned.
"""

import uuid
from datetime import date
from typing import Any, Optional

import structlog
from sqlalchemy import func, or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from aftercare import validation
from aftercare.auth.password import (
    DEFAULT_ROUNDS,
    TimingShield,
    hash_password,
    needs_rehash,
    verify_password,
)
from aftercare.db.models import User
from aftercare.errors import (
    DuplicateEmail,
    InvalidCredentials,
    SamePassword,
    UserNotFound,
    ValidationFailed,
    WeakPassword,
    WrongCurrentPassword,
)

logger = structlog.get_logger()

# Columns GET /users may sort by, keyed by their camelCase API name.
SORTABLE_FIELDS = {
    "createdAt": User.created_at,
    "updatedAt": User.updated_at,
    "firstName": User.first_name,
    "lastName": User.last_name,
    "email": User.email,
    "surgeryDate": User.surgery_date,
}


def parse_user_id(user_id) -> Optional[uuid.UUID]:
    """UUID from a path/claim value, or None if it is not one."""
    if isinstance(user_id, uuid.UUID):
        return user_id
    try:
        return uuid.UUID(str(user_id))
    except ValueError:
        return None


class UserService:
    """Persistence and credential checks for user accounts."""

    def __init__(
        self,
        db: AsyncSession,
        bcrypt_rounds: int = DEFAULT_ROUNDS,
        shield: Optional[TimingShield] = None,
    ):
        self.db = db
        self.bcrypt_rounds = bcrypt_rounds
        self.shield = shield

    # ─── Lookups ────────────────────────────────────────

    async def get_user(self, user_id) -> Optional[User]:
        uid = parse_user_id(user_id)
        if uid is None:
            return None
        return await self.db.get(User, uid)

    async def require_user(self, user_id) -> User:
        user = await self.get_user(user_id)
        if not user:
            raise UserNotFound()
        return user

    async def get_by_email(self, email: str) -> Optional[User]:
        result = await self.db.execute(
            select(User).where(User.email == validation.normalize_email(email))
        )
        return result.scalars().first()

    # ─── Credentials ────────────────────────────────────

    async def create_user(
        self,
        first_name: str,
        last_name: str,
        email: str,
        password: str,
        surgery_date: Any = None,
    ) -> User:
        """Validate, hash and insert a new account.

        Raises ValidationFailed listing every invalid field, or
        DuplicateEmail when the (lowercased) email is taken.
        """
        first_name, last_name, email, password = validation.validate_registration(
            first_name, last_name, email, password
        )
        parsed_surgery: Optional[date] = None
        if surgery_date not in (None, ""):
            parsed_surgery = validation.parse_surgery_date(surgery_date)

        if await self.get_by_email(email):
            raise DuplicateEmail()

        user = User(
            email=email,
            first_name=first_name,
            last_name=last_name,
            password_hash=hash_password(password, self.bcrypt_rounds),
            surgery_date=parsed_surgery,
            preferences={},
        )
        self.db.add(user)
        try:
            await self.db.commit()
        except IntegrityError:
            # Lost a race with a concurrent sign-up for the same email.
            await self.db.rollback()
            raise DuplicateEmail()
        await self.db.refresh(user)
        logger.info("users.created", user_id=str(user.id))
        return user

    async def verify_credentials(self, email: str, password: str) -> User:
        """Return the account for a correct email/password pair.

        Unknown email, wrong password and deactivated account all raise the
        same InvalidCredentials. The unknown-email path still runs one
        bcrypt comparison so timing does not tell them apart.
        """
        user = await self.get_by_email(email)
        if user is None:
            if self.shield is None:
                self.shield = TimingShield(self.bcrypt_rounds)
            self.shield.burn(password)
            raise InvalidCredentials()
        if not verify_password(password, user.password_hash) or not user.is_active:
            raise InvalidCredentials()

        if needs_rehash(user.password_hash, self.bcrypt_rounds):
            user.password_hash = hash_password(password, self.bcrypt_rounds)
            await self.db.commit()
        return user

    async def change_password(
        self, user_id, current_password: str, new_password: str
    ) -> None:
        user = await self.require_user(user_id)
        if not verify_password(current_password, user.password_hash):
            raise WrongCurrentPassword()
        if current_password == new_password:
            raise SamePassword()
        message = validation.check_password_strength(new_password, "New password")
        if message:
            raise WeakPassword.single("newPassword", message)

        user.password_hash = hash_password(new_password, self.bcrypt_rounds)
        await self.db.commit()
        logger.info("users.password_changed", user_id=str(user.id))

    # ─── Listing ────────────────────────────────────────

    async def list_users(
        self,
        page: int = 1,
        limit: int = 10,
        search: str = "",
        sort_by: str = "createdAt",
        sort_order: str = "desc",
        is_active: Optional[bool] = None,
    ) -> tuple[list[User], int]:
        """One page of users plus the total match count."""
        conditions = []
        if search:
            conditions.append(
                or_(
                    User.first_name.icontains(search, autoescape=True),
                    User.last_name.icontains(search, autoescape=True),
                    User.email.icontains(search, autoescape=True),
                )
            )
        if is_active is not None:
            conditions.append(User.is_active == is_active)

        column = SORTABLE_FIELDS.get(sort_by, User.created_at)
        order = column.asc() if sort_order == "asc" else column.desc()

        total = await self.db.scalar(
            select(func.count()).select_from(User).where(*conditions)
        )
        result = await self.db.execute(
            select(User)
            .where(*conditions)
            .order_by(order, User.id)
            .offset((page - 1) * limit)
            .limit(limit)
        )
        return list(result.scalars().all()), total or 0

    # ─── Updates ────────────────────────────────────────

    async def update_user(self, user_id, **fields) -> User:
        """Set the given attributes on a user.

        An email change is normalized and checked for uniqueness first.
        """
        user = await self.require_user(user_id)
        if "email" in fields:
            email = validation.normalize_email(fields["email"])
            message = validation.check_email(email)
            if message:
                raise ValidationFailed.single("email", message)
            if email != user.email and await self.get_by_email(email):
                raise DuplicateEmail()
            fields["email"] = email

        for name, value in fields.items():
            setattr(user, name, value)
        await self.db.commit()
        await self.db.refresh(user)
        return user

    async def deactivate_user(self, user_id) -> User:
        user = await self.update_user(user_id, is_active=False)
        logger.info("users.deactivated", user_id=str(user.id))
        return user

    async def activate_user(self, user_id) -> User:
        return await self.update_user(user_id, is_active=True)

    async def get_preferences(self, user_id) -> dict:
        user = await self.require_user(user_id)
        return dict(user.preferences or {})

    async def update_preferences(self, user_id, preferences: dict) -> dict:
        """Shallow-merge new keys into the stored preference map."""
        user = await self.require_user(user_id)
        # Reassign so the JSONB column is marked dirty.
        user.preferences = {**(user.preferences or {}), **preferences}
        await self.db.commit()
        return dict(user.preferences)
