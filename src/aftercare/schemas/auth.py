"""Pydantic schemas for accounts and authentication.

Request models run the same checks as the services (aftercare.validation),
so a bad body is rejected at the boundary with one field error per
problem before any business logic runs.
"""

import uuid
from datetime import date, datetime
from typing import Any, Optional

from pydantic import field_validator

from aftercare import validation
from aftercare.schemas.common import CamelModel


def _raise_if(message: Optional[str]) -> None:
    if message:
        raise ValueError(message)


# ─── Requests ───────────────────────────────────────────

class SignupRequest(CamelModel):
    model_config = {"validate_default": True}

    first_name: str = ""
    last_name: str = ""
    email: str = ""
    password: str = ""
    surgery_date: Optional[str] = None

    @field_validator("first_name")
    @classmethod
    def _first_name(cls, v: str) -> str:
        _raise_if(validation.check_name(v, "First name"))
        return v.strip()

    @field_validator("last_name")
    @classmethod
    def _last_name(cls, v: str) -> str:
        _raise_if(validation.check_name(v, "Last name"))
        return v.strip()

    @field_validator("email")
    @classmethod
    def _email(cls, v: str) -> str:
        _raise_if(validation.check_email(v))
        return validation.normalize_email(v)

    @field_validator("password")
    @classmethod
    def _password(cls, v: str) -> str:
        _raise_if(validation.check_password_strength(v))
        return v


class SigninRequest(CamelModel):
    model_config = {"validate_default": True}

    email: str = ""
    password: str = ""

    @field_validator("email")
    @classmethod
    def _email(cls, v: str) -> str:
        _raise_if(validation.check_email(v))
        return validation.normalize_email(v)

    @field_validator("password")
    @classmethod
    def _password(cls, v: str) -> str:
        if not v:
            raise ValueError("Password is required")
        return v


class ProfileUpdate(CamelModel):
    model_config = {"validate_default": True}

    first_name: str = ""
    last_name: str = ""

    @field_validator("first_name")
    @classmethod
    def _first_name(cls, v: str) -> str:
        _raise_if(validation.check_name(v, "First name"))
        return v.strip()

    @field_validator("last_name")
    @classmethod
    def _last_name(cls, v: str) -> str:
        _raise_if(validation.check_name(v, "Last name"))
        return v.strip()


class SurgeryDateUpdate(CamelModel):
    # Parsed and range-checked by AuthService.update_surgery_date.
    surgery_date: Optional[str] = None


class PasswordChange(CamelModel):
    model_config = {"validate_default": True}

    current_password: str = ""
    new_password: str = ""

    @field_validator("current_password")
    @classmethod
    def _current_password(cls, v: str) -> str:
        if not v:
            raise ValueError("Current password is required")
        return v

    @field_validator("new_password")
    @classmethod
    def _new_password(cls, v: str) -> str:
        _raise_if(validation.check_password_strength(v, "New password"))
        return v


class PreferencesUpdate(CamelModel):
    preferences: dict[str, Any]


# ─── Responses ──────────────────────────────────────────

class UserRead(CamelModel):
    id: uuid.UUID
    first_name: str
    last_name: str
    email: str
    surgery_date: Optional[date] = None
    recovery_day: int = 0
    is_active: bool = True
    created_at: Optional[datetime] = None


class UserData(CamelModel):
    user: UserRead


class AuthData(CamelModel):
    user: UserRead
    token: str


class TokenData(CamelModel):
    token: str
    token_type: str = "bearer"


class PreferencesData(CamelModel):
    preferences: dict[str, Any]
