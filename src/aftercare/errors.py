"""Application error taxonomy and the HTTP handlers that render it.

Services raise AppError subclasses; they never build HTTP responses.
The handlers registered by register_exception_handlers() turn them into
the shared error envelope:

    {"success": false, "error": "...", "message": "...",
     "errors": [{"message": "...", "field": "..."}]}

Anything that is not an AppError becomes a generic 500. The details go
to the server log only.
"""

from dataclasses import dataclass
from typing import Optional

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = structlog.get_logger()


@dataclass(frozen=True)
class FieldError:
    field: str
    message: str

    def to_dict(self) -> dict:
        return {"message": self.message, "field": self.field}


class AppError(Exception):
    """Base class for errors that map onto a client-facing response."""

    status_code = 500
    error = "Internal server error"

    def __init__(
        self,
        message: Optional[str] = None,
        errors: Optional[list[FieldError]] = None,
    ):
        self.message = message or self.error
        self.errors = list(errors or [])
        super().__init__(self.message)

    def to_dict(self) -> dict:
        body = {"success": False, "error": self.error, "message": self.message}
        if self.errors:
            body["errors"] = [e.to_dict() for e in self.errors]
        return body


# ─── 400 ─────────────────────────────────────────────────


class ValidationFailed(AppError):
    status_code = 400
    error = "Validation failed"

    @classmethod
    def single(cls, field: str, message: str) -> "ValidationFailed":
        return cls(message, [FieldError(field, message)])


class InvalidCredentials(ValidationFailed):
    """Login failure. Same shape for unknown email and wrong password."""

    error = "Authentication failed"

    def __init__(self):
        super().__init__(
            "Invalid email or password",
            [FieldError("credentials", "Invalid email or password")],
        )


class WeakPassword(ValidationFailed):
    pass


class SamePassword(ValidationFailed):
    def __init__(self):
        msg = "New password must be different from current password"
        super().__init__(msg, [FieldError("newPassword", msg)])


class WrongCurrentPassword(ValidationFailed):
    error = "Password change failed"

    def __init__(self):
        msg = "Current password is incorrect"
        super().__init__(msg, [FieldError("currentPassword", msg)])


# ─── 401 / 404 / 409 ─────────────────────────────────────


class Unauthorized(AppError):
    status_code = 401
    error = "Unauthorized"


class NotFound(AppError):
    status_code = 404
    error = "Not found"


class UserNotFound(NotFound):
    error = "User not found"

    def __init__(self):
        super().__init__(
            "User account not found", [FieldError("user", "User account not found")]
        )


class Conflict(AppError):
    status_code = 409
    error = "Conflict"


class DuplicateEmail(Conflict):
    error = "Registration failed"

    def __init__(self):
        super().__init__(
            "Email already in use", [FieldError("email", "Email already in use")]
        )


# ─── Handlers ────────────────────────────────────────────


def _field_from_loc(loc: tuple) -> str:
    # ("body", "painLevel") -> "painLevel"; ("query", "page") -> "page"
    names = [str(p) for p in loc if p not in ("body", "query", "path", "header")]
    return ".".join(names) or "general"


def _message_from_error(err: dict) -> str:
    # Custom validators raise ValueError; surface their text without
    # pydantic's "Value error, " prefix.
    ctx_error = (err.get("ctx") or {}).get("error")
    if err.get("type") == "value_error" and ctx_error is not None:
        return str(ctx_error)
    return err.get("msg", "Invalid value")


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    headers = {"WWW-Authenticate": "Bearer"} if exc.status_code == 401 else None
    return JSONResponse(
        status_code=exc.status_code, content=exc.to_dict(), headers=headers
    )


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    errors = [
        FieldError(_field_from_loc(tuple(e.get("loc", ()))), _message_from_error(e))
        for e in exc.errors()
    ]
    failure = ValidationFailed(errors[0].message if errors else None, errors)
    return JSONResponse(status_code=400, content=failure.to_dict())


async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "error": exc.detail, "message": exc.detail},
        headers=getattr(exc, "headers", None),
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("request.unhandled_error", path=request.url.path)
    return JSONResponse(
        status_code=500,
        content={
            "success": False,
            "error": "Internal server error",
            "message": "An unexpected error occurred. Please try again.",
        },
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
