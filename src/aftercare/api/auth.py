"""Auth API: sign-up, sign-in and self-service account routes.

- POST   /auth/signup          → create account, returns user + token
- POST   /auth/signin          → email/password → user + token
- GET    /auth/me              → current user
- PATCH  /auth/surgery-date    → set surgery date (recovery day derives from it)
- PATCH  /auth/profile         → update first/last name
- PATCH  /auth/change-password → verify current password, set a new one
- POST   /auth/refresh         → fresh token for the current user
- DELETE /auth/me              → deactivate own account
"""

from fastapi import APIRouter, Depends

from aftercare.auth.dependencies import (
    CurrentIdentity,
    get_current_user,
    get_token_service,
    get_user_service,
)
from aftercare.auth.jwt import TokenService
from aftercare.schemas.auth import (
    AuthData,
    PasswordChange,
    ProfileUpdate,
    SigninRequest,
    SignupRequest,
    SurgeryDateUpdate,
    TokenData,
    UserData,
    UserRead,
)
from aftercare.schemas.common import ApiResponse
from aftercare.services.auth_service import AuthResult, AuthService
from aftercare.services.user_service import UserService

router = APIRouter(prefix="/auth")


def _svc(
    users: UserService = Depends(get_user_service),
    tokens: TokenService = Depends(get_token_service),
) -> AuthService:
    return AuthService(users, tokens)


def _auth_response(result: AuthResult, message: str) -> ApiResponse[AuthData]:
    return ApiResponse[AuthData](
        data=AuthData(user=UserRead.model_validate(result.user), token=result.token),
        message=message,
    )


def _user_response(user, message: str) -> ApiResponse[UserData]:
    return ApiResponse[UserData](
        data=UserData(user=UserRead.model_validate(user)), message=message
    )


# ─── Sign-up / sign-in ──────────────────────────────────


@router.post("/signup", response_model=ApiResponse[AuthData], status_code=201)
async def signup(body: SignupRequest, svc: AuthService = Depends(_svc)):
    """Create a new account and sign it in."""
    result = await svc.register(
        first_name=body.first_name,
        last_name=body.last_name,
        email=body.email,
        password=body.password,
        surgery_date=body.surgery_date,
    )
    return _auth_response(result, "User created successfully")


@router.post("/signin", response_model=ApiResponse[AuthData])
async def signin(body: SigninRequest, svc: AuthService = Depends(_svc)):
    result = await svc.login(body.email, body.password)
    return _auth_response(result, "User signed in successfully")


@router.post("/refresh", response_model=ApiResponse[TokenData])
async def refresh(
    identity: CurrentIdentity = Depends(get_current_user),
    svc: AuthService = Depends(_svc),
):
    token = await svc.refresh_token(identity.user_id)
    return ApiResponse[TokenData](data=TokenData(token=token), message="Token refreshed")


# ─── Current user ───────────────────────────────────────


@router.get("/me", response_model=ApiResponse[UserData])
async def get_me(
    identity: CurrentIdentity = Depends(get_current_user),
    svc: AuthService = Depends(_svc),
):
    user = await svc.get_current_user(identity.user_id)
    return _user_response(user, "User profile retrieved successfully")


@router.patch("/surgery-date", response_model=ApiResponse[UserData])
async def update_surgery_date(
    body: SurgeryDateUpdate,
    identity: CurrentIdentity = Depends(get_current_user),
    svc: AuthService = Depends(_svc),
):
    user = await svc.update_surgery_date(identity.user_id, body.surgery_date)
    return _user_response(user, "Surgery date updated successfully")


@router.patch("/profile", response_model=ApiResponse[UserData])
async def update_profile(
    body: ProfileUpdate,
    identity: CurrentIdentity = Depends(get_current_user),
    svc: AuthService = Depends(_svc),
):
    user = await svc.update_profile(identity.user_id, body.first_name, body.last_name)
    return _user_response(user, "Profile updated successfully")


@router.patch("/change-password", response_model=ApiResponse[None])
async def change_password(
    body: PasswordChange,
    identity: CurrentIdentity = Depends(get_current_user),
    svc: AuthService = Depends(_svc),
):
    await svc.change_password(identity.user_id, body.current_password, body.new_password)
    return ApiResponse[None](message="Password changed successfully")


@router.delete("/me", response_model=ApiResponse[None])
async def deactivate_me(
    identity: CurrentIdentity = Depends(get_current_user),
    svc: AuthService = Depends(_svc),
):
    """Deactivate the caller's account. Existing tokens stop working."""
    await svc.deactivate(identity.user_id)
    return ApiResponse[None](message="Account deactivated")
