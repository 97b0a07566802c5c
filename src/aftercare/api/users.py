"""User directory routes.

All routes here sit behind the auth gate (applied in api/__init__.py).
/users/me/* is declared before /users/{user_id} so "me" is never read
as an id.
"""

from typing import Literal, Optional

from fastapi import APIRouter, Depends, Query, Request

from aftercare.auth.dependencies import (
    CurrentIdentity,
    get_current_user,
    get_user_service,
)
from aftercare.schemas.auth import PreferencesData, PreferencesUpdate, UserData, UserRead
from aftercare.schemas.common import ApiResponse, Page, page_meta
from aftercare.services.user_service import UserService

router = APIRouter(prefix="/users")


@router.get("", response_model=ApiResponse[Page[UserRead]])
async def list_users(
    request: Request,
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1),
    search: str = Query("", max_length=100),
    sort_by: str = Query("createdAt", alias="sortBy"),
    sort_order: Literal["asc", "desc"] = Query("desc", alias="sortOrder"),
    is_active: Optional[bool] = Query(None, alias="isActive"),
    svc: UserService = Depends(get_user_service),
):
    """Paginated user list with optional search and sorting."""
    limit = min(limit, request.app.state.settings.users_max_page_size)
    users, total = await svc.list_users(
        page=page,
        limit=limit,
        search=search.strip(),
        sort_by=sort_by,
        sort_order=sort_order,
        is_active=is_active,
    )
    return ApiResponse[Page[UserRead]](
        data=Page[UserRead](
            docs=[UserRead.model_validate(u) for u in users],
            **page_meta(total, page, limit),
        ),
        message="Users retrieved successfully",
    )


# ─── Own preferences ────────────────────────────────────


@router.get("/me/preferences", response_model=ApiResponse[PreferencesData])
async def get_preferences(
    identity: CurrentIdentity = Depends(get_current_user),
    svc: UserService = Depends(get_user_service),
):
    prefs = await svc.get_preferences(identity.user_id)
    return ApiResponse[PreferencesData](
        data=PreferencesData(preferences=prefs),
        message="Preferences retrieved successfully",
    )


@router.patch("/me/preferences", response_model=ApiResponse[PreferencesData])
async def update_preferences(
    body: PreferencesUpdate,
    identity: CurrentIdentity = Depends(get_current_user),
    svc: UserService = Depends(get_user_service),
):
    """Merge the given keys into the caller's stored preferences."""
    prefs = await svc.update_preferences(identity.user_id, body.preferences)
    return ApiResponse[PreferencesData](
        data=PreferencesData(preferences=prefs),
        message="Preferences updated successfully",
    )


# ─── Single user ────────────────────────────────────────


@router.get("/{user_id}", response_model=ApiResponse[UserData])
async def get_user(user_id: str, svc: UserService = Depends(get_user_service)):
    user = await svc.require_user(user_id)
    return ApiResponse[UserData](
        data=UserData(user=UserRead.model_validate(user)),
        message="User retrieved successfully",
    )
