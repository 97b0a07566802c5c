"""API route aggregation.

All routers registered here get mounted in main.py under the configured
API prefix.

Auth is applied per route through Depends(get_current_user), since the
brochure router mixes public content routes with protected progress
routes. The users router is protected as a whole at include time.
"""

from fastapi import APIRouter, Depends

from aftercare.api.auth import router as auth_router
from aftercare.api.brochures import router as brochures_router
from aftercare.api.tracker import router as tracker_router
from aftercare.api.users import router as users_router
from aftercare.auth.dependencies import get_current_user

_auth = [Depends(get_current_user)]


def build_api_router(prefix: str = "/api/v1") -> APIRouter:
    api_router = APIRouter(prefix=prefix)

    # Open (or per-route protected) routes
    api_router.include_router(auth_router, tags=["auth"])
    api_router.include_router(brochures_router, tags=["brochures"])
    api_router.include_router(tracker_router, tags=["tracker"])

    # Protected routes
    api_router.include_router(users_router, tags=["users"], dependencies=_auth)
    return api_router
