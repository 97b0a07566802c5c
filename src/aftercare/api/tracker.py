"""Symptom tracker routes: the caller's private pain/symptom diary.

Every route is scoped to the authenticated user. DELETE /tracker/clear
is registered before DELETE /tracker/{entry_id}; otherwise "clear" would
be matched as an entry id.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from aftercare.auth.dependencies import CurrentIdentity, get_current_user
from aftercare.db.engine import get_db
from aftercare.schemas.common import ApiResponse
from aftercare.schemas.tracker import (
    SymptomEntryCreate,
    SymptomEntryRead,
    SymptomEntryUpdate,
)
from aftercare.services.symptom_service import SymptomService

router = APIRouter(prefix="/tracker")


def _svc(db: AsyncSession = Depends(get_db)) -> SymptomService:
    return SymptomService(db)


@router.post("", response_model=ApiResponse[SymptomEntryRead], status_code=201)
async def create_entry(
    body: SymptomEntryCreate,
    identity: CurrentIdentity = Depends(get_current_user),
    svc: SymptomService = Depends(_svc),
):
    entry = await svc.create(
        identity.user_id,
        date=body.date,
        pain_level=body.pain_level,
        location=body.location,
        description=body.description,
        medications=body.medications,
    )
    return ApiResponse[SymptomEntryRead](
        data=SymptomEntryRead.model_validate(entry),
        message="Symptom entry created successfully",
    )


@router.get("", response_model=ApiResponse[list[SymptomEntryRead]])
async def list_entries(
    identity: CurrentIdentity = Depends(get_current_user),
    svc: SymptomService = Depends(_svc),
):
    """Caller's entries, newest first."""
    entries = await svc.list_by_user(identity.user_id)
    return ApiResponse[list[SymptomEntryRead]](
        data=[SymptomEntryRead.model_validate(e) for e in entries],
        message="Symptom entries retrieved successfully",
    )


@router.delete("/clear", response_model=ApiResponse[None])
async def clear_entries(
    identity: CurrentIdentity = Depends(get_current_user),
    svc: SymptomService = Depends(_svc),
):
    await svc.clear_all(identity.user_id)
    return ApiResponse[None](message="All symptom entries cleared successfully")


@router.put("/{entry_id}", response_model=ApiResponse[SymptomEntryRead])
async def update_entry(
    entry_id: str,
    body: SymptomEntryUpdate,
    identity: CurrentIdentity = Depends(get_current_user),
    svc: SymptomService = Depends(_svc),
):
    """Partial update: fields left out of the body keep their values."""
    entry = await svc.update(
        identity.user_id, entry_id, **body.model_dump(exclude_unset=True)
    )
    return ApiResponse[SymptomEntryRead](
        data=SymptomEntryRead.model_validate(entry),
        message="Symptom entry updated successfully",
    )


@router.delete("/{entry_id}", response_model=ApiResponse[None])
async def delete_entry(
    entry_id: str,
    identity: CurrentIdentity = Depends(get_current_user),
    svc: SymptomService = Depends(_svc),
):
    await svc.delete(identity.user_id, entry_id)
    return ApiResponse[None](message="Symptom entry deleted successfully")
