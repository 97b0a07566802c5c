"""Brochure API: static aftercare content and per-user checklist progress.

Content routes are public. When a valid bearer token is present the
caller's saved progress is laid over the returned items; otherwise the
plain template comes back.

- GET    /brochures/myomectomy         → every section
- GET    /brochures/sections           → paginated section summaries
- GET    /brochures/sections/{id}      → one section
- POST   /brochures/progress           → upsert one checklist item
- GET    /brochures/progress           → caller's progress records
- GET    /brochures/progress/summary   → completion counts
- DELETE /brochures/progress/reset     → drop all of the caller's progress
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession

from aftercare.auth.dependencies import (
    CurrentIdentity,
    get_current_user,
    get_current_user_optional,
)
from aftercare.db.engine import get_db
from aftercare.errors import FieldError, ValidationFailed
from aftercare.schemas.brochure import (
    BrochureSection,
    ProgressRead,
    ProgressSummary,
    ProgressUpdate,
    SectionSummary,
)
from aftercare.schemas.common import ApiResponse, Page, page_meta
from aftercare.services.brochure_service import BrochureCatalog, overlay_progress
from aftercare.services.progress_service import ProgressService

router = APIRouter(prefix="/brochures")


def _catalog(request: Request) -> BrochureCatalog:
    return request.app.state.catalog


def _progress_svc(db: AsyncSession = Depends(get_db)) -> ProgressService:
    return ProgressService(db)


# ─── Content ────────────────────────────────────────────


@router.get("/myomectomy", response_model=ApiResponse[list[BrochureSection]])
async def get_brochure(
    catalog: BrochureCatalog = Depends(_catalog),
    identity: Optional[CurrentIdentity] = Depends(get_current_user_optional),
    svc: ProgressService = Depends(_progress_svc),
):
    sections = catalog.sections()
    if identity is not None:
        sections = overlay_progress(sections, await svc.list_by_user(identity.user_id))
    return ApiResponse[list[BrochureSection]](
        data=sections, message="Brochure content retrieved successfully"
    )


@router.get("/sections", response_model=ApiResponse[Page[SectionSummary]])
async def list_sections(
    request: Request,
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1),
    search: str = Query("", max_length=100),
    catalog: BrochureCatalog = Depends(_catalog),
):
    limit = min(limit, request.app.state.settings.sections_max_page_size)
    docs, total = catalog.search_sections(search, page, limit)
    return ApiResponse[Page[SectionSummary]](
        data=Page[SectionSummary](docs=docs, **page_meta(total, page, limit)),
        message="Sections retrieved successfully",
    )


@router.get("/sections/{section_id}", response_model=ApiResponse[BrochureSection])
async def get_section(
    section_id: str,
    catalog: BrochureCatalog = Depends(_catalog),
    identity: Optional[CurrentIdentity] = Depends(get_current_user_optional),
    svc: ProgressService = Depends(_progress_svc),
):
    section = catalog.get_section(section_id)
    if identity is not None:
        records = await svc.list_by_user(identity.user_id, section_id=section_id)
        overlay_progress([section], records)
    return ApiResponse[BrochureSection](
        data=section, message="Section retrieved successfully"
    )


# ─── Progress ───────────────────────────────────────────


@router.post("/progress", response_model=ApiResponse[ProgressRead])
async def update_progress(
    body: ProgressUpdate,
    identity: CurrentIdentity = Depends(get_current_user),
    catalog: BrochureCatalog = Depends(_catalog),
    svc: ProgressService = Depends(_progress_svc),
):
    """Mark one checklist item complete/incomplete, optionally with notes."""
    if not catalog.has_item(body.section_id, body.item_id):
        message = f"Unknown brochure item '{body.section_id}/{body.item_id}'"
        raise ValidationFailed(message, [FieldError("itemId", message)])
    record = await svc.upsert(
        identity.user_id,
        body.section_id,
        body.item_id,
        body.completed,
        notes=body.notes,
    )
    return ApiResponse[ProgressRead](
        data=ProgressRead.model_validate(record),
        message="Progress updated successfully",
    )


@router.get("/progress", response_model=ApiResponse[list[ProgressRead]])
async def get_progress(
    section_id: Optional[str] = Query(None, alias="sectionId"),
    identity: CurrentIdentity = Depends(get_current_user),
    svc: ProgressService = Depends(_progress_svc),
):
    records = await svc.list_by_user(identity.user_id, section_id=section_id)
    return ApiResponse[list[ProgressRead]](
        data=[ProgressRead.model_validate(r) for r in records],
        message="Progress retrieved successfully",
    )


@router.get("/progress/summary", response_model=ApiResponse[ProgressSummary])
async def get_progress_summary(
    identity: CurrentIdentity = Depends(get_current_user),
    catalog: BrochureCatalog = Depends(_catalog),
    svc: ProgressService = Depends(_progress_svc),
):
    summary = await svc.summary(identity.user_id, catalog)
    return ApiResponse[ProgressSummary](
        data=summary, message="Progress summary retrieved successfully"
    )


@router.delete("/progress/reset", response_model=ApiResponse[None])
async def reset_progress(
    identity: CurrentIdentity = Depends(get_current_user),
    svc: ProgressService = Depends(_progress_svc),
):
    await svc.reset_all(identity.user_id)
    return ApiResponse[None](message="Progress reset successfully")
