"""Pydantic schemas for brochure content and checklist progress."""

import uuid
from datetime import datetime
from typing import Optional

from pydantic import Field, field_validator

from aftercare.schemas.common import CamelModel


# ─── Static content ─────────────────────────────────────

class BrochureItem(CamelModel):
    id: str
    text: str
    completed: bool = False
    notes: Optional[str] = None


class ContentBlock(CamelModel):
    id: str
    title: str
    items: list[BrochureItem]


class BrochureSection(CamelModel):
    id: str
    title: str
    content: list[ContentBlock]


class SectionSummary(CamelModel):
    id: str
    title: str
    content_count: int


# ─── Progress ───────────────────────────────────────────

class ProgressUpdate(CamelModel):
    section_id: str = Field(..., min_length=1, max_length=100)
    item_id: str = Field(..., min_length=1, max_length=100)
    completed: bool
    notes: Optional[str] = Field(None, max_length=2000)

    @field_validator("completed", mode="before")
    @classmethod
    def _strict_bool(cls, v):
        # "yes"/1 are not accepted as completion flags.
        if not isinstance(v, bool):
            raise ValueError("completed must be true or false")
        return v


class ProgressRead(CamelModel):
    id: uuid.UUID
    user_id: uuid.UUID
    section_id: str
    item_id: str
    completed: bool
    notes: str = ""
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class ProgressSummary(CamelModel):
    total_items: int
    completed_items: int
    progress_percentage: float
    last_updated: Optional[datetime] = None
