"""Pydantic schemas for the symptom diary (tracker)."""

import uuid
from datetime import datetime
from typing import Annotated, Optional

from pydantic import AfterValidator, BeforeValidator, Field

from aftercare import validation
from aftercare.schemas.common import CamelModel


def _calendar_date(v: str) -> str:
    try:
        return validation.parse_calendar_date(v).isoformat()
    except ValueError:
        raise ValueError("Date must be a calendar date (YYYY-MM-DD)")


def _pain_level(v):
    message = validation.check_pain_level(v)
    if message:
        raise ValueError(message)
    return v


CalendarDate = Annotated[str, AfterValidator(_calendar_date)]
PainLevel = Annotated[int, BeforeValidator(_pain_level)]


class SymptomEntryCreate(CamelModel):
    date: CalendarDate
    pain_level: PainLevel
    location: str = Field("", max_length=200)
    description: str = Field("", max_length=2000)
    medications: str = Field("", max_length=1000)


class SymptomEntryUpdate(CamelModel):
    """Partial update: only the fields present in the body change."""
    date: Optional[CalendarDate] = None
    pain_level: Optional[PainLevel] = None
    location: Optional[str] = Field(None, max_length=200)
    description: Optional[str] = Field(None, max_length=2000)
    medications: Optional[str] = Field(None, max_length=1000)


class SymptomEntryRead(CamelModel):
    id: uuid.UUID
    user_id: uuid.UUID
    date: str
    pain_level: int
    location: str = ""
    description: str = ""
    medications: str = ""
    timestamp: datetime
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
