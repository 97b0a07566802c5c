"""Symptom diary service.

Every query filters on the owner's user_id. An entry that belongs to
someone else is indistinguishable from one that does not exist: both
raise NotFound.
"""

import uuid
from typing import Optional

import structlog
from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from aftercare import validation
from aftercare.db.models import SymptomEntry
from aftercare.errors import FieldError, NotFound, ValidationFailed

logger = structlog.get_logger()

UPDATABLE_FIELDS = ("date", "pain_level", "location", "description", "medications")


class EntryNotFound(NotFound):
    error = "Symptom entry not found"


def _check_entry_fields(fields: dict) -> dict:
    errors = []
    if "pain_level" in fields:
        message = validation.check_pain_level(fields["pain_level"])
        if message:
            errors.append(FieldError("painLevel", message))
    if "date" in fields:
        try:
            fields["date"] = validation.parse_calendar_date(fields["date"]).isoformat()
        except ValueError as e:
            errors.append(FieldError("date", str(e)))
    if errors:
        raise ValidationFailed(errors[0].message, errors)
    return fields


class SymptomService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def _get_owned(self, user_id: uuid.UUID, entry_id) -> SymptomEntry:
        try:
            eid = uuid.UUID(str(entry_id))
        except ValueError:
            raise EntryNotFound()
        result = await self.db.execute(
            select(SymptomEntry).where(
                SymptomEntry.id == eid, SymptomEntry.user_id == user_id
            )
        )
        entry = result.scalars().first()
        if entry is None:
            raise EntryNotFound()
        return entry

    async def create(
        self,
        user_id: uuid.UUID,
        date: str,
        pain_level: int,
        location: Optional[str] = "",
        description: Optional[str] = "",
        medications: Optional[str] = "",
    ) -> SymptomEntry:
        fields = _check_entry_fields({"date": date, "pain_level": pain_level})
        entry = SymptomEntry(
            user_id=user_id,
            date=fields["date"],
            pain_level=pain_level,
            location=location or "",
            description=description or "",
            medications=medications or "",
        )
        self.db.add(entry)
        await self.db.commit()
        await self.db.refresh(entry)
        logger.info("tracker.entry_created", user_id=str(user_id), entry_id=str(entry.id))
        return entry

    async def list_by_user(self, user_id: uuid.UUID) -> list[SymptomEntry]:
        """Newest first."""
        result = await self.db.execute(
            select(SymptomEntry)
            .where(SymptomEntry.user_id == user_id)
            .order_by(SymptomEntry.timestamp.desc(), SymptomEntry.created_at.desc())
        )
        return list(result.scalars().all())

    async def update(self, user_id: uuid.UUID, entry_id, **fields) -> SymptomEntry:
        """Apply a partial update. Unknown keys and None values are ignored."""
        changes = {
            k: v for k, v in fields.items() if k in UPDATABLE_FIELDS and v is not None
        }
        entry = await self._get_owned(user_id, entry_id)
        _check_entry_fields(changes)
        for name, value in changes.items():
            setattr(entry, name, value)
        await self.db.commit()
        await self.db.refresh(entry)
        return entry

    async def delete(self, user_id: uuid.UUID, entry_id) -> None:
        entry = await self._get_owned(user_id, entry_id)
        await self.db.delete(entry)
        await self.db.commit()
        logger.info("tracker.entry_deleted", user_id=str(user_id), entry_id=str(entry.id))

    async def clear_all(self, user_id: uuid.UUID) -> int:
        result = await self.db.execute(
            delete(SymptomEntry).where(SymptomEntry.user_id == user_id)
        )
        await self.db.commit()
        logger.info("tracker.cleared", user_id=str(user_id), deleted=result.rowcount)
        return result.rowcount
