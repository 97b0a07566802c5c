"""Progress service: per-user checklist state over the brochure.

One row per (user, section, item). Writes are a single
INSERT ... ON CONFLICT DO UPDATE, so repeating a write with the same key
is safe and the last one wins. There is no version check.
"""

import uuid
from typing import Optional

import structlog
from sqlalchemy import delete, func, select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.ext.asyncio import AsyncSession

from aftercare.db.models import BrochureProgress
from aftercare.schemas.brochure import ProgressSummary
from aftercare.services.brochure_service import BrochureCatalog, summarize_progress

logger = structlog.get_logger()


class ProgressService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def upsert(
        self,
        user_id: uuid.UUID,
        section_id: str,
        item_id: str,
        completed: bool,
        notes: Optional[str] = None,
    ) -> BrochureProgress:
        """Create or overwrite the record for (user, section, item).

        notes=None leaves existing notes untouched.
        """
        changes = {"completed": completed, "updated_at": func.now()}
        if notes is not None:
            changes["notes"] = notes

        stmt = (
            pg_insert(BrochureProgress)
            .values(
                id=uuid.uuid4(),
                user_id=user_id,
                section_id=section_id,
                item_id=item_id,
                completed=completed,
                notes=notes or "",
            )
            .on_conflict_do_update(
                index_elements=["user_id", "section_id", "item_id"],
                set_=changes,
            )
            .returning(BrochureProgress)
        )
        record = (
            await self.db.scalars(
                stmt, execution_options={"populate_existing": True}
            )
        ).one()
        await self.db.commit()
        return record

    async def list_by_user(
        self, user_id: uuid.UUID, section_id: Optional[str] = None
    ) -> list[BrochureProgress]:
        q = select(BrochureProgress).where(BrochureProgress.user_id == user_id)
        if section_id:
            q = q.where(BrochureProgress.section_id == section_id)
        result = await self.db.execute(q)
        return list(result.scalars().all())

    async def summary(
        self, user_id: uuid.UUID, catalog: BrochureCatalog
    ) -> ProgressSummary:
        return summarize_progress(catalog, await self.list_by_user(user_id))

    async def reset_all(self, user_id: uuid.UUID) -> int:
        """Delete every progress row for the user. Not reversible."""
        result = await self.db.execute(
            delete(BrochureProgress).where(BrochureProgress.user_id == user_id)
        )
        await self.db.commit()
        logger.info("progress.reset", user_id=str(user_id), deleted=result.rowcount)
        return result.rowcount
