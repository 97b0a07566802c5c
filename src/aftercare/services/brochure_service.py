"""Brochure catalog: read-only access to the static aftercare content.

The catalog is built once at startup from aftercare.content and shared by
every request. It never changes; per-user completion lives in the
progress table and is laid over a copy of the template on the way out.
"""

from collections.abc import Iterable
from datetime import datetime
from typing import Optional

from aftercare.content.myomectomy import MYOMECTOMY_SECTIONS
from aftercare.db.models import BrochureProgress
from aftercare.errors import NotFound
from aftercare.schemas.brochure import (
    BrochureItem,
    BrochureSection,
    ContentBlock,
    ProgressSummary,
    SectionSummary,
)


class SectionNotFound(NotFound):
    error = "Section not found"


def _build_sections(raw: list[dict]) -> list[BrochureSection]:
    return [
        BrochureSection(
            id=section["id"],
            title=section["title"],
            content=[
                ContentBlock(
                    id=block["id"],
                    title=block["title"],
                    items=[BrochureItem(id=i, text=t) for i, t in block["items"]],
                )
                for block in section["content"]
            ],
        )
        for section in raw
    ]


class BrochureCatalog:
    """Immutable section -> block -> item tree with id lookups."""

    def __init__(self, sections: Optional[list[BrochureSection]] = None):
        self._sections = sections if sections is not None else _build_sections(
            MYOMECTOMY_SECTIONS
        )
        self._by_id = {s.id: s for s in self._sections}
        self._items = {
            (s.id, item.id)
            for s in self._sections
            for block in s.content
            for item in block.items
        }

    def sections(self) -> list[BrochureSection]:
        return [s.model_copy(deep=True) for s in self._sections]

    def get_section(self, section_id: str) -> BrochureSection:
        section = self._by_id.get(section_id)
        if section is None:
            raise SectionNotFound(f"Section '{section_id}' not found")
        return section.model_copy(deep=True)

    def has_item(self, section_id: str, item_id: str) -> bool:
        return (section_id, item_id) in self._items

    def all_items(self) -> list[tuple[str, BrochureItem]]:
        """(section_id, item) pairs in document order."""
        return [
            (s.id, item.model_copy())
            for s in self._sections
            for block in s.content
            for item in block.items
        ]

    @property
    def total_items(self) -> int:
        return len(self._items)

    def search_sections(
        self, search: str = "", page: int = 1, limit: int = 10
    ) -> tuple[list[SectionSummary], int]:
        """Case-insensitive title search, one page of summaries + total."""
        needle = search.strip().lower()
        matches = [
            s for s in self._sections if not needle or needle in s.title.lower()
        ]
        start = (page - 1) * limit
        docs = [
            SectionSummary(id=s.id, title=s.title, content_count=len(s.content))
            for s in matches[start:start + limit]
        ]
        return docs, len(matches)


def overlay_progress(
    sections: list[BrochureSection], records: Iterable[BrochureProgress]
) -> list[BrochureSection]:
    """Copy `completed`/`notes` from progress rows onto matching items."""
    by_key = {(r.section_id, r.item_id): r for r in records}
    for section in sections:
        for block in section.content:
            for item in block.items:
                record = by_key.get((section.id, item.id))
                if record is not None:
                    item.completed = record.completed
                    item.notes = record.notes or None
    return sections


def summarize_progress(
    catalog: BrochureCatalog, records: Iterable[BrochureProgress]
) -> ProgressSummary:
    """Share of brochure items the user has marked complete."""
    records = [r for r in records if catalog.has_item(r.section_id, r.item_id)]
    completed = sum(1 for r in records if r.completed)
    total = catalog.total_items
    last: Optional[datetime] = max(
        (r.updated_at for r in records if r.updated_at), default=None
    )
    return ProgressSummary(
        total_items=total,
        completed_items=completed,
        progress_percentage=round(completed / total * 100, 1) if total else 0.0,
        last_updated=last,
    )
