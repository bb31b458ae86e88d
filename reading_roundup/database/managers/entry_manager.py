#!/usr/bin/env python3
"""
entry_manager.py
--------------------
Manages reading-list entries.

Key Features:
    - Idempotent bulk ingestion keyed on URL (first writer wins)
    - Editor updates of body text and read state
    - Catalog listings with roundup counts

Usage:
    with db.session_scope():
        total = db.entries.bulk_ingest(entries)
        row = db.entries.get(entry_id)
"""
from __future__ import annotations

from typing import Iterable, List, Optional

from sqlalchemy import func, select, update
from sqlalchemy.dialects.sqlite import insert as sqlite_insert

from reading_roundup.dataclasses.reading_entry import (
    CatalogRow,
    ReadingListEntry,
    ReadState,
)
from reading_roundup.database.decorators import handle_db_errors, log_database_operation
from reading_roundup.database.models import ReadingItem
from .base_manager import BaseManager


class EntryManager(BaseManager):
    """
    Manages reading_list table operations.

    Entries are never deleted. Their url, source_date and original_text
    are fixed at creation; body_text and read are editable.
    """

    @handle_db_errors
    @log_database_operation("count_entries")
    def count(self) -> int:
        """Total number of cataloged entries."""
        return self.session.execute(
            select(func.count()).select_from(ReadingItem)
        ).scalar_one()

    @handle_db_errors
    @log_database_operation("bulk_ingest")
    def bulk_ingest(self, entries: Iterable[ReadingListEntry]) -> int:
        """
        Insert entries, skipping URLs already in the catalog.

        An existing row keeps its body_text, read state and dates.

        Args:
            entries: Entries to ingest

        Returns:
            Total number of entries in the catalog afterwards
        """
        rows = [entry.to_database_metadata() for entry in entries]
        if rows:
            stmt = sqlite_insert(ReadingItem.__table__).on_conflict_do_nothing(
                index_elements=["url"]
            )
            self._execute_with_retry(lambda: self.session.execute(stmt, rows))

            if self.logger:
                self.logger.log_debug("Ingested entries", {"offered": len(rows)})

        return self.count()

    @handle_db_errors
    @log_database_operation("get_entry_id")
    def get_id_by_url(self, url: str) -> Optional[int]:
        """Id of the entry stored under a URL, if any."""
        return self.session.execute(
            select(ReadingItem.id).where(ReadingItem.url == url)
        ).scalar_one_or_none()

    @handle_db_errors
    @log_database_operation("update_entry")
    def update(self, entry_id: int, body_text: str, read: ReadState) -> int:
        """
        Set body text and read state of an entry.

        Args:
            entry_id: Entry id
            body_text: New body text
            read: New read state

        Returns:
            Number of rows updated (0 when the id does not exist)
        """
        result = self._execute_with_retry(
            lambda: self.session.execute(
                update(ReadingItem.__table__)
                .where(ReadingItem.__table__.c.id == entry_id)
                .values(body_text=body_text, read=read.to_db())
            )
        )
        return result.rowcount

    @handle_db_errors
    @log_database_operation("get_entry")
    def get(self, entry_id: int) -> Optional[CatalogRow]:
        """
        Retrieve an entry with its total roundup count.

        Returns:
            CatalogRow, or None when the id does not exist
        """
        counts = self._roundup_counts()
        stmt = (
            select(ReadingItem, counts.c.roundup_count)
            .outerjoin(counts, ReadingItem.id == counts.c.entry_id)
            .where(ReadingItem.id == entry_id)
            .execution_options(populate_existing=True)
        )
        result = self.session.execute(stmt).first()
        if result is None:
            return None
        item, count = result
        return self._to_row(item, count)

    @handle_db_errors
    @log_database_operation("list_entries")
    def list_with_counts(self) -> List[CatalogRow]:
        """
        List every entry with its roundup count.

        Least-used entries come first, oldest first among equals.
        """
        counts = self._roundup_counts()
        count_col = func.coalesce(counts.c.roundup_count, 0)
        stmt = (
            select(ReadingItem, count_col.label("roundup_count"))
            .outerjoin(counts, ReadingItem.id == counts.c.entry_id)
            .order_by(count_col.asc(), ReadingItem.source_date.asc(), ReadingItem.id.asc())
            .execution_options(populate_existing=True)
        )
        return [self._to_row(item, count) for item, count in self.session.execute(stmt)]
