#!/usr/bin/env python3
"""
roundup_manager.py
--------------------
Manages roundup membership.

A roundup is the set of roundup_contents rows sharing a date. Membership
for a date is always replaced as a whole.

Usage:
    with db.session_scope():
        db.roundups.set(date(2024, 3, 1), [2, 4])
        rows = db.roundups.get_rows(date(2024, 3, 1))
"""
from __future__ import annotations

from datetime import date
from typing import List, Sequence

from sqlalchemy import delete, func, insert, literal, select

from reading_roundup.dataclasses.reading_entry import CatalogRow
from reading_roundup.database.decorators import handle_db_errors, log_database_operation
from reading_roundup.database.models import ReadingItem, roundup_contents
from .base_manager import BaseManager


class RoundupManager(BaseManager):
    """Manages roundup_contents table operations."""

    @handle_db_errors
    @log_database_operation("set_roundup")
    def set(self, roundup_date: date, entry_ids: Sequence[int]) -> None:
        """
        Replace the membership of a roundup.

        Args:
            roundup_date: Roundup date
            entry_ids: Ids of the entries to include (deduplicated)

        Raises:
            StoreError: If an id is not in the catalog
        """
        ids = list(dict.fromkeys(entry_ids))

        self.session.execute(
            delete(roundup_contents).where(roundup_contents.c.date == roundup_date)
        )
        if ids:
            self._execute_with_retry(
                lambda: self.session.execute(
                    insert(roundup_contents),
                    [{"date": roundup_date, "entry": entry_id} for entry_id in ids],
                )
            )

        if self.logger:
            self.logger.log_debug(
                "Roundup membership replaced",
                {"date": roundup_date, "entries": len(ids)},
            )

    @handle_db_errors
    @log_database_operation("list_roundups")
    def list_dates(self) -> List[date]:
        """Distinct roundup dates, ascending."""
        stmt = (
            select(roundup_contents.c.date)
            .distinct()
            .order_by(roundup_contents.c.date.asc())
        )
        return list(self.session.execute(stmt).scalars())

    @handle_db_errors
    @log_database_operation("list_roundups_by_entry")
    def list_dates_for_entry(self, entry_id: int) -> List[date]:
        """Distinct dates of the roundups containing an entry, ascending."""
        stmt = (
            select(roundup_contents.c.date)
            .where(roundup_contents.c.entry == entry_id)
            .distinct()
            .order_by(roundup_contents.c.date.asc())
        )
        return list(self.session.execute(stmt).scalars())

    @handle_db_errors
    @log_database_operation("get_roundup")
    def get_rows(self, roundup_date: date) -> List[CatalogRow]:
        """
        List every entry for the roundup editor.

        Members of the roundup come first; then least-used entries, oldest
        first among equals.
        """
        counts = self._roundup_counts()
        members = (
            select(
                roundup_contents.c.entry.label("entry_id"),
                literal(1).label("included"),
            )
            .where(roundup_contents.c.date == roundup_date)
            .subquery("members")
        )
        count_col = func.coalesce(counts.c.roundup_count, 0)
        included_col = func.coalesce(members.c.included, 0)
        stmt = (
            select(ReadingItem, count_col, included_col)
            .outerjoin(counts, ReadingItem.id == counts.c.entry_id)
            .outerjoin(members, ReadingItem.id == members.c.entry_id)
            .order_by(
                included_col.desc(),
                count_col.asc(),
                ReadingItem.source_date.asc(),
                ReadingItem.id.asc(),
            )
            .execution_options(populate_existing=True)
        )
        return [
            self._to_row(item, count, included)
            for item, count, included in self.session.execute(stmt)
        ]

    @handle_db_errors
    @log_database_operation("get_roundup_bodies")
    def get_bodies(self, roundup_date: date) -> List[str]:
        """Body texts of the members of a roundup."""
        stmt = (
            select(ReadingItem.body_text)
            .join(roundup_contents, roundup_contents.c.entry == ReadingItem.id)
            .where(roundup_contents.c.date == roundup_date)
            .order_by(ReadingItem.source_date.asc(), ReadingItem.id.asc())
        )
        return [body or "" for body in self.session.execute(stmt).scalars()]
