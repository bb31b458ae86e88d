#!/usr/bin/env python3
"""
models.py
--------------------
SQLAlchemy ORM models for the reading-list catalog.

Tables:
    - reading_list: One row per distinct URL (ReadingItem)
    - roundup_contents: Roundup membership, one row per (date, entry)

A roundup has no row of its own: it is the set of ``roundup_contents``
rows sharing a date.

Notes
==============
    - The schema is owned outside the store; ``ReadingDB`` never creates
      or migrates tables. ``Base.metadata.create_all`` is only called by
      ``readdb init`` and by the test fixtures.
    - ``read`` is a nullable boolean: NULL unknown, 0 to-be-read, 1 read
    - Dates are stored as 'YYYY-MM-DD' text
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from datetime import date
from typing import Optional

# --- Third party ---
from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    Date,
    ForeignKey,
    Integer,
    Table,
    Text,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

# --- Local ---
from reading_roundup.dataclasses.reading_entry import ReadingListEntry, ReadState


# ----- Base ORM class -----
class Base(DeclarativeBase):
    """
    Base class for all ORM models.

    Provides access to the metadata object for table creation.
    """

    pass


# ----- Roundup membership -----
roundup_contents = Table(
    "roundup_contents",
    Base.metadata,
    Column("date", Date, nullable=False, primary_key=True),
    Column(
        "entry",
        Integer,
        ForeignKey("reading_list.id"),
        primary_key=True,
    ),
)


# ----- Reading list -----
class ReadingItem(Base):
    """
    A cataloged reading-list entry.

    Attributes:
        id: Surrogate key, stable for the entry's lifetime
        url: Absolute URL of the article (unique natural key)
        source_date: Date of the journal note the entry came from
        original_text: Full journal line, never modified after creation
        body_text: Editable entry text
        read: Nullable boolean read flag
    """

    __tablename__ = "reading_list"
    __table_args__ = (CheckConstraint("url != ''", name="ck_reading_list_url"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    url: Mapped[str] = mapped_column(Text, unique=True, nullable=False)
    source_date: Mapped[date] = mapped_column(Date, nullable=False)
    original_text: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    body_text: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    read: Mapped[Optional[bool]] = mapped_column(Boolean, nullable=True)

    @property
    def read_state(self) -> ReadState:
        """Read flag as a ReadState."""
        return ReadState.from_db(self.read)

    def to_entry(self) -> ReadingListEntry:
        """Convert the row into a ReadingListEntry."""
        return ReadingListEntry(
            url=self.url,
            source_date=self.source_date,
            original_text=self.original_text or "",
            body_text=self.body_text or "",
            read=self.read_state,
        )

    def __repr__(self) -> str:
        return f"<ReadingItem(id={self.id}, url={self.url!r}, source_date={self.source_date})>"
