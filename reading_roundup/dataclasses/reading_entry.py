#!/usr/bin/env python3
"""
reading_entry.py
-------------------
Dataclasses representing reading-list entries.

This module holds the intermediary data structures between:
- Tagged lines in dated journal notes
- Rows of the ``reading_list`` catalog table

Classes:
    ReadState: Tri-valued read status (unknown / to-be-read / read)
    ReadingListEntry: One candidate or cataloged entry
    CatalogRow: A cataloged entry with its id and roundup bookkeeping
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from dataclasses import dataclass, replace
from datetime import date
from enum import Enum
from typing import List, Optional


class ReadState(str, Enum):
    """
    Enumeration of read states.

    - UNKNOWN: Tagged ``#reading``; not yet classified
    - TO_BE_READ: Tagged ``#tbr``
    - READ: Tagged ``#read``

    Persisted as a nullable boolean: NULL, 0 and 1 respectively.
    """

    UNKNOWN = "unknown"
    TO_BE_READ = "to-be-read"
    READ = "read"

    @classmethod
    def choices(cls) -> List[str]:
        """Get all available read state choices."""
        return [state.value for state in cls]

    @classmethod
    def from_tag(cls, tag: str) -> "ReadState":
        """
        Classify a journal tag.

        Args:
            tag: Tag name without the leading '#' ("reading", "read", "tbr")

        Returns:
            ReadState for the tag; anything unrecognized is UNKNOWN
        """
        if tag == "read":
            return cls.READ
        if tag == "tbr":
            return cls.TO_BE_READ
        return cls.UNKNOWN

    @classmethod
    def from_db(cls, value: Optional[bool]) -> "ReadState":
        """Convert the persistent nullable boolean into a ReadState."""
        if value is None:
            return cls.UNKNOWN
        return cls.READ if value else cls.TO_BE_READ

    def to_db(self) -> Optional[bool]:
        """Convert into the persistent nullable boolean."""
        if self is ReadState.UNKNOWN:
            return None
        return self is ReadState.READ

    @property
    def display_name(self) -> str:
        """Get human-readable display name."""
        display_map = {
            ReadState.UNKNOWN: "Unknown",
            ReadState.TO_BE_READ: "To be read",
            ReadState.READ: "Read",
        }
        return display_map[self]

    @property
    def sigil(self) -> str:
        """Single-character marker used in listings."""
        return {
            ReadState.UNKNOWN: "?",
            ReadState.TO_BE_READ: "📕",
            ReadState.READ: "📖",
        }[self]


@dataclass
class ReadingListEntry:
    """
    A single reading-list entry.

    Attributes:
        url: Absolute URL of the linked article; the catalog's natural key
        source_date: Date of the journal note the entry came from
        original_text: Full unmodified journal line
        body_text: Editable text of the entry, initially the tagged body
        read: Read state
    """

    url: str
    source_date: date
    original_text: str
    body_text: str
    read: ReadState = ReadState.UNKNOWN

    def with_line(self, line: str, read: ReadState) -> "ReadingListEntry":
        """Return a copy carrying the full journal line and tag read state."""
        return replace(self, original_text=line, read=read)

    def to_database_metadata(self) -> dict:
        """Column values for an insert into ``reading_list``."""
        return {
            "url": self.url,
            "source_date": self.source_date,
            "original_text": self.original_text,
            "body_text": self.body_text,
            "read": self.read.to_db(),
        }

    def __str__(self) -> str:
        return f"{self.source_date}: {self.url} -- {self.body_text}"


@dataclass
class CatalogRow:
    """
    A cataloged entry as listed by the store.

    Attributes:
        id: Surrogate key assigned by the store
        entry: The entry itself
        roundup_count: Number of distinct roundups the entry belongs to
        included: Whether the entry belongs to the roundup being edited
    """

    id: int
    entry: ReadingListEntry
    roundup_count: int = 0
    included: bool = False
