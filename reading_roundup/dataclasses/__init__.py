"""
dataclasses package
-------------------
Dataclass definitions for reading-list entries.

- ReadState: Tri-valued read status
- ReadingListEntry: Entry extracted from a journal line
- CatalogRow: Cataloged entry with id and roundup bookkeeping
"""
from reading_roundup.dataclasses.reading_entry import (
    CatalogRow,
    ReadingListEntry,
    ReadState,
)

__all__ = ["CatalogRow", "ReadingListEntry", "ReadState"]
