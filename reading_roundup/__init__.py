"""
Reading Roundup
===============

A personal reading-list curation service.

The journal is a tree of dated markdown notes (YYYY-MM-DD.md). Lines tagged
#reading, #read or #tbr carry links worth keeping; they are collected into a
SQLite catalog, grouped into dated roundups and published as markdown posts.

Main Components:
    - scanner: Link extraction from tagged lines and journal trees
    - database: SQLAlchemy catalog with entry and roundup managers
    - pipeline: Update (journal -> catalog) and export (roundup -> markdown)
    - core: Logging, validation, paths, exceptions
    - dataclasses: Entry data structures
    - utils: Filesystem and markdown helpers

Primary Interfaces:
    - reading_roundup.pipeline.journal2sql: Update CLI (journal2sql)
    - reading_roundup.pipeline.roundup2md: Export CLI (roundup2md)
    - reading_roundup.database.cli: Catalog management CLI (readdb)
    - reading_roundup.database.manager.ReadingDB: Main store interface

Example Usage:
    >>> from reading_roundup import ReadingDB, DB_PATH
    >>> db = ReadingDB(DB_PATH)
    >>> rows = db.get_roundup("2024-03-01")
"""

__version__ = "1.0.0"
__author__ = "Reading Roundup Project"

# Expose primary interfaces for convenience
from reading_roundup.database.manager import ReadingDB
from reading_roundup.core.paths import DATA_DIR, DB_PATH, EXPORT_DIR, JOURNAL_DIR, LOG_DIR

__all__ = [
    "ReadingDB",
    "DATA_DIR",
    "DB_PATH",
    "EXPORT_DIR",
    "JOURNAL_DIR",
    "LOG_DIR",
]
