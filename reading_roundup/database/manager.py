#!/usr/bin/env python3
"""
manager.py
--------------------
Catalog store for the Reading Roundup system.

Provides the ReadingDB class, the single-writer handle on the SQLite
reading-list catalog. Handles:
    - One SQLAlchemy engine holding exactly one connection
    - Mutual exclusion: every operation holds the store lock throughout
    - Transaction management with automatic rollback
    - Conversion of database failures into StoreError

Core Operations:
    Ingestion:
        - bulk_ingest: Insert entries, skipping known URLs
        - ingest_update: Count, ingest and count again atomically

    Edit:
        - create_entry: Scan a body and add it as a new entry
        - update_entry: Change body text and read state
        - edit_entry: Change either field, keeping the other, atomically
        - get_entry: One entry with its roundup count
        - list_entries: Every entry with its roundup count

    Curation:
        - set_roundup: Replace the membership of a roundup
        - get_roundup: Every entry, roundup members first
        - list_roundups / list_roundups_by_entry: Roundup dates

    Export:
        - compose_roundup_markdown: Roundup document with front-matter

Notes
==============
- The schema is expected to exist; the store never creates tables
- Foreign keys are enforced on the connection, so roundup members must
  be cataloged entries
- The lock is not reentrant: never call a ReadingDB operation from inside
  session_scope()
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import threading
from contextlib import contextmanager
from datetime import date, datetime
from pathlib import Path
from typing import Iterable, Iterator, List, Optional, Sequence, Tuple, Union

# --- Third party ---
from sqlalchemy import Engine, create_engine, event
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

# --- Local imports ---
from reading_roundup.core.exceptions import StoreError
from reading_roundup.core.logging_manager import RoundupLogger
from reading_roundup.core.validators import DataValidator
from reading_roundup.dataclasses.reading_entry import (
    CatalogRow,
    ReadingListEntry,
    ReadState,
)
from reading_roundup.scanner.body import scan_body
from reading_roundup.utils import md

from .decorators import log_database_operation
from .managers import EntryManager, RoundupManager



class ReadingDB:
    """
    Single-writer handle on the reading-list catalog.

    Attributes:
        db_path (Path): Filesystem path to the SQLite database file.
        engine (Engine): SQLAlchemy engine (one pooled connection).
        SessionLocal (sessionmaker): SQLAlchemy session factory.
        logger (RoundupLogger | None): Optional operation logger.

    Usage:
        db = ReadingDB("~/notes/readdb.sqlite")
        total = db.bulk_ingest(entries)

        with db.session_scope():
            rows = db.roundups.get_rows(date(2024, 3, 1))
    """

    # ---- Initialization ----
    def __init__(
        self,
        db_path: Union[str, Path],
        log_dir: Optional[Union[str, Path]] = None,
        logger: Optional[RoundupLogger] = None,
    ) -> None:
        """
        Initialize database engine and session factory.

        Args:
            db_path (str | Path): Path to the SQLite file.
            log_dir (str | Path): Directory for log files (optional)
            logger (RoundupLogger): Logger to use instead of creating one
        """
        self.db_path = Path(db_path).expanduser().resolve()

        self._owns_logger = logger is None and bool(log_dir)
        if logger is not None:
            self.logger: Optional[RoundupLogger] = logger
        elif log_dir:
            self.log_dir = Path(log_dir).expanduser().resolve() / "system"
            self.logger = RoundupLogger(self.log_dir, component_name="database")
        else:
            self.logger = None

        self._lock = threading.Lock()
        self._entry_manager: Optional[EntryManager] = None
        self._roundup_manager: Optional[RoundupManager] = None

        self._setup_engine()

    def _setup_engine(self) -> None:
        """Initialize database engine and session factory."""
        try:
            if self.logger:
                self.logger.log_operation(
                    "database_init_start", {"db_path": str(self.db_path)}
                )

            self.engine: Engine = create_engine(
                f"sqlite:///{self.db_path}",
                echo=False,
                poolclass=StaticPool,
                connect_args={"check_same_thread": False},
            )
            event.listen(self.engine, "connect", _enable_foreign_keys)

            self.SessionLocal: sessionmaker = sessionmaker(
                bind=self.engine,
                autoflush=True,
                expire_on_commit=False,
            )

            if self.logger:
                self.logger.log_operation("database_init_complete", {"success": True})

        except SQLAlchemyError as e:
            if self.logger:
                self.logger.log_error(e, {"operation": "database_init"})
            raise StoreError(f"Database initialization failed: {e}", cause=e) from e

    def close(self) -> None:
        """Release the connection, and the log files of a logger created here."""
        with self._lock:
            self.engine.dispose()
        if self._owns_logger:
            self.logger.close()

    # ---- Session Management ----
    @contextmanager
    def session_scope(self) -> Iterator[Session]:
        """
        Provide an exclusive transactional scope around operations.

        Acquires the store lock, binds the entity managers to a new session,
        commits on success and rolls back on any exception. The lock is
        released on every exit path.

        Raises:
            StoreError: For any SQLAlchemy failure, after rollback
        """
        with self._lock:
            session = self.SessionLocal()
            session_id = datetime.now().strftime("%Y%m%d_%H%M%S_%f")

            self._entry_manager = EntryManager(session, self.logger)
            self._roundup_manager = RoundupManager(session, self.logger)

            if self.logger:
                self.logger.log_debug("session_start", {"session_id": session_id})

            try:
                yield session
                session.commit()
                if self.logger:
                    self.logger.log_debug("session_commit", {"session_id": session_id})

            except Exception as e:
                session.rollback()
                if self.logger:
                    self.logger.log_error(
                        e, {"operation": "session_rollback", "session_id": session_id}
                    )
                if isinstance(e, SQLAlchemyError):
                    raise StoreError(f"Database operation failed: {e}", cause=e) from e
                raise
            finally:
                self._entry_manager = None
                self._roundup_manager = None

                session.close()
                if self.logger:
                    self.logger.log_debug("session_close", {"session_id": session_id})

    @property
    def entries(self) -> EntryManager:
        """
        Access EntryManager for entry operations.

        Raises:
            StoreError: If accessed outside of session_scope context
        """
        if self._entry_manager is None:
            raise StoreError(
                "EntryManager requires active session. "
                "Use within session_scope: "
                "with db.session_scope(): db.entries.get(...)"
            )
        return self._entry_manager

    @property
    def roundups(self) -> RoundupManager:
        """
        Access RoundupManager for roundup operations.

        Raises:
            StoreError: If accessed outside of session_scope context
        """
        if self._roundup_manager is None:
            raise StoreError(
                "RoundupManager requires active session. "
                "Use within session_scope: "
                "with db.session_scope(): db.roundups.set(...)"
            )
        return self._roundup_manager

    # -------------------------------------------------------------------------
    # Ingestion
    # -------------------------------------------------------------------------

    @log_database_operation("count_entries")
    def count_entries(self) -> int:
        """Total number of cataloged entries."""
        with self.session_scope():
            return self.entries.count()

    @log_database_operation("bulk_ingest")
    def bulk_ingest(self, entries: Iterable[ReadingListEntry]) -> int:
        """
        Insert entries in one transaction; known URLs are left untouched.

        Returns:
            Total number of entries afterwards
        """
        with self.session_scope():
            return self.entries.bulk_ingest(entries)

    @log_database_operation("ingest_update")
    def ingest_update(self, entries: Iterable[ReadingListEntry]) -> Tuple[int, int]:
        """
        Count, ingest and count again without any interleaved mutation.

        Returns:
            Tuple of (count_before, count_after)
        """
        with self.session_scope():
            before = self.entries.count()
            after = self.entries.bulk_ingest(entries)
            return before, after

    # -------------------------------------------------------------------------
    # Edit
    # -------------------------------------------------------------------------

    @log_database_operation("create_entry")
    def create_entry(self, body_text: str, today: Optional[date] = None) -> int:
        """
        Add a single entry typed into the editor.

        The body is scanned like a journal line dated today. If its URL is
        already cataloged, nothing changes and the existing id is returned.

        Args:
            body_text: Markdown text containing the link
            today: Date to attribute the entry to (default: local today)

        Returns:
            Id of the entry stored under the body's URL

        Raises:
            MarkdownError, MissingLink: If the body has no usable link
            StoreError: If the store operation fails
        """
        entry = scan_body(today or date.today(), body_text)
        with self.session_scope():
            self.entries.bulk_ingest([entry])
            entry_id = self.entries.get_id_by_url(entry.url)

        if entry_id is None:
            raise StoreError(f"Entry vanished after insert: {entry.url}")
        return entry_id

    @log_database_operation("update_entry")
    def update_entry(
        self,
        entry_id: int,
        body_text: str,
        read: Union[ReadState, str, bool, None],
    ) -> int:
        """
        Set body text and read state of an entry.

        A missing id is not an error.

        Returns:
            Number of rows updated (0 or 1)
        """
        state = DataValidator.normalize_read_state(read)
        with self.session_scope():
            return self.entries.update(DataValidator.normalize_id(entry_id), body_text, state)

    @log_database_operation("edit_entry")
    def edit_entry(
        self,
        entry_id: int,
        body_text: Optional[str] = None,
        read: Optional[Union[ReadState, str]] = None,
    ) -> Optional[CatalogRow]:
        """
        Change the body text and/or read state of an entry in one transaction.

        Fields left as None keep their stored value, which is read under the
        same lock hold as the write.

        Returns:
            The edited entry, or None when the id does not exist
        """
        entry_id = DataValidator.normalize_id(entry_id)
        state = None if read is None else DataValidator.normalize_read_state(read)

        with self.session_scope():
            row = self.entries.get(entry_id)
            if row is None:
                return None
            self.entries.update(
                entry_id,
                row.entry.body_text if body_text is None else body_text,
                row.entry.read if state is None else state,
            )
            return self.entries.get(entry_id)

    @log_database_operation("get_entry")
    def get_entry(self, entry_id: int) -> Optional[CatalogRow]:
        """One entry with its total roundup count, or None."""
        with self.session_scope():
            return self.entries.get(DataValidator.normalize_id(entry_id))

    @log_database_operation("list_entries")
    def list_entries(self) -> List[CatalogRow]:
        """Every entry with its roundup count, least used first."""
        with self.session_scope():
            return self.entries.list_with_counts()

    # -------------------------------------------------------------------------
    # Curation
    # -------------------------------------------------------------------------

    @log_database_operation("set_roundup")
    def set_roundup(self, roundup_date: Union[date, str], entry_ids: Sequence[int]) -> None:
        """
        Replace the membership of a roundup atomically.

        Raises:
            StoreError: If an id is not cataloged; prior membership is kept
        """
        day = DataValidator.normalize_date(roundup_date)
        ids = DataValidator.normalize_ids(entry_ids)
        with self.session_scope():
            self.roundups.set(day, ids)

    @log_database_operation("list_roundups")
    def list_roundups(self) -> List[date]:
        """Distinct roundup dates, ascending."""
        with self.session_scope():
            return self.roundups.list_dates()

    @log_database_operation("list_roundups_by_entry")
    def list_roundups_by_entry(self, entry_id: int) -> List[date]:
        """Dates of the roundups containing an entry, ascending."""
        with self.session_scope():
            return self.roundups.list_dates_for_entry(DataValidator.normalize_id(entry_id))

    @log_database_operation("get_roundup")
    def get_roundup(self, roundup_date: Union[date, str]) -> List[CatalogRow]:
        """Every entry, members of the roundup first."""
        day = DataValidator.normalize_date(roundup_date)
        with self.session_scope():
            return self.roundups.get_rows(day)

    # -------------------------------------------------------------------------
    # Export
    # -------------------------------------------------------------------------

    @log_database_operation("compose_roundup_markdown")
    def compose_roundup_markdown(self, roundup_date: Union[date, str]) -> str:
        """
        Compose the publishable markdown document of a roundup.

        Front-matter with title and date, then each member's body text
        followed by a blank line.
        """
        day = DataValidator.normalize_date(roundup_date)
        with self.session_scope():
            bodies = self.roundups.get_bodies(day)

        parts = [md.roundup_frontmatter(day)]
        parts.extend(f"{body}\n\n" for body in bodies)
        return "".join(parts)


def _enable_foreign_keys(dbapi_connection, connection_record) -> None:
    """Switch on foreign key enforcement for a new SQLite connection."""
    cursor = dbapi_connection.cursor()
    try:
        cursor.execute("PRAGMA foreign_keys=ON")
    finally:
        cursor.close()
