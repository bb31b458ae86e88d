#!/usr/bin/env python3
"""
base_manager.py
--------------------
Base manager providing common utilities for catalog managers.

Key Features:
    - Retry logic for SQLite lock contention with other processes
    - Shared count subqueries used by listings
    - Conversion of result rows into CatalogRow objects

Usage:
    Subclass BaseManager and use self.session inside a
    ``ReadingDB.session_scope()``; the scope owns commit and rollback.
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import time
from abc import ABC
from typing import Any, Callable, Optional

# --- Third party imports ---
from sqlalchemy import Subquery, distinct, func, select
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session

# --- Local imports ---
from reading_roundup.core.exceptions import StoreError
from reading_roundup.core.logging_manager import RoundupLogger, safe_logger
from reading_roundup.dataclasses.reading_entry import CatalogRow
from reading_roundup.database.models import ReadingItem, roundup_contents


class BaseManager(ABC):
    """
    Abstract base manager providing common operations and utilities.

    Attributes:
        session: SQLAlchemy session for database operations
        logger: Optional logger for operation tracking
    """

    def __init__(self, session: Session, logger: Optional[RoundupLogger] = None):
        """
        Initialize the base manager.

        Args:
            session: SQLAlchemy session
            logger: Optional logger for operation tracking
        """
        self.session = session
        self.logger = logger

    # -------------------------------------------------------------------------
    # Core Helper Methods
    # -------------------------------------------------------------------------

    def _execute_with_retry(
        self,
        operation: Callable,
        max_retries: int = 3,
        retry_delay: float = 0.1,
    ) -> Any:
        """
        Execute database operation with retry on lock.

        Args:
            operation: Callable that performs the operation
            max_retries: Maximum number of retry attempts
            retry_delay: Base delay between retries (exponential backoff)

        Returns:
            Result of the operation

        Raises:
            OperationalError: If all retries exhausted
        """
        for attempt in range(max_retries):
            try:
                return operation()
            except OperationalError as e:
                error_msg = str(e).lower()

                if (
                    "locked" in error_msg or "busy" in error_msg
                ) and attempt < max_retries - 1:
                    wait_time = retry_delay * (2**attempt)

                    safe_logger(self.logger).log_debug(
                        f"Database locked, retrying in {wait_time}s",
                        {"attempt": attempt + 1, "max_retries": max_retries},
                    )

                    time.sleep(wait_time)
                    continue

                raise

        raise StoreError("Retry loop completed without success")

    @staticmethod
    def _roundup_counts() -> Subquery:
        """Subquery: number of distinct roundup dates per entry."""
        return (
            select(
                roundup_contents.c.entry.label("entry_id"),
                func.count(distinct(roundup_contents.c.date)).label("roundup_count"),
            )
            .group_by(roundup_contents.c.entry)
            .subquery("counts")
        )

    @staticmethod
    def _to_row(item: ReadingItem, roundup_count: Any, included: Any = False) -> CatalogRow:
        """Build a CatalogRow from an ORM row and its bookkeeping columns."""
        return CatalogRow(
            id=item.id,
            entry=item.to_entry(),
            roundup_count=int(roundup_count or 0),
            included=bool(included),
        )
