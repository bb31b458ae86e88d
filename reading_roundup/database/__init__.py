#!/usr/bin/env python3
"""
Reading Roundup Database Package
--------------------------------
SQLite catalog of reading-list entries and the roundups curated from them.

This package provides:
- The ORM schema (reading_list, roundup_contents)
- ReadingDB, the single-writer store handle
- Entity managers used inside ReadingDB.session_scope()
- Logging and error-translation decorators for store operations
"""

from reading_roundup.core.exceptions import StoreError, ValidationError
from .decorators import handle_db_errors, log_database_operation
from .manager import ReadingDB
from .managers import EntryManager, RoundupManager
from .models import Base, ReadingItem, roundup_contents

__version__ = "1.0.0"

__all__ = [
    # Main manager
    "ReadingDB",
    # Schema
    "Base",
    "ReadingItem",
    "roundup_contents",
    # Managers
    "EntryManager",
    "RoundupManager",
    # Exceptions
    "StoreError",
    "ValidationError",
    # Decorators
    "log_database_operation",
    "handle_db_errors",
]
