#!/usr/bin/env python3
"""
managers package
--------------------
Entity managers for the reading-list catalog.

Available Managers:
    BaseManager: Abstract base class with common utilities
    EntryManager: Manages reading_list entries
    RoundupManager: Manages roundup membership

Usage:
    from reading_roundup.database.managers import EntryManager

    entries = EntryManager(session, logger)
"""
from .base_manager import BaseManager
from .entry_manager import EntryManager
from .roundup_manager import RoundupManager

__all__ = [
    "BaseManager",
    "EntryManager",
    "RoundupManager",
]
