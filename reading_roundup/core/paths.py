#!/usr/bin/env python3
"""
paths.py
-------------------
Path constants for the Reading Roundup project.

Defines the default locations used when a command is not given explicit
paths. Everything is relative to the project root:

    ROOT/
    ├── reading_roundup/   # Package code
    ├── data/
    │   ├── journal/       # Dated notes (YYYY-MM-DD.md), scanned for tags
    │   ├── roundups/      # Exported roundup documents
    │   └── readdb.sqlite  # Reading-list catalog
    └── logs/              # Application logs
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from pathlib import Path


def _get_project_root() -> Path:
    """
    Determine project root directory.

    Assumes this file is at ROOT/reading_roundup/core/paths.py.

    Returns:
        Path object for project root

    Raises:
        RuntimeError: If project root cannot be determined
    """
    current_file = Path(__file__).resolve()

    # Navigate up: paths.py -> core/ -> reading_roundup/ -> ROOT/
    root = current_file.parent.parent.parent

    if not (root / "reading_roundup").is_dir():
        raise RuntimeError(
            f"Cannot determine valid project root. "
            f"Expected {root / 'reading_roundup'} to exist. "
            f"Current file: {current_file}"
        )

    return root


# ----- Project directory -----
ROOT: Path = _get_project_root()
DATA_DIR = ROOT / "data"

# ---- Journal ----
JOURNAL_DIR = DATA_DIR / "journal"

# ---- Catalog ----
DB_PATH = DATA_DIR / "readdb.sqlite"

# ---- Exports ----
EXPORT_DIR = DATA_DIR / "roundups"

# ---- Logs ----
LOG_DIR = ROOT / "logs"
