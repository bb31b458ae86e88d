#!/usr/bin/env python3
"""
fs.py
-------------------
Filesystem utilities for journal discovery.

Functions:
    is_journal_file: Check the exact ``md`` extension of a note
    decode_stem: Get a filename stem as valid UTF-8 text
    parse_date_from_stem: Parse a strict YYYY-MM-DD stem
    date_to_filename: Convert a date to a ``YYYY-MM-DD.md`` filename

Usage:
    from reading_roundup.utils.fs import parse_date_from_stem

    note_date = parse_date_from_stem("2024-03-15")
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import re
from datetime import date
from pathlib import Path
from typing import Optional

JOURNAL_SUFFIX = ".md"

_STEM_DATE = re.compile(r"^(\d{4})-(\d{2})-(\d{2})$")


def is_journal_file(path: Path) -> bool:
    """
    Check whether a path has the exact journal extension.

    The comparison is case-sensitive: ``note.MD`` is not a journal file.
    """
    return path.suffix == JOURNAL_SUFFIX


def decode_stem(path: Path) -> Optional[str]:
    """
    Get the filename stem as text.

    Filenames that are not valid UTF-8 come back from the OS with surrogate
    escapes; those stems are rejected.

    Returns:
        The stem, or None if it is empty or not valid UTF-8
    """
    stem = path.stem
    if not stem:
        return None
    try:
        stem.encode("utf-8")
    except UnicodeEncodeError:
        return None
    return stem


def parse_date_from_stem(stem: str) -> date:
    """
    Parse a date from a YYYY-MM-DD filename stem.

    Args:
        stem: Filename without extension

    Returns:
        datetime.date for the stem

    Raises:
        ValueError: If the stem is not a valid YYYY-MM-DD calendar date
    """
    match = _STEM_DATE.match(stem)
    if not match:
        raise ValueError(f"Unsupported date format in filename: {stem}")
    year, month, day = (int(part) for part in match.groups())
    try:
        return date(year, month, day)
    except ValueError as e:
        raise ValueError(f"Invalid date in filename: {stem}") from e


def date_to_filename(value: date) -> str:
    """
    Convert a date to the filename of its note or roundup document.

    Examples:
        >>> date_to_filename(date(2024, 3, 1))
        '2024-03-01.md'
    """
    return f"{value.isoformat()}{JOURNAL_SUFFIX}"
