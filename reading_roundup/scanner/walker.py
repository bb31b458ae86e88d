#!/usr/bin/env python3
"""
walker.py
-------------------
Scan a journal tree for tagged reading-list lines.

Every ``YYYY-MM-DD.md`` note under the journal directory is read line by
line. Lines carrying one of the reading tags become entries:

    - #reading check out [Foo](https://foo.example/)   -> read state unknown
    - #tbr https://bar.example/                         -> to be read
    - #read: <https://baz.example/>                     -> read

Errors are isolated per file and per directory: a broken note yields one
error and no entries, and never stops the walk.

Key Features:
    - Iterative traversal with an explicit directory stack
    - Symlinks are not followed (no cycles)
    - Date of every entry taken from the note's filename stem
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import os
import re
from datetime import date
from pathlib import Path
from typing import List, Optional, Tuple

# --- Local imports ---
from reading_roundup.core.exceptions import (
    InvalidFile,
    ScanError,
    ScanIOError,
    StatIOError,
)
from reading_roundup.core.logging_manager import RoundupLogger, safe_logger
from reading_roundup.dataclasses.reading_entry import ReadingListEntry, ReadState
from reading_roundup.utils import fs

from .body import scan_body

# Group 1 is the tag, group 2 the body.
# The prefix is lazy on purpose: the first tag on the line wins, where a
# greedy "^.*#" would take the last one.
TAG_PATTERN = re.compile(r"^.*?#(reading|read|tbr)[ :]*(.*)$")


def scan_line(source_date: date, line: str) -> Optional[ReadingListEntry]:
    """
    Scan one journal line.

    Args:
        source_date: Date of the note the line belongs to
        line: Line without its terminator

    Returns:
        Entry carrying the full line and the tag's read state, or None
        when the line is not tagged

    Raises:
        MarkdownError, MissingLink: If the tagged body has no usable link
    """
    match = TAG_PATTERN.match(line)
    if match is None:
        return None

    tag, body = match.group(1), match.group(2)
    entry = scan_body(source_date, body)
    return entry.with_line(line, ReadState.from_tag(tag))


def scan_file(path: Path) -> List[ReadingListEntry]:
    """
    Scan a single journal note.

    Args:
        path: Path of a ``.md`` note named ``YYYY-MM-DD.md``

    Returns:
        Entries of the note, in line order

    Raises:
        InvalidFile: If the stem is not valid text or not YYYY-MM-DD
        ScanIOError: If the note cannot be read as UTF-8
        MarkdownError, MissingLink: On the first bad tagged line
    """
    path = Path(path)
    stem = fs.decode_stem(path)
    if stem is None:
        raise InvalidFile("cannot determine file stem, or stem is not UTF-8")

    try:
        source_date = fs.parse_date_from_stem(stem)
    except ValueError as e:
        raise InvalidFile("file stem is not YYYY-MM-DD") from e

    entries: List[ReadingListEntry] = []
    try:
        with open(path, "r", encoding="utf-8") as handle:
            for raw_line in handle:
                entry = scan_line(source_date, raw_line.rstrip("\r\n"))
                if entry is not None:
                    entries.append(entry)
    except (OSError, UnicodeDecodeError) as e:
        raise ScanIOError(e) from e

    return entries


def scan_files(
    directory: Path, logger: Optional[RoundupLogger] = None
) -> Tuple[List[ReadingListEntry], List[ScanError]]:
    """
    Scan a journal tree recursively.

    Args:
        directory: Root of the journal tree
        logger: Optional logger

    Returns:
        Tuple of (entries, errors)
        - entries: Entries of every note that scanned cleanly
        - errors: One ScanError per failed note or unreadable directory,
          each carrying its path
    """
    log = safe_logger(logger)
    entries: List[ReadingListEntry] = []
    errors: List[ScanError] = []
    stack: List[Path] = [Path(directory)]

    while stack:
        current = stack.pop()
        log.log_debug("visiting directory", {"path": str(current)})

        try:
            with os.scandir(current) as it:
                children = sorted(it, key=lambda child: child.name)
        except OSError as e:
            log.log_warning("cannot list directory", {"path": str(current), "error": str(e)})
            errors.append(StatIOError(e).at(current))
            continue

        for child in children:
            child_path = Path(child.path)
            try:
                is_dir = child.is_dir(follow_symlinks=False)
                is_file = not is_dir and child.is_file(follow_symlinks=False)
            except OSError as e:
                errors.append(StatIOError(e).at(current))
                continue

            if is_dir:
                stack.append(child_path)
            elif is_file and fs.is_journal_file(child_path):
                log.log_debug("scanning file", {"path": str(child_path)})
                try:
                    found = scan_file(child_path)
                except ScanError as e:
                    log.log_warning(
                        "skipping file", {"path": str(child_path), "error": e.message}
                    )
                    errors.append(e.at(child_path))
                    continue
                entries.extend(found)

    log.log_operation(
        "scan_complete",
        {"directory": str(directory), "entries": len(entries), "errors": len(errors)},
    )
    return entries, errors
