#!/usr/bin/env python3
"""
exceptions.py
--------------------
Custom exception classes for the Reading Roundup project.

This module defines a hierarchy of exceptions used throughout the project
to handle specific error conditions in the scanning and storage subsystems.

Exception Hierarchy:
    Exception (built-in)
    ├── ScanError - Base for all journal scanning errors
    │   ├── ScanIOError - Reading a journal file failed
    │   ├── StatIOError - Enumerating or inspecting a directory failed
    │   ├── InvalidFile - Filename stem is not a usable date
    │   ├── MarkdownError - Markdown parsing of a tagged body failed
    │   └── MissingLink - Tagged body contains no usable link
    ├── StoreError - Any failure originating in the catalog store
    └── ValidationError - Malformed input for a store operation

Usage:
    from reading_roundup.core.exceptions import ScanError, StoreError

    try:
        db.create_entry(text)
    except ScanError as e:
        logger.log_warning(f"Not a reading-list entry: {e}")
    except StoreError as e:
        logger.log_error(e)
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from pathlib import Path
from typing import Optional


class ScanError(Exception):
    """
    Base exception for journal scanning errors.

    Scanning errors are collected, not raised, by the file walker: every
    error is bound to the file or directory that produced it so that one
    broken note never hides the entries of its siblings.

    Attributes:
        message: Error description, without location
        path: File or directory the error belongs to (None until attached)

    Examples:
        >>> err = MissingLink("just some text").at(Path("2024-03-15.md"))
        >>> str(err)
        'error in getting links from 2024-03-15.md: no valid link found in body: just some text'
    """

    def __init__(self, message: str, path: Optional[Path] = None) -> None:
        self.message = message
        self.path = path
        super().__init__(message)

    def at(self, path: Path) -> "ScanError":
        """Attach the failing path and return self."""
        self.path = Path(path)
        return self

    def __str__(self) -> str:
        if self.path is None:
            return self.message
        return f"error in getting links from {self.path}: {self.message}"


class ScanIOError(ScanError):
    """
    Exception for I/O failures while reading a journal file.

    Raised when a note cannot be opened, or a line cannot be read or
    decoded as UTF-8. The whole file is abandoned.

    Attributes:
        cause: Underlying OSError or UnicodeError
    """

    def __init__(self, cause: Exception, path: Optional[Path] = None) -> None:
        self.cause = cause
        super().__init__(f"I/O error scanning input file: {cause}", path)


class StatIOError(ScanError):
    """
    Exception for I/O failures while walking directories.

    Raised when a directory cannot be listed, or one of its children cannot
    be inspected. Always attached to the directory, never to the child.

    Attributes:
        cause: Underlying OSError
    """

    def __init__(self, cause: Exception, path: Optional[Path] = None) -> None:
        self.cause = cause
        super().__init__(f"I/O error walking directories: {cause}", path)


class InvalidFile(ScanError):
    """
    Exception for journal files whose name does not carry a date.

    Examples:
        >>> raise InvalidFile("file stem is not YYYY-MM-DD")
    """

    def __init__(self, reason: str, path: Optional[Path] = None) -> None:
        self.reason = reason
        super().__init__(f"invalid input file name: {reason}", path)


class MarkdownError(ScanError):
    """Exception for markdown parse failures of a tagged body."""

    def __init__(self, body: str, path: Optional[Path] = None) -> None:
        self.body = body
        super().__init__(f"error parsing Markdown string: {body}", path)


class MissingLink(ScanError):
    """Exception for tagged bodies without any valid absolute link."""

    def __init__(self, body: str, path: Optional[Path] = None) -> None:
        self.body = body
        super().__init__(f"no valid link found in body: {body}", path)


class StoreError(Exception):
    """
    Exception for catalog store failures.

    Raised when a store operation fails for any reason: connection issues,
    constraint violations (e.g. a roundup member that is not in the
    catalog), or a locked database. The transaction has already been rolled
    back when this is raised.

    Attributes:
        cause: Underlying exception, also available as __cause__

    Examples:
        >>> raise StoreError("Database operation failed", cause=err) from err
    """

    def __init__(self, message: str, cause: Optional[BaseException] = None) -> None:
        self.cause = cause
        super().__init__(message)


class ValidationError(Exception):
    """
    Exception for malformed input to a store operation.

    Raised when user-supplied values cannot be normalized:
    - Invalid date formats (expected YYYY-MM-DD)
    - Unknown read states
    - Non-integer entry ids

    Examples:
        >>> raise ValidationError("Invalid date format: expected YYYY-MM-DD")
        >>> raise ValidationError("Unknown read state: 'skimmed'")
    """

    pass
