#!/usr/bin/env python3
"""
validators.py
--------------------
Data validation and normalization utilities for intent inputs.

Values reaching the store from a form or the command line arrive as
strings; these helpers turn them into the types the store expects.
"""
from __future__ import annotations

from datetime import date, datetime
from typing import Any, Iterable, List, Optional

from reading_roundup.dataclasses.reading_entry import ReadState

from .exceptions import ValidationError


class DataValidator:
    """Centralized data validation for store operations."""

    @staticmethod
    def normalize_date(date_value: Any) -> date:
        """
        Normalize various date inputs to date object.

        Args:
            date_value: 'YYYY-MM-DD' string, date object, or datetime

        Returns:
            Normalized date object

        Raises:
            ValidationError: If the value is not a date
        """
        if isinstance(date_value, datetime):
            return date_value.date()
        if isinstance(date_value, date):
            return date_value
        if isinstance(date_value, str):
            try:
                return datetime.strptime(date_value.strip(), "%Y-%m-%d").date()
            except ValueError as e:
                raise ValidationError(
                    f"Invalid date format: expected YYYY-MM-DD, got '{date_value}'"
                ) from e
        raise ValidationError(f"Cannot convert {type(date_value).__name__} to date")

    @staticmethod
    def normalize_read_state(value: Any) -> ReadState:
        """
        Convert various inputs to a ReadState.

        Accepts ReadState members, their values ("unknown", "to-be-read", "read"),
        the tag name "tbr", the persistent nullable boolean, and None.

        Args:
            value: Value to convert

        Returns:
            ReadState

        Raises:
            ValidationError: If conversion fails
        """
        if isinstance(value, ReadState):
            return value
        if value is None or isinstance(value, bool):
            return ReadState.from_db(value)
        if isinstance(value, str):
            normalized = value.strip().lower()
            if normalized in ("", "unknown", "none", "?"):
                return ReadState.UNKNOWN
            if normalized in ("to-be-read", "tbr", "unread"):
                return ReadState.TO_BE_READ
            if normalized == "read":
                return ReadState.READ
        raise ValidationError(f"Unknown read state: '{value}'")

    @staticmethod
    def normalize_id(value: Any) -> int:
        """
        Convert an entry id to integer.

        Raises:
            ValidationError: If the value is not an integer id
        """
        if isinstance(value, bool):
            raise ValidationError(f"Invalid entry id: {value!r}")
        try:
            return int(value)
        except (TypeError, ValueError) as e:
            raise ValidationError(f"Invalid entry id: {value!r}") from e

    @staticmethod
    def normalize_ids(values: Optional[Iterable[Any]]) -> List[int]:
        """
        Convert entry ids to integers, dropping duplicates.

        First occurrence wins, so the caller's order is kept.
        """
        if values is None:
            return []
        ids = [DataValidator.normalize_id(v) for v in values]
        return list(dict.fromkeys(ids))
