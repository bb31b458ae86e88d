#!/usr/bin/env python3
"""
body.py
-------------------
Turn one tagged body fragment into a reading-list entry.

The body is parsed as markdown and the syntax tree is searched for the
first link with an absolute URL. Labelled links, ``<...>`` autolinks,
bare URLs and links nested inside emphasis or lists are all found the
same way.

Usage:
    from reading_roundup.scanner.body import scan_body

    entry = scan_body(date(2024, 3, 15), "check out [Foo](https://foo.example/)")
    entry.url  # 'https://foo.example/'
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from datetime import date
from typing import Optional

# --- Third-party imports ---
from markdown_it import MarkdownIt

# --- Local imports ---
from reading_roundup.core.exceptions import MarkdownError, MissingLink
from reading_roundup.dataclasses.reading_entry import ReadingListEntry, ReadState
from reading_roundup.utils import md


def scan_body(
    source_date: date, body: str, parser: Optional[MarkdownIt] = None
) -> ReadingListEntry:
    """
    Scan a body fragment for its link.

    Args:
        source_date: Date the entry is attributed to
        body: Markdown text following the tag
        parser: Parser override (default: CommonMark + linkify)

    Returns:
        ReadingListEntry with ``original_text`` and ``body_text`` both set
        to the body and ``read`` UNKNOWN

    Raises:
        MarkdownError: If the body cannot be parsed
        MissingLink: If the body has no link with an absolute URL
    """
    parser = parser or md.get_parser()
    try:
        tree = md.parse_tree(body, parser)
    except Exception as e:
        raise MarkdownError(body) from e

    url = md.find_link_url(tree)
    if url is None:
        raise MissingLink(body)

    return ReadingListEntry(
        url=url,
        source_date=source_date,
        original_text=body,
        body_text=body,
        read=ReadState.UNKNOWN,
    )
