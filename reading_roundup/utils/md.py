#!/usr/bin/env python3
"""
md.py
-------------------
Markdown-specific utilities for the Reading Roundup project.

Provides functions for:
- Parsing markdown bodies into a syntax tree (markdown-it-py, with linkify)
- Finding the first absolute link in a syntax tree
- Building the YAML front-matter block of a roundup

The parser is the CommonMark preset with the ``linkify`` rule switched on,
so bare URLs in running text are links just like ``<https://...>``
autolinks and ``[label](https://...)`` links. Only text carrying a scheme
is linkified: ``example.com`` or ``foo@bar.com`` alone stay plain text.
"""
from __future__ import annotations

# --- Standard library imports ---
from datetime import date
from typing import Iterator, List, Optional
from urllib.parse import urlsplit

# --- Third-party imports ---
from markdown_it import MarkdownIt
from markdown_it.tree import SyntaxTreeNode


# ----- Parsing -----
def build_parser() -> MarkdownIt:
    """
    Create the markdown parser used for tagged bodies.

    Returns:
        MarkdownIt instance (CommonMark + linkify, schemes required)
    """
    parser = MarkdownIt("commonmark", {"linkify": True}).enable("linkify")
    parser.linkify.set({"fuzzy_link": False, "fuzzy_email": False, "fuzzy_ip": False})
    return parser


_PARSER: Optional[MarkdownIt] = None


def get_parser() -> MarkdownIt:
    """Return the shared parser, building it on first use."""
    global _PARSER
    if _PARSER is None:
        _PARSER = build_parser()
    return _PARSER


def parse_tree(text: str, parser: Optional[MarkdownIt] = None) -> SyntaxTreeNode:
    """
    Parse markdown text into a syntax tree.

    Args:
        text: Markdown source
        parser: Parser to use (default: shared CommonMark + linkify parser)

    Returns:
        Root SyntaxTreeNode
    """
    md = parser or get_parser()
    return SyntaxTreeNode(md.parse(text))


def walk_preorder(root: SyntaxTreeNode) -> Iterator[SyntaxTreeNode]:
    """
    Yield nodes depth-first in pre-order.

    A node's descendants are all yielded before its next sibling.
    """
    stack: List[SyntaxTreeNode] = [root]
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(node.children))


def is_absolute_url(url: str) -> bool:
    """
    Check that a link target is a syntactically valid absolute URL.

    Examples:
        >>> is_absolute_url("https://example.com/post")
        True
        >>> is_absolute_url("/relative/path")
        False
    """
    if not url or any(ch.isspace() for ch in url):
        return False
    try:
        parts = urlsplit(url)
    except ValueError:
        return False
    if not parts.scheme:
        return False
    return bool(parts.netloc or parts.path)


def find_link_url(root: SyntaxTreeNode) -> Optional[str]:
    """
    Find the first usable link in a syntax tree.

    Link nodes whose target is not an absolute URL are skipped and the
    search continues past them.

    Args:
        root: Parsed syntax tree

    Returns:
        URL of the first link in pre-order, or None
    """
    for node in walk_preorder(root):
        if node.type != "link":
            continue
        href = node.attrs.get("href")
        if isinstance(href, str) and is_absolute_url(href):
            return href
    return None


# ----- YAML Front-matter -----
def yaml_escape(value: str) -> str:
    """
    Escape string for safe YAML output in double quotes.

    Examples:
        >>> yaml_escape('He said "hello"')
        'He said \\\\"hello\\\\"'
    """
    return value.replace("\\", "\\\\").replace('"', '\\"').replace("\n", "\\n")


def roundup_title(roundup_date: date) -> str:
    """Title of the roundup post for a date."""
    return f"Reading Roundup, {roundup_date.isoformat()}"


def roundup_frontmatter(roundup_date: date) -> str:
    """
    Build the front-matter block that opens a roundup document.

    The block ends with the closing fence and one blank line.

    Examples:
        >>> print(roundup_frontmatter(date(2024, 3, 1)), end="")
        ---
        title: "Reading Roundup, 2024-03-01"
        date: 2024-03-01
        ---
        <BLANKLINE>
    """
    return (
        "---\n"
        f'title: "{yaml_escape(roundup_title(roundup_date))}"\n'
        f"date: {roundup_date.isoformat()}\n"
        "---\n"
        "\n"
    )

