"""
Utilities package for Reading Roundup.

This package provides commonly-used utilities organized by domain:
- md: Markdown parsing, link search, front-matter
- fs: Journal file discovery and filename dates

Import specific modules:
    from reading_roundup.utils import md, fs
"""

from .md import (
    build_parser,
    find_link_url,
    is_absolute_url,
    parse_tree,
    roundup_frontmatter,
    yaml_escape,
)
from .fs import (
    date_to_filename,
    decode_stem,
    is_journal_file,
    parse_date_from_stem,
)

__all__ = [
    # Markdown
    "build_parser",
    "find_link_url",
    "is_absolute_url",
    "parse_tree",
    "roundup_frontmatter",
    "yaml_escape",
    # Filesystem
    "date_to_filename",
    "decode_stem",
    "is_journal_file",
    "parse_date_from_stem",
]
