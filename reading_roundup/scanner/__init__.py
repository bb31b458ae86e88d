"""
scanner package
---------------
Extraction of reading-list entries from a journal.

- scan_body: One tagged body fragment -> one entry
- scan_file: One dated note -> its entries
- scan_files: A journal tree -> all entries plus per-file errors
"""
from .body import scan_body
from .walker import TAG_PATTERN, scan_file, scan_files, scan_line

__all__ = ["TAG_PATTERN", "scan_body", "scan_file", "scan_files", "scan_line"]
