"""
test_fs_utils.py
----------------
Unit tests for reading_roundup.utils.fs module.

Tests journal filename handling: extension checks, stem decoding and
strict date parsing.
"""
import pytest
from pathlib import Path
from datetime import date
from reading_roundup.utils.fs import (
    date_to_filename,
    decode_stem,
    is_journal_file,
    parse_date_from_stem,
)


class TestIsJournalFile:
    """Test is_journal_file function."""

    def test_md_extension(self):
        """Test .md files are journal files."""
        assert is_journal_file(Path("2024-03-15.md")) is True

    def test_extension_is_case_sensitive(self):
        """Test .MD and .Md are not journal files."""
        assert is_journal_file(Path("2024-03-15.MD")) is False
        assert is_journal_file(Path("2024-03-15.Md")) is False

    def test_other_extensions(self):
        """Test other extensions are rejected."""
        assert is_journal_file(Path("2024-03-15.txt")) is False
        assert is_journal_file(Path("2024-03-15.markdown")) is False
        assert is_journal_file(Path("2024-03-15")) is False

    def test_only_final_extension_counts(self):
        """Test the final suffix decides."""
        assert is_journal_file(Path("2024-03-15.md.bak")) is False
        assert is_journal_file(Path("notes.tar.md")) is True


class TestDecodeStem:
    """Test decode_stem function."""

    def test_regular_stem(self):
        """Test plain stems come back unchanged."""
        assert decode_stem(Path("dir/2024-03-15.md")) == "2024-03-15"

    def test_unicode_stem(self):
        """Test non-ASCII but valid stems are accepted."""
        assert decode_stem(Path("café.md")) == "café"

    def test_surrogate_escaped_stem_rejected(self):
        """Test stems that were not valid UTF-8 on disk are rejected."""
        assert decode_stem(Path("\udcff.md")) is None


class TestParseDateFromStem:
    """Test parse_date_from_stem function."""

    def test_valid_date(self):
        """Test a well-formed stem."""
        assert parse_date_from_stem("2024-03-15") == date(2024, 3, 15)

    def test_leap_day(self):
        """Test Feb 29 on a leap year."""
        assert parse_date_from_stem("2024-02-29") == date(2024, 2, 29)

    @pytest.mark.parametrize(
        "stem",
        [
            "not-a-date",
            "README",
            "2024-3-15",
            "24-03-15",
            "2024-03-15-extra",
            "2024_03_15",
            " 2024-03-15",
            "2023-02-29",
            "2024-13-01",
            "2024-00-10",
        ],
    )
    def test_invalid_stems(self, stem):
        """Test malformed or impossible dates raise ValueError."""
        with pytest.raises(ValueError):
            parse_date_from_stem(stem)


class TestDateToFilename:
    """Test date_to_filename function."""

    def test_format(self):
        """Test filename formatting."""
        assert date_to_filename(date(2024, 3, 1)) == "2024-03-01.md"

    def test_inverse_of_parse(self):
        """Test filename stems parse back to the same date."""
        day = date(2023, 12, 31)
        assert parse_date_from_stem(Path(date_to_filename(day)).stem) == day
