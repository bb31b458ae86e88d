#!/usr/bin/env python3
"""
Integration tests for the Update intent (journal -> catalog).

Covers the end-to-end scenarios: empty tree, single tagged line,
deduplication across notes, roundup replacement after ingestion, and
mixed-failure updates.
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from datetime import date

# --- Third-party imports ---
import pytest

# --- Local imports ---
from reading_roundup.core.exceptions import InvalidFile, MissingLink, StoreError
from reading_roundup.dataclasses.reading_entry import ReadState
from reading_roundup.pipeline.journal2sql import UpdateReport, run_update
from reading_roundup.scanner.walker import scan_file, scan_files


class TestEmptyTree:
    """An empty journal changes nothing."""

    def test_scan_empty(self, journal_dir):
        assert scan_files(journal_dir) == ([], [])

    def test_update_empty(self, test_db, journal_dir):
        report = run_update(test_db, journal_dir)

        assert report.ok
        assert report.entries_found == 0
        assert (report.count_before, report.count_after) == (0, 0)
        assert report.new_entries == 0


class TestSingleTaggedLine:
    """One note with one tagged line."""

    LINE = "- #reading check out [Foo](https://foo.example/)"

    def test_scan(self, write_note):
        path = write_note("2024-03-15.md", self.LINE + "\n")

        (entry,) = scan_file(path)

        assert entry.url == "https://foo.example/"
        assert entry.source_date == date(2024, 3, 15)
        assert entry.read is ReadState.UNKNOWN
        assert entry.original_text == self.LINE
        assert entry.body_text == "check out [Foo](https://foo.example/)"

    def test_update_stores_entry(self, test_db, write_note, journal_dir):
        write_note("2024-03-15.md", self.LINE + "\n")

        report = run_update(test_db, journal_dir)

        assert report.ok
        assert report.new_entries == 1
        (row,) = test_db.list_entries()
        assert row.entry.url == "https://foo.example/"
        assert row.entry.original_text == self.LINE
        assert row.roundup_count == 0


class TestDeduplication:
    """The same URL in two notes is cataloged once; first writer wins."""

    def test_first_ingested_wins(self, test_db, write_note):
        first = write_note("2024-03-01.md", "- #read https://same.example/post\n")
        second = write_note("2024-03-02.md", "- #tbr https://same.example/post\n")

        test_db.bulk_ingest(scan_file(first))
        test_db.bulk_ingest(scan_file(second))

        (row,) = test_db.list_entries()
        assert row.entry.source_date == date(2024, 3, 1)
        assert row.entry.read is ReadState.READ

    def test_reverse_order(self, test_db, write_note):
        first = write_note("2024-03-01.md", "- #read https://same.example/post\n")
        second = write_note("2024-03-02.md", "- #tbr https://same.example/post\n")

        test_db.bulk_ingest(scan_file(second) + scan_file(first))

        (row,) = test_db.list_entries()
        assert row.entry.source_date == date(2024, 3, 2)
        assert row.entry.read is ReadState.TO_BE_READ

    def test_repeated_update_is_noop(self, test_db, write_note, journal_dir, tagged_note_content):
        write_note("2024-03-15.md", tagged_note_content)

        first = run_update(test_db, journal_dir)
        second = run_update(test_db, journal_dir)

        assert first.new_entries == 3
        assert second.new_entries == 0
        assert second.count_after == 3


class TestRoundupAfterUpdate:
    """Curation over ingested entries."""

    def test_replacement(self, test_db, write_note, journal_dir):
        write_note(
            "2024-02-01.md",
            "".join(f"- #tbr https://r{i}.example/\n" for i in range(1, 5)),
        )
        run_update(test_db, journal_dir)
        ids = {row.entry.url: row.id for row in test_db.list_entries()}
        one, two, three, four = (ids[f"https://r{i}.example/"] for i in range(1, 5))

        test_db.set_roundup(date(2024, 3, 1), [one, two, three])
        test_db.set_roundup(date(2024, 3, 1), [two, four])

        rows = test_db.get_roundup(date(2024, 3, 1))
        assert {r.id for r in rows if r.included} == {two, four}
        assert {r.id for r in rows if not r.included} == {one, three}
        assert [r.included for r in rows] == [True, True, False, False]


class TestMixedFailureUpdate:
    """Scan errors and commits are reported together."""

    def test_readme_and_valid_note(self, test_db, write_note, journal_dir):
        write_note("2024-03-15.md", "- #read https://valid.example/\n")
        write_note("README.md", "# Journal\n")

        report = run_update(test_db, journal_dir)

        assert report.new_entries == 1
        assert len(report.scan_errors) == 1
        assert isinstance(report.scan_errors[0], InvalidFile)
        assert report.store_error is None
        assert not report.ok
        assert test_db.count_entries() == 1

    def test_broken_note_isolated(self, test_db, write_note, journal_dir):
        write_note("2024-03-15.md", "- #read https://kept.example/\n")
        write_note("2024-03-16.md", "- #read https://dropped.example/\n- #tbr no link here\n")

        report = run_update(test_db, journal_dir)

        assert report.new_entries == 1
        assert isinstance(report.scan_errors[0], MissingLink)
        assert [r.entry.url for r in test_db.list_entries()] == ["https://kept.example/"]

    def test_store_failure_reported_with_scan_errors(self, bare_db, write_note, journal_dir):
        write_note("2024-03-15.md", "- #read https://valid.example/\n")
        write_note("notes.md", "")

        report = run_update(bare_db, journal_dir)

        assert isinstance(report.store_error, StoreError)
        assert len(report.scan_errors) == 1
        assert report.entries_found == 1
        assert report.count_before is None
        assert report.new_entries == 0
        assert not report.ok
        assert "Update failed" in report.summary()


class TestUpdateReport:
    """UpdateReport summaries."""

    def test_summary(self):
        report = UpdateReport(entries_found=3, count_before=10, count_after=12)
        assert report.summary() == (
            "3 links found, with 0 errors; Update results: 10 before, new total 12"
        )
        assert report.new_entries == 2
        assert report.ok

    @pytest.mark.parametrize("before,after", [(None, 5), (5, None)])
    def test_new_entries_without_counts(self, before, after):
        assert UpdateReport(count_before=before, count_after=after).new_entries == 0
