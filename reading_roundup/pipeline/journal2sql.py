#!/usr/bin/env python3
"""
journal2sql.py
--------------
Scan the journal for tagged reading links and merge them into the catalog.

This pipeline is the Update intent: it walks a tree of dated notes
(YYYY-MM-DD.md), extracts every line tagged #reading, #read or #tbr and
ingests the resulting entries. URLs already in the catalog are left alone,
so running it repeatedly is safe.

Features:
- Walk the journal without holding the store lock
- Count, ingest and count again as one atomic store operation
- Report scan errors and store errors together; neither hides the other

Usage:
    # Merge the journal into the catalog
    journal2sql update --journal ~/notes/journal

    # Dry run: list what would be ingested
    journal2sql scan --journal ~/notes/journal
"""
from __future__ import annotations

import sys
import click
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import List, Optional, Union

from reading_roundup.core.cli_utils import setup_logger
from reading_roundup.core.exceptions import ScanError, StoreError
from reading_roundup.core.logging_manager import RoundupLogger, safe_logger
from reading_roundup.core.paths import DB_PATH, JOURNAL_DIR, LOG_DIR
from reading_roundup.database.manager import ReadingDB
from reading_roundup.dataclasses.reading_entry import ReadingListEntry
from reading_roundup.scanner.walker import scan_files


@dataclass
class UpdateReport:
    """
    Outcome of one Update run.

    Attributes:
        entries_found: Number of entries extracted from the journal
        scan_errors: One error per directory or file that could not be scanned
        count_before: Catalog size before ingestion
        count_after: Catalog size after ingestion
        store_error: Store failure, if ingestion failed
    """

    entries_found: int = 0
    scan_errors: List[ScanError] = field(default_factory=list)
    count_before: Optional[int] = None
    count_after: Optional[int] = None
    store_error: Optional[StoreError] = None
    start_time: datetime = field(default_factory=datetime.now)
    end_time: Optional[datetime] = None

    @property
    def new_entries(self) -> int:
        """Number of entries the run added to the catalog."""
        if self.count_before is None or self.count_after is None:
            return 0
        return self.count_after - self.count_before

    @property
    def ok(self) -> bool:
        """True when every file was scanned and the store accepted the batch."""
        return not self.scan_errors and self.store_error is None

    def duration(self) -> float:
        """Get elapsed time in seconds."""
        end = self.end_time or datetime.now()
        return (end - self.start_time).total_seconds()

    def scan_summary(self) -> str:
        return f"{self.entries_found} links found, with {len(self.scan_errors)} errors"

    def store_summary(self) -> str:
        if self.store_error is not None:
            return f"Update failed: {self.store_error}"
        return f"Update results: {self.count_before} before, new total {self.count_after}"

    def summary(self) -> str:
        """Get formatted summary."""
        return f"{self.scan_summary()}; {self.store_summary()}"


def run_update(
    db: ReadingDB,
    source_dir: Union[str, Path],
    logger: Optional[RoundupLogger] = None,
) -> UpdateReport:
    """
    Scan a journal tree and ingest everything found.

    The walk happens before the store lock is taken. Store failures are
    captured in the report rather than raised.

    Args:
        db: Catalog store
        source_dir: Root of the journal tree
        logger: Optional logger

    Returns:
        UpdateReport with scan and store outcomes
    """
    log = safe_logger(logger)
    report = UpdateReport()
    source_dir = Path(source_dir)

    log.log_operation("update_start", {"source_dir": str(source_dir)})

    entries: List[ReadingListEntry]
    entries, errors = scan_files(source_dir, logger)
    report.entries_found = len(entries)
    report.scan_errors = errors

    try:
        report.count_before, report.count_after = db.ingest_update(entries)
    except StoreError as e:
        log.log_error(e, {"operation": "update", "source_dir": str(source_dir)})
        report.store_error = e

    report.end_time = datetime.now()
    log.log_operation(
        "update_complete",
        {
            "entries_found": report.entries_found,
            "scan_errors": len(report.scan_errors),
            "count_before": report.count_before,
            "count_after": report.count_after,
            "store_error": str(report.store_error) if report.store_error else None,
            "duration": f"{report.duration():.2f}s",
        },
    )
    return report


# ----- CLI -----
@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    default=str(DB_PATH),
    help="Path to database file",
)
@click.option(
    "--log-dir",
    type=click.Path(),
    default=str(LOG_DIR),
    help="Directory for log files",
)
@click.option("-v", "--verbose", is_flag=True, help="Enable verbose logging")
@click.pass_context
def cli(ctx: click.Context, db_path: str, log_dir: str, verbose: bool) -> None:
    """journal2sql - Collect tagged reading links from the journal"""
    ctx.ensure_object(dict)
    ctx.obj["db_path"] = Path(db_path)
    ctx.obj["log_dir"] = Path(log_dir)
    ctx.obj["verbose"] = verbose
    ctx.obj["logger"] = setup_logger(Path(log_dir), "journal2sql")
    ctx.call_on_close(ctx.obj["logger"].close)


@cli.command()
@click.option(
    "-j",
    "--journal",
    type=click.Path(file_okay=False),
    default=str(JOURNAL_DIR),
    help="Root directory of the journal",
)
@click.pass_context
def update(ctx: click.Context, journal: str) -> None:
    """Merge tagged links from the journal into the catalog."""
    logger: RoundupLogger = ctx.obj["logger"]
    db = ReadingDB(ctx.obj["db_path"], logger=logger)

    try:
        click.echo(f"📁 Scanning journal: {journal}")
        report = run_update(db, Path(journal), logger)
    finally:
        db.close()

    click.echo("\n📚 Scanning report:")
    click.echo(f"  {report.scan_summary()}")
    for error in report.scan_errors:
        click.echo(f"  ⚠️  {error}")

    click.echo("\n🗄️  Database report:")
    if report.store_error is not None:
        click.echo(f"  ❌ {report.store_summary()}", err=True)
    else:
        click.echo(f"  {report.store_summary()}")
        click.echo(f"  New entries: {report.new_entries}")
    click.echo(f"  Duration: {report.duration():.2f}s")

    if not report.ok:
        sys.exit(1)
    click.echo("\n✅ Update complete")


@cli.command()
@click.option(
    "-j",
    "--journal",
    type=click.Path(file_okay=False),
    default=str(JOURNAL_DIR),
    help="Root directory of the journal",
)
@click.pass_context
def scan(ctx: click.Context, journal: str) -> None:
    """List tagged links without touching the catalog."""
    logger: RoundupLogger = ctx.obj["logger"]

    click.echo(f"📁 Scanning journal: {journal}")
    entries, errors = scan_files(Path(journal), logger)

    for entry in entries:
        click.echo(f"  {entry.read.sigil} {entry.source_date.isoformat()} {entry.url}")
    for error in errors:
        click.echo(f"  ⚠️  {error}", err=True)

    click.echo(f"\n{len(entries)} links found, with {len(errors)} errors")
    if errors:
        sys.exit(1)


if __name__ == "__main__":
    cli(obj={})
