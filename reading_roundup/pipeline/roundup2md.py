#!/usr/bin/env python3
"""
roundup2md.py
-------------
Export a curated roundup as a markdown post.

The document opens with a front-matter block (title and date) followed by
the body text of every member of the roundup, each separated by a blank
line. It is written UTF-8 as ``<date>.md``.

Usage:
    # Write data/roundups/2024-03-01.md
    roundup2md export 2024-03-01

    # Print to stdout instead
    roundup2md export 2024-03-01 --stdout
"""
from __future__ import annotations

import click
from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import Optional, Union

from reading_roundup.core.cli_utils import setup_logger
from reading_roundup.core.exceptions import StoreError, ValidationError
from reading_roundup.core.logging_manager import (
    RoundupLogger,
    handle_cli_error,
    safe_logger,
)
from reading_roundup.core.paths import DB_PATH, EXPORT_DIR, LOG_DIR
from reading_roundup.core.validators import DataValidator
from reading_roundup.database.manager import ReadingDB
from reading_roundup.utils import fs

MEDIA_TYPE = "text/markdown; charset=UTF-8"


@dataclass(frozen=True)
class RoundupDocument:
    """A rendered roundup, ready to be downloaded or written to disk."""

    date: date
    content: str

    @property
    def filename(self) -> str:
        return fs.date_to_filename(self.date)

    @property
    def media_type(self) -> str:
        return MEDIA_TYPE

    @property
    def content_disposition(self) -> str:
        return f'attachment; filename="{self.filename}"'


def build_document(db: ReadingDB, roundup_date: Union[date, str]) -> RoundupDocument:
    """
    Render the roundup for a date.

    A date without members still yields a document holding only the
    front-matter.

    Raises:
        ValidationError: If the date is malformed
        StoreError: If the store operation fails
    """
    day = DataValidator.normalize_date(roundup_date)
    return RoundupDocument(date=day, content=db.compose_roundup_markdown(day))


def export_roundup(
    db: ReadingDB,
    roundup_date: Union[date, str],
    output_dir: Union[str, Path],
    logger: Optional[RoundupLogger] = None,
) -> Path:
    """
    Write the roundup for a date into a directory.

    Args:
        db: Catalog store
        roundup_date: Roundup date
        output_dir: Destination directory (created if missing)
        logger: Optional logger

    Returns:
        Path of the written file
    """
    document = build_document(db, roundup_date)

    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    path = output_dir / document.filename
    path.write_text(document.content, encoding="utf-8")

    safe_logger(logger).log_operation(
        "roundup_exported",
        {"date": document.date.isoformat(), "path": str(path)},
    )
    return path


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
    """roundup2md - Export curated roundups as markdown"""
    ctx.ensure_object(dict)
    ctx.obj["db_path"] = Path(db_path)
    ctx.obj["log_dir"] = Path(log_dir)
    ctx.obj["verbose"] = verbose
    ctx.obj["logger"] = setup_logger(Path(log_dir), "roundup2md")
    ctx.call_on_close(ctx.obj["logger"].close)


@cli.command()
@click.argument("roundup_date", metavar="DATE")
@click.option(
    "-o",
    "--output-dir",
    type=click.Path(file_okay=False),
    default=str(EXPORT_DIR),
    help="Directory to write the document into",
)
@click.option("--stdout", "to_stdout", is_flag=True, help="Print instead of writing a file")
@click.pass_context
def export(ctx: click.Context, roundup_date: str, output_dir: str, to_stdout: bool) -> None:
    """Export the roundup for DATE (YYYY-MM-DD)."""
    logger: RoundupLogger = ctx.obj["logger"]
    db = ReadingDB(ctx.obj["db_path"], logger=logger)

    try:
        if to_stdout:
            document = build_document(db, roundup_date)
            click.echo(document.content, nl=False)
        else:
            path = export_roundup(db, roundup_date, Path(output_dir), logger)
            click.echo(f"✅ Roundup written: {path}")
    except (StoreError, ValidationError, OSError) as e:
        handle_cli_error(ctx, e, "export", {"date": roundup_date})
    finally:
        db.close()


if __name__ == "__main__":
    cli(obj={})
