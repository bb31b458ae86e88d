#!/usr/bin/env python3
"""
cli.py
-------------------
Command-line interface for the reading-list catalog.

Provides commands for catalog setup, editing entries and curating roundups.

Command Groups:
    Setup & Initialization:
        - init: Create the catalog schema

    Monitoring:
        - stats: Catalog statistics

    Edit:
        - entries: List every entry with its roundup count
        - entry: Show one entry
        - add: Add an entry from markdown text
        - edit: Change the body text or read state of an entry

    Curation:
        - roundups: List roundup dates
        - roundup: Show the roundup editor listing for a date
        - curate: Replace the members of a roundup

Usage:
    readdb init
    readdb add "Great read: https://example.com/post"
    readdb curate 2024-03-01 3 7 12
    readdb roundup 2024-03-01
"""
import sys
import click
from collections import Counter
from pathlib import Path
from typing import Optional

from reading_roundup.core.cli_utils import setup_logger
from reading_roundup.core.exceptions import ScanError, StoreError, ValidationError
from reading_roundup.core.logging_manager import handle_cli_error
from reading_roundup.core.paths import DB_PATH, LOG_DIR
from reading_roundup.dataclasses.reading_entry import CatalogRow, ReadState

from .manager import ReadingDB
from .models import Base


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
    help="Path to log directory",
)
@click.option(
    "-v",
    "--verbose",
    is_flag=True,
    help="Show detailed errors and tracebacks",
)
@click.pass_context
def cli(ctx, db_path, log_dir, verbose):
    """Reading Roundup Catalog CLI"""
    ctx.ensure_object(dict)
    ctx.obj["db_path"] = Path(db_path)
    ctx.obj["log_dir"] = Path(log_dir)
    ctx.obj["verbose"] = verbose
    ctx.obj["logger"] = setup_logger(Path(log_dir), "readdb")
    ctx.call_on_close(ctx.obj["logger"].close)
    ctx.call_on_close(lambda: _close_db(ctx))


def get_db(ctx) -> ReadingDB:
    """Get or create database instance."""
    if "db" not in ctx.obj:
        ctx.obj["db"] = ReadingDB(
            db_path=ctx.obj["db_path"],
            logger=ctx.obj["logger"],
        )
    return ctx.obj["db"]


def _close_db(ctx) -> None:
    db: Optional[ReadingDB] = ctx.obj.pop("db", None)
    if db is not None:
        db.close()


def _format_row(row: CatalogRow) -> str:
    """One listing line: marker, id, read state, roundup count, date, url."""
    marker = "✔" if row.included else " "
    return (
        f"  {marker} {row.id:4d} {row.entry.read.sigil} "
        f"[{row.roundup_count}] {row.entry.source_date.isoformat()}  {row.entry.url}"
    )


# ===== Setup & Initialization =====
@cli.command()
@click.pass_context
def init(ctx):
    """Create the catalog schema (existing tables are kept)."""
    try:
        db_path: Path = ctx.obj["db_path"]
        db_path.parent.mkdir(parents=True, exist_ok=True)

        click.echo("🗄️  Initializing catalog schema...")
        db = get_db(ctx)
        Base.metadata.create_all(db.engine)
        click.echo(f"✅ Catalog ready: {db_path}")

    except (StoreError, OSError) as e:
        handle_cli_error(ctx, e, "init")


# ===== Monitoring =====
@cli.command()
@click.pass_context
def stats(ctx):
    """Display catalog statistics."""
    try:
        db = get_db(ctx)
        rows = db.list_entries()
        roundup_dates = db.list_roundups()

        states = Counter(row.entry.read for row in rows)
        never_used = sum(1 for row in rows if row.roundup_count == 0)

        click.echo("\n📊 Catalog Statistics")
        click.echo("=" * 50)

        click.echo("\nEntries:")
        click.echo(f"  Total: {len(rows)}")
        for state in ReadState:
            click.echo(f"  {state.display_name}: {states.get(state, 0)}")
        click.echo(f"  Never in a roundup: {never_used}")

        click.echo("\nRoundups:")
        click.echo(f"  Total: {len(roundup_dates)}")
        if roundup_dates:
            click.echo(f"  First: {roundup_dates[0].isoformat()}")
            click.echo(f"  Last: {roundup_dates[-1].isoformat()}")

    except StoreError as e:
        handle_cli_error(ctx, e, "stats")


# ===== Edit =====
@cli.command()
@click.pass_context
def entries(ctx):
    """List every entry, least used first."""
    try:
        db = get_db(ctx)
        rows = db.list_entries()

        if not rows:
            click.echo("⚠️  The catalog is empty")
            return

        click.echo(f"\n📚 Entries ({len(rows)}):\n")
        for row in rows:
            click.echo(_format_row(row))

    except StoreError as e:
        handle_cli_error(ctx, e, "entries")


@cli.command()
@click.argument("entry_id", type=int)
@click.pass_context
def entry(ctx, entry_id):
    """Display a single entry."""
    try:
        db = get_db(ctx)
        row = db.get_entry(entry_id)

        if row is None:
            click.echo(f"❌ No entry with id {entry_id}", err=True)
            sys.exit(1)

        dates = db.list_roundups_by_entry(entry_id)

        click.echo(f"\n🔗 {row.entry.url}")
        click.echo(f"📅 {row.entry.source_date.isoformat()}")
        click.echo(f"{row.entry.read.sigil} {row.entry.read.display_name}")
        click.echo(f"\n📝 {row.entry.body_text}")
        if row.entry.original_text != row.entry.body_text:
            click.echo(f"\n📄 Original: {row.entry.original_text}")

        if dates:
            click.echo(f"\n📰 Roundups ({row.roundup_count}):")
            for day in dates:
                click.echo(f"  • {day.isoformat()}")

    except (StoreError, ValidationError) as e:
        handle_cli_error(ctx, e, "entry", {"entry_id": entry_id})


@cli.command()
@click.argument("text")
@click.pass_context
def add(ctx, text):
    """Add an entry from markdown TEXT containing a link."""
    try:
        db = get_db(ctx)
        entry_id = db.create_entry(text)
        click.echo(f"✅ Entry stored with id {entry_id}")

    except (ScanError, StoreError) as e:
        handle_cli_error(ctx, e, "add")


@cli.command()
@click.argument("entry_id", type=int)
@click.option("--body", default=None, help="New body text")
@click.option(
    "--read",
    "read_state",
    type=click.Choice(ReadState.choices()),
    default=None,
    help="New read state",
)
@click.pass_context
def edit(ctx, entry_id, body, read_state):
    """Change the body text and/or read state of an entry."""
    try:
        db = get_db(ctx)
        row = db.edit_entry(entry_id, body_text=body, read=read_state)

        if row is None:
            click.echo(f"❌ No entry with id {entry_id}", err=True)
            sys.exit(1)

        click.echo(f"✅ Entry {entry_id} updated")

    except (StoreError, ValidationError) as e:
        handle_cli_error(ctx, e, "edit", {"entry_id": entry_id})


# ===== Curation =====
@cli.command()
@click.option("--entry", "entry_id", type=int, default=None, help="Only roundups containing this entry")
@click.pass_context
def roundups(ctx, entry_id):
    """List roundup dates."""
    try:
        db = get_db(ctx)
        if entry_id is None:
            dates = db.list_roundups()
        else:
            dates = db.list_roundups_by_entry(entry_id)

        if not dates:
            click.echo("⚠️  No roundups found")
            return

        click.echo("\n📰 Roundups:\n")
        for day in dates:
            click.echo(f"  • {day.isoformat()}")
        click.echo(f"\nTotal: {len(dates)} roundups")

    except (StoreError, ValidationError) as e:
        handle_cli_error(ctx, e, "roundups")


@cli.command()
@click.argument("roundup_date", metavar="DATE")
@click.pass_context
def roundup(ctx, roundup_date):
    """Show every entry for editing the roundup of DATE, members first."""
    try:
        db = get_db(ctx)
        rows = db.get_roundup(roundup_date)

        members = sum(1 for row in rows if row.included)
        click.echo(f"\n📰 Roundup {roundup_date}: {members} entries\n")
        for row in rows:
            click.echo(_format_row(row))

    except (StoreError, ValidationError) as e:
        handle_cli_error(ctx, e, "roundup", {"date": roundup_date})


@cli.command()
@click.argument("roundup_date", metavar="DATE")
@click.argument("entry_ids", nargs=-1, type=int)
@click.pass_context
def curate(ctx, roundup_date, entry_ids):
    """Replace the members of the roundup of DATE with ENTRY_IDS."""
    try:
        db = get_db(ctx)
        db.set_roundup(roundup_date, list(entry_ids))
        click.echo(f"✅ Roundup {roundup_date} saved ({len(set(entry_ids))} entries)")

    except (StoreError, ValidationError) as e:
        handle_cli_error(ctx, e, "curate", {"date": roundup_date})


if __name__ == "__main__":
    cli(obj={})
