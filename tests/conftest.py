"""
conftest.py
-----------
Shared pytest fixtures for Reading Roundup tests.

Provides fixtures for:
- Temporary directories and journal trees
- Database setup and teardown
- Entry factories
"""
import pytest
from pathlib import Path
from datetime import date
from tempfile import TemporaryDirectory


# ----- Path Fixtures -----

@pytest.fixture
def tmp_dir():
    """Create a temporary directory for test file operations."""
    with TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def journal_dir(tmp_dir):
    """Empty journal root inside the temporary directory."""
    root = tmp_dir / "journal"
    root.mkdir()
    return root


@pytest.fixture
def write_note(journal_dir):
    """
    Factory writing a note into the journal tree.

    Usage:
        path = write_note("2024-03-15.md", "- #tbr https://example.com/")
        path = write_note("2024/03/2024-03-16.md", "...")
    """

    def _write(relative: str, content: str) -> Path:
        path = journal_dir / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path

    return _write


# ----- Sample Content Fixtures -----

@pytest.fixture
def tagged_note_content():
    """A note mixing tagged and untagged lines."""
    return (
        "# Friday\n"
        "\n"
        "Went for a walk.\n"
        "- #reading check out [Foo](https://foo.example/)\n"
        "- #tbr https://bar.example/essay\n"
        "- #read: <https://baz.example/>\n"
        "No tag on this one: https://ignored.example/\n"
    )


# ----- Entry Factories -----

def make_entry(url, source_date=date(2024, 3, 15), body=None, read=None):
    """Build a ReadingListEntry with sensible defaults."""
    from reading_roundup.dataclasses.reading_entry import ReadingListEntry, ReadState

    body = body if body is not None else f"[link]({url})"
    return ReadingListEntry(
        url=url,
        source_date=source_date,
        original_text=f"- #reading {body}",
        body_text=body,
        read=read or ReadState.UNKNOWN,
    )


@pytest.fixture
def entry_factory():
    """Expose make_entry as a fixture."""
    return make_entry


# ----- Test Database Fixtures -----

@pytest.fixture
def test_db_path(tmp_dir):
    """Create temporary test database path."""
    return tmp_dir / "test.db"


@pytest.fixture
def test_db(test_db_path):
    """
    Create test database instance with schema.

    Returns a ReadingDB instance on a freshly created schema.
    Database is torn down after the test.
    """
    from reading_roundup.database.manager import ReadingDB
    from reading_roundup.database.models import Base
    from sqlalchemy import create_engine

    # Create engine and initialize schema
    engine = create_engine(f"sqlite:///{test_db_path}")
    Base.metadata.create_all(engine)
    engine.dispose()

    db = ReadingDB(db_path=test_db_path)

    yield db

    # Cleanup
    db.close()
    if test_db_path.exists():
        test_db_path.unlink()


@pytest.fixture
def bare_db(tmp_dir):
    """ReadingDB on a file without any schema."""
    from reading_roundup.database.manager import ReadingDB

    db = ReadingDB(db_path=tmp_dir / "bare.db")
    yield db
    db.close()


@pytest.fixture
def db_session(test_db):
    """
    Create a database session for tests.

    Provides a session with automatic rollback after test.
    """
    with test_db.session_scope() as session:
        yield session
        session.rollback()


@pytest.fixture
def entry_manager(db_session):
    """Create EntryManager instance for testing."""
    from reading_roundup.database.managers.entry_manager import EntryManager
    return EntryManager(db_session)


@pytest.fixture
def roundup_manager(db_session):
    """Create RoundupManager instance for testing."""
    from reading_roundup.database.managers.roundup_manager import RoundupManager
    return RoundupManager(db_session)


# ----- Document Helpers -----

def _split_frontmatter(content):
    """Split a document into (front-matter text, body lines)."""
    lines = content.splitlines()
    if not lines or lines[0] != "---" or "---" not in lines[1:]:
        return "", lines

    end = lines.index("---", 1)
    body = lines[end + 1:]
    while body and body[0] == "":
        body.pop(0)
    return "\n".join(lines[1:end]), body


@pytest.fixture
def split_frontmatter():
    """Expose the front-matter splitter as a fixture."""
    return _split_frontmatter
