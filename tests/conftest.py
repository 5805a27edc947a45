"""Shared pytest fixtures for bulkledger tests."""

import logging
import tempfile
import os
from datetime import date, datetime, timedelta, UTC
from pathlib import Path
import pytest

from bulkledger.database.factories import create_sqlite_database
from bulkledger.domain.apply import BulkApplyService
from bulkledger.domain.balance import BalanceEngine
from bulkledger.domain.bulk_entry import BulkEntryService
from bulkledger.domain.duplicates import DuplicateDetector
from bulkledger.domain.party import PartyService


class FakeClock:
    """Settable clock for duplicate-window tests."""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, delta: timedelta) -> None:
        self.now = self.now + delta


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    # Create a temporary file for the database
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    # Create database
    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    # Cleanup
    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def entry_date():
    """Default date for parsed lines."""
    return date(2025, 1, 20)


@pytest.fixture
def party_service(temp_db):
    """Create a PartyService with a temporary database."""
    return PartyService(temp_db)


@pytest.fixture
def balance_engine(temp_db):
    """Create a BalanceEngine with a temporary database."""
    return BalanceEngine(temp_db)


@pytest.fixture
def detector(temp_db):
    """Create a DuplicateDetector with a temporary database."""
    return DuplicateDetector(temp_db)


@pytest.fixture
def apply_service(temp_db, detector):
    """Create a BulkApplyService with a temporary database."""
    return BulkApplyService(temp_db, detector=detector)


@pytest.fixture
def bulk_entry_service(temp_db, detector):
    """Create a BulkEntryService with a temporary database."""
    return BulkEntryService(temp_db, detector=detector)


@pytest.fixture
def sample_party(party_service):
    """Create a sample party for testing."""
    return party_service.create_party(name="SAJ")


@pytest.fixture
def fake_clock():
    """A clock that only moves when told to."""
    return FakeClock(datetime.now(UTC))


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()


@pytest.fixture
def fixtures_dir():
    """Return the path to the test fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture(autouse=True)
def restore_package_logger():
    """Undo logger changes made by --log-level and setup_logging."""
    logger = logging.getLogger("bulkledger")
    level = logger.level
    handlers = list(logger.handlers)
    yield
    logger.setLevel(level)
    logger.handlers = handlers
