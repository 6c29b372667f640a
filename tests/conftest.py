"""Shared pytest fixtures for ohadabooks tests."""

import tempfile
import os
from datetime import date
from pathlib import Path
import pytest

from ohadabooks.database.factories import create_sqlite_database
from ohadabooks.domain.chart import AccountService
from ohadabooks.domain.journal import JournalService
from ohadabooks.domain.statements import StatementService

OWNER = "acme"
OTHER_OWNER = "globex"


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def account_service(temp_db):
    """Create an AccountService with a temporary database."""
    return AccountService(temp_db)


@pytest.fixture
def journal_service(temp_db):
    """Create a JournalService with a temporary database."""
    return JournalService(temp_db)


@pytest.fixture
def statement_service(temp_db):
    """Create a StatementService with a temporary database."""
    return StatementService(temp_db)


@pytest.fixture
def sample_chart(account_service):
    """Load the default OHADA chart for the test owner."""
    account_service.load_default_chart(OWNER)
    return account_service.get_chart(OWNER)


@pytest.fixture
def post_entry(journal_service):
    """Return a helper that records a balanced entry from (code, debit, credit) tuples."""

    def _post(lines, entry_date=date(2024, 3, 15), owner=OWNER, reference="REF", description="Entry", journal="bank"):
        return journal_service.create_entry(
            owner_id=owner,
            entry_date=entry_date,
            reference=reference,
            description=description,
            journal_type=journal,
            lines=[
                {"account_code": code, "debit": debit, "credit": credit}
                for code, debit, credit in lines
            ],
        )

    return _post


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()


@pytest.fixture
def fixtures_dir():
    """Return the path to the test fixtures directory."""
    return Path(__file__).parent / "fixtures"
