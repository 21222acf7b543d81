"""Shared pytest fixtures for ledgerline tests."""

import os
import tempfile
from decimal import Decimal

import pytest

from ledgerline.database.factories import create_sqlite_database
from ledgerline.domain.entities import EntityKind
from ledgerline.domain.entity import EntityService
from ledgerline.domain.ledger import LedgerService
from ledgerline.domain.record import RecordService
from ledgerline.domain.financials import ReportService
from ledgerline.domain.statement_cache import StatementCache


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
def statement_cache():
    return StatementCache()


@pytest.fixture
def entity_service(temp_db, statement_cache):
    """Create an EntityService with a temporary database."""
    return EntityService(temp_db, statement_cache)


@pytest.fixture
def record_service(temp_db, statement_cache):
    """Create a RecordService with a temporary database."""
    return RecordService(temp_db, statement_cache)


@pytest.fixture
def ledger_service(temp_db, statement_cache):
    """Create a LedgerService sharing the statement cache."""
    return LedgerService(temp_db, statement_cache)


@pytest.fixture
def report_service(temp_db, ledger_service):
    """Create a ReportService with a temporary database."""
    return ReportService(temp_db, ledger_service)


@pytest.fixture
def sample_client(entity_service):
    """Create a client with an opening balance of 1000."""
    entity_id = entity_service.create_entity(
        name="Al Noor Trading",
        kind=EntityKind.CLIENT,
        opening_balance=Decimal("1000"),
        branch_id=1,
    )
    return entity_service.get_entity(entity_id)


@pytest.fixture
def sample_supplier(entity_service):
    """Create a supplier with an opening balance of 2000."""
    entity_id = entity_service.create_entity(
        name="Gulf Supplies",
        kind=EntityKind.SUPPLIER,
        opening_balance=Decimal("2000"),
        branch_id=2,
    )
    return entity_service.get_entity(entity_id)


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
