"""Shared pytest fixtures for offerbook tests."""

import tempfile
import os
from datetime import date
from decimal import Decimal
import pytest

from offerbook.database.factories import create_sqlite_database
from offerbook.domain.donor import DonorService
from offerbook.domain.entities import NewOfferingRecord
from offerbook.domain.ledger import PendingLedger
from offerbook.domain.offering_type import OfferingTypeService
from offerbook.domain.sync import SyncMarker
from offerbook.utils.local_store import LocalStore


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
def state_dir(tmp_path):
    """Directory for local staging state."""
    path = tmp_path / "state"
    path.mkdir()
    return path


@pytest.fixture
def store(state_dir):
    """Create a LocalStore in a temporary directory."""
    return LocalStore(state_dir)


@pytest.fixture
def ledger(store):
    """Create an empty PendingLedger."""
    return PendingLedger(store)


@pytest.fixture
def marker(store):
    """Create an empty SyncMarker."""
    return SyncMarker(store)


@pytest.fixture
def donor_service(temp_db):
    """Create a DonorService with a temporary database."""
    return DonorService(temp_db)


@pytest.fixture
def offering_type_service(temp_db):
    """Create an OfferingTypeService with a temporary database."""
    return OfferingTypeService(temp_db)


@pytest.fixture
def sample_types(offering_type_service):
    """Create the usual offering codes."""
    offering_type_service.save_type("11", "Tithe", category="General")
    offering_type_service.save_type("22", "Sunday", category="General")
    offering_type_service.save_type("29", "Thanksgiving", category="Special")
    offering_type_service.save_type("41", "Mission", category="Mission")
    return offering_type_service.list_types()


@pytest.fixture
def sample_donor(donor_service):
    """Create a numbered donor."""
    return donor_service.save_donor(name="Kim Yongjun", offering_number="122")


def _make_record(
    day: date,
    code: str = "11",
    amount: str = "100",
    donor_name: str = "anonymous",
    offering_number=None,
    donor_id=None,
    label=None,
    note: str = "",
) -> NewOfferingRecord:
    """Build a NewOfferingRecord with sensible defaults."""
    return NewOfferingRecord(
        date=day,
        donor_id=donor_id,
        donor_name=donor_name,
        offering_number=offering_number,
        code=code,
        label=label or code,
        amount=Decimal(amount),
        note=note,
    )


@pytest.fixture
def make_record():
    """Return a builder for NewOfferingRecord values."""
    return _make_record


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
