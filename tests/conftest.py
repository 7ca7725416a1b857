"""Shared pytest fixtures for homeledger tests."""

import tempfile
import os
from pathlib import Path
import pytest

from homeledger.config import ImportSettings
from homeledger.database.factories import create_sqlite_database
from homeledger.domain.household import HouseholdService
from homeledger.domain.ledger import LedgerService
from homeledger.domain.statement_import import StatementImportService


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

    yield db

    # Cleanup
    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def settings():
    """Default import settings, independent of the environment."""
    return ImportSettings()


@pytest.fixture
def household_service(temp_db):
    """Create a HouseholdService with a temporary database."""
    return HouseholdService(temp_db)


@pytest.fixture
def ledger_service(temp_db):
    """Create a LedgerService with a temporary database."""
    return LedgerService(temp_db)


@pytest.fixture
def import_service(temp_db, settings):
    """Create a StatementImportService with a temporary database."""
    return StatementImportService(temp_db, settings=settings)


@pytest.fixture
def sample_household(household_service):
    """Create a household seeded with the default categories."""
    from homeledger.cli.commands.init_categories import INITIAL_CATEGORIES

    household_id = household_service.create_household("Sharma Family")
    for category_name, category_type, sub_names in INITIAL_CATEGORIES:
        category_id = household_service.create_category(household_id, category_name, category_type)
        for sub_name in sub_names:
            household_service.create_sub_category(category_id, sub_name)
    return household_service.get_household(household_id)


@pytest.fixture
def bare_household(household_service):
    """Create a household with a single, unrelated category."""
    household_id = household_service.create_household("Bare Household")
    category_id = household_service.create_category(household_id, "Misc")
    household_service.create_sub_category(category_id, "Pocket Money")
    return household_service.get_household(household_id)


@pytest.fixture
def reference_data(household_service, sample_household):
    """Sub-categories and category map of the sample household."""
    return household_service.get_reference_data(sample_household.id)


@pytest.fixture
def sub_category_ids(reference_data):
    """Sub-category IDs of the sample household, by name."""
    return {s.name: s.id for s in reference_data.sub_categories}


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()


@pytest.fixture
def fixtures_dir():
    """Return the path to the test fixtures directory."""
    return Path(__file__).parent / "fixtures"
