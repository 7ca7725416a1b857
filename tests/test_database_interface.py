"""Tests for Database interface returning domain models."""

import pytest
from datetime import date, datetime
from decimal import Decimal

from homeledger.database.factories import create_sqlite_database
from homeledger.domain import entities
from homeledger.domain.entities import TransactionType
from homeledger.domain.errors import PersistenceError


class TestDatabaseInterface:
    """Tests to verify Database interface returns domain models."""

    def test_get_household_returns_domain_model(self, temp_db):
        household_id = temp_db.create_household("Sharma Family")

        household = temp_db.get_household(household_id)

        assert isinstance(household, entities.Household)
        assert household.id == household_id
        assert household.name == "Sharma Family"
        assert isinstance(household.created_at, datetime)
        assert temp_db.get_household(household_id + 1) is None

    def test_category_lookup_is_case_insensitive(self, temp_db):
        household_id = temp_db.create_household("Home")
        category_id = temp_db.create_category(household_id, "Variable", TransactionType.EXPENSE)

        category = temp_db.get_category_by_name(household_id, "variable")

        assert isinstance(category, entities.Category)
        assert category.id == category_id
        assert category.category_type == TransactionType.EXPENSE

    def test_categories_are_per_household(self, temp_db):
        first = temp_db.create_household("First")
        second = temp_db.create_household("Second")
        temp_db.create_category(first, "Income", TransactionType.INCOME)

        assert temp_db.get_category_by_name(second, "Income") is None
        assert temp_db.list_categories(second) == []

    def test_list_sub_categories_returns_domain_models(self, temp_db):
        household_id = temp_db.create_household("Home")
        category_id = temp_db.create_category(household_id, "Variable", TransactionType.EXPENSE)
        temp_db.create_sub_category(category_id, "Groceries")
        temp_db.create_sub_category(category_id, "Fuel")

        subs = temp_db.list_sub_categories(household_id)

        assert [s.name for s in subs] == ["Fuel", "Groceries"]
        for sub in subs:
            assert isinstance(sub, entities.HouseholdSubCategory)
            assert sub.category_id == category_id

    def test_transactions_round_trip_decimal(self, temp_db):
        household_id = temp_db.create_household("Home")
        temp_db.create_transaction(
            household_id=household_id,
            sub_category_id=None,
            amount=Decimal("2315.50"),
            transaction_type=TransactionType.EXPENSE,
            transaction_date=date(2024, 3, 3),
            logged_by="asha",
            narration="POS BIGBASKET",
            source="import",
        )

        (txn,) = temp_db.list_transactions(household_id)

        assert isinstance(txn, entities.LedgerTransaction)
        assert txn.amount == Decimal("2315.50")
        assert isinstance(txn.amount, Decimal)
        assert txn.transaction_type == TransactionType.EXPENSE
        assert txn.source == "import"

    def test_list_transactions_date_range_is_inclusive(self, temp_db):
        household_id = temp_db.create_household("Home")
        for day in (1, 15, 31):
            temp_db.create_transaction(
                household_id, None, Decimal("1.00"), TransactionType.EXPENSE, date(2024, 3, day), "cli"
            )

        in_range = temp_db.list_transactions(household_id, date(2024, 3, 1), date(2024, 3, 15))
        assert [t.transaction_date.day for t in in_range] == [1, 15]

    def test_rejected_write_raises_persistence_error(self, temp_db):
        household_id = temp_db.create_household("Home")
        with pytest.raises(PersistenceError):
            temp_db.create_transaction(
                household_id, None, Decimal("0"), TransactionType.EXPENSE, date(2024, 3, 1), "cli"
            )
        # The session is usable after the rollback
        assert temp_db.get_household(household_id).name == "Home"

    def test_duplicate_category_rejected_by_schema(self, temp_db):
        household_id = temp_db.create_household("Home")
        temp_db.create_category(household_id, "Fixed", TransactionType.EXPENSE)
        with pytest.raises(PersistenceError):
            temp_db.create_category(household_id, "Fixed", TransactionType.EXPENSE)


def test_factory_reads_environment(tmp_path, monkeypatch):
    db_path = tmp_path / "env.db"
    monkeypatch.setenv("HOMELEDGER_DB_PATH", str(db_path))

    db = create_sqlite_database()
    db.connect()
    db.create_household("Env Home")
    db.disconnect()

    assert db_path.exists()
