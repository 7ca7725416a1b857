"""Tests for the ledger service."""

from datetime import date
from decimal import Decimal

import pytest

from homeledger.domain.entities import TransactionRecord, TransactionType
from homeledger.domain.errors import NotFoundError, ValidationError


def record(household_id, sub_category_id=None, amount="100.00", day=1, **kwargs):
    return TransactionRecord(
        household_id=household_id,
        sub_category_id=sub_category_id,
        amount=Decimal(amount),
        transaction_type=kwargs.pop("transaction_type", TransactionType.EXPENSE),
        transaction_date=date(2024, 3, day),
        logged_by="asha",
        **kwargs,
    )


def test_record_transaction(ledger_service, sample_household, sub_category_ids):
    txn_id = ledger_service.record_transaction(
        record(sample_household.id, sub_category_ids["Groceries"], narration="DMART")
    )

    (txn,) = ledger_service.list_transactions(sample_household.id)
    assert txn.id == txn_id
    assert txn.sub_category_id == sub_category_ids["Groceries"]
    assert txn.narration == "DMART"
    assert txn.source == "import"
    assert txn.logged_by == "asha"


def test_manual_source_tag(ledger_service, sample_household):
    ledger_service.record_transaction(record(sample_household.id, source_tag="manual"))
    assert ledger_service.list_transactions(sample_household.id)[0].source == "manual"


def test_unknown_household(ledger_service):
    with pytest.raises(NotFoundError):
        ledger_service.record_transaction(record(404))
    with pytest.raises(NotFoundError):
        ledger_service.list_transactions(404)


def test_unknown_sub_category(ledger_service, sample_household):
    with pytest.raises(NotFoundError, match="Sub-category 99999 not found"):
        ledger_service.record_transaction(record(sample_household.id, 99999))


def test_sub_category_of_other_household(ledger_service, household_service, sample_household, bare_household):
    (pocket_money,) = household_service.list_sub_categories(bare_household.id)
    with pytest.raises(ValidationError, match="does not belong"):
        ledger_service.record_transaction(record(sample_household.id, pocket_money.id))


def test_amount_must_be_positive(ledger_service, sample_household):
    with pytest.raises(ValidationError):
        ledger_service.record_transaction(record(sample_household.id, amount="0"))


def test_list_by_date_range(ledger_service, sample_household):
    for day in (1, 10, 20):
        ledger_service.record_transaction(record(sample_household.id, day=day))

    listed = ledger_service.list_transactions(sample_household.id, date(2024, 3, 5), date(2024, 3, 20))
    assert [t.transaction_date.day for t in listed] == [10, 20]

    with pytest.raises(ValidationError):
        ledger_service.list_transactions(sample_household.id, date(2024, 3, 20), date(2024, 3, 5))
