"""Ledger domain service: recording and listing household transactions."""

from datetime import date
from decimal import Decimal
from typing import Optional

from homeledger.database.base import Database
from homeledger.domain.entities import LedgerTransaction, TransactionRecord
from homeledger.domain.errors import (
    NotFoundError,
    ValidationError,
    household_not_found,
    sub_category_not_found,
    sub_category_not_in_household,
)


class LedgerService:
    """Service for the household transaction ledger."""

    def __init__(self, db: Database):
        """Initialize ledger service.

        Args:
            db: Database instance
        """
        self.db = db

    def record_transaction(self, record: TransactionRecord) -> int:
        """Persist one transaction record.

        Args:
            record: Transaction payload

        Returns:
            Transaction ID

        Raises:
            NotFoundError: If the household or sub-category doesn't exist
            ValidationError: If the sub-category belongs to another household
                or the amount is not positive
            PersistenceError: If the database rejects the insert
        """
        if self.db.get_household(record.household_id) is None:
            raise NotFoundError(household_not_found(record.household_id))

        if record.sub_category_id is not None:
            sub_category = self.db.get_sub_category(record.sub_category_id)
            if sub_category is None:
                raise NotFoundError(sub_category_not_found(record.sub_category_id))
            category = self.db.get_category(sub_category.category_id)
            if category is None or category.household_id != record.household_id:
                raise ValidationError(
                    sub_category_not_in_household(record.sub_category_id, record.household_id)
                )

        if Decimal(record.amount) <= 0:
            raise ValidationError(f"Amount must be positive, got {record.amount}")

        return self.db.create_transaction(
            household_id=record.household_id,
            sub_category_id=record.sub_category_id,
            amount=record.amount,
            transaction_type=record.transaction_type,
            transaction_date=record.transaction_date,
            logged_by=record.logged_by,
            narration=record.narration,
            source=record.source_tag,
        )

    def list_transactions(
        self,
        household_id: int,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> list[LedgerTransaction]:
        """List a household's transactions within an optional inclusive range.

        Raises:
            NotFoundError: If the household doesn't exist
            ValidationError: If start_date is after end_date
        """
        if self.db.get_household(household_id) is None:
            raise NotFoundError(household_not_found(household_id))
        if start_date is not None and end_date is not None and start_date > end_date:
            raise ValidationError("Start date must be on or before end date")
        return self.db.list_transactions(household_id, start_date, end_date)
