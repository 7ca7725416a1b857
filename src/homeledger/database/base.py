"""Abstract database interface."""

from abc import ABC, abstractmethod
from datetime import date
from decimal import Decimal
from typing import Optional

# Import entities directly to avoid circular import through domain/__init__.py
from homeledger.domain.entities import (
    Category,
    Household,
    HouseholdSubCategory,
    LedgerTransaction,
    TransactionType,
)


class Database(ABC):
    """Abstract database interface for homeledger."""

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    # Household operations
    @abstractmethod
    def create_household(self, name: str) -> int:
        """Create a new household. Returns household ID."""
        pass

    @abstractmethod
    def get_household(self, household_id: int) -> Optional[Household]:
        """Get household by ID."""
        pass

    @abstractmethod
    def get_household_by_name(self, name: str) -> Optional[Household]:
        """Get household by name."""
        pass

    @abstractmethod
    def list_households(self) -> list[Household]:
        """List all households."""
        pass

    # Category operations
    @abstractmethod
    def create_category(self, household_id: int, name: str, category_type: TransactionType) -> int:
        """Create a top-level category. Returns category ID."""
        pass

    @abstractmethod
    def get_category(self, category_id: int) -> Optional[Category]:
        """Get category by ID."""
        pass

    @abstractmethod
    def get_category_by_name(self, household_id: int, name: str) -> Optional[Category]:
        """Get a household's category by name (case-insensitive)."""
        pass

    @abstractmethod
    def list_categories(self, household_id: int) -> list[Category]:
        """List a household's categories."""
        pass

    # Sub-category operations
    @abstractmethod
    def create_sub_category(self, category_id: int, name: str) -> int:
        """Create a sub-category. Returns sub-category ID."""
        pass

    @abstractmethod
    def get_sub_category(self, sub_category_id: int) -> Optional[HouseholdSubCategory]:
        """Get sub-category by ID."""
        pass

    @abstractmethod
    def list_sub_categories(self, household_id: int) -> list[HouseholdSubCategory]:
        """List all sub-categories of a household's categories."""
        pass

    # Transaction operations
    @abstractmethod
    def create_transaction(
        self,
        household_id: int,
        sub_category_id: Optional[int],
        amount: Decimal,
        transaction_type: TransactionType,
        transaction_date: date,
        logged_by: str,
        narration: Optional[str] = None,
        source: str = "manual",
    ) -> int:
        """Insert a transaction. Returns transaction ID."""
        pass

    @abstractmethod
    def list_transactions(
        self,
        household_id: int,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> list[LedgerTransaction]:
        """List a household's transactions, optionally within a date range (inclusive)."""
        pass
