"""Household and category domain service."""

from dataclasses import dataclass
from typing import Optional

from homeledger.database.base import Database
from homeledger.domain.entities import (
    Category,
    Household,
    HouseholdSubCategory,
    TransactionType,
)
from homeledger.domain.errors import (
    ConflictError,
    NotFoundError,
    ValidationError,
    category_not_found,
    household_not_found,
)


@dataclass(frozen=True)
class ReferenceData:
    """A household's category taxonomy, as consumed by the import pipeline."""

    sub_categories: list[HouseholdSubCategory]
    category_map: dict[int, Category]


class HouseholdService:
    """Service for managing households and their category taxonomy."""

    def __init__(self, db: Database):
        """Initialize household service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_household(self, name: str) -> int:
        """Create a household.

        Args:
            name: Household name (unique)

        Returns:
            Household ID

        Raises:
            ValidationError: If the name is blank
            ConflictError: If a household with that name exists
        """
        name = name.strip()
        if not name:
            raise ValidationError("Household name cannot be empty")
        if self.db.get_household_by_name(name) is not None:
            raise ConflictError(f"Household '{name}' already exists")
        return self.db.create_household(name)

    def get_household(self, household_id: int) -> Optional[Household]:
        return self.db.get_household(household_id)

    def require_household(self, household_id: int) -> Household:
        """Get a household or raise NotFoundError."""
        household = self.db.get_household(household_id)
        if household is None:
            raise NotFoundError(household_not_found(household_id))
        return household

    def list_households(self) -> list[Household]:
        return self.db.list_households()

    def create_category(
        self,
        household_id: int,
        name: str,
        category_type: TransactionType = TransactionType.EXPENSE,
    ) -> int:
        """Create a top-level category.

        Args:
            household_id: Owning household
            name: Category name, unique within the household
            category_type: Income or expense

        Returns:
            Category ID

        Raises:
            NotFoundError: If the household doesn't exist
            ConflictError: If the household already has that category
        """
        self.require_household(household_id)
        name = name.strip()
        if not name:
            raise ValidationError("Category name cannot be empty")
        if self.db.get_category_by_name(household_id, name) is not None:
            raise ConflictError(f"Category '{name}' already exists")
        return self.db.create_category(household_id, name, TransactionType(category_type))

    def get_category_by_name(self, household_id: int, name: str) -> Optional[Category]:
        return self.db.get_category_by_name(household_id, name)

    def list_categories(self, household_id: int) -> list[Category]:
        return self.db.list_categories(household_id)

    def create_sub_category(self, category_id: int, name: str) -> int:
        """Create a sub-category under a category.

        Raises:
            NotFoundError: If the category doesn't exist
            ConflictError: If the household already has a sub-category with
                that name (names are matched case-insensitively by the
                merchant matcher, so they must be unique per household)
        """
        category = self.db.get_category(category_id)
        if category is None:
            raise NotFoundError(category_not_found(category_id))
        name = name.strip()
        if not name:
            raise ValidationError("Sub-category name cannot be empty")
        existing = self.db.list_sub_categories(category.household_id)
        if any(s.name.lower() == name.lower() for s in existing):
            raise ConflictError(f"Sub-category '{name}' already exists")
        return self.db.create_sub_category(category_id, name)

    def list_sub_categories(self, household_id: int) -> list[HouseholdSubCategory]:
        return self.db.list_sub_categories(household_id)

    def get_reference_data(self, household_id: int) -> ReferenceData:
        """Load the sub-categories and category map for matching.

        Raises:
            NotFoundError: If the household doesn't exist
        """
        self.require_household(household_id)
        categories = self.db.list_categories(household_id)
        return ReferenceData(
            sub_categories=self.db.list_sub_categories(household_id),
            category_map={c.id: c for c in categories},
        )
