"""Mapper functions to convert between domain models and SQLAlchemy models.

This layer isolates the conversion logic, so the ORM schema can change
without touching the import pipeline.
"""

from decimal import Decimal

from homeledger.domain import entities as domain
from homeledger.database.models import (
    Category as ORMCategory,
    Household as ORMHousehold,
    SubCategory as ORMSubCategory,
    Transaction as ORMTransaction,
)


def household_to_domain(orm_household: ORMHousehold) -> domain.Household:
    """Convert SQLAlchemy Household model to domain Household entity."""
    return domain.Household(
        id=orm_household.id,
        name=orm_household.name,
        created_at=orm_household.created_at,
    )


def category_to_domain(orm_category: ORMCategory) -> domain.Category:
    """Convert SQLAlchemy Category model to domain Category entity."""
    return domain.Category(
        id=orm_category.id,
        household_id=orm_category.household_id,
        name=orm_category.name,
        category_type=domain.TransactionType(orm_category.category_type),
        created_at=orm_category.created_at,
    )


def sub_category_to_domain(orm_sub_category: ORMSubCategory) -> domain.HouseholdSubCategory:
    """Convert SQLAlchemy SubCategory model to domain HouseholdSubCategory entity."""
    return domain.HouseholdSubCategory(
        id=orm_sub_category.id,
        name=orm_sub_category.name,
        category_id=orm_sub_category.category_id,
        created_at=orm_sub_category.created_at,
    )


def transaction_to_domain(orm_transaction: ORMTransaction) -> domain.LedgerTransaction:
    """Convert SQLAlchemy Transaction model to domain LedgerTransaction entity."""
    return domain.LedgerTransaction(
        id=orm_transaction.id,
        household_id=orm_transaction.household_id,
        sub_category_id=orm_transaction.sub_category_id,
        amount=Decimal(orm_transaction.amount),
        transaction_type=domain.TransactionType(orm_transaction.transaction_type),
        transaction_date=orm_transaction.transaction_date,
        narration=orm_transaction.narration,
        logged_by=orm_transaction.logged_by,
        source=orm_transaction.source,
        created_at=orm_transaction.created_at,
    )
