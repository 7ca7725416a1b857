"""Tests for household and category management."""

import pytest

from homeledger.domain.entities import TransactionType
from homeledger.domain.errors import ConflictError, NotFoundError, ValidationError


def test_create_household(household_service):
    household_id = household_service.create_household("  Sharma Family ")
    household = household_service.get_household(household_id)
    assert household.name == "Sharma Family"


def test_household_name_rules(household_service):
    household_service.create_household("Sharma Family")
    with pytest.raises(ConflictError):
        household_service.create_household("Sharma Family")
    with pytest.raises(ValidationError):
        household_service.create_household("   ")


def test_require_household(household_service):
    with pytest.raises(NotFoundError, match="Household 42 not found"):
        household_service.require_household(42)


def test_category_type_and_uniqueness(household_service):
    household_id = household_service.create_household("Home")
    category_id = household_service.create_category(household_id, "Income", TransactionType.INCOME)

    category = household_service.get_category_by_name(household_id, "INCOME")
    assert category.id == category_id
    assert category.category_type == TransactionType.INCOME

    with pytest.raises(ConflictError):
        household_service.create_category(household_id, "income")


def test_category_needs_household(household_service):
    with pytest.raises(NotFoundError):
        household_service.create_category(999, "Orphan")


def test_sub_category_names_unique_per_household(household_service):
    """The matcher looks sub-categories up by name, so names cannot repeat."""
    household_id = household_service.create_household("Home")
    fixed = household_service.create_category(household_id, "Fixed")
    variable = household_service.create_category(household_id, "Variable")
    household_service.create_sub_category(fixed, "Internet")

    with pytest.raises(ConflictError):
        household_service.create_sub_category(variable, "internet")

    other = household_service.create_household("Other")
    other_fixed = household_service.create_category(other, "Fixed")
    household_service.create_sub_category(other_fixed, "Internet")


def test_sub_category_needs_category(household_service):
    with pytest.raises(NotFoundError):
        household_service.create_sub_category(999, "Groceries")


def test_reference_data(household_service, sample_household):
    reference = household_service.get_reference_data(sample_household.id)

    names = {s.name for s in reference.sub_categories}
    assert {"Groceries", "Salary", "Home Loan EMI"} <= names
    assert {c.name for c in reference.category_map.values()} == {
        "Income",
        "EMI",
        "Insurance",
        "Savings",
        "Fixed",
        "Variable",
    }
    for sub in reference.sub_categories:
        assert sub.category_id in reference.category_map
