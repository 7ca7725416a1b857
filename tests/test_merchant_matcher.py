"""Tests for merchant matching."""

import pytest

from homeledger.domain.entities import Confidence, TransactionType
from homeledger.domain.merchant_matcher import MerchantMatcher, match_merchant
from homeledger.domain.merchant_rules import DEFAULT_MERCHANT_RULES, MerchantRule


@pytest.fixture
def matcher():
    return MerchantMatcher()


def test_swiggy_matches_food_ordering(matcher, reference_data, sub_category_ids):
    result = matcher.match("SWIGGY ORDER #1234", reference_data.sub_categories, reference_data.category_map)

    assert result.sub_category_id == sub_category_ids["Food Ordering"]
    assert result.confidence == Confidence.HIGH
    assert result.transaction_type == TransactionType.EXPENSE
    assert result.sub_category_name == "Food Ordering"
    assert result.category_name == "Variable"


def test_keyword_without_household_sub_category(matcher, household_service, bare_household):
    """A keyword hit never invents a category the household lacks."""
    reference = household_service.get_reference_data(bare_household.id)
    result = matcher.match("SWIGGY ORDER #1234", reference.sub_categories, reference.category_map)

    assert result.sub_category_id is None
    assert result.confidence == Confidence.NONE
    assert household_service.get_category_by_name(bare_household.id, "Variable") is None
    assert [s.name for s in household_service.list_sub_categories(bare_household.id)] == ["Pocket Money"]


def test_no_rule_defaults_to_expense(matcher, reference_data):
    result = matcher.match("ATM WDL-HDFC ATM MG ROAD", reference_data.sub_categories, reference_data.category_map)
    assert result.sub_category_id is None
    assert result.confidence == Confidence.NONE
    assert result.transaction_type == TransactionType.EXPENSE


def test_income_type_follows_category(matcher, reference_data, sub_category_ids):
    result = matcher.match(
        "NEFT CR-ACME CORP-SALARY MAR", reference_data.sub_categories, reference_data.category_map
    )
    assert result.sub_category_id == sub_category_ids["Salary"]
    assert result.transaction_type == TransactionType.INCOME
    assert result.confidence == Confidence.MEDIUM


def test_unknown_parent_category_defaults_to_expense(matcher, reference_data, sub_category_ids):
    result = matcher.match("NEFT CR-ACME CORP-SALARY MAR", reference_data.sub_categories, {})
    assert result.sub_category_id == sub_category_ids["Salary"]
    assert result.transaction_type == TransactionType.EXPENSE
    assert result.category_name is None


@pytest.mark.parametrize(
    "narration,expected",
    [
        ("POS 4321 BIGBASKET BANGALORE", "Groceries"),
        ("upi/blinkit/order", "Groceries"),
        ("NETFLIX SUBSCRIPTION", "Entertainment"),
        ("ACT FIBERNET BILL", "Internet"),
        ("BIL/ONL/BESCOM ELECTRICITY", "Electricity"),
        ("UPI/P2M/UBER INDIA/Trip", "Transport"),
        ("AMAZON PAY", "Shopping"),
        ("STAR HEALTH INSURANCE PREMIUM", "Health Insurance"),
    ],
)
def test_default_rules(matcher, reference_data, sub_category_ids, narration, expected):
    result = matcher.match(narration, reference_data.sub_categories, reference_data.category_map)
    assert result.sub_category_id == sub_category_ids[expected]


def test_first_rule_wins(matcher):
    """Rule order decides between overlapping keywords."""
    rule = matcher.find_rule("SWIGGY INSTAMART")
    assert rule.sub_category == "Groceries"
    assert matcher.find_rule("") is None


def test_sub_category_names_compare_case_insensitively(household_service):
    household_id = household_service.create_household("Lowercase Home")
    category_id = household_service.create_category(household_id, "spending")
    sub_id = household_service.create_sub_category(category_id, "groceries")
    reference = household_service.get_reference_data(household_id)

    result = match_merchant("DMART AVENUE", reference.sub_categories, reference.category_map)
    assert result.sub_category_id == sub_id


def test_custom_rule_table(reference_data, sub_category_ids):
    rules = (
        MerchantRule(
            keywords=("corner shop",),
            sub_category="Miscellaneous",
            transaction_type=TransactionType.EXPENSE,
            confidence=Confidence.MEDIUM,
        ),
    )
    matcher = MerchantMatcher(rules)
    subs, categories = reference_data.sub_categories, reference_data.category_map

    assert matcher.match("THE CORNER SHOP", subs, categories).sub_category_id == sub_category_ids["Miscellaneous"]
    assert matcher.match("SWIGGY", subs, categories).sub_category_id is None


def test_rule_names_exist_in_default_categories(sub_category_ids):
    """Every default rule points at a seeded sub-category."""
    assert {rule.sub_category for rule in DEFAULT_MERCHANT_RULES} <= set(sub_category_ids)
