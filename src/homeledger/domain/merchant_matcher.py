"""Merchant matcher: narration to a household's existing sub-category."""

import logging
from typing import Mapping, Optional, Sequence

from homeledger.domain.entities import (
    Category,
    Confidence,
    HouseholdSubCategory,
    MatchResult,
    TransactionType,
)
from homeledger.domain.merchant_rules import DEFAULT_MERCHANT_RULES, MerchantRule

logger = logging.getLogger(__name__)

NO_MATCH = MatchResult(sub_category_id=None, confidence=Confidence.NONE, transaction_type=TransactionType.EXPENSE)


class MerchantMatcher:
    """Match narrations against an ordered, immutable rule table.

    The matcher never creates categories. A keyword hit whose sub-category
    the household does not have is reported as unmatched, leaving the
    transaction for the user to categorize.
    """

    def __init__(self, rules: Sequence[MerchantRule] = DEFAULT_MERCHANT_RULES):
        self.rules = tuple(rules)

    def find_rule(self, narration: str) -> Optional[MerchantRule]:
        """Return the first rule with a keyword contained in the narration."""
        if not narration:
            return None
        for rule in self.rules:
            if rule.matches(narration):
                return rule
        return None

    def match(
        self,
        narration: str,
        sub_categories: Sequence[HouseholdSubCategory],
        category_map: Mapping[int, Category],
    ) -> MatchResult:
        """Suggest a sub-category for a narration.

        Args:
            narration: Statement narration
            sub_categories: The household's sub-categories
            category_map: Category ID to category, used to resolve the type

        Returns:
            MatchResult; `sub_category_id` is None when nothing usable matched
        """
        rule = self.find_rule(narration)
        if rule is None:
            return NO_MATCH

        wanted = rule.sub_category.lower()
        sub_category = next((s for s in sub_categories if s.name.lower() == wanted), None)
        if sub_category is None:
            logger.debug("Rule '%s' matched but household has no such sub-category", rule.sub_category)
            return MatchResult(
                sub_category_id=None,
                confidence=Confidence.NONE,
                transaction_type=rule.transaction_type,
            )

        category = category_map.get(sub_category.category_id)
        transaction_type = (
            TransactionType.INCOME
            if category is not None and category.category_type == TransactionType.INCOME
            else TransactionType.EXPENSE
        )

        return MatchResult(
            sub_category_id=sub_category.id,
            confidence=rule.confidence,
            transaction_type=transaction_type,
            sub_category_name=sub_category.name,
            category_name=category.name if category is not None else None,
        )


def match_merchant(
    narration: str,
    sub_categories: Sequence[HouseholdSubCategory],
    category_map: Mapping[int, Category],
    rules: Sequence[MerchantRule] = DEFAULT_MERCHANT_RULES,
) -> MatchResult:
    """Function form of `MerchantMatcher.match`."""
    return MerchantMatcher(rules).match(narration, sub_categories, category_map)
