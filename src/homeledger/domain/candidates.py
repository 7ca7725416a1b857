"""Import candidate builder and review actions."""

import logging
from dataclasses import dataclass
from typing import Mapping, Optional, Sequence

from homeledger.domain.duplicates import DuplicateIndex
from homeledger.domain.entities import (
    Category,
    HouseholdSubCategory,
    ImportCandidate,
    ParsedStatementTransaction,
    TransactionType,
)
from homeledger.domain.errors import NotFoundError, sub_category_not_found
from homeledger.domain.merchant_matcher import MerchantMatcher

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CandidateSummary:
    """Counts shown above the review list."""

    total: int
    selected: int
    categorized: int
    uncategorized: int
    duplicates: int


def build_candidates(
    transactions: Sequence[ParsedStatementTransaction],
    sub_categories: Sequence[HouseholdSubCategory],
    category_map: Mapping[int, Category],
    duplicate_index: Optional[DuplicateIndex] = None,
    matcher: Optional[MerchantMatcher] = None,
) -> list[ImportCandidate]:
    """Pair each transaction with its match and duplicate flag.

    Duplicates start deselected; everything else starts selected. Building
    twice from the same inputs gives equal candidates.
    """
    matcher = matcher or MerchantMatcher()
    candidates = []
    for index, txn in enumerate(transactions):
        is_duplicate = duplicate_index.is_duplicate(txn) if duplicate_index is not None else False
        candidates.append(
            ImportCandidate(
                index=index,
                transaction=txn,
                match=matcher.match(txn.narration, sub_categories, category_map),
                is_duplicate=is_duplicate,
                selected=not is_duplicate,
            )
        )

    summary = summarize(candidates)
    logger.info(
        "Built %d candidates: %d categorized, %d duplicates",
        summary.total,
        summary.categorized,
        summary.duplicates,
    )
    return candidates


def select_all(candidates: Sequence[ImportCandidate], selected: bool = True) -> None:
    """Select (or clear) every candidate, duplicates included."""
    for candidate in candidates:
        candidate.selected = selected


def deselect_duplicates(candidates: Sequence[ImportCandidate]) -> int:
    """Deselect every flagged duplicate. Returns how many were deselected."""
    count = 0
    for candidate in candidates:
        if candidate.is_duplicate and candidate.selected:
            candidate.selected = False
            count += 1
    return count


def set_override(
    candidate: ImportCandidate,
    sub_category_id: Optional[int],
    sub_categories: Sequence[HouseholdSubCategory],
    category_map: Mapping[int, Category],
    transaction_type: Optional[TransactionType] = None,
) -> None:
    """Override the automatic category of one candidate.

    The override's transaction type follows the chosen sub-category's
    category unless given explicitly. Passing None for `sub_category_id`
    clears the override.

    Raises:
        NotFoundError: If the sub-category is not one of the household's
    """
    if sub_category_id is None:
        candidate.user_override_sub_category_id = None
        candidate.user_override_transaction_type = transaction_type
        return

    sub_category = next((s for s in sub_categories if s.id == sub_category_id), None)
    if sub_category is None:
        raise NotFoundError(sub_category_not_found(sub_category_id))

    if transaction_type is None:
        category = category_map.get(sub_category.category_id)
        transaction_type = category.category_type if category is not None else TransactionType.EXPENSE

    candidate.user_override_sub_category_id = sub_category_id
    candidate.user_override_transaction_type = transaction_type


def summarize(candidates: Sequence[ImportCandidate]) -> CandidateSummary:
    categorized = sum(1 for c in candidates if c.effective_sub_category_id is not None)
    return CandidateSummary(
        total=len(candidates),
        selected=sum(1 for c in candidates if c.selected),
        categorized=categorized,
        uncategorized=len(candidates) - categorized,
        duplicates=sum(1 for c in candidates if c.is_duplicate),
    )
