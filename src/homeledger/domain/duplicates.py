"""Duplicate detector for statement imports.

A parsed transaction is a probable duplicate of a ledger transaction with the
same date, the same amount and a similar narration. The similarity bar is
high: a missed duplicate costs the user one click, a false positive hides a
real transaction.
"""

import logging
import re
from collections import defaultdict
from datetime import date
from decimal import Decimal
from typing import Iterable, Optional

from rapidfuzz import fuzz

from homeledger.domain.entities import LedgerTransaction, ParsedStatementTransaction, TransactionType

logger = logging.getLogger(__name__)

NON_ALNUM = re.compile(r"[^0-9a-z]+")
CENT = Decimal("0.01")


def normalize_for_comparison(narration: Optional[str]) -> str:
    """Lowercase and reduce punctuation and whitespace runs to single spaces."""
    if not narration:
        return ""
    return NON_ALNUM.sub(" ", narration.lower()).strip()


def narrations_similar(
    left: Optional[str],
    right: Optional[str],
    threshold: float = 0.85,
    min_containment_length: int = 8,
    allow_containment: bool = True,
) -> bool:
    """Return True if two narrations plausibly describe the same transaction.

    Either the shorter normalized narration is contained in the longer one
    (and is at least `min_containment_length` characters), or their
    similarity ratio is at least `threshold` (0..1). Pass
    `allow_containment=False` to rely on equality and the ratio alone.
    """
    a = normalize_for_comparison(left)
    b = normalize_for_comparison(right)
    if not a or not b:
        return False
    if a == b:
        return True

    if allow_containment:
        shorter, longer = sorted((a, b), key=len)
        if len(shorter) >= min_containment_length and shorter in longer:
            return True

    return fuzz.ratio(a, b) >= threshold * 100


class DuplicateIndex:
    """Ledger transactions indexed by (date, amount), built once per session.

    Containment only counts between transactions of the same type, so a
    refund credit is not taken for the debit it reverses.
    """

    def __init__(
        self,
        transactions: Iterable[LedgerTransaction],
        threshold: float = 0.85,
        min_containment_length: int = 8,
    ):
        self.threshold = threshold
        self.min_containment_length = min_containment_length
        self._by_key: dict[tuple[date, Decimal], list[tuple[str, TransactionType]]] = defaultdict(list)
        count = 0
        for txn in transactions:
            if txn.narration:
                key = self._key(txn.transaction_date, txn.amount)
                self._by_key[key].append((txn.narration, txn.transaction_type))
                count += 1
        logger.debug("Duplicate index built from %d ledger transactions", count)

    @staticmethod
    def _key(txn_date: date, amount: Decimal) -> tuple[date, Decimal]:
        return txn_date, Decimal(amount).quantize(CENT)

    def __len__(self) -> int:
        return sum(len(v) for v in self._by_key.values())

    def is_duplicate(self, transaction: ParsedStatementTransaction) -> bool:
        """Check a parsed transaction against the indexed ledger."""
        existing = self._by_key.get(self._key(transaction.date, transaction.amount), ())
        return any(
            narrations_similar(
                transaction.narration,
                narration,
                self.threshold,
                self.min_containment_length,
                allow_containment=transaction_type == transaction.transaction_type,
            )
            for narration, transaction_type in existing
        )
