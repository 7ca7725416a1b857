"""Commit engine: persist the selected import candidates."""

import logging
from typing import Callable, Optional, Sequence

from homeledger.domain.entities import ImportCandidate, ImportOutcome, TransactionRecord
from homeledger.domain.errors import (
    CommitPartialFailure,
    CommitTotalFailure,
    DomainError,
    ValidationError,
    commit_row_failed,
)

logger = logging.getLogger(__name__)

IMPORT_SOURCE = "import"


def candidate_to_record(candidate: ImportCandidate, household_id: int, logged_by: str) -> TransactionRecord:
    """Build the persistence payload, applying any user override.

    A candidate without a category is recorded uncategorized, never blocked.
    """
    txn = candidate.transaction
    return TransactionRecord(
        household_id=household_id,
        sub_category_id=candidate.effective_sub_category_id,
        amount=txn.amount,
        transaction_type=candidate.effective_transaction_type,
        transaction_date=txn.date,
        logged_by=logged_by,
        narration=txn.narration or None,
        source_tag=IMPORT_SOURCE,
    )


class CommitEngine:
    """Write selected candidates one record at a time.

    Rows already written are kept when a later row fails; the caller gets the
    number written and the first failure. By default the engine stops at the
    first failing row; with `stop_on_error=False` it attempts every row and
    reports all failures.
    """

    def __init__(self, writer: Callable[[TransactionRecord], int], stop_on_error: bool = True):
        self.writer = writer
        self.stop_on_error = stop_on_error

    def commit(
        self,
        candidates: Sequence[ImportCandidate],
        household_id: int,
        logged_by: str,
    ) -> ImportOutcome:
        """Persist every selected candidate.

        Row numbers in errors count selected candidates from 1.

        Raises:
            ValidationError: If nothing is selected
            CommitTotalFailure: If no row was written
            CommitPartialFailure: If some rows were written and some failed
        """
        selected = [c for c in candidates if c.selected]
        if not selected:
            raise ValidationError("No transactions selected for import.")

        imported = 0
        failures: list[tuple[int, str]] = []
        first_error: Optional[DomainError] = None

        for row_number, candidate in enumerate(selected, start=1):
            record = candidate_to_record(candidate, household_id, logged_by)
            try:
                self.writer(record)
            except DomainError as e:
                logger.warning("Import row %d failed: %s", row_number, e)
                failures.append((row_number, str(e)))
                if first_error is None:
                    first_error = e
                if self.stop_on_error:
                    break
                continue
            imported += 1

        if failures:
            row_number, reason = failures[0]
            message = commit_row_failed(row_number, reason)
            if imported == 0:
                raise CommitTotalFailure(message, cause=first_error)
            raise CommitPartialFailure(message, imported, row_number, failures)

        dates = [c.transaction.date for c in selected]
        outcome = ImportOutcome(imported_count=imported, start_date=min(dates), end_date=max(dates))
        logger.info(
            "Imported %d transactions (%s to %s) for household %d",
            outcome.imported_count,
            outcome.start_date.isoformat(),
            outcome.end_date.isoformat(),
            household_id,
        )
        return outcome
