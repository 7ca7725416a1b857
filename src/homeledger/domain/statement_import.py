"""Statement import domain service.

Orchestrates the pipeline: detect the bank and read raw rows, normalize them,
then match, flag duplicates and commit the rows the user kept.
"""

import asyncio
import logging
from pathlib import Path
from typing import Optional, Sequence

from homeledger.config import ImportSettings, load_settings
from homeledger.database.base import Database
from homeledger.domain.bank_formats import BANK_SIGNATURES, BankSignature
from homeledger.domain.candidates import build_candidates
from homeledger.domain.commit import CommitEngine
from homeledger.domain.csv_statement import detect_csv
from homeledger.domain.duplicates import DuplicateIndex
from homeledger.domain.entities import (
    CommitResult,
    FileType,
    ImportCandidate,
    ParsedStatementTransaction,
    RawStatement,
    StatementParseResult,
    StatementSource,
)
from homeledger.domain.errors import CommitPartialFailure, CommitTotalFailure
from homeledger.domain.excel_statement import detect_excel
from homeledger.domain.household import HouseholdService
from homeledger.domain.ledger import LedgerService
from homeledger.domain.merchant_matcher import MerchantMatcher
from homeledger.domain.merchant_rules import DEFAULT_MERCHANT_RULES, MerchantRule
from homeledger.domain.normalizer import normalize_statement
from homeledger.domain.pdf_statement import detect_pdf

logger = logging.getLogger(__name__)


class StatementImportService:
    """Service for importing bank statements into a household ledger."""

    def __init__(
        self,
        db: Database,
        settings: Optional[ImportSettings] = None,
        rules: Sequence[MerchantRule] = DEFAULT_MERCHANT_RULES,
        signatures: Sequence[BankSignature] = BANK_SIGNATURES,
    ):
        """Initialize statement import service.

        Args:
            db: Database instance
            settings: Import tuning; read from the environment if omitted
            rules: Ordered merchant rule table
            signatures: Ordered bank signature table
        """
        self.db = db
        self.settings = settings or load_settings()
        self.matcher = MerchantMatcher(rules)
        self.signatures = tuple(signatures)
        self.household_service = HouseholdService(db)
        self.ledger_service = LedgerService(db)

    def detect(self, source: StatementSource) -> RawStatement:
        """Run the format detector for the source's file type."""
        if source.file_type == FileType.CSV:
            return detect_csv(source.content, self.settings, self.signatures)
        if source.file_type == FileType.XLSX:
            return detect_excel(source.content, self.settings, self.signatures)
        return detect_pdf(source.content, source.password, self.settings, self.signatures)

    def parse_statement(self, source: StatementSource) -> StatementParseResult:
        """Parse a statement into canonical transactions.

        Raises:
            PasswordRequired: If a PDF needs a (different) password
            UnrecognizedFormat: If no bank layout fits
            EmptyFile: If there is nothing to import
            CorruptFile: If the file cannot be decoded
        """
        logger.info(
            "Parsing %s statement%s (%d bytes)",
            source.file_type.value,
            f" '{source.filename}'" if source.filename else "",
            len(source.content),
        )
        statement = self.detect(source)
        return normalize_statement(statement, source.file_type)

    def parse_statement_file(self, path: str | Path, password: Optional[str] = None) -> StatementParseResult:
        """Parse a statement file from disk, choosing the reader by extension.

        Raises:
            FileNotFoundError: If the file doesn't exist
            UnsupportedFileType: If the extension is not .pdf, .csv or .xlsx
        """
        file_path = Path(path)
        if not file_path.is_file():
            raise FileNotFoundError(f"Statement file not found: {path}")
        return self.parse_statement(StatementSource.from_path(file_path, password))

    def build_duplicate_index(
        self, household_id: int, transactions: Sequence[ParsedStatementTransaction]
    ) -> DuplicateIndex:
        """Index the ledger rows that could collide with the parsed batch."""
        if transactions:
            dates = [t.date for t in transactions]
            existing = self.ledger_service.list_transactions(household_id, min(dates), max(dates))
        else:
            existing = []
        return DuplicateIndex(
            existing,
            threshold=self.settings.duplicate_threshold,
            min_containment_length=self.settings.min_containment_length,
        )

    def prepare_candidates(
        self, household_id: int, transactions: Sequence[ParsedStatementTransaction]
    ) -> list[ImportCandidate]:
        """Build review candidates against the household's categories and ledger.

        Raises:
            NotFoundError: If the household doesn't exist
        """
        reference = self.household_service.get_reference_data(household_id)
        return build_candidates(
            transactions,
            reference.sub_categories,
            reference.category_map,
            duplicate_index=self.build_duplicate_index(household_id, transactions),
            matcher=self.matcher,
        )

    def commit_import(
        self,
        candidates: Sequence[ImportCandidate],
        household_id: int,
        logged_by: str,
        stop_on_error: bool = True,
    ) -> CommitResult:
        """Persist the selected candidates and report the outcome.

        Commit failures are reported in the result, not raised.

        Raises:
            NotFoundError: If the household doesn't exist
            ValidationError: If no candidate is selected
        """
        self.household_service.require_household(household_id)
        engine = CommitEngine(self.ledger_service.record_transaction, stop_on_error=stop_on_error)
        try:
            outcome = engine.commit(candidates, household_id, logged_by)
        except CommitPartialFailure as e:
            return CommitResult(success=False, imported_count=e.imported_count, error=str(e))
        except CommitTotalFailure as e:
            return CommitResult(success=False, imported_count=0, error=str(e))
        return CommitResult(success=True, imported_count=outcome.imported_count, outcome=outcome)

    async def parse_statement_async(self, source: StatementSource) -> StatementParseResult:
        """Run `parse_statement` in a worker thread."""
        return await asyncio.to_thread(self.parse_statement, source)

    async def commit_import_async(
        self,
        candidates: Sequence[ImportCandidate],
        household_id: int,
        logged_by: str,
        stop_on_error: bool = True,
    ) -> CommitResult:
        """Run `commit_import` in a worker thread.

        The write is not cancellable: cancelling the awaiting task leaves the
        thread running to completion.
        """
        return await asyncio.to_thread(self.commit_import, candidates, household_id, logged_by, stop_on_error)
