"""Row normalizer: raw statement rows to canonical transactions."""

import logging
import re
from decimal import Decimal
from typing import Optional, Sequence

from homeledger.domain.entities import (
    ColumnMapping,
    DetectedBank,
    Direction,
    FileType,
    ParsedStatementTransaction,
    RawStatement,
    StatementParseResult,
)
from homeledger.domain.errors import (
    NoTransactionsFound,
    RowSkipped,
    no_transactions_found,
)
from homeledger.utils.amount_parser import parse_amount
from homeledger.utils.date_parser import parse_statement_date

logger = logging.getLogger(__name__)

WHITESPACE = re.compile(r"\s+")
# Dashes or dots that banks print in the unused debit/credit column
PLACEHOLDER = re.compile(r"^[-–—.\s]+$")


def normalize_narration(text: Optional[str]) -> str:
    """Trim and collapse internal whitespace, preserving case."""
    if not text:
        return ""
    return WHITESPACE.sub(" ", str(text)).strip()


def _cell(row: Sequence[str], index: Optional[int]) -> str:
    if index is None or index >= len(row):
        return ""
    value = row[index]
    return str(value).strip() if value is not None else ""


def _optional_amount(text: str) -> Optional[Decimal]:
    """Parse an amount cell; blank, a placeholder or zero means "no amount here"."""
    if not text or PLACEHOLDER.match(text):
        return None
    amount = parse_amount(text)
    if amount == 0:
        return None
    return amount


def _amount_and_direction(row: Sequence[str], columns: ColumnMapping) -> tuple[Decimal, Direction]:
    try:
        if columns.has_split_amounts:
            debit = _optional_amount(_cell(row, columns.debit))
            credit = _optional_amount(_cell(row, columns.credit))
            if debit is not None:
                return abs(debit), Direction.DEBIT
            if credit is not None:
                return abs(credit), Direction.CREDIT
            raise RowSkipped("Missing both debit and credit values")

        raw = _cell(row, columns.amount)
        amount = _optional_amount(raw)
        if amount is None:
            if not raw or PLACEHOLDER.match(raw):
                raise RowSkipped("Missing amount")
            raise RowSkipped(f"Zero amount '{raw}'")

        indicator = _cell(row, columns.indicator).lower().rstrip(".")
        if indicator in ("dr", "debit", "d"):
            return abs(amount), Direction.DEBIT
        if indicator in ("cr", "credit", "c"):
            return abs(amount), Direction.CREDIT
        direction = Direction.DEBIT if amount < 0 else Direction.CREDIT
        return abs(amount), direction
    except RowSkipped:
        raise
    except ValueError as e:
        raise RowSkipped(str(e)) from e


def normalize_row(row: Sequence[str], bank: DetectedBank) -> ParsedStatementTransaction:
    """Convert one raw row into a canonical transaction.

    Raises:
        RowSkipped: If the date or amount is missing or unparseable
    """
    columns = bank.columns
    date_text = _cell(row, columns.date)
    if not date_text:
        raise RowSkipped("Missing date")
    try:
        txn_date = parse_statement_date(date_text, bank.date_format)
    except ValueError as e:
        raise RowSkipped(str(e)) from e

    amount, direction = _amount_and_direction(row, columns)

    return ParsedStatementTransaction(
        date=txn_date,
        narration=normalize_narration(_cell(row, columns.narration)),
        amount=amount,
        direction=direction,
    )


def normalize_statement(statement: RawStatement, file_type: FileType) -> StatementParseResult:
    """Normalize every row of a detected statement, preserving source order.

    Unusable rows are counted and described, never fatal; a statement that
    yields no transactions at all is.

    Raises:
        NoTransactionsFound: If no row produced a transaction
    """
    transactions: list[ParsedStatementTransaction] = []
    skipped_details: list[str] = []

    for row_num, row in enumerate(statement.rows, start=statement.first_row_number):
        if not any(str(cell).strip() for cell in row if cell is not None):
            continue
        try:
            transactions.append(normalize_row(row, statement.bank))
        except RowSkipped as e:
            skipped_details.append(f"Row {row_num}: {e}")

    logger.info(
        "Normalized %s %s statement: %d transactions, %d skipped rows",
        statement.bank.name,
        file_type.value,
        len(transactions),
        len(skipped_details),
    )
    for detail in skipped_details[:5]:
        logger.debug("Skipped %s", detail)

    if not transactions:
        raise NoTransactionsFound(no_transactions_found(statement.bank.name, len(skipped_details)))

    return StatementParseResult(
        bank_name=statement.bank.name,
        file_type=file_type,
        transactions=transactions,
        skipped_rows=len(skipped_details),
        skipped_details=skipped_details,
    )
