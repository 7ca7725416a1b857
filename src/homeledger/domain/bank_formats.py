"""Bank statement layouts and header-based bank detection.

Every detector (CSV, Excel, PDF) reduces its input to a header row and calls
`detect_bank`, so the signature table below is the only place that knows
what each bank's statement looks like.
"""

import logging
import re
from dataclasses import dataclass
from typing import Optional, Sequence

from homeledger.domain.entities import ColumnMapping, DetectedBank
from homeledger.domain.errors import UnrecognizedFormat, unrecognized_headers

logger = logging.getLogger(__name__)

UNKNOWN_BANK = "Unknown"


@dataclass(frozen=True)
class BankSignature:
    """How to recognize and read one bank's statement export.

    `signature` lists the expected header substrings in column order; an
    entry may offer alternatives separated by "|". A header row matches when
    at least `min_matches` entries are found in it. The *_columns tuples are
    keyword priorities used to locate each field once the bank is known.
    """

    name: str
    signature: tuple[str, ...]
    min_matches: int
    date_columns: tuple[str, ...]
    narration_columns: tuple[str, ...]
    debit_columns: tuple[str, ...] = ()
    credit_columns: tuple[str, ...] = ()
    amount_columns: tuple[str, ...] = ()
    indicator_columns: tuple[str, ...] = ()
    date_format: Optional[str] = None
    min_columns: int = 4


BANK_SIGNATURES: tuple[BankSignature, ...] = (
    BankSignature(
        name="ICICI",
        signature=("date", "remarks|particulars", "withdrawal", "deposit", "balance"),
        min_matches=4,
        date_columns=("transaction date", "txn date", "value date", "date"),
        narration_columns=("transaction remarks", "remarks", "particulars", "description"),
        debit_columns=("withdrawal amount", "withdrawal", "debit"),
        credit_columns=("deposit amount", "deposit", "credit"),
        date_format="%d/%m/%Y",
        min_columns=5,
    ),
    BankSignature(
        name="Kotak",
        signature=("sl. no", "date", "description", "amount", "dr / cr|dr/cr"),
        min_matches=4,
        date_columns=("transaction date", "date"),
        narration_columns=("description", "narration", "particulars"),
        amount_columns=("amount",),
        indicator_columns=("dr / cr", "dr/cr", "cr/dr"),
        date_format="%d-%m-%Y",
        min_columns=4,
    ),
    BankSignature(
        name="Axis",
        signature=("tran date|transaction date", "particulars", "debit|dr", "credit|cr", "balance|bal"),
        min_matches=4,
        date_columns=("tran date", "transaction date", "date"),
        narration_columns=("particulars", "description", "narration"),
        debit_columns=("debit", "dr", "withdrawal"),
        credit_columns=("credit", "cr", "deposit"),
        date_format="%d-%m-%Y",
        min_columns=5,
    ),
    BankSignature(
        name="HDFC",
        signature=("date", "narration", "withdrawal", "deposit", "closing balance"),
        min_matches=4,
        date_columns=("date",),
        narration_columns=("narration", "transaction remarks", "description"),
        debit_columns=("withdrawal amt", "withdrawal", "debit"),
        credit_columns=("deposit amt", "deposit", "credit"),
        date_format="%d/%m/%y",
        min_columns=4,
    ),
    BankSignature(
        name="SBI",
        signature=("txn date", "value date", "description|particulars", "debit", "credit", "balance"),
        min_matches=5,
        date_columns=("txn date", "transaction date", "date"),
        narration_columns=("description", "particulars", "narration"),
        debit_columns=("debit", "withdrawal"),
        credit_columns=("credit", "deposit"),
        date_format="%d %b %Y",
        min_columns=5,
    ),
)

GENERIC_SIGNATURE = BankSignature(
    name=UNKNOWN_BANK,
    signature=(),
    min_matches=0,
    date_columns=("transaction date", "txn date", "tran date", "posting date", "value date", "date"),
    narration_columns=(
        "narration",
        "description",
        "particulars",
        "remarks",
        "details",
        "memo",
        "payee",
        "merchant",
    ),
    debit_columns=("withdrawal", "debit", "dr", "paid out", "money out"),
    credit_columns=("deposit", "credit", "cr", "paid in", "money in"),
    amount_columns=("amount", "value"),
    indicator_columns=("dr/cr", "dr / cr", "cr/dr"),
    min_columns=3,
)


def _tokens(text: str) -> list[str]:
    return [t for t in re.split(r"[^a-z0-9]+", text) if t]


def header_matches(keyword: str, header: str) -> bool:
    """Case-insensitive containment; keywords of three letters or fewer
    must appear as a whole word ("cr" must not match "description")."""
    header_lower = header.lower().strip()
    keyword = keyword.lower()
    if not header_lower:
        return False
    if len(keyword) <= 3:
        return keyword in _tokens(header_lower)
    return keyword in header_lower


def find_column(
    headers: Sequence[str], keywords: Sequence[str], exclude: set[int] | None = None
) -> Optional[int]:
    """Return the index of the first header matching the highest-priority keyword."""
    exclude = exclude or set()
    for keyword in keywords:
        for index, header in enumerate(headers):
            if index in exclude:
                continue
            if header_matches(keyword, header):
                return index
    return None


def signature_score(signature: BankSignature, headers: Sequence[str]) -> int:
    """Count how many signature entries are present in the header row."""
    score = 0
    for entry in signature.signature:
        alternatives = entry.split("|")
        if any(header_matches(alt, h) for alt in alternatives for h in headers):
            score += 1
    return score


def resolve_columns(signature: BankSignature, headers: Sequence[str]) -> Optional[ColumnMapping]:
    """Locate the statement fields in a header row, or None if incomplete."""
    used: set[int] = set()

    def take(keywords: Sequence[str]) -> Optional[int]:
        index = find_column(headers, keywords, used)
        if index is not None:
            used.add(index)
        return index

    date_index = take(signature.date_columns)
    narration_index = take(signature.narration_columns)
    indicator_index = take(signature.indicator_columns)
    debit_index = take(signature.debit_columns)
    credit_index = take(signature.credit_columns)
    amount_index = None
    if debit_index is None and credit_index is None:
        amount_index = take(signature.amount_columns)

    if date_index is None or narration_index is None:
        return None
    if debit_index is None and credit_index is None and amount_index is None:
        return None

    return ColumnMapping(
        date=date_index,
        narration=narration_index,
        debit=debit_index,
        credit=credit_index,
        amount=amount_index,
        indicator=indicator_index if amount_index is not None else None,
    )


def detect_bank(
    headers: Sequence[str],
    signatures: Sequence[BankSignature] = BANK_SIGNATURES,
    allow_generic: bool = True,
) -> DetectedBank:
    """Identify the bank from a header row.

    The first signature with enough matching columns wins. Without a match,
    a generic keyword mapping is attempted.

    Raises:
        UnrecognizedFormat: If neither a signature nor the generic mapping fits
    """
    headers = [str(h or "").strip() for h in headers]

    for signature in signatures:
        if signature_score(signature, headers) < signature.min_matches:
            continue
        columns = resolve_columns(signature, headers)
        if columns is None:
            logger.debug("Signature %s matched but columns incomplete", signature.name)
            continue
        logger.debug("Detected %s statement: %s", signature.name, columns)
        return DetectedBank(
            name=signature.name,
            columns=columns,
            date_format=signature.date_format,
            min_columns=signature.min_columns,
        )

    if allow_generic:
        columns = resolve_columns(GENERIC_SIGNATURE, headers)
        if columns is not None:
            logger.debug("Using generic column mapping: %s", columns)
            return DetectedBank(
                name=UNKNOWN_BANK,
                columns=columns,
                date_format=None,
                min_columns=len(set(columns.amount_indices()) | {columns.date, columns.narration}),
            )

    raise UnrecognizedFormat(unrecognized_headers(list(headers)))


def find_header_row(rows: Sequence[Sequence[str]], scan_rows: int = 10, min_cells: int = 3) -> int:
    """Return the index of the first row with at least `min_cells` non-empty
    cells among the first `scan_rows` rows, skipping title blocks. Defaults
    to 0 when no row qualifies."""
    for index, row in enumerate(rows[:scan_rows]):
        non_empty = sum(1 for cell in row if cell is not None and str(cell).strip())
        if non_empty >= min_cells:
            return index
    return 0
