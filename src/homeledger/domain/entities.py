"""Domain model entities for homeledger.

These are pure data classes representing business concepts, independent of
database schema. The statement import pipeline passes these between its
stages; only `ImportCandidate` is mutable, since the review step toggles
selection and overrides in place.
"""

from dataclasses import dataclass, field
from datetime import datetime, date
from decimal import Decimal
from enum import Enum
from pathlib import Path
from typing import Optional

from homeledger.domain.errors import (
    UnsupportedFileType,
    ValidationError,
    unsupported_file_type,
)


class FileType(str, Enum):
    """Supported statement upload types."""

    PDF = "pdf"
    CSV = "csv"
    XLSX = "xlsx"


class Direction(str, Enum):
    """Money movement as stated by the bank's columns."""

    CREDIT = "credit"
    DEBIT = "debit"


class TransactionType(str, Enum):
    """Ledger-side transaction type."""

    EXPENSE = "expense"
    INCOME = "income"


class Confidence(str, Enum):
    """Qualitative strength of an automatic category match."""

    HIGH = "high"
    MEDIUM = "medium"
    NONE = "none"


@dataclass(frozen=True)
class Household:
    """Household domain entity."""

    id: int
    name: str
    created_at: datetime


@dataclass(frozen=True)
class Category:
    """Top-level budget category owned by a household."""

    id: int
    household_id: int
    name: str
    category_type: TransactionType
    created_at: datetime


@dataclass(frozen=True)
class HouseholdSubCategory:
    """Leaf budget bucket under a household category."""

    id: int
    name: str
    category_id: int
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class LedgerTransaction:
    """Persisted household transaction."""

    id: int
    household_id: int
    sub_category_id: Optional[int]
    amount: Decimal
    transaction_type: TransactionType
    transaction_date: date
    narration: Optional[str]
    logged_by: str
    source: str
    created_at: datetime


@dataclass(frozen=True)
class StatementSource:
    """An uploaded statement file, consumed once by the parser.

    The password is only meaningful for PDF files and is never persisted.
    """

    content: bytes
    file_type: FileType
    password: Optional[str] = field(default=None, repr=False)
    filename: Optional[str] = None

    @classmethod
    def from_path(cls, path: str | Path, password: Optional[str] = None) -> "StatementSource":
        """Read a statement from disk, inferring the type from its extension.

        Raises:
            UnsupportedFileType: If the extension is not pdf, csv or xlsx
        """
        file_path = Path(path)
        extension = file_path.suffix.lower().lstrip(".")
        try:
            file_type = FileType(extension)
        except ValueError:
            raise UnsupportedFileType(unsupported_file_type(extension))
        return cls(
            content=file_path.read_bytes(),
            file_type=file_type,
            password=password,
            filename=file_path.name,
        )


@dataclass(frozen=True)
class TextFragment:
    """A positioned piece of PDF text.

    `x` and `y` are in points; `y` grows downward from the top of the page.
    """

    text: str
    page_index: int
    x: float
    y: float


@dataclass(frozen=True)
class ColumnMapping:
    """Indices of the statement fields within a header row."""

    date: int
    narration: int
    debit: Optional[int] = None
    credit: Optional[int] = None
    amount: Optional[int] = None
    indicator: Optional[int] = None

    @property
    def has_split_amounts(self) -> bool:
        return self.debit is not None or self.credit is not None

    def amount_indices(self) -> tuple[int, ...]:
        return tuple(i for i in (self.debit, self.credit, self.amount) if i is not None)


@dataclass(frozen=True)
class DetectedBank:
    """Bank identified from a statement header, plus how to read its rows."""

    name: str
    columns: ColumnMapping
    date_format: Optional[str] = None
    min_columns: int = 3


@dataclass(frozen=True)
class RawStatement:
    """Header-aligned raw rows emitted by a format detector."""

    bank: DetectedBank
    headers: tuple[str, ...]
    rows: list[list[str]]
    first_row_number: int = 2


@dataclass(frozen=True)
class ParsedStatementTransaction:
    """Canonical statement line: always a positive amount plus a direction."""

    date: date
    narration: str
    amount: Decimal
    direction: Direction

    def __post_init__(self):
        if self.amount <= 0:
            raise ValidationError(f"Statement amount must be positive, got {self.amount}")

    @property
    def transaction_type(self) -> TransactionType:
        if self.direction == Direction.CREDIT:
            return TransactionType.INCOME
        return TransactionType.EXPENSE


@dataclass(frozen=True)
class StatementParseResult:
    """Outcome of parsing one statement file."""

    bank_name: str
    file_type: FileType
    transactions: list[ParsedStatementTransaction]
    skipped_rows: int = 0
    skipped_details: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class MatchResult:
    """Automatic category suggestion for a narration."""

    sub_category_id: Optional[int]
    confidence: Confidence
    transaction_type: TransactionType
    sub_category_name: Optional[str] = None
    category_name: Optional[str] = None

    def __post_init__(self):
        if self.sub_category_id is not None and self.confidence == Confidence.NONE:
            raise ValidationError("A matched sub-category requires a confidence tier")


@dataclass
class ImportCandidate:
    """A parsed transaction awaiting review before commit."""

    index: int
    transaction: ParsedStatementTransaction
    match: MatchResult
    is_duplicate: bool
    selected: bool
    user_override_sub_category_id: Optional[int] = None
    user_override_transaction_type: Optional[TransactionType] = None

    @property
    def effective_sub_category_id(self) -> Optional[int]:
        if self.user_override_sub_category_id is not None:
            return self.user_override_sub_category_id
        return self.match.sub_category_id

    @property
    def effective_transaction_type(self) -> TransactionType:
        if self.user_override_transaction_type is not None:
            return self.user_override_transaction_type
        if self.effective_sub_category_id is None:
            return TransactionType.EXPENSE
        return self.match.transaction_type


@dataclass(frozen=True)
class TransactionRecord:
    """Payload handed to persistence for one imported transaction."""

    household_id: int
    sub_category_id: Optional[int]
    amount: Decimal
    transaction_type: TransactionType
    transaction_date: date
    logged_by: str
    narration: Optional[str] = None
    source_tag: str = "import"


@dataclass(frozen=True)
class ImportOutcome:
    """Result of a fully successful commit."""

    imported_count: int
    start_date: date
    end_date: date


@dataclass(frozen=True)
class CommitResult:
    """Result reported to the caller after a commit attempt."""

    success: bool
    imported_count: int
    error: Optional[str] = None
    outcome: Optional[ImportOutcome] = None
