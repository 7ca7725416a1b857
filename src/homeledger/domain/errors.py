"""Shared domain error messages and error types."""

from typing import Optional


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class ConflictError(DomainError):
    """Domain conflict, such as uniqueness violations."""


class PersistenceError(DomainError):
    """The database rejected a write."""


class StatementError(DomainError):
    """A statement file could not be turned into transactions."""


class PasswordRequired(StatementError):
    """The PDF is encrypted and the supplied password is missing or wrong.

    Recoverable: the caller should ask for the password and try again.
    """

    def __init__(self, message: str, wrong_password: bool = False):
        super().__init__(message)
        self.wrong_password = wrong_password


class UnrecognizedFormat(StatementError):
    """No bank layout matched the statement."""


class UnsupportedFileType(UnrecognizedFormat):
    """The file extension is not one of pdf, csv or xlsx."""


class EmptyFile(StatementError):
    """The file has no data to import."""


class NoTransactionsFound(EmptyFile):
    """The file has rows, but none produced a usable transaction."""


class CorruptFile(StatementError):
    """The file could not be decoded as its declared type."""


class RowSkipped(DomainError):
    """A single statement row was unusable. Never fatal for the file."""


class CommitError(DomainError):
    """Base class for commit failures."""


class CommitTotalFailure(CommitError):
    """Nothing was written."""

    def __init__(self, message: str, cause: Optional[Exception] = None):
        super().__init__(message)
        self.cause = cause
        self.imported_count = 0


class CommitPartialFailure(CommitError):
    """Some rows were written before or around a failure.

    Already-written rows are not rolled back.
    """

    def __init__(
        self,
        message: str,
        imported_count: int,
        row_number: int,
        failures: Optional[list[tuple[int, str]]] = None,
    ):
        super().__init__(message)
        self.imported_count = imported_count
        self.row_number = row_number
        self.failures = failures or []


def household_not_found(household_id: int) -> str:
    """Return message for missing household."""
    return f"Household {household_id} not found"


def category_not_found(category_id: int) -> str:
    """Return message for missing category by ID."""
    return f"Category {category_id} not found"


def sub_category_not_found(sub_category_id: int) -> str:
    """Return message for missing sub-category by ID."""
    return f"Sub-category {sub_category_id} not found"


def sub_category_not_in_household(sub_category_id: int, household_id: int) -> str:
    """Return message for a sub-category owned by another household."""
    return f"Sub-category {sub_category_id} does not belong to household {household_id}"


def unsupported_file_type(extension: str) -> str:
    """Return message for an unsupported upload extension."""
    shown = f".{extension}" if extension else "(no extension)"
    return f"Unsupported file type: {shown}. Please upload a PDF, CSV, or Excel (.xlsx) file."


def password_required(wrong_password: bool) -> str:
    """Return message for an encrypted PDF."""
    if wrong_password:
        return "Wrong password for this PDF. Please try again."
    return "This PDF is password-protected. Please enter the password."


def no_transactions_found(bank_name: str, skipped_rows: int) -> str:
    """Return message when a recognized statement yields no usable rows."""
    return (
        f"No transactions found in this {bank_name} statement "
        f"({skipped_rows} row{'s' if skipped_rows != 1 else ''} skipped). "
        "Check that the file is a transaction statement."
    )


def unrecognized_headers(headers: list[str]) -> str:
    """Return message when no bank signature or generic mapping fits."""
    shown = ", ".join(h for h in headers[:8] if h) or "(none)"
    return (
        "Could not recognize the statement layout. "
        f"Headers found: {shown}. Expected date, description and amount columns."
    )


def commit_row_failed(row_number: int, reason: str) -> str:
    """Return message for the first failed row of a commit."""
    return f"Import failed at row {row_number}: {reason}"
