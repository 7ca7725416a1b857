"""PDF statement detector.

Text is pulled out with pdfplumber as positioned fragments, tables are
rebuilt from coordinates, and the rebuilt header row goes through the same
bank detection as CSV and Excel files.
"""

import logging
from io import BytesIO
from typing import Optional, Sequence

import pdfplumber
from pdfminer.pdfdocument import PDFEncryptionError, PDFPasswordIncorrect
from pdfminer.pdfparser import PDFSyntaxError
from pdfminer.psparser import PSException
from pdfplumber.utils.exceptions import PdfminerException

from homeledger.config import ImportSettings
from homeledger.domain.bank_formats import BANK_SIGNATURES, BankSignature, detect_bank
from homeledger.domain.entities import DetectedBank, RawStatement, TextFragment
from homeledger.domain.errors import (
    CorruptFile,
    EmptyFile,
    PasswordRequired,
    UnrecognizedFormat,
    password_required,
)
from homeledger.domain.table_reconstruction import (
    PageTable,
    ReconstructionParams,
    is_footer_row,
    merge_wrapped_rows,
    reconstruct_tables,
)

logger = logging.getLogger(__name__)


def _is_password_error(error: BaseException) -> bool:
    if isinstance(error, PDFPasswordIncorrect):
        return True
    return any(isinstance(arg, PDFPasswordIncorrect) for arg in getattr(error, "args", ()))


def extract_fragments(content: bytes, password: Optional[str] = None) -> list[TextFragment]:
    """Extract word-level text fragments with page coordinates.

    Raises:
        PasswordRequired: If the document is encrypted and the password is
            missing or wrong
        CorruptFile: If the bytes are not a readable PDF
        EmptyFile: If the document has no extractable text
    """
    if not content:
        raise EmptyFile("The file is empty.")

    fragments: list[TextFragment] = []
    try:
        with pdfplumber.open(BytesIO(content), password=password or "") as pdf:
            for page_index, page in enumerate(pdf.pages):
                for word in page.extract_words(keep_blank_chars=True, x_tolerance=3, y_tolerance=3):
                    text = word["text"].strip()
                    if text:
                        fragments.append(
                            TextFragment(
                                text=text,
                                page_index=page_index,
                                x=round(float(word["x0"]), 2),
                                y=round(float(word["top"]), 2),
                            )
                        )
    except (PDFPasswordIncorrect, PdfminerException, PDFEncryptionError) as e:
        if _is_password_error(e):
            raise PasswordRequired(password_required(bool(password)), wrong_password=bool(password))
        raise CorruptFile(f"Failed to read PDF: {e}")
    except (PDFSyntaxError, PSException) as e:
        raise CorruptFile(f"Failed to read PDF: {e}")

    if not fragments:
        raise EmptyFile("Could not extract text from the PDF. It may be a scanned image.")

    logger.debug("Extracted %d text fragments", len(fragments))
    return fragments


def _find_header(
    rows: Sequence[Sequence[str]],
    signatures: Sequence[BankSignature],
    min_cells: int,
    known: Optional[DetectedBank],
) -> tuple[Optional[int], Optional[DetectedBank]]:
    for row_index, cells in enumerate(rows):
        if sum(1 for c in cells if c) < min_cells:
            continue
        try:
            bank = detect_bank(cells, signatures, allow_generic=known is None)
        except UnrecognizedFormat:
            continue
        if known is None or bank.name == known.name:
            return row_index, bank
    return None, None


def statement_from_tables(
    tables: Sequence[PageTable],
    settings: ImportSettings,
    signatures: Sequence[BankSignature] = BANK_SIGNATURES,
) -> RawStatement:
    """Turn reconstructed pages into header-aligned statement rows.

    The first usable header row fixes the bank and the reference column
    layout. Every later page is laid out on those columns directly, so a
    short page whose amounts sit on a single line keeps all of its cells.
    Pages before the header are skipped, as is a header page narrower than
    the bank's minimum column count. Repeated header rows and page
    furniture are dropped, then wrapped narration lines are merged into
    their transaction row.

    Raises:
        UnrecognizedFormat: If no page has a recognizable header row
    """
    bank: Optional[DetectedBank] = None
    headers: list[str] = []
    reference_positions: tuple[float, ...] = ()
    rows: list[list[str]] = []

    for table in tables:
        if bank is None:
            page_rows = table.rows
            header_index, page_bank = _find_header(page_rows, signatures, settings.header_min_cells, None)
            if header_index is None:
                logger.debug("Page %d: no header row yet, skipping", table.page_index)
                continue
            if table.column_count < page_bank.min_columns:
                logger.debug(
                    "Page %d: %d columns, %s needs %d; skipping",
                    table.page_index,
                    table.column_count,
                    page_bank.name,
                    page_bank.min_columns,
                )
                continue
            bank = page_bank
            headers = list(page_rows[header_index])
            reference_positions = table.column_positions
            logger.debug("Page %d: header [%s] -> %s", table.page_index, " | ".join(headers), bank.name)
        else:
            page_rows = table.rows_on(reference_positions)
            header_index, _ = _find_header(page_rows, signatures, settings.header_min_cells, bank)

        body = page_rows[header_index + 1 :] if header_index is not None else page_rows
        for cells in body:
            if is_footer_row(cells):
                continue
            rows.append(list(cells))

    if bank is None:
        raise UnrecognizedFormat("Could not find a transaction table header in the PDF.")

    columns = bank.columns
    key_indices = [columns.date, *columns.amount_indices()]
    merged = merge_wrapped_rows(rows, columns.narration, key_indices)
    logger.debug("PDF table: %d lines, %d rows after merging wrapped narrations", len(rows), len(merged))

    return RawStatement(bank=bank, headers=tuple(headers), rows=merged, first_row_number=1)


def detect_pdf(
    content: bytes,
    password: Optional[str],
    settings: ImportSettings,
    signatures: Sequence[BankSignature] = BANK_SIGNATURES,
) -> RawStatement:
    """Detect the bank of a PDF statement and return its raw rows."""
    fragments = extract_fragments(content, password)
    params = ReconstructionParams(
        line_tolerance=settings.line_tolerance,
        column_tolerance=settings.column_tolerance,
        min_column_support=settings.min_column_support,
    )
    return statement_from_tables(reconstruct_tables(fragments, params), settings, signatures)
