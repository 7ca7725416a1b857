"""CSV statement detector."""

import csv
import io
import logging
from typing import Sequence

from homeledger.config import ImportSettings
from homeledger.domain.bank_formats import BANK_SIGNATURES, BankSignature, detect_bank, find_header_row
from homeledger.domain.entities import RawStatement
from homeledger.domain.errors import CorruptFile, EmptyFile

logger = logging.getLogger(__name__)


def decode_text(content: bytes) -> str:
    """Decode uploaded bytes, tolerating a BOM and Windows exports.

    Raises:
        EmptyFile: If the file has no content
        CorruptFile: If the content is binary
    """
    if not content or not content.strip():
        raise EmptyFile("The file is empty.")
    if b"\x00" in content[:4096]:
        raise CorruptFile("The file does not look like a text CSV export.")
    try:
        return content.decode("utf-8-sig")
    except UnicodeDecodeError:
        return content.decode("cp1252", errors="replace")


def read_csv_rows(text: str) -> list[list[str]]:
    """Split CSV text into rows, sniffing the delimiter."""
    sample = text[:4096]
    try:
        delimiter = csv.Sniffer().sniff(sample, delimiters=",;\t|").delimiter
    except csv.Error:
        delimiter = ","

    try:
        reader = csv.reader(io.StringIO(text), delimiter=delimiter)
        return [[cell.strip() for cell in row] for row in reader]
    except csv.Error as e:
        raise CorruptFile(f"Failed to parse CSV: {e}")


def detect_rows(
    rows: Sequence[Sequence[str]],
    settings: ImportSettings,
    signatures: Sequence[BankSignature] = BANK_SIGNATURES,
) -> RawStatement:
    """Find the header row, detect the bank and return header-aligned rows.

    Shared by the CSV and Excel detectors.

    Raises:
        EmptyFile: If there is no data row after the header
        UnrecognizedFormat: If no bank layout fits the header
    """
    rows = [list(row) for row in rows if any(str(cell).strip() for cell in row)]
    if not rows:
        raise EmptyFile("The file has no rows.")

    header_index = find_header_row(rows, settings.header_scan_rows, settings.header_min_cells)
    headers = [str(cell).strip() for cell in rows[header_index]]
    data_rows = rows[header_index + 1 :]
    if not data_rows:
        raise EmptyFile("The file has a header but no transaction rows.")

    bank = detect_bank(headers, signatures)
    logger.debug(
        "Header row %d: [%s] -> %s (%d data rows)",
        header_index + 1,
        ", ".join(headers),
        bank.name,
        len(data_rows),
    )
    return RawStatement(
        bank=bank,
        headers=tuple(headers),
        rows=data_rows,
        first_row_number=header_index + 2,
    )


def detect_csv(
    content: bytes,
    settings: ImportSettings,
    signatures: Sequence[BankSignature] = BANK_SIGNATURES,
) -> RawStatement:
    """Detect the bank of a CSV statement and return its raw rows."""
    text = decode_text(content)
    return detect_rows(read_csv_rows(text), settings, signatures)
