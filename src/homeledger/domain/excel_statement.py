"""Excel (.xlsx) statement detector.

Reads the first worksheet and hands its rows to the CSV detection logic, so
bank detection has a single implementation.
"""

import logging
import zipfile
from datetime import date, datetime
from decimal import Decimal
from io import BytesIO
from typing import Any, Sequence

from openpyxl import load_workbook
from openpyxl.utils.exceptions import InvalidFileException

from homeledger.config import ImportSettings
from homeledger.domain.bank_formats import BANK_SIGNATURES, BankSignature
from homeledger.domain.csv_statement import detect_rows
from homeledger.domain.entities import RawStatement
from homeledger.domain.errors import CorruptFile, EmptyFile

logger = logging.getLogger(__name__)


def cell_to_text(value: Any) -> str:
    """Render a worksheet cell the way the CSV reader would see it."""
    if value is None:
        return ""
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, float):
        return str(Decimal(repr(value)))
    return str(value).strip()


def read_worksheet_rows(content: bytes) -> list[list[str]]:
    """Return the first worksheet as rows of strings.

    Raises:
        EmptyFile: If the file or its first sheet is empty
        CorruptFile: If the file is not a readable .xlsx workbook
    """
    if not content:
        raise EmptyFile("The file is empty.")
    try:
        workbook = load_workbook(BytesIO(content), read_only=True, data_only=True)
    except (InvalidFileException, zipfile.BadZipFile, KeyError, OSError) as e:
        raise CorruptFile(f"Failed to read Excel file: {e}")

    try:
        if not workbook.sheetnames:
            raise EmptyFile("Excel file has no sheets.")
        sheet = workbook[workbook.sheetnames[0]]
        rows = [[cell_to_text(value) for value in row] for row in sheet.iter_rows(values_only=True)]
    finally:
        workbook.close()

    logger.debug("Read %d rows from sheet '%s'", len(rows), workbook.sheetnames[0])
    return rows


def detect_excel(
    content: bytes,
    settings: ImportSettings,
    signatures: Sequence[BankSignature] = BANK_SIGNATURES,
) -> RawStatement:
    """Detect the bank of an Excel statement and return its raw rows."""
    return detect_rows(read_worksheet_rows(content), settings, signatures)
