"""Tuning settings for the statement import pipeline.

Tolerances for PDF table reconstruction and the duplicate similarity bar are
heuristics that may need per-bank calibration, so they are read from the
environment instead of being fixed in the algorithms.
"""

import os
from dataclasses import dataclass
from typing import Optional

ENV_PREFIX = "HOMELEDGER_"


class SettingsError(RuntimeError):
    """Raised when import settings cannot be constructed."""


@dataclass(frozen=True, slots=True)
class ImportSettings:
    # PDF fragments whose y positions differ by at most this many points
    # belong to the same visual line.
    line_tolerance: float = 2.5
    # Fragment x starts within this many points are the same column.
    column_tolerance: float = 12.0
    # A column cluster needs starts from at least this many lines.
    min_column_support: int = 2
    # rapidfuzz ratio (0..1) at or above which narrations match.
    duplicate_threshold: float = 0.85
    # Shorter narration must be at least this long for containment to count.
    min_containment_length: int = 8
    header_scan_rows: int = 10
    header_min_cells: int = 3

    def __post_init__(self):
        if self.line_tolerance <= 0 or self.column_tolerance <= 0:
            raise SettingsError("Tolerances must be positive")
        if not 0 < self.duplicate_threshold <= 1:
            raise SettingsError("duplicate_threshold must be in (0, 1]")
        if self.min_column_support < 1:
            raise SettingsError("min_column_support must be at least 1")


def load_settings(environ: Optional[dict[str, str]] = None) -> ImportSettings:
    """Build ImportSettings from HOMELEDGER_* environment variables.

    Unset or empty variables keep their defaults.

    Raises:
        SettingsError: If a variable cannot be parsed or is out of range
    """
    env = os.environ if environ is None else environ
    defaults = ImportSettings()

    return ImportSettings(
        line_tolerance=_parse_float(env, "LINE_TOLERANCE", defaults.line_tolerance),
        column_tolerance=_parse_float(env, "COLUMN_TOLERANCE", defaults.column_tolerance),
        min_column_support=_parse_int(env, "MIN_COLUMN_SUPPORT", defaults.min_column_support),
        duplicate_threshold=_parse_float(
            env, "DUPLICATE_THRESHOLD", defaults.duplicate_threshold
        ),
        min_containment_length=_parse_int(
            env, "MIN_CONTAINMENT_LENGTH", defaults.min_containment_length
        ),
        header_scan_rows=_parse_int(env, "HEADER_SCAN_ROWS", defaults.header_scan_rows),
        header_min_cells=_parse_int(env, "HEADER_MIN_CELLS", defaults.header_min_cells),
    )


def _parse_float(env, name: str, default: float) -> float:
    raw = env.get(ENV_PREFIX + name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError as exc:
        raise SettingsError(f"{ENV_PREFIX}{name} must be a number, got '{raw}'") from exc


def _parse_int(env, name: str, default: int) -> int:
    raw = env.get(ENV_PREFIX + name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise SettingsError(f"{ENV_PREFIX}{name} must be an integer, got '{raw}'") from exc
