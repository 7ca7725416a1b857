"""Rebuild statement tables from positioned PDF text.

PDF text has no table structure, only glyph runs with coordinates. Rows come
from grouping fragments on nearly the same baseline; columns come from
clustering the x positions at which fragments start across many lines.
"""

import logging
import re
from dataclasses import dataclass, field
from itertools import groupby
from typing import Iterable, Optional, Sequence

from homeledger.domain.entities import TextFragment

logger = logging.getLogger(__name__)

FOOTER_PATTERNS = (
    re.compile(r"\bpage\s+\d+(\s+of\s+\d+)?\b", re.IGNORECASE),
    re.compile(r"statement summary", re.IGNORECASE),
    re.compile(r"opening balance", re.IGNORECASE),
    re.compile(r"closing balance", re.IGNORECASE),
    re.compile(r"^\s*(grand\s+)?total\b", re.IGNORECASE),
    re.compile(r"transaction total", re.IGNORECASE),
    re.compile(r"\*\*\*"),
)


@dataclass(frozen=True)
class ReconstructionParams:
    """Tunable tolerances, in PDF points."""

    line_tolerance: float = 2.5
    column_tolerance: float = 12.0
    min_column_support: int = 2


@dataclass(frozen=True)
class PageTable:
    """Reconstructed rows for one page."""

    page_index: int
    column_positions: tuple[float, ...]
    rows: list[list[str]]
    lines: list[list[TextFragment]] = field(default_factory=list)

    @property
    def column_count(self) -> int:
        return len(self.column_positions)

    def rows_on(self, positions: Sequence[float]) -> list[list[str]]:
        """Lay this page's lines onto another column layout."""
        return [line_to_cells(line, positions) for line in self.lines]


def group_lines(fragments: Sequence[TextFragment], line_tolerance: float) -> list[list[TextFragment]]:
    """Bucket fragments of one page into visual lines, each sorted by x.

    A fragment joins the current line while its y is within `line_tolerance`
    of the line's first fragment.
    """
    lines: list[list[TextFragment]] = []
    current: list[TextFragment] = []
    for fragment in sorted(fragments, key=lambda f: (f.y, f.x)):
        if current and abs(fragment.y - current[0].y) > line_tolerance:
            lines.append(sorted(current, key=lambda f: f.x))
            current = []
        current.append(fragment)
    if current:
        lines.append(sorted(current, key=lambda f: f.x))
    return lines


def cluster_columns(
    lines: Sequence[Sequence[TextFragment]],
    column_tolerance: float,
    min_support: int,
) -> list[float]:
    """Find column start positions shared by several lines.

    Starts are sorted and chained into clusters while neighbours are within
    `column_tolerance`. A cluster counts as a column when at least
    `min_support` distinct lines contribute to it; if none do (e.g. a page
    with a single line), every cluster is kept.
    """
    starts = sorted(
        (fragment.x, line_no) for line_no, line in enumerate(lines) for fragment in line
    )
    if not starts:
        return []

    clusters: list[list[tuple[float, int]]] = [[starts[0]]]
    for start in starts[1:]:
        if start[0] - clusters[-1][-1][0] <= column_tolerance:
            clusters[-1].append(start)
        else:
            clusters.append([start])

    def position(cluster: list[tuple[float, int]]) -> float:
        return min(x for x, _ in cluster)

    supported = [c for c in clusters if len({line_no for _, line_no in c}) >= min_support]
    chosen = supported or clusters
    return [position(c) for c in chosen]


def nearest_column(x: float, positions: Sequence[float]) -> int:
    """Index of the column whose start is closest to `x`."""
    return min(range(len(positions)), key=lambda i: abs(x - positions[i]))


def line_to_cells(line: Iterable[TextFragment], positions: Sequence[float]) -> list[str]:
    """Lay one line's fragments into cells, joining fragments in the same cell."""
    cells = [""] * len(positions)
    for fragment in line:
        index = nearest_column(fragment.x, positions)
        text = fragment.text.strip()
        cells[index] = f"{cells[index]} {text}".strip() if cells[index] else text
    return cells


def reconstruct_page(
    page_index: int, fragments: Sequence[TextFragment], params: ReconstructionParams
) -> PageTable:
    """Rebuild the rows and columns of a single page."""
    lines = group_lines(fragments, params.line_tolerance)
    positions = cluster_columns(lines, params.column_tolerance, params.min_column_support)
    rows = [line_to_cells(line, positions) for line in lines] if positions else []
    logger.debug(
        "Page %d: %d fragments, %d lines, %d columns",
        page_index,
        len(fragments),
        len(lines),
        len(positions),
    )
    return PageTable(page_index=page_index, column_positions=tuple(positions), rows=rows, lines=lines)


def reconstruct_tables(
    fragments: Sequence[TextFragment], params: Optional[ReconstructionParams] = None
) -> list[PageTable]:
    """Rebuild per-page tables, in document order."""
    params = params or ReconstructionParams()
    ordered = sorted(fragments, key=lambda f: f.page_index)
    return [
        reconstruct_page(page_index, list(page_fragments), params)
        for page_index, page_fragments in groupby(ordered, key=lambda f: f.page_index)
    ]


def is_footer_row(cells: Sequence[str]) -> bool:
    """True for page furniture and summary lines that are never transactions."""
    text = " ".join(c for c in cells if c)
    return any(pattern.search(text) for pattern in FOOTER_PATTERNS)


def merge_wrapped_rows(
    rows: Sequence[Sequence[str]],
    narration_index: int,
    key_indices: Sequence[int],
) -> list[list[str]]:
    """Fold wrapped narration lines into the row they continue.

    A line whose key cells (date and amounts) are all empty, and which has
    nothing but narration text, continues the previous row when that row's
    key cells were populated.
    """
    merged: list[list[str]] = []
    for row in rows:
        row = list(row)
        keys_empty = all(not _at(row, i) for i in key_indices)
        others_empty = all(
            not cell for i, cell in enumerate(row) if i != narration_index and i not in key_indices
        )
        narration = _at(row, narration_index)
        if (
            merged
            and keys_empty
            and others_empty
            and narration
            and any(_at(merged[-1], i) for i in key_indices)
        ):
            previous = merged[-1]
            previous[narration_index] = f"{_at(previous, narration_index)} {narration}".strip()
            continue
        merged.append(row)
    return merged


def _at(row: Sequence[str], index: int) -> str:
    return row[index].strip() if index < len(row) and row[index] else ""
