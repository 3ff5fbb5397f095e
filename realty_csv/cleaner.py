"""
Row sanitizer for project sheet exports.

Drops blank and note rows, fills continuation rows from the last fully
identified row and reports every skip and repair for operator review.
"""

import logging
import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from realty_csv import layout
from realty_csv.config import (
    CANONICAL_COLUMNS, INHERITED_COLUMNS, COL_BUILDER, COL_PROJECT_NAME,
    COL_SPECIFICATION, COL_PRICE, COL_TOWER, VALIDATE_HEADER, NORMALIZE_ON_CLEAN
)
from realty_csv.normalizers import normalize_price, normalize_tower
from realty_csv.tokenizer import parse_line, join_fields

logger = logging.getLogger(__name__)

BLANK_LINE = re.compile(r'^[,\s]*$')


@dataclass
class CleanedCSVResult:
    cleaned_text: str
    original_rows: int
    cleaned_rows: int
    issues: List[str]
    changes: List[str]

    def to_dict(self) -> Dict[str, Any]:
        return {
            'cleanedText': self.cleaned_text,
            'originalRows': self.original_rows,
            'cleanedRows': self.cleaned_rows,
            'issues': list(self.issues),
            'changes': list(self.changes),
        }


@dataclass
class SanitizedRow:
    """
    A kept data row. ``fields`` carries normalized price and tower values;
    ``raw_fields`` is the same row as typed, after padding and inheritance.
    """
    row_number: int
    fields: List[str]
    raw_fields: List[str]


@dataclass
class SanitizerState:
    last_valid_row: Optional[List[str]] = None
    rows: List[SanitizedRow] = field(default_factory=list)
    issues: List[str] = field(default_factory=list)
    changes: List[str] = field(default_factory=list)


def split_lines(csv_text: str) -> List[str]:
    """Split document text into lines, tolerating BOM and Windows line endings."""
    if not isinstance(csv_text, str):
        raise TypeError(f"CSV text must be str, got {type(csv_text).__name__}")
    if csv_text.startswith('\ufeff'):
        csv_text = csv_text[1:]
    return csv_text.replace('\r\n', '\n').replace('\r', '\n').split('\n')


def normalize_header(header: str) -> Tuple[str, List[str]]:
    normalized = re.sub(r'\s+', ' ', header).strip()
    if normalized != header:
        return normalized, ['Normalized column header spacing']
    return header, []


def _pad(fields: List[str]) -> List[str]:
    if len(fields) < len(CANONICAL_COLUMNS):
        fields = fields + [''] * (len(CANONICAL_COLUMNS) - len(fields))
    return fields


def _sanitize_line(state: SanitizerState, row_number: int, line: str,
                   normalize_fields: bool) -> SanitizerState:
    line = line.strip()

    if not line or BLANK_LINE.match(line):
        state.issues.append(f"Row {row_number}: Empty row - skipped")
        return state

    cells = _pad(parse_line(line))

    specification = cells[COL_SPECIFICATION]
    if specification and specification.startswith('(') and specification.endswith(')'):
        state.issues.append(f'Row {row_number}: Note row "{specification}" - skipped')
        return state

    is_continuation = not cells[COL_BUILDER] and not cells[COL_PROJECT_NAME]
    if is_continuation and state.last_valid_row is not None:
        for index in INHERITED_COLUMNS:
            if not cells[index]:
                cells[index] = state.last_valid_row[index]
        state.changes.append(f"Row {row_number}: Inherited project info from previous row")

    if not cells[COL_SPECIFICATION]:
        state.issues.append(f"Row {row_number}: No specification - skipped")
        return state

    raw_cells = list(cells)
    if normalize_fields:
        price = normalize_price(cells[COL_PRICE])
        if price != cells[COL_PRICE]:
            state.changes.append(f'Row {row_number}: Normalized price "{cells[COL_PRICE]}" -> "{price}"')
            cells[COL_PRICE] = price
        tower = normalize_tower(cells[COL_TOWER])
        if tower != cells[COL_TOWER]:
            state.changes.append(f'Row {row_number}: Normalized tower "{cells[COL_TOWER]}" -> "{tower}"')
            cells[COL_TOWER] = tower

    state.rows.append(SanitizedRow(row_number, cells, raw_cells))

    if cells[COL_BUILDER] and cells[COL_PROJECT_NAME]:
        state.last_valid_row = cells

    return state


def sanitize_rows(lines: List[str], normalize_fields: bool = NORMALIZE_ON_CLEAN
                  ) -> Tuple[List[SanitizedRow], List[str], List[str]]:
    """
    Fold the data lines (lines[1:]) into sanitized rows, issues and changes.
    Row numbers count the header as row 1.
    """
    state = SanitizerState()
    for index in range(1, len(lines)):
        state = _sanitize_line(state, index + 1, lines[index], normalize_fields)
    return state.rows, state.issues, state.changes


def clean_real_estate_csv(csv_text: str, validate_header: bool = VALIDATE_HEADER,
                          normalize_fields: bool = NORMALIZE_ON_CLEAN) -> CleanedCSVResult:
    """
    Clean a project sheet for review before import.

    Every data row is either kept (possibly repaired) or reported in
    ``issues``; repairs are listed in ``changes``. Raises CSVStructureError
    when header validation is on and the header does not fit the layout.
    """
    lines = split_lines(csv_text)
    original_rows = len(lines)

    header, changes = normalize_header(lines[0])
    if validate_header:
        layout.validate_header(parse_line(header))

    rows, issues, row_changes = sanitize_rows(lines, normalize_fields)
    changes.extend(row_changes)

    cleaned_lines = [header] + [join_fields(row.fields) for row in rows]

    logger.info(f"Cleaned CSV: {original_rows} lines in, {len(rows)} rows kept, "
                f"{len(issues)} issues, {len(changes)} changes")

    return CleanedCSVResult(
        cleaned_text='\n'.join(cleaned_lines),
        original_rows=original_rows,
        cleaned_rows=len(rows),
        issues=issues,
        changes=changes,
    )
