"""
Layout checks for project sheet exports.
Verifies the header matches the positional column contract before any row is read.
"""

import logging
import re
from typing import List

from realty_csv.config import (
    CANONICAL_COLUMNS, HEADER_ALIASES, REQUIRED_HEADER_COLUMNS, MIN_HEADER_COLUMNS
)

logger = logging.getLogger(__name__)


class CSVStructureError(ValueError):
    """The document cannot be read as a project sheet at all."""


def clean_text_for_comparison(text: str) -> str:
    """
    Clean and normalize text for comparison.
    Lowercases, collapses whitespace and drops punctuation other than / - ,
    """
    if text is None:
        return ''

    text = str(text).lower().strip()
    text = re.sub(r'\s+', ' ', text)
    text = re.sub(r'[^\w\s/\-,]', '', text)

    return text.strip()


def header_matches(index: int, value: str) -> bool:
    aliases = HEADER_ALIASES.get(index, [])
    cleaned = clean_text_for_comparison(value)
    return any(cleaned == clean_text_for_comparison(alias) for alias in aliases)


def validate_header(fields: List[str]) -> List[str]:
    """
    Check a tokenized header row against the canonical layout.

    Raises CSVStructureError when the header is too short or an identity
    column (Builder, Project name, Specification, Location) is not where the
    layout expects it. Other mismatches come back as warnings.
    """
    if len(fields) < MIN_HEADER_COLUMNS:
        raise CSVStructureError(
            f"Header has {len(fields)} columns, expected at least {MIN_HEADER_COLUMNS} "
            f"(up to '{CANONICAL_COLUMNS[MIN_HEADER_COLUMNS - 1]}')"
        )

    mismatches = []
    warnings = []
    for index, expected in enumerate(CANONICAL_COLUMNS):
        if index >= len(fields):
            break
        if header_matches(index, fields[index]):
            continue
        message = f"Column {index + 1}: expected '{expected}', found '{fields[index]}'"
        if index in REQUIRED_HEADER_COLUMNS:
            mismatches.append(message)
        else:
            warnings.append(message)

    if mismatches:
        logger.error(f"Header does not match project sheet layout: {mismatches}")
        raise CSVStructureError("Header does not match project sheet layout: " + '; '.join(mismatches))

    for warning in warnings:
        logger.warning(f"Header mismatch (ignored): {warning}")

    return warnings


def detect_delimiter(header_line: str) -> str:
    """Tab for tab-separated exports, comma otherwise."""
    if '\t' in header_line and ',' not in header_line:
        return '\t'
    return ','
