"""
Field normalizers for project sheet values.
Pure functions: free text in, canonical values out.
"""

import re
from typing import List, NamedTuple, Optional

from realty_csv.config import (
    PRICE_UNIT_MULTIPLIERS, STATUS_KEYWORDS, DEFAULT_STATUS,
    FURNITURE_KEYWORDS, DEFAULT_FURNITURE_TYPE
)
from realty_csv.models import PriceRange

PRICE_RANGE_WORD = re.compile(r'\s+to\s+', re.IGNORECASE)
PRICE_TOKEN = re.compile(
    r'(\d+(?:\.\d+)?)\s*(crores?|cr|lakhs?|lacs?|l)?',
    re.IGNORECASE
)
TOWER_PHASE = re.compile(r'(\d+)\s*(Soldout|Launched|Future)', re.IGNORECASE)
CONTACT_SPLIT = re.compile(r'^(?P<name>.*?)\s*[-,:]\s*(?P<phone>\+?[\d\s()\-]{7,})$')
NUMBER = re.compile(r'\d+(?:\.\d+)?')
PRICE_SEPARATOR = re.compile(r'[-,]')
LEADING_INT = re.compile(r'^\s*(\d{1,3}(?:,\d{3})+|\d+)')
UNITS_AVAILABLE = re.compile(
    r'(\d+)\s*(?:units?|flats?)?\s*(?:available|left|remaining)',
    re.IGNORECASE
)


class ContactInfo(NamedTuple):
    name: str
    phone: str
    raw: str


def collapse_whitespace(value: str) -> str:
    return re.sub(r'\s+', ' ', value or '').strip()


def slugify(value: str) -> str:
    return re.sub(r'[^a-z0-9]+', '_', (value or '').lower()).strip('_')


def normalize_price(price: str) -> str:
    """
    "79 to 84L" -> "79-84L", "1.10 to 1.16 cr" -> "1.10-1.16cr".
    Numbers are not validated here.
    """
    if not price:
        return ''
    price = PRICE_RANGE_WORD.sub('-', price)
    return re.sub(r'\s+', '', price)


def normalize_tower(tower: str) -> str:
    """"18 Soldout" -> "18 Tower (Soldout)". Anything else passes through."""
    if not tower:
        return ''
    return TOWER_PHASE.sub(r'\1 Tower (\2)', tower)


def split_contact(sales_person: str) -> ContactInfo:
    """
    Split "Name - Phone" into its parts.
    Without a separator and a trailing phone number the whole value is the name.
    """
    raw = sales_person or ''
    value = raw.strip()
    match = CONTACT_SPLIT.match(value)
    if match:
        phone = match.group('phone').strip()
        if sum(ch.isdigit() for ch in phone) >= 7:
            return ContactInfo(match.group('name').strip(), phone, raw)
    return ContactInfo(value, '', raw)


def _nearest_unit(units: List[Optional[str]], index: int) -> str:
    # On a tie the following token wins
    best = None
    best_distance = None
    for j, unit in enumerate(units):
        if unit is None:
            continue
        distance = abs(j - index)
        if best_distance is None or distance < best_distance or (distance == best_distance and j > index):
            best = unit
            best_distance = distance
    return best or 'l'


def parse_price_range(price: str) -> PriceRange:
    """
    Parse a price cell into lakh units.

    Ranges split on '-' (after normalize_price), commas list alternatives.
    Only the first number of each piece and its suffix count, so trailing
    notes like "(2 parking)" are ignored. L/lakh counts as 1, cr/crore as
    100. A number without a suffix uses the suffix of its nearest
    neighbour, or lakhs when nothing is suffixed.

    Raises ValueError when a non-empty cell holds no usable number.
    """
    original = price or ''
    normalized = normalize_price(original)
    if not normalized:
        return PriceRange(0, 0, original)

    tokens = []
    for piece in PRICE_SEPARATOR.split(normalized):
        match = PRICE_TOKEN.search(piece)
        if not match:
            continue
        number, unit = match.groups()
        if float(number) > 0:
            tokens.append((float(number), unit.lower() if unit else None))
    if not tokens:
        raise ValueError(f"No price value in '{original}'")

    units = [unit for _, unit in tokens]
    values = []
    for i, (number, unit) in enumerate(tokens):
        unit = unit or _nearest_unit(units, i)
        values.append(round(number * PRICE_UNIT_MULTIPLIERS.get(unit, 1), 4))

    return PriceRange(min(values), max(values), original)


def parse_carpet_areas(carpet: str) -> List[float]:
    """Distinct numbers from a comma- or slash-separated list, ascending."""
    areas = set()
    for token in re.split(r'[,/]', carpet or ''):
        for number in NUMBER.findall(token):
            area = float(number)
            if area > 0:
                areas.add(area)
    return sorted(areas)


def parse_amenities(amenities: str) -> List[str]:
    result = []
    seen = set()
    for entry in re.split(r'[,;|]', amenities or ''):
        entry = collapse_whitespace(entry)
        if entry and entry.lower() not in seen:
            seen.add(entry.lower())
            result.append(entry)
    return result


def parse_image_urls(image_urls: str) -> List[str]:
    return [url for url in re.split(r'[,;|\s]+', image_urls or '') if url]


def parse_int_prefix(value: str) -> Optional[int]:
    """Leading integer of values like "64 Flats" or "1,200 Units"; None if there is none."""
    match = LEADING_INT.match(value or '')
    if not match:
        return None
    return int(match.group(1).replace(',', ''))


def parse_units_available(details: str) -> Optional[int]:
    match = UNITS_AVAILABLE.search(details or '')
    if not match:
        return None
    return int(match.group(1))


def _match_keywords(keyword_table, default: str, texts) -> str:
    haystack = ' '.join(collapse_whitespace(text).lower() for text in texts if text)
    for value, keywords in keyword_table:
        if any(keyword in haystack for keyword in keywords):
            return value
    return default


def infer_status(*texts: str) -> str:
    return _match_keywords(STATUS_KEYWORDS, DEFAULT_STATUS, texts)


def infer_furniture_type(*texts: str) -> str:
    return _match_keywords(FURNITURE_KEYWORDS, DEFAULT_FURNITURE_TYPE, texts)
