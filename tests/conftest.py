"""
Shared fixtures for building project sheets in tests.
"""

import pytest

from realty_csv.config import CANONICAL_COLUMNS
from realty_csv.tokenizer import join_fields

HEADER = ','.join(CANONICAL_COLUMNS)

FIELD_INDEX = {
    'sr_no': 0, 'builder': 1, 'sales_person': 2, 'project': 3, 'land': 4,
    'tower': 5, 'floor': 6, 'spec': 7, 'carpet': 8, 'price': 9, 'flats': 10,
    'total_units': 11, 'possession': 12, 'parking': 13, 'construction': 14,
    'amenities': 15, 'location': 16, 'launch': 17, 'floor_rise': 18,
    'details': 19, 'image_url': 20,
}


def _make_row(**values):
    fields = [''] * len(CANONICAL_COLUMNS)
    for name, value in values.items():
        fields[FIELD_INDEX[name]] = value
    return join_fields(fields)


def _make_sheet(*rows, header=HEADER):
    return '\n'.join([header] + list(rows))


@pytest.fixture
def make_row():
    return _make_row


@pytest.fixture
def make_sheet():
    return _make_sheet


@pytest.fixture
def sample_sheet():
    """A small but messy export: continuation, note, blank and spacing issues."""
    return _make_sheet(
        _make_row(sr_no='1', builder='Lodha Group', sales_person='Amit Shah - 9876543210',
                  project='Palava City', land='55 Acre', tower='18 Soldout', floor='16 Floor',
                  spec='2BHK', carpet='863, 887', price='79 to 84L', total_units='64 Flats',
                  possession='Dec 26', amenities='Gym, Pool, Club House',
                  location='Dombivli', launch='2024', details='Corner units'),
        _make_row(spec='3BHK', carpet='1100/1200', price='1.10 to 1.16 cr',
                  total_units='40', possession='Dec 27'),
        _make_row(spec='(sold out - ignore)'),
        '',
        ',,,,,',
        _make_row(sr_no='2', builder='Godrej', sales_person='Neha',
                  project='Godrej Hills', tower='3Launched', spec='1BHK',
                  carpet='450', price='45L', total_units='120', location='Kharghar'),
    ) + '\n'
