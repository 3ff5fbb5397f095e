"""
Tests for turning uploaded files into CSV text.
"""

import io

import pandas as pd
import pytest

from realty_csv.config import CANONICAL_COLUMNS
from realty_csv.data_loader import load_csv_text, tsv_to_csv
from realty_csv.layout import CSVStructureError
from realty_csv.parser import parse_real_estate_csv
from realty_csv.tokenizer import parse_line

HEADER = ','.join(CANONICAL_COLUMNS)


class TestTextUploads:

    def test_csv_passes_through(self, sample_sheet):
        buffer = io.BytesIO(sample_sheet.encode('utf-8'))
        assert load_csv_text(buffer, 'sheet.csv') == sample_sheet

    def test_byte_order_mark_stripped(self, sample_sheet):
        buffer = io.BytesIO(sample_sheet.encode('utf-8-sig'))
        assert load_csv_text(buffer, 'sheet.csv').startswith('Sr Nos,')

    def test_undecodable_bytes(self):
        with pytest.raises(CSVStructureError):
            load_csv_text(io.BytesIO(b'\xff\xfe\xfa'), 'sheet.csv')

    def test_tab_separated_upload(self):
        header = HEADER.replace(',', '\t')
        row = '\t'.join(['1', 'X', '', 'Y', '', '', '', '2BHK', '863, 887'] + [''] * 7 + ['Pune'])
        text = load_csv_text(io.BytesIO(f'{header}\n{row}'.encode('utf-8')), 'sheet.tsv')
        lines = text.split('\n')
        assert lines[0] == HEADER
        assert parse_line(lines[1])[8] == '863, 887'
        assert parse_real_estate_csv(text).configurations[0].carpet_areas == [863, 887]

    def test_tsv_line_endings(self):
        assert tsv_to_csv('a\tb\r\nc\td') == 'a,b\nc,d'


class TestExcelUploads:

    def test_excel_sheet(self, sample_sheet):
        rows = [parse_line(line) for line in sample_sheet.split('\n') if line.strip(',')]
        width = max(len(row) for row in rows)
        rows = [row + [''] * (width - len(row)) for row in rows]

        buffer = io.BytesIO()
        pd.DataFrame(rows).to_excel(buffer, header=False, index=False)

        text = load_csv_text(buffer, 'Sheet.XLSX')
        parsed = parse_real_estate_csv(text)
        assert [p.project_name for p in parsed.projects] == ['Palava City', 'Godrej Hills']
        assert [c.specification for c in parsed.configurations] == ['2BHK', '3BHK', '1BHK']
        assert parsed.configurations[0].carpet_areas == [863, 887]

    def test_unreadable_excel(self):
        with pytest.raises(CSVStructureError):
            load_csv_text(io.BytesIO(b'not a workbook'), 'sheet.xlsx')
