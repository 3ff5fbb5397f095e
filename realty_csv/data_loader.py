"""
Upload loader for project sheets.
Turns an uploaded CSV, TSV or Excel file into comma-separated text for the pipeline.
"""

import io
import logging

import pandas as pd

from realty_csv.layout import CSVStructureError, detect_delimiter
from realty_csv.tokenizer import join_fields

logger = logging.getLogger(__name__)


def decode_text(raw: bytes) -> str:
    try:
        return raw.decode('utf-8-sig')
    except UnicodeDecodeError as e:
        logger.error(f"Upload is not valid UTF-8 text: {e}")
        raise CSVStructureError(f"File is not readable as UTF-8 text: {e}")


def tsv_to_csv(text: str) -> str:
    """Re-join tab-separated lines as CSV, quoting cells that need it."""
    lines = text.replace('\r\n', '\n').replace('\r', '\n').split('\n')
    return '\n'.join(
        join_fields(cell.strip() for cell in line.split('\t')) for line in lines
    )


def excel_to_csv(file_buffer: io.BytesIO) -> str:
    try:
        df = pd.read_excel(file_buffer, header=None, dtype=str, engine='openpyxl')
    except Exception as e:
        logger.error(f"Error reading Excel file: {e}")
        raise CSVStructureError(f"Could not read Excel file: {e}")

    df = df.fillna('')
    logger.info(f"Excel sheet has {len(df)} rows and {len(df.columns)} columns")

    return '\n'.join(
        join_fields(str(value).strip() for value in row)
        for row in df.itertuples(index=False, name=None)
    )


def load_csv_text(file_buffer: io.BytesIO, filename: str) -> str:
    """
    Main entry point: uploaded file in, CSV text out.
    """
    file_extension = filename.lower().split('.')[-1] if '.' in filename else ''

    if file_extension in ['xlsx', 'xls']:
        logger.info(f"Processing Excel file: {filename}")
        file_buffer.seek(0)
        return excel_to_csv(file_buffer)

    logger.info(f"Processing CSV file: {filename}")
    file_buffer.seek(0)
    text = decode_text(file_buffer.read())

    first_line = text.split('\n', 1)[0]
    if detect_delimiter(first_line) == '\t':
        logger.info("Tab-separated upload detected, converting to CSV")
        return tsv_to_csv(text)

    return text
