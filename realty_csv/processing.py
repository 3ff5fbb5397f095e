"""
Processing module for parsed project data.
Flattens projects and configurations into DataFrames for export and into
property records for the bulk-create API.
"""

import logging
from typing import Any, Dict, List

import pandas as pd

from realty_csv.config import EXPORT_COLUMNS
from realty_csv.models import ParsedCSVData

logger = logging.getLogger(__name__)


def _format_area(area: float) -> str:
    return str(int(area)) if float(area).is_integer() else str(area)


def configurations_to_dataframe(parsed: ParsedCSVData) -> pd.DataFrame:
    """
    One row per configuration, joined with its project's identity columns.
    """
    if not parsed.configurations:
        logger.warning("No configurations to export")
        return pd.DataFrame(columns=EXPORT_COLUMNS)

    projects = {project.project_id: project for project in parsed.projects}
    records = []
    for config in parsed.configurations:
        project = projects.get(config.project_id)
        records.append({
            'config_id': config.config_id,
            'project_id': config.project_id,
            'builder': project.builder if project else None,
            'project_name': project.project_name if project else None,
            'location': project.location if project else None,
            'specification': config.specification,
            'tower': config.tower,
            'floor': config.floor,
            'carpet_areas': ', '.join(_format_area(area) for area in config.carpet_areas),
            'price_min_lakhs': config.price_range.min_lakhs,
            'price_max_lakhs': config.price_range.max_lakhs,
            'price_original': config.price_range.original_format,
            'flats_per_floor': config.flats_per_floor,
            'total_units': config.total_units,
            'units_available': config.units_available,
            'construction': config.construction,
            'parking': config.parking,
            'amenities': ', '.join(config.amenities),
            'possession': config.possession,
            'status': config.status,
            'furniture_type': config.furniture_type,
            'floor_rise': config.floor_rise,
            'details': config.details,
            'image_urls': ', '.join(config.image_urls),
        })

    df = pd.DataFrame.from_records(records, columns=EXPORT_COLUMNS)
    logger.info(f"Built configuration table: {len(df)} rows, {len(df.columns)} columns")
    return df


def projects_to_dataframe(parsed: ParsedCSVData) -> pd.DataFrame:
    records = [project.to_dict() for project in parsed.projects]
    return pd.DataFrame.from_records(records)


def map_to_properties(parsed: ParsedCSVData) -> List[Dict[str, Any]]:
    """
    Build property records, one per configuration, in the shape the
    property bulk-create endpoint accepts. Prices are in rupees.
    """
    projects = {project.project_id: project for project in parsed.projects}
    properties = []

    for config in parsed.configurations:
        project = projects.get(config.project_id)
        price = int(round(config.price_range.min_lakhs * 100000))

        record = {
            'title': f"{project.project_name if project else 'Property'} - {config.specification}",
            'location': project.location if project and project.location else 'Unknown',
            'bhk': config.specification or 'N/A',
            'price': price,
            'type': 'apartment',
            'category': 'residential',
            'purpose': 'sell',
            'builder': project.builder if project else None,
            'projectName': project.project_name if project else None,
            'specification': config.specification,
            'tower': config.tower,
            'units': config.total_units,
            'possession': config.possession,
            'amenities': list(config.amenities),
            'salesPerson': project.sales_person_name if project else None,
            'availability': config.status,
            'imageUrls': list(config.image_urls),
        }
        if config.carpet_areas:
            low = _format_area(min(config.carpet_areas))
            high = _format_area(max(config.carpet_areas))
            record['carpetArea'] = f"{low}-{high} sqft"
        properties.append(record)

    logger.info(f"Mapped {len(properties)} configurations to property records")
    return properties
