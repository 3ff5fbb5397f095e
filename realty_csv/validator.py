"""
Import validation for parsed project sheets.
Scores the parsed result and lists problems an operator should review before committing.
"""

import logging
from collections import Counter
from typing import Any, Dict

import numpy as np
import pandas as pd

from realty_csv.config import VALIDATION_THRESHOLDS
from realty_csv.models import ParsedCSVData

logger = logging.getLogger(__name__)


def validate_import(parsed: ParsedCSVData) -> Dict[str, Any]:
    """
    Validates parsed project data and returns issues found.

    Returns:
        Dictionary with 'errors' (critical issues) and 'warnings' (potential issues)
    """
    validation_results = {
        'errors': [],
        'warnings': [],
        'statistics': {},
        'data_quality_score': 100  # Start at 100, deduct for issues
    }

    penalties = VALIDATION_THRESHOLDS['data_quality_penalties']
    configurations = parsed.configurations
    project_ids = {project.project_id for project in parsed.projects}

    if not configurations:
        validation_results['errors'].append("No configurations found in the file")
        validation_results['data_quality_score'] -= penalties['no_configurations']

    # Invariants every configuration must hold
    bad_price = [c.config_id for c in configurations if c.price_range.min_lakhs > c.price_range.max_lakhs]
    if bad_price:
        validation_results['errors'].append(f"Configurations with min price above max: {bad_price[:5]}")
        validation_results['data_quality_score'] -= penalties['price_invariant']

    no_spec = [c.config_id for c in configurations if not c.specification.strip()]
    if no_spec:
        validation_results['errors'].append(f"Configurations without specification: {no_spec[:5]}")
        validation_results['data_quality_score'] -= penalties['missing_specification']

    orphans = [c.config_id for c in configurations if c.project_id not in project_ids]
    if orphans:
        validation_results['errors'].append(f"Configurations referencing unknown projects: {orphans[:5]}")
        validation_results['data_quality_score'] -= penalties['orphan_configurations']

    id_counts = Counter(c.config_id for c in configurations)
    duplicates = [config_id for config_id, count in id_counts.items() if count > 1]
    if duplicates:
        validation_results['errors'].append(f"Duplicate configuration ids: {duplicates[:5]}")
        validation_results['data_quality_score'] -= penalties['duplicate_config_ids']

    # Softer checks
    no_location = [p.project_name for p in parsed.projects if not p.location]
    if no_location:
        validation_results['warnings'].append(f"Projects without location: {no_location[:5]}")
        validation_results['data_quality_score'] -= penalties['missing_location']

    no_price = [c.config_id for c in configurations if c.price_range.max_lakhs == 0]
    if no_price:
        validation_results['warnings'].append(
            f"{len(no_price)} configurations have no price: {no_price[:5]}"
        )
        validation_results['data_quality_score'] -= penalties['missing_price']

    if parsed.errors:
        validation_results['warnings'].append(f"{len(parsed.errors)} field parse errors recorded")
        validation_results['data_quality_score'] -= penalties['parse_errors']

    max_price = VALIDATION_THRESHOLDS['max_reasonable_price_lakhs']
    pricey = [c.config_id for c in configurations if c.price_range.max_lakhs > max_price]
    if pricey:
        validation_results['warnings'].append(
            f"Configurations priced above {max_price} lakhs: {pricey[:5]}"
        )
        validation_results['data_quality_score'] -= penalties['unrealistic_values']

    min_carpet = VALIDATION_THRESHOLDS['min_reasonable_carpet']
    max_carpet = VALIDATION_THRESHOLDS['max_reasonable_carpet']
    odd_carpet = [
        c.config_id for c in configurations
        if any(area < min_carpet or area > max_carpet for area in c.carpet_areas)
    ]
    if odd_carpet:
        validation_results['warnings'].append(
            f"Configurations with carpet areas outside {min_carpet}-{max_carpet} sq ft: {odd_carpet[:5]}"
        )

    # Calculate statistics
    try:
        validation_results['statistics'] = calculate_statistics(parsed)
    except Exception as e:
        logger.error(f"Error calculating statistics: {e}")

    # Ensure score doesn't go below 0
    validation_results['data_quality_score'] = max(0, validation_results['data_quality_score'])
    validation_results['row_count'] = parsed.stats.total_rows

    logger.info(f"Validation complete. Score: {validation_results['data_quality_score']}/100")

    return validation_results


def calculate_statistics(parsed: ParsedCSVData) -> Dict[str, Any]:
    statistics = {
        'total_projects': len(parsed.projects),
        'total_configurations': len(parsed.configurations),
        'skipped_rows': len(parsed.issues),
        'parse_errors': len(parsed.errors),
    }
    if not parsed.configurations:
        return statistics

    df = pd.DataFrame([
        {
            'project_id': c.project_id,
            'specification': c.specification,
            'status': c.status,
            'price_min': c.price_range.min_lakhs,
            'price_max': c.price_range.max_lakhs,
            'total_units': c.total_units,
        }
        for c in parsed.configurations
    ])

    statistics['configs_per_project'] = float(round(df.groupby('project_id').size().mean(), 2))
    statistics['total_units'] = int(df['total_units'].sum())

    priced = df[df['price_max'] > 0]
    if not priced.empty:
        statistics['avg_price_lakhs'] = float(round(np.mean((priced['price_min'] + priced['price_max']) / 2), 2))
        statistics['min_price_lakhs'] = float(priced['price_min'].min())
        statistics['max_price_lakhs'] = float(priced['price_max'].max())

    statistics['status_counts'] = {str(k): int(v) for k, v in df['status'].value_counts().items()}
    statistics['specification_counts'] = {
        str(k): int(v) for k, v in df['specification'].str.upper().value_counts().head(10).items()
    }
    return statistics


def generate_validation_summary(validation_results: Dict[str, Any]) -> str:
    """
    Generates a human-readable summary of validation results.
    """
    summary = []

    summary.append(f"Data Quality Score: {validation_results['data_quality_score']}/100")
    summary.append(f"Total Rows Processed: {validation_results.get('row_count', 'Unknown')}")

    if validation_results['errors']:
        summary.append("\nCRITICAL ISSUES:")
        for error in validation_results['errors']:
            summary.append(f"  - {error}")

    if validation_results['warnings']:
        summary.append("\nWARNINGS:")
        for warning in validation_results['warnings'][:10]:  # Limit to first 10
            summary.append(f"  - {warning}")
        if len(validation_results['warnings']) > 10:
            summary.append(f"  - ... and {len(validation_results['warnings']) - 10} more warnings")

    if validation_results['statistics']:
        summary.append("\nSTATISTICS:")
        for key, value in validation_results['statistics'].items():
            label = key.replace('_', ' ').title()
            if isinstance(value, dict):
                parts = ', '.join(f"{k}: {v}" for k, v in value.items())
                summary.append(f"  - {label}: {parts}")
            elif 'price' in key:
                summary.append(f"  - {label}: {value:,.2f} L")
            elif isinstance(value, float):
                summary.append(f"  - {label}: {value:,.2f}")
            else:
                summary.append(f"  - {label}: {value}")

    return '\n'.join(summary)
