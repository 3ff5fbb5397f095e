"""
Maps sanitized project sheet rows to projects and unit configurations.
Repeated rows of one project share a single RealEstateProject.
"""

import logging
from typing import Dict, List, Optional, Tuple

from realty_csv import layout
from realty_csv.cleaner import SanitizedRow, split_lines, normalize_header, sanitize_rows
from realty_csv.config import (
    RAW_ROW_KEYS, COL_BUILDER, COL_SALES_PERSON, COL_PROJECT_NAME, COL_LAND_PARCEL,
    COL_TOWER, COL_FLOOR, COL_SPECIFICATION, COL_CARPET, COL_PRICE, COL_FLATS,
    COL_TOTAL_UNITS, COL_POSSESSION, COL_PARKING, COL_CONSTRUCTION, COL_AMENITIES,
    COL_LOCATION, COL_LAUNCH_DATE, COL_FLOOR_RISE, COL_DETAILS, COL_IMAGE_URL,
    VALIDATE_HEADER
)
from realty_csv.models import (
    ParsedCSVData, ParseError, ParseStats, PriceRange, RealEstateProject, UnitConfiguration
)
from realty_csv.normalizers import (
    collapse_whitespace, slugify, split_contact, parse_price_range, parse_carpet_areas,
    parse_amenities, parse_image_urls, parse_int_prefix, parse_units_available,
    infer_status, infer_furniture_type
)
from realty_csv.tokenizer import parse_line

logger = logging.getLogger(__name__)


def project_key(builder: str, project_name: str, location: str) -> Tuple[str, str, str]:
    return (
        collapse_whitespace(builder).lower(),
        collapse_whitespace(project_name).lower(),
        collapse_whitespace(location).lower(),
    )


def _optional(value: str) -> Optional[str]:
    return value or None


class ProjectMapper:
    """
    Turns sanitized rows into entities for one import run.
    Holds the project key cache and the ids handed out so far.
    """

    def __init__(self):
        self.projects: Dict[Tuple[str, str, str], RealEstateProject] = {}
        self.errors: List[ParseError] = []
        self._project_ids = set()
        self._config_ids = set()

    def _unique_id(self, base: str, taken: set) -> str:
        candidate = base
        suffix = 2
        while candidate in taken:
            candidate = f"{base}_{suffix}"
            suffix += 1
        taken.add(candidate)
        return candidate

    def _soft_error(self, row_number: int, field: str, value: str, reason: str) -> None:
        logger.warning(f"Row {row_number}: {reason} ({field}='{value}')")
        self.errors.append(ParseError(row_number, field, value, reason))

    def _create_project(self, row: SanitizedRow) -> RealEstateProject:
        cells = row.fields
        builder = cells[COL_BUILDER]
        project_name = cells[COL_PROJECT_NAME]
        location = cells[COL_LOCATION]

        parts = ['proj', slugify(builder), slugify(project_name)]
        if location:
            parts.append(slugify(location))
        project_id = self._unique_id('_'.join(part for part in parts if part), self._project_ids)

        if not location:
            self._soft_error(row.row_number, 'location', '', 'missing location')

        contact = split_contact(cells[COL_SALES_PERSON])
        return RealEstateProject(
            project_id=project_id,
            project_name=project_name,
            builder=builder,
            location=location,
            land_parcel=cells[COL_LAND_PARCEL],
            tower_count=cells[COL_TOWER],
            launch_date=cells[COL_LAUNCH_DATE],
            expected_possession=cells[COL_POSSESSION],
            sales_person_name=contact.name,
            sales_person_phone=contact.phone,
            details=_optional(cells[COL_DETAILS]),
        )

    def _create_configuration(self, row: SanitizedRow, project_id: str) -> UnitConfiguration:
        cells = row.fields
        specification = cells[COL_SPECIFICATION]
        tower = cells[COL_TOWER]
        details = cells[COL_DETAILS]
        possession = cells[COL_POSSESSION]

        config_id = self._unique_id(
            f"{project_id}_{slugify(specification) or 'spec'}_{slugify(tower) or 'default'}",
            self._config_ids
        )

        # parse_price_range normalizes itself, so the typed text becomes original_format
        raw_price = row.raw_fields[COL_PRICE]
        try:
            price_range = parse_price_range(raw_price)
        except ValueError as e:
            self._soft_error(row.row_number, 'price', raw_price, f"unparseable price: {e}")
            price_range = PriceRange(0, 0, raw_price)

        total_units = parse_int_prefix(cells[COL_TOTAL_UNITS])
        if total_units is None:
            if cells[COL_TOTAL_UNITS]:
                self._soft_error(row.row_number, 'totalUnits', cells[COL_TOTAL_UNITS],
                                 'unparseable unit count, defaulted to 0')
            total_units = 0

        status = infer_status(possession, specification, tower, details)
        units_available = 0 if status == 'sold-out' else parse_units_available(details)

        return UnitConfiguration(
            config_id=config_id,
            project_id=project_id,
            specification=specification,
            price_range=price_range,
            tower=_optional(tower),
            floor=_optional(cells[COL_FLOOR]),
            carpet_areas=parse_carpet_areas(cells[COL_CARPET]),
            flats_per_floor=_optional(cells[COL_FLATS]),
            total_units=total_units,
            units_available=units_available,
            construction=_optional(cells[COL_CONSTRUCTION]),
            parking=_optional(cells[COL_PARKING]),
            amenities=parse_amenities(cells[COL_AMENITIES]),
            possession=possession,
            status=status,
            furniture_type=infer_furniture_type(specification, details),
            floor_rise=_optional(cells[COL_FLOOR_RISE]),
            details=_optional(details),
            image_urls=parse_image_urls(cells[COL_IMAGE_URL]),
            raw_row={key: row.raw_fields[index] for index, key in enumerate(RAW_ROW_KEYS)},
        )

    def map_row(self, row: SanitizedRow) -> Tuple[Optional[RealEstateProject], Optional[UnitConfiguration]]:
        """
        Map one sanitized row.

        Returns (project, configuration); project is None when the row joins
        a project seen earlier in the run. Both are None when the row has no
        project identity at all.
        """
        cells = row.fields
        if not cells[COL_BUILDER] and not cells[COL_PROJECT_NAME]:
            self._soft_error(row.row_number, 'builder', '', 'no project to inherit from')
            return None, None

        key = project_key(cells[COL_BUILDER], cells[COL_PROJECT_NAME], cells[COL_LOCATION])
        project = self.projects.get(key)
        created = None
        if project is None:
            project = self._create_project(row)
            self.projects[key] = project
            created = project
        else:
            project.append_details(cells[COL_DETAILS])

        configuration = self._create_configuration(row, project.project_id)
        return created, configuration


def parse_real_estate_csv(csv_text: str, validate_header: bool = VALIDATE_HEADER) -> ParsedCSVData:
    """
    Run the full pipeline over a project sheet.

    Every row is processed; failures become ParseError records instead of
    stopping the run. Raises CSVStructureError only for a header that does
    not fit the layout (when validate_header is on).
    """
    lines = split_lines(csv_text)
    header, header_changes = normalize_header(lines[0])
    if validate_header:
        layout.validate_header(parse_line(header))

    rows, issues, changes = sanitize_rows(lines)
    mapper = ProjectMapper()
    result = ParsedCSVData(issues=issues, changes=header_changes + changes)

    logger.info(f"Mapping {len(rows)} sanitized rows out of {len(lines) - 1} data lines")

    for row in rows:
        try:
            _, configuration = mapper.map_row(row)
        except Exception as e:
            logger.error(f"Row {row.row_number}: mapping failed: {e}")
            mapper.errors.append(ParseError(row.row_number, 'general', ','.join(row.fields), str(e)))
            continue
        if configuration is not None:
            result.configurations.append(configuration)

    result.projects = list(mapper.projects.values())
    result.errors = mapper.errors
    result.stats = ParseStats(
        total_rows=len(lines) - 1,
        projects_created=len(result.projects),
        configurations_created=len(result.configurations),
        error_count=len(mapper.errors),
    )

    logger.info(f"Parsed {result.stats.projects_created} projects, "
                f"{result.stats.configurations_created} configurations, "
                f"{result.stats.error_count} errors")

    return result
