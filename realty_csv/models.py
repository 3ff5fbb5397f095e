"""
Record types produced by the import pipeline.
to_dict() gives the camelCase shape the admin UI and the property API consume.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

STATUSES = ('available', 'sold-out', 'launching-soon', 'future-phase')
FURNITURE_TYPES = ('unfurnished', 'semi-furnished', 'fully-furnished')


@dataclass
class PriceRange:
    min_lakhs: float
    max_lakhs: float
    original_format: str = ''

    def to_dict(self) -> Dict[str, Any]:
        return {
            'min': self.min_lakhs,
            'max': self.max_lakhs,
            'originalFormat': self.original_format,
        }


@dataclass
class RealEstateProject:
    project_id: str
    project_name: str
    builder: str
    location: str
    land_parcel: str = ''
    tower_count: str = ''
    launch_date: str = ''
    expected_possession: str = ''
    sales_person_name: str = ''
    sales_person_phone: str = ''
    details: Optional[str] = None

    def append_details(self, details: str) -> None:
        if not details:
            return
        if not self.details:
            self.details = details
        elif details not in self.details.split('; '):
            self.details = f"{self.details}; {details}"

    def to_dict(self) -> Dict[str, Any]:
        return {
            'projectId': self.project_id,
            'projectName': self.project_name,
            'builder': self.builder,
            'location': self.location,
            'landParcel': self.land_parcel,
            'towerCount': self.tower_count,
            'launchDate': self.launch_date,
            'expectedPossession': self.expected_possession,
            'salesPersonName': self.sales_person_name,
            'salesPersonPhone': self.sales_person_phone,
            'details': self.details,
        }


@dataclass
class UnitConfiguration:
    config_id: str
    project_id: str
    specification: str
    price_range: PriceRange
    tower: Optional[str] = None
    floor: Optional[str] = None
    carpet_areas: List[float] = field(default_factory=list)
    flats_per_floor: Optional[str] = None
    total_units: int = 0
    units_available: Optional[int] = None
    construction: Optional[str] = None
    parking: Optional[str] = None
    amenities: List[str] = field(default_factory=list)
    possession: str = ''
    status: str = 'available'
    furniture_type: str = 'unfurnished'
    floor_rise: Optional[str] = None
    details: Optional[str] = None
    image_urls: List[str] = field(default_factory=list)
    raw_row: Dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'configId': self.config_id,
            'projectId': self.project_id,
            'specification': self.specification,
            'tower': self.tower,
            'floor': self.floor,
            'carpetAreas': list(self.carpet_areas),
            'priceRange': self.price_range.to_dict(),
            'flatsPerFloor': self.flats_per_floor,
            'totalUnits': self.total_units,
            'unitsAvailable': self.units_available,
            'construction': self.construction,
            'parking': self.parking,
            'amenities': list(self.amenities),
            'possession': self.possession,
            'status': self.status,
            'furnitureType': self.furniture_type,
            'floorRise': self.floor_rise,
            'details': self.details,
            'imageUrls': list(self.image_urls),
            'rawCsvRow': dict(self.raw_row),
        }


@dataclass
class ParseError:
    row_number: int
    field: str
    value: str
    reason: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            'rowNumber': self.row_number,
            'field': self.field,
            'value': self.value,
            'reason': self.reason,
        }


@dataclass
class ParseStats:
    total_rows: int = 0
    projects_created: int = 0
    configurations_created: int = 0
    error_count: int = 0

    def to_dict(self) -> Dict[str, int]:
        return {
            'totalRows': self.total_rows,
            'projectsCreated': self.projects_created,
            'configurationsCreated': self.configurations_created,
            'errorCount': self.error_count,
        }


@dataclass
class ParsedCSVData:
    projects: List[RealEstateProject] = field(default_factory=list)
    configurations: List[UnitConfiguration] = field(default_factory=list)
    errors: List[ParseError] = field(default_factory=list)
    stats: ParseStats = field(default_factory=ParseStats)
    # Sanitizer audit trail, carried through for operator review
    issues: List[str] = field(default_factory=list)
    changes: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'projects': [project.to_dict() for project in self.projects],
            'configurations': [config.to_dict() for config in self.configurations],
            'errors': [error.to_dict() for error in self.errors],
            'stats': self.stats.to_dict(),
            'issues': list(self.issues),
            'changes': list(self.changes),
        }
