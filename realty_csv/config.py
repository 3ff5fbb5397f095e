"""
Central configuration module for the real-estate CSV importer.
All configurable settings and mappings in one place.
"""

# ============================================================================
# CANONICAL COLUMN LAYOUT
# ============================================================================

# Positional layout of the project sheet. Data is read by index, not by name.
CANONICAL_COLUMNS = [
    'Sr Nos', 'Builder', 'Sales Person', 'Project name', 'Land Parcel',
    'Tower', 'Floor', 'Specification', 'Carpet', 'Price', 'Flat/Floor',
    'Total Units', 'Possession', 'Parking', 'Construction', 'Amenities',
    'Location', 'Launch Date', 'Floor Rise', 'Details', 'Image URL'
]

COL_SR_NO = 0
COL_BUILDER = 1
COL_SALES_PERSON = 2
COL_PROJECT_NAME = 3
COL_LAND_PARCEL = 4
COL_TOWER = 5
COL_FLOOR = 6
COL_SPECIFICATION = 7
COL_CARPET = 8
COL_PRICE = 9
COL_FLATS = 10
COL_TOTAL_UNITS = 11
COL_POSSESSION = 12
COL_PARKING = 13
COL_CONSTRUCTION = 14
COL_AMENITIES = 15
COL_LOCATION = 16
COL_LAUNCH_DATE = 17
COL_FLOOR_RISE = 18
COL_DETAILS = 19
COL_IMAGE_URL = 20

# Keys used for the audit copy of each row
RAW_ROW_KEYS = [
    'srNo', 'builder', 'salesPerson', 'projectName', 'landParcel', 'tower',
    'floor', 'specification', 'carpet', 'price', 'flats', 'totalUnits',
    'possession', 'parking', 'construction', 'amenities', 'location',
    'launchDate', 'floorRise', 'details', 'imageUrl'
]

# Columns a continuation row copies from the last fully identified row
INHERITED_COLUMNS = [
    COL_BUILDER, COL_SALES_PERSON, COL_PROJECT_NAME,
    COL_LAND_PARCEL, COL_LOCATION, COL_LAUNCH_DATE
]

# ============================================================================
# HEADER VALIDATION
# ============================================================================

# Accepted spellings per column, compared lowercased with collapsed spaces
HEADER_ALIASES = {
    COL_SR_NO: ['sr nos', 'sr no', 'sr. no', 'sr. no.', 'sr', 's no', 'sno'],
    COL_BUILDER: ['builder', 'developer'],
    COL_SALES_PERSON: ['sales person', 'sales personnel', 'salesperson', 'contact'],
    COL_PROJECT_NAME: ['project name', 'project'],
    COL_LAND_PARCEL: ['land parcel', 'land'],
    COL_TOWER: ['tower', 'towers'],
    COL_FLOOR: ['floor', 'floors'],
    COL_SPECIFICATION: ['specification', 'spec', 'configuration'],
    COL_CARPET: ['carpet', 'carpet area'],
    COL_PRICE: ['price'],
    COL_FLATS: ['flat/floor', 'flats/floor', 'flats per floor'],
    COL_TOTAL_UNITS: ['total units', 'units'],
    COL_POSSESSION: ['possession'],
    COL_PARKING: ['parking'],
    COL_CONSTRUCTION: ['construction'],
    COL_AMENITIES: ['amenities'],
    COL_LOCATION: ['location'],
    COL_LAUNCH_DATE: ['launch date', 'launch'],
    COL_FLOOR_RISE: ['floor rise'],
    COL_DETAILS: ['details', 'remarks'],
    COL_IMAGE_URL: ['image url', 'image urls', 'images', 'image'],
}

# A mismatch on any of these aborts the import
REQUIRED_HEADER_COLUMNS = [COL_BUILDER, COL_PROJECT_NAME, COL_SPECIFICATION, COL_LOCATION]

# Header must reach at least the Location column
MIN_HEADER_COLUMNS = COL_LOCATION + 1

# ============================================================================
# PIPELINE DEFAULTS
# ============================================================================

VALIDATE_HEADER = True
NORMALIZE_ON_CLEAN = True

# ============================================================================
# FIELD NORMALIZATION
# ============================================================================

# Price unit suffixes, expressed as a multiplier into lakhs
PRICE_UNIT_MULTIPLIERS = {
    'l': 1,
    'lac': 1,
    'lacs': 1,
    'lakh': 1,
    'lakhs': 1,
    'cr': 100,
    'crore': 100,
    'crores': 100,
}

# First match wins, checked in this order
STATUS_KEYWORDS = [
    ('sold-out', ['sold out', 'soldout', 'sold-out']),
    ('launching-soon', ['launching', 'upcoming', 'coming soon', 'pre-launch', 'prelaunch']),
    ('future-phase', ['future']),
]
DEFAULT_STATUS = 'available'

FURNITURE_KEYWORDS = [
    ('fully-furnished', ['fully furnished', 'fully-furnished', 'full furnished']),
    ('semi-furnished', ['semi furnished', 'semi-furnished', 'semifurnished']),
]
DEFAULT_FURNITURE_TYPE = 'unfurnished'

# ============================================================================
# VALIDATION SETTINGS
# ============================================================================

VALIDATION_THRESHOLDS = {
    'max_reasonable_price_lakhs': 10000,  # Flag prices over 100 Cr
    'max_reasonable_carpet': 20000,       # Flag carpets over 20,000 sq ft
    'min_reasonable_carpet': 150,         # Flag carpets under 150 sq ft
    'data_quality_penalties': {
        'no_configurations': 100,
        'price_invariant': 25,
        'missing_specification': 25,
        'orphan_configurations': 20,
        'duplicate_config_ids': 10,
        'missing_location': 10,
        'missing_price': 5,
        'parse_errors': 5,
        'unrealistic_values': 5
    }
}

# ============================================================================
# EXPORT SETTINGS
# ============================================================================

EXPORT_COLUMNS = [
    'config_id', 'project_id', 'builder', 'project_name', 'location',
    'specification', 'tower', 'floor', 'carpet_areas', 'price_min_lakhs',
    'price_max_lakhs', 'price_original', 'flats_per_floor', 'total_units',
    'units_available', 'construction', 'parking', 'amenities', 'possession',
    'status', 'furniture_type', 'floor_rise', 'details', 'image_urls'
]

EXPORT_SETTINGS = {
    'excel': {
        'engine': 'openpyxl',
        'include_index': False,
        'sheets': {
            'configurations': 'Configurations',
            'projects': 'Projects',
            'validation': 'Validation',
            'issues': 'Issues'
        }
    },
    'csv': {
        'index': False,
        'encoding': 'utf-8'
    },
    'json': {
        'indent': 2
    }
}

# Records per call to the bulk-create store
BULK_CHUNK_SIZE = 100

# ============================================================================
# LOGGING SETTINGS
# ============================================================================

LOG_FORMAT = '%(asctime)s - %(levelname)s - %(message)s'
LOG_LEVEL = 'INFO'
