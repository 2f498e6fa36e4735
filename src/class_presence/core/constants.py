"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

EARTH_RADIUS_METERS = 6_371_000
DEFAULT_RADIUS_METERS = 100
DEFAULT_TOLERANCE_MINUTES = 15
DEFAULT_LOCATION_TIMEOUT_MS = 10_000
DEFAULT_LOCATION_WORKERS = 16
DEFAULT_ATTENDANCE_LIST_LIMIT = 500
