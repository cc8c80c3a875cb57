"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

ALL_EVENTS = "all"

REGISTRATION_ID_PREFIX = "REG"
REGISTRATION_ID_SUFFIX_LENGTH = 6

EXPORT_COLUMNS = ("Name", "Email", "Registration ID", "Status", "Timestamp", "Event")
EXPORT_SHEET_NAME = "Attendance Report"
EXPORT_MISSING_TIMESTAMP = "Not Attended"
EXPORT_MISSING_EVENT = "N/A"

DEFAULT_DB_TIMEOUT_SECONDS = 5
