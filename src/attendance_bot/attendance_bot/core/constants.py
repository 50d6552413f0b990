"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_LIST_LIMIT = 5
MIN_LIST_LIMIT = 1
MAX_LIST_LIMIT = 20

ABSENT_REASON_PLACEHOLDER = "Not provided"

DEFAULT_DATABASE_URL = "sqlite:///attendance.db"

# Signed 64-bit INTEGER range of SQLite and MySQL BIGINT primary keys.
MIN_RECORD_ID = -(2**63)
MAX_RECORD_ID = 2**63 - 1
