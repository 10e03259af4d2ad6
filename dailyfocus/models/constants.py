"""Constants for dailyFocus.

This module centralizes all magic numbers and default values used throughout the application.
"""

# Timezone used when a user has not configured one
DEFAULT_TIMEZONE = "America/Sao_Paulo"

# Quiet hours defaults (local to the user's timezone)
DEFAULT_QUIET_START = "22:00"
DEFAULT_QUIET_END = "08:00"

# Weekday encoding: 0 = Sunday ... 6 = Saturday
MONDAY = 1
FRIDAY = 5
WORKING_DAYS = frozenset(range(MONDAY, FRIDAY + 1))

# Legacy values found in stored rows
LEGACY_PRIORITY_MAPPING = {
    "urgent": "high",
}
