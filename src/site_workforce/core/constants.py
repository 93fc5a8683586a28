"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

STANDARD_WORKDAY_HOURS = 8
OVERTIME_RATE_MULTIPLIER = 1.5

SYSTEM_ACTOR = "system"
PAYROLL_PROCESSED_BY = "System"

CLOCK_FORMAT = "%H:%M"
ISO_DATE_FORMAT = "%Y-%m-%d"

LOCAL_KEY_PREFIX = "sitewf_"
