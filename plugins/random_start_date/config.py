"""
plugins/random_start_date/config.py
Default configuration for the Random Start Date plugin.
"""

CONFIG_FILE = "randomstartdate.json"
SAVE_KEY_APPLIED = "randomstartdate.applied"

DEFAULT_CONFIG = {
    # Month (1..12 when randomize_month is false)
    "randomize_month": True,
    "fixed_month": 1,
    # Day (1..days per month when randomize_day is false)
    "randomize_day": True,
    "fixed_day": 1,
    # Hour (0..23, clamped to the calendar's hours per day at runtime)
    "randomize_hour": True,
    "fixed_hour": 6,
}

# A world counts as freshly created while it still sits in the first half of
# the engine's default start day (month index 4 = May, day index 0).
FRESH_START_MONTH_INDEX = 4
FRESH_START_DAY_INDEX = 0
FRESH_START_MAX_HOURS_INTO_DAY = 12.0

# Tolerance used when comparing calendar positions, in hours.
EPSILON_HOURS = 0.001
