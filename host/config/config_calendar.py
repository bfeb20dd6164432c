# host/config/config_calendar.py
"""
Configuration for the world calendar.
"""

# --- Calendar Shape ---
CALENDAR_HOURS_PER_DAY = 24.0
CALENDAR_DAYS_PER_MONTH = 9
CALENDAR_MONTHS_PER_YEAR = 12

# --- New World Start (May 1st, early morning) ---
CALENDAR_NEW_WORLD_MONTH_INDEX = 4
CALENDAR_NEW_WORLD_DAY_INDEX = 0
CALENDAR_NEW_WORLD_HOUR = 6.0

CALENDAR_MONTH_NAMES = [
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December"
]
