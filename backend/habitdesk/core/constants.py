"""
Application-wide constants
"""

DATE_FORMAT = "%Y-%m-%d"

# Used when the add-habit form leaves these blank
DEFAULT_HABIT_QUANTITY = 5
DEFAULT_HABIT_UNIT = "units"

WEEK_REVIEW_INTERVAL_DAYS = 7
CALENDAR_WINDOW_DAYS = 30

MAX_SUBTASKS = 3
