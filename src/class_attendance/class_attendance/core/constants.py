"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_REPORT_DAYS = 30
DASHBOARD_REFRESH_SECONDS = 30
RECENT_FEED_LIMIT = 10
ATTENDANCE_POLL_SECONDS = 5
MAX_WATCHED_SESSIONS = 32
LUNCH_BREAK_NAME = "lunch break"

MIN_YEAR = 1
MAX_YEAR = 4

BRANCHES = (
    "Computer Science and Engineering",
    "Information Technology",
    "Electronics and Communication Engineering",
    "Electrical and Electronics Engineering",
    "Mechanical Engineering",
    "Civil Engineering",
    "Artificial Intelligence and Data Science",
    "Artificial Intelligence and Machine Learning",
    "Electronics and Instrumentation Engineering",
    "Bio Technology",
    "Chemical Engineering",
    "Aeronautical Engineering",
    "Automobile Engineering",
)
