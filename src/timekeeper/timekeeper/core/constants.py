"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

STORAGE_KEY = "timekeeper_attendance_system_v1"
EMPLOYEES_STORAGE_KEY = STORAGE_KEY + "_employees_v2"
HISTORY_STORAGE_KEY = STORAGE_KEY + "_history_v2"

DEFAULT_DOCUMENT_KEY = "master"
DEFAULT_DEBOUNCE_SECONDS = 2.0
DEFAULT_POLL_SECONDS = 2.0

DEFAULT_DEPARTMENT = "General"
PRIORITY_DEPARTMENT = "Construction"

STANDARD_WORK_HOURS = 8
TEMPLATE_HEADER_ROWS = 6
BACKUP_VERSION = "1.0"

ISO_DATE_FORMAT = "%Y-%m-%d"

# Arabic calendar names, indexed by date.weekday() and date.month - 1.
ARABIC_WEEKDAYS = ["الاثنين", "الثلاثاء", "الأربعاء", "الخميس", "الجمعة", "السبت", "الأحد"]
ARABIC_MONTHS = [
    "يناير",
    "فبراير",
    "مارس",
    "أبريل",
    "مايو",
    "يونيو",
    "يوليو",
    "أغسطس",
    "سبتمبر",
    "أكتوبر",
    "نوفمبر",
    "ديسمبر",
]
