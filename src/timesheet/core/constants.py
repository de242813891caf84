"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_LUNCH_BREAK_MINUTES = 60

WORKERS_KEY = "atlant-workers"
WORK_RECORDS_KEY = "atlant-work-records"
LAST_SYNC_KEY = "atlant-last-sync"

BACKUP_FORMAT_VERSION = "1.0"
APP_NAME = "Atlant Work Schedule Tracker"
BACKUP_FILENAME_PATTERN = "atlant_backup_{date}.json"

# Labels written by the Ukrainian-language tracker; imports map them to ours.
LOCALIZED_STATUS_LABELS = {
    "присутній": "present",
    "відсутній": "absent",
    "запізнення": "late",
    "лікарняний": "sick-leave",
    "відпустка": "vacation",
}
LOCALIZED_SHIFT_NAMES = {
    "Перша зміна": "First shift",
    "Друга зміна": "Second shift",
    "Субота": "Saturday",
}
