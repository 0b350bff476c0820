from enum import Enum


class StandupStatus(Enum):
    PREPARED = "prepared"
    PARTIAL = "partial"
    MISSING = "missing"


STATUS_SCORES = {
    StandupStatus.PREPARED: 100,
    StandupStatus.PARTIAL: 50,
    StandupStatus.MISSING: 0,
}

DATE_FORMAT = "%Y-%m-%d"
DATE_REGEX = r"^\d{4}-\d{2}-\d{2}$"
CUTOFF_TIME_FORMAT = "%H:%M"
CUTOFF_TIME_REGEX = r"^\d{2}:\d{2}$"
