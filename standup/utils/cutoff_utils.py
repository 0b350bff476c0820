import logging
from datetime import date, datetime, time
from zoneinfo import ZoneInfo

from django.conf import settings

from standup.constants.standup import CUTOFF_TIME_FORMAT, DATE_FORMAT

logger = logging.getLogger(__name__)


def standup_timezone() -> ZoneInfo:
    return ZoneInfo(settings.STANDUP["TIMEZONE"])


def current_time() -> datetime:
    return datetime.now(standup_timezone())


def today() -> str:
    return current_time().strftime(DATE_FORMAT)


def parse_date(value: str) -> date:
    return datetime.strptime(value, DATE_FORMAT).date()


def parse_cutoff_time(value: str | None) -> time:
    """
    Parses an HH:MM cutoff. Stored values that do not parse fall back to the
    configured default so a bad team record cannot make every day editable.
    """
    try:
        return datetime.strptime((value or "").strip(), CUTOFF_TIME_FORMAT).time()
    except ValueError:
        fallback = settings.STANDUP["DEFAULT_CUTOFF_TIME"]
        logger.warning(f"Invalid cutoff time {value!r}, using default {fallback}")
        return datetime.strptime(fallback, CUTOFF_TIME_FORMAT).time()


def is_valid_cutoff_time(value: str) -> bool:
    try:
        datetime.strptime(value, CUTOFF_TIME_FORMAT)
    except ValueError:
        return False
    return True


def cutoff_at(standup_date: str, cutoff_time: str | None) -> datetime:
    return datetime.combine(parse_date(standup_date), parse_cutoff_time(cutoff_time), tzinfo=standup_timezone())


def is_locked(standup_date: str, cutoff_time: str | None, now: datetime | None = None) -> bool:
    now = now or current_time()
    return now > cutoff_at(standup_date, cutoff_time)
