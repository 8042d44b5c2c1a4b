"""
Date Service

Resolves which calendar day's puzzle is current and provides the day
arithmetic used for puzzle navigation. Dates travel as YYYY-MM-DD strings.
"""

import re
from datetime import date, datetime, timedelta, timezone
from typing import Callable, Optional
from zoneinfo import ZoneInfo

from ..config.game_settings import MIN_YEAR, MAX_YEAR, PUZZLE_TIMEZONE
from ..models.errors import MalformedDate
from ..utils.game_logger import game_logger

DATE_PATTERN = re.compile(r'^\d{4}-\d{2}-\d{2}$')
DATE_FORMAT = '%Y-%m-%d'


def is_valid_date(value) -> bool:
    """
    Strict check of a YYYY-MM-DD date string.

    Requires the exact digit layout, month 01-12, day 01-31, a year in the
    supported range and a day that exists in that month.
    """
    if not value or not isinstance(value, str):
        return False
    if not DATE_PATTERN.match(value):
        return False

    year, month, day = (int(part) for part in value.split('-'))
    if month < 1 or month > 12 or day < 1 or day > 31 or year < MIN_YEAR or year > MAX_YEAR:
        return False

    try:
        date(year, month, day)
    except ValueError:
        return False
    return True


def parse_date(value: str) -> date:
    """
    Parses a YYYY-MM-DD string into a date.

    Raises:
        MalformedDate: If the string is not a real calendar date
    """
    if not isinstance(value, str) or not DATE_PATTERN.match(value):
        raise MalformedDate(f"Invalid date string format: {value!r}")
    try:
        return datetime.strptime(value, DATE_FORMAT).date()
    except ValueError as e:
        raise MalformedDate(f"Invalid date: {value!r}") from e


def _shift_date(value: str, days: int) -> str:
    try:
        shifted = (parse_date(value) + timedelta(days=days)).strftime(DATE_FORMAT)
    except (MalformedDate, OverflowError) as e:
        game_logger.logger.error(f"Date arithmetic failed for {value!r}: {e}")
        return value

    if not is_valid_date(shifted):
        game_logger.logger.error(f"Date arithmetic left the supported range: {value!r} -> {shifted!r}")
        return value
    return shifted


def increment_date(value: str) -> str:
    """Next calendar day. Malformed input is logged and returned unchanged."""
    return _shift_date(value, 1)


def decrement_date(value: str) -> str:
    """Previous calendar day. Malformed input is logged and returned unchanged."""
    return _shift_date(value, -1)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class DateResolver:
    """
    Computes today's puzzle key in a fixed timezone.

    The clock is injectable so tests can pin "now".
    """

    def __init__(self, tz_name: str = PUZZLE_TIMEZONE, clock: Optional[Callable[[], datetime]] = None):
        self.tz = ZoneInfo(tz_name)
        self.clock = clock or _utc_now

    def current_real_date(self) -> str:
        """Today's date in the puzzle timezone, ignoring any preview override."""
        now = self.clock()
        if now.tzinfo is None:
            now = now.replace(tzinfo=timezone.utc)
        return now.astimezone(self.tz).strftime(DATE_FORMAT)

    def current_date(self, override: Optional[str] = None) -> str:
        """The override when it is a valid date, otherwise the real date."""
        if override:
            if is_valid_date(override):
                return override
            game_logger.logger.warning(f"Ignoring invalid preview date override: {override!r}")
        return self.current_real_date()
