from __future__ import annotations

from datetime import date, datetime
from typing import Optional

from ..core.enums import Weekday

# date.weekday(): Monday=0 .. Sunday=6
_WEEKDAY_BY_ISO_INDEX = {
    6: Weekday.SUNDAY,
    0: Weekday.MONDAY,
    1: Weekday.TUESDAY,
    2: Weekday.WEDNESDAY,
    3: Weekday.THURSDAY,
}


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def weekday_for(day: date) -> Optional[Weekday]:
    """School weekday for a calendar date; None on Friday/Saturday."""
    return _WEEKDAY_BY_ISO_INDEX.get(day.weekday())


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()
