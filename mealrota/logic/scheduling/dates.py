"""Attach calendar timestamps to grid cells."""
import logging
from datetime import date, datetime, time, timedelta
from typing import Optional

from mealrota.domain.Schedule import ScheduleGrid
from mealrota.utilities.config import DINNER_HOUR, DINNER_MINUTES
from mealrota.utilities.constants import DATE_FORMAT

logger = logging.getLogger(__name__)


def parse_start_date(start_date: str) -> Optional[date]:
    """Parse an ISO date (or timestamp); None when it is not a date."""
    text = str(start_date or "").strip()
    try:
        return datetime.strptime(text, DATE_FORMAT).date()
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(text).date()
    except ValueError:
        return None


def next_monday(today: Optional[date] = None) -> str:
    """The Monday strictly after ``today``, formatted for ``start_date``."""
    today = today or date.today()
    return (today + timedelta(days=7 - today.weekday())).strftime(DATE_FORMAT)


def project_dates(grid: ScheduleGrid, start_date: str, hour: int = DINNER_HOUR,
                  minute: int = DINNER_MINUTES) -> ScheduleGrid:
    """Return a copy of ``grid`` where cell (w, d) is dated start + w*7 + d days at hour:minute.

    The start date is the Monday of week 0. An invalid start date returns the
    grid unchanged.
    """
    base = parse_start_date(start_date)
    if base is None:
        logger.warning("Ignoring invalid start date %r; dates left unchanged", start_date)
        return grid
    out = grid.copy()
    for w, d, cell in out.cells():
        cell.date = datetime.combine(base + timedelta(days=w * 7 + d), time(hour, minute))
    return out


__all__ = ['project_dates', 'parse_start_date', 'next_monday']
