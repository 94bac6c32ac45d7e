"""Which cooks can cook on a given (week, weekday), and who is on duty."""
from typing import List, Optional

from mealrota.domain.Cook import Cook
from mealrota.utilities.constants import WEEKDAYS


def eligible_cooks(cooks: List[Cook], week_index: int, weekday: str) -> List[str]:
    """Codes of cooks available that day, in roster order.

    Falls back to the full roster when nobody is available so a day is never
    left without a cook.
    """
    available = [c.code for c in cooks if c.is_available(week_index, weekday)]
    return available or [c.code for c in cooks]


def assign_cook(cooks: List[Cook], week_index: int, day_index: int) -> Optional[str]:
    """Deterministic rotation through the eligible cooks (no randomness)."""
    ids = eligible_cooks(cooks, week_index, WEEKDAYS[day_index])
    if not ids:
        return None
    return ids[(week_index * 7 + day_index) % len(ids)]


__all__ = ['eligible_cooks', 'assign_cook']
