"""Grocery list builder.

Provides build_grocery_list(days, cook=None) and week_grocery(state, week_index, cook=None).
"""
from collections import defaultdict
from typing import Any, Dict, Iterable, List, Optional

from mealrota.domain.PlanningState import PlanningState
from mealrota.domain.Schedule import DayCell
from mealrota.utilities.constants import INGREDIENT_CATEGORIES, OTHER_CATEGORY


def _normalize(name: str) -> str:
    return (name or '').strip().lower()


def categorize(item: str) -> str:
    """First category in table order with a keyword contained in the item."""
    it = _normalize(item)
    for category, keywords in INGREDIENT_CATEGORIES:
        if any(k in it for k in keywords):
            return category
    return OTHER_CATEGORY


def build_grocery_list(days: Iterable[DayCell], cook: Optional[str] = None) -> List[Dict[str, Any]]:
    """Count the ingredients of the scheduled dishes in ``days``.

    Args:
        days: Day cells (usually one week of the grid).
        cook: If given, only cells assigned to this cook code are used.

    Returns:
        List of dicts { category, item, count } sorted by category, then
        descending count, then item. Items are matched case-insensitively and
        rendered title-cased.
    """
    tally: Dict[str, int] = defaultdict(int)
    for day in days:
        if cook is not None and day.cook != cook:
            continue
        for dish in day.meals.values():
            if not dish:
                continue
            for raw in dish.ingredient_items():
                tally[_normalize(raw)] += 1

    entries = [{'category': categorize(key), 'item': key.title(), 'count': count, '_key': key}
               for key, count in tally.items()]
    entries.sort(key=lambda e: (e['category'], -e['count'], e['_key']))
    for e in entries:
        del e['_key']
    return entries


def week_grocery(state: PlanningState, week_index: int, cook: Optional[str] = None) -> List[Dict[str, Any]]:
    return build_grocery_list(state.grid[week_index], cook)


__all__ = ['build_grocery_list', 'week_grocery', 'categorize']
