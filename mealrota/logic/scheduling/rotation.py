"""Rotation scheduler: fills the 4-week grid with dishes and cooks.

Provides eligible_pool(dishes, threshold, dinners_only) and
generate_schedule(pool, seed, repeat_cap, cooks, dinners_only=True).
"""
from collections import deque
from typing import Callable, Deque, Dict, List, Optional

from mealrota.domain.Cook import Cook
from mealrota.domain.Dish import Dish
from mealrota.domain.Schedule import ScheduleGrid
from mealrota.logic.scheduling.availability import assign_cook
from mealrota.logic.scheduling.random_source import create_generator
from mealrota.utilities.constants import (
    ADJACENT_PENALTY, RECENT_PENALTY, RECENT_WINDOW, SLOT_CLASSES, TOP_CANDIDATES, DEFAULT_REPEAT_CAP
)
from mealrota.utilities.validators import ValidationFailure

NO_ELIGIBLE_DISHES = "No eligible dishes: add dishes or lower the quality threshold."


def eligible_pool(dishes: List[Dish], threshold: float, dinners_only: bool) -> List[Dish]:
    """Dishes at or above the quality threshold (dinners only, when that mode is on)."""
    return [d for d in dishes
            if d.quality() >= threshold and (not dinners_only or d.meal_class == "Dinner")]


def _candidates(pool: List[Dish], meal_class: str, counts: Dict[str, int], repeat_cap: int) -> List[Dish]:
    same_class = [d for d in pool if d.meal_class == meal_class]
    under_cap = [d for d in same_class if counts.get(d.name, 0) < repeat_cap]
    # relax the cap first, then the meal class; never empty while the pool is not
    return under_cap or same_class or list(pool)


def _weight(dish: Dish, recent: Deque[str], prev_name: Optional[str]) -> float:
    weight = dish.quality() * 100
    if dish.name in recent:
        weight -= RECENT_PENALTY
    if prev_name is not None and dish.name == prev_name:
        weight -= ADJACENT_PENALTY
    return weight


def pick_dish(candidates: List[Dish], rng: Callable[[], float], recent: Deque[str],
              prev_name: Optional[str]) -> Dish:
    """Uniform pick among the best-weighted candidates, steering away from yesterday's dish."""
    # sorted() is stable, so equal weights keep pool order
    ranked = sorted(candidates, key=lambda d: _weight(d, recent, prev_name), reverse=True)
    top = ranked[:TOP_CANDIDATES]
    choice = top[int(rng() * len(top))]
    if prev_name is not None and choice.name == prev_name and len(top) > 1:
        choice = next((d for d in top if d.name != prev_name), choice)
    return choice


def generate_schedule(pool: List[Dish], seed: str = "", repeat_cap: int = DEFAULT_REPEAT_CAP,
                      cooks: Optional[List[Cook]] = None, dinners_only: bool = True) -> ScheduleGrid:
    """Fill a fresh 4x7 grid (without dates).

    Behavior:
      - Days are visited week-major, day-minor; in all-meals mode each day fills
        breakfast, lunch and dinner in that order, each from its own meal class.
      - A dish name is kept under ``repeat_cap`` occurrences while the pool allows it.
      - Names in the last 8 picks of a slot lose 100 weight, yesterday's dish another 50;
        the pick is uniform among the top 6 by weight.
      - Adjacent repeats within a week are avoided when another top candidate exists.
      - Cooks rotate through those available that (week, weekday).
      - Same seed, pool, cap and roster always give the same grid.

    Raises:
        ValidationFailure: the pool is empty.
    """
    if not pool:
        raise ValidationFailure(NO_ELIGIBLE_DISHES)
    rng = create_generator(seed)
    roster = cooks or []
    slots = ["dinner"] if dinners_only else ["breakfast", "lunch", "dinner"]
    grid = ScheduleGrid()
    counts: Dict[str, int] = {}
    # recency is kept per slot, not as one shared window: in all-meals mode each
    # slot remembers its own last 8 picks
    recent: Dict[str, Deque[str]] = {slot: deque(maxlen=RECENT_WINDOW) for slot in slots}

    for w, d, cell in grid.cells():
        for slot in slots:
            prev_name = grid[w][d - 1].dish_name(slot) if d > 0 else None
            candidates = _candidates(pool, SLOT_CLASSES[slot], counts, repeat_cap)
            dish = pick_dish(candidates, rng, recent[slot], prev_name)
            cell.meals[slot] = dish.copy()
            counts[dish.name] = counts.get(dish.name, 0) + 1
            recent[slot].append(dish.name)
        cell.cook = assign_cook(roster, w, d)
    return grid


__all__ = ['eligible_pool', 'generate_schedule', 'pick_dish', 'NO_ELIGIBLE_DISHES']
