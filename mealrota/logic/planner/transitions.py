"""Pure transitions over PlanningState.

Every function takes the current state and returns a new one; the input is
never mutated. Rejected edits raise ValidationFailure before anything changes.
"""
import logging
from typing import Any, List, Optional

from mealrota.domain.Cook import Cook, full_week, next_cook_code
from mealrota.domain.Dish import Dish, ensure_ids, next_dish_id
from mealrota.domain.PlanningState import PlanningState
from mealrota.domain.Schedule import DayCell
from mealrota.logic.scheduling.availability import assign_cook
from mealrota.logic.scheduling.dates import parse_start_date, project_dates
from mealrota.logic.scheduling.rotation import eligible_pool, generate_schedule
from mealrota.utilities.config import DINNER_HOUR, DINNER_MINUTES
from mealrota.utilities.constants import (
    MAX_REPEAT_CAP, MEAL_CLASSES, MIN_REPEAT_CAP, SAMPLE_DISHES, WEEKDAYS, MODE_ALL, MODE_DINNERS
)
from mealrota.utilities.validators import DishInput, ValidationFailure, is_valid_url, validate_input

logger = logging.getLogger(__name__)


# -------------------- Helpers --------------------
def _dish_or_fail(state: PlanningState, dish_id: str) -> Dish:
    dish = state.find_dish(dish_id)
    if dish is None:
        raise ValidationFailure(f"Unknown dish: {dish_id}")
    return dish


def _cook_or_fail(state: PlanningState, code: str) -> Cook:
    cook = state.find_cook(code)
    if cook is None:
        raise ValidationFailure(f"Unknown cook: {code}")
    return cook


def _cell_or_fail(state: PlanningState, week_index: int, day_index: int) -> DayCell:
    if not (0 <= week_index < len(state.grid)) or not (0 <= day_index < len(WEEKDAYS)):
        raise ValidationFailure(f"No such day: week {week_index}, day {day_index}")
    return state.grid[week_index][day_index]


def _scheduled_dish_or_fail(state: PlanningState, week_index: int, day_index: int, slot: str) -> Dish:
    dish = _cell_or_fail(state, week_index, day_index).dish(slot)
    if dish is None:
        raise ValidationFailure(f"Nothing scheduled for {slot} on week {week_index}, day {day_index}")
    return dish


def _coerce_field(field: str, value: Any) -> Any:
    if field == "name":
        name = str(value or "").strip()
        if not name:
            raise ValidationFailure("Dish name cannot be empty")
        return name
    if field == "score":
        try:
            return float(value)
        except (TypeError, ValueError):
            raise ValidationFailure(f"Score must be a number, got {value!r}")
    if field == "meal_class":
        if value not in MEAL_CLASSES:
            raise ValidationFailure(f"Meal class must be one of {', '.join(MEAL_CLASSES)}")
        return value
    if field == "ingredients":
        return str(value or "")
    if field == "recipe_url":
        url = str(value or "").strip()
        if url and not is_valid_url(url):
            raise ValidationFailure("Recipe link must be an http(s) URL")
        return url
    if field == "rating":
        if value in (None, ""):
            return None
        try:
            rating = int(value)
        except (TypeError, ValueError):
            raise ValidationFailure(f"Rating must be a number, got {value!r}")
        if not 1 <= rating <= 5:
            raise ValidationFailure("Rating must be between 1 and 5")
        return rating
    raise ValidationFailure(f"Unknown dish field: {field}")


# -------------------- Plan --------------------
def fill(state: PlanningState, hour: int = DINNER_HOUR, minute: int = DINNER_MINUTES) -> PlanningState:
    """Regenerate the whole 4-week grid from the eligible pool and date it."""
    pool = eligible_pool(state.dishes, state.threshold, state.dinners_only)
    grid = generate_schedule(pool, state.seed, state.repeat_cap, state.cooks, state.dinners_only)
    new = state.copy()
    new.grid = project_dates(grid, state.start_date, hour, minute)
    return new


def refill_if_possible(state: PlanningState) -> PlanningState:
    """Like fill, but keeps the current grid when nothing is eligible."""
    try:
        return fill(state)
    except ValidationFailure as e:
        logger.info("Plan not regenerated: %s", e)
        return state


def replace_slot(state: PlanningState, week_index: int, day_index: int, dish_id: str,
                 slot: str = "dinner") -> PlanningState:
    dish = _dish_or_fail(state, dish_id)
    _cell_or_fail(state, week_index, day_index)
    new = state.copy()
    new.grid[week_index][day_index].meals[slot] = dish.copy()
    return new


def rate_slot(state: PlanningState, week_index: int, day_index: int, rating: int,
              slot: str = "dinner") -> PlanningState:
    """Rate a scheduled instance and copy the rating to catalog dishes of the same name."""
    rating = _coerce_field("rating", rating)
    if rating is None:
        raise ValidationFailure("Rating must be between 1 and 5")
    name = _scheduled_dish_or_fail(state, week_index, day_index, slot).name
    new = state.copy()
    new.grid[week_index][day_index].meals[slot].rating = rating
    for dish in new.dishes:
        if dish.name == name:
            dish.rating = rating
    return new


def set_recipe_link(state: PlanningState, week_index: int, day_index: int, url: str,
                    slot: str = "dinner") -> PlanningState:
    """Set the link on a scheduled instance and on catalog dishes of the same name."""
    url = _coerce_field("recipe_url", url)
    name = _scheduled_dish_or_fail(state, week_index, day_index, slot).name
    new = state.copy()
    new.grid[week_index][day_index].meals[slot].recipe_url = url
    for dish in new.dishes:
        if dish.name == name:
            dish.recipe_url = url
    return new


# -------------------- Catalog --------------------
def ensure_sample_dishes(state: PlanningState) -> PlanningState:
    """Seed the catalog with sample dishes when it is empty."""
    if state.dishes:
        return state
    new = state.copy()
    new.dishes = ensure_ids([Dish(name=name, score=score, ingredients=Dish.infer_ingredients(name))
                             for name, score in SAMPLE_DISHES])
    return new


def import_dishes(state: PlanningState, dishes: List[Dish]) -> PlanningState:
    """Replace the catalog with imported dishes."""
    if not dishes:
        raise ValidationFailure("Could not detect any dishes in the imported rows")
    new = state.copy()
    new.dishes = ensure_ids([d.copy() for d in dishes])
    return new


def add_dish(state: PlanningState, data: dict) -> PlanningState:
    payload = validate_input(DishInput, data)
    new = state.copy()
    new.dishes.append(Dish(
        id=next_dish_id(new.dishes),
        name=payload.name,
        score=payload.score,
        meal_class=payload.meal_class or Dish.infer_meal_class(payload.name),
        ingredients=payload.ingredients,
        recipe_url=payload.recipe_url,
    ))
    return new


def edit_dish(state: PlanningState, dish_id: str, field: str, value: Any) -> PlanningState:
    """Change one field of a catalog dish (scheduled copies follow on commit_catalog)."""
    _dish_or_fail(state, dish_id)
    value = _coerce_field(field, value)
    new = state.copy()
    setattr(new.find_dish(dish_id), field, value)
    return new


def infer_dish_ingredients(state: PlanningState, dish_id: str) -> PlanningState:
    _dish_or_fail(state, dish_id)
    new = state.copy()
    dish = new.find_dish(dish_id)
    dish.ingredients = Dish.infer_ingredients(dish.name)
    return new


def remove_dish(state: PlanningState, dish_id: str) -> PlanningState:
    _dish_or_fail(state, dish_id)
    new = state.copy()
    new.dishes = [d for d in new.dishes if d.id != dish_id]
    return new


def _sync_instance(instance: Optional[Dish], by_id: dict, by_name: dict) -> Optional[Dish]:
    if instance is None:
        return None
    if instance.id:
        # id match is authoritative; an id no longer in the catalog is left alone
        updated = by_id.get(instance.id)
    else:
        updated = by_name.get(instance.name)
    if updated is None:
        return instance
    synced = updated.copy()
    if synced.rating is None:
        synced.rating = instance.rating
    return synced


def commit_catalog(state: PlanningState) -> PlanningState:
    """Push catalog edits into already scheduled copies.

    Scheduled copies with an id follow the catalog entry with that id. Copies
    without an id follow the first catalog entry with the same name. A copy
    whose id is gone from the catalog is never remapped by name, so renaming a
    dish to collide with another never changes what was scheduled.
    """
    new = state.copy()
    new.dishes = ensure_ids(new.dishes)
    by_id = {d.id: d for d in new.dishes}
    by_name = {}
    for d in new.dishes:
        by_name.setdefault(d.name, d)
    for _, _, cell in new.grid.cells():
        for slot in list(cell.meals):
            cell.meals[slot] = _sync_instance(cell.meals[slot], by_id, by_name)
    return new


# -------------------- Cooks --------------------
def add_cook(state: PlanningState, name: str = "") -> PlanningState:
    new = state.copy()
    new.cooks.append(Cook(next_cook_code(new.cooks), name=str(name or "").strip(),
                          availability=full_week(True)))
    return new


def remove_cook(state: PlanningState, code: str) -> PlanningState:
    _cook_or_fail(state, code)
    if len(state.cooks) <= 1:
        raise ValidationFailure("At least one cook is required")
    new = state.copy()
    new.cooks = [c for c in new.cooks if c.code != code]
    # scheduled dishes stay; only the cook rotation is redone over the remaining roster
    for w, d, cell in new.grid.cells():
        if cell.cook is not None:
            cell.cook = assign_cook(new.cooks, w, d)
    return new


def rename_cook(state: PlanningState, code: str, name: str) -> PlanningState:
    _cook_or_fail(state, code)
    new = state.copy()
    new.find_cook(code).name = str(name or "").strip()
    return new


def set_cook_availability(state: PlanningState, code: str, weekday: str, available: bool,
                          week_index: Optional[int] = None) -> PlanningState:
    """Set one flag of the default map, or of the override for ``week_index``.

    A new override starts as a copy of the default map.
    """
    _cook_or_fail(state, code)
    if weekday not in WEEKDAYS:
        raise ValidationFailure(f"Unknown weekday: {weekday}")
    if week_index is not None and not 0 <= week_index < len(state.grid):
        raise ValidationFailure(f"No such week: {week_index}")
    new = state.copy()
    cook = new.find_cook(code)
    if week_index is None:
        cook.availability[weekday] = bool(available)
    else:
        override = cook.week_overrides.setdefault(week_index, dict(cook.availability))
        override[weekday] = bool(available)
    return new


# -------------------- Settings --------------------
def update_settings(state: PlanningState, start_date: Optional[str] = None, repeat_cap: Optional[int] = None,
                    threshold: Optional[float] = None, mode: Optional[str] = None,
                    seed: Optional[str] = None) -> PlanningState:
    """Apply the given settings. A new start date re-dates the grid; an invalid one is ignored."""
    new = state.copy()
    if start_date is not None:
        if parse_start_date(start_date) is None:
            logger.warning("Ignoring invalid start date %r", start_date)
        else:
            new.start_date = start_date
            new.grid = project_dates(new.grid, start_date)
    if repeat_cap is not None:
        new.repeat_cap = max(MIN_REPEAT_CAP, min(MAX_REPEAT_CAP, int(repeat_cap)))
    if threshold is not None:
        new.threshold = float(threshold)
    if mode is not None:
        if mode not in (MODE_DINNERS, MODE_ALL):
            raise ValidationFailure(f"Unknown mode: {mode}")
        new.mode = mode
    if seed is not None:
        new.seed = str(seed)
    return new
