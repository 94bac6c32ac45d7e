"""PlannerSession: owns the only mutable handle to the current PlanningState.

All changes go through pure transitions; the session swaps in the result,
announces it on the event bus and arranges persistence (debounced for most
edits, immediate for the edits that must not be lost).
"""
import logging
from threading import RLock
from typing import Any, Callable, Dict, List, Optional

from mealrota.domain.Dish import Dish
from mealrota.domain.PlanningState import PlanningState
from mealrota.events.Event_Bus import GLOBAL_EVENT_BUS, STATE_CHANGED, EventBus
from mealrota.infra.Autosave import Autosave
from mealrota.infra.State_Repository import StateRepository, build_repository
from mealrota.logic.planner import transitions as t
from mealrota.logic.scheduling.dates import next_monday
from mealrota.logic.shopping.list_builder import week_grocery

logger = logging.getLogger(__name__)


class PlannerSession:
    def __init__(self, repository: Optional[StateRepository] = None, autosave: Optional[Autosave] = None,
                 bus: EventBus = GLOBAL_EVENT_BUS, state: Optional[PlanningState] = None):
        self.repository = repository or build_repository()
        self.bus = bus
        self.autosave = autosave or Autosave(self.repository, bus=bus)
        self.state = state or PlanningState(start_date=next_monday())
        self._restored = False
        self._lock = RLock()

    # -------------------- Lifecycle --------------------
    def restore(self) -> bool:
        """Load the persisted state once per session (no retry). Returns True if a state was found.

        Afterwards an empty catalog gets the sample dishes and an empty plan is filled.
        """
        with self._lock:
            if self._restored:
                return False
            self._restored = True
            saved = self.repository.load()
            if saved is not None:
                self.state = saved
                logger.info("Restored planning state (%d dishes)", len(saved.dishes))
            seeded = t.ensure_sample_dishes(self.state)
            if seeded.grid.is_empty():
                seeded = t.refill_if_possible(seeded)
            if seeded is not self.state:
                self.apply(seeded, "restore")
            return saved is not None

    def apply(self, new_state: PlanningState, reason: str, immediate: bool = False) -> PlanningState:
        with self._lock:
            self.state = new_state
        self.bus.publish(STATE_CHANGED, {"reason": reason})
        if immediate:
            self.autosave.save_now(new_state)
        else:
            self.autosave.schedule(new_state)
        return new_state

    def _run(self, transition: Callable[..., PlanningState], reason: str, *args,
             immediate: bool = False, **kwargs) -> PlanningState:
        with self._lock:
            new_state = transition(self.state, *args, **kwargs)
        return self.apply(new_state, reason, immediate=immediate)

    def save_now(self) -> bool:
        """Explicit save; bypasses and cancels the debounced one."""
        return self.autosave.save_now(self.state)

    # -------------------- Plan --------------------
    def fill(self) -> PlanningState:
        return self._run(t.fill, "fill")

    def replace_slot(self, week_index: int, day_index: int, dish_id: str, slot: str = "dinner") -> PlanningState:
        return self._run(t.replace_slot, "replace_slot", week_index, day_index, dish_id, slot)

    def rate_slot(self, week_index: int, day_index: int, rating: int, slot: str = "dinner") -> PlanningState:
        return self._run(t.rate_slot, "rate_slot", week_index, day_index, rating, slot)

    def set_recipe_link(self, week_index: int, day_index: int, url: str, slot: str = "dinner") -> PlanningState:
        return self._run(t.set_recipe_link, "recipe_link", week_index, day_index, url, slot, immediate=True)

    def grocery(self, week_index: int, cook: Optional[str] = None) -> List[Dict[str, Any]]:
        return week_grocery(self.state, week_index, cook)

    # -------------------- Catalog --------------------
    def add_dish(self, data: dict) -> PlanningState:
        return self._run(t.add_dish, "add_dish", data, immediate=True)

    def edit_dish(self, dish_id: str, field: str, value: Any) -> PlanningState:
        return self._run(t.edit_dish, "edit_dish", dish_id, field, value, immediate=True)

    def infer_ingredients(self, dish_id: str) -> PlanningState:
        return self._run(t.infer_dish_ingredients, "infer_ingredients", dish_id, immediate=True)

    def remove_dish(self, dish_id: str) -> PlanningState:
        return self._run(t.remove_dish, "remove_dish", dish_id, immediate=True)

    def commit_catalog(self) -> PlanningState:
        return self._run(t.commit_catalog, "commit_catalog", immediate=True)

    def import_dishes(self, dishes: List[Dish]) -> PlanningState:
        return self._run(t.import_dishes, "import", dishes)

    # -------------------- Cooks --------------------
    def add_cook(self, name: str = "") -> PlanningState:
        with self._lock:
            new_state = t.refill_if_possible(t.add_cook(self.state, name))
        return self.apply(new_state, "add_cook", immediate=True)

    def remove_cook(self, code: str) -> PlanningState:
        return self._run(t.remove_cook, "remove_cook", code, immediate=True)

    def rename_cook(self, code: str, name: str) -> PlanningState:
        return self._run(t.rename_cook, "rename_cook", code, name)

    def set_cook_availability(self, code: str, weekday: str, available: bool,
                              week_index: Optional[int] = None) -> PlanningState:
        with self._lock:
            new_state = t.refill_if_possible(
                t.set_cook_availability(self.state, code, weekday, available, week_index))
        return self.apply(new_state, "availability")

    # -------------------- Settings --------------------
    def update_settings(self, **changes) -> PlanningState:
        return self._run(t.update_settings, "settings", **changes)


__all__ = ['PlannerSession']
