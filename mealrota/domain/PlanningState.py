"""PlanningState aggregate: the whole persisted unit (catalog, grid, roster and settings)."""
from typing import List, Optional

from mealrota.domain.Cook import Cook
from mealrota.domain.Dish import Dish
from mealrota.domain.Schedule import ScheduleGrid
from mealrota.utilities.constants import DEFAULT_COOKS, DEFAULT_REPEAT_CAP, DEFAULT_THRESHOLD, MODE_DINNERS


class PlanningState:
    def __init__(self, dishes: Optional[List[Dish]] = None, grid: Optional[ScheduleGrid] = None,
                 cooks: Optional[List[Cook]] = None, start_date: str = "",
                 repeat_cap: int = DEFAULT_REPEAT_CAP, threshold: float = DEFAULT_THRESHOLD,
                 mode: str = MODE_DINNERS, seed: str = ""):
        self.dishes = dishes[:] if dishes else []
        self.grid = grid if grid is not None else ScheduleGrid()
        self.cooks = cooks[:] if cooks else [Cook.from_dict(c) for c in DEFAULT_COOKS]
        self.start_date = start_date
        self.repeat_cap = repeat_cap
        self.threshold = threshold
        self.mode = mode
        self.seed = seed

    def __eq__(self, other) -> bool:
        if not isinstance(other, PlanningState):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __repr__(self) -> str:
        return (f"PlanningState(dishes={len(self.dishes)}, cooks={[c.code for c in self.cooks]}, "
                f"start_date={self.start_date!r}, mode={self.mode!r}, seed={self.seed!r})")

    @property
    def dinners_only(self) -> bool:
        return self.mode == MODE_DINNERS

    def find_dish(self, dish_id: str) -> Optional[Dish]:
        return next((d for d in self.dishes if d.id == dish_id), None)

    def find_cook(self, code: str) -> Optional[Cook]:
        return next((c for c in self.cooks if c.code == code), None)

    def cook_name(self, code: Optional[str]) -> str:
        cook = self.find_cook(code) if code else None
        return cook.display_name() if cook else (code or "")

    def copy(self) -> "PlanningState":
        """Deep copy through the persisted shape, so transitions never share mutable parts."""
        return PlanningState.from_dict(self.to_dict())

    @staticmethod
    def from_dict(data):
        """Build a state from its persisted shape; missing keys fall back to defaults.

        Raises ValueError/TypeError for content that is present but malformed.
        """
        if not isinstance(data, dict):
            raise TypeError("planning state must be a JSON object")
        cooks = [Cook.from_dict(c) for c in data.get("cooks") or []]
        return PlanningState(
            dishes=[Dish.from_dict(d) for d in data.get("dishes") or []],
            grid=ScheduleGrid.from_dict(data.get("weeks")),
            cooks=cooks or None,
            start_date=str(data.get("start_date") or ""),
            repeat_cap=int(data.get("repeat_cap", DEFAULT_REPEAT_CAP)),
            threshold=float(data.get("threshold", DEFAULT_THRESHOLD)),
            mode=str(data.get("mode") or MODE_DINNERS),
            seed=str(data.get("seed") or ""),
        )

    def to_dict(self):
        return {
            "dishes": [d.to_dict() for d in self.dishes],
            "weeks": self.grid.to_dict(),
            "cooks": [c.to_dict() for c in self.cooks],
            "start_date": self.start_date,
            "repeat_cap": self.repeat_cap,
            "threshold": self.threshold,
            "mode": self.mode,
            "seed": self.seed,
        }
