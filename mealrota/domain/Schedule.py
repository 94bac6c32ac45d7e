"""Schedule domain entities: a 4-week x 7-day grid of day cells (meals per slot, cook, date)."""
from datetime import datetime
from typing import Dict, Iterator, List, Optional, Tuple

from mealrota.domain.Dish import Dish
from mealrota.utilities.constants import DAY_LABELS, WEEKDAYS, WEEKS_IN_ROTATION


class DayCell:
    def __init__(self, label: str, weekday: str, meals: Optional[Dict[str, Dish]] = None,
                 cook: Optional[str] = None, date: Optional[datetime] = None):
        self.label = label
        self.weekday = weekday
        self.meals = dict(meals) if meals else {}
        self.cook = cook
        self.date = date

    def __repr__(self) -> str:
        dinner = self.meals.get("dinner")
        return f"{self.label}: {dinner.name if dinner else '-'} (cook {self.cook or '-'})"

    def dish(self, slot: str = "dinner") -> Optional[Dish]:
        return self.meals.get(slot)

    def dish_name(self, slot: str = "dinner") -> Optional[str]:
        d = self.meals.get(slot)
        return d.name if d else None

    @staticmethod
    def from_dict(data):
        d = dict(data) if isinstance(data, dict) else {}
        raw_date = d.get("date")
        meals = d.get("meals") if isinstance(d.get("meals"), dict) else {}
        return DayCell(
            label=str(d.get("label") or ""),
            weekday=str(d.get("weekday") or ""),
            meals={slot: Dish.from_dict(m) for slot, m in meals.items() if isinstance(m, dict) and m},
            cook=d.get("cook"),
            date=datetime.fromisoformat(raw_date) if raw_date else None,
        )

    def to_dict(self):
        return {
            "label": self.label,
            "weekday": self.weekday,
            "meals": {slot: dish.to_dict() for slot, dish in self.meals.items()},
            "cook": self.cook,
            "date": self.date.isoformat() if self.date else None,
        }


class ScheduleGrid:
    def __init__(self, weeks: Optional[List[List[DayCell]]] = None):
        self.weeks = weeks if weeks is not None else ScheduleGrid.empty_weeks()

    @staticmethod
    def empty_weeks() -> List[List[DayCell]]:
        return [[DayCell(label, WEEKDAYS[i]) for i, label in enumerate(DAY_LABELS)]
                for _ in range(WEEKS_IN_ROTATION)]

    def __getitem__(self, week_index: int) -> List[DayCell]:
        return self.weeks[week_index]

    def __len__(self) -> int:
        return len(self.weeks)

    def cells(self) -> Iterator[Tuple[int, int, DayCell]]:
        """Yield (week_index, day_index, cell) in week-major, day-minor order."""
        for w, week in enumerate(self.weeks):
            for d, cell in enumerate(week):
                yield w, d, cell

    def is_empty(self) -> bool:
        return not any(cell.meals for _, _, cell in self.cells())

    def copy(self) -> "ScheduleGrid":
        return ScheduleGrid.from_dict(self.to_dict())

    @staticmethod
    def from_dict(data):
        if not isinstance(data, list) or len(data) != WEEKS_IN_ROTATION:
            return ScheduleGrid()
        weeks = []
        for week in data:
            if not isinstance(week, list) or len(week) != len(DAY_LABELS):
                return ScheduleGrid()
            weeks.append([DayCell.from_dict(cell) for cell in week])
        return ScheduleGrid(weeks)

    def to_dict(self):
        return [[cell.to_dict() for cell in week] for week in self.weeks]
