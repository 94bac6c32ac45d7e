"""Cook domain entity: short code, display name, weekly availability and per-week overrides."""
import string
from typing import Dict, List, Optional

from mealrota.utilities.constants import WEEKDAYS


def full_week(available: bool = True) -> Dict[str, bool]:
    return {d: available for d in WEEKDAYS}


def _mapping(value) -> dict:
    return value if isinstance(value, dict) else {}


def _flags(value) -> Dict[str, bool]:
    return {k: bool(v) for k, v in _mapping(value).items() if k in WEEKDAYS}


class Cook:
    def __init__(self, code: str, name: str = "", availability: Optional[Dict[str, bool]] = None,
                 week_overrides: Optional[Dict[int, Dict[str, bool]]] = None):
        self.code = code
        self.name = name
        base = full_week(True)
        base.update(_flags(availability))
        self.availability = base
        # malformed overrides (not a weekday map) are dropped
        self.week_overrides = {int(w): _flags(flags) for w, flags in _mapping(week_overrides).items()
                               if isinstance(flags, dict)}

    def __str__(self) -> str:
        return f"Cook {self.code} ({self.name or 'unnamed'})"

    __repr__ = __str__

    def is_available(self, week_index: int, weekday: str) -> bool:
        """Override for ``week_index`` wins; weekdays missing from it use the default map."""
        override = self.week_overrides.get(week_index)
        if override is not None and weekday in override:
            return override[weekday]
        return self.availability.get(weekday, False)

    def display_name(self) -> str:
        return self.name or self.code

    @staticmethod
    def from_dict(data):
        d = dict(data) if isinstance(data, dict) else {}
        return Cook(
            code=str(d.get("code") or ""),
            name=str(d.get("name") or ""),
            availability=d.get("availability") or {},
            week_overrides=d.get("week_overrides") or {},
        )

    def to_dict(self):
        # JSON object keys are strings, so week indexes are stored as "0".."3"
        return {
            "code": self.code,
            "name": self.name,
            "availability": dict(self.availability),
            "week_overrides": {str(w): dict(flags) for w, flags in sorted(self.week_overrides.items())},
        }


def next_cook_code(cooks: List[Cook]) -> str:
    """First capital letter not used by any cook yet."""
    used = {c.code for c in cooks}
    for letter in string.ascii_uppercase:
        if letter not in used:
            return letter
    n = 1
    while f"Z{n}" in used:
        n += 1
    return f"Z{n}"
