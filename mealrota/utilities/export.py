"""
Export of the plan: CSV tables (week plan, grocery list) and an iCalendar document.
"""
import re
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional

from mealrota.domain.Dish import Dish
from mealrota.domain.PlanningState import PlanningState

_NEEDS_QUOTES = re.compile(r'[",\n]')


def _csv_value(value: Any) -> str:
    s = "" if value is None else str(value)
    if _NEEDS_QUOTES.search(s):
        return '"' + s.replace('"', '""') + '"'
    return s


def to_csv(rows: List[Dict[str, Any]]) -> str:
    """Uniform records to CSV (header from the first record, CRLF line endings)."""
    if not rows:
        return ""
    headers = list(rows[0].keys())
    lines = [",".join(_csv_value(h) for h in headers)]
    for row in rows:
        lines.append(",".join(_csv_value(row.get(h)) for h in headers))
    return "\r\n".join(lines)


def _ics_stamp(dt: Optional[datetime]) -> str:
    if not isinstance(dt, datetime):
        return ""
    return dt.astimezone(timezone.utc).strftime("%Y%m%dT%H%M00Z")


def to_ics(events: Iterable[Dict[str, Any]], now: Optional[datetime] = None) -> str:
    """Build a VCALENDAR document from {title, start, end, description, link} events."""
    stamp = _ics_stamp(now or datetime.now(timezone.utc))
    lines = ["BEGIN:VCALENDAR", "VERSION:2.0", "PRODID:-//Family Meal Rotation//EN"]
    for i, ev in enumerate(events):
        lines.append("BEGIN:VEVENT")
        lines.append(f"UID:meal-{i}@mealrota")
        lines.append(f"DTSTAMP:{stamp}")
        lines.append(f"DTSTART:{_ics_stamp(ev.get('start'))}")
        lines.append(f"DTEND:{_ics_stamp(ev.get('end'))}")
        lines.append(f"SUMMARY:{ev.get('title', '')}")
        if ev.get("description"):
            lines.append("DESCRIPTION:" + str(ev["description"]).replace("\n", "\\n").replace(",", " "))
        if ev.get("link"):
            lines.append(f"URL:{ev['link']}")
        lines.append("END:VEVENT")
    lines.append("END:VCALENDAR")
    return "\r\n".join(lines)


def event_description(dish: Dish) -> str:
    text = f"Family dinner: {dish.ingredients or ''}"
    if dish.recipe_url:
        text += f"\nRecipe: {dish.recipe_url}"
    return text


def calendar_events(state: PlanningState, week_indexes: Optional[Iterable[int]] = None) -> List[Dict[str, Any]]:
    """One event per scheduled dinner in the selected weeks (all weeks by default)."""
    selected = list(week_indexes) if week_indexes else list(range(len(state.grid)))
    events = []
    for w in selected:
        for cell in state.grid[w]:
            dinner = cell.dish("dinner")
            if dinner is None:
                continue
            events.append({
                "title": f"{dinner.name} (Cook {state.cook_name(cell.cook or 'A')})",
                "start": cell.date,
                "end": cell.date,
                "description": event_description(dinner),
                "link": dinner.recipe_url,
            })
    return events


def week_plan_rows(state: PlanningState, week_index: int) -> List[Dict[str, Any]]:
    rows = []
    for cell in state.grid[week_index]:
        dinner = cell.dish("dinner")
        rows.append({
            "Day": cell.label,
            "Breakfast": cell.dish_name("breakfast") or "",
            "Lunch": cell.dish_name("lunch") or "",
            "Dinner": dinner.name if dinner else "",
            "Cook": state.cook_name(cell.cook),
            "Recipe": dinner.recipe_url if dinner else "",
        })
    return rows


def grocery_rows(entries: Iterable[Dict[str, Any]]) -> List[Dict[str, Any]]:
    return [{"Category": e["category"], "Item": e["item"], "Count": e["count"]} for e in entries]


__all__ = ['to_csv', 'to_ics', 'calendar_events', 'week_plan_rows', 'grocery_rows', 'event_description']
