"""
Import dishes from delimited-text rows (one dish per row, header line required).

Recognised columns:
  name      -> "Meal Name", "name", "Dish", "dish"
  score     -> "Average Score"; else the mean of voter columns (headers that look
               like e-mail addresses or contain "score"); else "Total Score" / 6; else 3
  class     -> "Meal Type" (inferred from the name when missing)
  others    -> "Ingredients" (inferred when missing), "Recipe URL" / "Recipe" / "URL"
"""
import csv
import io
import logging
import re
from typing import Dict, Iterable, List, Optional

from mealrota.domain.Dish import Dish
from mealrota.utilities.constants import IMPORT_DEFAULT_SCORE, IMPORT_VOTER_COUNT, MEAL_CLASSES

logger = logging.getLogger(__name__)

NAME_COLUMNS = ("Meal Name", "name", "Dish", "dish")
URL_COLUMNS = ("Recipe URL", "Recipe", "URL")
NOT_VOTES = {"Dish", "Total Score", "Average Score", "Meal Name"}
EMAIL_HEADER = re.compile(r'^.*@.*\..*$')


def _number(value) -> Optional[float]:
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def _first(row: Dict[str, str], columns: Iterable[str]) -> str:
    for col in columns:
        value = row.get(col)
        if value:
            return str(value).strip()
    return ""


def row_score(row: Dict[str, str]) -> float:
    explicit = _number(row.get("Average Score"))
    if explicit:
        return explicit
    vote_keys = [k for k in row
                 if k and k not in NOT_VOTES and (EMAIL_HEADER.match(k) or 'score' in k.lower())]
    votes = [v for v in (_number(row[k]) for k in vote_keys) if v is not None]
    if votes:
        return sum(votes) / len(votes)
    total = _number(row.get("Total Score"))
    if total:
        return total / IMPORT_VOTER_COUNT
    return IMPORT_DEFAULT_SCORE


def parse_row(row: Dict[str, str]) -> Optional[Dish]:
    """Turn one row into a Dish, or None when the row has no name."""
    name = _first(row, NAME_COLUMNS)
    if not name:
        return None
    meal_class = _first(row, ("Meal Type",))
    return Dish(
        name=name,
        score=row_score(row),
        meal_class=meal_class if meal_class in MEAL_CLASSES else Dish.infer_meal_class(name),
        ingredients=_first(row, ("Ingredients",)) or Dish.infer_ingredients(name),
        recipe_url=_first(row, URL_COLUMNS),
    )


def parse_rows(rows: Iterable[Dict[str, str]]) -> List[Dish]:
    dishes = []
    for row in rows:
        dish = parse_row(row) if isinstance(row, dict) else None
        if dish is not None:
            dishes.append(dish)
    return dishes


def read_csv(text: str) -> List[Dish]:
    """Parse CSV text with a header line; blank lines are skipped."""
    reader = csv.DictReader(io.StringIO(text.lstrip("\ufeff")))
    rows = [r for r in reader if any((v or "").strip() for v in r.values() if isinstance(v, str))]
    dishes = parse_rows(rows)
    logger.info("Parsed %d dishes from %d CSV rows", len(dishes), len(rows))
    return dishes


__all__ = ['parse_row', 'parse_rows', 'read_csv', 'row_score']
