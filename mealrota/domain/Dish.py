"""Dish domain entity: name, quality score, meal class, ingredients, recipe link, rating."""
from typing import List, Optional

from mealrota.utilities.constants import (
    BREAKFAST_KEYWORDS, LUNCH_KEYWORDS, INGREDIENT_HEURISTICS, GENERIC_INGREDIENTS, MEAL_CLASSES
)


class Dish:
    def __init__(self, id: str = "", name: str = "", score: float = 0, meal_class: Optional[str] = None,
                 ingredients: str = "", recipe_url: str = "", rating: Optional[int] = None):
        self.id = id
        self.name = name
        self.score = score
        self.meal_class = meal_class if meal_class in MEAL_CLASSES else self.infer_meal_class(name)
        self.ingredients = ingredients or ""
        self.recipe_url = recipe_url or ""
        self.rating = rating

    def __str__(self) -> str:
        return f"{self.name} ({self.meal_class}) - score {self.score}"

    __repr__ = __str__

    def __eq__(self, other) -> bool:
        if not isinstance(other, Dish):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def quality(self) -> float:
        """Numeric score used for weighting; anything unparsable counts as 0."""
        try:
            return float(self.score)
        except (TypeError, ValueError):
            return 0.0

    def ingredient_items(self) -> List[str]:
        """Ingredients split on commas, trimmed, empties dropped (order kept)."""
        return [part.strip() for part in str(self.ingredients or "").split(",") if part.strip()]

    def copy(self) -> "Dish":
        return Dish.from_dict(self.to_dict())

    @staticmethod
    def infer_meal_class(name: str) -> str:
        n = str(name or "").lower()
        if any(k in n for k in BREAKFAST_KEYWORDS):
            return "Breakfast"
        if any(k in n for k in LUNCH_KEYWORDS):
            return "Lunch"
        return "Dinner"

    @staticmethod
    def infer_ingredients(name: str) -> str:
        """Guess a heart-healthy ingredient list from keywords in the dish name."""
        n = str(name or "").lower()
        for keywords, ingredients in INGREDIENT_HEURISTICS:
            if any(k in n for k in keywords):
                return ingredients
        return GENERIC_INGREDIENTS

    @staticmethod
    def from_dict(data):
        '''Creates a Dish from a dictionary. Ignores unknown keys.'''
        d = dict(data) if isinstance(data, dict) else {}
        rating = d.get("rating")
        return Dish(
            id=str(d.get("id") or ""),
            name=str(d.get("name") or ""),
            score=d.get("score", 0),
            meal_class=d.get("meal_class"),
            ingredients=d.get("ingredients") or "",
            recipe_url=d.get("recipe_url") or "",
            rating=int(rating) if rating is not None else None,
        )

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "score": self.score,
            "meal_class": self.meal_class,
            "ingredients": self.ingredients,
            "recipe_url": self.recipe_url,
            "rating": self.rating,
        }


def next_dish_id(dishes: List[Dish]) -> str:
    """Return the next free ``m<n>`` id for the catalog."""
    highest = -1
    for dish in dishes:
        if dish.id.startswith("m") and dish.id[1:].isdigit():
            highest = max(highest, int(dish.id[1:]))
    return f"m{highest + 1}"


def ensure_ids(dishes: List[Dish]) -> List[Dish]:
    """Give every dish without an id a fresh one; dishes that already have ids keep them."""
    out: List[Dish] = []
    for dish in dishes:
        if not dish.id:
            dish = dish.copy()
            dish.id = next_dish_id(out + [d for d in dishes if d.id])
        out.append(dish)
    return out
