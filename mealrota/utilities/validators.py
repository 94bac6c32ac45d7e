"""
Input validation schemas using Pydantic, and the error raised for rejected edits.
"""
from typing import Any, Optional, Type, TypeVar
from urllib.parse import urlparse

from pydantic import BaseModel, Field, ValidationError, field_validator

from mealrota.utilities.constants import MEAL_CLASSES, WEEKDAYS, MODE_ALL, MODE_DINNERS


class ValidationFailure(ValueError):
    """A user-facing rejection. The state is left untouched when this is raised."""


M = TypeVar("M", bound=BaseModel)


def validate_input(model: Type[M], data: dict) -> M:
    """Validate ``data`` against ``model`` and convert pydantic errors to ValidationFailure."""
    try:
        return model.model_validate(data)
    except ValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(p) for p in err['loc']) or 'value'}: {err['msg']}" for err in e.errors()
        )
        raise ValidationFailure(problems) from e


def is_valid_url(url: str) -> bool:
    """Accept only absolute http(s) URLs."""
    try:
        parsed = urlparse(str(url or "").strip())
    except ValueError:
        return False
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


class DishInput(BaseModel):
    """Schema for a new catalog dish."""
    name: str = Field(..., min_length=1, max_length=200)
    score: float = 7
    meal_class: Optional[str] = None
    ingredients: str = ""
    recipe_url: str = ""

    @field_validator('name', 'ingredients', 'recipe_url')
    @classmethod
    def strip_whitespace(cls, v):
        """Remove leading/trailing whitespace."""
        if isinstance(v, str):
            return v.strip()
        return v

    @field_validator('name')
    @classmethod
    def validate_name(cls, v):
        if not v:
            raise ValueError('Dish name cannot be empty')
        return v

    @field_validator('meal_class')
    @classmethod
    def validate_meal_class(cls, v):
        if v in (None, ""):
            return None
        if v not in MEAL_CLASSES:
            raise ValueError(f'Meal class must be one of {", ".join(MEAL_CLASSES)}')
        return v

    @field_validator('recipe_url')
    @classmethod
    def validate_recipe_url(cls, v):
        if v and not is_valid_url(v):
            raise ValueError('Recipe link must be an http(s) URL')
        return v


class DishUpdate(BaseModel):
    """Schema for a single-field edit of a catalog dish."""
    field: str = Field(..., pattern=r'^(name|score|meal_class|ingredients|recipe_url|rating)$')
    value: Any = None


class CookAvailabilityInput(BaseModel):
    """Schema for toggling one availability flag, optionally for a single week."""
    weekday: str
    available: bool
    week_index: Optional[int] = Field(None, ge=0, le=3)

    @field_validator('weekday')
    @classmethod
    def validate_weekday(cls, v):
        if v not in WEEKDAYS:
            raise ValueError(f'Weekday must be one of {", ".join(WEEKDAYS)}')
        return v


class SlotInput(BaseModel):
    """Address of one scheduled slot in the 4-week grid."""
    week_index: int = Field(..., ge=0, le=3)
    day_index: int = Field(..., ge=0, le=6)
    slot: str = Field("dinner", pattern=r'^(breakfast|lunch|dinner)$')


class RatingInput(SlotInput):
    rating: int = Field(..., ge=1, le=5)


class RecipeLinkInput(SlotInput):
    recipe_url: str = ""

    @field_validator('recipe_url')
    @classmethod
    def validate_recipe_url(cls, v):
        v = (v or "").strip()
        if v and not is_valid_url(v):
            raise ValueError('Recipe link must be an http(s) URL')
        return v


class ReplaceSlotInput(SlotInput):
    dish_id: str = Field(..., min_length=1)


class SettingsInput(BaseModel):
    """Schema for planner settings; every field is optional."""
    start_date: Optional[str] = None
    repeat_cap: Optional[int] = None
    threshold: Optional[float] = None
    mode: Optional[str] = None
    seed: Optional[str] = None

    @field_validator('mode')
    @classmethod
    def validate_mode(cls, v):
        if v is not None and v not in (MODE_DINNERS, MODE_ALL):
            raise ValueError(f'Mode must be "{MODE_DINNERS}" or "{MODE_ALL}"')
        return v


__all__ = [
    'ValidationFailure', 'validate_input', 'is_valid_url', 'DishInput', 'DishUpdate',
    'CookAvailabilityInput', 'SlotInput', 'RatingInput', 'RecipeLinkInput', 'ReplaceSlotInput',
    'SettingsInput',
]
