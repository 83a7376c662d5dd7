"""
Field-by-field normalization of untrusted model output.

Every function here accepts arbitrary JSON-ish values and never raises:
invalid fields are repaired, defaulted or dropped so that one bad field
cannot abort processing of the rest of the recipe.
"""
from __future__ import annotations

import math
from typing import Any

from ..recipes.cookbook import new_recipe_id, placeholder_ingredients
from ..recipes.models import Ingredient, MethodStep, Recipe
from ..recipes.vocabulary import (
    ALLERGEN_OPTIONS,
    DEFAULT_DIFFICULTY,
    DEFAULT_EQUIPMENT,
    DEFAULT_UNIT,
    DIETARY_OPTIONS,
    DIFFICULTY_OPTIONS,
    EQUIPMENT_OPTIONS,
    UNIT_OPTIONS,
)

MIN_COOK_TIME = 5
DEFAULT_COOK_TIME = 30
DEFAULT_SERVINGS = 4

_ALLOWED_UNITS = frozenset(UNIT_OPTIONS)
_ALLOWED_DIFFICULTIES = frozenset(DIFFICULTY_OPTIONS)
_ALLOWED_DIETARY = frozenset(DIETARY_OPTIONS)
_ALLOWED_ALLERGENS = frozenset(ALLERGEN_OPTIONS)
_ALLOWED_EQUIPMENT = frozenset(EQUIPMENT_OPTIONS)


def normalize_string(value: Any, fallback: str = "") -> str:
    if isinstance(value, str):
        return value.strip() or fallback
    return fallback


def normalize_number(value: Any, fallback: float) -> float:
    # bool is an int subclass but never a meaningful quantity
    if isinstance(value, bool):
        return fallback
    if not isinstance(value, (int, float, str)):
        return fallback
    try:
        number = float(value.strip() if isinstance(value, str) else value)
    except (ValueError, OverflowError):
        return fallback
    return number if math.isfinite(number) else fallback


def _round_int(value: float) -> int:
    return int(math.floor(value + 0.5))


def _filter_enum(value: Any, allowed: frozenset[str]) -> list[str]:
    """Keep allowed string members of a list, in order, without duplicates."""
    if not isinstance(value, list):
        return []
    kept: list[str] = []
    for item in value:
        if isinstance(item, str) and item in allowed and item not in kept:
            kept.append(item)
    return kept


def _string_list(value: Any) -> list[str]:
    if not isinstance(value, list):
        return []
    return [text for text in (normalize_string(item) for item in value) if text]


def _optional_positive(value: Any) -> float | None:
    number = normalize_number(value, 0.0)
    return number if number > 0 else None


def normalize_ingredient(raw: Any) -> Ingredient | None:
    """Return a valid Ingredient, or None when the entry has no usable name."""
    if not isinstance(raw, dict):
        return None

    name = normalize_string(raw.get("name"))
    if not name:
        return None

    unit = raw.get("unit")
    return Ingredient(
        name=name,
        quantity=max(0.0, normalize_number(raw.get("quantity"), 0.0)),
        unit=unit if isinstance(unit, str) and unit in _ALLOWED_UNITS else DEFAULT_UNIT,
        optional=raw.get("optional") is True,
        notes=normalize_string(raw.get("notes")) or None,
    )


def normalize_step(raw: Any) -> MethodStep | None:
    """Return a valid MethodStep, or None when the entry has no instruction text."""
    if not isinstance(raw, dict):
        return None

    text = normalize_string(raw.get("text"))
    if not text:
        return None

    return MethodStep(
        text=text,
        timer_minutes=_optional_positive(raw.get("timerMinutes")),
        notes=normalize_string(raw.get("notes")) or None,
        temperature_c=_optional_positive(raw.get("temperatureC")),
        gas_mark=normalize_string(raw.get("gasMark")) or None,
    )


def _fallback_steps() -> list[MethodStep]:
    return [
        MethodStep(text="Prepare your ingredients and season to taste."),
        MethodStep(text="Cook until done and serve hot."),
    ]


def normalize_recipe(raw: Any, index: int) -> Recipe:
    """
    Map one arbitrary object from the model to a canonical Recipe.

    ``index`` is the zero-based position in the reply and only feeds the
    fallback title. The id is always freshly generated and the source is
    always ``llm``; nothing identifying is taken from the model.
    """
    data: dict[str, Any] = raw if isinstance(raw, dict) else {}

    raw_ingredients = data.get("ingredients")
    ingredients = [
        ingredient
        for ingredient in map(normalize_ingredient, raw_ingredients if isinstance(raw_ingredients, list) else [])
        if ingredient is not None
    ]

    raw_steps = data.get("steps")
    steps = [
        step
        for step in map(normalize_step, raw_steps if isinstance(raw_steps, list) else [])
        if step is not None
    ]

    difficulty = data.get("difficulty")
    cook_time = normalize_number(data.get("cookTimeMinutes"), DEFAULT_COOK_TIME)
    servings = normalize_number(data.get("servings"), DEFAULT_SERVINGS)

    return Recipe(
        id=new_recipe_id("llm"),
        title=normalize_string(data.get("title"), f"AI Recipe {index + 1}"),
        description=normalize_string(data.get("description"), "AI-generated recipe."),
        cuisine=normalize_string(data.get("cuisine"), "Fusion"),
        difficulty=difficulty
        if isinstance(difficulty, str) and difficulty in _ALLOWED_DIFFICULTIES
        else DEFAULT_DIFFICULTY,
        cook_time_minutes=max(MIN_COOK_TIME, _round_int(cook_time)),
        servings=max(1, _round_int(servings)),
        dietary_tags=_filter_enum(data.get("dietaryTags"), _ALLOWED_DIETARY),
        allergens=_filter_enum(data.get("allergens"), _ALLOWED_ALLERGENS),
        equipment=_filter_enum(data.get("equipment"), _ALLOWED_EQUIPMENT) or list(DEFAULT_EQUIPMENT),
        ingredients=ingredients or placeholder_ingredients(),
        steps=steps or _fallback_steps(),
        swap_suggestions=_string_list(data.get("swapSuggestions")),
        tips=_string_list(data.get("tips")),
        source="llm",
    )
