from __future__ import annotations

import math
import sys
from collections.abc import Sequence

from .models import Ingredient, Recipe


def _round_half_up(value: float, per_unit: int) -> float:
    return math.floor(value * per_unit + 0.5) / per_unit


def round_quantity(value: float) -> float:
    """Round to a kitchen-friendly precision: whole units, halves or tenths."""
    if math.isnan(value):
        return 0.0
    if math.isinf(value):
        # scaling a huge quantity can overflow; clamp to the largest float
        return math.copysign(sys.float_info.max, value)
    if value >= 50:
        return _round_half_up(value, 1)
    if value >= 10:
        return _round_half_up(value, 2)
    return _round_half_up(value, 10)


def scale_ingredients(
    ingredients: Sequence[Ingredient],
    current_servings: int,
    target_servings: int,
) -> list[Ingredient]:
    if current_servings <= 0 or target_servings <= 0:
        return [ingredient.model_copy() for ingredient in ingredients]

    factor = target_servings / current_servings
    return [
        ingredient.model_copy(update={"quantity": round_quantity(ingredient.quantity * factor)})
        for ingredient in ingredients
    ]


def _format_quantity(quantity: float) -> str:
    if float(quantity).is_integer():
        return str(int(quantity))
    text = f"{quantity:.1f}"
    return text[:-2] if text.endswith(".0") else text


def format_ingredient(ingredient: Ingredient) -> str:
    optional_text = " (optional)" if ingredient.optional else ""
    note_text = f", {ingredient.notes}" if ingredient.notes else ""
    return f"{_format_quantity(ingredient.quantity)} {ingredient.unit} {ingredient.name}{optional_text}{note_text}"


def recipe_to_plain_text(
    recipe: Recipe,
    scaled_ingredients: Sequence[Ingredient],
    missing: Sequence[Ingredient],
    swaps: Sequence[str],
) -> str:
    """Render a recipe as printable plain text."""
    lines = [
        recipe.title,
        recipe.description,
        f"Cuisine: {recipe.cuisine}",
        f"Difficulty: {recipe.difficulty}",
        f"Cook time: {recipe.cook_time_minutes} minutes",
        "",
        "Ingredients",
        *(f"- {format_ingredient(ingredient)}" for ingredient in scaled_ingredients),
        "",
        "Method",
        *(f"{index}. {step.text}" for index, step in enumerate(recipe.steps, start=1)),
    ]

    if missing:
        lines.extend(["", "What you're missing"])
        lines.extend(f"- {ingredient.name}" for ingredient in missing)

    if swaps:
        lines.extend(["", "Swap suggestions"])
        lines.extend(f"- {swap}" for swap in swaps)

    return "\n".join(lines)
