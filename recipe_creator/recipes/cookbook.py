"""
Cookbook helpers for user-authored, imported and shared recipes.

These recipes come from the user rather than the model, so they are
validated by the pydantic models and then tidied up rather than rebuilt
field by field.
"""
from __future__ import annotations

import logging
import uuid
from collections.abc import Iterable, Sequence
from typing import Any

from pydantic import ValidationError

from .models import Ingredient, MethodStep, Recipe

logger = logging.getLogger(__name__)

MAX_WORKING_SET = 8


class RecipeImportError(ValueError):
    """Raised when an import payload holds no usable recipes."""


def new_recipe_id(prefix: str) -> str:
    return f"{prefix}-{uuid.uuid4()}"


def placeholder_ingredients() -> list[Ingredient]:
    return [Ingredient(name="water", quantity=500, unit="ml")]


def placeholder_steps() -> list[MethodStep]:
    return [
        MethodStep(text="Prepare ingredients."),
        MethodStep(text="Cook and season to taste."),
    ]


def ensure_unique_recipes(recipes: Iterable[Recipe]) -> list[Recipe]:
    """Merge recipes by id. An id keeps its first position and its last value."""
    by_id: dict[str, Recipe] = {}
    for recipe in recipes:
        by_id[recipe.id] = recipe
    return list(by_id.values())


def is_recipe_like(value: Any) -> bool:
    return (
        isinstance(value, dict)
        and isinstance(value.get("id"), str)
        and isinstance(value.get("title"), str)
        and isinstance(value.get("ingredients"), list)
        and isinstance(value.get("steps"), list)
    )


def normalize_recipe_for_storage(
    recipe: Recipe,
    source: str | None = None,
    id_prefix: str | None = None,
) -> Recipe:
    """
    Return a tidied copy of a user-supplied recipe.

    A fresh id is assigned when ``id_prefix`` is given or the recipe has
    none. Text fields are trimmed with fallbacks, numbers are rounded and
    floored, and empty ingredient or step lists get placeholders.
    """
    if id_prefix or not recipe.id:
        recipe_id = new_recipe_id(id_prefix or "recipe")
    else:
        recipe_id = recipe.id

    update: dict[str, Any] = {
        "id": recipe_id,
        "title": recipe.title.strip() or "Untitled recipe",
        "description": recipe.description.strip() or "No description.",
        "cuisine": recipe.cuisine.strip() or "Fusion",
        "cook_time_minutes": max(5, round(recipe.cook_time_minutes or 30)),
        "servings": max(1, round(recipe.servings or 1)),
        "ingredients": recipe.ingredients or placeholder_ingredients(),
        "steps": recipe.steps or placeholder_steps(),
    }
    if source:
        update["source"] = source

    return recipe.model_copy(update=update, deep=True)


def import_recipes(payload: Any, source: str = "custom", id_prefix: str = "import") -> list[Recipe]:
    """Turn a parsed JSON import (one object or a list) into cookbook recipes."""
    entries = payload if isinstance(payload, list) else [payload]

    imported: list[Recipe] = []
    for entry in entries:
        if not is_recipe_like(entry):
            continue
        try:
            recipe = Recipe.model_validate(entry)
        except ValidationError:
            logger.warning("Skipping invalid imported recipe %r", entry.get("title"), exc_info=True)
            continue
        imported.append(normalize_recipe_for_storage(recipe, source=source, id_prefix=id_prefix))

    if not imported:
        raise RecipeImportError("No valid recipe objects found in the imported JSON.")

    return imported


def merge_refined_recipes(
    replacements: Sequence[Recipe],
    current: Sequence[Recipe],
    replaced_id: str,
    limit: int = MAX_WORKING_SET,
) -> list[Recipe]:
    """Put refinement results first, drop the recipe they replace, and cap the list."""
    kept = [r for r in current if r.id != replaced_id]
    return ensure_unique_recipes([*replacements, *kept])[:limit]
