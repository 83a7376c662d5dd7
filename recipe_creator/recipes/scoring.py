from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from .matching import missing_ingredients, normalise_text
from .models import Preferences, Recipe

# Score contributions: (bonus when satisfied, penalty when not)
CUISINE_WEIGHTS = (8.0, -4.0)
DIETARY_WEIGHTS = (10.0, -50.0)
EQUIPMENT_WEIGHTS = (8.0, -30.0)
TIME_BONUS = 12.0
TIME_PENALTY_FLOOR = -12.0


@dataclass(frozen=True)
class ScoredCandidate:
    recipe: Recipe
    score: float
    strict_match: bool


def dietary_satisfied(recipe: Recipe, requested: Sequence[str]) -> bool:
    """A vegan tag also satisfies a vegetarian request; every other tag must be present."""
    tags = set(recipe.dietary_tags)
    for tag in requested:
        if tag == "vegetarian":
            if not tags & {"vegetarian", "vegan"}:
                return False
        elif tag not in tags:
            return False
    return True


def equipment_satisfied(recipe: Recipe, available: Sequence[str]) -> bool:
    if not available:
        return True
    return all(item in available for item in recipe.equipment)


def cuisine_satisfied(recipe: Recipe, cuisine: str) -> bool:
    if not cuisine.strip():
        return True
    return normalise_text(cuisine) in normalise_text(recipe.cuisine)


def time_satisfied(recipe: Recipe, max_cook_time: int) -> bool:
    return recipe.cook_time_minutes <= max_cook_time


def allergen_safe(recipe: Recipe, blocked: Sequence[str]) -> bool:
    """Hard filter: False when the recipe contains any avoided allergen."""
    if not blocked:
        return True
    return not any(allergen in blocked for allergen in recipe.allergens)


def pantry_coverage(recipe: Recipe, pantry_items: Sequence[str]) -> float:
    total = len(recipe.ingredients)
    if total == 0:
        return 0.0
    return (total - len(missing_ingredients(recipe, pantry_items))) / total


def score_recipe(
    recipe: Recipe,
    pantry_items: Sequence[str],
    preferences: Preferences,
) -> ScoredCandidate:
    """Compute the fitness score of one recipe against pantry and preferences."""
    time_match = time_satisfied(recipe, preferences.max_cook_time)
    cuisine_match = cuisine_satisfied(recipe, preferences.cuisine)
    dietary_match = dietary_satisfied(recipe, preferences.dietary)
    equipment_match = equipment_satisfied(recipe, preferences.equipment)

    score = pantry_coverage(recipe, pantry_items) * 100
    if time_match:
        score += TIME_BONUS
    else:
        overrun = (preferences.max_cook_time - recipe.cook_time_minutes) / 5
        score += max(TIME_PENALTY_FLOOR, overrun)
    score += CUISINE_WEIGHTS[0] if cuisine_match else CUISINE_WEIGHTS[1]
    score += DIETARY_WEIGHTS[0] if dietary_match else DIETARY_WEIGHTS[1]
    score += EQUIPMENT_WEIGHTS[0] if equipment_match else EQUIPMENT_WEIGHTS[1]

    return ScoredCandidate(
        recipe=recipe,
        score=score,
        strict_match=time_match and cuisine_match and dietary_match and equipment_match,
    )
