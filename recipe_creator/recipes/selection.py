from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

from .models import Preferences, Recipe
from .scoring import allergen_safe, score_recipe

logger = logging.getLogger(__name__)

MIN_OPTIONS = 3
MAX_OPTIONS = 6


def _take_unique(recipes: Iterable[Recipe], limit: int, selected: list[Recipe] | None = None) -> list[Recipe]:
    chosen = list(selected or [])
    seen = {r.id for r in chosen}
    for recipe in recipes:
        if len(chosen) >= limit:
            break
        if recipe.id in seen:
            continue
        seen.add(recipe.id)
        chosen.append(recipe)
    return chosen


def generate_recipe_options(
    recipes: Sequence[Recipe],
    pantry_items: Sequence[str],
    preferences: Preferences,
) -> list[Recipe]:
    """
    Select between three and six recipes for the given pantry and preferences.

    Steps:
    - Drop recipes containing an avoided allergen.
    - Score the rest and take up to six strict matches, best first.
    - Backfill from the full ranking when fewer than three strict matches exist.
    - When the pool is still too small, return the first allergen-safe
      recipes in their original order.

    Returned recipes are deep copies; callers may mutate them freely.
    """
    safe = [r for r in recipes if allergen_safe(r, preferences.allergens_to_avoid)]

    # sorted() is stable, so equal scores keep corpus order
    scored = sorted(
        (score_recipe(r, pantry_items, preferences) for r in safe),
        key=lambda candidate: candidate.score,
        reverse=True,
    )

    selected = _take_unique((c.recipe for c in scored if c.strict_match), MAX_OPTIONS)
    logger.debug("%d of %d allergen-safe recipes are strict matches", len(selected), len(safe))

    if len(selected) < MIN_OPTIONS:
        selected = _take_unique((c.recipe for c in scored), MAX_OPTIONS, selected)

    if len(selected) < MIN_OPTIONS:
        logger.debug("Candidate pool too small, falling back to corpus order")
        selected = _take_unique(safe, MIN_OPTIONS)

    return [r.model_copy(deep=True) for r in selected]
