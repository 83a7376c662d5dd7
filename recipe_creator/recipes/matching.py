from __future__ import annotations

import re
from collections.abc import Iterable, Sequence

from .models import Ingredient, Recipe

_NON_WORD_RE = re.compile(r"[^a-z0-9\s-]")
_WHITESPACE_RE = re.compile(r"\s+")


def normalise_text(value: str) -> str:
    """Lowercase, replace punctuation with spaces and collapse whitespace."""
    lowered = _NON_WORD_RE.sub(" ", value.lower())
    return _WHITESPACE_RE.sub(" ", lowered).strip()


def contains_token(source: str, token: str) -> bool:
    """True when ``token`` appears in ``source`` as a whole run of words."""
    return f" {normalise_text(token)} " in f" {normalise_text(source)} "


def normalise_pantry_items(pantry_items: Iterable[str]) -> list[str]:
    """Trim pantry entries and drop blanks and duplicates, keeping first-seen order."""
    seen: set[str] = set()
    cleaned: list[str] = []
    for item in pantry_items:
        normalized = normalise_text(item)
        if not normalized or normalized in seen:
            continue
        seen.add(normalized)
        cleaned.append(item.strip())
    return cleaned


def has_ingredient(ingredient_name: str, pantry_items: Sequence[str]) -> bool:
    """
    Decide whether an ingredient is covered by the pantry.

    Matching runs in both directions so that "chopped tomatoes" in the
    pantry covers "tomatoes" in a recipe and vice versa.
    """
    if not pantry_items:
        return False

    normalized_ingredient = normalise_text(ingredient_name)
    for item in pantry_items:
        normalized_pantry = normalise_text(item)
        if contains_token(normalized_pantry, normalized_ingredient) or contains_token(
            normalized_ingredient, normalized_pantry
        ):
            return True
    return False


def missing_ingredients(recipe: Recipe, pantry_items: Sequence[str]) -> list[Ingredient]:
    return [
        ingredient
        for ingredient in recipe.ingredients
        if not has_ingredient(ingredient.name, pantry_items)
    ]


def pantry_fit_percent(recipe: Recipe, pantry_items: Sequence[str]) -> int:
    """Percentage (0-100) of the recipe's ingredients found in the pantry."""
    total = len(recipe.ingredients)
    if total == 0:
        return 0

    missing_count = len(missing_ingredients(recipe, pantry_items))
    fit = (total - missing_count) / total * 100
    return max(0, min(100, int(fit + 0.5)))


def build_shopping_list(recipes: Iterable[Recipe], pantry_items: Sequence[str]) -> list[str]:
    needed: set[str] = set()
    for recipe in recipes:
        for ingredient in missing_ingredients(recipe, pantry_items):
            needed.add(ingredient.name)
    return sorted(needed, key=lambda name: (name.lower(), name))
