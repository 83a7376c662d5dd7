from __future__ import annotations

from typing import Any

import pytest

from recipe_creator.recipes.models import Preferences, Recipe
from recipe_creator.tests.sample_recipes import BASE_RECIPES


@pytest.fixture
def base_recipes() -> list[Recipe]:
    return [Recipe.model_validate(data) for data in BASE_RECIPES]


@pytest.fixture
def open_preferences() -> Preferences:
    return Preferences(
        servings=4,
        max_cook_time=45,
        cuisine="",
        dietary=[],
        allergens_to_avoid=[],
        equipment=[],
    )


@pytest.fixture
def recipe_factory():
    def _make(recipe_id: str, **overrides: Any) -> Recipe:
        data: dict[str, Any] = {
            "id": recipe_id,
            "title": recipe_id.title(),
            "cuisine": "British",
            "cookTimeMinutes": 20,
            "servings": 4,
            "equipment": ["hob"],
            "ingredients": [{"name": "onion", "quantity": 1, "unit": "whole"}],
            "steps": [{"text": "Cook."}],
        }
        data.update(overrides)
        return Recipe.model_validate(data)

    return _make
