from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from .vocabulary import Allergen, DietaryTag, Difficulty, Equipment, Source, Unit


class CamelModel(BaseModel):
    """Base model that speaks camelCase on the wire and snake_case in Python."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Ingredient(CamelModel):
    name: str
    quantity: float = Field(default=0.0, ge=0.0, allow_inf_nan=False)
    unit: Unit = "g"
    optional: bool = False
    notes: str | None = None


class MethodStep(CamelModel):
    text: str = Field(..., min_length=1)
    timer_minutes: float | None = Field(default=None, gt=0)
    notes: str | None = None
    temperature_c: float | None = Field(default=None, gt=0)
    gas_mark: str | None = None


class Recipe(CamelModel):
    id: str
    title: str
    description: str = ""
    cuisine: str = ""
    difficulty: Difficulty = "Easy"
    cook_time_minutes: int = Field(default=30, ge=1)
    servings: int = Field(default=4, ge=1)
    dietary_tags: list[DietaryTag] = Field(default_factory=list)
    allergens: list[Allergen] = Field(default_factory=list)
    equipment: list[Equipment] = Field(default_factory=list)
    ingredients: list[Ingredient] = Field(default_factory=list)
    steps: list[MethodStep] = Field(default_factory=list)
    swap_suggestions: list[str] = Field(default_factory=list)
    tips: list[str] = Field(default_factory=list)
    source: Source = "base"


class Preferences(CamelModel):
    servings: int = Field(default=4, ge=1)
    max_cook_time: int = Field(default=45, ge=1)
    cuisine: str = ""
    dietary: list[DietaryTag] = Field(default_factory=list)
    allergens_to_avoid: list[Allergen] = Field(default_factory=list)
    equipment: list[Equipment] = Field(default_factory=lambda: ["hob", "oven"])


# ── API payloads ─────────────────────────────────────────────────────────


class RecipeOptionsRequest(CamelModel):
    recipes: list[Recipe] = Field(..., description="Candidate corpus: base, custom and shared recipes")
    pantry_items: list[str] = Field(default_factory=list)
    preferences: Preferences = Field(default_factory=Preferences)


class RecipeOption(CamelModel):
    recipe: Recipe
    pantry_fit: int = Field(..., ge=0, le=100)
    missing_ingredients: list[str] = Field(default_factory=list)
    swap_suggestions: list[str] = Field(default_factory=list)


class RecipeOptionsResponse(CamelModel):
    options: list[RecipeOption]
    total_candidates: int


class RecipeContextRequest(CamelModel):
    recipe: Recipe
    pantry_items: list[str] = Field(default_factory=list)
    preferences: Preferences = Field(default_factory=Preferences)


class ScaleRequest(CamelModel):
    recipe: Recipe
    target_servings: int = Field(..., ge=1)


class ScaleResponse(CamelModel):
    ingredients: list[Ingredient]
    lines: list[str]


class ShoppingListRequest(CamelModel):
    recipes: list[Recipe]
    pantry_items: list[str] = Field(default_factory=list)
