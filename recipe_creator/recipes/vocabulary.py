from __future__ import annotations

from typing import Literal

Unit = Literal[
    "g", "kg", "ml", "litres", "tbsp", "tsp", "clove", "whole", "pinch", "slice", "can", "cup"
]
Difficulty = Literal["Easy", "Medium", "Hard"]
DietaryTag = Literal["vegetarian", "vegan", "gluten-free"]
Allergen = Literal["dairy", "eggs", "fish", "gluten", "nuts", "shellfish", "soy"]
Equipment = Literal["hob", "oven", "air-fryer"]
Source = Literal["base", "custom", "shared", "llm"]

UNIT_OPTIONS: tuple[str, ...] = (
    "g",
    "kg",
    "ml",
    "litres",
    "tbsp",
    "tsp",
    "clove",
    "whole",
    "pinch",
    "slice",
    "can",
    "cup",
)
DIFFICULTY_OPTIONS: tuple[str, ...] = ("Easy", "Medium", "Hard")
DIETARY_OPTIONS: tuple[str, ...] = ("vegetarian", "vegan", "gluten-free")
ALLERGEN_OPTIONS: tuple[str, ...] = ("dairy", "eggs", "fish", "gluten", "nuts", "shellfish", "soy")
EQUIPMENT_OPTIONS: tuple[str, ...] = ("hob", "oven", "air-fryer")
SOURCE_OPTIONS: tuple[str, ...] = ("base", "custom", "shared", "llm")

DEFAULT_UNIT = "g"
DEFAULT_DIFFICULTY = "Easy"
DEFAULT_EQUIPMENT: tuple[str, ...] = ("hob",)

PANTRY_SUGGESTIONS: tuple[str, ...] = (
    "onion",
    "garlic",
    "olive oil",
    "chopped tomatoes",
    "rice",
    "pasta",
    "potatoes",
    "eggs",
    "chickpeas",
    "black beans",
    "lentils",
    "cheddar",
    "milk",
    "flour",
    "butter",
    "spinach",
    "carrot",
    "coconut milk",
    "soy sauce",
    "lemon",
)
