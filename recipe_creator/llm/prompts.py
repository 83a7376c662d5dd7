from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ..recipes.models import Preferences
from ..recipes.vocabulary import (
    ALLERGEN_OPTIONS,
    DIETARY_OPTIONS,
    DIFFICULTY_OPTIONS,
    EQUIPMENT_OPTIONS,
    UNIT_OPTIONS,
)
from .config import MAX_RECIPE_COUNT, MIN_RECIPE_COUNT, clamp_recipe_count, clamp_temperature
from .models import RecipeRequestInput

SYSTEM_PROMPT = (
    "You are an elite UK-focused recipe designer.\n"
    "Always return practical home-cook recipes with exact UK units (g, kg, ml, litres, tbsp, tsp).\n"
    "Oven instructions must include temperature in Celsius and Gas Mark where relevant.\n"
    "Respect dietary and allergen constraints strictly.\n"
    "Use pantry ingredients aggressively and clearly indicate swaps and chef tips.\n"
    "Return only the requested JSON."
)

DEFAULT_GOAL = "Invent high-impact weeknight meals with layered flavor."


def _string_enum(values: tuple[str, ...]) -> dict[str, Any]:
    return {"type": "string", "enum": list(values)}


_INGREDIENT_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {
        "name": {"type": "string"},
        "quantity": {"type": "number"},
        "unit": _string_enum(UNIT_OPTIONS),
        "optional": {"type": "boolean"},
        "notes": {"type": "string"},
    },
    "required": ["name", "quantity", "unit", "optional", "notes"],
    "additionalProperties": False,
}

_STEP_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {
        "text": {"type": "string"},
        "timerMinutes": {"type": "number"},
        "notes": {"type": "string"},
        "temperatureC": {"type": "number"},
        "gasMark": {"type": "string"},
    },
    "required": ["text", "timerMinutes", "notes", "temperatureC", "gasMark"],
    "additionalProperties": False,
}

_RECIPE_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {
        "title": {"type": "string"},
        "description": {"type": "string"},
        "cuisine": {"type": "string"},
        "difficulty": _string_enum(DIFFICULTY_OPTIONS),
        "cookTimeMinutes": {"type": "number"},
        "servings": {"type": "number"},
        "dietaryTags": {"type": "array", "items": _string_enum(DIETARY_OPTIONS)},
        "allergens": {"type": "array", "items": _string_enum(ALLERGEN_OPTIONS)},
        "equipment": {"type": "array", "items": _string_enum(EQUIPMENT_OPTIONS)},
        "ingredients": {"type": "array", "minItems": 1, "items": _INGREDIENT_SCHEMA},
        "steps": {"type": "array", "minItems": 2, "items": _STEP_SCHEMA},
        "swapSuggestions": {
            "type": "array",
            "minItems": 2,
            "maxItems": 8,
            "items": {"type": "string"},
        },
        "tips": {"type": "array", "minItems": 1, "maxItems": 6, "items": {"type": "string"}},
    },
    "required": [
        "title",
        "description",
        "cuisine",
        "difficulty",
        "cookTimeMinutes",
        "servings",
        "dietaryTags",
        "allergens",
        "equipment",
        "ingredients",
        "steps",
        "swapSuggestions",
        "tips",
    ],
    "additionalProperties": False,
}

RECIPE_RESPONSE_SCHEMA: dict[str, Any] = {
    "name": "recipe_response",
    "strict": True,
    "schema": {
        "type": "object",
        "properties": {
            "assistantSummary": {"type": "string"},
            "recipes": {
                "type": "array",
                "minItems": MIN_RECIPE_COUNT,
                "maxItems": MAX_RECIPE_COUNT,
                "items": _RECIPE_SCHEMA,
            },
        },
        "required": ["assistantSummary", "recipes"],
        "additionalProperties": False,
    },
}


@dataclass(frozen=True)
class PromptPair:
    system: str
    user: str
    schema: dict[str, Any]


def format_context(preferences: Preferences, pantry_items: list[str]) -> str:
    equipment_text = ", ".join(preferences.equipment) or "any"
    dietary_text = ", ".join(preferences.dietary) or "none"
    allergen_text = ", ".join(preferences.allergens_to_avoid) or "none"

    return "\n".join([
        f"Pantry items: {', '.join(pantry_items) if pantry_items else 'none listed'}",
        f"Target servings: {preferences.servings}",
        f"Max cook time: {preferences.max_cook_time} minutes",
        f"Cuisine preference: {preferences.cuisine or 'any'}",
        f"Dietary requirements: {dietary_text}",
        f"Allergens to avoid: {allergen_text}",
        f"Equipment available: {equipment_text}",
    ])


def build_user_prompt(request: RecipeRequestInput) -> str:
    lines = [
        f"Create {clamp_recipe_count(request.recipe_count)} highly creative but realistic recipe options.",
        f"Primary request: {request.goal or DEFAULT_GOAL}",
        format_context(request.preferences, request.pantry_items),
        "Quality bar:",
        "- Every recipe should feel distinct in flavor and format.",
        "- Keep ingredient quantities coherent with servings.",
        "- Include missing-ingredient aware swaps.",
        "- Keep methods concise but chef-level useful.",
    ]

    refinement = request.refinement_context
    if refinement is None:
        return "\n".join(lines)

    baseline = refinement.recipe.model_dump_json(by_alias=True, exclude_none=True, indent=2)
    lines.extend([
        "",
        "Refinement task:",
        "Take this recipe as baseline and transform it according to instruction:",
        f"Instruction: {refinement.instruction}",
        f"Baseline recipe JSON:\n{baseline}",
        "You may return one improved recipe or multiple variants.",
    ])
    return "\n".join(lines)


def build_prompts(request: RecipeRequestInput) -> PromptPair:
    return PromptPair(
        system=SYSTEM_PROMPT,
        user=build_user_prompt(request),
        schema=RECIPE_RESPONSE_SCHEMA,
    )


def build_request_body(request: RecipeRequestInput, with_schema: bool) -> dict[str, Any]:
    """Chat-completions body; ``response_format`` is only attached for structured attempts."""
    prompts = build_prompts(request)
    body: dict[str, Any] = {
        "model": request.settings.model,
        "temperature": clamp_temperature(request.settings.creativity),
        "messages": [
            {"role": "system", "content": prompts.system},
            {"role": "user", "content": prompts.user},
        ],
    }
    if with_schema:
        body["response_format"] = {"type": "json_schema", "json_schema": prompts.schema}
    return body
