from __future__ import annotations

import logging
from typing import Any

from fastapi import Body, FastAPI, HTTPException

from .llm.errors import RecipeGenerationError
from .llm.generator import generate_recipes_with_llm
from .llm.models import GenerateRequest, GenerationResult, RecipeRequestInput, RefinementContext, RefineRequest
from .recipes.cookbook import RecipeImportError, import_recipes, merge_refined_recipes
from .recipes.matching import (
    build_shopping_list,
    missing_ingredients,
    normalise_pantry_items,
    pantry_fit_percent,
)
from .recipes.models import (
    Recipe,
    RecipeContextRequest,
    RecipeOption,
    RecipeOptionsRequest,
    RecipeOptionsResponse,
    ScaleRequest,
    ScaleResponse,
    ShoppingListRequest,
)
from .recipes.scaling import format_ingredient, recipe_to_plain_text, scale_ingredients
from .recipes.selection import generate_recipe_options
from .recipes.swaps import build_swap_suggestions
from .recipes.vocabulary import (
    ALLERGEN_OPTIONS,
    DIETARY_OPTIONS,
    DIFFICULTY_OPTIONS,
    EQUIPMENT_OPTIONS,
    PANTRY_SUGGESTIONS,
    UNIT_OPTIONS,
)

logger = logging.getLogger(__name__)

OFFLINE_SUMMARY = "Generated from offline library. Add an API key for dynamic AI recipes."

app = FastAPI(title="Recipe Creator API", version="2.0.0")


def _to_option(recipe: Recipe, pantry_items: list[str], dietary: list[str]) -> RecipeOption:
    return RecipeOption(
        recipe=recipe,
        pantry_fit=pantry_fit_percent(recipe, pantry_items),
        missing_ingredients=[i.name for i in missing_ingredients(recipe, pantry_items)],
        swap_suggestions=build_swap_suggestions(recipe, dietary, pantry_items),
    )


# ── Public endpoints ─────────────────────────────────────────────────────


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/metadata")
def metadata() -> dict:
    return {
        "units": list(UNIT_OPTIONS),
        "difficulties": list(DIFFICULTY_OPTIONS),
        "dietary": list(DIETARY_OPTIONS),
        "allergens": list(ALLERGEN_OPTIONS),
        "equipment": list(EQUIPMENT_OPTIONS),
        "pantrySuggestions": list(PANTRY_SUGGESTIONS),
    }


# ── Offline engine ───────────────────────────────────────────────────────


@app.post("/recipes/options", response_model=RecipeOptionsResponse, response_model_exclude_none=True)
def recipe_options(body: RecipeOptionsRequest) -> RecipeOptionsResponse:
    pantry = normalise_pantry_items(body.pantry_items)
    recipes = generate_recipe_options(body.recipes, pantry, body.preferences)
    return RecipeOptionsResponse(
        options=[_to_option(r, pantry, body.preferences.dietary) for r in recipes],
        total_candidates=len(body.recipes),
    )


@app.post("/recipes/swaps")
def recipe_swaps(body: RecipeContextRequest) -> dict[str, list[str]]:
    pantry = normalise_pantry_items(body.pantry_items)
    return {"swapSuggestions": build_swap_suggestions(body.recipe, body.preferences.dietary, pantry)}


@app.post("/recipes/scale", response_model=ScaleResponse, response_model_exclude_none=True)
def recipe_scale(body: ScaleRequest) -> ScaleResponse:
    scaled = scale_ingredients(body.recipe.ingredients, body.recipe.servings, body.target_servings)
    return ScaleResponse(ingredients=scaled, lines=[format_ingredient(i) for i in scaled])


@app.post("/recipes/shopping-list")
def shopping_list(body: ShoppingListRequest) -> dict[str, list[str]]:
    pantry = normalise_pantry_items(body.pantry_items)
    return {"items": build_shopping_list(body.recipes, pantry)}


@app.post("/recipes/export")
def recipe_export(body: RecipeContextRequest) -> dict[str, str]:
    pantry = normalise_pantry_items(body.pantry_items)
    scaled = scale_ingredients(body.recipe.ingredients, body.recipe.servings, body.preferences.servings)
    text = recipe_to_plain_text(
        body.recipe,
        scaled,
        missing_ingredients(body.recipe, pantry),
        build_swap_suggestions(body.recipe, body.preferences.dietary, pantry),
    )
    return {"text": text}


@app.post("/recipes/import", response_model=list[Recipe], response_model_exclude_none=True)
def recipe_import(payload: Any = Body(...)) -> list[Recipe]:
    try:
        return import_recipes(payload)
    except RecipeImportError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc


# ── Model generation ─────────────────────────────────────────────────────


@app.post("/recipes/generate", response_model=GenerationResult, response_model_exclude_none=True)
def recipe_generate(body: GenerateRequest) -> GenerationResult:
    if not body.settings.api_key.strip():
        pantry = normalise_pantry_items(body.pantry_items)
        recipes = generate_recipe_options(body.recipes, pantry, body.preferences)
        logger.info("No API key supplied, served %d offline recipes", len(recipes))
        return GenerationResult(recipes=recipes, assistant_summary=OFFLINE_SUMMARY)

    try:
        return generate_recipes_with_llm(body)
    except RecipeGenerationError as exc:
        raise HTTPException(status_code=502, detail=str(exc)) from exc


@app.post("/recipes/refine", response_model=GenerationResult, response_model_exclude_none=True)
def recipe_refine(body: RefineRequest) -> GenerationResult:
    if not body.settings.api_key.strip():
        raise HTTPException(status_code=400, detail="Add an API key to run recipe refinements.")

    request = RecipeRequestInput(
        pantry_items=body.pantry_items,
        preferences=body.preferences,
        goal=f"Refine recipe: {body.recipe.title}",
        recipe_count=2,
        settings=body.settings,
        refinement_context=RefinementContext(recipe=body.recipe, instruction=body.instruction),
    )
    try:
        outcome = generate_recipes_with_llm(request)
    except RecipeGenerationError as exc:
        raise HTTPException(status_code=502, detail=str(exc)) from exc

    return GenerationResult(
        recipes=merge_refined_recipes(outcome.recipes, body.current_recipes, body.recipe.id),
        assistant_summary=outcome.assistant_summary,
    )
