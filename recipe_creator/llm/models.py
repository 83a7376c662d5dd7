from __future__ import annotations

from typing import Annotated

from pydantic import Field, StringConstraints

from ..recipes.models import CamelModel, Preferences, Recipe
from .config import DEFAULT_LLM_CONFIG

Instruction = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]


class AiSettings(CamelModel):
    api_key: str = Field(default_factory=lambda: DEFAULT_LLM_CONFIG.api_key)
    model: str = Field(default_factory=lambda: DEFAULT_LLM_CONFIG.model)
    endpoint: str = Field(default_factory=lambda: DEFAULT_LLM_CONFIG.endpoint)
    creativity: float = Field(default_factory=lambda: DEFAULT_LLM_CONFIG.creativity)


class RefinementContext(CamelModel):
    recipe: Recipe
    instruction: Instruction


class RecipeRequestInput(CamelModel):
    pantry_items: list[str] = Field(default_factory=list)
    preferences: Preferences = Field(default_factory=Preferences)
    goal: str = ""
    recipe_count: int = 4
    settings: AiSettings = Field(default_factory=AiSettings)
    refinement_context: RefinementContext | None = None


class GenerationResult(CamelModel):
    recipes: list[Recipe]
    assistant_summary: str


# ── API payloads ─────────────────────────────────────────────────────────


class GenerateRequest(RecipeRequestInput):
    recipes: list[Recipe] = Field(
        default_factory=list,
        description="Offline corpus used when no API key is configured",
    )


class RefineRequest(CamelModel):
    recipe: Recipe
    instruction: Instruction
    current_recipes: list[Recipe] = Field(default_factory=list)
    pantry_items: list[str] = Field(default_factory=list)
    preferences: Preferences = Field(default_factory=Preferences)
    settings: AiSettings = Field(default_factory=AiSettings)
