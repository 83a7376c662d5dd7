from __future__ import annotations

import json
import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from .config import DEFAULT_LLM_CONFIG, LLMConfig, clamp_recipe_count
from .errors import AttemptFailure, LLMRequestError, NoUsableRecipesError, RecipeGenerationError
from .extraction import extract_json, read_message_content
from .models import GenerationResult, RecipeRequestInput
from .normalizer import normalize_recipe, normalize_string
from .prompts import build_request_body
from .transport import HttpxTransport, Transport

logger = logging.getLogger(__name__)

DEFAULT_SUMMARY = "Recipes generated successfully."


@dataclass(frozen=True)
class AttemptStrategy:
    name: str
    with_schema: bool


# Tried in order; the first attempt that yields a JSON object wins.
ATTEMPT_STRATEGIES: tuple[AttemptStrategy, ...] = (
    AttemptStrategy(name="structured", with_schema=True),
    AttemptStrategy(name="unstructured", with_schema=False),
)


def call_model(
    request: RecipeRequestInput,
    with_schema: bool,
    transport: Transport,
    config: LLMConfig = DEFAULT_LLM_CONFIG,
) -> str:
    """Send one chat-completions request and return the assistant text."""
    headers = {
        "Content-Type": "application/json",
        "Authorization": f"Bearer {request.settings.api_key}",
    }
    response = transport(request.settings.endpoint, headers, build_request_body(request, with_schema))

    if not response.ok:
        raise LLMRequestError(
            f"LLM request failed ({response.status_code}): {response.text[:config.error_body_limit]}"
        )

    try:
        parsed = json.loads(response.text)
    except ValueError as exc:
        raise LLMRequestError("Unexpected API response shape.") from exc
    return read_message_content(parsed)


def _request_payload(
    request: RecipeRequestInput,
    transport: Transport,
    config: LLMConfig,
    strategies: Sequence[AttemptStrategy],
) -> dict[str, Any]:
    failures: list[AttemptFailure] = []
    last_error: RecipeGenerationError | None = None

    for strategy in strategies:
        try:
            text = call_model(request, strategy.with_schema, transport, config)
            return extract_json(text)
        except RecipeGenerationError as exc:
            last_error = exc
        except Exception as exc:
            # network errors raised by the transport itself
            last_error = LLMRequestError(f"LLM request failed: {exc}")
            last_error.__cause__ = exc
        failures.append(AttemptFailure(strategy=strategy.name, reason=str(last_error)))
        logger.warning("LLM %s attempt failed: %s", strategy.name, last_error, exc_info=last_error)

    if last_error is None:
        raise RecipeGenerationError("No generation attempts were made.")
    last_error.attempts = failures
    raise last_error


def generate_recipes_with_llm(
    request: RecipeRequestInput,
    transport: Transport | None = None,
    config: LLMConfig = DEFAULT_LLM_CONFIG,
    strategies: Sequence[AttemptStrategy] = ATTEMPT_STRATEGIES,
) -> GenerationResult:
    """
    Ask the model for recipes and coerce its reply into canonical recipes.

    A structured (schema) request is tried first; any failure of that
    attempt, including a reply without extractable JSON, triggers one
    unstructured retry. A well-formed reply that yields no recipes is
    fatal and raises ``NoUsableRecipesError``.
    """
    transport = transport or HttpxTransport(timeout=config.timeout)
    payload = _request_payload(request, transport, config, strategies)

    raw_recipes = payload.get("recipes")
    recipes = [
        normalize_recipe(raw, index)
        for index, raw in enumerate(raw_recipes if isinstance(raw_recipes, list) else [])
    ]

    if not recipes:
        raise NoUsableRecipesError("Model returned no usable recipes.")

    count = clamp_recipe_count(request.recipe_count)
    logger.info("Model returned %d recipes, keeping %d", len(recipes), min(count, len(recipes)))

    return GenerationResult(
        recipes=recipes[:count],
        assistant_summary=normalize_string(payload.get("assistantSummary"), DEFAULT_SUMMARY),
    )
