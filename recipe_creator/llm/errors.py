from __future__ import annotations

from dataclasses import dataclass


class RecipeGenerationError(Exception):
    """Base error for a failed model generation; ``str(exc)`` is shown to the user."""

    def __init__(self, message: str, attempts: list[AttemptFailure] | None = None) -> None:
        super().__init__(message)
        self.attempts: list[AttemptFailure] = attempts or []


class LLMRequestError(RecipeGenerationError):
    """Transport failure, non-2xx status or a reply without message content."""


class ResponseExtractionError(RecipeGenerationError, ValueError):
    """The model reply did not contain any parseable JSON object."""


class NoUsableRecipesError(RecipeGenerationError):
    """The reply parsed, but no recipe survived normalization."""


@dataclass(frozen=True)
class AttemptFailure:
    strategy: str
    reason: str
