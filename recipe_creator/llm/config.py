from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")

MAX_TEMPERATURE = 1.2
MIN_RECIPE_COUNT = 1
MAX_RECIPE_COUNT = 6


@dataclass(frozen=True)
class LLMConfig:
    api_key: str = os.getenv("OPENAI_API_KEY", "")
    model: str = os.getenv("RECIPE_LLM_MODEL", "gpt-4.1-mini")
    endpoint: str = os.getenv("RECIPE_LLM_ENDPOINT", "https://api.openai.com/v1/chat/completions")
    creativity: float = 0.8
    timeout: float = 30.0
    error_body_limit: int = 350


DEFAULT_LLM_CONFIG = LLMConfig()


def clamp_temperature(creativity: float) -> float:
    return max(0.0, min(MAX_TEMPERATURE, creativity))


def clamp_recipe_count(count: int) -> int:
    return max(MIN_RECIPE_COUNT, min(MAX_RECIPE_COUNT, count))
