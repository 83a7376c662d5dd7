from __future__ import annotations

import json
import re
from typing import Any

from .errors import LLMRequestError, ResponseExtractionError

_CODE_FENCE_RE = re.compile(r"```(?:json)?\s*([\s\S]*?)\s*```", re.IGNORECASE)


def _loads_object(text: str) -> dict[str, Any] | None:
    try:
        parsed = json.loads(text)
    except (ValueError, RecursionError):
        return None
    return parsed if isinstance(parsed, dict) else None


def extract_json(text: str) -> dict[str, Any]:
    """
    Recover a JSON object from a raw model reply.

    Tries, in order: the whole text, the first fenced code block, and the
    span from the first ``{`` to the last ``}``. Raises
    ``ResponseExtractionError`` when none of them parses to an object.
    """
    parsed = _loads_object(text)
    if parsed is not None:
        return parsed

    fence = _CODE_FENCE_RE.search(text)
    if fence and fence.group(1):
        parsed = _loads_object(fence.group(1))
        if parsed is not None:
            return parsed

    start = text.find("{")
    end = text.rfind("}")
    if start >= 0 and end > start:
        parsed = _loads_object(text[start:end + 1])
        if parsed is not None:
            return parsed
        raise ResponseExtractionError("Model response contained malformed JSON.")

    raise ResponseExtractionError("Model response did not include JSON.")


def read_message_content(response_json: Any) -> str:
    """Pull the assistant text out of a chat-completions style response."""
    if not isinstance(response_json, dict):
        raise LLMRequestError("Unexpected API response shape.")

    output_text = response_json.get("output_text")
    if isinstance(output_text, str) and output_text.strip():
        return output_text

    choices = response_json.get("choices")
    message: Any = None
    if isinstance(choices, list) and choices and isinstance(choices[0], dict):
        message = choices[0].get("message")
    content = message.get("content") if isinstance(message, dict) else None

    if isinstance(content, str) and content.strip():
        return content

    if isinstance(content, list):
        chunks = [
            entry["text"].strip()
            for entry in content
            if isinstance(entry, dict) and isinstance(entry.get("text"), str) and entry["text"].strip()
        ]
        if chunks:
            return "\n".join(chunks)

    raise LLMRequestError("No model message content found.")
