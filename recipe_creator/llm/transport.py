from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Protocol

import httpx

from .config import DEFAULT_LLM_CONFIG


@dataclass(frozen=True)
class TransportResponse:
    status_code: int
    text: str

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300


class Transport(Protocol):
    """Sends one JSON POST and returns the status code and raw body text."""

    def __call__(self, endpoint: str, headers: dict[str, str], body: dict[str, Any]) -> TransportResponse:
        ...


class HttpxTransport:
    def __init__(self, timeout: float = DEFAULT_LLM_CONFIG.timeout) -> None:
        self.timeout = timeout

    def __call__(self, endpoint: str, headers: dict[str, str], body: dict[str, Any]) -> TransportResponse:
        with httpx.Client(timeout=self.timeout) as client:
            response = client.post(endpoint, headers=headers, json=body)
        return TransportResponse(status_code=response.status_code, text=response.text)
