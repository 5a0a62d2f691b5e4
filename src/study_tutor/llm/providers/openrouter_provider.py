"""OpenRouter chat completions provider."""

from __future__ import annotations

import os
from typing import Any, Dict

import requests

from ..types import GenerationRequest, ProviderError, ProviderReply

OPENROUTER_URL = "https://openrouter.ai/api/v1/chat/completions"


def _error_message(data: Dict[str, Any], fallback: str) -> str:
    error = data.get("error")
    if isinstance(error, dict):
        return str(error.get("message") or fallback)
    if error:
        return str(error)
    return fallback


def _message_content(data: Dict[str, Any]) -> str | None:
    """Returns choices[0].message.content, or None for any other body shape."""
    choices = data.get("choices")
    if not isinstance(choices, list) or not choices or not isinstance(choices[0], dict):
        return None
    message = choices[0].get("message")
    if not isinstance(message, dict):
        return None
    content = message.get("content")
    return content if isinstance(content, str) else None


class OpenRouterProvider:
    name = "openrouter"

    def __init__(self, api_key: str | None = None) -> None:
        self._api_key = api_key or os.getenv("OPENROUTER_API_KEY")

    @property
    def available(self) -> bool:
        return bool(self._api_key)

    def complete(self, model: str, request: GenerationRequest) -> ProviderReply:
        if not self._api_key:
            raise ProviderError("OPENROUTER_API_KEY missing")

        headers = {
            "Authorization": f"Bearer {self._api_key}",
            "Content-Type": "application/json",
        }
        payload = {
            "model": model,
            "messages": [{"role": "user", "content": request.prompt}],
            "max_tokens": request.max_tokens,
            "temperature": request.temperature,
            "top_p": request.top_p,
            "stream": False,
        }

        try:
            res = requests.post(OPENROUTER_URL, headers=headers, json=payload, timeout=request.timeout_seconds)
        except requests.RequestException as exc:
            raise ProviderError(str(exc)) from exc

        try:
            data = res.json()
        except ValueError:
            data = {}
        if not isinstance(data, dict):
            data = {}

        if not 200 <= res.status_code < 300:
            return ProviderReply(
                status_code=res.status_code,
                error_message=_error_message(data, res.reason or "Unknown API error"),
            )

        return ProviderReply(status_code=res.status_code, text=_message_content(data))
