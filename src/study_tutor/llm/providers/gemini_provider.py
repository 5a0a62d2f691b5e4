"""Google Gemini REST provider."""

from __future__ import annotations

import os
from typing import Any, Dict

import requests

from ..types import GenerationRequest, ProviderError, ProviderReply


def _candidate_text(data: Dict[str, Any]) -> str | None:
    candidates = data.get("candidates")
    if not isinstance(candidates, list) or not candidates or not isinstance(candidates[0], dict):
        return None
    content = candidates[0].get("content")
    if not isinstance(content, dict) or not isinstance(content.get("parts"), list):
        return None
    texts = [part.get("text") for part in content["parts"] if isinstance(part, dict)]
    texts = [text for text in texts if isinstance(text, str)]
    return "".join(texts) if texts else None


class GeminiProvider:
    name = "gemini"

    def __init__(self, api_key: str | None = None) -> None:
        self._api_key = api_key or os.getenv("GEMINI_API_KEY") or os.getenv("GOOGLE_API_KEY")

    @property
    def available(self) -> bool:
        return bool(self._api_key)

    def complete(self, model: str, request: GenerationRequest) -> ProviderReply:
        if not self._api_key:
            raise ProviderError("GEMINI_API_KEY/GOOGLE_API_KEY missing")

        url = f"https://generativelanguage.googleapis.com/v1beta/models/{model}:generateContent"
        payload = {
            "contents": [{"parts": [{"text": request.prompt}]}],
            "generationConfig": {
                "temperature": request.temperature,
                "topP": request.top_p,
                "maxOutputTokens": request.max_tokens,
            },
        }

        try:
            res = requests.post(
                url,
                params={"key": self._api_key},
                json=payload,
                timeout=request.timeout_seconds,
            )
        except requests.RequestException as exc:
            raise ProviderError(str(exc)) from exc

        try:
            data = res.json()
        except ValueError:
            data = {}
        if not isinstance(data, dict):
            data = {}

        if not 200 <= res.status_code < 300:
            error = data.get("error") if isinstance(data.get("error"), dict) else {}
            return ProviderReply(
                status_code=res.status_code,
                error_message=str(error.get("message") or res.reason or "Unknown API error"),
            )

        return ProviderReply(status_code=res.status_code, text=_candidate_text(data))
