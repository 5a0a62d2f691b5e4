"""Sequential provider fallback with transient/fatal classification."""

from __future__ import annotations

import logging
from typing import Any, Dict, Mapping, Optional

from ..config import parse_route
from ..errors import GenerationCancelled
from .providers.base import LLMProvider
from .providers.gemini_provider import GeminiProvider
from .providers.openrouter_provider import OpenRouterProvider
from .registry import HintCell, ProviderRegistry
from .types import (
    Decision,
    Failure,
    FailureKind,
    GenerationOutcome,
    GenerationRequest,
    ProviderError,
    Success,
)

logger = logging.getLogger(__name__)

NO_PROVIDER_MESSAGE = "no provider available"


def classify(status_code: int, text: Optional[str]) -> Decision:
    """Single place where transient vs fatal provider replies are decided."""
    if 200 <= status_code < 300:
        if isinstance(text, str) and text.strip():
            return Decision.ACCEPT
        return Decision.CONTINUE
    if status_code == 429:
        return Decision.CONTINUE
    if 500 <= status_code < 600:
        return Decision.CONTINUE
    return Decision.ABORT


def _is_cancelled(cancel) -> bool:
    return cancel is not None and cancel.is_set()


class GenerationClient:
    def __init__(
        self,
        registry: ProviderRegistry,
        providers: Mapping[str, LLMProvider] | None = None,
    ) -> None:
        self.registry = registry
        self.providers = dict(providers if providers is not None else self._default_providers())

    @classmethod
    def from_settings(cls, config: Dict[str, Any], providers: Mapping[str, LLMProvider] | None = None) -> "GenerationClient":
        llm_cfg = config.get("llm", {})
        hint = HintCell(ttl_seconds=float(llm_cfg.get("hint_ttl_seconds", 300)))
        routes = config.get("providers", {}).get("candidates", [])
        return cls(ProviderRegistry(routes, hint=hint), providers=providers)

    def _default_providers(self) -> Dict[str, LLMProvider]:
        available: Dict[str, LLMProvider] = {}
        for provider_cls in (OpenRouterProvider, GeminiProvider):
            provider = provider_cls()
            available[provider.name] = provider
        return available

    def has_available_provider(self) -> bool:
        for candidate in self.registry.candidates:
            provider_name, _ = parse_route(candidate.route)
            provider = self.providers.get(provider_name)
            if provider is not None and getattr(provider, "available", True):
                return True
        return False

    def generate(self, request: GenerationRequest, cancel=None) -> GenerationOutcome:
        candidates = self.registry.ordered_candidates()
        last_index = len(candidates) - 1

        for index, candidate in enumerate(candidates):
            if _is_cancelled(cancel):
                logger.info("Generation cancelled before %s", candidate.route)
                raise GenerationCancelled("request cancelled by caller")

            provider_name, model = parse_route(candidate.route)
            provider = self.providers.get(provider_name)
            if provider is None or not getattr(provider, "available", True):
                logger.warning("Skipping %s: provider not available", candidate.route)
                continue

            try:
                reply = provider.complete(model, request)
            except ProviderError as exc:
                if _is_cancelled(cancel):
                    raise GenerationCancelled("request cancelled by caller") from exc
                logger.warning("Provider %s transport failure (transient): %s", candidate.route, exc)
                if index == last_index:
                    return Failure(FailureKind.ALL_PROVIDERS_EXHAUSTED, str(exc))
                continue

            if _is_cancelled(cancel):
                logger.info("Generation cancelled; discarding reply from %s", candidate.route)
                raise GenerationCancelled("request cancelled by caller")

            decision = classify(reply.status_code, reply.text)
            if decision is Decision.ACCEPT:
                logger.info("Provider %s succeeded (status %s)", candidate.route, reply.status_code)
                self.registry.remember(candidate.route)
                return Success(text=reply.text, provider_used=candidate.route)

            if decision is Decision.ABORT:
                message = f"API Error ({reply.status_code}): {reply.error_message or 'request rejected'}"
                logger.error("Provider %s fatal failure: %s", candidate.route, message)
                return Failure(FailureKind.FATAL, message)

            if 200 <= reply.status_code < 300:
                logger.warning("Provider %s returned empty content (transient)", candidate.route)
            else:
                logger.warning(
                    "Provider %s transient failure (status %s): %s",
                    candidate.route,
                    reply.status_code,
                    reply.error_message,
                )

        return Failure(FailureKind.ALL_PROVIDERS_EXHAUSTED, NO_PROVIDER_MESSAGE)
