"""LLM provider interface."""

from __future__ import annotations

from typing import Protocol

from ..types import GenerationRequest, ProviderReply


class LLMProvider(Protocol):
    name: str

    @property
    def available(self) -> bool:
        ...

    def complete(self, model: str, request: GenerationRequest) -> ProviderReply:
        """Performs one exchange; raises ProviderError on transport failure."""
        ...
