"""Shared LLM data structures."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union


@dataclass(frozen=True)
class GenerationRequest:
    prompt: str
    max_tokens: int
    temperature: float = 0.7
    top_p: float = 0.9
    timeout_seconds: int = 30

    def __post_init__(self) -> None:
        if self.max_tokens <= 0:
            raise ValueError(f"max_tokens must be positive, got {self.max_tokens}")


@dataclass(frozen=True)
class ProviderCandidate:
    route: str
    rank: int


@dataclass(frozen=True)
class ProviderHint:
    provider_id: Optional[str] = None
    set_at: float = 0.0


@dataclass
class ProviderReply:
    """One HTTP exchange with a provider, before classification."""

    status_code: int
    text: Optional[str] = None
    error_message: str = ""


class FailureKind(str, Enum):
    ALL_PROVIDERS_EXHAUSTED = "all_providers_exhausted"
    FATAL = "fatal"


class Decision(str, Enum):
    ACCEPT = "accept"
    CONTINUE = "continue"
    ABORT = "abort"


@dataclass(frozen=True)
class Success:
    text: str
    provider_used: str


@dataclass(frozen=True)
class Failure:
    kind: FailureKind
    message: str


GenerationOutcome = Union[Success, Failure]


class ProviderError(RuntimeError):
    """Provider could not complete the HTTP exchange (transport, timeout, config)."""
