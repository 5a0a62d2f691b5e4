"""Summary and quiz operations built on the generation client."""

from __future__ import annotations

import logging
from typing import Any, Dict, List

from .errors import (
    MalformedPayload,
    NoValidRecords,
    ProviderFatalError,
    ProviderNotConfigured,
    ProvidersExhausted,
)
from .llm.types import Failure, FailureKind, GenerationRequest
from .parsing.extractor import isolate_payload
from .parsing.parser import Failed, parse_records
from .parsing.validator import QuizRecord, validate
from .prompts import SUMMARY_WORDS, build_quiz_prompt, build_summary_prompt
from .summary import clean_summary
from .utils import excerpt
from .validators import (
    get_limit,
    require_content,
    require_count,
    require_difficulty,
    require_length,
    truncate_content,
)

logger = logging.getLogger(__name__)

SUMMARY_MAX_TOKENS = 400
QUIZ_BASE_TOKENS = 200
QUIZ_TOKENS_PER_QUESTION = 120
QUIZ_MAX_TOKENS = 4000
LARGE_QUIZ_THRESHOLD = 10
# Settings may lower the question limit, never raise it.
QUIZ_COUNT_CEILING = 20


def _request(config: Dict[str, Any], prompt: str, max_tokens: int) -> GenerationRequest:
    llm_cfg = config.get("llm", {})
    return GenerationRequest(
        prompt=prompt,
        max_tokens=max_tokens,
        temperature=float(llm_cfg.get("temperature", 0.7)),
        top_p=float(llm_cfg.get("top_p", 0.9)),
        timeout_seconds=int(llm_cfg.get("timeout_seconds", 30)),
    )


def _generate_text(client, request: GenerationRequest, stage: str, cancel=None) -> str:
    if not client.has_available_provider():
        raise ProviderNotConfigured("API key not configured")

    outcome = client.generate(request, cancel=cancel)
    if isinstance(outcome, Failure):
        logger.error("%s generation failed (%s): %s", stage, outcome.kind.value, outcome.message)
        if outcome.kind is FailureKind.FATAL:
            raise ProviderFatalError(outcome.message)
        raise ProvidersExhausted(outcome.message)

    logger.info("%s generated by %s (%d chars)", stage, outcome.provider_used, len(outcome.text))
    return outcome.text


def summary_max_tokens(length: str) -> int:
    return min(SUMMARY_MAX_TOKENS, SUMMARY_WORDS[length] * 2)


def quiz_max_tokens(count: int) -> int:
    return min(QUIZ_MAX_TOKENS, QUIZ_BASE_TOKENS + count * QUIZ_TOKENS_PER_QUESTION)


def summarize(config: Dict[str, Any], client, content: Any, length: Any = "medium", cancel=None) -> str:
    content = require_content(content)
    length = require_length(length)

    truncated = truncate_content(content, get_limit(config, "summary_max_chars"))
    prompt = build_summary_prompt(truncated, SUMMARY_WORDS[length])
    raw = _generate_text(client, _request(config, prompt, summary_max_tokens(length)), "summary", cancel)
    return clean_summary(raw)


def generate_quiz(
    config: Dict[str, Any],
    client,
    content: Any,
    count: Any = 5,
    difficulty: Any = "medium",
    cancel=None,
) -> List[QuizRecord]:
    content = require_content(content)
    count = require_count(count, min(QUIZ_COUNT_CEILING, get_limit(config, "quiz_max_count")))
    difficulty = require_difficulty(difficulty)

    limit_key = "quiz_max_chars_large" if count > LARGE_QUIZ_THRESHOLD else "quiz_max_chars"
    truncated = truncate_content(content, get_limit(config, limit_key))
    prompt = build_quiz_prompt(truncated, count, difficulty)
    raw = _generate_text(client, _request(config, prompt, quiz_max_tokens(count)), "quiz", cancel)

    payload = isolate_payload(raw)
    outcome = parse_records(payload, count)
    if isinstance(outcome, Failed):
        logger.error("quiz parse failed: %s; response=%r", outcome.reason, excerpt(raw))
        raise MalformedPayload(f"Failed to parse quiz JSON: {outcome.reason}")
    logger.info("quiz parsed via %s path (%d records)", type(outcome).__name__.lower(), len(outcome.records))

    try:
        return validate(outcome.records, count)
    except NoValidRecords:
        logger.error("quiz validation kept no records; response=%r", excerpt(raw))
        raise


def quiz_to_dicts(records: List[QuizRecord]) -> List[Dict[str, Any]]:
    return [record.to_dict() for record in records]
