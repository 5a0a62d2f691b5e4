"""Input validation and content truncation."""

from __future__ import annotations

from typing import Any, Dict

from .errors import InvalidInput
from .prompts import DIFFICULTY_HINTS, SUMMARY_WORDS

TRUNCATION_MARKER = "..."

DEFAULT_LIMITS = {
    "summary_max_chars": 2500,
    "quiz_max_chars": 2000,
    "quiz_max_chars_large": 1500,
    "quiz_max_count": 20,
}


def get_limit(config: Dict[str, Any], key: str) -> int:
    limits = config.get("limits", {})
    return int(limits.get(key, DEFAULT_LIMITS[key]))


def truncate_content(content: str, limit: int) -> str:
    """Cuts content to ``limit`` chars and appends the marker once."""
    if len(content) <= limit:
        return content
    return content[:limit] + TRUNCATION_MARKER


def require_content(content: Any) -> str:
    if not isinstance(content, str) or not content.strip():
        raise InvalidInput("No content provided")
    return content


def require_length(length: Any) -> str:
    key = str(length or "").strip().lower()
    if key not in SUMMARY_WORDS:
        raise InvalidInput(f"Unknown summary length: {length!r} (expected short, medium or long)")
    return key


def require_difficulty(difficulty: Any) -> str:
    key = str(difficulty or "").strip().lower()
    if key not in DIFFICULTY_HINTS:
        raise InvalidInput(f"Unknown difficulty: {difficulty!r} (expected easy, medium or hard)")
    return key


def require_count(count: Any, max_count: int) -> int:
    if isinstance(count, bool):
        raise InvalidInput(f"Question count must be an integer, got {count!r}")
    try:
        value = int(count)
    except (TypeError, ValueError):
        raise InvalidInput(f"Question count must be an integer, got {count!r}") from None
    if isinstance(count, float) and count != value:
        raise InvalidInput(f"Question count must be an integer, got {count!r}")
    if value < 1 or value > max_count:
        raise InvalidInput(f"Question count must be between 1 and {max_count}, got {value}")
    return value
