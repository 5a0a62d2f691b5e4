"""Two-stage quiz payload parsing: strict JSON, then field-level recovery.

Models are not bound to emit valid JSON. A single stray comma or an
unescaped quote makes ``json.loads`` fail even though every question is
still readable, so the second stage pulls each field out with a pattern
and re-aligns the matches by position.
"""

from __future__ import annotations

import json
import re
from dataclasses import dataclass, field
from typing import Any, List, Union

from ..errors import MalformedPayload

PLACEHOLDER_OPTIONS = ["Option A", "Option B", "Option C", "Option D"]
DEFAULT_HINT = "Think about the key concepts"
DEFAULT_EXPLANATION = "Review the material"

_STRING_VALUE = r'"((?:[^"\\]|\\.)*)"'
_QUESTION_RE = re.compile(r'"question"\s*:\s*' + _STRING_VALUE, re.DOTALL)
_OPTIONS_RE = re.compile(r'"options"\s*:\s*(\[[^\]]*\])', re.DOTALL)
_CORRECT_INDEX_RE = re.compile(r'"correctIndex"\s*:\s*(-?\d{1,6})(?!\d)')
_HINT_RE = re.compile(r'"hint"\s*:\s*' + _STRING_VALUE, re.DOTALL)
_EXPLANATION_RE = re.compile(r'"explanation"\s*:\s*' + _STRING_VALUE, re.DOTALL)


@dataclass
class Strict:
    records: List[Any] = field(default_factory=list)


@dataclass
class Recovered:
    records: List[Any] = field(default_factory=list)


@dataclass
class Failed:
    reason: str


ParseOutcome = Union[Strict, Recovered, Failed]


def _unescape(value: str) -> str:
    try:
        return json.loads(f'"{value}"')
    except ValueError:
        return value


def _decode_options(raw: str) -> List[Any]:
    try:
        options = json.loads(raw)
    except (ValueError, RecursionError):
        return list(PLACEHOLDER_OPTIONS)
    if not isinstance(options, list):
        return list(PLACEHOLDER_OPTIONS)
    return options


def _recover_fields(payload: str, requested_count: int) -> List[dict]:
    questions = [_unescape(m) for m in _QUESTION_RE.findall(payload)]
    options = [_decode_options(m) for m in _OPTIONS_RE.findall(payload)]
    indexes = [int(m) for m in _CORRECT_INDEX_RE.findall(payload)]
    hints = [_unescape(m) for m in _HINT_RE.findall(payload)]
    explanations = [_unescape(m) for m in _EXPLANATION_RE.findall(payload)]

    # Surplus matches of any field are dropped; question, options and
    # correctIndex always have an i-th match below this bound.
    count = min(requested_count, len(questions), len(options), len(indexes))
    records = []
    for i in range(count):
        records.append(
            {
                "question": questions[i],
                "options": options[i],
                "correctIndex": indexes[i],
                "hint": hints[i] if i < len(hints) else DEFAULT_HINT,
                "explanation": explanations[i] if i < len(explanations) else DEFAULT_EXPLANATION,
            }
        )
    return records


def parse_records(payload: str, requested_count: int) -> ParseOutcome:
    try:
        data = json.loads(payload)
    except (ValueError, RecursionError) as exc:
        # Oversized integers and deep nesting raise outside JSONDecodeError.
        strict_error = f"strict decode failed: {exc}"
    else:
        if isinstance(data, list):
            return Strict(data)
        strict_error = f"strict decode yielded {type(data).__name__}, not an array"

    records = _recover_fields(payload, requested_count)
    if records:
        return Recovered(records)
    return Failed(f"{strict_error}; field recovery found no complete records")


def parse(payload: str, requested_count: int) -> List[Any]:
    outcome = parse_records(payload, requested_count)
    if isinstance(outcome, Failed):
        raise MalformedPayload(outcome.reason)
    return outcome.records
