"""Quiz record validation and normalization."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterable, List

from ..errors import NoValidRecords
from .parser import DEFAULT_EXPLANATION, DEFAULT_HINT

MIN_QUESTION_LENGTH = 5
MIN_OPTIONS = 2


@dataclass(frozen=True)
class QuizRecord:
    question: str
    options: List[str]
    correct_index: int
    hint: str = DEFAULT_HINT
    explanation: str = DEFAULT_EXPLANATION

    def to_dict(self) -> Dict[str, Any]:
        return {
            "question": self.question,
            "options": list(self.options),
            "correctIndex": self.correct_index,
            "hint": self.hint,
            "explanation": self.explanation,
        }


def _text_or_default(value: Any, default: str) -> str:
    if value is None:
        return default
    text = str(value).strip()
    return text or default


def _is_valid(record: Any) -> bool:
    if not isinstance(record, dict):
        return False
    question = record.get("question")
    if not isinstance(question, str) or len(question.strip()) <= MIN_QUESTION_LENGTH:
        return False
    options = record.get("options")
    if not isinstance(options, list) or len(options) < MIN_OPTIONS:
        return False
    index = record.get("correctIndex")
    # bool is an int subclass; true/false is not an index.
    if isinstance(index, bool) or not isinstance(index, int):
        return False
    return 0 <= index < len(options)


def validate(records: Iterable[Any], requested_count: int) -> List[QuizRecord]:
    kept: List[QuizRecord] = []
    for record in records:
        if len(kept) >= requested_count:
            break
        if not _is_valid(record):
            continue
        kept.append(
            QuizRecord(
                question=record["question"].strip(),
                options=[str(opt).strip() for opt in record["options"]],
                correct_index=record["correctIndex"],
                hint=_text_or_default(record.get("hint"), DEFAULT_HINT),
                explanation=_text_or_default(record.get("explanation"), DEFAULT_EXPLANATION),
            )
        )
    if not kept:
        raise NoValidRecords("No valid questions generated")
    return kept
