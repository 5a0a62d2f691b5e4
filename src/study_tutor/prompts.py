"""Prompt builders."""

from __future__ import annotations

SUMMARY_WORDS = {
    "short": 80,
    "medium": 150,
    "long": 250,
}

DIFFICULTY_HINTS = {
    "easy": "simple concepts",
    "medium": "standard difficulty",
    "hard": "complex concepts",
}


def build_summary_prompt(content: str, max_words: int) -> str:
    return (
        f"Summarize this text (max {max_words} words). "
        "Use simple language for students:\n\n"
        f"{content}"
    )


def build_quiz_prompt(content: str, count: int, difficulty: str) -> str:
    return (
        f"Create {count} multiple-choice questions ({DIFFICULTY_HINTS[difficulty]}).\n"
        "Return ONLY this JSON format:\n"
        "[\n"
        "  {\n"
        '    "question": "Question text?",\n'
        '    "options": ["A", "B", "C", "D"],\n'
        '    "correctIndex": 0,\n'
        '    "hint": "Brief hint",\n'
        '    "explanation": "Why correct"\n'
        "  }\n"
        "]\n\n"
        f"Content:\n{content}"
    )
