"""Strips boilerplate lead-ins from generated summaries."""

from __future__ import annotations

import re

LEAD_IN_PATTERNS = [
    re.compile(
        r"^(here['’]s|here is|this is|the following is)\s+(a\s+|an\s+)?"
        r"(brief\s+|short\s+|concise\s+|simple\s+)?(summary|text|content|overview)[^:\n]*:\s*",
        re.IGNORECASE,
    ),
    re.compile(r"^summary:\s*", re.IGNORECASE),
    re.compile(r"^this text discusses:\s*", re.IGNORECASE),
    re.compile(r"^in summary,\s*", re.IGNORECASE),
]


def clean_summary(raw: str) -> str:
    text = (raw or "").strip()
    while True:
        before = text
        for pattern in LEAD_IN_PATTERNS:
            text = pattern.sub("", text, count=1).strip()
        if text == before:
            return text
