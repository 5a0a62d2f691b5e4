"""Utility helpers."""

from __future__ import annotations

import json
from typing import Any

EXCERPT_CHARS = 200


def excerpt(text: str | None, limit: int = EXCERPT_CHARS) -> str:
    """Single-line preview of untrusted text for log messages."""
    if not text:
        return ""
    flat = " ".join(str(text).split())
    if len(flat) <= limit:
        return flat
    return f"{flat[:limit]}..."


def json_dumps(data: Any) -> str:
    return json.dumps(data, ensure_ascii=False, indent=2)
