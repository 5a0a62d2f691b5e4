"""Isolates the JSON array inside a model response."""

from __future__ import annotations

import re

_FENCE_RE = re.compile(r"```[\w+-]*[ \t]*")


def isolate_payload(raw: str) -> str:
    text = (raw or "").strip()
    if "```" in text:
        text = _FENCE_RE.sub("", text).strip()

    start = text.find("[")
    end = text.rfind("]")
    if start != -1 and end > start:
        return text[start : end + 1]
    return text
