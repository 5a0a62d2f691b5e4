"""Configuration loading and defaults."""

from __future__ import annotations

from copy import deepcopy
from pathlib import Path
from typing import Any, Dict

import yaml

DEFAULT_SETTINGS: Dict[str, Any] = {
    "providers": {
        # Priority order; the last provider that answered is tried first while fresh.
        "candidates": [
            "openrouter:google/gemma-2-9b-it",
            "openrouter:meta-llama/llama-3.1-8b-instruct:free",
            "openrouter:mistralai/mistral-7b-instruct:free",
            "gemini:gemini-1.5-flash",
        ],
    },
    "llm": {
        "temperature": 0.7,
        "top_p": 0.9,
        "timeout_seconds": 30,
        "hint_ttl_seconds": 300,
    },
    "limits": {
        "summary_max_chars": 2500,
        "quiz_max_chars": 2000,
        "quiz_max_chars_large": 1500,
        "quiz_max_count": 20,
    },
    "logging": {
        "level": "INFO",
        "format": "%(asctime)s %(levelname)s %(name)s %(message)s",
    },
}


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    merged = deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_settings(settings_path: str = "config/settings.yaml") -> Dict[str, Any]:
    """Loads settings.yaml and merges it onto defaults."""
    merged = deepcopy(DEFAULT_SETTINGS)
    config_path = Path(settings_path)
    if config_path.exists():
        with config_path.open("r", encoding="utf-8") as f:
            user_cfg = yaml.safe_load(f) or {}
        merged = _deep_merge(merged, user_cfg)
    return merged


def parse_route(route: str) -> tuple[str, str]:
    """Parses 'provider:model' route strings.

    Only the first colon separates the provider, so model ids such as
    ``meta-llama/llama-3.1-8b-instruct:free`` survive intact.
    """
    if ":" not in route:
        raise ValueError(f"Invalid route format: {route}")
    provider, model = route.split(":", 1)
    provider, model = provider.strip(), model.strip()
    if not provider or not model:
        raise ValueError(f"Invalid route format: {route}")
    return provider, model
