import json

import pytest

from study_tutor.config import DEFAULT_SETTINGS
from study_tutor.errors import (
    InvalidInput,
    MalformedPayload,
    NoValidRecords,
    ProviderFatalError,
    ProviderNotConfigured,
    ProvidersExhausted,
)
from study_tutor.llm.client import GenerationClient
from study_tutor.llm.registry import HintCell, ProviderRegistry
from study_tutor.llm.types import Failure, FailureKind, ProviderReply, Success
from study_tutor.service import (
    generate_quiz,
    quiz_max_tokens,
    quiz_to_dicts,
    summarize,
    summary_max_tokens,
)
from study_tutor.validators import TRUNCATION_MARKER


class RecordingClient:
    def __init__(self, outcome, available=True):
        self.outcome = outcome
        self.available = available
        self.requests = []

    def has_available_provider(self):
        return self.available

    def generate(self, request, cancel=None):
        self.requests.append(request)
        return self.outcome


def _quiz_json(n):
    return json.dumps(
        [
            {
                "question": f"Generated question {i}?",
                "options": ["a", "b", "c", "d"],
                "correctIndex": i % 4,
                "hint": "hint",
                "explanation": "why",
            }
            for i in range(n)
        ]
    )


def test_summarize_cleans_lead_in_and_sizes_request():
    client = RecordingClient(Success(text="Summary: Cells divide.", provider_used="fake:m"))

    result = summarize(DEFAULT_SETTINGS, client, "Mitosis is how cells divide.", length="short")

    assert result == "Cells divide."
    request = client.requests[0]
    assert request.max_tokens == 160
    assert request.temperature == 0.7
    assert request.top_p == 0.9
    assert "max 80 words" in request.prompt


def test_summary_token_ceiling():
    assert summary_max_tokens("short") == 160
    assert summary_max_tokens("medium") == 300
    assert summary_max_tokens("long") == 400


def test_summarize_truncates_long_content_once():
    client = RecordingClient(Success(text="ok summary", provider_used="fake:m"))
    content = "x" * 3000

    summarize(DEFAULT_SETTINGS, client, content)

    prompt = client.requests[0].prompt
    assert ("x" * 2500 + TRUNCATION_MARKER) in prompt
    assert "x" * 2501 not in prompt
    assert prompt.count(TRUNCATION_MARKER) == 1


def test_short_content_is_not_marked():
    client = RecordingClient(Success(text="ok summary", provider_used="fake:m"))
    summarize(DEFAULT_SETTINGS, client, "short text")
    assert TRUNCATION_MARKER not in client.requests[0].prompt


@pytest.mark.parametrize("content", ["", "   ", None])
def test_empty_content_is_invalid_before_provider_check(content):
    client = RecordingClient(None, available=False)
    with pytest.raises(InvalidInput):
        summarize(DEFAULT_SETTINGS, client, content)
    with pytest.raises(InvalidInput):
        generate_quiz(DEFAULT_SETTINGS, client, content)
    assert client.requests == []


@pytest.mark.parametrize("count", [0, -1, 21, "many", 2.5, True])
def test_out_of_range_count_is_invalid(count):
    client = RecordingClient(None, available=False)
    with pytest.raises(InvalidInput):
        generate_quiz(DEFAULT_SETTINGS, client, "content", count=count)


def test_unknown_length_and_difficulty_are_invalid():
    client = RecordingClient(None)
    with pytest.raises(InvalidInput):
        summarize(DEFAULT_SETTINGS, client, "content", length="epic")
    with pytest.raises(InvalidInput):
        generate_quiz(DEFAULT_SETTINGS, client, "content", difficulty="brutal")


def test_missing_provider_configuration_is_reported_after_validation():
    client = RecordingClient(None, available=False)
    with pytest.raises(ProviderNotConfigured) as exc_info:
        summarize(DEFAULT_SETTINGS, client, "content")
    assert exc_info.value.retryable is False


def test_quiz_request_sizing_and_truncation():
    assert quiz_max_tokens(5) == 800
    assert quiz_max_tokens(20) == 2600
    assert quiz_max_tokens(40) == 4000

    client = RecordingClient(Success(text=_quiz_json(12), provider_used="fake:m"))
    generate_quiz(DEFAULT_SETTINGS, client, "y" * 5000, count=12, difficulty="hard")
    request = client.requests[0]
    assert request.max_tokens == 1640
    assert ("y" * 1500 + TRUNCATION_MARKER) in request.prompt
    assert "complex concepts" in request.prompt

    client = RecordingClient(Success(text=_quiz_json(3), provider_used="fake:m"))
    generate_quiz(DEFAULT_SETTINGS, client, "y" * 5000, count=3)
    assert ("y" * 2000 + TRUNCATION_MARKER) in client.requests[0].prompt


def test_quiz_never_exceeds_requested_count():
    client = RecordingClient(Success(text="Here you go:\n```json\n" + _quiz_json(8) + "\n```", provider_used="fake:m"))

    records = generate_quiz(DEFAULT_SETTINGS, client, "content", count=3)

    assert len(records) == 3
    assert quiz_to_dicts(records)[1]["correctIndex"] == 1


def test_quiz_recovery_respects_count():
    broken = _quiz_json(6)[:-1] + ",]"
    client = RecordingClient(Success(text=broken, provider_used="fake:m"))
    records = generate_quiz(DEFAULT_SETTINGS, client, "content", count=4)
    assert len(records) == 4


def test_quiz_with_only_invalid_record_fails():
    payload = '[{"question": "Which one is prime?", "options": ["4", "6", "7"], "correctIndex": 5}]'
    client = RecordingClient(Success(text=payload, provider_used="fake:m"))
    with pytest.raises(NoValidRecords) as exc_info:
        generate_quiz(DEFAULT_SETTINGS, client, "content")
    assert exc_info.value.as_dict()["error"] == "invalid_output"


def test_quiz_without_structure_is_malformed():
    client = RecordingClient(Success(text="Sorry, I can't help with that.", provider_used="fake:m"))
    with pytest.raises(MalformedPayload):
        generate_quiz(DEFAULT_SETTINGS, client, "content")


def test_provider_failures_map_to_distinct_errors():
    fatal = RecordingClient(Failure(FailureKind.FATAL, "API Error (401): bad key"))
    with pytest.raises(ProviderFatalError) as exc_info:
        summarize(DEFAULT_SETTINGS, fatal, "content")
    assert exc_info.value.retryable is False

    exhausted = RecordingClient(Failure(FailureKind.ALL_PROVIDERS_EXHAUSTED, "no provider available"))
    with pytest.raises(ProvidersExhausted) as exc_info:
        generate_quiz(DEFAULT_SETTINGS, exhausted, "content")
    assert exc_info.value.retryable is True
    assert exc_info.value.as_dict() == {
        "ok": False,
        "error": "provider_unavailable",
        "details": "no provider available",
        "retryable": True,
    }


def test_quiz_end_to_end_with_fallback_client():
    class Provider:
        name = "fake"
        available = True

        def complete(self, model, request):
            if model == "down":
                return ProviderReply(status_code=503)
            return ProviderReply(status_code=200, text=_quiz_json(2))

    registry = ProviderRegistry(["fake:down", "fake:up"], hint=HintCell())
    client = GenerationClient(registry, providers={"fake": Provider()})

    records = generate_quiz(DEFAULT_SETTINGS, client, "content", count=2)

    assert [r.correct_index for r in records] == [0, 1]
    assert registry.ordered_candidates()[0].route == "fake:up"


def test_configured_limit_cannot_lift_the_twenty_question_cap():
    config = {**DEFAULT_SETTINGS, "limits": {**DEFAULT_SETTINGS["limits"], "quiz_max_count": 50}}
    client = RecordingClient(Success(text=_quiz_json(21), provider_used="fake:m"))

    with pytest.raises(InvalidInput):
        generate_quiz(config, client, "content", count=21)
    assert client.requests == []

    assert len(generate_quiz(config, client, "content", count=20)) == 20


def test_configured_limit_can_lower_the_cap():
    config = {**DEFAULT_SETTINGS, "limits": {**DEFAULT_SETTINGS["limits"], "quiz_max_count": 5}}
    client = RecordingClient(Success(text=_quiz_json(6), provider_used="fake:m"))
    with pytest.raises(InvalidInput):
        generate_quiz(config, client, "content", count=6)
