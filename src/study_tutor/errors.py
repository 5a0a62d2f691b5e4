"""Errors surfaced to callers of the summary and quiz operations."""

from __future__ import annotations

from typing import Any, Dict


class StudyTutorError(Exception):
    code = "error"
    retryable = False

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def as_dict(self) -> Dict[str, Any]:
        return {
            "ok": False,
            "error": self.code,
            "details": self.message,
            "retryable": self.retryable,
        }


class InvalidInput(StudyTutorError):
    code = "invalid_input"


class ProviderNotConfigured(StudyTutorError):
    code = "provider_not_configured"


class ProviderFatalError(StudyTutorError):
    """The request itself was rejected; another provider would reject it too."""

    code = "provider_fatal"


class ProvidersExhausted(StudyTutorError):
    code = "provider_unavailable"
    retryable = True


class MalformedPayload(StudyTutorError):
    code = "invalid_output"
    retryable = True


class NoValidRecords(StudyTutorError):
    code = "invalid_output"
    retryable = True


class GenerationCancelled(StudyTutorError):
    code = "cancelled"
    retryable = True
