# src/ai_todos/errors.py

"""
Closed error taxonomy.

Every failure the app surfaces to a caller is one of the ErrorKind values below.
Callers switch on `err.kind` (see http_status_for) instead of on exception types.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any


class ErrorKind(StrEnum):
    UNAUTHENTICATED = "unauthenticated"
    EMPTY_INPUT = "empty_input"
    INPUT_TOO_LONG = "input_too_long"
    TRANSPORT_FAILURE = "transport_failure"
    GATEWAY_FAILURE = "gateway_failure"
    UPSTREAM_HTTP_FAILURE = "upstream_http_failure"
    MALFORMED_MODEL_OUTPUT = "malformed_model_output"
    PERSISTENCE_FAILURE = "persistence_failure"
    CONFIGURATION_MISSING = "configuration_missing"
    NOT_FOUND = "not_found"


_HTTP_STATUS: dict[ErrorKind, int] = {
    ErrorKind.UNAUTHENTICATED: 401,
    ErrorKind.EMPTY_INPUT: 400,
    ErrorKind.INPUT_TOO_LONG: 413,
    ErrorKind.TRANSPORT_FAILURE: 503,
    ErrorKind.GATEWAY_FAILURE: 502,
    ErrorKind.UPSTREAM_HTTP_FAILURE: 502,
    ErrorKind.MALFORMED_MODEL_OUTPUT: 422,
    ErrorKind.PERSISTENCE_FAILURE: 500,
    ErrorKind.CONFIGURATION_MISSING: 500,
    ErrorKind.NOT_FOUND: 404,
}


def http_status_for(kind: ErrorKind) -> int:
    return _HTTP_STATUS[kind]


class AiTodosError(Exception):
    """Base class: a failure with a stable kind and optional diagnostics."""

    kind: ErrorKind

    def __init__(self, message: str, **diagnostics: Any) -> None:
        super().__init__(message)
        self.message = message
        self.diagnostics: dict[str, Any] = {
            k: v for k, v in diagnostics.items() if v is not None
        }

    def to_payload(self) -> dict[str, Any]:
        return {"error": self.message, "kind": self.kind.value, **self.diagnostics}


class Unauthenticated(AiTodosError):
    kind = ErrorKind.UNAUTHENTICATED

    def __init__(self, message: str = "Missing Authorization header") -> None:
        super().__init__(message)


class EmptyInput(AiTodosError):
    kind = ErrorKind.EMPTY_INPUT

    def __init__(self, message: str = "Empty text") -> None:
        super().__init__(message)


class InputTooLong(AiTodosError):
    kind = ErrorKind.INPUT_TOO_LONG

    def __init__(self, max_chars: int) -> None:
        super().__init__(f"Text too long (max {max_chars} chars)", max_chars=max_chars)
        self.max_chars = max_chars


class TransportFailure(AiTodosError):
    """The model call never reached the endpoint."""

    kind = ErrorKind.TRANSPORT_FAILURE

    def __init__(self, details: str) -> None:
        super().__init__("Could not reach the model endpoint", details=details)


class GatewayFailure(AiTodosError):
    """A relay/proxy between us and the model rejected or mangled the call."""

    kind = ErrorKind.GATEWAY_FAILURE

    def __init__(self, details: str, status: int | None = None) -> None:
        super().__init__("Gateway error", status=status, details=details)
        self.status = status


class UpstreamHttpFailure(AiTodosError):
    kind = ErrorKind.UPSTREAM_HTTP_FAILURE

    def __init__(self, status: int, details: str) -> None:
        super().__init__("Gemini error", status=status, details=details)
        self.status = status
        self.details = details


class MalformedModelOutput(AiTodosError):
    kind = ErrorKind.MALFORMED_MODEL_OUTPUT

    def __init__(self, raw_text: str) -> None:
        super().__init__("Model did not return JSON array", raw_json=raw_text)
        self.raw_text = raw_text


class PersistenceFailure(AiTodosError):
    kind = ErrorKind.PERSISTENCE_FAILURE

    def __init__(self, details: str) -> None:
        super().__init__("Failed to save tasks", details=details)


class ConfigurationMissing(AiTodosError):
    kind = ErrorKind.CONFIGURATION_MISSING

    def __init__(self, setting: str) -> None:
        super().__init__(f"{setting} is not set")
        self.setting = setting


class NotFound(AiTodosError):
    kind = ErrorKind.NOT_FOUND
