# src/ai_todos/llm/gemini.py

from __future__ import annotations

import json
import logging
from typing import Any

import httpx

from ..decompose.models import ModelInvocation, RawModelOutput
from ..errors import (
    ConfigurationMissing,
    GatewayFailure,
    TransportFailure,
    UpstreamHttpFailure,
)

logger = logging.getLogger(__name__)

_GATEWAY_STATUSES = {502, 503, 504}
_MAX_DETAILS_CHARS = 2000


def _make_timeout(connect_s: float, read_s: float) -> httpx.Timeout:
    return httpx.Timeout(connect=connect_s, read=read_s, write=10.0, pool=connect_s)


def _is_provider_error_body(body: str) -> bool:
    """Google APIs answer errors with {"error": {"code": ..., "message": ...}}."""
    try:
        data = json.loads(body)
    except ValueError:
        return False
    return isinstance(data, dict) and isinstance(data.get("error"), dict)


def extract_text(data: Any) -> str:
    """First candidate's first text part, or "" when the shape doesn't match."""
    try:
        text = data["candidates"][0]["content"]["parts"][0]["text"]
    except (KeyError, IndexError, TypeError):
        return ""
    return text if isinstance(text, str) else ""


class GeminiClient:
    """
    Gemini generateContent over REST.

    One POST per generate() call: no retries, no caching.
    The API key is read from settings when the call is made, so the app can
    start without it and report ConfigurationMissing per request.
    """

    def __init__(self, settings, *, transport: httpx.AsyncBaseTransport | None = None) -> None:
        self._api_key = (getattr(settings, "gemini_api_key", None) or "").strip()
        self._base_url = str(
            getattr(settings, "gemini_base_url", "https://generativelanguage.googleapis.com/v1beta")
        ).rstrip("/")
        self._model = str(getattr(settings, "gemini_model", "gemini-2.5-flash"))
        self._timeout = _make_timeout(
            float(getattr(settings, "llm_connect_timeout_seconds", 5.0)),
            float(getattr(settings, "llm_read_timeout_seconds", 60.0)),
        )
        self._transport = transport

    @property
    def url(self) -> str:
        return f"{self._base_url}/models/{self._model}:generateContent"

    @staticmethod
    def build_body(invocation: ModelInvocation) -> dict[str, Any]:
        return {
            "contents": [{"parts": [{"text": invocation.prompt}]}],
            "generationConfig": {
                "response_mime_type": invocation.response_mime_type,
                "temperature": invocation.temperature,
                "maxOutputTokens": invocation.max_output_tokens,
            },
        }

    async def generate(self, invocation: ModelInvocation) -> RawModelOutput:
        if not self._api_key:
            raise ConfigurationMissing("GEMINI_API_KEY")

        headers = {"Content-Type": "application/json", "x-goog-api-key": self._api_key}
        logger.info("Gemini: calling model=%s", self._model)

        try:
            async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
                resp = await client.post(self.url, headers=headers, json=self.build_body(invocation))
        except (httpx.ProxyError, httpx.RemoteProtocolError) as e:
            logger.warning("Gemini: gateway error (%s)", e.__class__.__name__)
            raise GatewayFailure(str(e) or e.__class__.__name__) from e
        except httpx.TransportError as e:
            logger.warning("Gemini: transport error (%s)", e.__class__.__name__)
            raise TransportFailure(str(e) or e.__class__.__name__) from e

        body = resp.text
        if not resp.is_success:
            details = body[:_MAX_DETAILS_CHARS]
            if resp.status_code in _GATEWAY_STATUSES and not _is_provider_error_body(body):
                logger.warning("Gemini: gateway status=%s", resp.status_code)
                raise GatewayFailure(details, status=resp.status_code)
            logger.warning("Gemini: upstream status=%s", resp.status_code)
            raise UpstreamHttpFailure(resp.status_code, details)

        try:
            data = resp.json()
        except ValueError:
            data = None
        if not isinstance(data, dict):
            logger.warning("Gemini: non-JSON success body (status=%s)", resp.status_code)
            raise GatewayFailure(
                "Success response was not a JSON object: " + body[:_MAX_DETAILS_CHARS],
                status=resp.status_code,
            )

        text = extract_text(data)
        logger.debug("Gemini: got %d chars", len(text))
        return RawModelOutput(text=text)
