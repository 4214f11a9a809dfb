from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import httpx


class OpenAIError(Exception):
    """Base error for OpenAI client failures."""


class OpenAIUpstreamError(OpenAIError):
    """Raised when the request could not complete or the response is unusable."""


class OpenAIStatusError(OpenAIError):
    """Raised when OpenAI answers with a non-success HTTP status.

    Carries the upstream status and the raw error payload so the edge can forward
    the status to the caller and operators can inspect the payload in logs.
    """

    def __init__(self, *, status_code: int, message: str | None, payload: Any):
        super().__init__(message or "Unknown error")
        self.status_code = status_code
        self.message = message
        self.payload = payload


@dataclass(frozen=True)
class OpenAIConfig:
    api_key: str
    base_url: str
    model: str
    timeout_seconds: float
    temperature: float = 0.7
    max_tokens: int = 2000


def _extract_error_message(payload: Any) -> str | None:
    # Expected shape: {"error": {"message": "..."}}
    if not isinstance(payload, dict):
        return None
    error = payload.get("error")
    if not isinstance(error, dict):
        return None
    message = error.get("message")
    return message if isinstance(message, str) and message else None


class OpenAIClient:
    """
    Minimal OpenAI chat-completions client returning plain text.

    Design notes:
    - No logging in this module (prompts/outputs may describe unpublished stories).
    - One request per call: no retries, no streaming.
    - A fresh AsyncClient per call; nothing is shared between requests.
    """

    def __init__(self, *, config: OpenAIConfig, transport: httpx.AsyncBaseTransport | None = None):
        self._config = config
        self._transport = transport

    def build_payload(self, *, system_prompt: str, user_prompt: str) -> dict[str, Any]:
        return {
            "model": self._config.model,
            "messages": [
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
            "temperature": self._config.temperature,
            "max_tokens": self._config.max_tokens,
        }

    async def generate_text(self, *, system_prompt: str, user_prompt: str) -> str:
        url = f"{self._config.base_url.rstrip('/')}/chat/completions"
        headers = {
            "Authorization": f"Bearer {self._config.api_key}",
            "Content-Type": "application/json",
        }
        payload = self.build_payload(system_prompt=system_prompt, user_prompt=user_prompt)

        try:
            async with httpx.AsyncClient(
                timeout=self._config.timeout_seconds, transport=self._transport
            ) as client:
                resp = await client.post(url, headers=headers, json=payload)
        except httpx.TimeoutException as exc:
            raise OpenAIUpstreamError("LLM request timed out") from exc
        except httpx.HTTPError as exc:
            raise OpenAIUpstreamError("LLM request failed") from exc

        if not resp.is_success:
            try:
                error_payload: Any = resp.json()
            except ValueError:
                error_payload = resp.text
            raise OpenAIStatusError(
                status_code=resp.status_code,
                message=_extract_error_message(error_payload),
                payload=error_payload,
            )

        try:
            data = resp.json()
            content = data["choices"][0]["message"]["content"]
        except Exception as exc:  # noqa: BLE001
            raise OpenAIUpstreamError("LLM response did not contain a completion") from exc

        if not isinstance(content, str):
            raise OpenAIUpstreamError("LLM completion content must be a string")

        return content
