from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import UTC, datetime
from typing import Any, Protocol

from pydantic import ValidationError

from app.analysis.prompt import build_analysis_prompts
from app.analysis.schemas import AnalysisMetadata, AnalysisRequest, AnalysisResponse
from app.core.llm.openai_client import OpenAIStatusError
from app.domain.exceptions import (
    InvalidPayloadError,
    MissingRequiredFieldsError,
    UpstreamAPIError,
)

logger = logging.getLogger("app.analysis")

REQUIRED_FIELDS = ("storyTopic", "dataNeeded", "timeframe")


class LLMClient(Protocol):
    async def generate_text(self, *, system_prompt: str, user_prompt: str) -> str: ...


def parse_analysis_request(payload: Any) -> AnalysisRequest:
    """Validate a decoded JSON body.

    Missing or falsy required fields are checked first so they always produce the
    same 400, regardless of what else is wrong with the payload.
    """

    if not isinstance(payload, dict) or not all(payload.get(name) for name in REQUIRED_FIELDS):
        raise MissingRequiredFieldsError()

    try:
        return AnalysisRequest.model_validate(payload)
    except ValidationError as exc:
        failed = {err["loc"][0] for err in exc.errors() if err.get("loc")}
        if "sources" in failed:
            raise InvalidPayloadError("Invalid field: sources must be a list of strings") from None
        raise InvalidPayloadError("Malformed request payload") from None


def utc_now_iso() -> str:
    # Millisecond precision with a `Z` suffix, e.g. 2024-01-01T12:00:00.000Z
    return datetime.now(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class AnalysisService:
    def __init__(self, *, llm_client: LLMClient, clock: Callable[[], str] = utc_now_iso):
        self._llm = llm_client
        self._clock = clock

    async def generate_analysis(
        self,
        *,
        analysis_request: AnalysisRequest,
        request_id: str | None = None,
    ) -> AnalysisResponse:
        system_prompt, user_prompt = build_analysis_prompts(analysis_request=analysis_request)

        try:
            analysis = await self._llm.generate_text(
                system_prompt=system_prompt, user_prompt=user_prompt
            )
        except OpenAIStatusError as exc:
            # The raw upstream payload is for operators only; callers get the wrapped message.
            logger.error(
                "OpenAI API error",
                extra={
                    "request_id": request_id,
                    "upstream_status_code": exc.status_code,
                    "upstream_error": exc.payload,
                },
            )
            raise UpstreamAPIError(
                status_code=exc.status_code, upstream_message=exc.message
            ) from exc

        return AnalysisResponse(
            analysis=analysis,
            metadata=AnalysisMetadata(
                story_topic=analysis_request.story_topic,
                timeframe=analysis_request.timeframe,
                generated_at=self._clock(),
            ),
        )
