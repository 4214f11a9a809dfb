from __future__ import annotations

import asyncio
import re

import pytest

from app.analysis.schemas import AnalysisRequest
from app.analysis.service import AnalysisService, parse_analysis_request, utc_now_iso
from app.core.llm.openai_client import OpenAIStatusError
from app.domain.exceptions import (
    InvalidPayloadError,
    MissingRequiredFieldsError,
    UpstreamAPIError,
)
from tests.analysis._helpers import valid_body


class _StaticLLMClient:
    async def generate_text(self, *, system_prompt: str, user_prompt: str) -> str:
        return "Sample analysis"


class _FailingLLMClient:
    def __init__(self, exc: Exception):
        self._exc = exc

    async def generate_text(self, *, system_prompt: str, user_prompt: str) -> str:
        raise self._exc


def test_parse_maps_camel_case_fields() -> None:
    parsed = parse_analysis_request(valid_body(sources=["BLS", "Census"]))
    assert parsed.story_topic == "Inflation trends"
    assert parsed.data_needed == "CPI data"
    assert parsed.timeframe == "last 5 years"
    assert parsed.sources == ["BLS", "Census"]
    assert parsed.deadline == "2024-01-01"


def test_parse_ignores_unknown_fields() -> None:
    parsed = parse_analysis_request(valid_body(editor="Sam"))
    assert not hasattr(parsed, "editor")


@pytest.mark.parametrize("payload", [None, "text", 42, [], {}])
def test_parse_rejects_non_objects_and_empty_objects(payload) -> None:
    with pytest.raises(MissingRequiredFieldsError):
        parse_analysis_request(payload)


@pytest.mark.parametrize("value", [None, "", 0, False])
def test_parse_rejects_falsy_required_values(value) -> None:
    with pytest.raises(MissingRequiredFieldsError):
        parse_analysis_request(valid_body(timeframe=value))


def test_missing_fields_take_precedence_over_bad_sources() -> None:
    with pytest.raises(MissingRequiredFieldsError):
        parse_analysis_request(valid_body(storyTopic="", sources="BLS"))


def test_parse_rejects_non_list_sources() -> None:
    with pytest.raises(InvalidPayloadError) as excinfo:
        parse_analysis_request(valid_body(sources="BLS, Census"))
    assert excinfo.value.status_code == 400
    assert "sources" in excinfo.value.message


def test_parse_rejects_non_string_deadline() -> None:
    with pytest.raises(InvalidPayloadError, match="Malformed request payload"):
        parse_analysis_request(valid_body(deadline=20240101))


def test_utc_now_iso_format() -> None:
    assert re.fullmatch(r"\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\.\d{3}Z", utc_now_iso())


def test_service_builds_response_with_injected_clock() -> None:
    svc = AnalysisService(llm_client=_StaticLLMClient(), clock=lambda: "2024-01-01T00:00:00.000Z")
    request = AnalysisRequest(story_topic="Housing", data_needed="Rents", timeframe="2020-2024")

    result = asyncio.run(svc.generate_analysis(analysis_request=request))

    assert result.model_dump(by_alias=True) == {
        "analysis": "Sample analysis",
        "metadata": {
            "storyTopic": "Housing",
            "timeframe": "2020-2024",
            "generatedAt": "2024-01-01T00:00:00.000Z",
        },
    }


def test_service_wraps_upstream_status_errors() -> None:
    upstream = OpenAIStatusError(status_code=401, message="Incorrect API key", payload={})
    svc = AnalysisService(llm_client=_FailingLLMClient(upstream))
    request = AnalysisRequest(story_topic="Housing", data_needed="Rents", timeframe="2020-2024")

    with pytest.raises(UpstreamAPIError) as excinfo:
        asyncio.run(svc.generate_analysis(analysis_request=request))

    assert excinfo.value.status_code == 401
    assert excinfo.value.message == "OpenAI API error: Incorrect API key"


def test_service_lets_other_errors_propagate() -> None:
    svc = AnalysisService(llm_client=_FailingLLMClient(RuntimeError("boom")))
    request = AnalysisRequest(story_topic="Housing", data_needed="Rents", timeframe="2020-2024")

    with pytest.raises(RuntimeError):
        asyncio.run(svc.generate_analysis(analysis_request=request))
