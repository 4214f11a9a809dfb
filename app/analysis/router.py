from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Request, status

from app.analysis.schemas import AnalysisResponse
from app.analysis.service import AnalysisService, parse_analysis_request
from app.api.schemas import ErrorOut
from app.core.llm.deps import get_openai_client
from app.domain.exceptions import (
    AnalysisError,
    AnalysisGenerationError,
    LLMNotConfiguredError,
)

router = APIRouter(prefix="/api", tags=["analysis"])
logger = logging.getLogger("app.analysis")


@router.post(
    "/generate-analysis",
    response_model=AnalysisResponse,
    summary="Generate a sourced data analysis for a story",
    responses={
        status.HTTP_400_BAD_REQUEST: {"model": ErrorOut, "description": "Invalid request body."},
        status.HTTP_405_METHOD_NOT_ALLOWED: {"model": ErrorOut},
        status.HTTP_500_INTERNAL_SERVER_ERROR: {
            "model": ErrorOut,
            "description": "Missing API key or unexpected failure.",
        },
    },
)
async def generate_analysis(
    request: Request,
    openai_client=Depends(get_openai_client),
) -> AnalysisResponse:
    """
    Ask the language model for statistical findings with verifiable sources.

    Upstream errors are forwarded with the provider's status code. Nothing is stored,
    and neither the prompt nor the model output is logged.
    """

    request_id = getattr(request.state, "request_id", None) or request.headers.get("X-Request-ID")

    try:
        payload = await request.json()
        analysis_request = parse_analysis_request(payload)

        if openai_client is None:
            raise LLMNotConfiguredError()

        svc = AnalysisService(llm_client=openai_client)
        result = await svc.generate_analysis(
            analysis_request=analysis_request, request_id=request_id
        )
    except AnalysisError:
        raise
    except Exception:  # noqa: BLE001 - details stay in the logs, never in the response
        logger.exception("Error generating analysis", extra={"request_id": request_id})
        raise AnalysisGenerationError() from None

    logger.info(
        "Analysis generated",
        extra={
            "request_id": request_id,
            "source_count": len(analysis_request.sources),
            "has_deadline": bool(analysis_request.deadline),
        },
    )
    return result
