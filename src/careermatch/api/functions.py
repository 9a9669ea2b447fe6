from __future__ import annotations

import json
import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse, Response
from pydantic import ValidationError
from starlette.concurrency import run_in_threadpool

from careermatch.api.deps import extract_bearer_token, get_generator
from careermatch.api.schemas import ErrorResponse, SuggestJobsRequest, SuggestJobsResponse
from careermatch.config import Settings, get_settings
from careermatch.core.generator import SuggestionGenerator
from careermatch.errors import GenerationError

logger = logging.getLogger(__name__)

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "authorization, x-client-info, apikey, content-type",
    "Access-Control-Allow-Methods": "POST, OPTIONS",
}

router = APIRouter(prefix="/functions/v1", tags=["functions"])


@router.options("/suggest-jobs")
def suggest_jobs_preflight() -> Response:
    return Response(status_code=200, headers=CORS_HEADERS)


@router.post("/suggest-jobs")
async def suggest_jobs(
    request: Request,
    generator: SuggestionGenerator = Depends(get_generator),
    settings: Settings = Depends(get_settings),
) -> JSONResponse:
    try:
        payload = SuggestJobsRequest.model_validate(json.loads(await request.body() or b"{}"))
    except (ValueError, ValidationError) as exc:
        logger.info("Rejected suggest-jobs body: %s", exc)
        return _error_response("Invalid request body", 500 if settings.legacy_error_status else 400)

    token = extract_bearer_token(request.headers.get("Authorization"))
    try:
        result = await run_in_threadpool(generator.generate, payload.profile, token)
    except GenerationError as exc:
        logger.error("Error in suggest-jobs: %s: %s", type(exc).__name__, exc)
        status_code = 500 if settings.legacy_error_status else exc.status_code
        return _error_response(str(exc), status_code)

    body = SuggestJobsResponse(suggestions=result.count)
    return JSONResponse(body.model_dump(), headers=CORS_HEADERS)


def _error_response(message: str, status_code: int) -> JSONResponse:
    return JSONResponse(
        ErrorResponse(error=message).model_dump(),
        status_code=status_code,
        headers=CORS_HEADERS,
    )
