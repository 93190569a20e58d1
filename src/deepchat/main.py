"""
deepchat API - FastAPI application.

Exposes the response normalizer over HTTP for callers that cannot import
the package directly.
"""

import logging
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from deepchat import __version__
from deepchat.config import get_settings
from deepchat.core.completion import CompletionError, build_output
from deepchat.core.normalizer import ResponseNormalizer
from deepchat.logging import configure_logging

logger = logging.getLogger(__name__)

# Global instances
normalizer: ResponseNormalizer | None = None


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan - setup and teardown."""
    global normalizer

    settings = get_settings()
    configure_logging("DEBUG" if settings.debug else settings.log_level)

    normalizer = ResponseNormalizer(structural_hint=settings.structural_schema_hint)
    logger.info(f"{settings.app_name} {__version__} ready")

    yield

    normalizer = None


app = FastAPI(
    title="deepchat API",
    description="JSON Mode response normalization",
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_settings().cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =============================================================================
# Request/Response Models
# =============================================================================


class NormalizeRequest(BaseModel):
    """Request body for /v1/normalize."""
    content: str | None = None
    json_schema: str | None = None


class NormalizeResponse(BaseModel):
    """Response for /v1/normalize."""
    response: str | None
    expect_array: bool
    repairs_applied: list[str] | None = None


class CompletionNormalizeRequest(BaseModel):
    """Request body for /v1/completions/normalize."""
    body: dict[str, Any] | str
    json_schema: str | None = None
    status_code: int = 200


class CompletionNormalizeResponse(BaseModel):
    """Response for /v1/completions/normalize."""
    response: str | None
    raw: str


def _require_normalizer() -> ResponseNormalizer:
    if normalizer is None:
        raise HTTPException(status_code=503, detail="Service not initialized")
    return normalizer


# =============================================================================
# Health Endpoints
# =============================================================================


@app.get("/health")
async def health() -> dict[str, str]:
    """Basic health check."""
    return {"status": "healthy", "version": __version__}


# =============================================================================
# Normalize Endpoints (v1)
# =============================================================================


@app.post("/v1/normalize", response_model=NormalizeResponse)
async def normalize_v1(request: NormalizeRequest) -> NormalizeResponse:
    """Normalize raw model output against an optional JSON Schema hint."""
    result = _require_normalizer().repair(request.content, request.json_schema)

    return NormalizeResponse(
        response=result.content,
        expect_array=result.expect_array,
        repairs_applied=result.repairs_applied,
    )


@app.post("/v1/completions/normalize", response_model=CompletionNormalizeResponse)
async def normalize_completion_v1(
    request: CompletionNormalizeRequest,
) -> CompletionNormalizeResponse:
    """
    Normalize a full chat-completion response envelope.

    The assistant message is normalized into ``response``; the envelope is
    returned untouched as ``raw``. Upstream errors and unreadable envelopes
    map to 502.
    """
    try:
        output = build_output(
            request.body,
            schema_hint=request.json_schema,
            status_code=request.status_code,
            normalizer=_require_normalizer(),
        )
    except CompletionError as e:
        logger.warning(f"Completion envelope rejected: {e}")
        raise HTTPException(status_code=502, detail=str(e))

    return CompletionNormalizeResponse(response=output.response, raw=output.raw)
