"""Article extraction endpoint.

Routes
------
GET /api/fetch-url?url=https://...   → {"title": ..., "textContent": ...}

Failures never leak detail to the caller: every pipeline error becomes the
same generic 500 body, and the cause is logged server-side.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from fastapi import APIRouter, Query, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from insights.scraper import is_valid_http_url

logger = logging.getLogger(__name__)

router = APIRouter()


# ---------------------------------------------------------------------------
# Schemas
# ---------------------------------------------------------------------------

class FetchUrlResponse(BaseModel):
    title: str
    textContent: str


class ErrorResponse(BaseModel):
    error: str


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------

@router.get(
    "/fetch-url",
    response_model=FetchUrlResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
def fetch_url_endpoint(
    request: Request,
    url: Optional[str] = Query(None, description="Absolute http(s) URL of the page."),
) -> Any:
    """Fetch *url*, isolate its article, and return it as plain text."""
    if not url:
        return _error(400, "URL required")
    if not is_valid_http_url(url):
        return _error(400, "Invalid URL")

    pipeline = request.app.state.pipeline
    try:
        result = pipeline.run(url)
    except Exception:
        logger.exception("Failed to extract blog content from %s", url)
        return _error(500, "Failed to extract blog")

    return {"title": result.title, "textContent": result.text}
