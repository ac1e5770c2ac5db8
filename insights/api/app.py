"""FastAPI application factory.

State
-----
The extraction pipeline is built once per app and shared by all requests via
``request.app.state.pipeline``.  It holds no per-request state, so tests can
replace it with one wired to stub fetchers.

Routers
-------
    /api/fetch-url   — extract readable article text from a web page
"""

from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from insights.config import settings
from insights.logging_config import configure_logging
from insights.scraper import ExtractionPipeline

from insights.api.routers import fetch as fetch_router


def create_app() -> FastAPI:
    """Return a fully-configured FastAPI application instance."""
    configure_logging(settings)

    app = FastAPI(
        title="Blog Insights API",
        description=(
            "Turns a blog post URL into clean, bounded plain text ready for "
            "summarisation and speech playback."
        ),
        version="0.1.0",
    )
    app.state.pipeline = ExtractionPipeline()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["GET"],
        allow_headers=["*"],
    )

    app.include_router(fetch_router.router, prefix="/api", tags=["extraction"])

    return app


# Module-level instance used by uvicorn:
#   uvicorn insights.api.app:app --reload
app = create_app()
