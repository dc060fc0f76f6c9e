"""
FastAPI application for contract analysis.

Route handlers are plain functions: analysis and knowledge lookups are
synchronous, so FastAPI runs them in its threadpool.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

import structlog
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from clausecheck import __version__
from clausecheck.config import Settings, get_settings

logger = structlog.get_logger(__name__)

API_PREFIX = "/api/v1"


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    from clausecheck.storage.pattern_store import get_pattern_store

    settings = get_settings()
    snapshot = get_pattern_store().snapshot()
    logger.info(
        "application_started",
        environment=settings.environment,
        explanations_enabled=settings.explanations_enabled,
        knowledge_source=snapshot.source,
        knowledge_version=snapshot.version,
    )

    yield

    logger.info("application_stopped")


def add_error_handler(app: FastAPI, settings: Settings) -> None:
    """Turn unhandled errors into the JSON error envelope."""

    @app.exception_handler(Exception)
    async def unhandled_error(request: Request, exc: Exception) -> JSONResponse:
        logger.error(
            "unhandled_exception",
            path=request.url.path,
            method=request.method,
            error=str(exc),
        )
        return JSONResponse(
            status_code=500,
            content={
                "success": False,
                "error": "Internal server error",
                "detail": str(exc) if settings.debug else None,
            },
        )


def create_app() -> FastAPI:
    """Build the clausecheck API."""
    from clausecheck.api.routes import analysis, knowledge, system

    settings = get_settings()

    app = FastAPI(
        title="clausecheck API",
        description="Deterministic risk analysis for freelance contracts",
        version=__version__,
        docs_url="/docs" if settings.debug else None,
        redoc_url=None,
        lifespan=lifespan,
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if settings.debug else settings.cors_origins,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )
    add_error_handler(app, settings)

    app.include_router(system.router, tags=["system"])
    app.include_router(analysis.router, prefix=f"{API_PREFIX}/analysis", tags=["analysis"])
    app.include_router(knowledge.router, prefix=f"{API_PREFIX}/knowledge", tags=["knowledge"])
    return app


app = create_app()
