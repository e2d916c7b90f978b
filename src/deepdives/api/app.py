"""FastAPI application setup."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from deepdives.api.dependencies import (
    close_settings,
    close_tracker,
    init_settings,
    init_tracker,
)
from deepdives.api.models import APIResponse
from deepdives.api.routes import deep_dives
from deepdives.config import DeepDiveSettings
from deepdives.github import GitHubClient, GitHubError, RepositoryNotFoundError
from deepdives.logging import configure_logging

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator
    from pathlib import Path

logger = logging.getLogger("deepdives.api")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager."""
    # Startup
    settings = app.state.settings or DeepDiveSettings.from_env()
    configure_logging(log_dir=app.state.log_dir, secrets=(settings.token,))
    if not settings.token:
        logger.warning("No GitHub token configured; using unauthenticated requests")
    init_settings(settings)
    init_tracker(
        GitHubClient(token=settings.token, base_url=settings.api_url, timeout=settings.timeout)
    )

    yield
    # Shutdown
    close_tracker()
    close_settings()


def register_exception_handlers(app: FastAPI) -> None:
    """Map GitHub failures to API responses."""

    @app.exception_handler(RepositoryNotFoundError)
    async def repository_not_found_handler(
        _request: Request, _exc: RepositoryNotFoundError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content=APIResponse[None](data=None, error="Repository not found").model_dump(),
        )

    @app.exception_handler(GitHubError)
    async def github_error_handler(_request: Request, exc: GitHubError) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_502_BAD_GATEWAY,
            content=APIResponse[None](
                data=None, error=f"GitHub request failed: {exc}"
            ).model_dump(),
        )


def create_app(
    settings: DeepDiveSettings | None = None, log_dir: str | Path | None = None
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Settings to use. Read from the environment at startup when None.
        log_dir: Log directory. Defaults to DEEPDIVES_LOG_DIR or ./logs.
    """
    app = FastAPI(
        title="Deep Dives API",
        description="Status digest for open deep-dive issues",
        version="0.1.0",
        lifespan=lifespan,
    )

    # Store config for lifespan manager
    app.state.settings = settings
    app.state.log_dir = log_dir

    register_exception_handlers(app)
    app.include_router(deep_dives.router, prefix="/api/v1")

    return app


# Default app instance
app = create_app()
