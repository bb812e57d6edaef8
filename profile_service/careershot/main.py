"""
FastAPI app for the profile lookup service.

Endpoints:
- GET /health
- GET /api/user?name=<name>
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from fastapi import APIRouter, Depends, FastAPI, HTTPException, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.httpsredirect import HTTPSRedirectMiddleware

from .auth import BearerAuth
from .config import Settings, get_settings
from .logging_config import configure_logging
from .resolution.resolve import ResolutionError, Resolver
from .schemas import ErrorResponse, HealthResponse, UserProfileResponse
from .stores import build_stores

logger = logging.getLogger(__name__)

router = APIRouter()


def require_caller(request: Request) -> dict[str, Any]:
    """Run the app's bearer-token gate for the current request."""
    gate: BearerAuth = request.app.state.auth
    return gate(request)


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    """Simple health-check endpoint."""
    return HealthResponse(status="ok")


@router.get(
    "/api/user",
    name="GetUserData",
    response_model=UserProfileResponse,
    responses={
        400: {"model": ErrorResponse},
        401: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)
def get_user(
    request: Request,
    name: Optional[str] = Query(default=None, description="Display name to look up"),
    _claims: dict[str, Any] = Depends(require_caller),
) -> UserProfileResponse:
    """
    Look up a profile by display name.

    Declared as a plain function so the blocking store calls run in the
    worker threadpool instead of on the event loop.
    """
    resolver: Resolver = request.app.state.resolver
    result = resolver.resolve(name)

    if isinstance(result, ResolutionError):
        raise HTTPException(status_code=result.status_code, detail=result.message)

    record = result.record
    return UserProfileResponse(
        name=record.name,
        description=record.description,
        linked_in=record.linked_in,
        git_hub=record.git_hub,
        skills=record.skills,
        photo_url=result.locators.photo_url,
        resume_url=result.locators.resume_url,
    )


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build the app, its middleware, and its process-wide store clients."""
    settings = settings or get_settings()
    configure_logging(source="api")

    app = FastAPI(
        title="Careershot Profile Service",
        version="0.1.0",
        description="Resolves a person's name to their profile, photo and resume.",
        docs_url="/docs" if settings.enable_docs else None,
        redoc_url=None,
        openapi_url="/openapi.json" if settings.enable_docs else None,
    )

    if settings.use_https_redirection:
        app.add_middleware(HTTPSRedirectMiddleware)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_methods=["GET"],
        allow_headers=["*"],
    )

    record_store, object_store = build_stores(settings)
    app.state.settings = settings
    app.state.auth = BearerAuth(settings)
    app.state.resolver = Resolver(
        record_store,
        object_store,
        container=settings.container_name,
        max_partition_scan=settings.max_partition_scan,
    )

    app.include_router(router)
    logger.info("Profile service ready (store backend: %s)", settings.store_backend)
    return app


def run() -> None:
    """
    Convenience entrypoint if you want to run via:

        python -m careershot.main

    or via the `careershot` console_script defined in pyproject.toml.
    """
    import uvicorn

    uvicorn.run(
        "careershot.main:create_app",
        factory=True,
        host="0.0.0.0",
        port=8080,
        reload=False,
        log_config=None,
    )


if __name__ == "__main__":
    run()
