# src/forum_core/main.py
"""Main entry point for the forum core HTTP API."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from forum_core.api.v1 import (
    categories_router,
    likes_router,
    posts_router,
    replies_router,
    stats_router,
)
from forum_core.core.errors import (
    ConflictError,
    ForumError,
    InvalidTransitionError,
    LockedResourceError,
    NotFoundError,
    PermissionDeniedError,
)
from forum_core.core.settings import settings

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)

ERROR_STATUS_CODES: dict[type[ForumError], int] = {
    NotFoundError: status.HTTP_404_NOT_FOUND,
    PermissionDeniedError: status.HTTP_403_FORBIDDEN,
    LockedResourceError: status.HTTP_423_LOCKED,
    InvalidTransitionError: status.HTTP_409_CONFLICT,
    ConflictError: status.HTTP_409_CONFLICT,
}

# Initialize FastAPI app
app = FastAPI(
    title=settings.app_name,
    description="Forum categories, posts, threaded replies and likes",
    version=settings.app_version,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=settings.cors_allow_methods,
    allow_headers=settings.cors_allow_headers,
)

# Add GZip middleware for compression
app.add_middleware(GZipMiddleware)

# Include API routers
app.include_router(categories_router, prefix="/api/v1")
app.include_router(posts_router, prefix="/api/v1")
app.include_router(replies_router, prefix="/api/v1")
app.include_router(likes_router, prefix="/api/v1")
app.include_router(stats_router, prefix="/api/v1")


@app.exception_handler(ForumError)
async def forum_error_handler(request: Request, exc: ForumError) -> JSONResponse:
    """Translate domain errors into JSON responses with a stable ``code``."""
    status_code = ERROR_STATUS_CODES.get(type(exc), status.HTTP_400_BAD_REQUEST)
    logger.info("%s %s -> %d %s", request.method, request.url.path, status_code, exc.code)
    return JSONResponse(
        status_code=status_code,
        content={"detail": exc.message, "code": exc.code},
    )


@app.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint to verify the service is running."""
    return {"status": "ok"}


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint with basic information about the API."""
    return {
        "name": settings.app_name,
        "version": settings.app_version,
        "docs": "/docs",
        "redoc": "/redoc",
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("forum_core.main:app", host="0.0.0.0", port=8000, reload=settings.debug)
