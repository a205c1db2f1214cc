# src/care_kit/main.py
"""Main entry point for the Care Kit application."""

from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware

from care_kit.api.v1 import (
    admin_router,
    auth_router,
    stress_router,
    study_router,
    system_router,
)
from care_kit.core.settings import settings

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)

# Initialize FastAPI app
app = FastAPI(
    title="Care Kit API",
    description="Daily affirmation and stress-rating study service",
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
app.include_router(auth_router, prefix="/api/v1")
app.include_router(study_router, prefix="/api/v1")
app.include_router(stress_router, prefix="/api/v1")
app.include_router(admin_router, prefix="/api/v1")
app.include_router(system_router, prefix="/api/v1")


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
        "description": "Daily affirmation and stress-rating study service",
        "docs": "/docs",
        "redoc": "/redoc",
    }


def run() -> None:
    """Serve the API with uvicorn."""
    import uvicorn

    logger.info("Starting %s %s", settings.app_name, settings.app_version)
    uvicorn.run("care_kit.main:app", host="0.0.0.0", port=8000, reload=settings.debug)


if __name__ == "__main__":
    run()
