"""
FastAPI application with assembled routers.

Initializes FastAPI app with all API routers, serves uploaded images and
configures uvicorn server.

Dependencies: fastapi, stablebook.api.routers, uvicorn
System role: API entry point with router assembly and server launch
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from stablebook.api.deps.dependencies import get_service_cache
from stablebook.boundary.db import init_db
from stablebook.configs import get_settings
from stablebook.core.exceptions import UnauthorizedError
from stablebook.observability import configure_logging
from stablebook.observability.middleware import CorrelationMiddleware, RequestLoggingMiddleware

from .routers import (
    auth_router,
    chat_router,
    health_router,
    horses_router,
    insights_router,
    migration_router,
    pregnancies_router,
    uploads_router,
    vaccines_router,
    visits_router,
)

API_PREFIX = "/api"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan context manager.

    Handles startup and shutdown events.
    """
    settings = get_settings()
    configure_logging(settings.log_level)
    logger = logging.getLogger("uvicorn")

    # Startup
    await init_db()
    cache = get_service_cache()
    _ = cache.image_storage
    logger.info(
        "Stablebook ready",
        extra={
            "storage_backend": settings.storage.backend,
            "firestore_enabled": settings.firestore.enabled,
            "admins": len(settings.auth.admin_email_set),
        },
    )

    yield

    # Shutdown
    cache.clear()
    logger.info("Service cache cleared")


def create_app() -> FastAPI:
    """
    Create and configure FastAPI application with routers.

    Returns:
        FastAPI: Configured application instance with all routers registered
    """
    settings = get_settings()
    app = FastAPI(
        title="Stablebook API",
        description="Multi-tenant horse stable records with legacy Firestore migration",
        version="0.1.0",
        lifespan=lifespan,
    )

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origin_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Add observability middleware
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(CorrelationMiddleware)

    @app.exception_handler(UnauthorizedError)
    async def unauthorized_handler(request: Request, exc: UnauthorizedError) -> JSONResponse:
        return JSONResponse(status_code=status.HTTP_401_UNAUTHORIZED, content={"detail": exc.message})

    # Register all routers under /api
    app.include_router(health_router, prefix=API_PREFIX)
    app.include_router(auth_router, prefix=API_PREFIX)
    app.include_router(horses_router, prefix=API_PREFIX)
    app.include_router(visits_router, prefix=API_PREFIX)
    app.include_router(vaccines_router, prefix=API_PREFIX)
    app.include_router(pregnancies_router, prefix=API_PREFIX)
    app.include_router(migration_router, prefix=API_PREFIX)
    app.include_router(chat_router, prefix=API_PREFIX)
    app.include_router(insights_router, prefix=API_PREFIX)

    # Uploaded images: static directory locally, presigned redirects for s3
    if settings.storage.backend == "s3":
        app.include_router(uploads_router, prefix=settings.storage.url_prefix)
    else:
        uploads = get_service_cache().image_storage
        app.mount(settings.storage.url_prefix, StaticFiles(directory=uploads.root), name="uploads")

    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run(
        "stablebook.api.main:app",
        host="0.0.0.0",
        port=8000,
    )
