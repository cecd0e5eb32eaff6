"""
StudyHub API Application Entry Point

FastAPI application setup with all routers, middleware, and lifecycle management.

Application Architecture:
=========================
┌─────────────────────────────────────────────────────────────────────────────┐
│                           STUDYHUB API                                      │
├─────────────────────────────────────────────────────────────────────────────┤
│                                                                             │
│   ┌─────────────────────────────────────────────────────────────┐          │
│   │                    Middleware Stack                          │          │
│   │  ┌─────────────────────────────────────────────────────┐    │          │
│   │  │ CORS Middleware                                      │    │          │
│   │  │ Request Context (request id, access log)             │    │          │
│   │  │ Error Handler → envelope                             │    │          │
│   │  └─────────────────────────────────────────────────────┘    │          │
│   └─────────────────────────────────────────────────────────────┘          │
│                              │                                              │
│                              ▼                                              │
│   ┌─────────────────────────────────────────────────────────────┐          │
│   │                       Routers                                │          │
│   │  ┌──────┐ ┌───────┐ ┌───────────┐ ┌──────────┐ ┌─────────┐  │          │
│   │  │ Auth │ │ Notes │ │ Questions │ │ Comments │ │ Reports │  │          │
│   │  └──────┘ └───────┘ └───────────┘ └──────────┘ └─────────┘  │          │
│   │  ┌───────────┐ ┌────────┐ ┌───────────────┐ ┌─────────┐     │          │
│   │  │ Bookmarks │ │ Groups │ │ Notifications │ │ Uploads │ ... │          │
│   │  └───────────┘ └────────┘ └───────────────┘ └─────────┘     │          │
│   └─────────────────────────────────────────────────────────────┘          │
│                              │                                              │
│                              ▼                                              │
│   ┌─────────────────────────────────────────────────────────────┐          │
│   │                Dependencies (Injected)                       │          │
│   │  ┌──────────┐ ┌──────────┐ ┌──────────┐                    │          │
│   │  │ Database │ │   Auth   │ │ Services │                    │          │
│   │  └──────────┘ └──────────┘ └──────────┘                    │          │
│   └─────────────────────────────────────────────────────────────┘          │
│                                                                             │
│   /uploads/<category>/<file>  → StaticFiles (UPLOAD_DIR)                    │
│                                                                             │
└─────────────────────────────────────────────────────────────────────────────┘

Lifecycle:
==========
1. Application starts → lifespan startup
2. Database connection verified
3. Application serves requests
4. Application stops → lifespan shutdown
5. Database connection closed

Usage:
======
    # Run with uvicorn
    uvicorn studyhub.api.main:app --host 0.0.0.0 --port 8000 --reload

    # Or programmatically
    from studyhub.api.main import create_application
    app = create_application()
"""

from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from studyhub.config.settings import settings
from studyhub.shared.db import init_db, close_db
from studyhub.shared.core.logging import logger
from studyhub.shared.services.upload_service import UPLOAD_URL_PREFIX
from studyhub.api.middleware import RequestContextMiddleware, setup_exception_handlers
from studyhub.api.routes import register_routes


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan context manager.

    Startup:
    - Verify the database is reachable

    Shutdown:
    - Dispose of the connection pool
    """
    # ═══════════════════════════════════════════════════════════════════════════
    # STARTUP
    # ═══════════════════════════════════════════════════════════════════════════
    logger.info(
        "Starting StudyHub API",
        app_name=settings.APP_NAME,
        version=settings.APP_VERSION,
        environment=settings.APP_ENV,
    )

    await init_db()

    logger.info("StudyHub API started successfully")

    yield

    # ═══════════════════════════════════════════════════════════════════════════
    # SHUTDOWN
    # ═══════════════════════════════════════════════════════════════════════════
    logger.info("Shutting down StudyHub API")

    await close_db()

    logger.info("StudyHub API shutdown complete")


def create_application() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application instance

    This factory function:
    1. Creates the FastAPI app with settings
    2. Adds middleware (CORS, request context)
    3. Sets up exception handlers
    4. Registers all routes
    5. Mounts the upload directory for static serving
    """
    app = FastAPI(
        title=settings.APP_NAME,
        description="Study platform backend: notes, past questions, groups and moderation",
        version=settings.APP_VERSION,
        # Only show docs in development
        docs_url="/docs" if settings.DEBUG else None,
        redoc_url="/redoc" if settings.DEBUG else None,
        # Use lifespan for startup/shutdown
        lifespan=lifespan,
    )

    # ═══════════════════════════════════════════════════════════════════════════
    # MIDDLEWARE
    # ═══════════════════════════════════════════════════════════════════════════

    app.add_middleware(RequestContextMiddleware)

    # CORS is added last so it wraps everything, error responses included
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ═══════════════════════════════════════════════════════════════════════════
    # EXCEPTION HANDLERS
    # ═══════════════════════════════════════════════════════════════════════════

    setup_exception_handlers(app)

    # ═══════════════════════════════════════════════════════════════════════════
    # ROUTES
    # ═══════════════════════════════════════════════════════════════════════════

    register_routes(app)

    # ═══════════════════════════════════════════════════════════════════════════
    # STATIC UPLOADS
    # ═══════════════════════════════════════════════════════════════════════════

    # Mounted after the routers so /uploads API routes match first
    upload_dir = Path(settings.UPLOAD_DIR)
    upload_dir.mkdir(parents=True, exist_ok=True)
    app.mount(UPLOAD_URL_PREFIX, StaticFiles(directory=upload_dir), name="uploads")

    return app


# Create the application instance
app = create_application()
