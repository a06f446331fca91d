"""
FastAPI application for guild siege log parsing and storage.
"""

import time
import logging
from typing import Optional
from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from siegelog import __version__
from siegelog.config.settings import ApplicationSettings, get_settings
from siegelog.database.schema import DatabaseManager, create_tables
from .models import HealthResponse
from .routers import characters, logs

logger = logging.getLogger(__name__)


def _error_response(request: Request, status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "error": {
                "code": status_code,
                "message": message,
                "timestamp": time.time(),
                "path": str(request.url.path),
                "method": request.method,
            }
        },
    )


def create_app(db: DatabaseManager, settings: Optional[ApplicationSettings] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        db: Database manager instance (tables are created if missing)
        settings: Application settings, defaults to the environment settings

    Returns:
        Configured FastAPI application
    """
    settings = settings or get_settings()
    create_tables(db)

    app = FastAPI(
        title="Guild Siege Log API",
        description="""
        Parse guild siege combat logs into player and guild rankings.

        * **Upload**: parse a log file and get the ranked result back
        * **Logs**: store parsed logs per server and siege date
        * **Characters**: register character classes shown on player results
        """,
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )
    app.state.db = db
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=1000)

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException):
        """HTTP errors in the shared error envelope."""
        return _error_response(request, exc.status_code, str(exc.detail))

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        """Handle unexpected exceptions."""
        logger.exception(f"Unhandled error on {request.method} {request.url.path}")
        return _error_response(request, 500, "Internal server error")

    @app.get("/api/health", response_model=HealthResponse, tags=["Health"])
    async def health_check():
        """Health check endpoint."""
        return HealthResponse(
            status="healthy",
            version=__version__,
            database="connected" if db.health_check() else "unavailable",
            timestamp=time.time(),
        )

    app.include_router(logs.router, prefix="/api", tags=["Logs"])
    app.include_router(characters.router, prefix="/api", tags=["Characters"])

    return app


def create_app_from_settings(settings: Optional[ApplicationSettings] = None) -> FastAPI:
    """
    Create the application with logging and the database taken from settings.
    """
    settings = settings or get_settings()
    settings.setup_logging()
    settings.validate()
    settings.log_configuration()

    return create_app(DatabaseManager(settings.database.sqlite_path), settings)
