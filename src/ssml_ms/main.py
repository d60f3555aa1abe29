"""
FastAPI Application Entry Point.

Usage:
    # Run with uvicorn
    uvicorn ssml_ms.main:app --host 0.0.0.0 --port 8000

    # Or use the module directly
    python -m uvicorn ssml_ms.main:app --reload
"""

from __future__ import annotations

from fastapi import FastAPI

from ssml_ms import __version__
from ssml_ms.api.routes import router, ssml_error_handler
from ssml_ms.core.logging import configure_logging
from ssml_ms.services.validation_service import SSMLError


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Logging is configured first (reads SSML_MS_LOG_LEVEL). The validation
    service itself is built lazily on the first request; an SSMLError raised
    while building it (SCHEMA_ERROR) is returned in the standard JSON error
    format.
    """
    configure_logging()

    app = FastAPI(title="ssml-ms", version=__version__)
    app.include_router(router)    # /v1/ssml/*, /health, /metrics
    app.add_exception_handler(SSMLError, ssml_error_handler)

    return app


# Global application instance for ASGI servers (uvicorn, gunicorn, etc.)
app = create_app()
