"""FastAPI application entry point for the Argos file manager API."""

from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from argos_file_manager.api.errors import register_exception_handlers
from argos_file_manager.api.routes import files, health
from argos_file_manager.config import get_settings

CORS_HEADERS = [
    "Origin",
    "Access-Control-Allow-Origin",
    "Content-Type",
    "Accept",
    "Authorization",
    "X-Requested-With",
    "Access-Control-Request-Method",
    "Access-Control-Request-Headers",
    "Access-Control-Allow-Credentials",
]
CORS_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


def create_app() -> FastAPI:
    """Build the application with CORS, error handlers, and routes."""
    settings = get_settings()

    application = FastAPI(
        title="Argos File Manager API",
        description="Upload project directories and zip archives to object storage",
        version="0.1.0",
    )

    application.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_origins),
        allow_credentials=True,
        allow_methods=CORS_METHODS,
        allow_headers=CORS_HEADERS,
        expose_headers=CORS_HEADERS,
    )

    register_exception_handlers(application)

    application.include_router(health.router)
    application.include_router(files.router)
    return application


app = create_app()


def main() -> None:
    """Start the development server."""
    import uvicorn

    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    uvicorn.run(
        "argos_file_manager.api.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
    )


if __name__ == "__main__":
    main()
